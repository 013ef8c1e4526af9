"""
Тесты подписки на события жизненного цикла бронирований.
"""

from unittest.mock import MagicMock

import pytest

from venue_reservation.domain import (
    ItemNotAvailableException,
    ReservationCancelled,
    ReservationConfirmed,
    ReservationCreated,
    ReservationEventType,
    ReservationStatus,
)


def test_created_event_carries_reservation(
    reservation_system, customer, start_time, end_time
):
    handler = MagicMock()
    reservation_system.on("reservation_created", handler)

    reservation = reservation_system.create_reservation(["A"], customer, start_time, end_time)

    handler.assert_called_once()
    event = handler.call_args.args[0]
    assert isinstance(event, ReservationCreated)
    assert event.reservation_id == reservation.id
    assert event.reservation.status == ReservationStatus.PENDING


@pytest.mark.parametrize(
    "event_name",
    [
        "reservationConfirmed",
        "reservation_confirmed",
        ReservationEventType.CONFIRMED,
        ReservationConfirmed,
    ],
)
def test_event_name_forms(reservation_system, customer, start_time, end_time, event_name):
    handler = MagicMock()
    reservation_system.on(event_name, handler)

    reservation = reservation_system.create_reservation(["A"], customer, start_time, end_time)
    reservation_system.confirm_reservation(reservation.id)

    handler.assert_called_once()
    assert isinstance(handler.call_args.args[0], ReservationConfirmed)


def test_unknown_event_name(reservation_system):
    with pytest.raises(ValueError, match="Неизвестное событие"):
        reservation_system.on("reservationUpdated", MagicMock())


def test_handlers_called_in_registration_order(
    reservation_system, customer, start_time, end_time
):
    calls = []
    reservation_system.on("reservationCreated", lambda e: calls.append("first"))
    reservation_system.on("reservationCreated", lambda e: calls.append("second"))

    reservation_system.create_reservation(["A"], customer, start_time, end_time)

    assert calls == ["first", "second"]


def test_failing_handler_does_not_block_others(
    reservation_system, logger, venue_map, customer, start_time, end_time
):
    failing = MagicMock(side_effect=RuntimeError("boom"))
    healthy = MagicMock()
    reservation_system.on("reservationCreated", failing)
    reservation_system.on("reservationCreated", healthy)

    reservation = reservation_system.create_reservation(["A"], customer, start_time, end_time)

    failing.assert_called_once()
    healthy.assert_called_once()
    assert reservation in reservation_system.reservations
    logger.error.assert_called_once()
    assert logger.error.call_args.kwargs["error"] == "boom"


def test_off_removes_handler(reservation_system, customer, start_time, end_time):
    handler = MagicMock()
    reservation_system.on("reservationCreated", handler)
    reservation_system.off("reservationCreated", handler)

    reservation_system.create_reservation(["A"], customer, start_time, end_time)

    handler.assert_not_called()


def test_off_unknown_handler_is_noop(reservation_system):
    reservation_system.off("reservationCreated", MagicMock())


def test_failed_create_emits_nothing(reservation_system, customer, start_time, end_time):
    handler = MagicMock()
    reservation_system.on("reservationCreated", handler)

    with pytest.raises(ItemNotAvailableException):
        reservation_system.create_reservation(["X"], customer, start_time, end_time)

    handler.assert_not_called()


def test_cancel_twice_emits_single_event(
    reservation_system, customer, start_time, end_time
):
    handler = MagicMock()
    reservation_system.on("reservationCancelled", handler)
    reservation = reservation_system.create_reservation(["A"], customer, start_time, end_time)

    reservation_system.cancel_reservation(reservation.id, reason="plans changed")
    reservation_system.cancel_reservation(reservation.id)

    handler.assert_called_once()
    event = handler.call_args.args[0]
    assert isinstance(event, ReservationCancelled)
    assert event.reason == "plans changed"


class RecordingObserver:
    """Наблюдатель, записывающий полученные события."""

    def __init__(self):
        self.received = []

    def on_reservation_created(self, event):
        self.received.append(("created", event.reservation_id))

    def on_reservation_confirmed(self, event):
        self.received.append(("confirmed", event.reservation_id))

    def on_reservation_cancelled(self, event):
        self.received.append(("cancelled", event.reservation_id))


class CreationOnlyObserver:
    def __init__(self):
        self.on_reservation_created = MagicMock()


def test_observer_receives_full_lifecycle(
    reservation_system, customer, start_time, end_time
):
    observer = RecordingObserver()
    reservation_system.add_observer(observer)

    reservation = reservation_system.create_reservation(["A"], customer, start_time, end_time)
    reservation_system.confirm_reservation(reservation.id)
    reservation_system.cancel_reservation(reservation.id)

    assert observer.received == [
        ("created", reservation.id),
        ("confirmed", reservation.id),
        ("cancelled", reservation.id),
    ]


def test_remove_observer(reservation_system, customer, start_time, end_time):
    observer = RecordingObserver()
    reservation_system.add_observer(observer)
    reservation_system.remove_observer(observer)

    reservation_system.create_reservation(["A"], customer, start_time, end_time)

    assert observer.received == []


def test_partial_observer(reservation_system, customer, start_time, end_time):
    observer = CreationOnlyObserver()
    reservation_system.add_observer(observer)

    reservation = reservation_system.create_reservation(["A"], customer, start_time, end_time)
    reservation_system.cancel_reservation(reservation.id)

    observer.on_reservation_created.assert_called_once()
    event = observer.on_reservation_created.call_args.args[0]
    assert isinstance(event, ReservationCreated)
