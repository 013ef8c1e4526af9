"""
Общие фикстуры тестов системы бронирования.
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest

from venue_reservation.application.services import ReservationSystem
from venue_reservation.config import ReservationSettings
from venue_reservation.domain import Customer, Item, ItemStatus, VenueMap


class FakeClock:
    """Управляемые часы для проверки сроков действия."""

    def __init__(self, current: datetime):
        self.current = current

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current += timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2030, 1, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def start_time() -> datetime:
    """Начало вечернего сеанса."""
    return datetime(2030, 1, 1, 19, 0, tzinfo=timezone.utc)


@pytest.fixture
def end_time(start_time: datetime) -> datetime:
    return start_time + timedelta(hours=2)


@pytest.fixture
def venue_map() -> VenueMap:
    """Небольшой зал: ряд из четырех мест, стол и два выведенных из работы места."""
    return VenueMap(
        items=[
            Item(id="A", label="A1", x=50, y=50),
            Item(id="B", label="A2", x=90, y=50),
            Item(id="C", label="A3", x=130, y=50),
            Item(id="D", label="A4", x=170, y=50),
            Item(id="T1", label="Стол 1", x=300, y=200, type="table", capacity=4),
            Item(id="X", label="A5", x=210, y=50, status=ItemStatus.DISABLED),
            Item(id="M", label="A6", x=250, y=50, status=ItemStatus.MAINTENANCE),
        ]
    )


@pytest.fixture
def settings() -> ReservationSettings:
    return ReservationSettings(
        reservation_expiry_minutes=15,
        max_items_per_reservation=10,
        allow_overlapping_reservations=False,
    )


@pytest.fixture
def logger() -> MagicMock:
    return MagicMock()


@pytest.fixture
def reservation_system(
    venue_map: VenueMap,
    settings: ReservationSettings,
    clock: FakeClock,
    logger: MagicMock,
) -> ReservationSystem:
    return ReservationSystem(
        venue_map=venue_map, settings=settings, logger=logger, clock=clock
    )


@pytest.fixture
def customer() -> Customer:
    return Customer(id="cust-1", name="Иван Иванов", email="ivan@example.com")
