from datetime import datetime
from typing import Dict, Iterable, List, Optional

from ..application import interfaces as ports
from ..domain import Reservation, ReservationStatus
from ..shared_kernel import EntityId, TimeRange


class InMemoryReservationRepository(ports.IReservationRepository):
    """Журнал бронирований в памяти.

    Хранит бронирования в порядке создания; удаление не поддерживается.
    """

    def __init__(self) -> None:
        self._reservations: List[Reservation] = []
        self._index: Dict[EntityId, Reservation] = {}

    def add(self, reservation: Reservation) -> None:
        if reservation.id in self._index:
            raise ValueError(f"Reservation with id {reservation.id} already exists")
        self._reservations.append(reservation)
        self._index[reservation.id] = reservation

    def get_by_id(self, reservation_id: EntityId) -> Optional[Reservation]:
        return self._index.get(reservation_id)

    def list_all(self) -> List[Reservation]:
        return list(self._reservations)

    def find_by_customer(self, customer_id: str) -> List[Reservation]:
        return [
            reservation
            for reservation in self._reservations
            if reservation.customer.id is not None
            and reservation.customer.id == customer_id
        ]

    def find_by_item(self, item_id: str) -> List[Reservation]:
        return [
            reservation
            for reservation in self._reservations
            if reservation.is_active() and reservation.includes_item(item_id)
        ]

    def find_overlapping(
        self, item_ids: Iterable[str], period: TimeRange
    ) -> List[Reservation]:
        item_ids = list(item_ids)
        return [
            reservation
            for reservation in self._reservations
            if reservation.is_active()
            and reservation.shares_items(item_ids)
            and reservation.overlaps(period)
        ]

    def find_in_time_range(self, period: TimeRange) -> List[Reservation]:
        return [
            reservation
            for reservation in self._reservations
            if reservation.is_active() and reservation.overlaps(period)
        ]

    def find_expired_pending(self, at: datetime) -> List[Reservation]:
        return [
            reservation
            for reservation in self._reservations
            if reservation.status == ReservationStatus.PENDING
            and reservation.is_expired(at)
        ]
