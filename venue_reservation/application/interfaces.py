"""
Интерфейсы (порты) прикладного слоя.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Iterable, List, Optional, Protocol, Type, TypeVar

from ..domain import Reservation, ReservationEvent
from ..shared_kernel import DomainEvent, EntityId, TimeRange

T_Event = TypeVar("T_Event", bound=DomainEvent)


class ILogger(Protocol):
    """Интерфейс для логгера."""

    def info(self, message: str, **kwargs: Any) -> None: ...
    def error(self, message: str, **kwargs: Any) -> None: ...
    def warning(self, message: str, **kwargs: Any) -> None: ...
    def debug(self, message: str, **kwargs: Any) -> None: ...


class IEventBus(Protocol):
    """Интерфейс для шины событий."""

    def publish(self, event: DomainEvent) -> None: ...
    def subscribe(
        self, event_type: Type[T_Event], handler: Callable[[T_Event], None]
    ) -> None: ...
    def unsubscribe(
        self, event_type: Type[T_Event], handler: Callable[[T_Event], None]
    ) -> bool: ...


class IReservationObserver(Protocol):
    """Наблюдатель за жизненным циклом бронирований."""

    def on_reservation_created(self, event: ReservationEvent) -> None: ...
    def on_reservation_confirmed(self, event: ReservationEvent) -> None: ...
    def on_reservation_cancelled(self, event: ReservationEvent) -> None: ...


class IReservationRepository(Protocol):
    """Интерфейс журнала бронирований.

    Журнал только дополняется: бронирования не удаляются,
    меняется лишь их статус.
    """

    def add(self, reservation: Reservation) -> None: ...
    def get_by_id(self, reservation_id: EntityId) -> Optional[Reservation]: ...
    def list_all(self) -> List[Reservation]: ...
    def find_by_customer(self, customer_id: str) -> List[Reservation]: ...
    def find_by_item(self, item_id: str) -> List[Reservation]: ...
    def find_overlapping(
        self,
        item_ids: Iterable[str],
        period: TimeRange,
    ) -> List[Reservation]: ...
    def find_in_time_range(self, period: TimeRange) -> List[Reservation]: ...
    def find_expired_pending(self, at: datetime) -> List[Reservation]: ...
