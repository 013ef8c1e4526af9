"""
Доменная модель бронирования.

Содержит сущность Reservation, ее статусы и доменные события
жизненного цикла.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from pydantic import BaseModel, Field, PrivateAttr

from ..shared_kernel import DomainEvent, EntityId, TimeRange, generate_id, now
from .exceptions import InvalidStateTransitionException, ReservationExpiredException
from .value_objects import Customer


class ReservationStatus(str, Enum):
    """Статусы бронирования."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class ReservationEventType(str, Enum):
    """Имена событий жизненного цикла бронирования."""

    CREATED = "reservation_created"
    CONFIRMED = "reservation_confirmed"
    CANCELLED = "reservation_cancelled"


class Reservation(BaseModel):
    """Бронирование одного или нескольких элементов площадки."""

    id: EntityId = Field(default_factory=generate_id)
    item_ids: List[str] = Field(..., min_length=1)
    customer: Customer
    period: TimeRange
    status: ReservationStatus = ReservationStatus.PENDING
    created_at: datetime = Field(default_factory=now)
    updated_at: datetime = Field(default_factory=now)
    expires_at: Optional[datetime] = None  # Имеет смысл только для pending
    metadata: Dict[str, Any] = Field(default_factory=dict)
    _domain_events: List[DomainEvent] = PrivateAttr(default_factory=list)

    @property
    def start_time(self) -> datetime:
        return self.period.start

    @property
    def end_time(self) -> datetime:
        return self.period.end

    def pull_domain_events(self) -> List[DomainEvent]:
        """Извлекает события и очищает список."""
        events = list(self._domain_events)
        self._domain_events.clear()
        return events

    def is_active(self) -> bool:
        """Активным считается любое неотмененное бронирование."""
        return self.status != ReservationStatus.CANCELLED

    def is_expired(self, at: Optional[datetime] = None) -> bool:
        """Проверяет, истек ли срок действия бронирования."""
        if self.expires_at is None:
            return False
        return (at or now()) > self.expires_at

    def includes_item(self, item_id: str) -> bool:
        return item_id in self.item_ids

    def shares_items(self, item_ids: Iterable[str]) -> bool:
        return any(item_id in self.item_ids for item_id in item_ids)

    def overlaps(self, period: TimeRange) -> bool:
        return self.period.overlaps(period)

    def confirm(self, at: Optional[datetime] = None) -> None:
        """Подтверждает бронирование."""
        at = at or now()
        if self.status != ReservationStatus.PENDING:
            raise InvalidStateTransitionException(
                f"Невозможно подтвердить бронирование в статусе {self.status.value}"
            )
        if self.is_expired(at):
            raise ReservationExpiredException(
                "Невозможно подтвердить бронирование с истекшим сроком действия"
            )

        self.status = ReservationStatus.CONFIRMED
        self.updated_at = at
        self._domain_events.append(ReservationConfirmed(reservation=self))

    def cancel(self, at: Optional[datetime] = None, reason: Optional[str] = None) -> bool:
        """Отменяет бронирование.

        Повторная отмена ничего не меняет и возвращает False.
        """
        if self.status == ReservationStatus.CANCELLED:
            return False

        self.status = ReservationStatus.CANCELLED
        self.updated_at = at or now()
        self._domain_events.append(ReservationCancelled(reservation=self, reason=reason))
        return True

    @classmethod
    def create(
        cls,
        item_ids: List[str],
        customer: Customer,
        period: TimeRange,
        created_at: datetime,
        expires_at: Optional[datetime] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> "Reservation":
        """Создает новое бронирование в статусе pending."""
        reservation = cls(
            item_ids=list(item_ids),
            customer=customer,
            period=period,
            created_at=created_at,
            updated_at=created_at,
            expires_at=expires_at,
            metadata=metadata or {},
        )
        reservation._domain_events.append(ReservationCreated(reservation=reservation))
        return reservation

    def to_dict(self) -> Dict[str, Any]:
        data = self.model_dump(mode="json", exclude={"period"})
        data["start_time"] = self.period.start.isoformat()
        data["end_time"] = self.period.end.isoformat()
        return data


class ReservationEvent(DomainEvent):
    """Базовое событие жизненного цикла; несет живой объект бронирования."""

    reservation: Reservation

    @property
    def reservation_id(self) -> EntityId:
        return self.reservation.id


class ReservationCreated(ReservationEvent):
    """Событие создания бронирования."""

    event_type: str = ReservationEventType.CREATED.value


class ReservationConfirmed(ReservationEvent):
    """Событие подтверждения бронирования."""

    event_type: str = ReservationEventType.CONFIRMED.value


class ReservationCancelled(ReservationEvent):
    """Событие отмены бронирования."""

    event_type: str = ReservationEventType.CANCELLED.value
    reason: Optional[str] = None


EVENT_TYPES = {
    ReservationEventType.CREATED: ReservationCreated,
    ReservationEventType.CONFIRMED: ReservationConfirmed,
    ReservationEventType.CANCELLED: ReservationCancelled,
}
