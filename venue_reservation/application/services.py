"""
Прикладной слой: система бронирования.

ReservationSystem координирует схему площадки, журнал бронирований
и шину событий. Только она меняет статусы элементов площадки.
"""

import threading
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Type, Union
from uuid import UUID

from pydantic import ValidationError

from ..config import ReservationSettings
from ..domain import (
    CapacityExceededException,
    Customer,
    InvalidCustomerException,
    InvalidTimeRangeException,
    Item,
    ItemNotAvailableException,
    ItemStatus,
    OverlapConflictException,
    Reservation,
    ReservationEvent,
    ReservationEventType,
    ReservationNotFoundException,
    VenueMap,
)
from ..domain.reservation import EVENT_TYPES
from ..infrastructure.event_bus import InMemoryEventBus
from ..infrastructure.logger import LoguruLogger
from ..infrastructure.repositories import InMemoryReservationRepository
from ..shared_kernel import BusinessRuleValidationException, EntityId, TimeRange, now
from . import interfaces as ports

EventName = Union[ReservationEventType, str, Type[ReservationEvent]]

# Имена событий в стиле JS-клиентов принимаются как синонимы
EVENT_NAME_ALIASES: Dict[str, ReservationEventType] = {
    "reservationCreated": ReservationEventType.CREATED,
    "reservationConfirmed": ReservationEventType.CONFIRMED,
    "reservationCancelled": ReservationEventType.CANCELLED,
}

OBSERVER_METHODS: Dict[ReservationEventType, str] = {
    ReservationEventType.CREATED: "on_reservation_created",
    ReservationEventType.CONFIRMED: "on_reservation_confirmed",
    ReservationEventType.CANCELLED: "on_reservation_cancelled",
}

# Элементы в этих статусах не бронируются ни на какое время
OUT_OF_SERVICE_STATUSES = (ItemStatus.DISABLED, ItemStatus.MAINTENANCE)


class ReservationSystem:
    """Система бронирования элементов одной площадки.

    Все изменяющие операции выполняются под одной реентерабельной
    блокировкой: проверка допустимости и последующее изменение состояния
    атомарны относительно других потоков.
    """

    def __init__(
        self,
        venue_map: Optional[VenueMap] = None,
        settings: Optional[ReservationSettings] = None,
        repository: Optional[ports.IReservationRepository] = None,
        event_bus: Optional[ports.IEventBus] = None,
        logger: Optional[ports.ILogger] = None,
        clock: Callable[[], datetime] = now,
    ):
        """Инициализирует систему.

        Args:
            venue_map: Схема площадки; принадлежит только этой системе
            settings: Настройки; по умолчанию читаются из окружения
            repository: Журнал бронирований
            event_bus: Шина событий жизненного цикла
            logger: Логгер
            clock: Источник текущего времени
        """
        self.venue_map = venue_map if venue_map is not None else VenueMap()
        self.settings = settings or ReservationSettings()
        self._logger = logger or LoguruLogger()
        self._repository = repository or InMemoryReservationRepository()
        self._event_bus = event_bus or InMemoryEventBus(logger=self._logger)
        self._clock = clock
        self._lock = threading.RLock()

    @property
    def reservations(self) -> List[Reservation]:
        """Все бронирования в порядке создания, включая отмененные."""
        return self._repository.list_all()

    # Изменяющие операции

    def create_reservation(
        self,
        item_ids: Iterable[str],
        customer: Union[Customer, Mapping[str, Any], None],
        start_time: Optional[datetime],
        end_time: Optional[datetime],
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Reservation:
        """Создает бронирование в статусе pending.

        Все проверки выполняются до любых изменений: при ошибке
        ни статусы элементов, ни журнал не меняются.

        Raises:
            ItemNotAvailableException: элемент не найден или не свободен
            CapacityExceededException: слишком много элементов
            InvalidCustomerException: неполные данные клиента
            InvalidTimeRangeException: некорректный интервал времени
            OverlapConflictException: пересечение с другим бронированием
        """
        item_ids = list(item_ids or [])
        with self._lock:
            try:
                self._check_items_available(item_ids)
                self._check_items_limit(item_ids)
                customer = self._validate_customer(customer)
                period = self._validate_time_range(start_time, end_time)
                if not self.settings.allow_overlapping_reservations:
                    conflicts = self._repository.find_overlapping(item_ids, period)
                    if conflicts:
                        raise OverlapConflictException(r.id for r in conflicts)
            except BusinessRuleValidationException as e:
                self._logger.warning(
                    f"Бронирование отклонено: {e}", item_ids=item_ids
                )
                raise

            created_at = self._clock()
            reservation = Reservation.create(
                item_ids=item_ids,
                customer=customer,
                period=period,
                created_at=created_at,
                expires_at=created_at
                + timedelta(minutes=self.settings.reservation_expiry_minutes),
                metadata=metadata,
            )

            self._set_items_status(reservation.item_ids, ItemStatus.RESERVED)
            self._repository.add(reservation)
            self._logger.info(
                "Бронирование создано",
                reservation_id=str(reservation.id),
                item_ids=reservation.item_ids,
                expires_at=reservation.expires_at.isoformat(),
            )
            self._publish_events(reservation)
            return reservation

    def confirm_reservation(self, reservation_id: Union[EntityId, str]) -> Reservation:
        """Подтверждает бронирование; элементы становятся занятыми.

        Raises:
            ReservationNotFoundException: бронирование не найдено
            InvalidStateTransitionException: статус не pending
            ReservationExpiredException: срок действия истек
        """
        with self._lock:
            reservation = self._get_or_raise(reservation_id)
            reservation.confirm(at=self._clock())

            self._set_items_status(reservation.item_ids, ItemStatus.OCCUPIED)
            self._logger.info(
                "Бронирование подтверждено", reservation_id=str(reservation.id)
            )
            self._publish_events(reservation)
            return reservation

    def cancel_reservation(
        self, reservation_id: Union[EntityId, str], reason: Optional[str] = None
    ) -> Reservation:
        """Отменяет бронирование и освобождает элементы.

        Повторная отмена возвращает бронирование без изменений
        и не генерирует событий.

        Raises:
            ReservationNotFoundException: бронирование не найдено
        """
        with self._lock:
            reservation = self._get_or_raise(reservation_id)
            if not reservation.cancel(at=self._clock(), reason=reason):
                return reservation

            self._release_items(reservation.item_ids)
            self._logger.info(
                "Бронирование отменено",
                reservation_id=str(reservation.id),
                reason=reason,
            )
            self._publish_events(reservation)
            return reservation

    def cleanup_expired_reservations(self) -> int:
        """Отменяет все просроченные неподтвержденные бронирования.

        Returns:
            Количество отмененных бронирований
        """
        with self._lock:
            expired = self._repository.find_expired_pending(self._clock())
            for reservation in expired:
                self.cancel_reservation(reservation.id, reason="expired")

            if expired:
                self._logger.info(
                    f"Отменено просроченных бронирований: {len(expired)}"
                )
            return len(expired)

    # Запросы

    def get_reservation_by_id(
        self, reservation_id: Union[EntityId, str]
    ) -> Optional[Reservation]:
        if isinstance(reservation_id, str):
            try:
                reservation_id = UUID(reservation_id)
            except ValueError:
                return None
        return self._repository.get_by_id(reservation_id)

    def get_reservations_by_customer(self, customer_id: str) -> List[Reservation]:
        return self._repository.find_by_customer(customer_id)

    def get_reservations_in_time_range(
        self, start_time: datetime, end_time: datetime
    ) -> List[Reservation]:
        period = self._validate_time_range(start_time, end_time)
        return self._repository.find_in_time_range(period)

    def get_reservations_for_item(self, item_id: str) -> List[Reservation]:
        return self._repository.find_by_item(item_id)

    def is_item_available_for_time_range(
        self, item_id: str, start_time: datetime, end_time: datetime
    ) -> bool:
        """Проверяет, свободен ли элемент на интервал времени.

        Проверка временная: учитывается журнал бронирований,
        а не текущий статус элемента (кроме выведенных из работы).
        """
        item = self.venue_map.get_item_by_id(item_id)
        if item is None or item.status in OUT_OF_SERVICE_STATUSES:
            return False

        period = self._validate_time_range(start_time, end_time)
        return not self._repository.find_overlapping([item_id], period)

    def get_available_items(
        self,
        start_time: datetime,
        end_time: datetime,
        item_type: Optional[str] = None,
    ) -> List[Item]:
        """Возвращает элементы, свободные на указанный интервал."""
        return [
            item
            for item in self.venue_map.items
            if (item_type is None or item.type == item_type)
            and self.is_item_available_for_time_range(item.id, start_time, end_time)
        ]

    def suggest_time_slot(self, start_time: datetime) -> TimeRange:
        """Интервал стандартной длительности, начинающийся в start_time."""
        return TimeRange(
            start=start_time,
            end=start_time
            + timedelta(minutes=self.settings.time_slot_duration_minutes),
        )

    # Наблюдатели

    def on(self, event_name: EventName, callback: Callable[[ReservationEvent], None]) -> None:
        """Подписывает обработчик на событие жизненного цикла."""
        self._event_bus.subscribe(self._resolve_event(event_name), callback)

    def off(self, event_name: EventName, callback: Callable[[ReservationEvent], None]) -> None:
        """Отписывает обработчик от события."""
        self._event_bus.unsubscribe(self._resolve_event(event_name), callback)

    def add_observer(self, observer: ports.IReservationObserver) -> None:
        """Подписывает все обработчики наблюдателя, которые он реализует."""
        for event_name, method_name in OBSERVER_METHODS.items():
            handler = getattr(observer, method_name, None)
            if callable(handler):
                self.on(event_name, handler)

    def remove_observer(self, observer: ports.IReservationObserver) -> None:
        for event_name, method_name in OBSERVER_METHODS.items():
            handler = getattr(observer, method_name, None)
            if callable(handler):
                self.off(event_name, handler)

    # Вспомогательные методы

    def _check_items_available(self, item_ids: List[str]) -> None:
        if not item_ids:
            raise ItemNotAvailableException(
                [], "Бронирование должно включать хотя бы один элемент"
            )

        unavailable = []
        for item_id in item_ids:
            item = self.venue_map.get_item_by_id(item_id)
            if item is None or not item.is_available():
                unavailable.append(item_id)
        if unavailable:
            raise ItemNotAvailableException(unavailable)

    def _check_items_limit(self, item_ids: List[str]) -> None:
        limit = self.settings.items_limit
        if limit and len(item_ids) > limit:
            raise CapacityExceededException(requested=len(item_ids), limit=limit)

    @staticmethod
    def _validate_customer(
        customer: Union[Customer, Mapping[str, Any], None],
    ) -> Customer:
        if customer is None:
            raise InvalidCustomerException(["Не указаны данные клиента"])
        if not isinstance(customer, Customer):
            try:
                customer = Customer.model_validate(dict(customer))
            except (ValidationError, TypeError, ValueError) as e:
                raise InvalidCustomerException([f"Некорректные данные клиента: {e}"])

        errors = customer.validation_errors()
        if errors:
            raise InvalidCustomerException(errors)
        return customer

    @staticmethod
    def _validate_time_range(
        start_time: Optional[datetime], end_time: Optional[datetime]
    ) -> TimeRange:
        if start_time is None or end_time is None:
            raise InvalidTimeRangeException(
                "Необходимо указать время начала и окончания"
            )
        # Наивное время приводится к UTC внутри TimeRange
        try:
            return TimeRange(start=start_time, end=end_time)
        except ValidationError as e:
            raise InvalidTimeRangeException(
                f"Некорректный интервал времени: {e.errors()[0]['msg']}"
            )

    def _get_or_raise(self, reservation_id: Union[EntityId, str]) -> Reservation:
        reservation = self.get_reservation_by_id(reservation_id)
        if reservation is None:
            raise ReservationNotFoundException(reservation_id)
        return reservation

    def _set_items_status(self, item_ids: Iterable[str], status: ItemStatus) -> None:
        for item_id in item_ids:
            item = self.venue_map.get_item_by_id(item_id)
            if item is not None:
                item.update_status(status)

    def _release_items(self, item_ids: Iterable[str]) -> None:
        # Выведенные из работы элементы остаются в своем статусе
        for item_id in item_ids:
            item = self.venue_map.get_item_by_id(item_id)
            if item is not None and item.status in (
                ItemStatus.RESERVED,
                ItemStatus.OCCUPIED,
            ):
                item.update_status(ItemStatus.AVAILABLE)

    def _publish_events(self, reservation: Reservation) -> None:
        for event in reservation.pull_domain_events():
            self._event_bus.publish(event)

    @staticmethod
    def _resolve_event(event_name: EventName) -> Type[ReservationEvent]:
        if isinstance(event_name, type) and issubclass(event_name, ReservationEvent):
            return event_name
        if isinstance(event_name, str) and event_name in EVENT_NAME_ALIASES:
            event_name = EVENT_NAME_ALIASES[event_name]
        try:
            return EVENT_TYPES[ReservationEventType(event_name)]
        except ValueError:
            raise ValueError(f"Неизвестное событие: {event_name}")
