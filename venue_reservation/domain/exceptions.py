"""
Исключения контекста бронирования.
"""

from typing import Iterable, List, Optional

from ..shared_kernel import BusinessRuleValidationException, DomainException, EntityId


class ItemNotAvailableException(BusinessRuleValidationException):
    """Элементы не существуют или недоступны для бронирования."""

    def __init__(self, item_ids: Iterable[str], message: Optional[str] = None):
        self.item_ids: List[str] = list(item_ids)
        super().__init__(
            message or f"Элементы недоступны: {', '.join(self.item_ids)}"
        )


class CapacityExceededException(BusinessRuleValidationException):
    """Превышено максимальное количество элементов в бронировании."""

    def __init__(self, requested: int, limit: int):
        self.requested = requested
        self.limit = limit
        super().__init__(
            f"В одном бронировании допускается не более {limit} элементов "
            f"(запрошено {requested})"
        )


class InvalidCustomerException(BusinessRuleValidationException):
    """Неполные или некорректные данные клиента."""

    def __init__(self, errors: Iterable[str]):
        self.errors: List[str] = list(errors)
        super().__init__("; ".join(self.errors))


class InvalidTimeRangeException(BusinessRuleValidationException):
    """Не заданы время начала/окончания или начало не раньше окончания."""

    pass


class OverlapConflictException(BusinessRuleValidationException):
    """Пересечение с существующим бронированием."""

    def __init__(self, conflicting_ids: Iterable[EntityId]):
        self.conflicting_ids: List[EntityId] = list(conflicting_ids)
        super().__init__("Пересекающиеся бронирования не допускаются")


class ReservationNotFoundException(DomainException):
    """Бронирование с указанным ID не найдено."""

    def __init__(self, reservation_id: object):
        self.reservation_id = reservation_id
        super().__init__(f"Бронирование не найдено: {reservation_id}")


class InvalidStateTransitionException(BusinessRuleValidationException):
    """Недопустимый переход статуса бронирования."""

    pass


class ReservationExpiredException(BusinessRuleValidationException):
    """Срок действия неподтвержденного бронирования истек."""

    pass
