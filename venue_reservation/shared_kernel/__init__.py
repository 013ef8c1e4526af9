"""
Общее ядро (Shared Kernel) системы бронирования площадок.

Содержит общие типы данных и утилиты, используемые всеми слоями.
"""

from .domain import (
    BusinessRuleValidationException,
    DomainEvent,
    # Исключения
    DomainException,
    # Базовые типы
    EntityId,
    TimeRange,
    generate_id,
    # Утилиты
    now,
)

__all__ = [
    # Базовые типы
    "EntityId",
    "generate_id",
    "TimeRange",
    "DomainEvent",
    # Исключения
    "DomainException",
    "BusinessRuleValidationException",
    # Утилиты
    "now",
]
