"""
Основные доменные типы и утилиты общего ядра.
"""

from datetime import datetime, timedelta, timezone
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator, ValidationInfo

# Общие типы идентификаторов
EntityId = UUID


def generate_id() -> UUID:
    """Генерирует новый UUID."""
    return uuid4()


class TimeRange(BaseModel):
    """Полуоткрытый интервал времени [start, end)."""

    model_config = ConfigDict(frozen=True)

    start: datetime
    end: datetime

    @field_validator("start")
    @classmethod
    def start_in_utc(cls, v: datetime) -> datetime:
        return as_utc(v)

    @field_validator("end")
    @classmethod
    def end_after_start(cls, v, info: ValidationInfo):
        v = as_utc(v)
        if "start" in info.data and v <= info.data["start"]:
            raise ValueError("Время окончания должно быть позже времени начала")
        return v

    @property
    def duration(self) -> timedelta:
        """Длительность интервала."""
        return self.end - self.start

    def overlaps(self, other: "TimeRange") -> bool:
        """Проверяет пересечение двух полуоткрытых интервалов."""
        return self.start < other.end and other.start < self.end


class DomainEvent(BaseModel):
    """Базовый класс для всех доменных событий."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    event_id: UUID = Field(default_factory=uuid4)
    occurred_on: datetime = Field(default_factory=lambda: now())
    event_type: str


# Общие исключения
class DomainException(Exception):
    """Базовое исключение для доменных ошибок."""

    pass


class BusinessRuleValidationException(DomainException):
    """Исключение при нарушении бизнес-правил."""

    pass


# Общие утилиты
def now() -> datetime:
    """Возвращает текущую дату и время (UTC)."""
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Наивное время считается временем UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
