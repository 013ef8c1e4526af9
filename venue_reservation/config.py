"""
Настройки системы бронирования.

Значения можно передать явно или через переменные окружения
с префиксом VENUE_RESERVATION_ (например, VENUE_RESERVATION_RESERVATION_EXPIRY_MINUTES=30).
"""

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ReservationSettings(BaseSettings):
    """Настройки системы бронирования."""

    model_config = SettingsConfigDict(
        env_prefix="VENUE_RESERVATION_",
        env_ignore_empty=True,
        extra="ignore",
    )

    # Время жизни неподтвержденного бронирования
    reservation_expiry_minutes: float = Field(15, ge=0)
    # 0 или None - без ограничения
    max_items_per_reservation: Optional[int] = Field(10, ge=0)
    allow_overlapping_reservations: bool = False
    # Рекомендательные параметры, ядро их не проверяет
    time_slot_duration_minutes: int = Field(60, gt=0)
    allow_multiple_items_per_reservation: bool = True

    # Планировщик очистки просроченных бронирований
    cleanup_interval_minutes: float = Field(2, gt=0)

    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()

    @property
    def items_limit(self) -> Optional[int]:
        """Лимит элементов в бронировании или None, если лимита нет."""
        return self.max_items_per_reservation or None
