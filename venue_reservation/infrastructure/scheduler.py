"""
Планировщик периодической очистки просроченных бронирований.

Система бронирования не владеет таймерами: она лишь предоставляет
cleanup_expired_reservations(), а вызывает ее этот планировщик.
"""

from typing import TYPE_CHECKING, Optional

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from ..application import interfaces as ports
from .logger import LoguruLogger

if TYPE_CHECKING:
    from ..application.services import ReservationSystem

CLEANUP_JOB_ID = "cleanup_expired_reservations"


class ExpiryScheduler:
    """Периодически отменяет просроченные неподтвержденные бронирования."""

    def __init__(
        self,
        reservation_system: "ReservationSystem",
        interval_minutes: float = 2,
        logger: Optional[ports.ILogger] = None,
        scheduler: Optional[BackgroundScheduler] = None,
    ):
        self._reservation_system = reservation_system
        self._logger = logger or LoguruLogger(component="expiry_scheduler")
        self._scheduler = scheduler or BackgroundScheduler()
        self._scheduler.add_job(
            self.cleanup_job,
            trigger=IntervalTrigger(minutes=interval_minutes),
            id=CLEANUP_JOB_ID,
            name="Очистка просроченных бронирований",
            replace_existing=True,
        )

    @property
    def scheduler(self) -> BackgroundScheduler:
        return self._scheduler

    @property
    def running(self) -> bool:
        return self._scheduler.running

    def cleanup_job(self) -> int:
        """Задача очистки; ошибки логируются, чтобы не останавливать планировщик."""
        try:
            count = self._reservation_system.cleanup_expired_reservations()
        except Exception as e:
            self._logger.error(
                f"Ошибка при очистке просроченных бронирований: {e}", exc_info=True
            )
            return 0

        if count > 0:
            self._logger.info(f"Очищено {count} просроченных бронирований")
        return count

    def start(self) -> None:
        if not self._scheduler.running:
            self._scheduler.start()
            self._logger.info("Планировщик очистки бронирований запущен")

    def shutdown(self, wait: bool = False) -> None:
        if self._scheduler.running:
            self._scheduler.shutdown(wait=wait)
            self._logger.info("Планировщик очистки бронирований остановлен")
