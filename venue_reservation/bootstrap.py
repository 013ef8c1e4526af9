from typing import Any, Dict, Optional

from .application.services import ReservationSystem
from .config import ReservationSettings
from .domain import VenueMap
from .infrastructure import (
    ExpiryScheduler,
    InMemoryEventBus,
    InMemoryReservationRepository,
    LoguruLogger,
    configure_logging,
)


def bootstrap_app(
    venue_map: Optional[VenueMap] = None,
    settings: Optional[ReservationSettings] = None,
    setup_logging: bool = True,
) -> Dict[str, Any]:
    """Создает и настраивает все компоненты приложения.

    Планировщик возвращается незапущенным: запуск остается за вызывающим кодом.
    """
    # 1. Настройки и логирование
    settings = settings or ReservationSettings()
    if setup_logging:
        configure_logging(settings.log_level)
    logger = LoguruLogger()

    # 2. Инфраструктура
    event_bus = InMemoryEventBus(logger=logger)
    repository = InMemoryReservationRepository()

    # 3. Система бронирования и планировщик очистки
    reservation_system = ReservationSystem(
        venue_map=venue_map,
        settings=settings,
        repository=repository,
        event_bus=event_bus,
        logger=logger,
    )
    expiry_scheduler = ExpiryScheduler(
        reservation_system,
        interval_minutes=settings.cleanup_interval_minutes,
        logger=LoguruLogger(component="expiry_scheduler"),
    )

    return {
        "settings": settings,
        "logger": logger,
        "event_bus": event_bus,
        "repository": repository,
        "reservation_system": reservation_system,
        "expiry_scheduler": expiry_scheduler,
    }
