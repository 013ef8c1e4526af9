"""
Инфраструктурный слой: реализации портов прикладного слоя.
"""

from .event_bus import InMemoryEventBus
from .logger import LoguruLogger, configure_logging
from .repositories import InMemoryReservationRepository
from .scheduler import ExpiryScheduler

__all__ = [
    "InMemoryEventBus",
    "InMemoryReservationRepository",
    "LoguruLogger",
    "configure_logging",
    "ExpiryScheduler",
]
