"""
Бронирование элементов площадки (мест, столов, залов) на интервалы времени.
"""

from .application.services import ReservationSystem
from .bootstrap import bootstrap_app
from .config import ReservationSettings
from .domain import (
    Customer,
    Item,
    ItemStatus,
    Reservation,
    ReservationStatus,
    VenueMap,
    Zone,
)

__all__ = [
    "ReservationSystem",
    "ReservationSettings",
    "bootstrap_app",
    "Customer",
    "Item",
    "ItemStatus",
    "Reservation",
    "ReservationStatus",
    "VenueMap",
    "Zone",
]
