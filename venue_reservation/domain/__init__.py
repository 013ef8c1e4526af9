"""
Доменный слой: элементы площадки, схема площадки и бронирования.
"""

from .exceptions import (
    CapacityExceededException,
    InvalidCustomerException,
    InvalidStateTransitionException,
    InvalidTimeRangeException,
    ItemNotAvailableException,
    OverlapConflictException,
    ReservationExpiredException,
    ReservationNotFoundException,
)
from .item import Item, ItemShape, ItemStatus
from .reservation import (
    Reservation,
    ReservationCancelled,
    ReservationConfirmed,
    ReservationCreated,
    ReservationEvent,
    ReservationEventType,
    ReservationStatus,
)
from .value_objects import Customer
from .venue_map import VenueMap, Zone

__all__ = [
    # Сущности и объекты-значения
    "Item",
    "ItemShape",
    "ItemStatus",
    "VenueMap",
    "Zone",
    "Customer",
    "Reservation",
    "ReservationStatus",
    # События
    "ReservationEvent",
    "ReservationEventType",
    "ReservationCreated",
    "ReservationConfirmed",
    "ReservationCancelled",
    # Исключения
    "ItemNotAvailableException",
    "CapacityExceededException",
    "InvalidCustomerException",
    "InvalidTimeRangeException",
    "OverlapConflictException",
    "ReservationNotFoundException",
    "InvalidStateTransitionException",
    "ReservationExpiredException",
]
