"""Domain Enums"""
from enum import Enum


class RoomType(str, Enum):
    SINGLE = "SINGLE"
    DOUBLE = "DOUBLE"
    PRESIDENTIAL = "PRESIDENTIAL"


class RoomView(str, Enum):
    EXTERIOR = "EXTERIOR"
    INTERIOR = "INTERIOR"


class ReservationStatus(str, Enum):
    ACTIVE = "ACTIVE"
    CANCELLED = "CANCELLED"


class StayPeriod(str, Enum):
    """Position of a stay relative to a reference day"""
    PAST = "PAST"
    CURRENT = "CURRENT"
    FUTURE = "FUTURE"
