"""API Schemas - Request and Response DTOs"""
from pydantic import BaseModel, Field, PlainSerializer
from datetime import date, datetime
from decimal import Decimal
from uuid import UUID
from typing import Annotated, List, Optional

from domain.enums import RoomType

# Decimal internally, JSON number on the wire
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


# ============================================================================
# RESERVATION SCHEMAS
# ============================================================================

class CreateReservationRequest(BaseModel):
    """Create reservation request DTO"""
    check_in: date
    check_out: date
    people: int = Field(ge=1, le=4)
    room_type: RoomType
    all_inclusive: bool = False


class RoomResponse(BaseModel):
    """Room response DTO"""
    id: int
    type: str
    view: str
    base_price: int
    max_capacity: int
    is_deleted: bool
    created_at: datetime


class ReservationResponse(BaseModel):
    """Reservation response DTO with the pricing breakdown"""
    id: UUID
    check_in: date
    check_out: date
    people: int
    room_id: int
    user_id: str
    total_price: Money
    status: str
    all_inclusive: bool
    created_at: datetime
    room: Optional[RoomResponse] = None
    days_count: int
    nights_count: int
    base_value: int
    weekend_increment: Money
    days_discount: int
    all_inclusive_total: int


class PaginatedReservationsResponse(BaseModel):
    """Reservations split by stay period"""
    past: List[ReservationResponse]
    current: List[ReservationResponse]
    future: List[ReservationResponse]
    total_past: int
    total_current: int
    total_future: int


# ============================================================================
# ROOM SCHEMAS
# ============================================================================

class AvailableRoomResponse(BaseModel):
    """Available room with stay pricing DTO"""
    room: RoomResponse
    days_count: int
    nights_count: int
    base_value: int
    weekend_increment: Money
    days_discount: int
    all_inclusive_total: int
    total_price: Money


class PagedAvailableRoomResponse(BaseModel):
    """Page of available rooms DTO"""
    items: List[AvailableRoomResponse]
    total: int
    offset: int
    limit: int
    has_more: bool


# ============================================================================
# AUTH SCHEMAS
# ============================================================================

class TokenData(BaseModel):
    """Token payload DTO"""
    sub: Optional[str] = None
    username: Optional[str] = None
    email: Optional[str] = None
