"""Application Services - Business use cases"""
import asyncio
import logging
from uuid import UUID
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Callable, List, Optional, Set

from pydantic import BaseModel

from domain.repositories import RoomRepository, ReservationRepository
from domain.entities import Room, Reservation
from domain.enums import RoomType, RoomView, StayPeriod
from domain.exceptions import CapacityConflictError, NotFoundError
from domain.pricing import PricingParams, PricingResult, compute_total
from domain.value_objects import (
    AvailabilityQuery, DateRange, Pagination, ReservationRequest
)

logger = logging.getLogger(__name__)


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


# ==================== READ MODELS ====================

class AvailableRoom(BaseModel):
    """Bookable room with the price of the requested stay"""
    room: Room
    days_count: int
    nights_count: int
    base_value: int
    weekend_increment: Decimal
    days_discount: int
    all_inclusive_total: int
    total_price: Decimal


class PagedAvailableRooms(BaseModel):
    items: List[AvailableRoom]
    total: int
    offset: int
    limit: int
    has_more: bool


class ReservationDetails(BaseModel):
    """Reservation with its pricing breakdown recomputed on read.

    The breakdown follows the current pricing rules and the room's current
    base price; total_price is the amount frozen at booking time.
    """
    reservation: Reservation
    room: Optional[Room] = None
    days_count: int
    nights_count: int
    base_value: int
    weekend_increment: Decimal
    days_discount: int
    all_inclusive_total: int


class PaginatedReservations(BaseModel):
    past: List[Reservation]
    current: List[Reservation]
    future: List[Reservation]
    total_past: int
    total_current: int
    total_future: int


# ==================== SERVICES ====================

class AvailabilityService:
    """Service deciding which rooms can be booked for a stay"""

    def __init__(self, room_repo: RoomRepository, reservation_repo: ReservationRepository):
        self.room_repo = room_repo
        self.reservation_repo = reservation_repo

    async def find_conflicting_rooms(
        self,
        room_type: Optional[RoomType],
        date_range: DateRange
    ) -> Set[int]:
        """Rooms holding an active reservation overlapping the range"""
        conflicting = await self.reservation_repo.find_conflicting(date_range, room_type)
        return {reservation.room_id for reservation in conflicting}

    async def find_available_room(
        self,
        room_type: Optional[RoomType],
        date_range: DateRange,
        min_capacity: int
    ) -> Optional[Room]:
        """First free room by ascending id, or None when nothing fits"""
        busy = await self.find_conflicting_rooms(room_type, date_range)
        rooms = await self.room_repo.find_rooms(
            room_type=room_type,
            min_capacity=min_capacity,
            exclude_ids=busy,
            limit=1
        )
        return rooms[0] if rooms else None

    async def find_available_rooms_paginated(
        self,
        query: AvailabilityQuery,
        pagination: Pagination = Pagination()
    ) -> PagedAvailableRooms:
        """Page of free rooms matching the query, each priced for the stay"""
        date_range = query.date_range()
        view = RoomView.EXTERIOR if query.exterior_view_only else None
        busy = await self.find_conflicting_rooms(query.room_type, date_range)

        filters = dict(
            room_type=query.room_type,
            view=view,
            min_capacity=query.people,
            exclude_ids=busy
        )
        total = await self.room_repo.count_rooms(**filters)
        rooms = await self.room_repo.find_rooms(
            **filters, offset=pagination.offset, limit=pagination.limit
        )

        items = [self._price_room(room, query) for room in rooms]
        return PagedAvailableRooms(
            items=items,
            total=total,
            offset=pagination.offset,
            limit=pagination.limit,
            has_more=pagination.offset + len(items) < total
        )

    async def list_room_types(self) -> List[RoomType]:
        return await self.room_repo.find_room_types()

    @staticmethod
    def _price_room(room: Room, query: AvailabilityQuery) -> AvailableRoom:
        pricing = compute_total(PricingParams(
            check_in=query.check_in,
            check_out=query.check_out,
            people=query.people,
            base_price=room.base_price,
            all_inclusive=query.all_inclusive
        ))
        return AvailableRoom(
            room=room,
            days_count=pricing.total_nights,
            nights_count=pricing.total_nights,
            base_value=pricing.base_price,
            weekend_increment=pricing.weekend_surcharge,
            days_discount=pricing.discount,
            all_inclusive_total=pricing.all_inclusive_cost,
            total_price=pricing.total_price
        )


class ReservationService:
    """Service for Reservation business use cases"""

    def __init__(self,
                 room_repo: RoomRepository,
                 reservation_repo: ReservationRepository,
                 availability: Optional[AvailabilityService] = None,
                 clock: Callable[[], date] = utc_today):
        self.room_repo = room_repo
        self.repository = reservation_repo
        self.availability = availability or AvailabilityService(room_repo, reservation_repo)
        self.clock = clock

    async def create_reservation(
        self,
        user_id: str,
        request: ReservationRequest
    ) -> Reservation:
        """Book the first free room matching the request"""
        date_range = request.date_range()

        async with self.repository.booking_lock():
            room = await self.availability.find_available_room(
                request.room_type, date_range, request.people
            )
            if room is None:
                logger.info(
                    "No %s room available from %s to %s for %d people",
                    request.room_type.value, request.check_in, request.check_out, request.people
                )
                raise CapacityConflictError(
                    "No rooms available for the selected dates and people count"
                )

            pricing = self.quote(room, request)
            reservation = Reservation.create(
                room=room,
                user_id=user_id,
                date_range=date_range,
                people=request.people,
                total_price=pricing.total_price,
                all_inclusive=request.all_inclusive
            )
            reservation = await self.repository.insert(reservation)

        logger.info(
            "Reservation %s created for user %s in room %d (total %s)",
            reservation.id, user_id, room.id, reservation.total_price
        )
        return reservation

    @staticmethod
    def quote(room: Room, request: ReservationRequest) -> PricingResult:
        return compute_total(PricingParams(
            check_in=request.check_in,
            check_out=request.check_out,
            people=request.people,
            base_price=room.base_price,
            all_inclusive=request.all_inclusive
        ))

    async def cancel_reservation(self, reservation_id: UUID) -> Reservation:
        """Cancel an active reservation"""
        reservation = await self.find_one(reservation_id)
        reservation.cancel()
        reservation = await self.repository.update(reservation)
        logger.info("Reservation %s cancelled", reservation_id)
        return reservation

    async def find_one(self, reservation_id: UUID) -> Reservation:
        """Get reservation by ID"""
        reservation = await self.repository.find_by_id(reservation_id)
        if not reservation:
            raise NotFoundError(f"Reservation with ID {reservation_id} not found")
        return reservation

    get_reservation = find_one

    async def find_paginated_reservations(
        self,
        pagination: Pagination = Pagination()
    ) -> PaginatedReservations:
        """All reservations split into past, current and future stays"""
        today = self.clock()
        periods = (StayPeriod.PAST, StayPeriod.CURRENT, StayPeriod.FUTURE)

        totals = await asyncio.gather(*(
            self.repository.count_by_period(period, today) for period in periods
        ))
        pages = await asyncio.gather(*(
            self.repository.find_by_period(
                period, today, offset=pagination.offset, limit=pagination.limit
            )
            for period in periods
        ))

        past, current, future = pages
        total_past, total_current, total_future = totals
        return PaginatedReservations(
            past=past,
            current=current,
            future=future,
            total_past=total_past,
            total_current=total_current,
            total_future=total_future
        )

    async def describe(self, reservation: Reservation) -> ReservationDetails:
        """Attach the room and the recomputed pricing breakdown"""
        room = await self.room_repo.find_by_id(reservation.room_id)
        base_price = room.base_price if room else 0
        pricing = compute_total(PricingParams(
            check_in=reservation.check_in,
            check_out=reservation.check_out,
            people=reservation.people,
            base_price=base_price,
            all_inclusive=reservation.all_inclusive
        ))
        return ReservationDetails(
            reservation=reservation,
            room=room,
            days_count=pricing.total_nights,
            nights_count=pricing.total_nights,
            base_value=base_price,
            weekend_increment=pricing.weekend_surcharge,
            days_discount=pricing.discount,
            all_inclusive_total=pricing.all_inclusive_cost
        )
