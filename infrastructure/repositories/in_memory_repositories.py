"""In-Memory Repository Implementations"""
import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Collection, Optional, List, Dict
from uuid import UUID
from datetime import date

from domain.repositories import RoomRepository, ReservationRepository
from domain.entities import Room, Reservation
from domain.enums import RoomType, RoomView, StayPeriod
from domain.exceptions import ConcurrencyConflictError, NotFoundError
from domain.value_objects import DateRange


def _slice(items: list, offset: int, limit: Optional[int]) -> list:
    if limit is None:
        return items[offset:]
    return items[offset:offset + limit]


class InMemoryRoomRepository(RoomRepository):
    """In-memory implementation of RoomRepository"""

    def __init__(self):
        self._storage: Dict[int, Room] = {}

    async def save(self, room: Room) -> Room:
        """Save room to memory"""
        self._storage[room.id] = room
        return room

    async def find_by_id(self, room_id: int) -> Optional[Room]:
        """Find room by ID"""
        return self._storage.get(room_id)

    def _matching(
        self,
        room_type: Optional[RoomType],
        view: Optional[RoomView],
        min_capacity: int,
        exclude_ids: Collection[int]
    ) -> List[Room]:
        excluded = set(exclude_ids)
        rooms = [
            room for room in self._storage.values()
            if not room.is_deleted
            and room.max_capacity >= min_capacity
            and (room_type is None or room.type == room_type)
            and (view is None or room.view == view)
            and room.id not in excluded
        ]
        return sorted(rooms, key=lambda room: room.id)

    async def find_rooms(
        self,
        room_type: Optional[RoomType] = None,
        view: Optional[RoomView] = None,
        min_capacity: int = 1,
        exclude_ids: Collection[int] = (),
        offset: int = 0,
        limit: Optional[int] = None
    ) -> List[Room]:
        """Find rooms matching the filters, ascending id"""
        rooms = self._matching(room_type, view, min_capacity, exclude_ids)
        return _slice(rooms, offset, limit)

    async def count_rooms(
        self,
        room_type: Optional[RoomType] = None,
        view: Optional[RoomView] = None,
        min_capacity: int = 1,
        exclude_ids: Collection[int] = ()
    ) -> int:
        """Count rooms matching the filters"""
        return len(self._matching(room_type, view, min_capacity, exclude_ids))

    async def find_room_types(self) -> List[RoomType]:
        """Distinct types of non-deleted rooms"""
        present = {room.type for room in self._storage.values() if not room.is_deleted}
        return [room_type for room_type in RoomType if room_type in present]


class InMemoryReservationRepository(ReservationRepository):
    """In-memory implementation of ReservationRepository.

    Bookings are serialized through a single asyncio lock and insert
    re-checks the room for overlaps, the in-memory stand-in for an
    exclusion constraint on (room_id, date range).
    """

    def __init__(self, room_repository: RoomRepository):
        self._storage: Dict[UUID, Reservation] = {}
        self._rooms = room_repository
        self._lock = asyncio.Lock()

    @asynccontextmanager
    async def booking_lock(self) -> AsyncIterator[None]:
        async with self._lock:
            yield

    async def insert(self, reservation: Reservation) -> Reservation:
        """Insert reservation into memory"""
        for existing in self._storage.values():
            if (
                reservation.is_active()
                and existing.room_id == reservation.room_id
                and existing.conflicts_with(reservation.date_range)
            ):
                raise ConcurrencyConflictError(
                    f"Room {reservation.room_id} is already booked between "
                    f"{existing.check_in} and {existing.check_out}"
                )
        self._storage[reservation.id] = reservation
        return reservation

    async def find_by_id(self, reservation_id: UUID) -> Optional[Reservation]:
        """Find reservation by ID"""
        return self._storage.get(reservation_id)

    async def find_conflicting(
        self,
        date_range: DateRange,
        room_type: Optional[RoomType] = None
    ) -> List[Reservation]:
        """Find active reservations overlapping the range"""
        conflicting = []
        for reservation in self._storage.values():
            if not reservation.conflicts_with(date_range):
                continue
            if room_type is not None:
                room = await self._rooms.find_by_id(reservation.room_id)
                if room is None or room.type != room_type:
                    continue
            conflicting.append(reservation)
        return conflicting

    def _in_period(self, period: StayPeriod, today: date) -> List[Reservation]:
        reservations = [
            r for r in self._storage.values() if r.period_on(today) == period
        ]
        if period == StayPeriod.PAST:
            return sorted(reservations, key=lambda r: r.check_out, reverse=True)
        return sorted(reservations, key=lambda r: r.check_in)

    async def find_by_period(
        self,
        period: StayPeriod,
        today: date,
        offset: int = 0,
        limit: Optional[int] = None
    ) -> List[Reservation]:
        """Past stays newest first, current and future by check-in"""
        return _slice(self._in_period(period, today), offset, limit)

    async def count_by_period(self, period: StayPeriod, today: date) -> int:
        return len(self._in_period(period, today))

    async def update(self, reservation: Reservation) -> Reservation:
        """Update reservation"""
        if reservation.id in self._storage:
            self._storage[reservation.id] = reservation
            return reservation
        raise NotFoundError(f"Reservation with ID {reservation.id} not found")
