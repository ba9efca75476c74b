"""Domain Repository Interfaces"""
from abc import ABC, abstractmethod
from typing import AsyncContextManager, Collection, List, Optional
from uuid import UUID
from datetime import date

from domain.entities import Room, Reservation
from domain.enums import RoomType, RoomView, StayPeriod
from domain.value_objects import DateRange


class RoomRepository(ABC):
    """Repository interface for Room inventory.

    Every query except find_by_id ignores soft-deleted rooms and returns
    rooms ordered by ascending id.
    """

    @abstractmethod
    async def save(self, room: Room) -> Room:
        """Save room"""
        pass

    @abstractmethod
    async def find_by_id(self, room_id: int) -> Optional[Room]:
        """Find room by ID, deleted or not"""
        pass

    @abstractmethod
    async def find_rooms(
        self,
        room_type: Optional[RoomType] = None,
        view: Optional[RoomView] = None,
        min_capacity: int = 1,
        exclude_ids: Collection[int] = (),
        offset: int = 0,
        limit: Optional[int] = None
    ) -> List[Room]:
        """Find rooms matching the filters"""
        pass

    @abstractmethod
    async def count_rooms(
        self,
        room_type: Optional[RoomType] = None,
        view: Optional[RoomView] = None,
        min_capacity: int = 1,
        exclude_ids: Collection[int] = ()
    ) -> int:
        """Count rooms matching the filters"""
        pass

    @abstractmethod
    async def find_room_types(self) -> List[RoomType]:
        """Distinct types of the rooms in inventory"""
        pass


class ReservationRepository(ABC):
    """Repository interface for Reservation Aggregate"""

    @abstractmethod
    def booking_lock(self) -> AsyncContextManager[None]:
        """Scope in which room selection and insert run as one unit"""
        pass

    @abstractmethod
    async def insert(self, reservation: Reservation) -> Reservation:
        """Insert reservation.

        Raises ConcurrencyConflictError when the new reservation is active
        and another active reservation on the same room overlaps it.
        """
        pass

    @abstractmethod
    async def find_by_id(self, reservation_id: UUID) -> Optional[Reservation]:
        """Find reservation by ID"""
        pass

    @abstractmethod
    async def find_conflicting(
        self,
        date_range: DateRange,
        room_type: Optional[RoomType] = None
    ) -> List[Reservation]:
        """Find active reservations overlapping the range"""
        pass

    @abstractmethod
    async def find_by_period(
        self,
        period: StayPeriod,
        today: date,
        offset: int = 0,
        limit: Optional[int] = None
    ) -> List[Reservation]:
        """Find reservations in a period relative to today"""
        pass

    @abstractmethod
    async def count_by_period(self, period: StayPeriod, today: date) -> int:
        """Count reservations in a period relative to today"""
        pass

    @abstractmethod
    async def update(self, reservation: Reservation) -> Reservation:
        """Update reservation"""
        pass
