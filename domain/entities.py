"""Domain Entities - Aggregates"""
from pydantic import BaseModel, ConfigDict, Field
from uuid import UUID, uuid4
from datetime import datetime, date, timezone
from decimal import Decimal

from domain.enums import RoomType, RoomView, ReservationStatus, StayPeriod
from domain.exceptions import InvalidStateTransitionError, ValidationError
from domain.value_objects import DateRange, validate_people


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Room(BaseModel):
    """Room Entity - inventory unit, soft-deleted only"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    type: RoomType
    view: RoomView
    base_price: int = Field(ge=0)
    max_capacity: int = Field(ge=1)
    is_deleted: bool = False
    created_at: datetime = Field(default_factory=_utcnow)

    def can_host(self, people: int) -> bool:
        return not self.is_deleted and self.max_capacity >= people

    def soft_delete(self) -> None:
        """Hide the room from inventory while keeping it for past reservations"""
        self.is_deleted = True


class Reservation(BaseModel):
    """Reservation Aggregate Root Entity"""
    model_config = ConfigDict(from_attributes=True)

    # Identity
    id: UUID = Field(default_factory=uuid4)

    # References
    room_id: int
    user_id: str

    # Stay
    check_in: date
    check_out: date
    people: int
    all_inclusive: bool = False

    # Frozen at creation
    total_price: Decimal

    status: ReservationStatus = ReservationStatus.ACTIVE
    created_at: datetime = Field(default_factory=_utcnow)

    # ==================== FACTORY METHOD ====================
    @staticmethod
    def create(
        room: Room,
        user_id: str,
        date_range: DateRange,
        people: int,
        total_price: Decimal,
        all_inclusive: bool = False
    ) -> "Reservation":
        """Create new active reservation with validation"""
        Reservation._validate_date_range(date_range)
        validate_people(people)
        if not room.can_host(people):
            raise ValidationError(
                f"Room {room.id} cannot host {people} people"
            )
        if total_price < 0:
            raise ValidationError("Total price cannot be negative")

        return Reservation(
            room_id=room.id,
            user_id=user_id,
            check_in=date_range.check_in,
            check_out=date_range.check_out,
            people=people,
            all_inclusive=all_inclusive,
            total_price=total_price,
            status=ReservationStatus.ACTIVE
        )

    # ==================== STATE TRANSITION METHODS ====================
    def cancel(self) -> None:
        """Cancel reservation. CANCELLED is terminal."""
        if not self.is_active():
            raise InvalidStateTransitionError(
                f"Cannot cancel reservation with status {self.status.value}"
            )
        self.status = ReservationStatus.CANCELLED

    # ==================== QUERY METHODS ====================
    def is_active(self) -> bool:
        return self.status == ReservationStatus.ACTIVE

    @property
    def date_range(self) -> DateRange:
        return DateRange(check_in=self.check_in, check_out=self.check_out)

    def conflicts_with(self, date_range: DateRange) -> bool:
        """Whether this reservation blocks its room for the given range"""
        return self.is_active() and date_range.overlaps(self.check_in, self.check_out)

    def period_on(self, today: date) -> StayPeriod:
        if self.check_out < today:
            return StayPeriod.PAST
        if self.check_in > today:
            return StayPeriod.FUTURE
        return StayPeriod.CURRENT

    # ==================== PRIVATE VALIDATION METHODS ====================
    @staticmethod
    def _validate_date_range(date_range: DateRange) -> None:
        if date_range.check_out <= date_range.check_in:
            raise ValidationError("Check-out date must be after check-in date")
