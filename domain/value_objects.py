"""Domain Value Objects"""
from pydantic import BaseModel, ConfigDict, Field
from datetime import date
from typing import Optional

from domain.enums import RoomType
from domain.exceptions import ValidationError
from domain.pricing import nights_between

MIN_PEOPLE = 1
MAX_PEOPLE = 4


class DateRange(BaseModel):
    """Value Object for a half-open stay interval [check_in, check_out)"""
    model_config = ConfigDict(frozen=True)

    check_in: date
    check_out: date

    @classmethod
    def for_stay(cls, check_in: date, check_out: date) -> "DateRange":
        """Build a bookable range, rejecting empty or reversed ranges"""
        if check_out <= check_in:
            raise ValidationError("Check-out date must be after check-in date")
        return cls(check_in=check_in, check_out=check_out)

    def nights(self) -> int:
        """Calculate number of nights"""
        return nights_between(self.check_in, self.check_out)

    def overlaps(self, check_in: date, check_out: date) -> bool:
        """Half-open overlap: touching boundaries do not overlap"""
        return check_in < self.check_out and check_out > self.check_in


class Pagination(BaseModel):
    """Offset/limit slice of an ordered result"""
    model_config = ConfigDict(frozen=True)

    offset: int = Field(default=0, ge=0)
    limit: int = Field(default=10, ge=1)


class ReservationRequest(BaseModel):
    """Booking input as accepted by the reservation lifecycle"""
    model_config = ConfigDict(frozen=True)

    check_in: date
    check_out: date
    people: int
    room_type: RoomType
    all_inclusive: bool = False

    def date_range(self) -> DateRange:
        validate_people(self.people)
        return DateRange.for_stay(self.check_in, self.check_out)


class AvailabilityQuery(BaseModel):
    """Search criteria for bookable rooms"""
    model_config = ConfigDict(frozen=True)

    check_in: date
    check_out: date
    people: int
    room_type: Optional[RoomType] = None
    exterior_view_only: bool = False
    all_inclusive: bool = False

    def date_range(self) -> DateRange:
        validate_people(self.people)
        return DateRange.for_stay(self.check_in, self.check_out)


def validate_people(people: int) -> None:
    if not MIN_PEOPLE <= people <= MAX_PEOPLE:
        raise ValidationError(
            f"People count must be between {MIN_PEOPLE} and {MAX_PEOPLE}"
        )
