"""Domain Pricing - stay price calculation

Pure functions over validated inputs. Amounts are in currency minor units and
carried as Decimal so the weekend surcharge fraction stays exact.
"""
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from typing import Union

from pydantic import BaseModel, ConfigDict, Field

from domain.exceptions import InvalidRangeError

WEEKEND_SURCHARGE_RATE = Decimal("0.2")
ALL_INCLUSIVE_PRICE_PER_PERSON_PER_NIGHT = 25000

# (minimum nights, discount per night), highest tier first
DISCOUNT_TIERS = (
    (10, 30000),
    (7, 20000),
    (4, 10000),
)

# date.weekday(): Monday is 0
FRIDAY = 4
SATURDAY = 5

DateLike = Union[date, datetime]


class PricingParams(BaseModel):
    """Input for a stay price calculation"""
    model_config = ConfigDict(frozen=True)

    check_in: date
    check_out: date
    people: int = Field(ge=1)
    base_price: int = Field(ge=0)
    all_inclusive: bool = False


class PricingResult(BaseModel):
    """Itemized stay price"""
    model_config = ConfigDict(frozen=True)

    total_price: Decimal
    total_nights: int
    weekend_surcharge: Decimal
    discount: int
    all_inclusive_cost: int
    base_price: int


def _to_utc_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    return value


def nights_between(check_in: DateLike, check_out: DateLike) -> int:
    """Number of whole calendar nights between two days.

    Datetimes are truncated to their UTC calendar day first so local
    timezone offsets and DST changes never shift the count.
    """
    nights = (_to_utc_date(check_out) - _to_utc_date(check_in)).days
    if nights < 0:
        raise InvalidRangeError("Check-out date cannot be before check-in date")
    return nights


def weekend_nights(start: DateLike, nights: int) -> int:
    """Count the nights starting on a Friday or a Saturday"""
    first = _to_utc_date(start)
    count = 0
    for offset in range(nights):
        if (first + timedelta(days=offset)).weekday() in (FRIDAY, SATURDAY):
            count += 1
    return count


def discount_per_night(nights: int) -> int:
    """Long-stay discount applied to every night of the stay"""
    for minimum_nights, discount in DISCOUNT_TIERS:
        if nights >= minimum_nights:
            return discount
    return 0


def all_inclusive_cost(enabled: bool, people: int, nights: int) -> int:
    if not enabled:
        return 0
    return ALL_INCLUSIVE_PRICE_PER_PERSON_PER_NIGHT * people * nights


def weekend_surcharge(base_price: int, weekend_night_count: int) -> Decimal:
    return Decimal(base_price) * WEEKEND_SURCHARGE_RATE * weekend_night_count


def compute_total(params: PricingParams) -> PricingResult:
    """Compute the total price of a stay with its breakdown"""
    total_nights = nights_between(params.check_in, params.check_out)
    surcharge = weekend_surcharge(
        params.base_price, weekend_nights(params.check_in, total_nights)
    )
    discount = discount_per_night(total_nights) * total_nights
    extras = all_inclusive_cost(params.all_inclusive, params.people, total_nights)

    total = params.base_price * total_nights + surcharge - discount + extras

    return PricingResult(
        total_price=total,
        total_nights=total_nights,
        weekend_surcharge=surcharge,
        discount=discount,
        all_inclusive_cost=extras,
        base_price=params.base_price,
    )
