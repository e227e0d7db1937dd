"""
Common Value Objects

Value objects used across multiple domains:
- DateRange: a half-open stay period [start_date, end_date)
- StayQuote: the priced result of a stay request
"""

import math
from dataclasses import dataclass
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal

from shared.domain.base import ValueObject

ONE_DAY = timedelta(days=1)
CENT = Decimal("0.01")


@dataclass(frozen=True)
class DateRange(ValueObject):
    """
    Date range value object

    Represents a range from start_date (inclusive) to end_date (exclusive).
    Used for booking periods and availability checks.
    """
    start_date: date
    end_date: date

    def __post_init__(self):
        if self.start_date >= self.end_date:
            raise ValueError(f"Start date ({self.start_date}) must be before end date ({self.end_date})")

    def overlaps_with(self, other: 'DateRange') -> bool:
        """
        Check if this range overlaps with another

        end_date is exclusive, so a checkout on the day of another
        check-in is not an overlap.

        Examples:
            - DateRange(10, 15) overlaps with DateRange(12, 18) -> True
            - DateRange(10, 15) overlaps with DateRange(15, 20) -> False (adjacent)
        """
        if not isinstance(other, DateRange):
            raise TypeError("Can only check overlap with another DateRange")

        return self.start_date < other.end_date and other.start_date < self.end_date

    def contains(self, check_date: date) -> bool:
        return self.start_date <= check_date < self.end_date

    @property
    def nights(self) -> int:
        """Number of nights, rounding a partial day up."""
        return math.ceil((self.end_date - self.start_date) / ONE_DAY)

    def __len__(self) -> int:
        return self.nights

    def __str__(self):
        return f"{self.start_date.isoformat()} - {self.end_date.isoformat()}"

    def __repr__(self):
        return f"DateRange({self.start_date}, {self.end_date})"


@dataclass(frozen=True)
class StayQuote(ValueObject):
    """Price of a stay: nights * nightly price, minus the percentage discount."""
    dates: DateRange
    nightly_price: Decimal
    discount_percent: Decimal = Decimal("0")

    def __post_init__(self):
        if self.nightly_price < 0:
            raise ValueError("Nightly price cannot be negative")
        if not Decimal("0") <= self.discount_percent <= Decimal("100"):
            raise ValueError("Discount must be between 0 and 100 percent")

    @property
    def nights(self) -> int:
        return self.dates.nights

    @property
    def subtotal(self) -> Decimal:
        return Decimal(self.nights) * self.nightly_price

    @property
    def total(self) -> Decimal:
        factor = Decimal("1") - self.discount_percent / Decimal("100")
        return (self.subtotal * factor).quantize(CENT, rounding=ROUND_HALF_UP)

    def to_dict(self) -> dict:
        return {
            "start_date": self.dates.start_date.isoformat(),
            "end_date": self.dates.end_date.isoformat(),
            "nights": self.nights,
            "nightly_price": str(self.nightly_price),
            "discount_percent": str(self.discount_percent),
            "total_price": str(self.total),
        }
