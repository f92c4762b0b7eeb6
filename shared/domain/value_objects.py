"""
Common Value Objects

Value objects used across multiple domains:
- Money: Represents monetary amounts with currency
- TimeRange: Represents a half-open interval of instants (start to end)
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal

from shared.domain.base import ValueObject
from shared.domain.exceptions import InvalidArgument, InvalidInterval


@dataclass(frozen=True)
class Money(ValueObject):
    """
    Money value object

    Represents a non-negative monetary amount with an ISO 4217 currency code.
    Amounts are always Decimal; floats are rejected to avoid binary rounding.
    """
    amount: Decimal
    currency: str = 'USD'

    def __post_init__(self):
        if isinstance(self.amount, float):
            raise InvalidArgument("Money amount must be a Decimal, not float")
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, 'amount', Decimal(self.amount))
        if self.amount < 0:
            raise InvalidArgument("Amount cannot be negative")
        if not self.currency or len(self.currency) != 3 or not self.currency.isalpha():
            raise InvalidArgument(f"Unsupported currency: {self.currency!r}")
        object.__setattr__(self, 'currency', self.currency.upper())

    @classmethod
    def zero(cls, currency: str = 'USD') -> 'Money':
        return cls(Decimal('0'), currency)

    def _check_currency(self, other: 'Money', operation: str):
        if not isinstance(other, Money):
            raise TypeError(f"Can only {operation} Money with Money")
        if self.currency != other.currency:
            raise InvalidArgument(
                f"Cannot {operation} different currencies: {self.currency} and {other.currency}"
            )

    def __add__(self, other: 'Money') -> 'Money':
        self._check_currency(other, 'add')
        return Money(self.amount + other.amount, self.currency)

    def __mul__(self, factor: int | Decimal) -> 'Money':
        """Multiply money by a whole unit count or a Decimal factor"""
        if isinstance(factor, bool) or not isinstance(factor, (int, Decimal)):
            raise TypeError("Can only multiply Money by int or Decimal")
        return Money(self.amount * Decimal(factor), self.currency)

    __rmul__ = __mul__

    def __lt__(self, other: 'Money') -> bool:
        self._check_currency(other, 'compare')
        return self.amount < other.amount

    def __le__(self, other: 'Money') -> bool:
        self._check_currency(other, 'compare')
        return self.amount <= other.amount

    def __str__(self):
        return f"{self.amount:,.2f} {self.currency}"

    def __repr__(self):
        return f"Money({self.amount}, '{self.currency}')"


@dataclass(frozen=True)
class TimeRange(ValueObject):
    """
    Time range value object

    Represents the half-open interval [start, end). Used for booking
    periods, availability checks and pricing.
    """
    start: datetime
    end: datetime

    def __post_init__(self):
        if self.start >= self.end:
            raise InvalidInterval(
                f"Start ({self.start.isoformat()}) must be before end ({self.end.isoformat()})"
            )

    def overlaps_with(self, other: 'TimeRange') -> bool:
        """
        Check if this range overlaps with another

        Ranges are half-open, so back-to-back ranges do not overlap.

        Examples:
            - [10:00, 11:00) overlaps with [10:30, 11:30) -> True
            - [10:00, 11:00) overlaps with [11:00, 12:00) -> False (adjacent)
        """
        if not isinstance(other, TimeRange):
            raise TypeError("Can only check overlap with another TimeRange")

        # Overlap formula: start1 < end2 AND end1 > start2
        return self.start < other.end and self.end > other.start

    def contains(self, moment: datetime) -> bool:
        """Check if a moment falls inside [start, end]"""
        return self.start <= moment <= self.end

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    @property
    def spans_multiple_days(self) -> bool:
        return self.start.date() != self.end.date()

    def __str__(self):
        return f"{self.start.strftime('%Y-%m-%d %H:%M')} - {self.end.strftime('%Y-%m-%d %H:%M')}"

    def __repr__(self):
        return f"TimeRange({self.start.isoformat()}, {self.end.isoformat()})"
