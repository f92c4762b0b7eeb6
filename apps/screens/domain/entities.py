"""
Screen Domain Entities

- Screen: Aggregate root for availability and pricing decisions
- AvailabilityWindow: Recurring weekly slot during which a screen may be booked
- RateCard: Tiered price list attached to a screen (at most one)
- DayOfWeek: Weekday numbering, 0 = Monday ... 6 = Sunday (date.weekday())
"""

from dataclasses import dataclass, field
from datetime import time
from decimal import Decimal
from enum import IntEnum
from typing import List
from uuid import UUID

from apps.bookings.domain.entities import Booking
from shared.domain.base import Aggregate, Entity
from shared.domain.exceptions import AvailabilityWindowNotFound, InvalidArgument
from shared.domain.value_objects import Money

CENT = Decimal('0.01')


class DayOfWeek(IntEnum):
    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6


@dataclass(eq=False, kw_only=True)
class AvailabilityWindow(Entity):
    """
    Weekly availability window

    On every occurrence of day_of_week the screen may be booked within
    [start_time, end_time). Windows of one screen may overlap; they are OR'd.
    """
    screen_id: UUID
    day_of_week: DayOfWeek
    start_time: time
    end_time: time

    def __post_init__(self):
        try:
            self.day_of_week = DayOfWeek(self.day_of_week)
        except ValueError:
            raise InvalidArgument(f"Invalid day of week: {self.day_of_week!r}") from None
        if self.start_time >= self.end_time:
            raise InvalidArgument("Start time must be before end time")

    def __str__(self):
        return (
            f"{self.day_of_week.name.title()} "
            f"{self.start_time.strftime('%H:%M')}-{self.end_time.strftime('%H:%M')}"
        )


@dataclass(eq=False, kw_only=True)
class RateCard(Entity):
    """
    Rate card

    Rates are per started hour/day/week/month. The minimum booking fee only
    applies to sub-day bookings.
    """
    screen_id: UUID
    hourly_rate: Decimal
    daily_rate: Decimal
    weekly_rate: Decimal
    monthly_rate: Decimal
    currency: str = 'USD'
    minimum_booking_fee: Decimal = Decimal('0')

    RATE_FIELDS = ('hourly_rate', 'daily_rate', 'weekly_rate', 'monthly_rate', 'minimum_booking_fee')

    def __post_init__(self):
        for name in self.RATE_FIELDS:
            value = getattr(self, name)
            if isinstance(value, float):
                raise InvalidArgument(f"{name} must be a Decimal, not float")
            value = Decimal(value)
            if value < 0:
                raise InvalidArgument(f"{name.replace('_', ' ').capitalize()} cannot be negative")
            if value != value.quantize(CENT):
                raise InvalidArgument(f"{name} has more than two decimal places: {value}")
            setattr(self, name, value.quantize(CENT))
        # Money normalizes and validates the currency code
        self.currency = Money.zero(self.currency).currency

    def money(self, amount: Decimal) -> Money:
        return Money(amount, self.currency)

    @property
    def hourly(self) -> Money:
        return self.money(self.hourly_rate)

    @property
    def daily(self) -> Money:
        return self.money(self.daily_rate)

    @property
    def weekly(self) -> Money:
        return self.money(self.weekly_rate)

    @property
    def monthly(self) -> Money:
        return self.money(self.monthly_rate)

    @property
    def minimum_fee(self) -> Money:
        return self.money(self.minimum_booking_fee)


@dataclass(eq=False, kw_only=True)
class Screen(Aggregate):
    """
    Screen Aggregate Root

    Carries everything the availability and pricing engines need: the
    activity/verification flags, weekly windows, rate card and the screen's
    current bookings (loaded by the repository).

    A new screen is active but not verified, and therefore not bookable until
    an administrator verifies it.
    """
    owner_id: UUID
    name: str
    screen_type: str = ''
    city: str = ''
    is_active: bool = True
    is_verified: bool = False
    availability_windows: List[AvailabilityWindow] = field(default_factory=list)
    rate_card: RateCard | None = None
    bookings: List[Booking] = field(default_factory=list)

    def __post_init__(self):
        if self.owner_id is None or self.owner_id.int == 0:
            raise InvalidArgument("Owner ID cannot be empty")
        if not self.name or not self.name.strip():
            raise InvalidArgument("Screen name cannot be empty")

    def set_active_status(self, is_active: bool):
        self.is_active = is_active
        self.touch()

    def set_verification_status(self, is_verified: bool):
        self.is_verified = is_verified
        self.touch()

    def set_rate_card(self, rate_card: RateCard):
        if rate_card is None:
            raise InvalidArgument("Rate card is required")
        if rate_card.screen_id != self.id:
            raise InvalidArgument("Rate card belongs to another screen")
        self.rate_card = rate_card
        self.touch()

    def add_availability_window(self, window: AvailabilityWindow) -> AvailabilityWindow:
        if window.screen_id != self.id:
            raise InvalidArgument("Availability window belongs to another screen")
        self.availability_windows.append(window)
        self.touch()
        return window

    def remove_availability_window(self, window_id: UUID) -> AvailabilityWindow:
        window = next((w for w in self.availability_windows if w.id == window_id), None)
        if window is None:
            raise AvailabilityWindowNotFound(window_id)
        self.availability_windows.remove(window)
        self.touch()
        return window

    @property
    def is_bookable(self) -> bool:
        return self.is_active and self.is_verified

    def windows_for(self, day: DayOfWeek | int) -> List[AvailabilityWindow]:
        return [w for w in self.availability_windows if w.day_of_week == day]

    def __str__(self):
        return f"Screen {self.name} ({self.id})"
