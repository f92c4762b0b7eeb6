"""Builders for screen aggregates used across the test modules."""

from datetime import time
from decimal import Decimal
from uuid import uuid4

from apps.bookings.domain.entities import Booking
from apps.screens.domain.entities import AvailabilityWindow, DayOfWeek, RateCard, Screen
from shared.domain.value_objects import Money, TimeRange


def make_screen(windows=(), bookings=(), rate_card=None, **overrides) -> Screen:
    """Active, verified screen with the given (day, start, end) windows."""
    fields = {
        "owner_id": uuid4(),
        "name": "Lobby LED wall",
        "is_active": True,
        "is_verified": True,
    }
    fields.update(overrides)
    screen = Screen(**fields)
    for day, start, end in windows:
        screen.add_availability_window(
            AvailabilityWindow(screen_id=screen.id, day_of_week=day, start_time=start, end_time=end)
        )
    for booking in bookings:
        screen.bookings.append(booking)
    if rate_card is not None:
        screen.set_rate_card(rate_card)
    return screen


def make_rate_card(screen_id=None, **overrides) -> RateCard:
    fields = {
        "screen_id": screen_id or uuid4(),
        "hourly_rate": Decimal("10"),
        "daily_rate": Decimal("60"),
        "weekly_rate": Decimal("300"),
        "monthly_rate": Decimal("1000"),
        "minimum_booking_fee": Decimal("25"),
    }
    fields.update(overrides)
    return RateCard(**fields)


def make_booking(screen_id, start, end, price=Decimal("10"), campaign_id=None) -> Booking:
    booking = Booking.create(
        screen_id=screen_id,
        campaign_id=campaign_id or uuid4(),
        creative_id=uuid4(),
        period=TimeRange(start, end),
        price=Money(price),
    )
    booking.clear_events()
    return booking


BUSINESS_HOURS = (DayOfWeek.MONDAY, time(9, 0), time(17, 0))
