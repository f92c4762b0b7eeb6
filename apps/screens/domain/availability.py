"""
Availability Engine

Decides whether a concrete interval [start, end) can be booked on a screen.
Two independent gates must both pass:

- Gate A (template coverage): the interval is covered by the union of the
  screen's weekly availability windows.
- Gate B (overlap freedom): no non-cancelled booking of the screen overlaps
  the interval.

An inactive or unverified screen is never available. "Not available" is an
ordinary return value; only a malformed interval raises.

Datetimes are interpreted as given: the calendar date, weekday and
time-of-day of ``start`` and ``end`` are compared with the windows directly.
Callers holding aware datetimes convert them to the screen's local time first.
"""

from datetime import date, datetime, time, timedelta
from typing import Iterable, Iterator

from apps.bookings.domain.entities import Booking
from apps.screens.domain.entities import AvailabilityWindow, Screen
from shared.domain.value_objects import TimeRange

# A window has to reach this time-of-day to cover the tail of a first day
END_OF_DAY = time(23, 59)
START_OF_DAY = time(0, 0)


def is_available(screen: Screen, start: datetime, end: datetime) -> bool:
    """
    Check whether the screen can take a booking for [start, end)

    Raises:
        InvalidInterval: If start >= end
    """
    period = TimeRange(start, end)

    if not screen.is_bookable:
        return False

    if not covers_interval(screen.availability_windows, period):
        return False

    return not has_conflicting_booking(screen.bookings, period, screen_id=screen.id)


def covers_interval(windows: Iterable[AvailabilityWindow], period: TimeRange) -> bool:
    """Gate A: is the period covered by the union of the weekly windows?"""
    windows = list(windows)
    if not windows:
        return False

    if not period.spans_multiple_days:
        return _covers_single_day(windows, period)

    return covers_spanned_days(windows, period)


def _covers_single_day(windows: list[AvailabilityWindow], period: TimeRange) -> bool:
    weekday = period.start.weekday()
    start_tod = period.start.time()
    end_tod = period.end.time()
    return any(
        w.day_of_week == weekday and start_tod >= w.start_time and end_tod <= w.end_time
        for w in windows
    )


def covers_spanned_days(windows: list[AvailabilityWindow], period: TimeRange) -> bool:
    """
    Multi-day coverage policy

    Every calendar day touched by the period has to be covered:
    - first day: a same-weekday window starting no later than the booking
      start and reaching END_OF_DAY (23:59);
    - last day: a same-weekday window starting at START_OF_DAY (00:00) and
      reaching the booking end;
    - middle days: any same-weekday window, whatever its hours.

    Middle days are not checked against the window hours, and the first and
    last days compare against fixed 23:59/00:00 bounds. Kept as is until the
    intended multi-day rule is decided; see DESIGN.md.
    """
    first_day = period.start.date()
    last_day = period.end.date()

    for day in _days_between(first_day, last_day):
        same_day = [w for w in windows if w.day_of_week == day.weekday()]

        if day == first_day:
            covered = any(
                period.start.time() >= w.start_time and END_OF_DAY <= w.end_time
                for w in same_day
            )
        elif day == last_day:
            covered = any(
                w.start_time <= START_OF_DAY and period.end.time() <= w.end_time
                for w in same_day
            )
        else:
            covered = bool(same_day)

        if not covered:
            return False

    return True


def has_conflicting_booking(
    bookings: Iterable[Booking],
    period: TimeRange,
    screen_id=None,
) -> bool:
    """Gate B: does any non-cancelled booking overlap the period?"""
    return any(True for _ in conflicting_bookings(bookings, period, screen_id=screen_id))


def conflicting_bookings(
    bookings: Iterable[Booking],
    period: TimeRange,
    screen_id=None,
) -> Iterator[Booking]:
    for booking in bookings:
        if screen_id is not None and booking.screen_id != screen_id:
            continue
        if booking.blocks_slot() and booking.overlaps(period):
            yield booking


def _days_between(first: date, last: date) -> Iterator[date]:
    current = first
    while current <= last:
        yield current
        current += timedelta(days=1)
