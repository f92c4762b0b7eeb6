"""
Pricing Engine

Computes the price of a booking interval from a screen's rate card.
Exactly one tier is charged, chosen largest unit first on the duration in
days; units are rounded up to whole units:

    duration >= 30 days  -> monthly_rate * ceil(days / 30)
    duration >= 7 days   -> weekly_rate  * ceil(days / 7)
    duration >= 1 day    -> daily_rate   * ceil(days)
    otherwise            -> max(hourly_rate * ceil(hours), minimum_booking_fee)

Only the hourly tier is floored at the minimum booking fee. All arithmetic
is Decimal; the result is in the rate card currency.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from decimal import ROUND_CEILING, Decimal
from enum import Enum

from apps.screens.domain.entities import RateCard
from shared.domain.value_objects import Money, TimeRange

SECONDS_PER_HOUR = Decimal(3600)
SECONDS_PER_DAY = Decimal(86400)
DAYS_PER_WEEK = Decimal(7)
DAYS_PER_MONTH = Decimal(30)


class PricingTier(Enum):
    HOURLY = 'hourly'
    DAILY = 'daily'
    WEEKLY = 'weekly'
    MONTHLY = 'monthly'


@dataclass(frozen=True)
class PriceQuote:
    """Price of an interval together with the tier and unit count charged"""
    tier: PricingTier
    units: int
    price: Money
    minimum_fee_applied: bool = False


def calculate_price(rate_card: RateCard, start: datetime, end: datetime) -> Money:
    """
    Price of [start, end) on the given rate card

    Raises:
        InvalidInterval: If start >= end
    """
    return quote(rate_card, start, end).price


def quote(rate_card: RateCard, start: datetime, end: datetime) -> PriceQuote:
    """Same as calculate_price, with the selected tier and unit count"""
    period = TimeRange(start, end)
    seconds = _exact_seconds(_elapsed(period))
    days = seconds / SECONDS_PER_DAY

    if days >= DAYS_PER_MONTH:
        months = _ceil(days / DAYS_PER_MONTH)
        return PriceQuote(PricingTier.MONTHLY, months, rate_card.monthly * months)

    if days >= DAYS_PER_WEEK:
        weeks = _ceil(days / DAYS_PER_WEEK)
        return PriceQuote(PricingTier.WEEKLY, weeks, rate_card.weekly * weeks)

    if days >= 1:
        whole_days = _ceil(days)
        return PriceQuote(PricingTier.DAILY, whole_days, rate_card.daily * whole_days)

    hours = _ceil(seconds / SECONDS_PER_HOUR)
    raw = rate_card.hourly * hours
    minimum = rate_card.minimum_fee
    if raw < minimum:
        return PriceQuote(PricingTier.HOURLY, hours, minimum, minimum_fee_applied=True)
    return PriceQuote(PricingTier.HOURLY, hours, raw)


def _elapsed(period: TimeRange) -> timedelta:
    # Aware values sharing a tzinfo subtract as wall-clock time
    if period.start.tzinfo is None:
        return period.duration
    return period.end.astimezone(timezone.utc) - period.start.astimezone(timezone.utc)


def _exact_seconds(duration: timedelta) -> Decimal:
    whole = Decimal(duration.days * 86400 + duration.seconds)
    return whole + Decimal(duration.microseconds) / Decimal(1_000_000)


def _ceil(value: Decimal) -> int:
    return int(value.to_integral_value(rounding=ROUND_CEILING))
