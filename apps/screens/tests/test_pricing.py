"""Tests for the pricing engine."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from zoneinfo import ZoneInfo

import pytest

from apps.screens.domain.pricing import PricingTier, calculate_price, quote
from apps.screens.tests.factories import make_rate_card
from shared.domain.exceptions import InvalidArgument, InvalidInterval
from shared.domain.value_objects import Money

START = datetime(2025, 1, 6, 9, 0)


def price_for(rate_card, duration):
    return calculate_price(rate_card, START, START + duration)


@pytest.fixture
def rate_card():
    # hourly 10, daily 60, weekly 300, monthly 1000, minimum fee 25
    return make_rate_card()


class TestHourlyTier:
    def test_minimum_fee_applies_to_short_bookings(self, rate_card):
        result = quote(rate_card, START, START + timedelta(hours=2))

        assert result.tier is PricingTier.HOURLY
        assert result.units == 2
        assert result.minimum_fee_applied
        assert result.price == Money(Decimal("25"))

    def test_hours_above_minimum_fee(self, rate_card):
        assert price_for(rate_card, timedelta(hours=5)) == Money(Decimal("50"))

    def test_started_hour_is_charged(self, rate_card):
        assert price_for(rate_card, timedelta(hours=3, minutes=1)) == Money(Decimal("40"))

    def test_one_second_is_one_hour(self):
        card = make_rate_card(minimum_booking_fee=Decimal("0"))

        assert price_for(card, timedelta(seconds=1)) == Money(Decimal("10"))

    def test_just_under_a_day_is_hourly(self, rate_card):
        result = quote(rate_card, START, START + timedelta(hours=23, minutes=59))

        assert result.tier is PricingTier.HOURLY
        assert result.price == Money(Decimal("240"))


class TestDayBasedTiers:
    def test_exactly_one_day_is_daily(self, rate_card):
        result = quote(rate_card, START, START + timedelta(days=1))

        assert result.tier is PricingTier.DAILY
        assert result.price == Money(Decimal("60"))

    def test_started_day_is_charged(self, rate_card):
        assert price_for(rate_card, timedelta(days=1, hours=1)) == Money(Decimal("120"))

    def test_exactly_seven_days_is_one_week(self, rate_card):
        result = quote(rate_card, START, START + timedelta(days=7))

        assert result.tier is PricingTier.WEEKLY
        assert result.units == 1
        assert result.price == Money(Decimal("300"))

    def test_ten_days_is_two_weeks(self, rate_card):
        assert price_for(rate_card, timedelta(days=10)) == Money(Decimal("600"))

    def test_exactly_thirty_days_is_one_month(self, rate_card):
        result = quote(rate_card, START, START + timedelta(days=30))

        assert result.tier is PricingTier.MONTHLY
        assert result.price == Money(Decimal("1000"))

    def test_started_month_is_charged(self, rate_card):
        assert price_for(rate_card, timedelta(days=31)) == Money(Decimal("2000"))

    def test_minimum_fee_is_not_applied_to_day_tiers(self):
        card = make_rate_card(daily_rate=Decimal("5"), minimum_booking_fee=Decimal("100"))

        assert price_for(card, timedelta(days=2)) == Money(Decimal("10"))


class TestPriceProperties:
    def test_price_is_exact_decimal(self):
        card = make_rate_card(hourly_rate=Decimal("0.10"), minimum_booking_fee=Decimal("0"))

        assert price_for(card, timedelta(hours=3)).amount == Decimal("0.30")

    def test_price_uses_rate_card_currency(self):
        card = make_rate_card(currency="eur")

        assert price_for(card, timedelta(days=2)).currency == "EUR"

    def test_price_does_not_decrease_within_a_tier(self, rate_card):
        durations = [timedelta(days=d) for d in range(7, 30)]
        prices = [price_for(rate_card, d).amount for d in durations]

        assert prices == sorted(prices)

    def test_price_is_independent_of_start(self, rate_card):
        later = START + timedelta(days=3, hours=5)

        assert calculate_price(rate_card, later, later + timedelta(days=2)) == price_for(rate_card, timedelta(days=2))

    def test_invalid_interval_raises(self, rate_card):
        with pytest.raises(InvalidInterval):
            calculate_price(rate_card, START, START)


class TestDaylightSavingChange:
    BERLIN = ZoneInfo("Europe/Berlin")

    def test_duration_is_elapsed_time_across_spring_forward(self, rate_card):
        # 2026-03-29 02:00 local does not exist, so 24.5 wall hours are 23.5 real hours
        start = datetime(2026, 3, 28, 12, 0, tzinfo=self.BERLIN)
        end = datetime(2026, 3, 29, 12, 30, tzinfo=self.BERLIN)

        result = quote(rate_card, start, end)

        assert result.tier is PricingTier.HOURLY
        assert result.units == 24
        assert result.price == Money(Decimal("240"))

    def test_duration_is_elapsed_time_across_fall_back(self, rate_card):
        # 2026-10-25 has 25 hours in Berlin, so 23.5 wall hours are 24.5 real hours
        start = datetime(2026, 10, 25, 0, 0, tzinfo=self.BERLIN)
        end = datetime(2026, 10, 25, 23, 30, tzinfo=self.BERLIN)

        result = quote(rate_card, start, end)

        assert result.tier is PricingTier.DAILY
        assert result.units == 2

    def test_local_and_utc_inputs_price_the_same(self, rate_card):
        start = datetime(2026, 3, 28, 11, 0, tzinfo=timezone.utc)
        end = datetime(2026, 3, 29, 10, 30, tzinfo=timezone.utc)

        assert calculate_price(rate_card, start.astimezone(self.BERLIN), end.astimezone(self.BERLIN)) == \
            calculate_price(rate_card, start, end)


class TestRateCard:
    def test_negative_rate_is_rejected(self):
        with pytest.raises(InvalidArgument):
            make_rate_card(hourly_rate=Decimal("-1"))

    def test_float_rate_is_rejected(self):
        with pytest.raises(InvalidArgument):
            make_rate_card(daily_rate=60.0)

    def test_sub_cent_rate_is_rejected(self):
        with pytest.raises(InvalidArgument):
            make_rate_card(hourly_rate=Decimal("10.005"))

    def test_rates_are_kept_to_the_cent(self):
        card = make_rate_card(hourly_rate=Decimal("10"), daily_rate=Decimal("60.5"))

        assert str(card.hourly_rate) == "10.00"
        assert str(card.daily_rate) == "60.50"
