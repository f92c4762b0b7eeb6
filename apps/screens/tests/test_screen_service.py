"""Database-backed tests for ScreenService."""

from __future__ import annotations

from datetime import datetime, time, timedelta, timezone
from decimal import Decimal
from uuid import uuid4

from django.test import TestCase, override_settings

from apps.bookings.repositories import DjangoBookingRepository
from apps.screens.domain.entities import DayOfWeek
from apps.screens.domain.pricing import PricingTier
from apps.screens.models import ScreenAvailability, ScreenPricing
from apps.screens.repositories import DjangoScreenRepository
from apps.screens.services import ScreenService
from apps.screens.tests.factories import make_booking, make_screen
from shared.domain.exceptions import (
    AvailabilityWindowNotFound,
    InvalidArgument,
    InvalidInterval,
    PricingNotConfigured,
    ScreenNotFound,
)
from shared.domain.value_objects import Money

# 2025-01-06 is a Monday
MONDAY = datetime(2025, 1, 6, tzinfo=timezone.utc)


def at(hour, minute=0, days=0):
    return MONDAY + timedelta(days=days, hours=hour, minutes=minute)


class ScreenServiceTestCase(TestCase):
    def setUp(self) -> None:
        self.service = ScreenService()
        self.screen = make_screen(name="Airport arrivals")
        DjangoScreenRepository().save(self.screen)
        self.window = self.service.add_availability_window(
            self.screen.id, DayOfWeek.MONDAY, time(9, 0), time(17, 0)
        )


class AvailabilityQueryTests(ScreenServiceTestCase):
    def test_available_inside_window(self) -> None:
        self.assertTrue(self.service.is_screen_available(self.screen.id, at(10), at(12)))

    def test_unavailable_outside_window(self) -> None:
        self.assertFalse(self.service.is_screen_available(self.screen.id, at(8), at(10)))

    def test_unknown_screen_is_unavailable(self) -> None:
        self.assertFalse(self.service.is_screen_available(uuid4(), at(10), at(12)))

    def test_malformed_interval_raises(self) -> None:
        with self.assertRaises(InvalidInterval):
            self.service.is_screen_available(self.screen.id, at(12), at(10))

    def test_existing_booking_blocks_the_slot(self) -> None:
        DjangoBookingRepository().save(make_booking(self.screen.id, at(10), at(11)))

        self.assertFalse(self.service.is_screen_available(self.screen.id, at(10, 30), at(11, 30)))
        self.assertTrue(self.service.is_screen_available(self.screen.id, at(11), at(12)))

    def test_naive_and_aware_bounds_can_be_mixed(self) -> None:
        naive_start = at(10).replace(tzinfo=None)

        self.assertTrue(self.service.is_screen_available(self.screen.id, naive_start, at(12)))
        self.assertEqual(
            [s.id for s in self.service.find_available_screens(naive_start, at(12))],
            [self.screen.id],
        )

    @override_settings(TIME_ZONE="Asia/Tokyo")
    def test_naive_bound_is_read_in_local_time(self) -> None:
        # naive 10:00 Tokyo is 01:00 UTC, after the aware 00:30 UTC end
        with self.assertRaises(InvalidInterval):
            self.service.is_screen_available(self.screen.id, at(10).replace(tzinfo=None), at(0, 30))

    @override_settings(TIME_ZONE="Asia/Tokyo")
    def test_windows_are_read_in_local_time(self) -> None:
        # 00:00-02:00 UTC is 09:00-11:00 in Tokyo (UTC+9)
        self.assertTrue(self.service.is_screen_available(self.screen.id, at(0), at(2)))
        self.assertFalse(self.service.is_screen_available(self.screen.id, at(10), at(12, 30)))

    def test_deactivated_screen_is_unavailable(self) -> None:
        self.service.set_active_status(self.screen.id, False)

        self.assertFalse(self.service.is_screen_available(self.screen.id, at(10), at(12)))

        self.service.set_active_status(self.screen.id, True)
        self.assertTrue(self.service.is_screen_available(self.screen.id, at(10), at(12)))

    def test_find_available_screens(self) -> None:
        busy = make_screen(name="Mall atrium")
        DjangoScreenRepository().save(busy)
        self.service.add_availability_window(busy.id, DayOfWeek.MONDAY, time(9, 0), time(17, 0))
        DjangoBookingRepository().save(make_booking(busy.id, at(10), at(11)))

        unverified = make_screen(name="Station hall", is_verified=False)
        DjangoScreenRepository().save(unverified)
        self.service.add_availability_window(unverified.id, DayOfWeek.MONDAY, time(9, 0), time(17, 0))

        found = self.service.find_available_screens(at(10), at(12))

        self.assertEqual([s.id for s in found], [self.screen.id])

    def test_get_screen_bookings_filters_by_period(self) -> None:
        repo = DjangoBookingRepository()
        early = make_booking(self.screen.id, at(9), at(10))
        late = make_booking(self.screen.id, at(15), at(16))
        repo.save(late)
        repo.save(early)

        self.assertEqual([b.id for b in self.service.get_screen_bookings(self.screen.id)], [early.id, late.id])
        self.assertEqual(
            [b.id for b in self.service.get_screen_bookings(self.screen.id, start=at(12), end=at(18))],
            [late.id],
        )

    def test_get_screen_bookings_of_unknown_screen(self) -> None:
        with self.assertRaises(ScreenNotFound):
            self.service.get_screen_bookings(uuid4())

    def test_get_campaign_bookings_across_screens(self) -> None:
        repo = DjangoBookingRepository()
        other_screen = make_screen(name="Mall atrium")
        DjangoScreenRepository().save(other_screen)
        campaign_id = uuid4()
        later = make_booking(self.screen.id, at(9, days=7), at(10, days=7), campaign_id=campaign_id)
        earlier = make_booking(other_screen.id, at(11), at(12), campaign_id=campaign_id)
        unrelated = make_booking(self.screen.id, at(9), at(10))
        for booking in (later, unrelated, earlier):
            repo.save(booking)

        found = self.service.get_campaign_bookings(campaign_id)

        self.assertEqual([b.id for b in found], [earlier.id, later.id])
        self.assertTrue(all(b.campaign_id == campaign_id for b in found))

    def test_get_campaign_bookings_of_unknown_campaign(self) -> None:
        self.assertEqual(self.service.get_campaign_bookings(uuid4()), [])


class PricingTests(ScreenServiceTestCase):
    def set_rates(self, **overrides):
        rates = {
            "hourly_rate": Decimal("10.00"),
            "daily_rate": Decimal("60.00"),
            "weekly_rate": Decimal("300.00"),
            "monthly_rate": Decimal("1000.00"),
            "minimum_booking_fee": Decimal("25.00"),
        }
        rates.update(overrides)
        return self.service.update_pricing(self.screen.id, **rates)

    def test_price_requires_rate_card(self) -> None:
        with self.assertRaises(PricingNotConfigured):
            self.service.calculate_booking_price(self.screen.id, at(10), at(12))

    def test_price_of_unknown_screen(self) -> None:
        with self.assertRaises(ScreenNotFound):
            self.service.calculate_booking_price(uuid4(), at(10), at(12))

    def test_quote(self) -> None:
        self.set_rates()

        result = self.service.quote(self.screen.id, at(0), at(0, days=10))

        self.assertEqual(result.tier, PricingTier.WEEKLY)
        self.assertEqual(result.units, 2)
        self.assertEqual(result.price, Money(Decimal("600")))

    def test_quote_with_naive_and_aware_bounds(self) -> None:
        self.set_rates()

        result = self.service.quote(self.screen.id, at(10).replace(tzinfo=None), at(15))

        self.assertEqual(result.units, 5)
        self.assertEqual(result.price, Money(Decimal("50")))

    def test_update_pricing_replaces_rate_card(self) -> None:
        self.set_rates()
        self.set_rates(hourly_rate=Decimal("40.00"))

        self.assertEqual(ScreenPricing.objects.filter(screen_id=self.screen.id).count(), 1)
        price = self.service.calculate_booking_price(self.screen.id, at(10), at(12))
        self.assertEqual(price, Money(Decimal("80")))

    def test_new_rate_card_uses_default_currency(self) -> None:
        with self.settings(SIGNAGE_DEFAULT_CURRENCY="EUR"):
            card = self.set_rates()

        self.assertEqual(card.currency, "EUR")
        self.assertEqual(self.service.calculate_booking_price(self.screen.id, at(10), at(12)).currency, "EUR")

    def test_negative_rate_is_rejected(self) -> None:
        with self.assertRaises(InvalidArgument):
            self.set_rates(daily_rate=Decimal("-1"))

        self.assertFalse(ScreenPricing.objects.filter(screen_id=self.screen.id).exists())

    def test_sub_cent_rate_is_rejected(self) -> None:
        with self.assertRaises(InvalidArgument):
            self.set_rates(hourly_rate=Decimal("10.005"))

        self.assertFalse(ScreenPricing.objects.filter(screen_id=self.screen.id).exists())

    def test_returned_rate_card_matches_stored_one(self) -> None:
        card = self.set_rates(hourly_rate=Decimal("12.5"), minimum_booking_fee=Decimal("0"))

        stored = DjangoScreenRepository().get_rate_card(self.screen.id)
        self.assertEqual(
            [str(getattr(card, name)) for name in card.RATE_FIELDS],
            [str(getattr(stored, name)) for name in stored.RATE_FIELDS],
        )


class WindowManagementTests(ScreenServiceTestCase):
    def test_windows_are_listed_by_day_and_time(self) -> None:
        sunday = self.service.add_availability_window(self.screen.id, DayOfWeek.SUNDAY, time(10, 0), time(12, 0))
        early = self.service.add_availability_window(self.screen.id, DayOfWeek.MONDAY, time(6, 0), time(8, 0))

        windows = self.service.get_availability_windows(self.screen.id)

        self.assertEqual([w.id for w in windows], [early.id, self.window.id, sunday.id])

    def test_invalid_window_is_rejected(self) -> None:
        with self.assertRaises(InvalidArgument):
            self.service.add_availability_window(self.screen.id, DayOfWeek.MONDAY, time(12, 0), time(10, 0))
        with self.assertRaises(InvalidArgument):
            self.service.add_availability_window(self.screen.id, 7, time(10, 0), time(12, 0))

    def test_remove_window(self) -> None:
        self.service.remove_availability_window(self.screen.id, self.window.id)

        self.assertFalse(ScreenAvailability.objects.filter(pk=self.window.id).exists())
        self.assertFalse(self.service.is_screen_available(self.screen.id, at(10), at(12)))

    def test_remove_unknown_window(self) -> None:
        with self.assertRaises(AvailabilityWindowNotFound):
            self.service.remove_availability_window(self.screen.id, uuid4())

    def test_window_of_unknown_screen(self) -> None:
        with self.assertRaises(ScreenNotFound):
            self.service.add_availability_window(uuid4(), DayOfWeek.MONDAY, time(9, 0), time(10, 0))

    def test_unverified_screen_becomes_bookable_after_verification(self) -> None:
        self.service.set_verification_status(self.screen.id, False)
        self.assertFalse(self.service.is_screen_available(self.screen.id, at(10), at(12)))

        self.service.set_verification_status(self.screen.id, True)
        self.assertTrue(self.service.is_screen_available(self.screen.id, at(10), at(12)))
