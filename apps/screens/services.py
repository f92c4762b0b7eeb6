"""
Screen Service

Read and management operations on screens: availability checks, price
quotes, rate card and availability window maintenance, owner/admin flags
and screen search by free slot.

Booking writes go through the booking command handlers instead, which hold
the per-screen lock while checking and inserting.
"""

from __future__ import annotations

from datetime import datetime, time
from decimal import Decimal
from typing import List
from uuid import UUID

import structlog
from django.conf import settings  # type: ignore

from apps.bookings.domain.entities import Booking
from apps.bookings.repositories import DjangoBookingRepository
from apps.screens.domain import availability, pricing
from apps.screens.domain.entities import AvailabilityWindow, RateCard, Screen
from apps.screens.repositories import DjangoScreenRepository
from shared.application.uow import DjangoUnitOfWork
from shared.domain.exceptions import PricingNotConfigured, ScreenNotFound
from shared.domain.value_objects import Money, TimeRange
from shared.infrastructure.clock import to_local

logger = structlog.get_logger(__name__)


class ScreenService:
    def __init__(self, screen_repo: DjangoScreenRepository | None = None,
                 booking_repo: DjangoBookingRepository | None = None):
        self.booking_repo = booking_repo or DjangoBookingRepository()
        self.screen_repo = screen_repo or DjangoScreenRepository(self.booking_repo)

    # ===== Queries =====

    def is_screen_available(self, screen_id: UUID, start: datetime, end: datetime) -> bool:
        """
        Check whether the screen can take a booking for [start, end)

        An unknown screen is reported as unavailable.

        Raises:
            InvalidInterval: If start >= end
        """
        period = self._local_period(start, end)
        screen = self.screen_repo.get_by_id(screen_id)
        if screen is None:
            logger.info("screen.availability.unknown_screen", screen_id=str(screen_id))
            return False
        return availability.is_available(screen, period.start, period.end)

    def calculate_booking_price(self, screen_id: UUID, start: datetime, end: datetime) -> Money:
        return self.quote(screen_id, start, end).price

    def quote(self, screen_id: UUID, start: datetime, end: datetime) -> pricing.PriceQuote:
        """
        Price of [start, end) with the tier and unit count charged

        Raises:
            InvalidInterval: If start >= end
            ScreenNotFound: If the screen does not exist
            PricingNotConfigured: If the screen has no rate card
        """
        period = self._local_period(start, end)
        self._require_exists(screen_id)
        rate_card = self.screen_repo.get_rate_card(screen_id)
        if rate_card is None:
            raise PricingNotConfigured(screen_id)
        return pricing.quote(rate_card, period.start, period.end)

    def get_availability_windows(self, screen_id: UUID) -> List[AvailabilityWindow]:
        self._require_exists(screen_id)
        windows = self.screen_repo.get_availability_windows(screen_id)
        return sorted(windows, key=lambda w: (w.day_of_week, w.start_time))

    def get_screen_bookings(
        self,
        screen_id: UUID,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> List[Booking]:
        """Bookings of the screen, optionally limited to those overlapping [start, end)"""
        self._require_exists(screen_id)
        return self.booking_repo.list_for_screen(screen_id, start=start, end=end)

    def get_campaign_bookings(self, campaign_id: UUID) -> List[Booking]:
        """Bookings placed by a campaign on any screen, ordered by start; empty for an unknown campaign"""
        return self.booking_repo.list_for_campaign(campaign_id)

    def find_available_screens(self, start: datetime, end: datetime) -> List[Screen]:
        """Active and verified screens that can take a booking for [start, end)"""
        period = self._local_period(start, end)
        screens = [
            screen for screen in self.screen_repo.list_bookable()
            if availability.is_available(screen, period.start, period.end)
        ]
        logger.info(
            "screen.search.completed",
            start=period.start.isoformat(),
            end=period.end.isoformat(),
            matches=len(screens),
        )
        return screens

    # ===== Management =====

    def update_pricing(
        self,
        screen_id: UUID,
        hourly_rate: Decimal,
        daily_rate: Decimal,
        weekly_rate: Decimal,
        monthly_rate: Decimal,
        minimum_booking_fee: Decimal = Decimal('0'),
        currency: str | None = None,
    ) -> RateCard:
        """Create or replace the rate card of a screen"""
        with DjangoUnitOfWork():
            screen = self._require_screen(screen_id, lock=True)
            current = screen.rate_card
            rate_card = RateCard(
                screen_id=screen.id,
                hourly_rate=hourly_rate,
                daily_rate=daily_rate,
                weekly_rate=weekly_rate,
                monthly_rate=monthly_rate,
                minimum_booking_fee=minimum_booking_fee,
                currency=currency or (current.currency if current else settings.SIGNAGE_DEFAULT_CURRENCY),
            )
            if current is not None:
                rate_card.id = current.id
            screen.set_rate_card(rate_card)
            self.screen_repo.save(screen)

        logger.info("screen.pricing.updated", screen_id=str(screen_id), currency=rate_card.currency)
        return rate_card

    def add_availability_window(
        self,
        screen_id: UUID,
        day_of_week: int,
        start_time: time,
        end_time: time,
    ) -> AvailabilityWindow:
        with DjangoUnitOfWork():
            screen = self._require_screen(screen_id, lock=True)
            window = screen.add_availability_window(AvailabilityWindow(
                screen_id=screen.id,
                day_of_week=day_of_week,
                start_time=start_time,
                end_time=end_time,
            ))
            self.screen_repo.save(screen)

        logger.info("screen.window.added", screen_id=str(screen_id), window=str(window))
        return window

    def remove_availability_window(self, screen_id: UUID, window_id: UUID) -> None:
        """
        Raises:
            AvailabilityWindowNotFound: If the screen has no such window
        """
        with DjangoUnitOfWork():
            screen = self._require_screen(screen_id, lock=True)
            screen.remove_availability_window(window_id)
            self.screen_repo.save(screen)

        logger.info("screen.window.removed", screen_id=str(screen_id), window_id=str(window_id))

    def set_active_status(self, screen_id: UUID, is_active: bool) -> Screen:
        with DjangoUnitOfWork():
            screen = self._require_screen(screen_id, lock=True)
            screen.set_active_status(is_active)
            self.screen_repo.save(screen)

        logger.info("screen.active_status.changed", screen_id=str(screen_id), is_active=is_active)
        return screen

    def set_verification_status(self, screen_id: UUID, is_verified: bool) -> Screen:
        with DjangoUnitOfWork():
            screen = self._require_screen(screen_id, lock=True)
            screen.set_verification_status(is_verified)
            self.screen_repo.save(screen)

        logger.info("screen.verification.changed", screen_id=str(screen_id), is_verified=is_verified)
        return screen

    # ===== Helpers =====

    def _require_screen(self, screen_id: UUID, lock: bool = False) -> Screen:
        screen = self.screen_repo.get_by_id(screen_id, lock=lock)
        if screen is None:
            raise ScreenNotFound(screen_id)
        return screen

    def _require_exists(self, screen_id: UUID) -> None:
        if not self.screen_repo.exists(screen_id):
            raise ScreenNotFound(screen_id)

    @staticmethod
    def _local_period(start: datetime, end: datetime) -> TimeRange:
        # Naive values are read as TIME_ZONE, so naive and aware bounds can be mixed
        return TimeRange(to_local(start), to_local(end))
