"""Django ORM repository for the Screen aggregate."""

from __future__ import annotations

from typing import List
from uuid import UUID

from apps.bookings.repositories import DjangoBookingRepository
from apps.screens.domain.entities import AvailabilityWindow, RateCard, Screen
from apps.screens.models import Screen as ScreenModel
from apps.screens.models import ScreenAvailability, ScreenPricing
from shared.infrastructure.db import lock_queryset_if_possible


def window_from_model(row: ScreenAvailability) -> AvailabilityWindow:
    return AvailabilityWindow(
        id=row.id,
        created_at=row.created_at,
        updated_at=row.created_at,
        screen_id=row.screen_id,
        day_of_week=row.day_of_week,
        start_time=row.start_time,
        end_time=row.end_time,
    )


def rate_card_from_model(row: ScreenPricing) -> RateCard:
    return RateCard(
        id=row.id,
        updated_at=row.updated_at,
        screen_id=row.screen_id,
        hourly_rate=row.hourly_rate,
        daily_rate=row.daily_rate,
        weekly_rate=row.weekly_rate,
        monthly_rate=row.monthly_rate,
        currency=row.currency,
        minimum_booking_fee=row.minimum_booking_fee,
    )


class DjangoScreenRepository:
    """
    Loads and stores Screen aggregates

    ``get_by_id(..., lock=True)`` takes the screen row with SELECT FOR UPDATE
    when called inside a transaction. Booking creation relies on it: every
    writer for the same screen queues on that row, so the availability check
    and the insert of the new booking happen as one step.
    """

    def __init__(self, booking_repo: DjangoBookingRepository | None = None):
        self.booking_repo = booking_repo or DjangoBookingRepository()

    def get_by_id(self, screen_id: UUID, lock: bool = False) -> Screen | None:
        queryset = ScreenModel.objects.filter(pk=screen_id)
        if lock:
            queryset = lock_queryset_if_possible(queryset)
        row = queryset.first()
        if row is None:
            return None
        return self._to_domain(row)

    def exists(self, screen_id: UUID) -> bool:
        return ScreenModel.objects.filter(pk=screen_id).exists()

    def get_rate_card(self, screen_id: UUID) -> RateCard | None:
        row = ScreenPricing.objects.filter(screen_id=screen_id).first()
        return rate_card_from_model(row) if row else None

    def get_availability_windows(self, screen_id: UUID) -> List[AvailabilityWindow]:
        rows = ScreenAvailability.objects.filter(screen_id=screen_id)
        return [window_from_model(row) for row in rows]

    def list_bookable(self) -> List[Screen]:
        """Active and verified screens, fully loaded."""
        rows = ScreenModel.objects.filter(is_active=True, is_verified=True)
        return [self._to_domain(row) for row in rows]

    def save(self, screen: Screen) -> None:
        """Persist flags, availability windows and rate card of the aggregate."""
        ScreenModel.objects.update_or_create(
            pk=screen.id,
            defaults={
                "owner_id": screen.owner_id,
                "name": screen.name,
                "screen_type": screen.screen_type,
                "city": screen.city,
                "is_active": screen.is_active,
                "is_verified": screen.is_verified,
            },
        )

        window_ids = [w.id for w in screen.availability_windows]
        ScreenAvailability.objects.filter(screen_id=screen.id).exclude(pk__in=window_ids).delete()
        for window in screen.availability_windows:
            ScreenAvailability.objects.update_or_create(
                pk=window.id,
                defaults={
                    "screen_id": screen.id,
                    "day_of_week": int(window.day_of_week),
                    "start_time": window.start_time,
                    "end_time": window.end_time,
                },
            )

        if screen.rate_card is not None:
            card = screen.rate_card
            ScreenPricing.objects.update_or_create(
                screen_id=screen.id,
                defaults={
                    "hourly_rate": card.hourly_rate,
                    "daily_rate": card.daily_rate,
                    "weekly_rate": card.weekly_rate,
                    "monthly_rate": card.monthly_rate,
                    "currency": card.currency,
                    "minimum_booking_fee": card.minimum_booking_fee,
                },
            )

    def _to_domain(self, row: ScreenModel) -> Screen:
        pricing = ScreenPricing.objects.filter(screen_id=row.id).first()
        return Screen(
            id=row.id,
            created_at=row.created_at,
            updated_at=row.updated_at,
            owner_id=row.owner_id,
            name=row.name,
            screen_type=row.screen_type,
            city=row.city,
            is_active=row.is_active,
            is_verified=row.is_verified,
            availability_windows=self.get_availability_windows(row.id),
            rate_card=rate_card_from_model(pricing) if pricing else None,
            bookings=self.booking_repo.list_blocking_for_screen(row.id),
        )
