"""Django ORM repository for the Booking aggregate."""

from __future__ import annotations

from datetime import datetime
from typing import List
from uuid import UUID

from apps.bookings.domain.entities import Booking, BookingStatus, PaymentStatus
from apps.bookings.models import ScreenBooking
from shared.domain.value_objects import Money, TimeRange
from shared.infrastructure.db import lock_queryset_if_possible


def booking_from_model(row: ScreenBooking) -> Booking:
    """Rebuild the aggregate from its persisted row."""
    return Booking(
        id=row.id,
        created_at=row.created_at,
        updated_at=row.updated_at,
        screen_id=row.screen_id,
        campaign_id=row.campaign_id,
        creative_id=row.creative_id,
        period=TimeRange(row.start_time, row.end_time),
        price=Money(row.price, row.currency),
        status=BookingStatus(row.status),
        payment_status=PaymentStatus(row.payment_status),
        payment_reference=row.payment_reference,
        confirmed_at=row.confirmed_at,
        cancelled_at=row.cancelled_at,
        completed_at=row.completed_at,
        cancellation_reason=row.cancellation_reason,
    )


class DjangoBookingRepository:
    """Loads and stores Booking aggregates."""

    def get_by_id(self, booking_id: UUID, lock: bool = False) -> Booking | None:
        queryset = ScreenBooking.objects.filter(pk=booking_id)
        if lock:
            queryset = lock_queryset_if_possible(queryset)
        row = queryset.first()
        return booking_from_model(row) if row else None

    def save(self, booking: Booking) -> None:
        ScreenBooking.objects.update_or_create(
            pk=booking.id,
            defaults={
                "screen_id": booking.screen_id,
                "campaign_id": booking.campaign_id,
                "creative_id": booking.creative_id,
                "start_time": booking.period.start,
                "end_time": booking.period.end,
                "price": booking.price.amount,
                "currency": booking.price.currency,
                "status": booking.status.value,
                "payment_status": booking.payment_status.value,
                "payment_reference": booking.payment_reference,
                "cancellation_reason": booking.cancellation_reason,
                "confirmed_at": booking.confirmed_at,
                "cancelled_at": booking.cancelled_at,
                "completed_at": booking.completed_at,
                "created_at": booking.created_at,
                "updated_at": booking.updated_at,
            },
        )

    def list_for_screen(
        self,
        screen_id: UUID,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> List[Booking]:
        """Bookings of a screen overlapping the optional window, ordered by start."""
        queryset = ScreenBooking.objects.filter(screen_id=screen_id)
        if start is not None:
            queryset = queryset.filter(end_time__gt=start)
        if end is not None:
            queryset = queryset.filter(start_time__lt=end)
        return [booking_from_model(row) for row in queryset.order_by("start_time")]

    def list_for_campaign(self, campaign_id: UUID) -> List[Booking]:
        """Bookings of a campaign across all screens, ordered by start."""
        queryset = ScreenBooking.objects.filter(campaign_id=campaign_id)
        return [booking_from_model(row) for row in queryset.order_by("start_time", "created_at")]

    def list_blocking_for_screen(self, screen_id: UUID) -> List[Booking]:
        """Non-cancelled bookings, the ones taking part in overlap checks."""
        queryset = ScreenBooking.objects.filter(screen_id=screen_id).exclude(
            status=ScreenBooking.Status.CANCELLED
        )
        return [booking_from_model(row) for row in queryset.order_by("start_time")]

    def list_confirmed_ended_before(self, moment: datetime, limit: int = 100) -> List[UUID]:
        """Ids of confirmed bookings whose slot is over."""
        queryset = (
            ScreenBooking.objects.filter(
                status=ScreenBooking.Status.CONFIRMED,
                end_time__lte=moment,
            )
            .order_by("end_time")
            .values_list("id", flat=True)
        )
        return list(queryset[:limit])
