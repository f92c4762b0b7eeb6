"""Screen persistence models (availability template and rate card)."""

from __future__ import annotations

import uuid
from decimal import Decimal

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Screen(models.Model):
    """Bookable display surface owned by a screen-owner account."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    owner_id = models.UUIDField(db_index=True)
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    screen_type = models.CharField(
        max_length=50,
        blank=True,
        help_text=_("Digital, LED, Billboard, ..."),
    )
    city = models.CharField(max_length=120, blank=True)
    is_active = models.BooleanField(default=True)
    is_verified = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Screen")
        verbose_name_plural = _("Screens")
        ordering = ["name"]
        indexes = [
            models.Index(fields=["is_active", "is_verified"], name="screen_active_verified_idx"),
        ]

    def __str__(self) -> str:
        return self.name


class ScreenAvailability(models.Model):
    """Recurring weekly window during which the screen accepts bookings."""

    class DayOfWeek(models.IntegerChoices):
        MONDAY = 0, _("Monday")
        TUESDAY = 1, _("Tuesday")
        WEDNESDAY = 2, _("Wednesday")
        THURSDAY = 3, _("Thursday")
        FRIDAY = 4, _("Friday")
        SATURDAY = 5, _("Saturday")
        SUNDAY = 6, _("Sunday")

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    screen = models.ForeignKey(
        Screen,
        on_delete=models.CASCADE,
        related_name="availability_windows",
    )
    day_of_week = models.PositiveSmallIntegerField(choices=DayOfWeek.choices)
    start_time = models.TimeField()
    end_time = models.TimeField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Screen availability window")
        verbose_name_plural = _("Screen availability windows")
        ordering = ["day_of_week", "start_time"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(end_time__gt=models.F("start_time")),
                name="screen_availability_valid_times",
            ),
        ]
        indexes = [
            models.Index(fields=["screen", "day_of_week"], name="screen_avail_day_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.get_day_of_week_display()} {self.start_time}-{self.end_time}"


def _default_currency() -> str:
    return getattr(settings, "SIGNAGE_DEFAULT_CURRENCY", "USD")


class ScreenPricing(models.Model):
    """Rate card of a screen."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    screen = models.OneToOneField(
        Screen,
        on_delete=models.CASCADE,
        related_name="pricing",
    )
    hourly_rate = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    daily_rate = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    weekly_rate = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    monthly_rate = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    currency = models.CharField(max_length=3, default=_default_currency)
    minimum_booking_fee = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text=_("Floor applied to bookings shorter than one day."),
    )
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Screen pricing")
        verbose_name_plural = _("Screen pricing")
        constraints = [
            models.CheckConstraint(
                condition=(
                    models.Q(hourly_rate__gte=0)
                    & models.Q(daily_rate__gte=0)
                    & models.Q(weekly_rate__gte=0)
                    & models.Q(monthly_rate__gte=0)
                    & models.Q(minimum_booking_fee__gte=0)
                ),
                name="screen_pricing_non_negative",
            ),
        ]

    def __str__(self) -> str:
        return f"Pricing for {self.screen_id} ({self.currency})"
