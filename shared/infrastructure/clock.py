"""Time helpers bridging Django's timezone settings and the pure domain."""

from __future__ import annotations

from datetime import datetime

from django.utils import timezone  # type: ignore


def to_local(moment: datetime) -> datetime:
    """
    Aware datetime in the configured TIME_ZONE.

    Naive values are taken to be expressed in TIME_ZONE already. Weekly
    availability windows are defined in local time, so intervals are
    normalized with this before they reach the availability engine.
    """
    if timezone.is_naive(moment):
        moment = timezone.make_aware(moment)
    return timezone.localtime(moment)
