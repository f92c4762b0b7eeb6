"""Celery tasks for the booking domain."""

from __future__ import annotations

import structlog
from celery import shared_task  # type: ignore
from django.conf import settings  # type: ignore
from django.utils import timezone  # type: ignore

from apps.bookings.application.command_handlers import CompleteBookingCommand, CompleteBookingHandler
from apps.bookings.repositories import DjangoBookingRepository
from shared.domain.exceptions import DomainError

logger = structlog.get_logger(__name__)


# ============================================================================
# PERIODIC TASKS (run by Celery Beat)
# ============================================================================

@shared_task(name="bookings.complete_finished_bookings")
def complete_finished_bookings() -> dict[str, int]:
    """
    Complete confirmed bookings whose slot is over.

    Each booking is completed in its own transaction; one that changed state
    in the meantime is skipped. At most SIGNAGE_COMPLETION_BATCH_SIZE bookings
    are handled per run, the next run picks up the rest.

    Returns:
        dict: {"completed": number of completed bookings, "skipped": ...}
    """
    now = timezone.now()
    repo = DjangoBookingRepository()
    handler = CompleteBookingHandler(repo)
    limit = getattr(settings, "SIGNAGE_COMPLETION_BATCH_SIZE", 100)

    completed = 0
    skipped = 0
    for booking_id in repo.list_confirmed_ended_before(now, limit=limit):
        try:
            handler.handle(CompleteBookingCommand(booking_id=booking_id))
            completed += 1
        except DomainError as exc:
            skipped += 1
            logger.warning("booking.complete.skipped", booking_id=str(booking_id), error=str(exc))

    if completed:
        logger.info("bookings.completed_finished", completed=completed, skipped=skipped)

    return {"completed": completed, "skipped": skipped}
