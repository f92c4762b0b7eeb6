"""
Booking Event Handlers

Subscribers for booking domain events. They run after the transaction that
produced the event has committed and write one structured audit line each.
"""

import structlog

from apps.bookings.domain.events import (
    BookingCancelled,
    BookingCompleted,
    BookingConfirmed,
    BookingCreated,
    BookingPaymentStatusChanged,
)
from shared.application.message_bus import MessageBus

audit_logger = structlog.get_logger("bookings.audit")


def log_booking_created(event: BookingCreated):
    audit_logger.info("booking_created", **event.to_dict())


def log_booking_confirmed(event: BookingConfirmed):
    audit_logger.info(
        "booking_confirmed",
        booking_id=str(event.booking_id),
        screen_id=str(event.screen_id),
        start_time=event.period.start.isoformat(),
        end_time=event.period.end.isoformat(),
    )


def log_booking_cancelled(event: BookingCancelled):
    audit_logger.info(
        "booking_cancelled",
        booking_id=str(event.booking_id),
        screen_id=str(event.screen_id),
        old_status=event.old_status,
        reason=event.reason,
    )


def log_booking_completed(event: BookingCompleted):
    audit_logger.info(
        "booking_completed",
        booking_id=str(event.booking_id),
        screen_id=str(event.screen_id),
    )


def log_payment_status_changed(event: BookingPaymentStatusChanged):
    audit_logger.info(
        "booking_payment_status_changed",
        booking_id=str(event.booking_id),
        old_status=event.old_status,
        new_status=event.new_status,
        reference=event.reference,
    )


EVENT_HANDLERS = {
    BookingCreated: [log_booking_created],
    BookingConfirmed: [log_booking_confirmed],
    BookingCancelled: [log_booking_cancelled],
    BookingCompleted: [log_booking_completed],
    BookingPaymentStatusChanged: [log_payment_status_changed],
}


def register(bus: MessageBus):
    for event_type, handlers in EVENT_HANDLERS.items():
        for handler in handlers:
            bus.register_event_handler(event_type, handler)
