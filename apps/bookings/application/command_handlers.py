"""
Booking Command Handlers

These are the use cases for the booking domain.
They orchestrate domain operations within transactions.

Commands:
- CreateBookingCommand: Book a screen slot for a campaign creative
- ConfirmBookingCommand: Screen owner accepts a booking
- CancelBookingCommand: Cancel a booking, freeing its slot
- CompleteBookingCommand: Mark a played-out booking as completed
- UpdateBookingStatusCommand: Apply one of the above from a status string
- UpdateBookingPaymentCommand: Record the payment status of a booking
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

import structlog

from apps.bookings.domain.entities import Booking
from apps.bookings.repositories import DjangoBookingRepository
from apps.screens.domain import availability, pricing
from apps.screens.repositories import DjangoScreenRepository
from shared.application.message_bus import MessageBus
from shared.application.uow import DjangoUnitOfWork
from shared.domain.exceptions import (
    BookingNotFound,
    InvalidArgument,
    PricingNotConfigured,
    ScreenNotFound,
    ScreenUnavailable,
)
from shared.domain.value_objects import TimeRange
from shared.infrastructure.clock import to_local

logger = structlog.get_logger(__name__)


# ===== Commands =====

@dataclass
class CreateBookingCommand:
    """
    Command to book a screen

    This is the primary entry point for creating bookings.
    """
    screen_id: UUID
    campaign_id: UUID
    creative_id: UUID
    start_time: datetime
    end_time: datetime


@dataclass
class ConfirmBookingCommand:
    booking_id: UUID


@dataclass
class CancelBookingCommand:
    booking_id: UUID
    reason: str = ''


@dataclass
class CompleteBookingCommand:
    booking_id: UUID


@dataclass
class UpdateBookingStatusCommand:
    """Status given as text: confirmed, cancelled or completed"""
    booking_id: UUID
    status: str


@dataclass
class UpdateBookingPaymentCommand:
    booking_id: UUID
    payment_status: str
    payment_reference: str = ''


# ===== Command Handlers =====

class CreateBookingHandler:
    """
    Handler for CreateBooking command

    Check and insert happen in one transaction:
    1. Start database transaction (atomic)
    2. Load the Screen aggregate with SELECT FOR UPDATE (per-screen lock)
    3. Run the availability engine against windows and current bookings
    4. Price the slot from the screen's rate card
    5. Create the Booking aggregate (pending/pending) and save it
    6. Commit, then publish BookingCreated

    Concurrent requests for the same screen wait on the lock taken in step 2
    and see the booking inserted by the winner when they get it.
    """

    def __init__(self, booking_repo=None, screen_repo=None, bus: MessageBus | None = None):
        self.booking_repo = booking_repo or DjangoBookingRepository()
        self.screen_repo = screen_repo or DjangoScreenRepository(self.booking_repo)
        self.bus = bus

    def handle(self, command: CreateBookingCommand) -> Booking:
        """
        Returns: Created Booking aggregate

        Raises:
            InvalidInterval: If start_time >= end_time
            ScreenNotFound: If the screen does not exist
            ScreenUnavailable: If the slot is outside the windows or taken
            PricingNotConfigured: If the screen has no rate card
        """
        period = TimeRange(to_local(command.start_time), to_local(command.end_time))
        log = logger.bind(screen_id=str(command.screen_id), campaign_id=str(command.campaign_id))
        log.info("booking.create.requested", start=period.start.isoformat(), end=period.end.isoformat())

        with DjangoUnitOfWork(self.bus) as uow:
            screen = self.screen_repo.get_by_id(command.screen_id, lock=True)
            if screen is None:
                raise ScreenNotFound(command.screen_id)

            if not availability.is_available(screen, period.start, period.end):
                log.info("booking.create.unavailable")
                raise ScreenUnavailable(command.screen_id, period)

            if screen.rate_card is None:
                raise PricingNotConfigured(command.screen_id)

            price = pricing.calculate_price(screen.rate_card, period.start, period.end)

            booking = Booking.create(
                screen_id=command.screen_id,
                campaign_id=command.campaign_id,
                creative_id=command.creative_id,
                period=period,
                price=price,
            )

            uow.collect_events(booking)
            self.booking_repo.save(booking)

        log.info("booking.created", booking_id=str(booking.id), price=str(price.amount), currency=price.currency)
        return booking


class _BookingCommandHandler:
    """Loads a booking under lock, applies one change and saves it"""

    def __init__(self, booking_repo=None, bus: MessageBus | None = None):
        self.booking_repo = booking_repo or DjangoBookingRepository()
        self.bus = bus

    def _apply(self, booking_id: UUID, change, event: str) -> Booking:
        with DjangoUnitOfWork(self.bus) as uow:
            booking = self.booking_repo.get_by_id(booking_id, lock=True)
            if booking is None:
                raise BookingNotFound(booking_id)

            change(booking)

            uow.collect_events(booking)
            self.booking_repo.save(booking)

        logger.info(
            event,
            booking_id=str(booking.id),
            status=booking.status.value,
            payment_status=booking.payment_status.value,
        )
        return booking


class ConfirmBookingHandler(_BookingCommandHandler):
    def handle(self, command: ConfirmBookingCommand) -> Booking:
        return self._apply(command.booking_id, lambda b: b.confirm(), "booking.confirmed")


class CancelBookingHandler(_BookingCommandHandler):
    def handle(self, command: CancelBookingCommand) -> Booking:
        return self._apply(command.booking_id, lambda b: b.cancel(command.reason), "booking.cancelled")


class CompleteBookingHandler(_BookingCommandHandler):
    def handle(self, command: CompleteBookingCommand) -> Booking:
        return self._apply(command.booking_id, lambda b: b.complete(), "booking.completed")


class UpdateBookingStatusHandler(_BookingCommandHandler):
    """Maps a status string onto the matching lifecycle transition"""

    TRANSITIONS = {
        'confirmed': lambda b: b.confirm(),
        'cancelled': lambda b: b.cancel(),
        'completed': lambda b: b.complete(),
    }

    def handle(self, command: UpdateBookingStatusCommand) -> Booking:
        key = (command.status or '').strip().lower()
        change = self.TRANSITIONS.get(key)
        if change is None:
            raise InvalidArgument(f"Invalid booking status: {command.status!r}")
        return self._apply(command.booking_id, change, f"booking.{key}")


class UpdateBookingPaymentHandler(_BookingCommandHandler):
    def handle(self, command: UpdateBookingPaymentCommand) -> Booking:
        return self._apply(
            command.booking_id,
            lambda b: b.set_payment_status(command.payment_status, command.payment_reference),
            "booking.payment_updated",
        )


def register_handlers(bus: MessageBus, booking_repo=None, screen_repo=None) -> None:
    """Wire every booking command to its handler on the given bus"""
    booking_repo = booking_repo or DjangoBookingRepository()
    screen_repo = screen_repo or DjangoScreenRepository(booking_repo)

    handlers = {
        CreateBookingCommand: CreateBookingHandler(booking_repo, screen_repo, bus),
        ConfirmBookingCommand: ConfirmBookingHandler(booking_repo, bus),
        CancelBookingCommand: CancelBookingHandler(booking_repo, bus),
        CompleteBookingCommand: CompleteBookingHandler(booking_repo, bus),
        UpdateBookingStatusCommand: UpdateBookingStatusHandler(booking_repo, bus),
        UpdateBookingPaymentCommand: UpdateBookingPaymentHandler(booking_repo, bus),
    }
    for command_type, handler in handlers.items():
        bus.register_command_handler(command_type, handler.handle)
