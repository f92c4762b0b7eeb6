"""
Booking Domain Entities

Core business entities for the booking domain:
- Booking: Aggregate representing the reservation of one screen for one interval
- BookingStatus: FSM states for booking lifecycle
- PaymentStatus: Payment state tracking, independent of the booking status
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import UUID, uuid4

from shared.domain.base import Aggregate, utcnow
from shared.domain.exceptions import InvalidArgument, InvalidTransition
from shared.domain.value_objects import Money, TimeRange


class BookingStatus(Enum):
    """
    Booking Status Finite State Machine

    State transitions:
    - PENDING -> CONFIRMED (screen owner accepted)
    - PENDING -> CANCELLED
    - CONFIRMED -> CONFIRMED (repeated confirmation is a no-op)
    - CONFIRMED -> CANCELLED
    - CONFIRMED -> COMPLETED (slot has been played out)
    """
    PENDING = 'pending'
    CONFIRMED = 'confirmed'
    CANCELLED = 'cancelled'
    COMPLETED = 'completed'

    @property
    def is_terminal(self) -> bool:
        return not ALLOWED_TRANSITIONS[self]

    @classmethod
    def parse(cls, value: 'BookingStatus | str') -> 'BookingStatus':
        return _parse_enum(cls, value, 'booking status')


class PaymentStatus(Enum):
    """Payment status tracking"""
    PENDING = 'pending'
    PAID = 'paid'
    REFUNDED = 'refunded'

    @classmethod
    def parse(cls, value: 'PaymentStatus | str') -> 'PaymentStatus':
        return _parse_enum(cls, value, 'payment status')


ALLOWED_TRANSITIONS: dict[BookingStatus, frozenset[BookingStatus]] = {
    BookingStatus.PENDING: frozenset({BookingStatus.CONFIRMED, BookingStatus.CANCELLED}),
    BookingStatus.CONFIRMED: frozenset({
        BookingStatus.CONFIRMED,
        BookingStatus.CANCELLED,
        BookingStatus.COMPLETED,
    }),
    BookingStatus.CANCELLED: frozenset(),
    BookingStatus.COMPLETED: frozenset(),
}


def _parse_enum(enum_cls, value, label):
    if isinstance(value, enum_cls):
        return value
    if not isinstance(value, str) or not value.strip():
        raise InvalidArgument(f"{label.capitalize()} cannot be empty")
    normalized = value.strip().lower()
    for member in enum_cls:
        if member.value == normalized:
            return member
    raise InvalidArgument(f"Invalid {label}: {value!r}")


def _require_id(value: UUID | None, name: str):
    if value is None or value.int == 0:
        raise InvalidArgument(f"{name} cannot be empty")


@dataclass(eq=False, kw_only=True)
class Booking(Aggregate):
    """
    Booking Aggregate Root

    Represents a campaign creative booked on a screen for a concrete interval.

    Key invariants:
    - period.start < period.end (enforced by TimeRange)
    - price is a non-negative Money (enforced by Money)
    - status only moves along ALLOWED_TRANSITIONS
    - only non-cancelled bookings block the screen
    """

    screen_id: UUID
    campaign_id: UUID
    creative_id: UUID
    period: TimeRange
    price: Money

    status: BookingStatus = BookingStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.PENDING
    payment_reference: str = ''

    confirmed_at: datetime | None = None
    cancelled_at: datetime | None = None
    completed_at: datetime | None = None
    cancellation_reason: str = ''

    def __post_init__(self):
        _require_id(self.screen_id, "Screen ID")
        _require_id(self.campaign_id, "Campaign ID")
        _require_id(self.creative_id, "Creative ID")

    @classmethod
    def create(
        cls,
        screen_id: UUID,
        campaign_id: UUID,
        creative_id: UUID,
        period: TimeRange,
        price: Money,
    ) -> 'Booking':
        """Create a new booking in pending/pending state. Events: BookingCreated"""
        booking = cls(
            id=uuid4(),
            screen_id=screen_id,
            campaign_id=campaign_id,
            creative_id=creative_id,
            period=period,
            price=price,
        )

        from apps.bookings.domain.events import BookingCreated

        booking.add_event(BookingCreated(
            aggregate_id=booking.id,
            booking_id=booking.id,
            screen_id=screen_id,
            campaign_id=campaign_id,
            period=period,
            price=price,
        ))
        return booking

    def _transition(self, target: BookingStatus) -> BookingStatus:
        if target not in ALLOWED_TRANSITIONS[self.status]:
            raise InvalidTransition(self.status.value, target.value)
        previous = self.status
        self.status = target
        self.touch()
        return previous

    def confirm(self):
        """
        Confirm booking (PENDING/CONFIRMED -> CONFIRMED)

        Events: BookingConfirmed (only on the first confirmation)
        """
        previous = self._transition(BookingStatus.CONFIRMED)
        if previous == BookingStatus.CONFIRMED:
            return

        from apps.bookings.domain.events import BookingConfirmed

        self.confirmed_at = self.updated_at
        self.add_event(BookingConfirmed(
            aggregate_id=self.id,
            booking_id=self.id,
            screen_id=self.screen_id,
            period=self.period,
        ))

    def cancel(self, reason: str = ''):
        """
        Cancel booking (PENDING/CONFIRMED -> CANCELLED)

        A cancelled booking no longer blocks the screen.
        Events: BookingCancelled
        """
        previous = self._transition(BookingStatus.CANCELLED)

        from apps.bookings.domain.events import BookingCancelled

        self.cancelled_at = self.updated_at
        self.cancellation_reason = reason
        self.add_event(BookingCancelled(
            aggregate_id=self.id,
            booking_id=self.id,
            screen_id=self.screen_id,
            reason=reason,
            old_status=previous.value,
        ))

    def complete(self):
        """
        Complete booking (CONFIRMED -> COMPLETED)

        Events: BookingCompleted
        """
        self._transition(BookingStatus.COMPLETED)

        from apps.bookings.domain.events import BookingCompleted

        self.completed_at = self.updated_at
        self.add_event(BookingCompleted(
            aggregate_id=self.id,
            booking_id=self.id,
            screen_id=self.screen_id,
        ))

    def set_payment_status(self, status: PaymentStatus | str, reference: str = ''):
        """
        Update payment status independently of the booking status

        A blank reference keeps the previously recorded one.
        Events: BookingPaymentStatusChanged
        """
        new_status = PaymentStatus.parse(status)

        from apps.bookings.domain.events import BookingPaymentStatusChanged

        old_status = self.payment_status
        self.payment_status = new_status
        if reference and reference.strip():
            self.payment_reference = reference.strip()
        self.touch()

        self.add_event(BookingPaymentStatusChanged(
            aggregate_id=self.id,
            booking_id=self.id,
            old_status=old_status.value,
            new_status=new_status.value,
            reference=self.payment_reference,
        ))

    def blocks_slot(self) -> bool:
        """Only non-cancelled bookings take part in overlap checks"""
        return self.status != BookingStatus.CANCELLED

    def overlaps(self, period: TimeRange) -> bool:
        return self.period.overlaps_with(period)

    def is_running(self, now: datetime | None = None) -> bool:
        """Check if a confirmed booking is on air at the given moment"""
        if self.status != BookingStatus.CONFIRMED:
            return False
        return self.period.contains(now or utcnow())

    @property
    def start_time(self) -> datetime:
        return self.period.start

    @property
    def end_time(self) -> datetime:
        return self.period.end

    def __str__(self):
        return f"Booking {self.id} ({self.status.value})"

    def __repr__(self):
        return (
            f"Booking(id={self.id}, screen_id={self.screen_id}, "
            f"status={self.status.value}, period={self.period!r})"
        )
