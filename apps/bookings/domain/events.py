"""
Booking Domain Events

Events that represent things that have happened in the booking domain.
These are published after successful transaction commits.
"""

from dataclasses import dataclass
from uuid import UUID

from shared.domain.base import DomainEvent
from shared.domain.value_objects import Money, TimeRange


@dataclass(kw_only=True)
class BookingCreated(DomainEvent):
    """
    Event: A new booking was created (pending/pending)

    Triggers:
    - Notify the screen owner that a request is waiting
    """
    booking_id: UUID
    screen_id: UUID
    campaign_id: UUID
    period: TimeRange
    price: Money

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.update({
            'booking_id': str(self.booking_id),
            'screen_id': str(self.screen_id),
            'campaign_id': str(self.campaign_id),
            'start_time': self.period.start.isoformat(),
            'end_time': self.period.end.isoformat(),
            'price': str(self.price.amount),
            'currency': self.price.currency,
        })
        return data


@dataclass(kw_only=True)
class BookingConfirmed(DomainEvent):
    """Event: Screen owner confirmed the booking (PENDING -> CONFIRMED)"""
    booking_id: UUID
    screen_id: UUID
    period: TimeRange


@dataclass(kw_only=True)
class BookingCancelled(DomainEvent):
    """
    Event: Booking was cancelled

    The slot is free again for new requests.
    """
    booking_id: UUID
    screen_id: UUID
    reason: str
    old_status: str


@dataclass(kw_only=True)
class BookingCompleted(DomainEvent):
    """Event: Booking was played out (CONFIRMED -> COMPLETED)"""
    booking_id: UUID
    screen_id: UUID


@dataclass(kw_only=True)
class BookingPaymentStatusChanged(DomainEvent):
    """Event: Payment status changed"""
    booking_id: UUID
    old_status: str
    new_status: str
    reference: str
