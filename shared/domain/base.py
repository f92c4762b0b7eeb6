"""
Domain primitives shared by the screen and booking contexts.

Screens, rate cards, windows and bookings are identified by a UUID and
carry UTC audit timestamps. Screens and bookings are aggregate roots: a
state change records an event on the aggregate, and the unit of work hands
the recorded events to the message bus once the transaction has committed.

Concrete entities are declared with ``@dataclass(eq=False, kw_only=True)``,
which keeps the id-based ``__eq__``/``__hash__`` below and lets required
fields follow the defaulted ``id``/``created_at``/``updated_at``.
"""

from abc import ABC
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List
from uuid import UUID, uuid4


def utcnow() -> datetime:
    """Aware UTC "now" for entity and event timestamps"""
    return datetime.now(timezone.utc)


@dataclass
class Entity(ABC):
    """Mutable domain object compared by id only"""
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def __eq__(self, other):
        if not isinstance(other, self.__class__):
            return False
        return self.id == other.id

    def __hash__(self):
        return hash(self.id)

    def touch(self):
        self.updated_at = utcnow()


@dataclass(frozen=True)
class ValueObject(ABC):
    """Frozen, id-less value such as Money or TimeRange; equal when all fields are"""
    pass


@dataclass(eq=False)
class Aggregate(Entity):
    """
    Root entity that records what happened to it

    Events stay pending on the aggregate until the unit of work collects them.
    A rolled back transaction never publishes them.
    """
    _events: List['DomainEvent'] = field(default_factory=list, repr=False, init=False)

    def add_event(self, event: 'DomainEvent'):
        self._events.append(event)

    def clear_events(self):
        self._events.clear()

    @property
    def events(self) -> List['DomainEvent']:
        """Pending events, oldest first; mutating the list leaves the aggregate alone"""
        return self._events.copy()


@dataclass(kw_only=True)
class DomainEvent:
    """
    Fact about an aggregate, delivered to event handlers after commit

    ``to_dict`` gives the flat payload written to the audit log; subclasses
    extend it with their own fields.
    """
    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=utcnow)
    aggregate_id: UUID | None = None

    def to_dict(self) -> dict:
        return {
            'event_type': type(self).__name__,
            'event_id': str(self.event_id),
            'aggregate_id': str(self.aggregate_id) if self.aggregate_id else None,
            'occurred_at': self.occurred_at.isoformat(),
        }
