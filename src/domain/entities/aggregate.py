"""
Aggregate building blocks.

Every aggregate embeds an AggregateMeta (identity, timestamps, event buffer)
instead of inheriting state from a base class. AggregateRoot only forwards
the common read surface to that embedded value.
"""

from dataclasses import dataclass, field
from datetime import datetime

from src.domain.events import DomainEvent, EventBuffer
from src.shared.clock import Clock
from src.shared.utils.generators import generate_cuid


@dataclass
class AggregateMeta:
    """Identity, timestamps and pending events of one aggregate instance"""

    id: str
    created_at: datetime
    updated_at: datetime
    events: EventBuffer = field(default_factory=EventBuffer, repr=False, compare=False)

    @classmethod
    def new(cls, clock: Clock) -> "AggregateMeta":
        now = clock.now()
        return cls(id=generate_cuid(), created_at=now, updated_at=now)

    def touch(self, clock: Clock) -> datetime:
        self.updated_at = clock.now()
        return self.updated_at

    def record(self, event: DomainEvent) -> None:
        self.events.record(event)


class AggregateRoot:
    """Read surface shared by all aggregates; state lives in ``self.meta``."""

    meta: AggregateMeta

    @property
    def id(self) -> str:
        return self.meta.id

    @property
    def created_at(self) -> datetime:
        return self.meta.created_at

    @property
    def updated_at(self) -> datetime:
        return self.meta.updated_at

    @property
    def pending_events(self) -> tuple[DomainEvent, ...]:
        return self.meta.events.pending

    def pull_events(self) -> list[DomainEvent]:
        """Drain queued events; call once after a successful save"""
        return self.meta.events.drain()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, self.__class__):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
