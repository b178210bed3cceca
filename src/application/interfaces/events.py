"""Domain event publishing port."""

from collections.abc import Sequence
from typing import Protocol

from src.domain.events import DomainEvent


class IDomainEventPublisher(Protocol):
    """Receives the events drained from an aggregate after a successful save"""

    async def publish(self, events: Sequence[DomainEvent]) -> None:
        """Deliver events in order"""
        ...
