"""Shared plumbing for command handlers."""

from src.application.interfaces.events import IDomainEventPublisher
from src.domain.entities import AggregateRoot
from src.shared.clock import Clock, system_clock
from src.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class AggregateCommandHandler:
    """
    Base for write-side handlers.

    Subclasses load, mutate and save an aggregate, then call ``_publish``
    exactly once so the buffer is drained only after a successful save.
    """

    def __init__(self, publisher: IDomainEventPublisher, clock: Clock = system_clock) -> None:
        self.publisher = publisher
        self.clock = clock

    async def _publish(self, aggregate: AggregateRoot) -> None:
        events = aggregate.pull_events()
        if not events:
            return
        logger.debug(
            f"Publishing {len(events)} event(s) for {type(aggregate).__name__} {aggregate.id}"
        )
        await self.publisher.publish(events)
