"""
Domain events.

Events are immutable facts about a completed state change. Aggregates queue
them in an EventBuffer; a handler drains the buffer with ``pull_events()``
after a successful save and hands the batch to a publisher.
"""

from dataclasses import dataclass, field, fields, is_dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any

from src.shared.utils.generators import generate_cuid


def _to_primitive(value: Any) -> Any:
    """Convert event payload values to JSON-friendly primitives"""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: _to_primitive(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, dict):
        return {str(k): _to_primitive(v) for k, v in value.items()}
    if isinstance(value, (frozenset, set)):
        return sorted(_to_primitive(v) for v in value)
    if isinstance(value, (list, tuple)):
        return [_to_primitive(v) for v in value]
    return value


@dataclass(frozen=True, kw_only=True)
class DomainEvent:
    """
    Base class for domain events.

    Attributes:
        aggregate_id: ID of the aggregate that changed
        tenant_id: Owning tenant (for a Tenant aggregate, its own id)
        occurred_at: When the change happened (taken from the injected clock)
        event_id: Unique event identifier
    """

    aggregate_id: str
    tenant_id: str
    occurred_at: datetime
    event_id: str = field(default_factory=generate_cuid)

    @property
    def event_type(self) -> str:
        return type(self).__name__

    def payload(self) -> dict[str, Any]:
        """Event-specific fields, without the envelope"""
        envelope = {"aggregate_id", "tenant_id", "occurred_at", "event_id"}
        return {
            f.name: _to_primitive(getattr(self, f.name))
            for f in fields(self)
            if f.name not in envelope
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "event_id": self.event_id,
            "event_type": self.event_type,
            "aggregate_id": self.aggregate_id,
            "tenant_id": self.tenant_id,
            "occurred_at": self.occurred_at.isoformat(),
            "payload": self.payload(),
        }


class EventBuffer:
    """Append-only, ordered queue of events owned by one aggregate instance."""

    def __init__(self) -> None:
        self._events: list[DomainEvent] = []

    def record(self, event: DomainEvent) -> None:
        self._events.append(event)

    @property
    def pending(self) -> tuple[DomainEvent, ...]:
        return tuple(self._events)

    def drain(self) -> list[DomainEvent]:
        """Take and clear"""
        drained, self._events = self._events, []
        return drained

    def __len__(self) -> int:
        return len(self._events)


# Tenant events


@dataclass(frozen=True, kw_only=True)
class TenantCreated(DomainEvent):
    name: str
    email: str
    plan_id: str


@dataclass(frozen=True, kw_only=True)
class TenantStatusChanged(DomainEvent):
    old_status: str
    new_status: str
    reason: str | None = None


@dataclass(frozen=True, kw_only=True)
class TenantSubscriptionUpdated(DomainEvent):
    old_plan_id: str
    new_plan_id: str
    new_end_date: datetime | None = None


# Marketing events


@dataclass(frozen=True, kw_only=True)
class CampaignCreated(DomainEvent):
    name: str
    campaign_type: str


@dataclass(frozen=True, kw_only=True)
class CampaignLaunched(DomainEvent):
    target_count: int
    channel: str


@dataclass(frozen=True, kw_only=True)
class CampaignCompleted(DomainEvent):
    total_sent: int
    delivered: int
    opened: int
    clicked: int
    converted: int


# Reporting events


@dataclass(frozen=True, kw_only=True)
class ReportGenerated(DomainEvent):
    report_type: str
    date_range_start: datetime | None = None
    date_range_end: datetime | None = None
    next_run_at: datetime | None = None


@dataclass(frozen=True, kw_only=True)
class DashboardCreated(DomainEvent):
    name: str
    widget_ids: tuple[str, ...] = ()
