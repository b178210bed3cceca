"""
Campaign aggregate (marketing bounded context).

State machine:

    DRAFT -> SCHEDULED -> SENDING -> COMPLETED
                          SENDING <-> PAUSED
    DRAFT | SCHEDULED | SENDING | PAUSED -> CANCELLED

Template and segment are editable only in DRAFT. Metrics never decrease.
"""

import json
import re
from collections.abc import Collection
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any

from src.domain.entities.aggregate import AggregateMeta, AggregateRoot
from src.domain.enums import CampaignStatus, CampaignType, MessageChannel
from src.domain.events import (CampaignCompleted, CampaignCreated,
                               CampaignLaunched)
from src.domain.exceptions import (InvariantViolationException,
                                   ValidationException)
from src.domain.value_objects import CampaignMetrics, Segment
from src.shared.clock import Clock

PLACEHOLDER_PATTERN = re.compile(r"\{\{([^}]+)\}\}")

_CANCELLABLE = frozenset(
    {
        CampaignStatus.DRAFT,
        CampaignStatus.SCHEDULED,
        CampaignStatus.SENDING,
        CampaignStatus.PAUSED,
    }
)


def template_variables(template: str) -> list[str]:
    """Placeholder names in order of first appearance"""
    seen: dict[str, None] = {}
    for match in PLACEHOLDER_PATTERN.finditer(template or ""):
        seen.setdefault(match.group(1).strip(), None)
    return list(seen)


def _render_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list, tuple)):
        return json.dumps(value, separators=(",", ":"), default=str)
    return str(value)


def _require_text(value: str | None, message: str, field_name: str) -> str:
    if value is None or not value.strip():
        raise ValidationException(message, field_name)
    return value.strip()


@dataclass(eq=False)
class Campaign(AggregateRoot):
    """Marketing campaign owned by exactly one tenant"""

    meta: AggregateMeta
    tenant_id: str
    name: str
    campaign_type: CampaignType
    target_segment: Segment
    template: str
    channel: MessageChannel
    status: CampaignStatus = CampaignStatus.DRAFT
    description: str | None = None
    variables: dict[str, Any] = field(default_factory=dict)
    scheduled_at: datetime | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    metrics: CampaignMetrics = field(default_factory=CampaignMetrics)

    @classmethod
    def create(
        cls,
        *,
        tenant_id: str,
        name: str,
        campaign_type: CampaignType,
        target_segment: Segment,
        template: str,
        channel: MessageChannel,
        clock: Clock,
        description: str | None = None,
        variables: dict[str, Any] | None = None,
        scheduled_at: datetime | None = None,
    ) -> "Campaign":
        """
        Create a DRAFT campaign.

        Raises:
            ValidationException: empty name/template, empty segment,
                or scheduled_at not in the future
        """
        name = _require_text(name, "Campaign name is required", "name")
        template = _require_text(template, "Campaign template is required", "template")
        if target_segment is None or not target_segment.conditions:
            raise ValidationException(
                "Target segment must have at least one condition", "target_segment"
            )
        now = clock.now()
        if scheduled_at is not None and scheduled_at <= now:
            raise ValidationException("Scheduled time must be in the future", "scheduled_at")

        meta = AggregateMeta.new(clock)
        campaign = cls(
            meta=meta,
            tenant_id=tenant_id,
            name=name,
            description=description.strip() if description and description.strip() else None,
            campaign_type=CampaignType(campaign_type),
            target_segment=target_segment,
            template=template,
            variables=dict(variables or {}),
            channel=MessageChannel(channel),
            scheduled_at=scheduled_at,
        )
        meta.record(
            CampaignCreated(
                aggregate_id=campaign.id,
                tenant_id=tenant_id,
                occurred_at=meta.created_at,
                name=campaign.name,
                campaign_type=campaign.campaign_type.value,
            )
        )
        return campaign

    # Guards

    def _require_status(self, allowed: Collection[CampaignStatus], action: str) -> None:
        if self.status not in allowed:
            raise InvariantViolationException(
                f"Cannot {action} campaign in {self.status.value} status",
                aggregate="Campaign",
                state=self.status.value,
            )

    def can_be_edited(self) -> bool:
        return self.status == CampaignStatus.DRAFT

    def can_be_launched(self) -> bool:
        return self.status in (CampaignStatus.DRAFT, CampaignStatus.SCHEDULED)

    def can_be_paused(self) -> bool:
        return self.status == CampaignStatus.SENDING

    def can_be_resumed(self) -> bool:
        return self.status == CampaignStatus.PAUSED

    def can_be_cancelled(self) -> bool:
        return self.status in _CANCELLABLE

    # Editing (DRAFT only)

    def update_details(
        self,
        clock: Clock,
        *,
        name: str | None = None,
        description: str | None = None,
        template: str | None = None,
        variables: dict[str, Any] | None = None,
    ) -> None:
        self._require_status({CampaignStatus.DRAFT}, "update")
        new_name = (
            _require_text(name, "Campaign name cannot be empty", "name")
            if name is not None
            else self.name
        )
        new_template = (
            _require_text(template, "Template cannot be empty", "template")
            if template is not None
            else self.template
        )

        self.name = new_name
        self.template = new_template
        if description is not None:
            self.description = description.strip() or None
        if variables is not None:
            self.variables = dict(variables)
        self.meta.touch(clock)

    def update_target_segment(self, segment: Segment, clock: Clock) -> None:
        self._require_status({CampaignStatus.DRAFT}, "update target segment of")
        if segment is None or not segment.conditions:
            raise ValidationException(
                "Target segment must have at least one condition", "target_segment"
            )
        self.target_segment = segment
        self.meta.touch(clock)

    # Lifecycle

    def schedule(self, at: datetime, clock: Clock) -> None:
        self._require_status({CampaignStatus.DRAFT}, "schedule")
        if at <= clock.now():
            raise ValidationException("Scheduled time must be in the future", "scheduled_at")
        self.scheduled_at = at
        self.status = CampaignStatus.SCHEDULED
        self.meta.touch(clock)

    def launch(self, target_count: int, clock: Clock) -> None:
        self._require_status({CampaignStatus.DRAFT, CampaignStatus.SCHEDULED}, "launch")
        if target_count < 0:
            raise ValidationException("Target count must be zero or positive", "target_count")

        now = clock.now()
        self.status = CampaignStatus.SENDING
        self.start_date = now
        self.meta.touch(clock)
        self.meta.record(
            CampaignLaunched(
                aggregate_id=self.id,
                tenant_id=self.tenant_id,
                occurred_at=now,
                target_count=target_count,
                channel=self.channel.value,
            )
        )

    def pause(self, clock: Clock) -> None:
        self._require_status({CampaignStatus.SENDING}, "pause")
        self.status = CampaignStatus.PAUSED
        self.meta.touch(clock)

    def resume(self, clock: Clock) -> None:
        self._require_status({CampaignStatus.PAUSED}, "resume")
        self.status = CampaignStatus.SENDING
        self.meta.touch(clock)

    def complete(self, clock: Clock) -> None:
        self._require_status({CampaignStatus.SENDING}, "complete")
        now = clock.now()
        self.status = CampaignStatus.COMPLETED
        self.end_date = now
        self.meta.touch(clock)
        self.meta.record(
            CampaignCompleted(
                aggregate_id=self.id,
                tenant_id=self.tenant_id,
                occurred_at=now,
                **self.metrics.to_dict(),
            )
        )

    def cancel(self, clock: Clock) -> None:
        self._require_status(_CANCELLABLE, "cancel")
        self.status = CampaignStatus.CANCELLED
        self.end_date = clock.now()
        self.meta.touch(clock)

    # Metrics

    def record_metrics(self, clock: Clock, **counters: int) -> None:
        """
        Set absolute counter values.

        Raises:
            InvariantViolationException: a counter would decrease
        """
        updated = self.metrics.with_values(**counters)
        decreased = self.metrics.decreased_fields(updated)
        if decreased:
            raise InvariantViolationException(
                f"Campaign metrics cannot decrease: {', '.join(decreased)}",
                aggregate="Campaign",
                state=self.status.value,
            )
        self.metrics = updated
        self.meta.touch(clock)

    def increment_metric(self, name: str, clock: Clock, amount: int = 1) -> None:
        if name not in CampaignMetrics.FIELDS:
            raise ValidationException(f"Unknown metric: {name}", "metrics")
        if amount < 0:
            raise ValidationException("Metric increment must be zero or positive", name)
        self.metrics = self.metrics.with_values(**{name: getattr(self.metrics, name) + amount})
        self.meta.touch(clock)

    @staticmethod
    def _rate(numerator: int, denominator: int) -> float:
        if denominator == 0:
            return 0.0
        return numerator / denominator * 100

    @property
    def delivery_rate(self) -> float:
        return self._rate(self.metrics.delivered, self.metrics.total_sent)

    @property
    def open_rate(self) -> float:
        return self._rate(self.metrics.opened, self.metrics.delivered)

    @property
    def click_rate(self) -> float:
        return self._rate(self.metrics.clicked, self.metrics.opened)

    @property
    def conversion_rate(self) -> float:
        return self._rate(self.metrics.converted, self.metrics.delivered)

    def duration(self, now: datetime) -> timedelta | None:
        if self.start_date is None:
            return None
        return (self.end_date or now) - self.start_date

    def is_overdue(self, now: datetime) -> bool:
        return (
            self.status == CampaignStatus.SCHEDULED
            and self.scheduled_at is not None
            and self.scheduled_at < now
        )

    # Templates

    @staticmethod
    def missing_variables(template: str, variables: dict[str, Any]) -> list[str]:
        return [name for name in template_variables(template) if name not in variables]

    @classmethod
    def validate_template(cls, template: str, variables: dict[str, Any]) -> bool:
        """Every {{name}} placeholder must have a key in ``variables``"""
        if not template or not template.strip():
            return False
        return not cls.missing_variables(template, variables)

    def render_template(self, recipient_data: dict[str, Any] | None = None) -> str:
        """
        Substitute placeholders for one recipient.

        Recipient data wins over campaign variables. Placeholders with no
        value (missing or None) are left as-is.
        """
        merged = {**self.variables, **(recipient_data or {})}

        def substitute(match: re.Match[str]) -> str:
            value = merged.get(match.group(1).strip())
            if value is None:
                return match.group(0)
            return _render_value(value)

        return PLACEHOLDER_PATTERN.sub(substitute, self.template)
