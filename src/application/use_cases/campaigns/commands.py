"""Campaign commands (marketing module)."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from src.application.cqrs.messages import Command
from src.application.interfaces.events import IDomainEventPublisher
from src.application.interfaces.repositories import ICampaignRepository
from src.application.use_cases.base import AggregateCommandHandler
from src.domain.entities import Campaign
from src.domain.enums import CampaignType, MessageChannel
from src.domain.exceptions import ResourceNotFoundException
from src.domain.value_objects import Segment
from src.shared.clock import Clock, system_clock
from src.shared.context import TenantContext, require_tenant

MODULE = "MARKETING"


@dataclass(frozen=True)
class CreateCampaign(Command):
    name: str
    campaign_type: CampaignType
    target_segment: Segment
    template: str
    channel: MessageChannel
    description: str | None = None
    variables: dict[str, Any] = field(default_factory=dict)
    scheduled_at: datetime | None = None


@dataclass(frozen=True)
class UpdateCampaignDetails(Command):
    campaign_id: str
    name: str | None = None
    description: str | None = None
    template: str | None = None
    variables: dict[str, Any] | None = None


@dataclass(frozen=True)
class UpdateCampaignSegment(Command):
    campaign_id: str
    target_segment: Segment


@dataclass(frozen=True)
class ScheduleCampaign(Command):
    campaign_id: str
    scheduled_at: datetime


@dataclass(frozen=True)
class LaunchCampaign(Command):
    campaign_id: str
    target_count: int


@dataclass(frozen=True)
class PauseCampaign(Command):
    campaign_id: str


@dataclass(frozen=True)
class ResumeCampaign(Command):
    campaign_id: str


@dataclass(frozen=True)
class CompleteCampaign(Command):
    campaign_id: str


@dataclass(frozen=True)
class CancelCampaign(Command):
    campaign_id: str


@dataclass(frozen=True)
class RecordCampaignMetrics(Command):
    campaign_id: str
    counters: dict[str, int]


@dataclass(frozen=True)
class DeleteCampaign(Command):
    campaign_id: str


class _CampaignCommandHandler(AggregateCommandHandler):
    def __init__(
        self,
        campaigns: ICampaignRepository,
        publisher: IDomainEventPublisher,
        clock: Clock = system_clock,
    ) -> None:
        super().__init__(publisher, clock)
        self.campaigns = campaigns

    async def _load(self, campaign_id: str, context: TenantContext | None) -> Campaign:
        tenant = require_tenant(context, module=MODULE)
        campaign = await self.campaigns.find_by_id(campaign_id, tenant.tenant_id)
        if campaign is None:
            raise ResourceNotFoundException("Campaign", campaign_id)
        return campaign

    async def _commit(self, campaign: Campaign) -> None:
        await self.campaigns.update(campaign)
        await self._publish(campaign)


class CreateCampaignHandler(_CampaignCommandHandler):
    async def handle(self, command: CreateCampaign, context: TenantContext | None) -> str:
        tenant = require_tenant(context, module=MODULE)
        campaign = Campaign.create(
            tenant_id=tenant.tenant_id,
            name=command.name,
            campaign_type=command.campaign_type,
            target_segment=command.target_segment,
            template=command.template,
            channel=command.channel,
            clock=self.clock,
            description=command.description,
            variables=command.variables,
            scheduled_at=command.scheduled_at,
        )
        await self.campaigns.save(campaign)
        await self._publish(campaign)
        return campaign.id


class UpdateCampaignDetailsHandler(_CampaignCommandHandler):
    async def handle(self, command: UpdateCampaignDetails, context: TenantContext | None) -> None:
        campaign = await self._load(command.campaign_id, context)
        campaign.update_details(
            self.clock,
            name=command.name,
            description=command.description,
            template=command.template,
            variables=command.variables,
        )
        await self._commit(campaign)


class UpdateCampaignSegmentHandler(_CampaignCommandHandler):
    async def handle(self, command: UpdateCampaignSegment, context: TenantContext | None) -> None:
        campaign = await self._load(command.campaign_id, context)
        campaign.update_target_segment(command.target_segment, self.clock)
        await self._commit(campaign)


class ScheduleCampaignHandler(_CampaignCommandHandler):
    async def handle(self, command: ScheduleCampaign, context: TenantContext | None) -> None:
        campaign = await self._load(command.campaign_id, context)
        campaign.schedule(command.scheduled_at, self.clock)
        await self._commit(campaign)


class LaunchCampaignHandler(_CampaignCommandHandler):
    async def handle(self, command: LaunchCampaign, context: TenantContext | None) -> None:
        campaign = await self._load(command.campaign_id, context)
        campaign.launch(command.target_count, self.clock)
        await self._commit(campaign)


class PauseCampaignHandler(_CampaignCommandHandler):
    async def handle(self, command: PauseCampaign, context: TenantContext | None) -> None:
        campaign = await self._load(command.campaign_id, context)
        campaign.pause(self.clock)
        await self._commit(campaign)


class ResumeCampaignHandler(_CampaignCommandHandler):
    async def handle(self, command: ResumeCampaign, context: TenantContext | None) -> None:
        campaign = await self._load(command.campaign_id, context)
        campaign.resume(self.clock)
        await self._commit(campaign)


class CompleteCampaignHandler(_CampaignCommandHandler):
    async def handle(self, command: CompleteCampaign, context: TenantContext | None) -> None:
        campaign = await self._load(command.campaign_id, context)
        campaign.complete(self.clock)
        await self._commit(campaign)


class CancelCampaignHandler(_CampaignCommandHandler):
    async def handle(self, command: CancelCampaign, context: TenantContext | None) -> None:
        campaign = await self._load(command.campaign_id, context)
        campaign.cancel(self.clock)
        await self._commit(campaign)


class RecordCampaignMetricsHandler(_CampaignCommandHandler):
    async def handle(self, command: RecordCampaignMetrics, context: TenantContext | None) -> None:
        campaign = await self._load(command.campaign_id, context)
        campaign.record_metrics(self.clock, **command.counters)
        await self._commit(campaign)


class DeleteCampaignHandler(_CampaignCommandHandler):
    async def handle(self, command: DeleteCampaign, context: TenantContext | None) -> None:
        tenant = require_tenant(context, module=MODULE)
        if not await self.campaigns.delete(command.campaign_id, tenant.tenant_id):
            raise ResourceNotFoundException("Campaign", command.campaign_id)
