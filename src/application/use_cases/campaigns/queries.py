"""Campaign queries (marketing module)."""

from dataclasses import dataclass, field
from typing import Any

from src.application.cqrs.messages import Query
from src.application.interfaces.pagination import Page, PageRequest
from src.application.interfaces.repositories import (CampaignListFilters,
                                                     ICampaignRepository)
from src.domain.entities import Campaign
from src.domain.entities.campaign import template_variables
from src.domain.enums import CampaignStatus, CampaignType, MessageChannel
from src.domain.exceptions import ResourceNotFoundException
from src.shared.context import TenantContext, require_tenant

MODULE = "MARKETING"


@dataclass(frozen=True)
class GetCampaign(Query):
    campaign_id: str


@dataclass(frozen=True)
class ListCampaigns(Query):
    campaign_type: CampaignType | None = None
    status: CampaignStatus | None = None
    channel: MessageChannel | None = None
    search: str | None = None
    sort_by: str = "created_at"
    descending: bool = True
    page: int = 1
    limit: int = 20


@dataclass(frozen=True)
class PreviewCampaignMessage(Query):
    campaign_id: str
    recipient_data: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class CheckCampaignTemplate(Query):
    template: str
    variables: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class TemplateCheck:
    """Result of checking a template against a variable map"""

    is_valid: bool
    placeholders: list[str]
    missing: list[str]
    unused: list[str]


class _CampaignQueryHandler:
    def __init__(self, campaigns: ICampaignRepository) -> None:
        self.campaigns = campaigns

    async def _get(self, campaign_id: str, context: TenantContext | None) -> Campaign:
        tenant = require_tenant(context, module=MODULE)
        campaign = await self.campaigns.find_by_id(campaign_id, tenant.tenant_id)
        if campaign is None:
            raise ResourceNotFoundException("Campaign", campaign_id)
        return campaign


class GetCampaignHandler(_CampaignQueryHandler):
    async def handle(self, query: GetCampaign, context: TenantContext | None) -> Campaign:
        return await self._get(query.campaign_id, context)


class ListCampaignsHandler(_CampaignQueryHandler):
    async def handle(self, query: ListCampaigns, context: TenantContext | None) -> Page[Campaign]:
        tenant = require_tenant(context, module=MODULE)
        filters = CampaignListFilters(
            campaign_type=query.campaign_type,
            status=query.status,
            channel=query.channel,
            search=query.search,
            sort_by=query.sort_by,
            descending=query.descending,
        )
        return await self.campaigns.list(
            tenant.tenant_id, filters, PageRequest(query.page, query.limit)
        )


class PreviewCampaignMessageHandler(_CampaignQueryHandler):
    """Render the campaign template for one recipient"""

    async def handle(self, query: PreviewCampaignMessage, context: TenantContext | None) -> str:
        campaign = await self._get(query.campaign_id, context)
        return campaign.render_template(query.recipient_data)


class CheckCampaignTemplateHandler:
    """Report missing and unused variables for a template; touches no storage"""

    async def handle(
        self, query: CheckCampaignTemplate, context: TenantContext | None
    ) -> TemplateCheck:
        require_tenant(context, module=MODULE)
        placeholders = template_variables(query.template)
        missing = Campaign.missing_variables(query.template, query.variables)
        unused = [name for name in query.variables if name not in placeholders]
        return TemplateCheck(
            is_valid=Campaign.validate_template(query.template, query.variables),
            placeholders=placeholders,
            missing=missing,
            unused=unused,
        )
