from __future__ import annotations

from typing import Any

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.interfaces.pagination import Page, PageRequest
from src.application.interfaces.repositories import CampaignListFilters
from src.domain.entities import Campaign
from src.domain.enums import CampaignStatus, CampaignType, MessageChannel
from src.domain.exceptions import ValidationException
from src.infrastructure.persistence.mappers import (campaign_from_row,
                                                    campaign_values)
from src.infrastructure.persistence.models import CampaignModel
from src.infrastructure.persistence.repositories.base import BaseRepository

SORTABLE_COLUMNS = {
    "created_at": CampaignModel.created_at,
    "updated_at": CampaignModel.updated_at,
    "name": CampaignModel.name,
    "status": CampaignModel.status,
    "scheduled_at": CampaignModel.scheduled_at,
}


class CampaignRepository(BaseRepository[CampaignModel, Campaign]):
    resource_name = "Campaign"

    def __init__(self, db: AsyncSession):
        super().__init__(db, CampaignModel)

    def _to_values(self, aggregate: Campaign) -> dict[str, Any]:
        return campaign_values(aggregate)

    def _from_row(self, row: CampaignModel) -> Campaign:
        return campaign_from_row(row)

    async def find_by_id(self, campaign_id: str, tenant_id: str) -> Campaign | None:
        return await self._find(campaign_id, tenant_id)

    async def delete(self, campaign_id: str, tenant_id: str) -> bool:
        return await self._delete(campaign_id, tenant_id)

    async def list(
        self, tenant_id: str, filters: CampaignListFilters, page: PageRequest
    ) -> Page[Campaign]:
        column = SORTABLE_COLUMNS.get(filters.sort_by)
        if column is None:
            raise ValidationException(
                f"Cannot sort campaigns by '{filters.sort_by}'", "sort_by"
            )

        stmt = select(CampaignModel).where(CampaignModel.tenant_id == tenant_id)
        if filters.campaign_type is not None:
            campaign_type = CampaignType(filters.campaign_type)
            stmt = stmt.where(CampaignModel.campaign_type == campaign_type.value)
        if filters.status is not None:
            stmt = stmt.where(CampaignModel.status == CampaignStatus(filters.status).value)
        if filters.channel is not None:
            channel = MessageChannel(filters.channel)
            stmt = stmt.where(CampaignModel.channel == channel.value)
        if filters.search:
            term = f"%{filters.search}%"
            stmt = stmt.where(
                or_(CampaignModel.name.ilike(term), CampaignModel.description.ilike(term))
            )

        if filters.descending:
            stmt = stmt.order_by(column.desc(), CampaignModel.id.desc())
        else:
            stmt = stmt.order_by(column.asc(), CampaignModel.id.asc())
        return await self._paginate(stmt, page)
