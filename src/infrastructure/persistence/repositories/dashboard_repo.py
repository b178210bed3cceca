from __future__ import annotations

from typing import Any

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.interfaces.pagination import Page, PageRequest
from src.application.interfaces.repositories import DashboardListFilters
from src.domain.entities import Dashboard
from src.infrastructure.persistence.mappers import (dashboard_from_row,
                                                    dashboard_values)
from src.infrastructure.persistence.models import DashboardModel
from src.infrastructure.persistence.repositories.base import BaseRepository


class DashboardRepository(BaseRepository[DashboardModel, Dashboard]):
    resource_name = "Dashboard"

    def __init__(self, db: AsyncSession):
        super().__init__(db, DashboardModel)

    def _to_values(self, aggregate: Dashboard) -> dict[str, Any]:
        return dashboard_values(aggregate)

    def _from_row(self, row: DashboardModel) -> Dashboard:
        return dashboard_from_row(row)

    async def find_by_id(self, dashboard_id: str, tenant_id: str) -> Dashboard | None:
        return await self._find(dashboard_id, tenant_id)

    async def delete(self, dashboard_id: str, tenant_id: str) -> bool:
        return await self._delete(dashboard_id, tenant_id)

    async def list(
        self, tenant_id: str, filters: DashboardListFilters, page: PageRequest
    ) -> Page[Dashboard]:
        stmt = select(DashboardModel).where(DashboardModel.tenant_id == tenant_id)
        if filters.is_default is not None:
            stmt = stmt.where(DashboardModel.is_default.is_(filters.is_default))
        if filters.search:
            term = f"%{filters.search}%"
            stmt = stmt.where(
                or_(DashboardModel.name.ilike(term), DashboardModel.description.ilike(term))
            )
        stmt = stmt.order_by(DashboardModel.created_at.desc(), DashboardModel.id.desc())
        return await self._paginate(stmt, page)

    async def find_default(self, tenant_id: str) -> Dashboard | None:
        stmt = (
            select(DashboardModel)
            .where(DashboardModel.tenant_id == tenant_id, DashboardModel.is_default.is_(True))
            .order_by(DashboardModel.updated_at.desc())
            .limit(1)
        )
        result = await self.db.execute(stmt)
        row = result.scalar_one_or_none()
        return dashboard_from_row(row) if row is not None else None
