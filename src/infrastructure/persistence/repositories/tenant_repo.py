from __future__ import annotations

from typing import Any

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.interfaces.pagination import Page, PageRequest
from src.application.interfaces.repositories import (TenantInfo,
                                                     TenantListFilters)
from src.domain.entities import Tenant
from src.domain.enums import TenantStatus
from src.infrastructure.persistence.mappers import (tenant_from_row,
                                                    tenant_values)
from src.infrastructure.persistence.models import PlanModel, TenantModel
from src.infrastructure.persistence.repositories.base import BaseRepository
from src.shared.context import PlanInfo


class TenantRepository(BaseRepository[TenantModel, Tenant]):
    """
    Repository for the Tenant aggregate.

    Tenants are the root of the hierarchy: lookups are never tenant-scoped.
    """

    resource_name = "Tenant"

    def __init__(self, db: AsyncSession):
        super().__init__(db, TenantModel)

    def _to_values(self, aggregate: Tenant) -> dict[str, Any]:
        return tenant_values(aggregate)

    def _from_row(self, row: TenantModel) -> Tenant:
        return tenant_from_row(row)

    async def find_by_id(self, tenant_id: str) -> Tenant | None:
        return await self._find(tenant_id)

    async def find_by_slug(self, slug: str) -> Tenant | None:
        result = await self.db.execute(select(TenantModel).where(TenantModel.slug == slug))
        row = result.scalar_one_or_none()
        return tenant_from_row(row) if row is not None else None

    async def find_by_email(self, email: str) -> Tenant | None:
        stmt = (
            select(TenantModel)
            .where(TenantModel.email == email.strip().lower())
            .order_by(TenantModel.created_at.asc(), TenantModel.id.asc())
            .limit(1)
        )
        row = (await self.db.execute(stmt)).scalar_one_or_none()
        return tenant_from_row(row) if row is not None else None

    async def find_by_domain(self, domain: str) -> Tenant | None:
        result = await self.db.execute(
            select(TenantModel).where(TenantModel.domain == domain.strip().lower())
        )
        row = result.scalar_one_or_none()
        return tenant_from_row(row) if row is not None else None

    async def list(self, filters: TenantListFilters, page: PageRequest) -> Page[Tenant]:
        stmt = select(TenantModel)
        if filters.status is not None:
            stmt = stmt.where(TenantModel.status == TenantStatus(filters.status).value)
        if filters.plan_id:
            stmt = stmt.where(TenantModel.plan_id == filters.plan_id)
        if filters.search:
            term = f"%{filters.search}%"
            stmt = stmt.where(
                or_(
                    TenantModel.name.ilike(term),
                    TenantModel.slug.ilike(term),
                    TenantModel.email.ilike(term),
                )
            )
        stmt = stmt.order_by(TenantModel.created_at.desc(), TenantModel.id.desc())
        return await self._paginate(stmt, page)


class SqlTenantLookup:
    """Resolver lookup: active tenant by slug, joined with its plan"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_active_tenant_by_slug(self, slug: str) -> TenantInfo | None:
        stmt = (
            select(TenantModel, PlanModel)
            .join(PlanModel, PlanModel.id == TenantModel.plan_id)
            .where(
                TenantModel.slug == slug,
                TenantModel.status == TenantStatus.ACTIVE.value,
            )
        )
        result = await self.db.execute(stmt)
        found = result.first()
        if found is None:
            return None

        tenant, plan = found
        return TenantInfo(
            id=tenant.id,
            slug=tenant.slug,
            name=tenant.name,
            plan=PlanInfo.build(
                id=plan.id,
                name=plan.name,
                modules=list(plan.modules or []),
                features=list(plan.features or []),
            ),
        )
