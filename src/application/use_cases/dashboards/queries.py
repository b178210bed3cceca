"""Dashboard queries (reports module)."""

from dataclasses import dataclass

from src.application.cqrs.messages import Query
from src.application.interfaces.pagination import Page, PageRequest
from src.application.interfaces.repositories import (DashboardListFilters,
                                                     IDashboardRepository)
from src.domain.entities import Dashboard
from src.domain.exceptions import ResourceNotFoundException
from src.shared.context import TenantContext, require_tenant

MODULE = "REPORTS"


@dataclass(frozen=True)
class GetDashboard(Query):
    dashboard_id: str


@dataclass(frozen=True)
class ListDashboards(Query):
    search: str | None = None
    is_default: bool | None = None
    page: int = 1
    limit: int = 20


@dataclass(frozen=True)
class GetDefaultDashboard(Query):
    pass


class _DashboardQueryHandler:
    def __init__(self, dashboards: IDashboardRepository) -> None:
        self.dashboards = dashboards


class GetDashboardHandler(_DashboardQueryHandler):
    async def handle(self, query: GetDashboard, context: TenantContext | None) -> Dashboard:
        tenant = require_tenant(context, module=MODULE)
        dashboard = await self.dashboards.find_by_id(query.dashboard_id, tenant.tenant_id)
        if dashboard is None:
            raise ResourceNotFoundException("Dashboard", query.dashboard_id)
        return dashboard


class ListDashboardsHandler(_DashboardQueryHandler):
    async def handle(
        self, query: ListDashboards, context: TenantContext | None
    ) -> Page[Dashboard]:
        tenant = require_tenant(context, module=MODULE)
        filters = DashboardListFilters(search=query.search, is_default=query.is_default)
        return await self.dashboards.list(
            tenant.tenant_id, filters, PageRequest(query.page, query.limit)
        )


class GetDefaultDashboardHandler(_DashboardQueryHandler):
    """Default dashboard of the tenant, or None when none is flagged"""

    async def handle(
        self, query: GetDefaultDashboard, context: TenantContext | None
    ) -> Dashboard | None:
        tenant = require_tenant(context, module=MODULE)
        return await self.dashboards.find_default(tenant.tenant_id)
