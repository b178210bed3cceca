"""
Repository interfaces (ports) for the application layer.

Every tenant-owned repository takes ``tenant_id`` on every call, so there is
no method that can reach across tenants. Implementations live in the
infrastructure layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from src.application.interfaces.pagination import Page, PageRequest
from src.domain.entities import Campaign, Dashboard, Report, Tenant
from src.domain.enums import (CampaignStatus, CampaignType, MessageChannel,
                              ReportFormat, ReportType, TenantStatus)
from src.shared.context import PlanInfo


@dataclass(frozen=True)
class TenantInfo:
    """Active tenant plus its denormalized plan, as returned by a lookup"""

    id: str
    slug: str
    name: str
    plan: PlanInfo


@dataclass(frozen=True)
class TenantListFilters:
    status: TenantStatus | None = None
    plan_id: str | None = None
    search: str | None = None


@dataclass(frozen=True)
class CampaignListFilters:
    campaign_type: CampaignType | None = None
    status: CampaignStatus | None = None
    channel: MessageChannel | None = None
    search: str | None = None
    sort_by: str = "created_at"
    descending: bool = True


@dataclass(frozen=True)
class ReportListFilters:
    report_type: ReportType | None = None
    format: ReportFormat | None = None
    is_scheduled: bool | None = None
    is_generated: bool | None = None
    search: str | None = None


@dataclass(frozen=True)
class DashboardListFilters:
    search: str | None = None
    is_default: bool | None = None


class ITenantLookup(Protocol):
    """Resolver-facing lookup (DIP)"""

    async def find_active_tenant_by_slug(self, slug: str) -> TenantInfo | None:
        """Tenant with this slug, only when its status is ACTIVE"""
        ...


class ITenantRepository(Protocol):
    """Protocol for tenant repository (DIP); tenants are never deleted"""

    async def save(self, tenant: Tenant) -> Tenant:
        """Insert or replace by id"""
        ...

    async def update(self, tenant: Tenant) -> Tenant:
        """Update an existing tenant; raises ResourceNotFoundException otherwise"""
        ...

    async def find_by_id(self, tenant_id: str) -> Tenant | None:
        ...

    async def find_by_slug(self, slug: str) -> Tenant | None:
        ...

    async def find_by_email(self, email: str) -> Tenant | None:
        """Oldest tenant registered with this contact email, case-insensitive"""
        ...

    async def find_by_domain(self, domain: str) -> Tenant | None:
        """Tenant owning this custom domain, case-insensitive"""
        ...

    async def list(self, filters: TenantListFilters, page: PageRequest) -> Page[Tenant]:
        ...


class ICampaignRepository(Protocol):
    """Protocol for campaign repository (DIP)"""

    async def save(self, campaign: Campaign) -> Campaign:
        ...

    async def update(self, campaign: Campaign) -> Campaign:
        ...

    async def find_by_id(self, campaign_id: str, tenant_id: str) -> Campaign | None:
        ...

    async def delete(self, campaign_id: str, tenant_id: str) -> bool:
        ...

    async def list(
        self, tenant_id: str, filters: CampaignListFilters, page: PageRequest
    ) -> Page[Campaign]:
        ...


class IReportRepository(Protocol):
    """Protocol for report repository (DIP)"""

    async def save(self, report: Report) -> Report:
        ...

    async def update(self, report: Report) -> Report:
        ...

    async def find_by_id(self, report_id: str, tenant_id: str) -> Report | None:
        ...

    async def delete(self, report_id: str, tenant_id: str) -> bool:
        ...

    async def list(
        self, tenant_id: str, filters: ReportListFilters, page: PageRequest
    ) -> Page[Report]:
        ...

    async def list_due(self, tenant_id: str, now: datetime) -> list[Report]:
        """Reports with an active schedule whose next run is at or before ``now``"""
        ...


class IDashboardRepository(Protocol):
    """Protocol for dashboard repository (DIP)"""

    async def save(self, dashboard: Dashboard) -> Dashboard:
        ...

    async def update(self, dashboard: Dashboard) -> Dashboard:
        ...

    async def find_by_id(self, dashboard_id: str, tenant_id: str) -> Dashboard | None:
        ...

    async def delete(self, dashboard_id: str, tenant_id: str) -> bool:
        ...

    async def list(
        self, tenant_id: str, filters: DashboardListFilters, page: PageRequest
    ) -> Page[Dashboard]:
        ...

    async def find_default(self, tenant_id: str) -> Dashboard | None:
        ...
