"""Tenant administration queries."""

from dataclasses import dataclass

from src.application.cqrs.messages import Query
from src.application.interfaces.pagination import Page, PageRequest
from src.application.interfaces.repositories import (ITenantRepository,
                                                     TenantListFilters)
from src.domain.entities import Tenant
from src.domain.enums import TenantStatus
from src.domain.exceptions import TenantNotFoundException
from src.shared.context import TenantContext


@dataclass(frozen=True)
class GetTenant(Query):
    tenant_id: str


@dataclass(frozen=True)
class GetTenantBySlug(Query):
    slug: str


@dataclass(frozen=True)
class GetTenantByEmail(Query):
    email: str


@dataclass(frozen=True)
class GetTenantByDomain(Query):
    domain: str


@dataclass(frozen=True)
class ListTenants(Query):
    status: TenantStatus | None = None
    plan_id: str | None = None
    search: str | None = None
    page: int = 1
    limit: int = 20


class _TenantQueryHandler:
    def __init__(self, tenants: ITenantRepository) -> None:
        self.tenants = tenants


class GetTenantHandler(_TenantQueryHandler):
    async def handle(self, query: GetTenant, context: TenantContext | None) -> Tenant:
        tenant = await self.tenants.find_by_id(query.tenant_id)
        if tenant is None:
            raise TenantNotFoundException(query.tenant_id)
        return tenant


class GetTenantBySlugHandler(_TenantQueryHandler):
    async def handle(self, query: GetTenantBySlug, context: TenantContext | None) -> Tenant:
        tenant = await self.tenants.find_by_slug(query.slug)
        if tenant is None:
            raise TenantNotFoundException(query.slug)
        return tenant


class GetTenantByEmailHandler(_TenantQueryHandler):
    async def handle(self, query: GetTenantByEmail, context: TenantContext | None) -> Tenant:
        tenant = await self.tenants.find_by_email(query.email)
        if tenant is None:
            raise TenantNotFoundException(query.email)
        return tenant


class GetTenantByDomainHandler(_TenantQueryHandler):
    """Tenant serving a custom domain, e.g. for host-based routing"""

    async def handle(self, query: GetTenantByDomain, context: TenantContext | None) -> Tenant:
        tenant = await self.tenants.find_by_domain(query.domain)
        if tenant is None:
            raise TenantNotFoundException(query.domain)
        return tenant


class ListTenantsHandler(_TenantQueryHandler):
    async def handle(self, query: ListTenants, context: TenantContext | None) -> Page[Tenant]:
        filters = TenantListFilters(status=query.status, plan_id=query.plan_id, search=query.search)
        return await self.tenants.list(filters, PageRequest(query.page, query.limit))
