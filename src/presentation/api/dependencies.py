from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.cqrs.dispatcher import Dispatcher
from src.application.interfaces.events import IDomainEventPublisher
from src.application.services.tenant_resolver import (InboundRequest,
                                                      TenantResolver)
from src.application.use_cases.registry import build_dispatcher
from src.domain.exceptions import UnresolvedTenantException
from src.infrastructure.messaging.event_publisher import RedisEventPublisher
from src.infrastructure.persistence.database import (get_db,
                                                     get_db_transactional)
from src.infrastructure.persistence.repositories import (CampaignRepository,
                                                         DashboardRepository,
                                                         ReportRepository,
                                                         SqlTenantLookup,
                                                         TenantRepository)
from src.shared.context import TenantContext

# Global publisher instance (set on app startup)
_event_publisher: IDomainEventPublisher | None = None


def get_event_publisher() -> IDomainEventPublisher:
    """
    Event publisher dependency (singleton)

    Without one configured on startup, events go to an unconnected Redis
    publisher, which drops them with a debug log.
    """
    global _event_publisher
    if _event_publisher is None:
        _event_publisher = RedisEventPublisher()
    return _event_publisher


def set_event_publisher(publisher: IDomainEventPublisher | None) -> None:
    """Set global event publisher (called on app startup)"""
    global _event_publisher
    _event_publisher = publisher


def inbound_request_from(request: Request) -> InboundRequest:
    """Transport-neutral view of a Starlette request"""
    return InboundRequest(
        headers=dict(request.headers),
        host=request.headers.get("host") or request.url.hostname,
        path_params=dict(request.path_params),
    )


def get_tenant_resolver(db: AsyncSession = Depends(get_db)) -> TenantResolver:
    return TenantResolver(SqlTenantLookup(db))


async def get_tenant_context(
    request: Request,
    resolver: TenantResolver = Depends(get_tenant_resolver),
) -> TenantContext | None:
    """Resolved tenant of the request, or None"""
    return await resolver.resolve(inbound_request_from(request))


async def require_tenant_context(
    context: TenantContext | None = Depends(get_tenant_context),
) -> TenantContext:
    """
    Resolved tenant of the request.

    Raises:
        UnresolvedTenantException: mapped to 400 by the exception handlers
    """
    if context is None:
        raise UnresolvedTenantException()
    return context


def get_dispatcher(
    db: AsyncSession = Depends(get_db_transactional),
    publisher: IDomainEventPublisher = Depends(get_event_publisher),
) -> Dispatcher:
    """Dispatcher bound to one transactional session"""
    return build_dispatcher(
        tenants=TenantRepository(db),
        campaigns=CampaignRepository(db),
        reports=ReportRepository(db),
        dashboards=DashboardRepository(db),
        publisher=publisher,
    )
