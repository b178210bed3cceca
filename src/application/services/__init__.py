"""Application services."""

from src.application.services.tenant_resolver import (InboundRequest,
                                                      TenantResolver)

__all__ = [
    "InboundRequest",
    "TenantResolver",
]
