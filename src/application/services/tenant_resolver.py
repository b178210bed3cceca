"""
Tenant resolution.

Derives the tenant slug from an inbound request and loads the active tenant
with its plan. Sources are tried in order, first match wins:

1. the tenant header (``X-Tenant-Slug`` by default)
2. the subdomain of the request host, unless reserved (www, api, admin, app)
3. the ``tenant`` path parameter

Resolution never raises. When nothing matches, or the tenant is not ACTIVE,
or the lookup fails, the result is ``None`` and tenant-scoped handlers
reject the call with UnresolvedTenantException.
"""

import ipaddress
from collections.abc import Mapping
from dataclasses import dataclass, field

from src.application.interfaces.repositories import ITenantLookup
from src.domain.value_objects import TenantSlug
from src.infrastructure.config.settings import Settings, get_settings
from src.shared.context import TenantContext
from src.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class InboundRequest:
    """Transport-neutral view of the parts of a request the resolver reads"""

    headers: Mapping[str, str] = field(default_factory=dict)
    host: str | None = None
    path_params: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        # Header names are case-insensitive
        object.__setattr__(
            self, "headers", {k.lower(): v for k, v in (self.headers or {}).items()}
        )
        object.__setattr__(self, "path_params", dict(self.path_params or {}))

    def header(self, name: str) -> str | None:
        return self.headers.get(name.lower())


class TenantResolver:
    """Resolves the tenant a request belongs to"""

    def __init__(self, lookup: ITenantLookup, settings: Settings | None = None) -> None:
        self.lookup = lookup
        self.settings = settings or get_settings()

    async def resolve(self, request: InboundRequest) -> TenantContext | None:
        slug = self.extract_slug(request)
        if slug is None:
            return None

        try:
            info = await self.lookup.find_active_tenant_by_slug(slug)
        except Exception:
            logger.exception(f"Tenant lookup failed for slug '{slug}'")
            return None

        if info is None:
            logger.debug(f"No active tenant for slug '{slug}'")
            return None

        return TenantContext(tenant_id=info.id, slug=info.slug, name=info.name, plan=info.plan)

    def extract_slug(self, request: InboundRequest) -> str | None:
        """First valid slug from header, subdomain, then path parameter"""
        candidates = (
            ("header", request.header(self.settings.tenant_header_name)),
            ("subdomain", self.slug_from_host(request.host)),
            ("path", request.path_params.get(self.settings.tenant_path_param)),
        )
        for source, raw in candidates:
            slug = _normalize(raw)
            if slug is None:
                continue
            if not TenantSlug.is_valid(slug):
                logger.debug(f"Ignoring malformed tenant slug from {source}: {raw!r}")
                continue
            return slug
        return None

    def slug_from_host(self, host: str | None) -> str | None:
        """
        First DNS label of the host, when it is a tenant subdomain.

        Ports are stripped and IP literals ignored. Without a configured base
        domain the host needs at least three labels (tenant.example.com).
        """
        if not host:
            return None
        hostname = _strip_port(host.strip().lower()).rstrip(".")
        if not hostname or _is_ip(hostname):
            return None

        base = self.settings.tenant_base_domain
        if base:
            if not hostname.endswith("." + base):
                return None
            labels = hostname[: -len(base) - 1].split(".")
        else:
            labels = hostname.split(".")
            if len(labels) < 3:
                return None

        subdomain = labels[0]
        if not subdomain or subdomain in self.settings.reserved_subdomains:
            return None
        return subdomain


def _normalize(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip().lower()
    return value or None


def _strip_port(host: str) -> str:
    if host.startswith("["):
        # [::1]:8000
        return host[1 : host.find("]")] if "]" in host else host
    if host.count(":") == 1:
        return host.split(":", 1)[0]
    return host


def _is_ip(hostname: str) -> bool:
    try:
        ipaddress.ip_address(hostname)
    except ValueError:
        return False
    return True
