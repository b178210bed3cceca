"""
Request-scoped tenant context.

A TenantContext is produced once per inbound request by the TenantResolver
and then passed explicitly through every call:

    context = await resolver.resolve(request)
    await dispatcher.dispatch_command(LaunchCampaign(...), context)

There is no module-level "current tenant": two requests running
on the same event loop can never observe each other's context.
"""

from dataclasses import dataclass, field

from src.domain.exceptions import PermissionDeniedError, UnresolvedTenantException


@dataclass(frozen=True)
class PlanInfo:
    """Denormalized plan metadata carried with the tenant context."""

    id: str
    name: str
    modules: frozenset[str] = field(default_factory=frozenset)
    features: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def build(
        cls,
        id: str,
        name: str,
        modules: list[str] | None = None,
        features: list[str] | None = None,
    ) -> "PlanInfo":
        return cls(
            id=id,
            name=name,
            modules=frozenset(m.upper() for m in modules or []),
            features=frozenset(f.upper() for f in features or []),
        )


@dataclass(frozen=True)
class TenantContext:
    """Immutable snapshot of the tenant a request belongs to."""

    tenant_id: str
    slug: str
    name: str
    plan: PlanInfo

    def has_module(self, module: str) -> bool:
        return module.upper() in self.plan.modules

    def has_feature(self, feature: str) -> bool:
        return feature.upper() in self.plan.features


def require_tenant(
    context: TenantContext | None,
    *,
    module: str | None = None,
    feature: str | None = None,
) -> TenantContext:
    """
    Return the context or fail.

    Raises:
        UnresolvedTenantException: no tenant could be derived from the request
        PermissionDeniedError: the tenant's plan lacks the module or feature
    """
    if context is None:
        raise UnresolvedTenantException()
    if module and not context.has_module(module):
        raise PermissionDeniedError(
            f"Module '{module}' is not available for this tenant",
            resource=module,
            action="module",
        )
    if feature and not context.has_feature(feature):
        raise PermissionDeniedError(
            f"Feature '{feature}' is not available for this tenant",
            resource=feature,
            action="feature",
        )
    return context
