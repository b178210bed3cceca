"""
Tenant administration commands.

These are platform-level operations: they act on a tenant by id and do not
need a resolved tenant context.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from src.application.cqrs.messages import Command
from src.application.interfaces.events import IDomainEventPublisher
from src.application.interfaces.repositories import ITenantRepository
from src.application.use_cases.base import AggregateCommandHandler
from src.domain.entities import Tenant
from src.domain.enums import TenantStatus
from src.domain.exceptions import (InvariantViolationException,
                                   TenantNotFoundException)
from src.infrastructure.config.settings import Settings, get_settings
from src.shared.clock import Clock, system_clock
from src.shared.context import TenantContext
from src.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class CreateTenant(Command):
    name: str
    slug: str
    email: str
    plan_id: str
    trial_days: int | None = None
    start_in_trial: bool = True
    max_users: int | None = None
    max_clients: int | None = None
    max_locations: int | None = None
    features: frozenset[str] = frozenset()
    settings: dict[str, Any] = field(default_factory=dict)
    profile: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class UpdateTenantProfile(Command):
    tenant_id: str
    changes: dict[str, Any]


@dataclass(frozen=True)
class ChangeTenantStatus(Command):
    tenant_id: str
    status: TenantStatus
    reason: str | None = None


@dataclass(frozen=True)
class UpdateTenantSubscription(Command):
    tenant_id: str
    plan_id: str
    end_date: datetime | None = None


@dataclass(frozen=True)
class ExtendTenantTrial(Command):
    tenant_id: str
    days: int


@dataclass(frozen=True)
class UpdateTenantSettings(Command):
    tenant_id: str
    settings: dict[str, Any]


@dataclass(frozen=True)
class AddTenantFeature(Command):
    tenant_id: str
    feature: str


@dataclass(frozen=True)
class RemoveTenantFeature(Command):
    tenant_id: str
    feature: str


class _TenantCommandHandler(AggregateCommandHandler):
    def __init__(
        self,
        tenants: ITenantRepository,
        publisher: IDomainEventPublisher,
        clock: Clock = system_clock,
    ) -> None:
        super().__init__(publisher, clock)
        self.tenants = tenants

    async def _load(self, tenant_id: str) -> Tenant:
        tenant = await self.tenants.find_by_id(tenant_id)
        if tenant is None:
            raise TenantNotFoundException(tenant_id)
        return tenant

    async def _commit(self, tenant: Tenant) -> None:
        await self.tenants.update(tenant)
        await self._publish(tenant)


class CreateTenantHandler(_TenantCommandHandler):
    """Create a tenant, in TRIAL by default, with caps from settings when not given"""

    def __init__(
        self,
        tenants: ITenantRepository,
        publisher: IDomainEventPublisher,
        clock: Clock = system_clock,
        settings: Settings | None = None,
    ) -> None:
        super().__init__(tenants, publisher, clock)
        self.settings = settings or get_settings()

    async def handle(self, command: CreateTenant, context: TenantContext | None) -> str:
        if await self.tenants.find_by_slug(command.slug) is not None:
            raise InvariantViolationException(
                f"Tenant slug '{command.slug}' is already in use", aggregate="Tenant"
            )

        trial_days = command.trial_days
        if trial_days is None and command.start_in_trial:
            trial_days = self.settings.default_trial_days or None

        tenant = Tenant.create(
            name=command.name,
            slug=command.slug,
            email=command.email,
            plan_id=command.plan_id,
            clock=self.clock,
            trial_days=trial_days,
            max_users=_or_default(command.max_users, self.settings.default_max_users),
            max_clients=_or_default(command.max_clients, self.settings.default_max_clients),
            max_locations=_or_default(command.max_locations, self.settings.default_max_locations),
            features=set(command.features),
            settings=dict(command.settings),
            **command.profile,
        )
        await self.tenants.save(tenant)
        await self._publish(tenant)
        logger.info(f"Created tenant {tenant.id} ({tenant.slug}) in {tenant.status.value}")
        return tenant.id


class UpdateTenantProfileHandler(_TenantCommandHandler):
    async def handle(self, command: UpdateTenantProfile, context: TenantContext | None) -> None:
        tenant = await self._load(command.tenant_id)
        tenant.update_profile(self.clock, **command.changes)
        await self._commit(tenant)


class ChangeTenantStatusHandler(_TenantCommandHandler):
    async def handle(self, command: ChangeTenantStatus, context: TenantContext | None) -> None:
        tenant = await self._load(command.tenant_id)
        tenant.change_status(command.status, self.clock, command.reason)
        await self._commit(tenant)


class UpdateTenantSubscriptionHandler(_TenantCommandHandler):
    async def handle(
        self, command: UpdateTenantSubscription, context: TenantContext | None
    ) -> None:
        tenant = await self._load(command.tenant_id)
        tenant.update_subscription(command.plan_id, self.clock, command.end_date)
        await self._commit(tenant)


class ExtendTenantTrialHandler(_TenantCommandHandler):
    async def handle(self, command: ExtendTenantTrial, context: TenantContext | None) -> None:
        tenant = await self._load(command.tenant_id)
        tenant.extend_trial(command.days, self.clock)
        await self._commit(tenant)


class UpdateTenantSettingsHandler(_TenantCommandHandler):
    async def handle(self, command: UpdateTenantSettings, context: TenantContext | None) -> None:
        tenant = await self._load(command.tenant_id)
        tenant.update_settings(command.settings, self.clock)
        await self._commit(tenant)


class AddTenantFeatureHandler(_TenantCommandHandler):
    async def handle(self, command: AddTenantFeature, context: TenantContext | None) -> None:
        tenant = await self._load(command.tenant_id)
        tenant.add_feature(command.feature, self.clock)
        await self._commit(tenant)


class RemoveTenantFeatureHandler(_TenantCommandHandler):
    async def handle(self, command: RemoveTenantFeature, context: TenantContext | None) -> None:
        tenant = await self._load(command.tenant_id)
        tenant.remove_feature(command.feature, self.clock)
        await self._commit(tenant)


def _or_default(value: int | None, default: int) -> int:
    return default if value is None else value
