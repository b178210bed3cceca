"""
Tenant aggregate.

This represents the business concept of a tenant, independent of
how it's stored in the database.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, ClassVar

from src.domain.entities.aggregate import AggregateMeta, AggregateRoot
from src.domain.enums import TenantStatus
from src.domain.events import (TenantCreated, TenantStatusChanged,
                               TenantSubscriptionUpdated)
from src.domain.exceptions import (InvariantViolationException,
                                   TenantLimitExceededException,
                                   ValidationException)
from src.domain.value_objects import TenantSlug
from src.shared.clock import Clock

# Allowed status transitions; CANCELLED and EXPIRED are terminal
_TRANSITIONS: dict[TenantStatus, frozenset[TenantStatus]] = {
    TenantStatus.TRIAL: frozenset(
        {TenantStatus.ACTIVE, TenantStatus.SUSPENDED, TenantStatus.CANCELLED, TenantStatus.EXPIRED}
    ),
    TenantStatus.ACTIVE: frozenset(
        {TenantStatus.TRIAL, TenantStatus.SUSPENDED, TenantStatus.CANCELLED, TenantStatus.EXPIRED}
    ),
    TenantStatus.SUSPENDED: frozenset(
        {TenantStatus.ACTIVE, TenantStatus.CANCELLED, TenantStatus.EXPIRED}
    ),
    TenantStatus.CANCELLED: frozenset(),
    TenantStatus.EXPIRED: frozenset(),
}


def _require_text(value: str | None, field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationException(f"Tenant {field_name} is required", field_name)
    return str(value).strip()


def _require_email(value: str | None, field_name: str = "email") -> str:
    email = _require_text(value, field_name)
    if "@" not in email:
        raise ValidationException(f"Tenant {field_name} is not a valid email address", field_name)
    return email.lower()


def _normalize_domain(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value.strip().lower()


@dataclass(eq=False)
class Tenant(AggregateRoot):
    """
    Tenant aggregate (one isolated customer account)

    ``is_active`` is derived from ``status`` and cannot be set on its own.
    """

    PROFILE_FIELDS: ClassVar[frozenset[str]] = frozenset(
        {
            "name",
            "email",
            "phone",
            "address",
            "city",
            "state",
            "country",
            "timezone",
            "locale",
            "domain",
            "logo_url",
            "billing_email",
            "tax_id",
        }
    )

    meta: AggregateMeta
    name: str
    slug: TenantSlug
    email: str
    status: TenantStatus
    plan_id: str
    subscription_start_date: datetime
    subscription_end_date: datetime | None = None
    trial_end_date: datetime | None = None
    max_users: int = 3
    max_clients: int = 500
    max_locations: int = 1
    features: set[str] = field(default_factory=set)
    settings: dict[str, Any] = field(default_factory=dict)
    timezone: str = "UTC"
    locale: str = "en"
    phone: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None
    domain: str | None = None
    logo_url: str | None = None
    billing_email: str | None = None
    tax_id: str | None = None

    @classmethod
    def create(
        cls,
        *,
        name: str,
        slug: str,
        email: str,
        plan_id: str,
        clock: Clock,
        trial_days: int | None = None,
        max_users: int = 3,
        max_clients: int = 500,
        max_locations: int = 1,
        features: set[str] | None = None,
        settings: dict[str, Any] | None = None,
        subscription_end_date: datetime | None = None,
        **profile: Any,
    ) -> "Tenant":
        """
        Create a new tenant.

        With ``trial_days`` the tenant starts in TRIAL and its trial ends
        ``trial_days`` from now; otherwise it starts ACTIVE.

        Raises:
            ValidationException: missing name/email/plan, bad slug or negative caps
        """
        name = _require_text(name, "name")
        email = _require_email(email)
        plan_id = _require_text(plan_id, "plan_id")
        tenant_slug = TenantSlug(slug)
        for cap_name, cap in (
            ("max_users", max_users),
            ("max_clients", max_clients),
            ("max_locations", max_locations),
        ):
            if cap < 0:
                raise ValidationException(f"{cap_name} must be zero or positive", cap_name)
        if trial_days is not None and trial_days <= 0:
            raise ValidationException("trial_days must be positive", "trial_days")
        unknown = set(profile) - cls.PROFILE_FIELDS
        if unknown:
            raise ValidationException(
                f"Unknown tenant field(s): {', '.join(sorted(unknown))}", sorted(unknown)[0]
            )
        if "domain" in profile:
            profile["domain"] = _normalize_domain(profile["domain"])

        meta = AggregateMeta.new(clock)
        now = meta.created_at
        tenant = cls(
            meta=meta,
            name=name,
            slug=tenant_slug,
            email=email,
            status=TenantStatus.TRIAL if trial_days else TenantStatus.ACTIVE,
            plan_id=plan_id,
            subscription_start_date=now,
            subscription_end_date=subscription_end_date,
            trial_end_date=now + timedelta(days=trial_days) if trial_days else None,
            max_users=max_users,
            max_clients=max_clients,
            max_locations=max_locations,
            features=set(features or ()),
            settings=dict(settings or {}),
            **profile,
        )
        meta.record(
            TenantCreated(
                aggregate_id=tenant.id,
                tenant_id=tenant.id,
                occurred_at=now,
                name=tenant.name,
                email=tenant.email,
                plan_id=tenant.plan_id,
            )
        )
        return tenant

    @property
    def is_active(self) -> bool:
        return self.status == TenantStatus.ACTIVE

    def can_transition_to(self, new_status: TenantStatus) -> bool:
        return new_status in _TRANSITIONS[self.status]

    def change_status(
        self, new_status: TenantStatus, clock: Clock, reason: str | None = None
    ) -> None:
        """
        Move to ``new_status``.

        Setting the current status again is a silent no-op (no event).

        Raises:
            InvariantViolationException: transition not allowed from current status
        """
        new_status = TenantStatus(new_status)
        if new_status == self.status:
            return
        if not self.can_transition_to(new_status):
            raise InvariantViolationException(
                f"Cannot change tenant status from {self.status.value} to {new_status.value}",
                aggregate="Tenant",
                state=self.status.value,
            )

        old_status = self.status
        self.status = new_status
        now = self.meta.touch(clock)
        self.meta.record(
            TenantStatusChanged(
                aggregate_id=self.id,
                tenant_id=self.id,
                occurred_at=now,
                old_status=old_status.value,
                new_status=new_status.value,
                reason=reason,
            )
        )

    def activate(self, clock: Clock, reason: str | None = None) -> None:
        self.change_status(TenantStatus.ACTIVE, clock, reason)

    def suspend(self, clock: Clock, reason: str | None = None) -> None:
        self.change_status(TenantStatus.SUSPENDED, clock, reason)

    def cancel(self, clock: Clock, reason: str | None = None) -> None:
        self.change_status(TenantStatus.CANCELLED, clock, reason)

    def update_subscription(
        self, plan_id: str, clock: Clock, end_date: datetime | None = None
    ) -> None:
        """Switch plan; re-selecting the current plan changes nothing"""
        plan_id = _require_text(plan_id, "plan_id")
        if plan_id == self.plan_id:
            return

        old_plan_id = self.plan_id
        self.plan_id = plan_id
        self.subscription_end_date = end_date
        now = self.meta.touch(clock)
        self.meta.record(
            TenantSubscriptionUpdated(
                aggregate_id=self.id,
                tenant_id=self.id,
                occurred_at=now,
                old_plan_id=old_plan_id,
                new_plan_id=plan_id,
                new_end_date=end_date,
            )
        )

    def update_profile(self, clock: Clock, **updates: Any) -> None:
        """
        Update contact/profile fields.

        Raises:
            ValidationException: unknown field, or empty name/email
        """
        unknown = set(updates) - self.PROFILE_FIELDS
        if unknown:
            raise ValidationException(
                f"Unknown tenant field(s): {', '.join(sorted(unknown))}", sorted(unknown)[0]
            )
        if "name" in updates:
            updates["name"] = _require_text(updates["name"], "name")
        if "email" in updates:
            updates["email"] = _require_email(updates["email"])
        if updates.get("billing_email"):
            updates["billing_email"] = _require_email(updates["billing_email"], "billing_email")
        if "domain" in updates:
            updates["domain"] = _normalize_domain(updates["domain"])

        for key, value in updates.items():
            setattr(self, key, value)
        self.meta.touch(clock)

    def update_settings(self, settings: dict[str, Any], clock: Clock) -> None:
        self.settings = {**self.settings, **settings}
        self.meta.touch(clock)

    def add_feature(self, feature: str, clock: Clock) -> None:
        feature = _require_text(feature, "feature")
        if feature not in self.features:
            self.features.add(feature)
            self.meta.touch(clock)

    def remove_feature(self, feature: str, clock: Clock) -> None:
        if feature in self.features:
            self.features.discard(feature)
            self.meta.touch(clock)

    def has_feature(self, feature: str) -> bool:
        return feature in self.features

    def extend_trial(self, days: int, clock: Clock) -> None:
        """
        Push the trial end date out by ``days``.

        Raises:
            InvariantViolationException: tenant is not in TRIAL
            ValidationException: days is not positive
        """
        if self.status != TenantStatus.TRIAL:
            raise InvariantViolationException(
                "Only tenants in TRIAL can extend their trial",
                aggregate="Tenant",
                state=self.status.value,
            )
        if days <= 0:
            raise ValidationException("Trial extension must be a positive number of days", "days")

        current_end = self.trial_end_date or clock.now()
        self.trial_end_date = current_end + timedelta(days=days)
        self.meta.touch(clock)

    def is_trial_expired(self, now: datetime) -> bool:
        if self.status != TenantStatus.TRIAL or self.trial_end_date is None:
            return False
        return now > self.trial_end_date

    def is_subscription_expired(self, now: datetime) -> bool:
        if self.subscription_end_date is None:
            return False
        return now > self.subscription_end_date

    def days_until_expiry(self, now: datetime) -> int | None:
        """Whole days (rounded up) until trial end in TRIAL, subscription end otherwise"""
        expiry = (
            self.trial_end_date if self.status == TenantStatus.TRIAL else self.subscription_end_date
        )
        if expiry is None:
            return None
        return math.ceil((expiry - now) / timedelta(days=1))

    def ensure_within_limit(self, resource: str, current: int) -> None:
        """
        Check a usage cap before adding one more ``resource``.

        Raises:
            TenantLimitExceededException: current usage already at the cap
            ValidationException: unknown resource
        """
        caps = {
            "users": self.max_users,
            "clients": self.max_clients,
            "locations": self.max_locations,
        }
        if resource not in caps:
            raise ValidationException(f"Unknown tenant limit: {resource}", "resource")
        if current >= caps[resource]:
            raise TenantLimitExceededException(resource, current, caps[resource])
