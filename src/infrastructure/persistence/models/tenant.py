from datetime import datetime
from typing import Any

from sqlalchemy import JSON, CheckConstraint, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from src.domain.enums import TenantStatus
from src.infrastructure.persistence.database import Base
from src.infrastructure.persistence.models.mixins import (CuidMixin,
                                                          TimestampMixin)


class TenantModel(CuidMixin, TimestampMixin, Base):
    """
    Root tenant row for multi-tenant architecture.

    Note: Tenant does not have a tenant_id since it is the root of the hierarchy.
    ``is_active`` is not stored; it is derived from status.
    """

    __tablename__ = "tenant"

    slug: Mapped[str] = mapped_column(String(63), unique=True, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    email: Mapped[str] = mapped_column(String, nullable=False, index=True)
    status: Mapped[str] = mapped_column(
        String, nullable=False, default=TenantStatus.TRIAL.value, index=True
    )
    plan_id: Mapped[str] = mapped_column(String, ForeignKey("plan.id"), nullable=False, index=True)

    subscription_start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    subscription_end_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    trial_end_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    max_users: Mapped[int] = mapped_column(Integer, nullable=False)
    max_clients: Mapped[int] = mapped_column(Integer, nullable=False)
    max_locations: Mapped[int] = mapped_column(Integer, nullable=False)
    features: Mapped[list[Any]] = mapped_column(JSON, nullable=False, default=list)
    settings: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)

    timezone: Mapped[str] = mapped_column(String, nullable=False, default="UTC")
    locale: Mapped[str] = mapped_column(String, nullable=False, default="en")
    phone: Mapped[str | None] = mapped_column(String)
    address: Mapped[str | None] = mapped_column(String)
    city: Mapped[str | None] = mapped_column(String)
    state: Mapped[str | None] = mapped_column(String)
    country: Mapped[str | None] = mapped_column(String)
    domain: Mapped[str | None] = mapped_column(String, unique=True)
    logo_url: Mapped[str | None] = mapped_column(String)
    billing_email: Mapped[str | None] = mapped_column(String)
    tax_id: Mapped[str | None] = mapped_column(String)

    __table_args__ = (
        CheckConstraint(f"status IN {tuple(TenantStatus.values())}", name="tenant_status_check"),
        CheckConstraint("max_users >= 0 AND max_clients >= 0 AND max_locations >= 0",
                        name="tenant_caps_check"),
    )
