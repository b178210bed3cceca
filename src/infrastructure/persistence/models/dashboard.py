from typing import Any

from sqlalchemy import JSON, Boolean, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.database import Base
from src.infrastructure.persistence.models.mixins import (CuidMixin,
                                                          TenantMixin,
                                                          TimestampMixin)


class DashboardModel(CuidMixin, TenantMixin, TimestampMixin, Base):
    """Dashboard row; widgets are an ordered JSON list"""

    __tablename__ = "dashboard"

    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    widgets: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    is_default: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    __table_args__ = (
        Index("ix_dashboard_tenant_created", "tenant_id", "created_at"),
        Index("ix_dashboard_tenant_default", "tenant_id", "is_default"),
    )
