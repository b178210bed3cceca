from datetime import datetime
from typing import Any

from sqlalchemy import (JSON, Boolean, CheckConstraint, DateTime, Index,
                        String, Text)
from sqlalchemy.orm import Mapped, mapped_column

from src.domain.enums import ReportStatus
from src.infrastructure.persistence.database import Base
from src.infrastructure.persistence.models.mixins import (CuidMixin,
                                                          TenantMixin,
                                                          TimestampMixin)


class ReportModel(CuidMixin, TenantMixin, TimestampMixin, Base):
    """
    Report row.

    The schedule is flattened into columns so due reports can be queried;
    the filters and generated payload are JSON.
    """

    __tablename__ = "report"

    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    report_type: Mapped[str] = mapped_column(String, nullable=False, index=True)
    format: Mapped[str] = mapped_column(String, nullable=False)
    status: Mapped[str] = mapped_column(String, nullable=False, default=ReportStatus.PENDING.value)
    filters: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)

    schedule_frequency: Mapped[str | None] = mapped_column(String)
    schedule_next_run_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    schedule_last_run_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    schedule_is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    data: Mapped[Any | None] = mapped_column(JSON)
    generated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    failure_reason: Mapped[str | None] = mapped_column(Text)

    __table_args__ = (
        Index("ix_report_tenant_created", "tenant_id", "created_at"),
        Index("ix_report_due", "tenant_id", "schedule_is_active", "schedule_next_run_at"),
        CheckConstraint(f"status IN {tuple(ReportStatus.values())}", name="report_status_check"),
    )
