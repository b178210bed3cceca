from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.interfaces.pagination import Page, PageRequest
from src.application.interfaces.repositories import ReportListFilters
from src.domain.entities import Report
from src.domain.enums import ReportFormat, ReportType
from src.infrastructure.persistence.mappers import (report_from_row,
                                                    report_values)
from src.infrastructure.persistence.models import ReportModel
from src.infrastructure.persistence.repositories.base import BaseRepository


class ReportRepository(BaseRepository[ReportModel, Report]):
    resource_name = "Report"

    def __init__(self, db: AsyncSession):
        super().__init__(db, ReportModel)

    def _to_values(self, aggregate: Report) -> dict[str, Any]:
        return report_values(aggregate)

    def _from_row(self, row: ReportModel) -> Report:
        return report_from_row(row)

    async def find_by_id(self, report_id: str, tenant_id: str) -> Report | None:
        return await self._find(report_id, tenant_id)

    async def delete(self, report_id: str, tenant_id: str) -> bool:
        return await self._delete(report_id, tenant_id)

    async def list(
        self, tenant_id: str, filters: ReportListFilters, page: PageRequest
    ) -> Page[Report]:
        stmt = select(ReportModel).where(ReportModel.tenant_id == tenant_id)
        if filters.report_type is not None:
            report_type = ReportType(filters.report_type)
            stmt = stmt.where(ReportModel.report_type == report_type.value)
        if filters.format is not None:
            stmt = stmt.where(ReportModel.format == ReportFormat(filters.format).value)
        if filters.is_scheduled is True:
            stmt = stmt.where(ReportModel.schedule_frequency.is_not(None))
        elif filters.is_scheduled is False:
            stmt = stmt.where(ReportModel.schedule_frequency.is_(None))
        if filters.is_generated is True:
            stmt = stmt.where(ReportModel.generated_at.is_not(None))
        elif filters.is_generated is False:
            stmt = stmt.where(ReportModel.generated_at.is_(None))
        if filters.search:
            term = f"%{filters.search}%"
            stmt = stmt.where(
                or_(ReportModel.name.ilike(term), ReportModel.description.ilike(term))
            )
        stmt = stmt.order_by(ReportModel.created_at.desc(), ReportModel.id.desc())
        return await self._paginate(stmt, page)

    async def list_due(self, tenant_id: str, now: datetime) -> list[Report]:
        """Active schedules whose next run is at or before ``now``, earliest first"""
        stmt = (
            select(ReportModel)
            .where(
                ReportModel.tenant_id == tenant_id,
                ReportModel.schedule_is_active.is_(True),
                ReportModel.schedule_next_run_at.is_not(None),
                ReportModel.schedule_next_run_at <= now,
            )
            .order_by(ReportModel.schedule_next_run_at.asc(), ReportModel.id.asc())
        )
        result = await self.db.execute(stmt)
        return [report_from_row(row) for row in result.scalars().all()]
