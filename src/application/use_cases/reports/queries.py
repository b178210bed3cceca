"""Report queries (reports module)."""

from dataclasses import dataclass

from src.application.cqrs.messages import Query
from src.application.interfaces.pagination import Page, PageRequest
from src.application.interfaces.repositories import (IReportRepository,
                                                     ReportListFilters)
from src.domain.entities import Report
from src.domain.enums import ReportFormat, ReportType
from src.domain.exceptions import ResourceNotFoundException
from src.shared.clock import Clock, system_clock
from src.shared.context import TenantContext, require_tenant

MODULE = "REPORTS"


@dataclass(frozen=True)
class GetReport(Query):
    report_id: str


@dataclass(frozen=True)
class ListReports(Query):
    report_type: ReportType | None = None
    format: ReportFormat | None = None
    is_scheduled: bool | None = None
    is_generated: bool | None = None
    search: str | None = None
    page: int = 1
    limit: int = 20


@dataclass(frozen=True)
class ListDueReports(Query):
    """Reports whose active schedule is due now"""


class GetReportHandler:
    def __init__(self, reports: IReportRepository) -> None:
        self.reports = reports

    async def handle(self, query: GetReport, context: TenantContext | None) -> Report:
        tenant = require_tenant(context, module=MODULE)
        report = await self.reports.find_by_id(query.report_id, tenant.tenant_id)
        if report is None:
            raise ResourceNotFoundException("Report", query.report_id)
        return report


class ListReportsHandler:
    def __init__(self, reports: IReportRepository) -> None:
        self.reports = reports

    async def handle(self, query: ListReports, context: TenantContext | None) -> Page[Report]:
        tenant = require_tenant(context, module=MODULE)
        filters = ReportListFilters(
            report_type=query.report_type,
            format=query.format,
            is_scheduled=query.is_scheduled,
            is_generated=query.is_generated,
            search=query.search,
        )
        return await self.reports.list(
            tenant.tenant_id, filters, PageRequest(query.page, query.limit)
        )


class ListDueReportsHandler:
    def __init__(self, reports: IReportRepository, clock: Clock = system_clock) -> None:
        self.reports = reports
        self.clock = clock

    async def handle(self, query: ListDueReports, context: TenantContext | None) -> list[Report]:
        tenant = require_tenant(context, module=MODULE)
        return await self.reports.list_due(tenant.tenant_id, self.clock.now())
