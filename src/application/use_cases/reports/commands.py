"""Report commands (reports module)."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from src.application.cqrs.messages import Command
from src.application.interfaces.events import IDomainEventPublisher
from src.application.interfaces.repositories import IReportRepository
from src.application.use_cases.base import AggregateCommandHandler
from src.domain.entities import Report
from src.domain.enums import ReportFormat, ReportFrequency, ReportType
from src.domain.exceptions import ResourceNotFoundException
from src.domain.value_objects import ReportFilters, ReportSchedule
from src.shared.clock import Clock, system_clock
from src.shared.context import TenantContext, require_tenant

MODULE = "REPORTS"


@dataclass(frozen=True)
class CreateReport(Command):
    name: str
    report_type: ReportType
    format: ReportFormat
    filters: ReportFilters | None = None
    description: str | None = None
    schedule: ReportSchedule | None = None


@dataclass(frozen=True)
class UpdateReportDetails(Command):
    report_id: str
    name: str | None = None
    description: str | None = None
    filters: ReportFilters | None = None
    format: ReportFormat | None = None


@dataclass(frozen=True)
class UpdateReportSchedule(Command):
    report_id: str
    frequency: ReportFrequency
    next_run_at: datetime | None = None
    is_active: bool = True


@dataclass(frozen=True)
class PauseReportSchedule(Command):
    report_id: str


@dataclass(frozen=True)
class ResumeReportSchedule(Command):
    report_id: str


@dataclass(frozen=True)
class StartReportGeneration(Command):
    report_id: str


@dataclass(frozen=True)
class CompleteReportGeneration(Command):
    report_id: str
    payload: Any


@dataclass(frozen=True)
class FailReportGeneration(Command):
    report_id: str
    reason: str


@dataclass(frozen=True)
class DeleteReport(Command):
    report_id: str


class _ReportCommandHandler(AggregateCommandHandler):
    def __init__(
        self,
        reports: IReportRepository,
        publisher: IDomainEventPublisher,
        clock: Clock = system_clock,
    ) -> None:
        super().__init__(publisher, clock)
        self.reports = reports

    async def _load(self, report_id: str, context: TenantContext | None) -> Report:
        tenant = require_tenant(context, module=MODULE)
        report = await self.reports.find_by_id(report_id, tenant.tenant_id)
        if report is None:
            raise ResourceNotFoundException("Report", report_id)
        return report

    async def _commit(self, report: Report) -> None:
        await self.reports.update(report)
        await self._publish(report)


class CreateReportHandler(_ReportCommandHandler):
    async def handle(self, command: CreateReport, context: TenantContext | None) -> str:
        tenant = require_tenant(context, module=MODULE)
        report = Report.create(
            tenant_id=tenant.tenant_id,
            name=command.name,
            report_type=command.report_type,
            format=command.format,
            clock=self.clock,
            filters=command.filters,
            description=command.description,
            schedule=command.schedule,
        )
        await self.reports.save(report)
        await self._publish(report)
        return report.id


class UpdateReportDetailsHandler(_ReportCommandHandler):
    async def handle(self, command: UpdateReportDetails, context: TenantContext | None) -> None:
        report = await self._load(command.report_id, context)
        report.update_details(
            self.clock,
            name=command.name,
            description=command.description,
            filters=command.filters,
            format=command.format,
        )
        await self._commit(report)


class UpdateReportScheduleHandler(_ReportCommandHandler):
    async def handle(self, command: UpdateReportSchedule, context: TenantContext | None) -> None:
        report = await self._load(command.report_id, context)
        report.update_schedule(
            command.frequency, self.clock, command.next_run_at, command.is_active
        )
        await self._commit(report)


class PauseReportScheduleHandler(_ReportCommandHandler):
    async def handle(self, command: PauseReportSchedule, context: TenantContext | None) -> None:
        report = await self._load(command.report_id, context)
        report.pause_schedule(self.clock)
        await self._commit(report)


class ResumeReportScheduleHandler(_ReportCommandHandler):
    async def handle(self, command: ResumeReportSchedule, context: TenantContext | None) -> None:
        report = await self._load(command.report_id, context)
        report.resume_schedule(self.clock)
        await self._commit(report)


class StartReportGenerationHandler(_ReportCommandHandler):
    async def handle(self, command: StartReportGeneration, context: TenantContext | None) -> None:
        report = await self._load(command.report_id, context)
        report.start_processing(self.clock)
        await self._commit(report)


class CompleteReportGenerationHandler(_ReportCommandHandler):
    async def handle(
        self, command: CompleteReportGeneration, context: TenantContext | None
    ) -> None:
        report = await self._load(command.report_id, context)
        report.mark_as_generated(command.payload, self.clock)
        await self._commit(report)


class FailReportGenerationHandler(_ReportCommandHandler):
    async def handle(self, command: FailReportGeneration, context: TenantContext | None) -> None:
        report = await self._load(command.report_id, context)
        report.mark_as_failed(command.reason, self.clock)
        await self._commit(report)


class DeleteReportHandler(_ReportCommandHandler):
    async def handle(self, command: DeleteReport, context: TenantContext | None) -> None:
        tenant = require_tenant(context, module=MODULE)
        if not await self.reports.delete(command.report_id, tenant.tenant_id):
            raise ResourceNotFoundException("Report", command.report_id)
