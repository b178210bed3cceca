"""
Report aggregate (reporting bounded context).

Generation is gated by ``can_be_generated()``: SALES and FINANCIAL reports
need a date range, STAFF_PERFORMANCE needs at least one staff id.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta
from typing import Any

from src.domain.entities.aggregate import AggregateMeta, AggregateRoot
from src.domain.enums import (ReportFormat, ReportFrequency, ReportStatus,
                              ReportType)
from src.domain.events import ReportGenerated
from src.domain.exceptions import (InvariantViolationException,
                                   ValidationException)
from src.domain.value_objects import ReportFilters, ReportSchedule
from src.shared.clock import Clock
from src.shared.utils.datetime import add_months

_DATE_RANGE_REQUIRED = frozenset({ReportType.SALES, ReportType.FINANCIAL})


def next_run_after(frequency: ReportFrequency, moment: datetime) -> datetime | None:
    """Next run time for a schedule; ONCE has none"""
    if frequency == ReportFrequency.DAILY:
        return moment + timedelta(days=1)
    if frequency == ReportFrequency.WEEKLY:
        return moment + timedelta(days=7)
    if frequency == ReportFrequency.MONTHLY:
        return add_months(moment, 1)
    if frequency == ReportFrequency.QUARTERLY:
        return add_months(moment, 3)
    if frequency == ReportFrequency.YEARLY:
        return add_months(moment, 12)
    return None


def _validate_schedule(schedule: ReportSchedule | None, now: datetime) -> None:
    if (
        schedule is not None
        and schedule.frequency == ReportFrequency.ONCE
        and schedule.next_run_at is not None
        and schedule.next_run_at <= now
    ):
        raise ValidationException("Scheduled time must be in the future", "schedule")


@dataclass(eq=False)
class Report(AggregateRoot):
    """Report definition plus its latest generated payload"""

    meta: AggregateMeta
    tenant_id: str
    name: str
    report_type: ReportType
    format: ReportFormat
    filters: ReportFilters = field(default_factory=ReportFilters)
    status: ReportStatus = ReportStatus.PENDING
    description: str | None = None
    schedule: ReportSchedule | None = None
    data: Any = None
    generated_at: datetime | None = None
    failure_reason: str | None = None

    @classmethod
    def create(
        cls,
        *,
        tenant_id: str,
        name: str,
        report_type: ReportType,
        format: ReportFormat,
        clock: Clock,
        filters: ReportFilters | None = None,
        description: str | None = None,
        schedule: ReportSchedule | None = None,
    ) -> "Report":
        if not name or not name.strip():
            raise ValidationException("Report name is required", "name")
        _validate_schedule(schedule, clock.now())
        if schedule is not None and not schedule.is_active:
            schedule = replace(schedule, is_active=True)

        return cls(
            meta=AggregateMeta.new(clock),
            tenant_id=tenant_id,
            name=name.strip(),
            description=description.strip() if description and description.strip() else None,
            report_type=ReportType(report_type),
            format=ReportFormat(format),
            filters=filters or ReportFilters(),
            schedule=replace(schedule, last_run_at=None) if schedule else None,
        )

    @property
    def is_scheduled(self) -> bool:
        return self.schedule is not None

    @property
    def is_schedule_active(self) -> bool:
        return self.schedule is not None and self.schedule.is_active

    @property
    def is_generated(self) -> bool:
        return self.generated_at is not None

    def is_overdue(self, now: datetime) -> bool:
        return (
            self.is_schedule_active
            and self.schedule.next_run_at is not None
            and self.schedule.next_run_at < now
        )

    def age(self, now: datetime) -> timedelta | None:
        if self.generated_at is None:
            return None
        return now - self.generated_at

    def can_be_generated(self) -> bool:
        if self.report_type in _DATE_RANGE_REQUIRED:
            return self.filters.date_range is not None
        if self.report_type == ReportType.STAFF_PERFORMANCE:
            return len(self.filters.staff_ids) > 0
        return True

    def _require_generatable(self) -> None:
        if not self.can_be_generated():
            raise InvariantViolationException(
                f"{self.report_type.value} report is missing required filters",
                aggregate="Report",
                state=self.status.value,
            )

    def update_details(
        self,
        clock: Clock,
        *,
        name: str | None = None,
        description: str | None = None,
        filters: ReportFilters | None = None,
        format: ReportFormat | None = None,
    ) -> None:
        if name is not None and not name.strip():
            raise ValidationException("Report name cannot be empty", "name")
        new_format = ReportFormat(format) if format is not None else self.format

        if name is not None:
            self.name = name.strip()
        if description is not None:
            self.description = description.strip() or None
        if filters is not None:
            self.filters = filters
        self.format = new_format
        self.meta.touch(clock)

    def update_schedule(
        self,
        frequency: ReportFrequency,
        clock: Clock,
        next_run_at: datetime | None = None,
        is_active: bool = True,
    ) -> None:
        """Replace the schedule, keeping the last run time"""
        schedule = ReportSchedule(
            frequency=frequency,
            next_run_at=next_run_at,
            last_run_at=self.schedule.last_run_at if self.schedule else None,
            is_active=is_active,
        )
        _validate_schedule(schedule, clock.now())
        self.schedule = schedule
        self.meta.touch(clock)

    def _require_schedule(self) -> ReportSchedule:
        if self.schedule is None:
            raise InvariantViolationException(
                "Report is not scheduled", aggregate="Report", state=self.status.value
            )
        return self.schedule

    def pause_schedule(self, clock: Clock) -> None:
        self.schedule = replace(self._require_schedule(), is_active=False)
        self.meta.touch(clock)

    def resume_schedule(self, clock: Clock) -> None:
        self.schedule = replace(self._require_schedule(), is_active=True)
        self.meta.touch(clock)

    def start_processing(self, clock: Clock) -> None:
        self._require_generatable()
        if self.status == ReportStatus.PROCESSING:
            raise InvariantViolationException(
                "Report is already being generated", aggregate="Report", state=self.status.value
            )
        self.status = ReportStatus.PROCESSING
        self.failure_reason = None
        self.meta.touch(clock)

    def mark_as_generated(self, payload: Any, clock: Clock) -> None:
        """
        Store a generated payload.

        With an active schedule, stamps the last run and computes the next one.

        Raises:
            InvariantViolationException: required filters are missing
        """
        self._require_generatable()

        now = clock.now()
        self.data = payload
        self.generated_at = now
        self.status = ReportStatus.COMPLETED
        self.failure_reason = None
        if self.schedule is not None and self.schedule.is_active:
            self.schedule = replace(
                self.schedule,
                last_run_at=now,
                next_run_at=next_run_after(self.schedule.frequency, now),
            )
        self.meta.touch(clock)

        date_range = self.filters.date_range
        self.meta.record(
            ReportGenerated(
                aggregate_id=self.id,
                tenant_id=self.tenant_id,
                occurred_at=now,
                report_type=self.report_type.value,
                date_range_start=date_range.start if date_range else None,
                date_range_end=date_range.end if date_range else None,
                next_run_at=self.schedule.next_run_at if self.schedule else None,
            )
        )

    def mark_as_failed(self, reason: str, clock: Clock) -> None:
        if self.status != ReportStatus.PROCESSING:
            raise InvariantViolationException(
                "Only a report being generated can fail",
                aggregate="Report",
                state=self.status.value,
            )
        self.status = ReportStatus.FAILED
        self.failure_reason = reason or "unknown error"
        self.meta.touch(clock)
