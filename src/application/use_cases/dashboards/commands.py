"""Dashboard commands (reports module)."""

from dataclasses import dataclass, field
from typing import Any

from src.application.cqrs.messages import Command
from src.application.interfaces.events import IDomainEventPublisher
from src.application.interfaces.repositories import IDashboardRepository
from src.application.use_cases.base import AggregateCommandHandler
from src.domain.entities import Dashboard, DashboardWidget
from src.domain.enums import ChartType, ReportType, WidgetSize, WidgetType
from src.domain.exceptions import ResourceNotFoundException
from src.domain.value_objects import ReportFilters, WidgetPosition
from src.shared.clock import Clock, system_clock
from src.shared.context import TenantContext, require_tenant
from src.shared.utils.generators import generate_cuid

MODULE = "REPORTS"


@dataclass(frozen=True)
class WidgetSpec:
    """Widget attributes supplied by a caller; the id is assigned on creation"""

    widget_type: WidgetType
    title: str
    report_type: ReportType
    position: WidgetPosition
    size: WidgetSize = WidgetSize.MEDIUM
    chart_type: ChartType | None = None
    filters: ReportFilters = field(default_factory=ReportFilters)

    def build(self) -> DashboardWidget:
        return DashboardWidget(
            id=generate_cuid(),
            widget_type=self.widget_type,
            title=self.title,
            report_type=self.report_type,
            position=self.position,
            size=self.size,
            chart_type=self.chart_type,
            filters=self.filters,
        )


@dataclass(frozen=True)
class CreateDashboard(Command):
    name: str
    description: str | None = None
    widgets: tuple[WidgetSpec, ...] = ()
    is_default: bool = False


@dataclass(frozen=True)
class AddDashboardWidget(Command):
    dashboard_id: str
    widget: WidgetSpec


@dataclass(frozen=True)
class UpdateDashboardWidget(Command):
    dashboard_id: str
    widget_id: str
    changes: dict[str, Any]


@dataclass(frozen=True)
class RemoveDashboardWidget(Command):
    dashboard_id: str
    widget_id: str


@dataclass(frozen=True)
class ReorderDashboardWidgets(Command):
    dashboard_id: str
    widget_ids: tuple[str, ...]


@dataclass(frozen=True)
class SetDefaultDashboard(Command):
    dashboard_id: str


@dataclass(frozen=True)
class DeleteDashboard(Command):
    dashboard_id: str


class _DashboardCommandHandler(AggregateCommandHandler):
    def __init__(
        self,
        dashboards: IDashboardRepository,
        publisher: IDomainEventPublisher,
        clock: Clock = system_clock,
    ) -> None:
        super().__init__(publisher, clock)
        self.dashboards = dashboards

    async def _load(self, dashboard_id: str, context: TenantContext | None) -> Dashboard:
        tenant = require_tenant(context, module=MODULE)
        dashboard = await self.dashboards.find_by_id(dashboard_id, tenant.tenant_id)
        if dashboard is None:
            raise ResourceNotFoundException("Dashboard", dashboard_id)
        return dashboard

    async def _commit(self, dashboard: Dashboard) -> None:
        await self.dashboards.update(dashboard)
        await self._publish(dashboard)

    async def _clear_default(self, tenant_id: str, keep_id: str | None = None) -> None:
        """Keep at most one default dashboard per tenant"""
        current = await self.dashboards.find_default(tenant_id)
        if current is not None and current.id != keep_id:
            current.unset_default(self.clock)
            await self._commit(current)


class CreateDashboardHandler(_DashboardCommandHandler):
    async def handle(self, command: CreateDashboard, context: TenantContext | None) -> str:
        tenant = require_tenant(context, module=MODULE)
        dashboard = Dashboard.create(
            tenant_id=tenant.tenant_id,
            name=command.name,
            clock=self.clock,
            description=command.description,
            widgets=[spec.build() for spec in command.widgets],
            is_default=command.is_default,
        )
        if dashboard.is_default:
            await self._clear_default(tenant.tenant_id)
        await self.dashboards.save(dashboard)
        await self._publish(dashboard)
        return dashboard.id


class AddDashboardWidgetHandler(_DashboardCommandHandler):
    async def handle(self, command: AddDashboardWidget, context: TenantContext | None) -> str:
        dashboard = await self._load(command.dashboard_id, context)
        spec = command.widget
        widget_id = dashboard.add_widget(
            self.clock,
            widget_type=spec.widget_type,
            title=spec.title,
            report_type=spec.report_type,
            position=spec.position,
            size=spec.size,
            chart_type=spec.chart_type,
            filters=spec.filters,
        )
        await self._commit(dashboard)
        return widget_id


class UpdateDashboardWidgetHandler(_DashboardCommandHandler):
    async def handle(self, command: UpdateDashboardWidget, context: TenantContext | None) -> None:
        dashboard = await self._load(command.dashboard_id, context)
        dashboard.update_widget(command.widget_id, self.clock, **command.changes)
        await self._commit(dashboard)


class RemoveDashboardWidgetHandler(_DashboardCommandHandler):
    async def handle(self, command: RemoveDashboardWidget, context: TenantContext | None) -> None:
        dashboard = await self._load(command.dashboard_id, context)
        dashboard.remove_widget(command.widget_id, self.clock)
        await self._commit(dashboard)


class ReorderDashboardWidgetsHandler(_DashboardCommandHandler):
    async def handle(
        self, command: ReorderDashboardWidgets, context: TenantContext | None
    ) -> None:
        dashboard = await self._load(command.dashboard_id, context)
        dashboard.reorder_widgets(list(command.widget_ids), self.clock)
        await self._commit(dashboard)


class SetDefaultDashboardHandler(_DashboardCommandHandler):
    async def handle(self, command: SetDefaultDashboard, context: TenantContext | None) -> None:
        dashboard = await self._load(command.dashboard_id, context)
        await self._clear_default(dashboard.tenant_id, keep_id=dashboard.id)
        dashboard.set_as_default(self.clock)
        await self._commit(dashboard)


class DeleteDashboardHandler(_DashboardCommandHandler):
    async def handle(self, command: DeleteDashboard, context: TenantContext | None) -> None:
        tenant = require_tenant(context, module=MODULE)
        if not await self.dashboards.delete(command.dashboard_id, tenant.tenant_id):
            raise ResourceNotFoundException("Dashboard", command.dashboard_id)
