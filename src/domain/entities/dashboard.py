"""Dashboard aggregate: an ordered set of non-overlapping widgets."""

from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from typing import Any, ClassVar

from src.domain.entities.aggregate import AggregateMeta, AggregateRoot
from src.domain.enums import ChartType, ReportType, WidgetSize, WidgetType
from src.domain.events import DashboardCreated
from src.domain.exceptions import (InvariantViolationException,
                                   ResourceNotFoundException,
                                   ValidationException)
from src.domain.value_objects import ReportFilters, WidgetPosition
from src.shared.clock import Clock
from src.shared.utils.generators import generate_cuid


@dataclass(frozen=True)
class DashboardWidget:
    """One widget placed on the dashboard grid"""

    id: str
    widget_type: WidgetType
    title: str
    report_type: ReportType
    position: WidgetPosition
    size: WidgetSize = WidgetSize.MEDIUM
    chart_type: ChartType | None = None
    filters: ReportFilters = field(default_factory=ReportFilters)

    def __post_init__(self):
        if not self.title or not self.title.strip():
            raise ValidationException("Widget title is required", "title")
        object.__setattr__(self, "widget_type", WidgetType(self.widget_type))
        object.__setattr__(self, "report_type", ReportType(self.report_type))
        object.__setattr__(self, "size", WidgetSize(self.size))
        if self.chart_type is not None:
            object.__setattr__(self, "chart_type", ChartType(self.chart_type))


@dataclass(eq=False)
class Dashboard(AggregateRoot):
    """Tenant dashboard; at most one per tenant is flagged as default"""

    UPDATABLE_FIELDS: ClassVar[frozenset[str]] = frozenset(
        {"widget_type", "title", "report_type", "position", "size", "chart_type", "filters"}
    )

    meta: AggregateMeta
    tenant_id: str
    name: str
    widgets: list[DashboardWidget] = field(default_factory=list)
    description: str | None = None
    is_default: bool = False

    @classmethod
    def create(
        cls,
        *,
        tenant_id: str,
        name: str,
        clock: Clock,
        description: str | None = None,
        widgets: Iterable[DashboardWidget] = (),
        is_default: bool = False,
    ) -> "Dashboard":
        """
        Raises:
            ValidationException: empty name or duplicate widget ids
            InvariantViolationException: initial widgets overlap
        """
        if not name or not name.strip():
            raise ValidationException("Dashboard name is required", "name")
        initial = list(widgets)
        if len({w.id for w in initial}) != len(initial):
            raise ValidationException("Widget ids must be unique", "widgets")
        for index, widget in enumerate(initial):
            for other in initial[index + 1 :]:
                if widget.position.overlaps(other.position):
                    raise InvariantViolationException(
                        f"Widget '{widget.title}' overlaps with widget '{other.title}'",
                        aggregate="Dashboard",
                    )

        meta = AggregateMeta.new(clock)
        dashboard = cls(
            meta=meta,
            tenant_id=tenant_id,
            name=name.strip(),
            description=description.strip() if description and description.strip() else None,
            widgets=initial,
            is_default=is_default,
        )
        meta.record(
            DashboardCreated(
                aggregate_id=dashboard.id,
                tenant_id=tenant_id,
                occurred_at=meta.created_at,
                name=dashboard.name,
                widget_ids=tuple(w.id for w in initial),
            )
        )
        return dashboard

    @property
    def widget_ids(self) -> list[str]:
        return [w.id for w in self.widgets]

    def get_widget(self, widget_id: str) -> DashboardWidget:
        for widget in self.widgets:
            if widget.id == widget_id:
                return widget
        raise ResourceNotFoundException("DashboardWidget", widget_id)

    def has_overlap(self, position: WidgetPosition, exclude_id: str | None = None) -> bool:
        return any(
            w.position.overlaps(position) for w in self.widgets if w.id != exclude_id
        )

    def _ensure_free(self, position: WidgetPosition, exclude_id: str | None = None) -> None:
        if self.has_overlap(position, exclude_id):
            raise InvariantViolationException(
                "Widget position overlaps with existing widget", aggregate="Dashboard"
            )

    def add_widget(
        self,
        clock: Clock,
        *,
        widget_type: WidgetType,
        title: str,
        report_type: ReportType,
        position: WidgetPosition,
        size: WidgetSize = WidgetSize.MEDIUM,
        chart_type: ChartType | None = None,
        filters: ReportFilters | None = None,
    ) -> str:
        widget = DashboardWidget(
            id=generate_cuid(),
            widget_type=widget_type,
            title=title.strip() if title else title,
            report_type=report_type,
            position=position,
            size=size,
            chart_type=chart_type,
            filters=filters or ReportFilters(),
        )
        self._ensure_free(widget.position)
        self.widgets.append(widget)
        self.meta.touch(clock)
        return widget.id

    def update_widget(self, widget_id: str, clock: Clock, **updates: Any) -> None:
        """
        Change widget attributes in place (order is kept).

        Raises:
            ResourceNotFoundException: unknown widget id
            ValidationException: unknown attribute
            InvariantViolationException: new position overlaps another widget
        """
        current = self.get_widget(widget_id)
        unknown = set(updates) - self.UPDATABLE_FIELDS
        if unknown:
            raise ValidationException(
                f"Unknown widget field(s): {', '.join(sorted(unknown))}", sorted(unknown)[0]
            )
        updated = replace(current, **updates)
        if "position" in updates:
            self._ensure_free(updated.position, exclude_id=widget_id)

        index = self.widget_ids.index(widget_id)
        self.widgets[index] = updated
        self.meta.touch(clock)

    def remove_widget(self, widget_id: str, clock: Clock) -> None:
        widget = self.get_widget(widget_id)
        self.widgets.remove(widget)
        self.meta.touch(clock)

    def reorder_widgets(self, order: list[str], clock: Clock) -> None:
        """
        Raises:
            ValidationException: order is not a permutation of the current widget ids
        """
        order = list(order)
        if len(order) != len(self.widgets) or set(order) != set(self.widget_ids):
            raise ValidationException(
                "Widget order must list every current widget exactly once", "widget_ids"
            )
        by_id = {w.id: w for w in self.widgets}
        self.widgets = [by_id[widget_id] for widget_id in order]
        self.meta.touch(clock)

    def set_as_default(self, clock: Clock) -> None:
        if not self.is_default:
            self.is_default = True
            self.meta.touch(clock)

    def unset_default(self, clock: Clock) -> None:
        if self.is_default:
            self.is_default = False
            self.meta.touch(clock)

    def widgets_by_type(self, widget_type: WidgetType) -> list[DashboardWidget]:
        return [w for w in self.widgets if w.widget_type == widget_type]

    def widgets_by_report_type(self, report_type: ReportType) -> list[DashboardWidget]:
        return [w for w in self.widgets if w.report_type == report_type]
