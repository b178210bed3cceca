import pytest

from src.application.use_cases.dashboards.commands import (
    AddDashboardWidget, CreateDashboard, DeleteDashboard, RemoveDashboardWidget,
    ReorderDashboardWidgets, SetDefaultDashboard, UpdateDashboardWidget,
    WidgetSpec)
from src.application.use_cases.dashboards.queries import (GetDashboard,
                                                          GetDefaultDashboard,
                                                          ListDashboards)
from src.domain.enums import ChartType, ReportType, WidgetSize, WidgetType
from src.domain.events import DashboardCreated
from src.domain.exceptions import (InvariantViolationException,
                                   ResourceNotFoundException,
                                   ValidationException)
from src.domain.value_objects import WidgetPosition


def _spec(title: str, x: int, y: int = 0) -> WidgetSpec:
    return WidgetSpec(
        widget_type=WidgetType.CHART,
        title=title,
        report_type=ReportType.SALES,
        position=WidgetPosition(x, y, 4, 3),
        chart_type=ChartType.LINE,
    )


@pytest.mark.asyncio
async def test_create_with_widgets(dispatcher, tenant_context, publisher):
    dashboard_id = await dispatcher.dispatch_command(
        CreateDashboard(name="Overview", widgets=(_spec("Revenue", 0), _spec("Visits", 4))),
        tenant_context,
    )

    dashboard = await dispatcher.dispatch_query(GetDashboard(dashboard_id), tenant_context)
    assert [w.title for w in dashboard.widgets] == ["Revenue", "Visits"]
    assert len(set(dashboard.widget_ids)) == 2
    assert isinstance(publisher.events[-1], DashboardCreated)


@pytest.mark.asyncio
async def test_widget_editing(dispatcher, tenant_context):
    dashboard_id = await dispatcher.dispatch_command(
        CreateDashboard(name="Overview", widgets=(_spec("Revenue", 0),)), tenant_context
    )
    revenue_id = (
        await dispatcher.dispatch_query(GetDashboard(dashboard_id), tenant_context)
    ).widget_ids[0]

    visits_id = await dispatcher.dispatch_command(
        AddDashboardWidget(dashboard_id, _spec("Visits", 4)), tenant_context
    )
    await dispatcher.dispatch_command(
        UpdateDashboardWidget(dashboard_id, visits_id, {"size": WidgetSize.LARGE}),
        tenant_context,
    )
    await dispatcher.dispatch_command(
        ReorderDashboardWidgets(dashboard_id, (visits_id, revenue_id)), tenant_context
    )

    dashboard = await dispatcher.dispatch_query(GetDashboard(dashboard_id), tenant_context)
    assert dashboard.widget_ids == [visits_id, revenue_id]
    assert dashboard.get_widget(visits_id).size == WidgetSize.LARGE

    await dispatcher.dispatch_command(
        RemoveDashboardWidget(dashboard_id, revenue_id), tenant_context
    )
    dashboard = await dispatcher.dispatch_query(GetDashboard(dashboard_id), tenant_context)
    assert dashboard.widget_ids == [visits_id]


@pytest.mark.asyncio
async def test_overlapping_widget_is_rejected(dispatcher, tenant_context):
    dashboard_id = await dispatcher.dispatch_command(
        CreateDashboard(name="Overview", widgets=(_spec("Revenue", 0),)), tenant_context
    )

    with pytest.raises(InvariantViolationException):
        await dispatcher.dispatch_command(
            AddDashboardWidget(dashboard_id, _spec("Visits", 2, 1)), tenant_context
        )

    dashboard = await dispatcher.dispatch_query(GetDashboard(dashboard_id), tenant_context)
    assert len(dashboard.widgets) == 1


@pytest.mark.asyncio
async def test_reorder_requires_every_widget(dispatcher, tenant_context):
    dashboard_id = await dispatcher.dispatch_command(
        CreateDashboard(name="Overview", widgets=(_spec("Revenue", 0), _spec("Visits", 4))),
        tenant_context,
    )
    first_id = (
        await dispatcher.dispatch_query(GetDashboard(dashboard_id), tenant_context)
    ).widget_ids[0]

    with pytest.raises(ValidationException):
        await dispatcher.dispatch_command(
            ReorderDashboardWidgets(dashboard_id, (first_id,)), tenant_context
        )


@pytest.mark.asyncio
async def test_single_default_per_tenant(dispatcher, tenant_context, clock):
    first_id = await dispatcher.dispatch_command(
        CreateDashboard(name="Main", is_default=True), tenant_context
    )
    clock.advance(minutes=5)
    second_id = await dispatcher.dispatch_command(
        CreateDashboard(name="Sales", is_default=True), tenant_context
    )

    default = await dispatcher.dispatch_query(GetDefaultDashboard(), tenant_context)
    assert default.id == second_id
    page = await dispatcher.dispatch_query(ListDashboards(is_default=True), tenant_context)
    assert [d.id for d in page.items] == [second_id]

    await dispatcher.dispatch_command(SetDefaultDashboard(first_id), tenant_context)
    default = await dispatcher.dispatch_query(GetDefaultDashboard(), tenant_context)
    assert default.id == first_id
    second = await dispatcher.dispatch_query(GetDashboard(second_id), tenant_context)
    assert second.is_default is False


@pytest.mark.asyncio
async def test_no_default_dashboard(dispatcher, tenant_context):
    await dispatcher.dispatch_command(CreateDashboard(name="Main"), tenant_context)

    assert await dispatcher.dispatch_query(GetDefaultDashboard(), tenant_context) is None


@pytest.mark.asyncio
async def test_delete_is_tenant_scoped(dispatcher, tenant_context, other_tenant_context):
    dashboard_id = await dispatcher.dispatch_command(
        CreateDashboard(name="Main"), tenant_context
    )

    with pytest.raises(ResourceNotFoundException):
        await dispatcher.dispatch_command(DeleteDashboard(dashboard_id), other_tenant_context)

    await dispatcher.dispatch_command(DeleteDashboard(dashboard_id), tenant_context)
    page = await dispatcher.dispatch_query(ListDashboards(), tenant_context)
    assert page.total == 0
