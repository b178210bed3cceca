"""
Conversion between domain aggregates and ORM rows.

Aggregates never see SQLAlchemy types. Each aggregate has a ``*_values``
function producing the column values of its row and a ``*_from_row``
function rebuilding the aggregate. Datetimes are normalized to UTC on the
way back since some drivers (SQLite) return naive values.
"""

from datetime import datetime
from typing import Any

from src.domain.entities import (AggregateMeta, Campaign, Dashboard,
                                 DashboardWidget, Report, Tenant)
from src.domain.enums import (CampaignStatus, CampaignType, MessageChannel,
                              ReportFormat, ReportStatus, ReportType,
                              TenantStatus, WidgetSize)
from src.domain.value_objects import (CampaignMetrics, ReportFilters,
                                      ReportSchedule, Segment, TenantSlug,
                                      WidgetPosition)
from src.infrastructure.persistence.models import (CampaignModel,
                                                   DashboardModel,
                                                   ReportModel, TenantModel)
from src.shared.utils.datetime import ensure_utc


def _utc(value: datetime | None) -> datetime | None:
    return ensure_utc(value) if value is not None else None


def _meta(row: Any) -> AggregateMeta:
    return AggregateMeta(
        id=row.id,
        created_at=ensure_utc(row.created_at),
        updated_at=ensure_utc(row.updated_at),
    )


def apply_values(row: Any, values: dict[str, Any]) -> None:
    """Copy column values onto a loaded row"""
    for key, value in values.items():
        setattr(row, key, value)


# ============================================================================
# Tenant
# ============================================================================


def tenant_values(tenant: Tenant) -> dict[str, Any]:
    return {
        "id": tenant.id,
        "created_at": tenant.created_at,
        "updated_at": tenant.updated_at,
        "slug": tenant.slug.value,
        "name": tenant.name,
        "email": tenant.email,
        "status": tenant.status.value,
        "plan_id": tenant.plan_id,
        "subscription_start_date": tenant.subscription_start_date,
        "subscription_end_date": tenant.subscription_end_date,
        "trial_end_date": tenant.trial_end_date,
        "max_users": tenant.max_users,
        "max_clients": tenant.max_clients,
        "max_locations": tenant.max_locations,
        "features": sorted(tenant.features),
        "settings": dict(tenant.settings),
        "timezone": tenant.timezone,
        "locale": tenant.locale,
        "phone": tenant.phone,
        "address": tenant.address,
        "city": tenant.city,
        "state": tenant.state,
        "country": tenant.country,
        "domain": tenant.domain,
        "logo_url": tenant.logo_url,
        "billing_email": tenant.billing_email,
        "tax_id": tenant.tax_id,
    }


def tenant_from_row(row: TenantModel) -> Tenant:
    return Tenant(
        meta=_meta(row),
        name=row.name,
        slug=TenantSlug(row.slug),
        email=row.email,
        status=TenantStatus(row.status),
        plan_id=row.plan_id,
        subscription_start_date=ensure_utc(row.subscription_start_date),
        subscription_end_date=_utc(row.subscription_end_date),
        trial_end_date=_utc(row.trial_end_date),
        max_users=row.max_users,
        max_clients=row.max_clients,
        max_locations=row.max_locations,
        features=set(row.features or []),
        settings=dict(row.settings or {}),
        timezone=row.timezone,
        locale=row.locale,
        phone=row.phone,
        address=row.address,
        city=row.city,
        state=row.state,
        country=row.country,
        domain=row.domain,
        logo_url=row.logo_url,
        billing_email=row.billing_email,
        tax_id=row.tax_id,
    )


# ============================================================================
# Campaign
# ============================================================================


def campaign_values(campaign: Campaign) -> dict[str, Any]:
    return {
        "id": campaign.id,
        "tenant_id": campaign.tenant_id,
        "created_at": campaign.created_at,
        "updated_at": campaign.updated_at,
        "name": campaign.name,
        "description": campaign.description,
        "campaign_type": campaign.campaign_type.value,
        "status": campaign.status.value,
        "channel": campaign.channel.value,
        "target_segment": campaign.target_segment.to_dict(),
        "template": campaign.template,
        "variables": dict(campaign.variables),
        "scheduled_at": campaign.scheduled_at,
        "start_date": campaign.start_date,
        "end_date": campaign.end_date,
        **campaign.metrics.to_dict(),
    }


def campaign_from_row(row: CampaignModel) -> Campaign:
    return Campaign(
        meta=_meta(row),
        tenant_id=row.tenant_id,
        name=row.name,
        campaign_type=CampaignType(row.campaign_type),
        target_segment=Segment.from_dict(row.target_segment),
        template=row.template,
        channel=MessageChannel(row.channel),
        status=CampaignStatus(row.status),
        description=row.description,
        variables=dict(row.variables or {}),
        scheduled_at=_utc(row.scheduled_at),
        start_date=_utc(row.start_date),
        end_date=_utc(row.end_date),
        metrics=CampaignMetrics(
            **{name: getattr(row, name) or 0 for name in CampaignMetrics.FIELDS}
        ),
    )


# ============================================================================
# Report
# ============================================================================


def report_values(report: Report) -> dict[str, Any]:
    schedule = report.schedule
    return {
        "id": report.id,
        "tenant_id": report.tenant_id,
        "created_at": report.created_at,
        "updated_at": report.updated_at,
        "name": report.name,
        "description": report.description,
        "report_type": report.report_type.value,
        "format": report.format.value,
        "status": report.status.value,
        "filters": report.filters.to_dict(),
        "schedule_frequency": schedule.frequency.value if schedule else None,
        "schedule_next_run_at": schedule.next_run_at if schedule else None,
        "schedule_last_run_at": schedule.last_run_at if schedule else None,
        "schedule_is_active": schedule.is_active if schedule else False,
        "data": report.data,
        "generated_at": report.generated_at,
        "failure_reason": report.failure_reason,
    }


def report_from_row(row: ReportModel) -> Report:
    schedule = None
    if row.schedule_frequency:
        schedule = ReportSchedule(
            frequency=row.schedule_frequency,
            next_run_at=_utc(row.schedule_next_run_at),
            last_run_at=_utc(row.schedule_last_run_at),
            is_active=bool(row.schedule_is_active),
        )
    return Report(
        meta=_meta(row),
        tenant_id=row.tenant_id,
        name=row.name,
        report_type=ReportType(row.report_type),
        format=ReportFormat(row.format),
        filters=ReportFilters.from_dict(row.filters),
        status=ReportStatus(row.status),
        description=row.description,
        schedule=schedule,
        data=row.data,
        generated_at=_utc(row.generated_at),
        failure_reason=row.failure_reason,
    )


# ============================================================================
# Dashboard
# ============================================================================


def widget_to_dict(widget: DashboardWidget) -> dict[str, Any]:
    return {
        "id": widget.id,
        "widget_type": widget.widget_type.value,
        "title": widget.title,
        "report_type": widget.report_type.value,
        "position": widget.position.to_dict(),
        "size": widget.size.value,
        "chart_type": widget.chart_type.value if widget.chart_type else None,
        "filters": widget.filters.to_dict(),
    }


def widget_from_dict(data: dict[str, Any]) -> DashboardWidget:
    return DashboardWidget(
        id=data["id"],
        widget_type=data["widget_type"],
        title=data["title"],
        report_type=data["report_type"],
        position=WidgetPosition(**data["position"]),
        size=data.get("size", WidgetSize.MEDIUM),
        chart_type=data.get("chart_type"),
        filters=ReportFilters.from_dict(data.get("filters")),
    )


def dashboard_values(dashboard: Dashboard) -> dict[str, Any]:
    return {
        "id": dashboard.id,
        "tenant_id": dashboard.tenant_id,
        "created_at": dashboard.created_at,
        "updated_at": dashboard.updated_at,
        "name": dashboard.name,
        "description": dashboard.description,
        "widgets": [widget_to_dict(w) for w in dashboard.widgets],
        "is_default": dashboard.is_default,
    }


def dashboard_from_row(row: DashboardModel) -> Dashboard:
    return Dashboard(
        meta=_meta(row),
        tenant_id=row.tenant_id,
        name=row.name,
        widgets=[widget_from_dict(w) for w in row.widgets or []],
        description=row.description,
        is_default=bool(row.is_default),
    )
