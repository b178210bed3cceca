"""
Domain layer - Enterprise Business Rules.

This is the innermost layer containing aggregates, value objects, domain
events and domain exceptions. It has no dependencies on other layers
apart from the shared clock, id helpers and the `PlanInfo` value.
"""

from src.domain.entities import (AggregateMeta, AggregateRoot, Campaign,
                                 Dashboard, DashboardWidget, Report, Tenant)
from src.domain.enums import (CampaignStatus, CampaignType, MessageChannel,
                              ReportFormat, ReportFrequency, ReportStatus,
                              ReportType, TenantStatus, WidgetType)
from src.domain.events import DomainEvent, EventBuffer
from src.domain.exceptions import (DomainException,
                                   InvariantViolationException,
                                   PermissionDeniedError,
                                   ResourceNotFoundException,
                                   TenantLimitExceededException,
                                   TenantNotFoundException,
                                   UnresolvedTenantException,
                                   ValidationException)
from src.domain.value_objects import (CampaignMetrics, DateRange,
                                      ReportFilters, ReportSchedule, Segment,
                                      SegmentCondition, TenantSlug,
                                      WidgetPosition)

__all__ = [
    # Aggregates
    "AggregateMeta",
    "AggregateRoot",
    "Tenant",
    "Campaign",
    "Report",
    "Dashboard",
    "DashboardWidget",
    # Events
    "DomainEvent",
    "EventBuffer",
    # Value Objects
    "TenantSlug",
    "Segment",
    "SegmentCondition",
    "CampaignMetrics",
    "DateRange",
    "ReportFilters",
    "ReportSchedule",
    "WidgetPosition",
    # Enums
    "TenantStatus",
    "CampaignStatus",
    "CampaignType",
    "MessageChannel",
    "ReportType",
    "ReportStatus",
    "ReportFormat",
    "ReportFrequency",
    "WidgetType",
    # Exceptions
    "DomainException",
    "ValidationException",
    "InvariantViolationException",
    "ResourceNotFoundException",
    "TenantNotFoundException",
    "UnresolvedTenantException",
    "PermissionDeniedError",
    "TenantLimitExceededException",
]
