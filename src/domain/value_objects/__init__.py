"""Domain value objects."""

from src.domain.value_objects.core import (CampaignMetrics, DateRange,
                                           ReportFilters, ReportSchedule,
                                           Segment, SegmentCondition,
                                           TenantSlug, WidgetPosition)

__all__ = [
    "TenantSlug",
    "SegmentCondition",
    "Segment",
    "CampaignMetrics",
    "DateRange",
    "ReportFilters",
    "ReportSchedule",
    "WidgetPosition",
]
