"""Domain entities."""

from src.domain.entities.aggregate import AggregateMeta, AggregateRoot
from src.domain.entities.campaign import Campaign
from src.domain.entities.dashboard import Dashboard, DashboardWidget
from src.domain.entities.report import Report
from src.domain.entities.tenant import Tenant

__all__ = [
    "AggregateMeta",
    "AggregateRoot",
    "Campaign",
    "Dashboard",
    "DashboardWidget",
    "Report",
    "Tenant",
]
