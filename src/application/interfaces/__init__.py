"""
Application layer interfaces (ports).

These protocols define the contracts between the application layer
and the infrastructure layer, following the Dependency Inversion Principle.
"""

from src.application.interfaces.events import IDomainEventPublisher
from src.application.interfaces.pagination import Page, PageRequest
from src.application.interfaces.repositories import (CampaignListFilters,
                                                     DashboardListFilters,
                                                     ICampaignRepository,
                                                     IDashboardRepository,
                                                     IReportRepository,
                                                     ITenantLookup,
                                                     ITenantRepository,
                                                     ReportListFilters,
                                                     TenantInfo,
                                                     TenantListFilters)

__all__ = [
    # Repository interfaces
    "ITenantRepository",
    "ICampaignRepository",
    "IReportRepository",
    "IDashboardRepository",
    "ITenantLookup",
    "TenantInfo",
    # Listing
    "Page",
    "PageRequest",
    "TenantListFilters",
    "CampaignListFilters",
    "ReportListFilters",
    "DashboardListFilters",
    # Event publishing
    "IDomainEventPublisher",
]
