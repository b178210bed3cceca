""" Repository module for the persistence layer. """

from src.infrastructure.persistence.repositories.base import BaseRepository
from src.infrastructure.persistence.repositories.campaign_repo import CampaignRepository
from src.infrastructure.persistence.repositories.dashboard_repo import DashboardRepository
from src.infrastructure.persistence.repositories.report_repo import ReportRepository
from src.infrastructure.persistence.repositories.tenant_repo import (SqlTenantLookup,
                                                                     TenantRepository)

__all__ = [
    "BaseRepository",
    "CampaignRepository",
    "DashboardRepository",
    "ReportRepository",
    "SqlTenantLookup",
    "TenantRepository",
]
