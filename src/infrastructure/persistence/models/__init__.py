from src.infrastructure.persistence.models.campaign import CampaignModel
from src.infrastructure.persistence.models.dashboard import DashboardModel
from src.infrastructure.persistence.models.mixins import (CuidMixin,
                                                          TenantMixin,
                                                          TimestampMixin)
from src.infrastructure.persistence.models.plan import PlanModel
from src.infrastructure.persistence.models.report import ReportModel
from src.infrastructure.persistence.models.tenant import TenantModel

__all__ = [
    # Models
    "PlanModel",
    "TenantModel",
    "CampaignModel",
    "ReportModel",
    "DashboardModel",
    # Mixins
    "CuidMixin",
    "TenantMixin",
    "TimestampMixin",
]
