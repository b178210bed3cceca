"""
Application layer - Application Business Rules.

This layer contains application-specific business rules, including:
- Interfaces (ports) for persistence and event publishing
- The command/query dispatcher
- Command and query handlers that orchestrate domain logic
- The tenant resolver
"""

from src.application.cqrs import Command, Dispatcher, Query
from src.application.exceptions import (DispatchMisconfigurationException,
                                        HandlerNotRegisteredException)
from src.application.interfaces import (ICampaignRepository,
                                        IDashboardRepository,
                                        IDomainEventPublisher,
                                        IReportRepository, ITenantLookup,
                                        ITenantRepository, Page, PageRequest)
from src.application.services import InboundRequest, TenantResolver

__all__ = [
    # Interfaces
    "ITenantRepository",
    "ICampaignRepository",
    "IReportRepository",
    "IDashboardRepository",
    "ITenantLookup",
    "IDomainEventPublisher",
    "Page",
    "PageRequest",
    # Dispatch
    "Command",
    "Query",
    "Dispatcher",
    "DispatchMisconfigurationException",
    "HandlerNotRegisteredException",
    # Services
    "InboundRequest",
    "TenantResolver",
]
