import pytest

from src.application.use_cases.registry import build_dispatcher
from src.infrastructure.config.settings import Settings


@pytest.fixture
def dispatcher(tenant_repo, campaign_repo, report_repo, dashboard_repo, publisher, clock):
    """Fully wired dispatcher over in-memory repositories"""
    return build_dispatcher(
        tenants=tenant_repo,
        campaigns=campaign_repo,
        reports=report_repo,
        dashboards=dashboard_repo,
        publisher=publisher,
        clock=clock,
        settings=Settings(),
    )
