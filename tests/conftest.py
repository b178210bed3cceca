"""Shared test fixtures for pytest"""
from datetime import datetime, timezone

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from src.domain.entities import Campaign, Report, Tenant
from src.domain.enums import (CampaignType, MessageChannel, ReportFormat,
                              ReportType)
from src.domain.value_objects import Segment, SegmentCondition

from src.infrastructure.persistence import models  # noqa: F401  (registers tables)
from src.infrastructure.persistence.database import Base
from src.shared.clock import FixedClock
from src.shared.context import PlanInfo, TenantContext
from tests.fakes import (CollectingEventPublisher, InMemoryCampaignRepository,
                         InMemoryDashboardRepository, InMemoryReportRepository,
                         InMemoryTenantRepository)

# Test database URL - in-memory SQLite shared across one engine
TEST_DATABASE_URL = "sqlite+aiosqlite://"

# A fixed instant for reproducible tests
NOW = datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(NOW)


@pytest.fixture
def plan() -> PlanInfo:
    return PlanInfo.build(
        id="plan-pro",
        name="Pro",
        modules=["marketing", "reports"],
        features=["custom_reports"],
    )


@pytest.fixture
def tenant_context(plan) -> TenantContext:
    return TenantContext(tenant_id="tenant-1", slug="acme", name="Acme Spa", plan=plan)


@pytest.fixture
def other_tenant_context(plan) -> TenantContext:
    return TenantContext(tenant_id="tenant-2", slug="globex", name="Globex", plan=plan)


@pytest.fixture
def publisher() -> CollectingEventPublisher:
    return CollectingEventPublisher()


@pytest.fixture
def vip_segment() -> Segment:
    return Segment(conditions=(SegmentCondition("tags", "contains", "vip"),))


@pytest.fixture
def make_tenant(clock):
    def _make(slug: str = "acme", trial_days: int | None = None, **kwargs) -> Tenant:
        return Tenant.create(
            name=kwargs.pop("name", "Acme Spa"),
            slug=slug,
            email=kwargs.pop("email", "owner@acme.test"),
            plan_id=kwargs.pop("plan_id", "plan-pro"),
            clock=clock,
            trial_days=trial_days,
            **kwargs,
        )

    return _make


@pytest.fixture
def make_campaign(clock, vip_segment):
    def _make(tenant_id: str = "tenant-1", **kwargs) -> Campaign:
        return Campaign.create(
            tenant_id=tenant_id,
            name=kwargs.pop("name", "Spring Promo"),
            campaign_type=kwargs.pop("campaign_type", CampaignType.PROMOTIONAL),
            target_segment=kwargs.pop("target_segment", vip_segment),
            template=kwargs.pop("template", "Hi {{first_name}}, enjoy {{discount}} off!"),
            channel=kwargs.pop("channel", MessageChannel.EMAIL),
            clock=clock,
            **kwargs,
        )

    return _make


@pytest.fixture
def make_report(clock):
    def _make(tenant_id: str = "tenant-1", **kwargs) -> Report:
        return Report.create(
            tenant_id=tenant_id,
            name=kwargs.pop("name", "Monthly Clients"),
            report_type=kwargs.pop("report_type", ReportType.CLIENTS),
            format=kwargs.pop("format", ReportFormat.PDF),
            clock=clock,
            **kwargs,
        )

    return _make


# In-memory repositories for handler tests


@pytest.fixture
def tenant_repo() -> InMemoryTenantRepository:
    return InMemoryTenantRepository()


@pytest.fixture
def campaign_repo() -> InMemoryCampaignRepository:
    return InMemoryCampaignRepository()


@pytest.fixture
def report_repo() -> InMemoryReportRepository:
    return InMemoryReportRepository()


@pytest.fixture
def dashboard_repo() -> InMemoryDashboardRepository:
    return InMemoryDashboardRepository()


# Database fixtures for the SQLAlchemy adapter


@pytest.fixture
async def test_engine():
    """Create test database engine"""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def test_db(test_engine):
    """Create test database session"""
    async_session = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    async with async_session() as session:
        yield session
