"""Tests for seeding the plan table"""

import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.domain.plans import GROWTH, PLAN_CATALOG, PRO
from src.infrastructure.persistence.models import PlanModel
from src.infrastructure.persistence.repositories import (SqlTenantLookup,
                                                         TenantRepository)
from src.infrastructure.persistence.seeds import seed_all, seed_plans


async def _plans(db) -> dict[str, PlanModel]:
    result = await db.execute(select(PlanModel))
    return {plan.name: plan for plan in result.scalars().all()}


@pytest.mark.asyncio
async def test_seed_creates_every_catalog_plan(test_db):
    plan_ids = await seed_plans(test_db)

    plans = await _plans(test_db)
    assert set(plans) == {"Starter", "Growth", "Pro"}
    assert plan_ids == {"starter": "starter", "growth": "growth", "pro": "pro"}
    assert plans["Pro"].modules == list(PRO.modules)
    assert plans["Pro"].features == ["ADVANCED_REPORTS", "WORKFLOWS"]
    assert plans["Growth"].max_messages == 3000
    assert plans["Starter"].max_storage_bytes == 5 * 1024 * 1024 * 1024


@pytest.mark.asyncio
async def test_seed_is_idempotent_and_keeps_existing_ids(test_db):
    test_db.add(PlanModel(id="legacy-growth", name="Growth", modules=["CRM"], features=[]))
    await test_db.flush()

    first = await seed_plans(test_db)
    second = await seed_plans(test_db)

    plans = await _plans(test_db)
    assert len(plans) == len(PLAN_CATALOG)
    assert first == second
    assert first["growth"] == "legacy-growth"
    assert plans["Growth"].modules == list(GROWTH.modules)


@pytest.mark.asyncio
async def test_seeded_plan_gates_modules(test_db, make_tenant):
    await seed_plans(test_db)
    await TenantRepository(test_db).save(make_tenant(slug="acme", plan_id="growth"))

    info = await SqlTenantLookup(test_db).find_active_tenant_by_slug("acme")

    assert "MARKETING" in info.plan.modules
    assert "REPORTS" not in info.plan.modules
    assert info.plan == GROWTH.to_plan_info()


@pytest.mark.asyncio
async def test_seed_all_commits(test_engine):
    session_factory = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)

    await seed_all(session_factory)

    async with session_factory() as db:
        assert set(await _plans(db)) == {"Starter", "Growth", "Pro"}
