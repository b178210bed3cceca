"""Tests for the session helpers"""

import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.infrastructure.persistence.database import transaction
from src.infrastructure.persistence.models import PlanModel


@pytest.fixture
def session_factory(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


async def _plan_names(session_factory) -> list[str]:
    async with session_factory() as db:
        result = await db.execute(select(PlanModel.name))
        return list(result.scalars().all())


@pytest.mark.asyncio
async def test_transaction_commits_on_exit(session_factory):
    async with transaction(session_factory) as db:
        db.add(PlanModel(id="starter", name="Starter"))

    assert await _plan_names(session_factory) == ["Starter"]


@pytest.mark.asyncio
async def test_transaction_rolls_back_when_block_raises(session_factory):
    with pytest.raises(RuntimeError):
        async with transaction(session_factory) as db:
            db.add(PlanModel(id="starter", name="Starter"))
            await db.flush()
            raise RuntimeError("boom")

    assert await _plan_names(session_factory) == []
