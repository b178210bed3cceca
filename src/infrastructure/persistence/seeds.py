"""
Seed the plan table from the plan catalog.

Usage:
    python -m src.infrastructure.persistence.seeds
"""
import asyncio
from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.domain.plans import PLAN_CATALOG, PlanDefinition
from src.infrastructure.persistence.database import (AsyncSessionLocal,
                                                     transaction)
from src.infrastructure.persistence.models import PlanModel
from src.shared.telemetry.logging import get_logger, setup_logging

logger = get_logger(__name__)


def _plan_values(plan: PlanDefinition) -> dict:
    return {
        "modules": list(plan.modules),
        "features": list(plan.features),
        "max_users": plan.max_users,
        "max_messages": plan.max_messages,
        "max_storage_bytes": plan.max_storage_bytes,
        "max_appointments": plan.max_appointments,
    }


async def seed_plans(
    db: AsyncSession, catalog: Iterable[PlanDefinition] = PLAN_CATALOG
) -> dict[str, str]:
    """
    Insert missing plans and bring existing ones in line with the catalog.

    Plans are matched by name, so seeding twice is harmless and keeps the
    ids tenants already point at.

    Returns:
        Mapping of plan key to plan row id
    """
    plan_ids: dict[str, str] = {}
    for plan in catalog:
        result = await db.execute(select(PlanModel).where(PlanModel.name == plan.name))
        existing = result.scalar_one_or_none()

        if existing is not None:
            for key, value in _plan_values(plan).items():
                setattr(existing, key, value)
            plan_ids[plan.key] = existing.id
            logger.info(f"Updated plan {plan.name}")
            continue

        row = PlanModel(id=plan.key, name=plan.name, **_plan_values(plan))
        db.add(row)
        plan_ids[plan.key] = row.id
        logger.info(f"Created plan {plan.name}")

    await db.flush()
    return plan_ids


async def seed_all(session_factory: async_sessionmaker = AsyncSessionLocal) -> dict[str, str]:
    """Seed the catalog in its own transaction"""
    async with transaction(session_factory) as db:
        plan_ids = await seed_plans(db)
    logger.info(f"Seeded {len(plan_ids)} plan(s)")
    return plan_ids


if __name__ == "__main__":
    setup_logging()
    asyncio.run(seed_all())
