"""
Subscription plan catalog.

Each plan grants a set of modules and features plus usage caps. Modules
gate whole command groups (``MARKETING`` for campaigns, ``REPORTS`` for
reports and dashboards); the catalog is seeded into the ``plan`` table.
"""

from dataclasses import dataclass

from src.domain.exceptions import ValidationException
from src.shared.context import PlanInfo

GIGABYTE = 1024 * 1024 * 1024


@dataclass(frozen=True)
class PlanDefinition:
    key: str
    name: str
    modules: tuple[str, ...]
    features: tuple[str, ...]
    max_users: int
    max_messages: int
    max_storage_bytes: int
    max_appointments: int

    def has_module(self, module: str) -> bool:
        return module.upper() in self.modules

    def to_plan_info(self, plan_id: str | None = None) -> PlanInfo:
        return PlanInfo.build(
            id=plan_id or self.key,
            name=self.name,
            modules=list(self.modules),
            features=list(self.features),
        )


STARTER = PlanDefinition(
    key="starter",
    name="Starter",
    modules=("AGENDA", "CRM"),
    features=(),
    max_users=2,
    max_messages=500,
    max_storage_bytes=5 * GIGABYTE,
    max_appointments=1000,
)

GROWTH = PlanDefinition(
    key="growth",
    name="Growth",
    modules=("AGENDA", "CRM", "POS", "MARKETING", "INVENTORY"),
    features=(),
    max_users=10,
    max_messages=3000,
    max_storage_bytes=25 * GIGABYTE,
    max_appointments=5000,
)

PRO = PlanDefinition(
    key="pro",
    name="Pro",
    modules=("AGENDA", "CRM", "POS", "MARKETING", "INVENTORY", "REPORTS", "WORKFLOWS"),
    features=("ADVANCED_REPORTS", "WORKFLOWS"),
    max_users=30,
    max_messages=10000,
    max_storage_bytes=100 * GIGABYTE,
    max_appointments=20000,
)

PLAN_CATALOG: tuple[PlanDefinition, ...] = (STARTER, GROWTH, PRO)


def get_plan(key: str) -> PlanDefinition:
    """
    Catalog entry by key, case-insensitive.

    Raises:
        ValidationException: no plan with that key
    """
    for plan in PLAN_CATALOG:
        if plan.key == (key or "").strip().lower():
            return plan
    raise ValidationException(f"Unknown plan '{key}'", "plan")
