from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

from sqlalchemy import Select, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.interfaces.pagination import Page, PageRequest
from src.domain.exceptions import ResourceNotFoundException
from src.infrastructure.persistence.database import Base
from src.infrastructure.persistence.mappers import apply_values
from src.shared.telemetry.logging import get_logger

ModelType = TypeVar("ModelType", bound=Base)
AggregateType = TypeVar("AggregateType")

logger = get_logger(__name__)


class BaseRepository(ABC, Generic[ModelType, AggregateType]):
    """
    Base repository mapping one aggregate onto one table.

    Subclasses provide the row/aggregate conversion. Tenant-owned
    repositories pass ``tenant_id`` to every lookup so a row of another
    tenant is indistinguishable from a missing one.
    """

    resource_name: str = "Resource"

    def __init__(self, db: AsyncSession, model: type[ModelType]):
        self.db = db
        self.model = model

    @abstractmethod
    def _to_values(self, aggregate: AggregateType) -> dict[str, Any]:
        """Column values of the aggregate's row"""

    @abstractmethod
    def _from_row(self, row: ModelType) -> AggregateType:
        """Rebuild the aggregate from its row"""

    def _scoped(self, stmt: Select, tenant_id: str | None) -> Select:
        # Cast to Any for SQLAlchemy dynamic attribute access (tenant_id comes from TenantMixin)
        model: Any = self.model
        if tenant_id is not None:
            stmt = stmt.where(model.tenant_id == tenant_id)
        return stmt

    async def _get_row(self, id: str, tenant_id: str | None = None) -> ModelType | None:
        model: Any = self.model
        stmt = self._scoped(select(self.model).where(model.id == id), tenant_id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def _find(self, id: str, tenant_id: str | None = None) -> AggregateType | None:
        row = await self._get_row(id, tenant_id)
        return self._from_row(row) if row is not None else None

    async def save(self, aggregate: AggregateType) -> AggregateType:
        """
        Insert the aggregate, or overwrite its existing row.

        Raises:
            ResourceNotFoundException: the id is taken by another tenant's row
        """
        values = self._to_values(aggregate)
        row = await self._get_row(values["id"])
        if row is None:
            self.db.add(self.model(**values))
        else:
            tenant_id = values.get("tenant_id")
            if tenant_id is not None and row.tenant_id != tenant_id:
                logger.warning(
                    f"Refused to save {self.resource_name} {values['id']}: "
                    "row belongs to another tenant"
                )
                raise ResourceNotFoundException(self.resource_name, values["id"])
            apply_values(row, values)
        await self.db.flush()
        return aggregate

    async def update(self, aggregate: AggregateType) -> AggregateType:
        """
        Write the aggregate's state onto its existing row.

        Raises:
            ResourceNotFoundException: the row no longer exists
        """
        values = self._to_values(aggregate)
        row = await self._get_row(values["id"], values.get("tenant_id"))
        if row is None:
            raise ResourceNotFoundException(self.resource_name, values["id"])
        apply_values(row, values)
        await self.db.flush()
        return aggregate

    async def _delete(self, id: str, tenant_id: str) -> bool:
        model: Any = self.model
        result = await self.db.execute(
            delete(self.model).where(model.id == id, model.tenant_id == tenant_id)
        )
        await self.db.flush()
        deleted = bool(result.rowcount)
        if deleted:
            logger.info(f"Deleted {self.resource_name} {id} (tenant {tenant_id})")
        return deleted

    async def _paginate(self, stmt: Select, page: PageRequest) -> Page[AggregateType]:
        """Count the filtered rows, then fetch one ordered page"""
        total = await self.db.scalar(
            select(func.count()).select_from(stmt.order_by(None).subquery())
        )
        result = await self.db.execute(stmt.offset(page.offset).limit(page.limit))
        items = [self._from_row(row) for row in result.scalars().all()]
        return Page.of(items, total or 0, page)
