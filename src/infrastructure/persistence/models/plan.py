from typing import Any

from sqlalchemy import JSON, BigInteger, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.database import Base
from src.infrastructure.persistence.models.mixins import (CuidMixin,
                                                          TimestampMixin)


class PlanModel(CuidMixin, TimestampMixin, Base):
    """Subscription plan: the modules and features a tenant may use"""

    __tablename__ = "plan"

    name: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    modules: Mapped[list[Any]] = mapped_column(JSON, nullable=False, default=list)
    features: Mapped[list[Any]] = mapped_column(JSON, nullable=False, default=list)

    # Usage caps; NULL means unlimited
    max_users: Mapped[int | None] = mapped_column(Integer)
    max_messages: Mapped[int | None] = mapped_column(Integer)
    max_storage_bytes: Mapped[int | None] = mapped_column(BigInteger)
    max_appointments: Mapped[int | None] = mapped_column(Integer)
