from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy.ext.asyncio import (AsyncEngine, AsyncSession,
                                    async_sessionmaker, create_async_engine)
from sqlalchemy.orm import DeclarativeBase

from src.infrastructure.config.settings import get_settings

settings = get_settings()


def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """Async engine with pool tuning for PostgreSQL; SQLite keeps its defaults"""
    options: dict[str, Any] = {"echo": echo}
    if "postgresql" in database_url:
        options.update(
            pool_pre_ping=True,
            pool_size=20,
            max_overflow=30,
            pool_recycle=3600,
            connect_args={
                "server_settings": {"jit": "off"},
                "command_timeout": 60,
            },
        )
    return create_async_engine(database_url, **options)


# One engine per process; every session below borrows from its pool
engine = build_engine(settings.database_url, settings.database_echo)

AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
    autocommit=False,
)


class Base(DeclarativeBase):
    """Declarative base shared by every table of the tenant core"""


@asynccontextmanager
async def transaction(
    session_factory: async_sessionmaker = AsyncSessionLocal,
) -> AsyncIterator[AsyncSession]:
    """Session whose work commits on exit, or rolls back if the block raises"""
    async with session_factory() as session:
        async with session.begin():
            yield session


async def get_db() -> AsyncIterator[AsyncSession]:
    """
    Request-scoped session without a transaction boundary.

    Used for lookups (tenant resolution, health checks). Nothing is
    committed; pending changes are discarded when the session closes.
    """
    async with AsyncSessionLocal() as session:
        yield session


async def get_db_transactional() -> AsyncIterator[AsyncSession]:
    """
    Request-scoped session for command dispatch.

    The whole request is one transaction: every aggregate a command saves
    commits together once the endpoint returns.
    """
    async with transaction() as session:
        yield session
