from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.infrastructure.config.settings import Settings, get_settings
from src.infrastructure.messaging.event_publisher import RedisEventPublisher
from src.infrastructure.persistence.database import engine, get_db
from src.presentation.api.dependencies import (require_tenant_context,
                                               set_event_publisher)
from src.presentation.api.errors import register_exception_handlers
from src.shared.context import TenantContext
from src.shared.telemetry.logging import get_logger, setup_logging

logger = get_logger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Lifespan events for application initialization and cleanup"""
        setup_logging()

        publisher: RedisEventPublisher | None = None
        if settings.redis_enabled:
            publisher = RedisEventPublisher(settings=settings)
            await publisher.connect()
            set_event_publisher(publisher)
        else:
            logger.info("Redis event publishing disabled in configuration")

        yield

        if publisher is not None:
            await publisher.disconnect()
            set_event_publisher(None)
        await engine.dispose()
        logger.info("Database engine disposed")

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    register_exception_handlers(app)

    @app.get("/health")
    async def health_check(db: AsyncSession = Depends(get_db)):
        await db.execute(text("SELECT 1"))
        return {"status": "healthy", "version": settings.app_version}

    @app.get("/tenant")
    async def current_tenant(context: TenantContext = Depends(require_tenant_context)):
        """Tenant the request resolved to"""
        return {
            "tenant_id": context.tenant_id,
            "slug": context.slug,
            "name": context.name,
            "plan": context.plan.name,
            "modules": sorted(context.plan.modules),
        }

    return app
