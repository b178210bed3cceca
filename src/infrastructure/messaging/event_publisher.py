"""Domain event publisher backed by Redis Pub/Sub"""

from __future__ import annotations

import json
from collections.abc import Sequence

import redis.asyncio as redis

from src.domain.events import DomainEvent
from src.infrastructure.config.settings import Settings, get_settings
from src.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class RedisEventPublisher:
    """
    Publishes domain events to a per-tenant Redis channel.

    Channel: ``<event_channel_prefix>:<tenant_id>``. Delivery is best effort:
    when Redis is unavailable events are dropped with a log line and the
    command that raised them still succeeds.
    """

    def __init__(
        self, redis_client: redis.Redis | None = None, settings: Settings | None = None
    ) -> None:
        self.redis = redis_client
        self.settings = settings or get_settings()
        self._connected = redis_client is not None

    async def connect(self) -> None:
        """Establish Redis connection"""
        if self.redis is None:
            try:
                self.redis = redis.Redis(
                    host=self.settings.redis_host,
                    port=self.settings.redis_port,
                    db=self.settings.redis_db,
                    password=self.settings.redis_password or None,
                    decode_responses=True,
                    socket_connect_timeout=5,
                )
                await self.redis.ping()
                self._connected = True
                logger.info("Redis event publisher connected")
            except (redis.ConnectionError, redis.TimeoutError) as e:
                logger.warning(f"Redis event publisher connection failed: {e}")
                self._connected = False
                self.redis = None

    async def disconnect(self) -> None:
        """Close Redis connection"""
        if self.redis:
            await self.redis.aclose()
            self._connected = False
            self.redis = None
            logger.info("Redis event publisher disconnected")

    def is_available(self) -> bool:
        return self._connected and self.redis is not None

    def channel_for(self, tenant_id: str) -> str:
        return f"{self.settings.event_channel_prefix}:{tenant_id}"

    async def publish(self, events: Sequence[DomainEvent]) -> int:
        """
        Publish events in order.

        Returns:
            Number of events handed to Redis
        """
        if not events:
            return 0
        if not self.is_available() or self.redis is None:
            logger.debug(f"Redis not available, dropping {len(events)} event(s)")
            return 0

        published = 0
        for event in events:
            channel = self.channel_for(event.tenant_id)
            try:
                await self.redis.publish(channel, json.dumps(event.to_dict()))
            except redis.RedisError as e:
                logger.error(f"Failed to publish {event.event_type} {event.event_id}: {e}")
                continue
            published += 1
            logger.debug(f"Published {event.event_type} to {channel}")
        return published
