"""Tests for the event publisher dependency"""

import pytest

from src.domain.events import CampaignLaunched
from src.infrastructure.messaging.event_publisher import RedisEventPublisher
from src.presentation.api.dependencies import (get_event_publisher,
                                               set_event_publisher)
from tests.conftest import NOW
from tests.fakes import CollectingEventPublisher


@pytest.fixture(autouse=True)
def reset_publisher():
    set_event_publisher(None)
    yield
    set_event_publisher(None)


@pytest.mark.asyncio
async def test_unconfigured_publisher_drops_events():
    publisher = get_event_publisher()
    event = CampaignLaunched(
        aggregate_id="campaign-1",
        tenant_id="tenant-1",
        occurred_at=NOW,
        target_count=40,
        channel="SMS",
    )

    assert isinstance(publisher, RedisEventPublisher)
    assert publisher.is_available() is False
    assert await publisher.publish([event]) == 0
    assert get_event_publisher() is publisher


def test_configured_publisher_is_returned():
    collector = CollectingEventPublisher()
    set_event_publisher(collector)

    assert get_event_publisher() is collector
