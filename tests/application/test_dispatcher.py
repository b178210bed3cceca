from dataclasses import dataclass
from unittest.mock import AsyncMock

import pytest

from src.application.cqrs import Command, Dispatcher, Query
from src.application.exceptions import (DispatchMisconfigurationException,
                                        HandlerNotRegisteredException)


@dataclass(frozen=True)
class RenameThing(Command):
    name: str


@dataclass(frozen=True)
class RenameThingLoudly(RenameThing):
    pass


@dataclass(frozen=True)
class GetThing(Query):
    thing_id: str


@pytest.fixture
def dispatcher() -> Dispatcher:
    return Dispatcher()


@pytest.mark.asyncio
async def test_command_routes_to_its_handler(dispatcher, tenant_context):
    handler = AsyncMock()
    handler.handle.return_value = "thing-1"
    dispatcher.register_command(RenameThing, handler)
    command = RenameThing(name="new")

    result = await dispatcher.dispatch_command(command, tenant_context)

    assert result == "thing-1"
    handler.handle.assert_awaited_once_with(command, tenant_context)


@pytest.mark.asyncio
async def test_query_routes_to_its_handler(dispatcher):
    handler = AsyncMock()
    handler.handle.return_value = {"id": "t1"}
    dispatcher.register_query(GetThing, handler)

    assert await dispatcher.dispatch_query(GetThing("t1"), None) == {"id": "t1"}


@pytest.mark.asyncio
async def test_unregistered_command_raises(dispatcher):
    with pytest.raises(HandlerNotRegisteredException) as exc_info:
        await dispatcher.dispatch_command(RenameThing(name="x"), None)

    assert exc_info.value.error_code == "DISPATCH_MISCONFIGURED"
    assert exc_info.value.details == {"message_type": "RenameThing", "channel": "command"}


@pytest.mark.asyncio
async def test_subclass_needs_its_own_handler(dispatcher):
    dispatcher.register_command(RenameThing, AsyncMock())

    with pytest.raises(HandlerNotRegisteredException):
        await dispatcher.dispatch_command(RenameThingLoudly(name="x"), None)


@pytest.mark.asyncio
async def test_channels_are_disjoint(dispatcher):
    dispatcher.register_query(GetThing, AsyncMock())

    with pytest.raises(HandlerNotRegisteredException):
        await dispatcher.dispatch_command(GetThing("t1"), None)


def test_duplicate_registration_rejected(dispatcher):
    dispatcher.register_command(RenameThing, AsyncMock())

    with pytest.raises(DispatchMisconfigurationException):
        dispatcher.register_command(RenameThing, AsyncMock())


def test_query_type_on_command_channel_rejected(dispatcher):
    with pytest.raises(DispatchMisconfigurationException):
        dispatcher.register_command(GetThing, AsyncMock())


def test_verify_lists_missing_types(dispatcher):
    dispatcher.register_command(RenameThing, AsyncMock())

    with pytest.raises(DispatchMisconfigurationException) as exc_info:
        dispatcher.verify(command_types=[RenameThing, RenameThingLoudly], query_types=[GetThing])

    assert "GetThing" in exc_info.value.message
    assert "RenameThingLoudly" in exc_info.value.message


@pytest.mark.asyncio
async def test_handler_errors_propagate(dispatcher):
    handler = AsyncMock()
    handler.handle.side_effect = ValueError("boom")
    dispatcher.register_command(RenameThing, handler)

    with pytest.raises(ValueError):
        await dispatcher.dispatch_command(RenameThing(name="x"), None)
