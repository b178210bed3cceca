"""
Command/query dispatcher.

A static routing table from message type to exactly one handler. The
table is filled at startup and checked with ``verify()``, so a missing
registration fails the boot instead of the first request that needs it.
"""

from collections.abc import Iterable
from typing import Any

from src.application.cqrs.messages import (Command, CommandHandler, Query,
                                           QueryHandler)
from src.application.exceptions import (DispatchMisconfigurationException,
                                        HandlerNotRegisteredException)
from src.shared.context import TenantContext
from src.shared.telemetry.logging import get_logger
from src.shared.telemetry.tracing import TracedOperation

logger = get_logger(__name__)


class Dispatcher:
    """Routes commands and queries over two disjoint registries"""

    def __init__(self) -> None:
        self._command_handlers: dict[type[Command], CommandHandler] = {}
        self._query_handlers: dict[type[Query], QueryHandler] = {}

    def register_command(self, command_type: type[Command], handler: CommandHandler) -> None:
        """
        Register the single handler for a command type.

        Raises:
            DispatchMisconfigurationException: not a Command subclass, or already registered
        """
        if not (isinstance(command_type, type) and issubclass(command_type, Command)):
            raise DispatchMisconfigurationException(
                f"{command_type!r} is not a Command type", getattr(command_type, "__name__", None)
            )
        if command_type in self._command_handlers:
            raise DispatchMisconfigurationException(
                f"Command handler already registered for {command_type.__name__}",
                command_type.__name__,
            )
        self._command_handlers[command_type] = handler

    def register_query(self, query_type: type[Query], handler: QueryHandler) -> None:
        """
        Register the single handler for a query type.

        Raises:
            DispatchMisconfigurationException: not a Query subclass, or already registered
        """
        if not (isinstance(query_type, type) and issubclass(query_type, Query)):
            raise DispatchMisconfigurationException(
                f"{query_type!r} is not a Query type", getattr(query_type, "__name__", None)
            )
        if query_type in self._query_handlers:
            raise DispatchMisconfigurationException(
                f"Query handler already registered for {query_type.__name__}",
                query_type.__name__,
            )
        self._query_handlers[query_type] = handler

    @property
    def command_types(self) -> frozenset[type[Command]]:
        return frozenset(self._command_handlers)

    @property
    def query_types(self) -> frozenset[type[Query]]:
        return frozenset(self._query_handlers)

    def verify(
        self,
        command_types: Iterable[type[Command]] = (),
        query_types: Iterable[type[Query]] = (),
    ) -> None:
        """
        Startup check that every expected message type has a handler.

        Raises:
            DispatchMisconfigurationException: listing every missing type
        """
        missing = [t.__name__ for t in command_types if t not in self._command_handlers]
        missing += [t.__name__ for t in query_types if t not in self._query_handlers]
        if missing:
            raise DispatchMisconfigurationException(
                f"No handler registered for: {', '.join(sorted(missing))}"
            )
        logger.info(
            f"Dispatcher verified: {len(self._command_handlers)} command handlers, "
            f"{len(self._query_handlers)} query handlers"
        )

    async def dispatch_command(self, command: Command, context: TenantContext | None) -> Any:
        """
        Route a command to its handler (exact type match).

        Raises:
            HandlerNotRegisteredException: no handler for this command type
        """
        handler = self._command_handlers.get(type(command))
        if handler is None:
            raise HandlerNotRegisteredException(type(command).__name__, "command")
        return await self._run("command", command, handler, context)

    async def dispatch_query(self, query: Query, context: TenantContext | None) -> Any:
        """
        Route a query to its handler (exact type match).

        Raises:
            HandlerNotRegisteredException: no handler for this query type
        """
        handler = self._query_handlers.get(type(query))
        if handler is None:
            raise HandlerNotRegisteredException(type(query).__name__, "query")
        return await self._run("query", query, handler, context)

    async def _run(
        self,
        channel: str,
        message: Command | Query,
        handler: CommandHandler | QueryHandler,
        context: TenantContext | None,
    ) -> Any:
        message_type = type(message).__name__
        tenant_id = context.tenant_id if context else None
        logger.debug(f"Dispatching {channel} {message_type} (tenant={tenant_id})")
        async with TracedOperation(
            f"dispatch.{channel}",
            {"message.type": message_type, "tenant.id": tenant_id},
        ):
            return await handler.handle(message, context)
