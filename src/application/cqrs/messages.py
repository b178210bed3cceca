"""
Command and query message bases.

Messages are frozen dataclasses: a command is an intent to mutate state, a
query an intent to read it. Handlers receive the message plus the request's
tenant context (``None`` when no tenant was resolved).
"""

from dataclasses import dataclass
from typing import Any, Generic, Protocol, TypeVar

from src.shared.context import TenantContext

C = TypeVar("C", bound="Command", contravariant=True)
Q = TypeVar("Q", bound="Query", contravariant=True)


@dataclass(frozen=True)
class Command:
    """Base class for write-side messages"""


@dataclass(frozen=True)
class Query:
    """Base class for read-side messages"""


class CommandHandler(Protocol, Generic[C]):
    async def handle(self, command: C, context: TenantContext | None) -> Any:
        """Mutate state; return a minimal result (new id or None)"""
        ...


class QueryHandler(Protocol, Generic[Q]):
    async def handle(self, query: Q, context: TenantContext | None) -> Any:
        """Return a projection; never mutate"""
        ...
