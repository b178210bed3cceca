"""Command/query dispatch."""

from src.application.cqrs.dispatcher import Dispatcher
from src.application.cqrs.messages import (Command, CommandHandler, Query,
                                           QueryHandler)

__all__ = [
    "Command",
    "Query",
    "CommandHandler",
    "QueryHandler",
    "Dispatcher",
]
