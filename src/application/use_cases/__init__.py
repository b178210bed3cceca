"""Application use cases (command and query handlers)."""

from src.application.use_cases.registry import (COMMAND_TYPES, QUERY_TYPES,
                                                build_dispatcher)

__all__ = [
    "COMMAND_TYPES",
    "QUERY_TYPES",
    "build_dispatcher",
]
