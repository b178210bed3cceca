"""
Application exceptions.

Dispatch errors are programming errors (a missing or duplicate handler
registration), not runtime domain conditions.
"""

from src.domain.exceptions import DomainException


class DispatchMisconfigurationException(DomainException):
    """Handler registry is inconsistent (duplicate, wrong channel or incomplete)."""

    def __init__(self, message: str, message_type: str | None = None):
        details = {"message_type": message_type} if message_type else {}
        super().__init__(message, "DISPATCH_MISCONFIGURED", details)


class HandlerNotRegisteredException(DispatchMisconfigurationException):
    """No handler registered for a command or query type."""

    def __init__(self, message_type: str, channel: str):
        super().__init__(f"No {channel} handler registered for {message_type}", message_type)
        self.details["channel"] = channel
