"""Tracing helpers built on the OpenTelemetry API.

Only the API package is required: without a configured SDK the tracer is a
no-op, so the core can run (and be tested) with tracing switched off.
"""
from typing import Any, ContextManager

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

from src.infrastructure.config.settings import get_settings

TRACER_NAME = "tenant_core"


def _tracer() -> trace.Tracer:
    return trace.get_tracer(TRACER_NAME)


class TracedOperation:
    """
    Context manager for creating a traced operation

    Usage:
        async with TracedOperation("dispatch.command", {"message.type": "LaunchCampaign"}):
            await handler.handle(command, context)

    Spans are skipped entirely when telemetry is disabled in settings.
    """

    def __init__(self, operation_name: str, attributes: dict[str, Any] | None = None):
        self.operation_name = operation_name
        self.attributes = {k: v for k, v in (attributes or {}).items() if v is not None}
        self.enabled = get_settings().telemetry_enabled
        self.span: trace.Span | None = None
        self._scope: ContextManager[trace.Span] | None = None

    def __enter__(self) -> "TracedOperation":
        if not self.enabled:
            return self
        self.span = _tracer().start_span(self.operation_name, attributes=self.attributes)
        # Current for the duration of the block, so nested spans become children
        self._scope = trace.use_span(
            self.span, end_on_exit=True, record_exception=False, set_status_on_exception=False
        )
        self._scope.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self.span is None:
            return
        if exc_type is not None:
            self.span.set_status(Status(StatusCode.ERROR, str(exc_val)))
            self.span.record_exception(exc_val)
        else:
            self.span.set_status(Status(StatusCode.OK))
        if self._scope is not None:
            self._scope.__exit__(exc_type, exc_val, exc_tb)
            self._scope = None

    async def __aenter__(self) -> "TracedOperation":
        return self.__enter__()

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        self.__exit__(exc_type, exc_val, exc_tb)
