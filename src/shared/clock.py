"""
Clock abstraction.

Aggregates never read the wall clock themselves; handlers inject a clock
and pass it down. Tests use FixedClock to pin "now".
"""

from datetime import datetime, timedelta
from typing import Protocol

from src.shared.utils.datetime import ensure_utc, utc_now


class Clock(Protocol):
    """Source of the current time"""

    def now(self) -> datetime:
        ...


class SystemClock:
    """Wall-clock time in UTC"""

    def now(self) -> datetime:
        return utc_now()


class FixedClock:
    """Clock pinned to a given instant; can be moved forward explicitly."""

    def __init__(self, current: datetime) -> None:
        self._current = ensure_utc(current)

    def now(self) -> datetime:
        return self._current

    def set(self, current: datetime) -> None:
        self._current = ensure_utc(current)

    def advance(self, **kwargs: float) -> datetime:
        """Move forward by timedelta kwargs (days=1, hours=2, ...)."""
        self._current = self._current + timedelta(**kwargs)
        return self._current


system_clock = SystemClock()
