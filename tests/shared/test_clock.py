"""Tests for clock implementations and datetime helpers"""

from datetime import datetime, timedelta, timezone

from freezegun import freeze_time

from src.shared.clock import FixedClock, system_clock
from src.shared.utils.datetime import add_months, ensure_utc

FROZEN_TIME = "2025-03-01 09:00:00"


@freeze_time(FROZEN_TIME)
def test_system_clock_is_utc():
    now = system_clock.now()

    assert now == datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc)
    assert now.tzinfo is not None


def test_fixed_clock_advances():
    clock = FixedClock(datetime(2025, 3, 1, 9, 0))

    clock.advance(days=1, hours=2)

    assert clock.now() == datetime(2025, 3, 2, 11, 0, tzinfo=timezone.utc)


def test_ensure_utc_converts_offsets():
    local = datetime(2025, 3, 1, 12, 0, tzinfo=timezone(timedelta(hours=3)))

    assert ensure_utc(local) == datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc)


def test_add_months_clamps_to_month_end():
    start = datetime(2025, 1, 31, tzinfo=timezone.utc)

    assert add_months(start, 1) == datetime(2025, 2, 28, tzinfo=timezone.utc)
    assert add_months(start, 12) == datetime(2026, 1, 31, tzinfo=timezone.utc)
