"""Unit tests for the clock abstraction"""

from datetime import datetime, timedelta, timezone

import pytest

from src.platform.clock.clock import FixedClock, SystemClock, ensure_utc


@pytest.mark.unit
class TestClock:
    def test_system_clock_is_utc_aware(self) -> None:
        now = SystemClock().now()

        assert now.tzinfo is not None
        assert now.utcoffset() == timedelta(0)

    def test_fixed_clock_moves_only_when_told(self) -> None:
        start = datetime(2026, 3, 1, tzinfo=timezone.utc)
        clock = FixedClock(start)

        assert clock.now() == start
        clock.advance(timedelta(hours=2))
        assert clock.now() == start + timedelta(hours=2)
        clock.set(datetime(2026, 4, 1))
        assert clock.now() == datetime(2026, 4, 1, tzinfo=timezone.utc)

    def test_ensure_utc(self) -> None:
        taipei = timezone(timedelta(hours=8))

        assert ensure_utc(datetime(2026, 3, 1, 8, tzinfo=taipei)) == datetime(
            2026, 3, 1, 0, tzinfo=timezone.utc
        )
        assert ensure_utc(datetime(2026, 3, 1)).tzinfo == timezone.utc
