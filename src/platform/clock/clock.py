"""
Time source for every date-dependent rule.

Domain code never calls `datetime.now()` directly; it asks an `IClock`.
Production wires `SystemClock`; tests and replays wire `FixedClock`.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone


class IClock(ABC):
    @abstractmethod
    def now(self) -> datetime:
        """Current instant as a timezone-aware UTC datetime"""
        pass


class SystemClock(IClock):
    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock(IClock):
    """Clock frozen at a given instant until moved explicitly."""

    def __init__(self, instant: datetime) -> None:
        self._instant = ensure_utc(instant)

    def now(self) -> datetime:
        return self._instant

    def set(self, instant: datetime) -> None:
        self._instant = ensure_utc(instant)

    def advance(self, delta: timedelta) -> None:
        self._instant = self._instant + delta


def ensure_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
