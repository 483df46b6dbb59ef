"""
Clock Interface (Port).

Supplies the current wall-clock time. Injected into the session so that
tests can control time explicitly.
"""
from datetime import datetime, timezone
from typing import Protocol


class Clock(Protocol):
    """Source of the current time."""

    def now(self) -> datetime:
        """Return the current time as a timezone-aware datetime."""
        ...


class SystemClock:
    """Clock backed by the system's UTC time."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)
