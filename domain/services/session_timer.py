"""
Session timer arithmetic.

Computes the displayed elapsed duration of a workout, excluding time spent
paused. All values are in seconds; timestamps are timezone-aware datetimes.

While running:
    elapsed = now - started_at - paused_duration

While paused the display is frozen at the moment the pause began:
    elapsed = pause_started_at - started_at - paused_duration
"""

import math
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


def format_duration(seconds: float) -> str:
    """
    Format a duration in seconds as ``M:SS`` or ``H:MM:SS``.

    Fractions of a second are truncated, never rounded.

    Examples:
        >>> format_duration(125)
        '2:05'
        >>> format_duration(3725.9)
        '1:02:05'
    """
    total = max(0, math.floor(seconds))
    hours = total // 3600
    minutes = (total % 3600) // 60
    secs = total % 60

    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


class SessionTimer(BaseModel):
    """
    Elapsed-time tracker with pause/resume.

    ``pause`` and ``resume`` are guarded: pausing a paused timer or resuming a
    running one does nothing and returns False.

    Examples:
        >>> from datetime import timedelta, timezone
        >>> t0 = datetime(2024, 1, 1, tzinfo=timezone.utc)
        >>> timer = SessionTimer(started_at=t0)
        >>> timer.pause(t0 + timedelta(seconds=10))
        True
        >>> timer.resume(t0 + timedelta(seconds=15))
        True
        >>> timer.elapsed(t0 + timedelta(seconds=20))
        15.0
    """

    started_at: datetime = Field(..., description="Session start time")
    paused_duration: float = Field(
        default=0.0, ge=0, description="Accumulated seconds spent paused"
    )
    pause_started_at: Optional[datetime] = Field(
        default=None, description="When the current pause began, if paused"
    )

    @property
    def is_paused(self) -> bool:
        return self.pause_started_at is not None

    def elapsed(self, now: datetime) -> float:
        """Get the active duration in seconds at ``now``."""
        reference = self.pause_started_at if self.is_paused else now
        value = (reference - self.started_at).total_seconds() - self.paused_duration
        return max(0.0, value)

    def pause(self, now: datetime) -> bool:
        if self.is_paused:
            return False
        self.pause_started_at = now
        return True

    def resume(self, now: datetime) -> bool:
        if not self.is_paused:
            return False
        interval = (now - self.pause_started_at).total_seconds()
        # A clock that moved backwards must not shrink the accumulated pause
        self.paused_duration += max(0.0, interval)
        self.pause_started_at = None
        return True

    def formatted(self, now: datetime) -> str:
        return format_duration(self.elapsed(now))
