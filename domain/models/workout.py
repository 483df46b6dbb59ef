"""
WorkoutRecord - the server-confirmed workout row.

The backend assigns the identifier and canonical start time when a workout is
created; the end time and total paused duration are written when it is
finished.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from domain.services.session_timer import format_duration


class WorkoutRecord(BaseModel):
    """
    Persisted workout record as returned by the gateway.

    Examples:
        >>> from datetime import timedelta
        >>> start = datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc)
        >>> record = WorkoutRecord(
        ...     id="w-1",
        ...     category="Push Day",
        ...     started_at=start,
        ...     ended_at=start + timedelta(minutes=45),
        ...     paused_duration=300,
        ... )
        >>> record.formatted_duration
        '40:00'
    """

    id: str = Field(..., description="Server-assigned identifier")
    user_id: Optional[str] = Field(default=None, description="Owning user")
    category: str = Field(..., description="Category label or custom name")
    started_at: datetime = Field(..., description="Canonical start time")
    ended_at: Optional[datetime] = Field(default=None, description="End time")
    paused_duration: float = Field(
        default=0.0, ge=0, description="Total seconds spent paused"
    )

    @field_validator("started_at", "ended_at")
    @classmethod
    def ensure_timezone(cls, v: Optional[datetime]) -> Optional[datetime]:
        """Treat naive timestamps from the backend as UTC."""
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @property
    def is_active(self) -> bool:
        return self.ended_at is None

    def actual_duration(self, now: Optional[datetime] = None) -> float:
        """
        Get the active duration in seconds.

        Uses ``ended_at`` when set, otherwise ``now`` (defaults to current
        UTC time).
        """
        end = self.ended_at or now or datetime.now(timezone.utc)
        return max(0.0, (end - self.started_at).total_seconds() - self.paused_duration)

    @property
    def formatted_duration(self) -> str:
        return format_duration(self.actual_duration())
