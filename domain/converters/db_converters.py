"""
Converters: Database row format <-> domain models.

Provides conversion between Supabase rows and the workout session domain
models.

Database schema (workouts table):
- id: UUID
- user_id: Owning user
- category: Category label or custom name
- started_at, ended_at: Timestamps
- paused_duration: Seconds spent paused (float)

Database schema (exercise_sets table):
- id: UUID (client idempotency key)
- workout_id, exercise_id: References
- weight: float
- reps: int
- created_at: Timestamp
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from domain.models import ExercisePerformance, HistoricalSet, WorkoutRecord


def _parse_datetime(value: Any) -> Optional[datetime]:
    """Parse datetime from various formats."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            # Python < 3.11 does not accept the Z suffix
            if value.endswith("Z"):
                value = value[:-1] + "+00:00"
            return datetime.fromisoformat(value)
        except ValueError:
            return None
    return None


def db_row_to_workout_record(row: Dict[str, Any]) -> WorkoutRecord:
    """
    Convert a ``workouts`` row to a WorkoutRecord.

    Raises:
        ValueError: If the row has no id or no parseable started_at.
    """
    if not row.get("id"):
        raise ValueError("Workout row is missing 'id'")
    started_at = _parse_datetime(row.get("started_at"))
    if started_at is None:
        raise ValueError(f"Workout row {row['id']} has no valid 'started_at'")

    return WorkoutRecord(
        id=str(row["id"]),
        user_id=row.get("user_id"),
        category=row.get("category") or "",
        started_at=started_at,
        ended_at=_parse_datetime(row.get("ended_at")),
        paused_duration=float(row.get("paused_duration") or 0.0),
    )


def workout_record_to_db_row(record: WorkoutRecord) -> Dict[str, Any]:
    """Convert a WorkoutRecord to a ``workouts`` row."""
    return {
        "id": record.id,
        "user_id": record.user_id,
        "category": record.category,
        "started_at": record.started_at.isoformat(),
        "ended_at": record.ended_at.isoformat() if record.ended_at else None,
        "paused_duration": record.paused_duration,
    }


def db_row_to_historical_set(row: Dict[str, Any]) -> HistoricalSet:
    """Convert an ``exercise_sets`` row to a HistoricalSet."""
    return HistoricalSet(
        weight=float(row.get("weight") or 0.0),
        reps=int(row.get("reps") or 0),
        created_at=_parse_datetime(row.get("created_at")),
    )


def set_rows_to_performance(
    exercise_id: str,
    rows: List[Dict[str, Any]],
    *,
    exercise_name: str = "",
) -> Optional[ExercisePerformance]:
    """
    Build the last-performance snapshot for an exercise.

    ``rows`` are ``exercise_sets`` rows ordered newest first. Only the sets
    belonging to the most recent workout are kept, and they are returned in
    the order they were recorded.

    Returns:
        ExercisePerformance, or None when there is no history.
    """
    if not rows:
        return None

    latest_workout = rows[0].get("workout_id")
    latest_rows = [r for r in rows if r.get("workout_id") == latest_workout]
    sets = [db_row_to_historical_set(r) for r in reversed(latest_rows)]
    dates = [s.created_at for s in sets if s.created_at is not None]

    return ExercisePerformance(
        exercise_id=exercise_id,
        exercise_name=exercise_name,
        sets=sets,
        most_recent_date=max(dates) if dates else None,
    )
