"""
Domain converters between Supabase rows and domain models.

All converters are pure functions with no side effects.

Examples:
    >>> from domain.converters import db_row_to_workout_record
    >>> record = db_row_to_workout_record(
    ...     {"id": "w-1", "category": "Leg Day", "started_at": "2024-01-01T10:00:00Z"}
    ... )
    >>> record.is_active
    True
"""

from domain.converters.db_converters import (
    db_row_to_historical_set,
    db_row_to_workout_record,
    set_rows_to_performance,
    workout_record_to_db_row,
)

__all__ = [
    "db_row_to_historical_set",
    "db_row_to_workout_record",
    "set_rows_to_performance",
    "workout_record_to_db_row",
]
