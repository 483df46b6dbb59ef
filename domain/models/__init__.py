"""
Domain models for the workout session core.

These models are independent of infrastructure concerns (database, network)
and represent the core concepts of an active workout:
- WorkoutRecord: The server-confirmed workout row
- WorkoutCategory: Fixed set of categories (plus custom)
- ExerciseRef: Read-only reference to a library exercise
- WorkoutExerciseDraft: An exercise added to the running session
- SetDraft: A weight x reps entry, draft until persisted
- ExercisePerformance / HistoricalSet: What was done last time

Usage:
    >>> from domain.models import SetDraft, WorkoutExerciseDraft

    >>> exercise = WorkoutExerciseDraft(
    ...     exercise_id="ex-1",
    ...     exercise_name="Bench Press",
    ...     sets=[SetDraft(weight=135, reps=10)],
    ... )
    >>> exercise.sets[0].is_valid
    True
"""

from domain.models.category import WorkoutCategory
from domain.models.exercise import ExerciseRef, WorkoutExerciseDraft
from domain.models.performance import (
    NO_PREVIOUS_DATA,
    ExercisePerformance,
    HistoricalSet,
    best_set,
    last_workout_summary,
)
from domain.models.set_draft import SetDraft, format_set, format_weight
from domain.models.workout import WorkoutRecord

__all__ = [
    # Main entities
    "WorkoutRecord",
    "WorkoutExerciseDraft",
    "SetDraft",
    "ExerciseRef",
    "ExercisePerformance",
    "HistoricalSet",
    # Enums
    "WorkoutCategory",
    # Formatting and aggregation
    "NO_PREVIOUS_DATA",
    "best_set",
    "format_set",
    "format_weight",
    "last_workout_summary",
]
