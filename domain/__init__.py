"""
Domain layer for the workout session core.

This package contains pure domain models and services that are independent
of infrastructure concerns (database, network, presentation).
"""

from domain.models import (
    ExercisePerformance,
    ExerciseRef,
    HistoricalSet,
    SetDraft,
    WorkoutCategory,
    WorkoutExerciseDraft,
    WorkoutRecord,
)
from domain.services import SessionTimer, format_duration

__all__ = [
    "ExercisePerformance",
    "ExerciseRef",
    "HistoricalSet",
    "SetDraft",
    "WorkoutCategory",
    "WorkoutExerciseDraft",
    "WorkoutRecord",
    "SessionTimer",
    "format_duration",
]
