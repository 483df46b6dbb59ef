"""
Historical performance value objects.

These describe what the user did for an exercise the last time it was
performed. They are fetched from the backend once per exercise and never
mutated by the session.
"""

from datetime import datetime
from typing import List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from domain.models.set_draft import format_set, format_weight

NO_PREVIOUS_DATA = "No previous data"


class HistoricalSet(BaseModel):
    """A persisted set from a previous workout."""

    model_config = ConfigDict(frozen=True)

    weight: float = Field(..., description="Weight lifted")
    reps: int = Field(..., description="Repetitions performed")
    created_at: Optional[datetime] = Field(
        default=None, description="When the set was recorded"
    )

    @property
    def volume(self) -> float:
        return float(self.weight) * self.reps

    @property
    def display_text(self) -> str:
        return format_set(self.weight, self.reps)


def best_set(sets: Sequence[HistoricalSet]) -> Optional[HistoricalSet]:
    """
    Get the set with the highest volume.

    Ties are broken by input order: the first set reaching the maximum wins.
    """
    if not sets:
        return None
    return max(sets, key=lambda s: s.volume)


def last_workout_summary(sets: Sequence[HistoricalSet]) -> str:
    """
    Summarize the sets of the most recent session for an exercise.

    Rules:
    - no sets: ``"No previous data"``
    - one set: ``"{weight} × {reps}"``
    - identical weight and reps across all sets: ``"{weight} × {reps} × {count}"``
    - otherwise the highest-volume set followed by ``" (best)"``

    Weights are compared by their display text so that e.g. 135.0 and 135
    count as the same weight.

    Examples:
        >>> sets = [HistoricalSet(weight=135, reps=10)] * 3
        >>> last_workout_summary(sets)
        '135 × 10 × 3'
        >>> last_workout_summary(
        ...     [HistoricalSet(weight=135, reps=10), HistoricalSet(weight=125, reps=12)]
        ... )
        '125 × 12 (best)'
    """
    if not sets:
        return NO_PREVIOUS_DATA
    if len(sets) == 1:
        return sets[0].display_text

    weights = {format_weight(s.weight) for s in sets}
    reps = {s.reps for s in sets}
    if len(weights) == 1 and len(reps) == 1:
        first = sets[0]
        return f"{format_set(first.weight, first.reps)} × {len(sets)}"

    return f"{best_set(sets).display_text} (best)"


class ExercisePerformance(BaseModel):
    """
    Cached read of the last session in which an exercise was performed.

    Examples:
        >>> perf = ExercisePerformance(
        ...     exercise_id="ex-1",
        ...     exercise_name="Bench Press",
        ...     sets=[HistoricalSet(weight=135, reps=10)],
        ... )
        >>> perf.summary
        '135 × 10'
    """

    model_config = ConfigDict(frozen=True)

    exercise_id: str = Field(..., description="Library exercise identifier")
    exercise_name: str = Field(default="", description="Library exercise name")
    sets: List[HistoricalSet] = Field(
        default_factory=list,
        description="Sets from the most recent session, in recorded order",
    )
    most_recent_date: Optional[datetime] = Field(
        default=None, description="Date of the most recent session"
    )

    @property
    def best_set(self) -> Optional[HistoricalSet]:
        return best_set(self.sets)

    @property
    def summary(self) -> str:
        return last_workout_summary(self.sets)
