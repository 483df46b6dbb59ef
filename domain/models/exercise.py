"""
Exercise entities used by an active workout.

``ExerciseRef`` is the read-only reference to a library exercise handed in by
the caller. ``WorkoutExerciseDraft`` is that exercise as added to a running
session, together with its set drafts.
"""

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from domain.models.performance import ExercisePerformance
from domain.models.set_draft import SetDraft


class ExerciseRef(BaseModel):
    """Reference to an exercise owned by the exercise library."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Library exercise identifier")
    name: str = Field(..., min_length=1, description="Exercise display name")


class WorkoutExerciseDraft(BaseModel):
    """
    An exercise added to the running session plus its ordered set drafts.

    The position of a draft in ``sets`` is its set number (1-based on
    display). ``last_performance`` is a cached snapshot of history and is
    never modified by the session.

    Examples:
        >>> draft = WorkoutExerciseDraft(exercise_id="ex-1", exercise_name="Squat")
        >>> draft.sets.append(SetDraft(weight=225, reps=5, is_completed=True))
        >>> draft.completed_count
        1
    """

    exercise_id: str = Field(..., description="Library exercise identifier")
    exercise_name: str = Field(..., description="Library exercise name")
    sets: List[SetDraft] = Field(default_factory=list, description="Set drafts")
    last_performance: Optional[ExercisePerformance] = Field(
        default=None, description="History from the last session, if loaded"
    )
    added_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the exercise was added to the session",
    )

    @property
    def completed_sets(self) -> List[SetDraft]:
        return [s for s in self.sets if s.is_completed]

    @property
    def completed_count(self) -> int:
        return len(self.completed_sets)

    @property
    def has_completed_sets(self) -> bool:
        return any(s.is_completed for s in self.sets)

    @property
    def volume(self) -> float:
        """Total volume of the completed sets."""
        return sum(s.volume for s in self.completed_sets)

    def find_set(self, set_id: str) -> Optional[SetDraft]:
        """Get the draft with ``set_id``, or None if it was removed."""
        for draft in self.sets:
            if draft.id == set_id:
                return draft
        return None
