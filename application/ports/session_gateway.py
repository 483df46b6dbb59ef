"""
Session Gateway Interface (Port).

This module defines the abstract interface through which an active workout
session persists durable records. Implementations may use Supabase,
in-memory storage, or other backends.

All methods are coroutines: the session awaits them without blocking its
event loop and applies the result afterwards.
"""
from datetime import datetime
from typing import Optional, Protocol

from domain.models import ExercisePerformance, WorkoutRecord


class SessionGateway(Protocol):
    """
    Abstract interface for workout session persistence.

    Errors are reported with the exceptions from ``application.exceptions``:
    ``UnauthenticatedError``, ``GatewayNetworkError`` and ``NotFoundError``.
    """

    async def create_workout(
        self,
        category: str,
        custom_name: Optional[str] = None,
    ) -> WorkoutRecord:
        """
        Create the workout record for a new session.

        Args:
            category: Category label (e.g. "Push Day") or "Custom"
            custom_name: Name of a custom workout, stored as its category

        Returns:
            The created record with server-assigned id and started_at

        Raises:
            UnauthenticatedError: No active user
            GatewayNetworkError: Transport failure
        """
        ...

    async def update_workout(
        self,
        workout_id: str,
        ended_at: datetime,
        paused_duration: float,
    ) -> None:
        """
        Persist the end of a workout.

        Args:
            workout_id: Workout identifier
            ended_at: When the workout ended
            paused_duration: Total seconds spent paused

        Raises:
            NotFoundError: The workout does not exist
            GatewayNetworkError: Transport failure
        """
        ...

    async def save_set(
        self,
        workout_id: str,
        exercise_id: str,
        weight: float,
        reps: int,
        timestamp: datetime,
        *,
        idempotency_key: Optional[str] = None,
    ) -> None:
        """
        Persist one completed set.

        Not idempotent unless the implementation honours ``idempotency_key``;
        retrying after an ambiguous failure may otherwise create a duplicate.

        Args:
            workout_id: Workout the set belongs to
            exercise_id: Library exercise identifier
            weight: Weight lifted
            reps: Repetitions performed
            timestamp: When the set was recorded
            idempotency_key: Stable client-side key for this set

        Raises:
            UnauthenticatedError: No active user
            GatewayNetworkError: Transport failure
        """
        ...

    async def fetch_last_performance(
        self,
        exercise_id: str,
    ) -> Optional[ExercisePerformance]:
        """
        Fetch the sets from the most recent session of an exercise.

        Best-effort: callers swallow failures and leave the cache empty.

        Returns:
            ExercisePerformance, or None when there is no history
        """
        ...
