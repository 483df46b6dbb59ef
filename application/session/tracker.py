"""
ActiveWorkoutTracker - owner of "the current workout".

Models the absence of a workout explicitly as a tagged state instead of a
nullable reference:

    NoSession | InSession(session)

The tracker also keeps the per-exercise history cache. History is fetched in
the background on a best-effort basis and merged into the running session
only if the exercise is still part of it.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import AsyncIterator, Callable, Dict, Iterable, List, Optional, Union

from application.exceptions import InvalidInputError
from application.ports import Clock, SessionGateway
from application.session.ticker import DEFAULT_POLL_INTERVAL_SECONDS, iter_duration
from application.session.workout_session import WorkoutSession
from domain.models import ExercisePerformance, ExerciseRef, WorkoutCategory, WorkoutRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NoSession:
    """No workout is in progress."""


@dataclass(frozen=True)
class InSession:
    """A workout is in progress."""

    session: WorkoutSession


ActiveWorkout = Union[NoSession, InSession]

CompletionListener = Callable[[WorkoutRecord], None]


class ActiveWorkoutTracker:
    """
    Starts, holds and ends the current workout session.

    Dependencies are injected via constructor for testability.

    Usage:
        tracker = ActiveWorkoutTracker(gateway)
        session = await tracker.start_workout(WorkoutCategory.LEGS)
        await tracker.load_performance("squat")
        tracker.add_exercise(ExerciseRef(id="squat", name="Squat"))
        record = await tracker.end_workout()
    """

    def __init__(
        self,
        gateway: SessionGateway,
        *,
        clock: Optional[Clock] = None,
        poll_interval: float = DEFAULT_POLL_INTERVAL_SECONDS,
    ) -> None:
        """
        Args:
            gateway: Gateway used for every durable operation
            clock: Time source passed to started sessions
            poll_interval: Seconds between updates from :meth:`duration_updates`
        """
        self._gateway = gateway
        self._clock = clock
        self.poll_interval = poll_interval
        # Serializes start/end so the state check and the transition are atomic
        self._lifecycle_lock = asyncio.Lock()
        self._state: ActiveWorkout = NoSession()
        self._performances: Dict[str, ExercisePerformance] = {}
        self._completion_listeners: List[CompletionListener] = []

    @property
    def state(self) -> ActiveWorkout:
        return self._state

    @property
    def has_active_workout(self) -> bool:
        return isinstance(self._state, InSession)

    @property
    def session(self) -> WorkoutSession:
        """
        Get the running session.

        Raises:
            InvalidInputError: No workout is in progress
        """
        if isinstance(self._state, InSession):
            return self._state.session
        raise InvalidInputError("No workout in progress")

    @property
    def performances(self) -> Dict[str, ExercisePerformance]:
        return dict(self._performances)

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    async def start_workout(
        self,
        category: Union[WorkoutCategory, str],
        custom_name: Optional[str] = None,
    ) -> WorkoutSession:
        """
        Start a new workout.

        Raises:
            InvalidInputError: A workout is already in progress, or the
                category/name is invalid
            UnauthenticatedError, GatewayNetworkError: From the gateway
        """
        async with self._lifecycle_lock:
            if isinstance(self._state, InSession):
                raise InvalidInputError(
                    f"Workout {self._state.session.id} is already in progress"
                )
            session = await WorkoutSession.start(
                self._gateway, category, custom_name, clock=self._clock
            )
            self._state = InSession(session)
        return session

    async def start_custom_workout(self, name: str) -> WorkoutSession:
        return await self.start_workout(WorkoutCategory.CUSTOM, name)

    async def end_workout(self) -> Optional[WorkoutRecord]:
        """
        End the current workout and return to NoSession.

        Returns:
            The final record, or None if no workout was in progress.

        Raises:
            NotFoundError, GatewayNetworkError: From the gateway; the
                workout stays in progress
        """
        async with self._lifecycle_lock:
            if not isinstance(self._state, InSession):
                return None
            record = await self._state.session.end()
            self._state = NoSession()
            self._performances.clear()

        for listener in list(self._completion_listeners):
            try:
                listener(record)
            except Exception:
                logger.exception("Workout completion listener failed for %s", record.id)
        return record

    def on_workout_completed(self, listener: CompletionListener) -> Callable[[], None]:
        """
        Register a listener called with the final record of each workout.

        Returns:
            A callable that removes the listener.
        """
        self._completion_listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._completion_listeners:
                self._completion_listeners.remove(listener)

        return unsubscribe

    def duration_updates(self) -> AsyncIterator[str]:
        """
        Formatted duration of the running session every ``poll_interval``.

        The iterator stops once the session has ended.

        Raises:
            InvalidInputError: No workout is in progress
        """
        return iter_duration(self.session, self.poll_interval)

    # -------------------------------------------------------------------------
    # Exercises and history
    # -------------------------------------------------------------------------

    def add_exercise(self, exercise: ExerciseRef) -> bool:
        """Add an exercise to the running session with any cached history."""
        return self.session.add_exercise(exercise, self._performances.get(exercise.id))

    async def load_performance(self, exercise_id: str) -> Optional[ExercisePerformance]:
        """
        Fetch and cache the last performance of an exercise.

        Failures are logged and swallowed: history is not critical.

        Returns:
            The fetched performance, or None on failure or no history.
        """
        try:
            performance = await self._gateway.fetch_last_performance(exercise_id)
        except Exception as e:
            logger.warning("Failed to load performance for %s: %s", exercise_id, e)
            return None

        if performance is None:
            return None

        self._performances[exercise_id] = performance
        if isinstance(self._state, InSession):
            self._state.session.merge_performance(exercise_id, performance)
        return performance

    async def preload_performances(self, exercise_ids: Iterable[str]) -> int:
        """
        Load history for several exercises concurrently.

        Returns:
            Number of exercises with history.
        """
        results = await asyncio.gather(
            *(self.load_performance(exercise_id) for exercise_id in exercise_ids)
        )
        loaded = sum(1 for r in results if r is not None)
        logger.debug("Preloaded performance for %d exercises", loaded)
        return loaded
