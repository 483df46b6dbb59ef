"""
WorkoutSession - the active-workout state machine.

Owns the lifecycle of one in-progress workout:

    (not started) --start--> ACTIVE <--toggle_pause--> PAUSED
    ACTIVE / PAUSED --end--> ENDED (terminal)

The "not started" state has no session object; see
``application.session.tracker`` for the owner that models it explicitly.

Durable operations (``start``, ``save_set``, ``end``) await the injected
SessionGateway. They are serialized through one FIFO lock so they apply in
issue order, and their results are merged back by identity (never by index)
so edits made while a call was in flight are not lost. Everything else is a
synchronous in-memory mutation.

Subscribers receive an immutable SessionSnapshot after every successful
mutation.
"""

import asyncio
import logging
from datetime import datetime
from enum import Enum
from typing import Callable, List, Optional, Set, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from application.exceptions import InvalidInputError, SessionEndedError
from application.ports import Clock, SessionGateway, SystemClock
from domain.models import (
    ExercisePerformance,
    ExerciseRef,
    SetDraft,
    WorkoutCategory,
    WorkoutExerciseDraft,
    WorkoutRecord,
)
from domain.services import SessionTimer, format_duration

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    """Lifecycle states of a started session."""

    ACTIVE = "active"
    PAUSED = "paused"
    ENDED = "ended"


class SessionSnapshot(BaseModel):
    """Immutable view of a session, published to subscribers."""

    model_config = ConfigDict(frozen=True)

    workout_id: str
    category: str
    state: SessionState
    started_at: datetime
    ended_at: Optional[datetime] = None
    paused_duration: float = 0.0
    elapsed_seconds: float = 0.0
    formatted_duration: str = "0:00"
    exercises: Tuple[WorkoutExerciseDraft, ...] = Field(default_factory=tuple)
    exercise_count: int = 0
    total_sets: int = 0
    total_completed_sets: int = 0
    total_volume: float = 0.0


SnapshotListener = Callable[[SessionSnapshot], None]


class WorkoutSession:
    """
    State machine for one active workout.

    Create sessions with :meth:`start`, which persists the workout record
    first and only then builds the session (create-or-fail).

    Usage:
        session = await WorkoutSession.start(gateway, WorkoutCategory.PUSH)
        session.add_exercise(ExerciseRef(id="ex-1", name="Bench Press"))
        session.update_set("ex-1", 0, weight=135, reps=10)
        await session.save_set("ex-1", 0)
        await session.end()
    """

    def __init__(
        self,
        record: WorkoutRecord,
        gateway: SessionGateway,
        *,
        clock: Optional[Clock] = None,
    ) -> None:
        """
        Initialize a session around a server-confirmed workout record.

        Args:
            record: Workout record returned by the gateway
            gateway: Gateway used for durable operations
            clock: Time source (defaults to system UTC time)
        """
        self._record = record
        self._gateway = gateway
        self._clock = clock or SystemClock()
        self._timer = SessionTimer(
            started_at=record.started_at,
            paused_duration=record.paused_duration,
        )
        self._exercises: List[WorkoutExerciseDraft] = []
        self._ended_at: Optional[datetime] = None
        self._listeners: List[SnapshotListener] = []
        self._io_lock = asyncio.Lock()
        # Ids of drafts with a save_set call pending; read-only until it settles
        self._saving: Set[str] = set()

    @classmethod
    async def start(
        cls,
        gateway: SessionGateway,
        category: Union[WorkoutCategory, str],
        custom_name: Optional[str] = None,
        *,
        clock: Optional[Clock] = None,
    ) -> "WorkoutSession":
        """
        Create the workout record and return an ACTIVE session.

        Args:
            gateway: Gateway used to create the workout record
            category: Workout category (enum, label or member name)
            custom_name: Required non-empty name for CUSTOM workouts
            clock: Time source

        Returns:
            A new ACTIVE session with no exercises

        Raises:
            InvalidInputError: Unknown category or missing custom name
            UnauthenticatedError, GatewayNetworkError: From the gateway
        """
        try:
            category = WorkoutCategory.parse(category)
        except ValueError as e:
            raise InvalidInputError(str(e)) from e

        name: Optional[str] = None
        if category.is_custom:
            name = (custom_name or "").strip()
            if not name:
                raise InvalidInputError("Custom workouts require a non-empty name")

        logger.info("Starting workout (%s)", name or category.value)
        record = await gateway.create_workout(category.value, name)
        logger.info("Workout %s started at %s", record.id, record.started_at.isoformat())
        return cls(record, gateway, clock=clock)

    # -------------------------------------------------------------------------
    # Read-only state
    # -------------------------------------------------------------------------

    @property
    def id(self) -> str:
        return self._record.id

    @property
    def category(self) -> str:
        return self._record.category

    @property
    def record(self) -> WorkoutRecord:
        return self._record

    @property
    def started_at(self) -> datetime:
        return self._record.started_at

    @property
    def ended_at(self) -> Optional[datetime]:
        return self._ended_at

    @property
    def state(self) -> SessionState:
        if self._ended_at is not None:
            return SessionState.ENDED
        if self._timer.is_paused:
            return SessionState.PAUSED
        return SessionState.ACTIVE

    @property
    def is_paused(self) -> bool:
        return self._timer.is_paused

    @property
    def is_in_progress(self) -> bool:
        return self._ended_at is None

    @property
    def paused_duration(self) -> float:
        return self._timer.paused_duration

    @property
    def pause_started_at(self) -> Optional[datetime]:
        return self._timer.pause_started_at

    @property
    def exercises(self) -> Tuple[WorkoutExerciseDraft, ...]:
        """Exercises in display order (newest first)."""
        return tuple(self._exercises)

    # -------------------------------------------------------------------------
    # Derived metrics
    # -------------------------------------------------------------------------

    @property
    def exercise_count(self) -> int:
        return len(self._exercises)

    @property
    def total_sets(self) -> int:
        """Number of set rows across all exercises, completed or not."""
        return sum(len(ex.sets) for ex in self._exercises)

    @property
    def total_completed_sets(self) -> int:
        return sum(ex.completed_count for ex in self._exercises)

    @property
    def total_volume(self) -> float:
        """Volume of completed sets across all exercises."""
        return sum(ex.volume for ex in self._exercises)

    @property
    def elapsed_seconds(self) -> float:
        now = self._ended_at or self._clock.now()
        return self._timer.elapsed(now)

    @property
    def formatted_duration(self) -> str:
        return format_duration(self.elapsed_seconds)

    def snapshot(self) -> SessionSnapshot:
        """Build an immutable, detached view of the current state."""
        elapsed = self.elapsed_seconds
        return SessionSnapshot(
            workout_id=self.id,
            category=self.category,
            state=self.state,
            started_at=self.started_at,
            ended_at=self._ended_at,
            paused_duration=self._timer.paused_duration,
            elapsed_seconds=elapsed,
            formatted_duration=format_duration(elapsed),
            exercises=tuple(ex.model_copy(deep=True) for ex in self._exercises),
            exercise_count=self.exercise_count,
            total_sets=self.total_sets,
            total_completed_sets=self.total_completed_sets,
            total_volume=self.total_volume,
        )

    # -------------------------------------------------------------------------
    # Subscriptions
    # -------------------------------------------------------------------------

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """
        Register a listener called with a snapshot after every mutation.

        Returns:
            A callable that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        if not self._listeners:
            return
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Session listener failed for workout %s", self.id)

    # -------------------------------------------------------------------------
    # Pause / resume
    # -------------------------------------------------------------------------

    def pause(self) -> bool:
        """Pause the timer. No-op (returns False) if paused or ended."""
        if not self.is_in_progress:
            return False
        changed = self._timer.pause(self._clock.now())
        if changed:
            logger.info("Workout %s paused at %s", self.id, self.formatted_duration)
            self._notify()
        return changed

    def resume(self) -> bool:
        """Resume the timer. No-op (returns False) if running or ended."""
        if not self.is_in_progress:
            return False
        changed = self._timer.resume(self._clock.now())
        if changed:
            logger.info(
                "Workout %s resumed, paused %.1fs in total",
                self.id,
                self._timer.paused_duration,
            )
            self._notify()
        return changed

    def toggle_pause(self) -> SessionState:
        """
        Switch between ACTIVE and PAUSED.

        Does nothing once the session has ended.

        Returns:
            The state after the call.
        """
        if self.is_paused:
            self.resume()
        else:
            self.pause()
        return self.state

    # -------------------------------------------------------------------------
    # Exercises and sets (in-memory)
    # -------------------------------------------------------------------------

    def _ensure_in_progress(self, action: str) -> None:
        if not self.is_in_progress:
            logger.warning("Rejected %s on ended workout %s", action, self.id)
            raise SessionEndedError(f"Cannot {action}: workout {self.id} has ended")

    def _find_exercise(self, exercise_id: str) -> Optional[WorkoutExerciseDraft]:
        for exercise in self._exercises:
            if exercise.exercise_id == exercise_id:
                return exercise
        return None

    def get_exercise(self, exercise_id: str) -> Optional[WorkoutExerciseDraft]:
        """Get the draft for ``exercise_id``, or None if not in the session."""
        return self._find_exercise(exercise_id)

    @staticmethod
    def _check_index(exercise: WorkoutExerciseDraft, index: int) -> SetDraft:
        if not 0 <= index < len(exercise.sets):
            raise IndexError(
                f"Set index {index} out of range for {exercise.exercise_name} "
                f"({len(exercise.sets)} sets)"
            )
        return exercise.sets[index]

    def _ensure_editable(
        self,
        exercise: WorkoutExerciseDraft,
        index: int,
        draft: SetDraft,
        action: str,
    ) -> None:
        if draft.is_completed:
            raise InvalidInputError(
                f"Cannot {action}: set {index + 1} of {exercise.exercise_name} is saved"
            )
        if draft.id in self._saving:
            raise InvalidInputError(
                f"Cannot {action}: set {index + 1} of {exercise.exercise_name} is being saved"
            )

    def add_exercise(
        self,
        exercise: ExerciseRef,
        performance: Optional[ExercisePerformance] = None,
    ) -> bool:
        """
        Add an exercise at the top of the list with one empty set.

        Args:
            exercise: Library exercise to add
            performance: Cached history for the exercise, if already loaded

        Returns:
            False if the exercise was already in the session (no-op).

        Raises:
            SessionEndedError: The session has ended
        """
        self._ensure_in_progress("add exercise")
        if self._find_exercise(exercise.id) is not None:
            return False

        self._exercises.insert(
            0,
            WorkoutExerciseDraft(
                exercise_id=exercise.id,
                exercise_name=exercise.name,
                sets=[SetDraft()],
                last_performance=performance,
                added_at=self._clock.now(),
            ),
        )
        logger.debug("Added %s to workout %s", exercise.name, self.id)
        self._notify()
        return True

    def remove_exercise(self, exercise_id: str) -> bool:
        """
        Remove an exercise and its drafts.

        Permitted even when some of its sets were already persisted; the
        persisted sets stay on the backend.

        Returns:
            False if the exercise was not in the session.
        """
        self._ensure_in_progress("remove exercise")
        exercise = self._find_exercise(exercise_id)
        if exercise is None:
            return False
        if exercise.has_completed_sets:
            logger.info(
                "Removing %s from workout %s with %d saved sets",
                exercise.exercise_name,
                self.id,
                exercise.completed_count,
            )
        self._exercises.remove(exercise)
        self._notify()
        return True

    def add_set(self, exercise_id: str) -> Optional[SetDraft]:
        """
        Append an empty set to an exercise.

        Returns:
            The new draft, or None if the exercise is not in the session.
        """
        self._ensure_in_progress("add set")
        exercise = self._find_exercise(exercise_id)
        if exercise is None:
            return None
        draft = SetDraft()
        exercise.sets.append(draft)
        self._notify()
        return draft

    def remove_set(self, exercise_id: str, index: int) -> Optional[SetDraft]:
        """
        Remove the set at ``index``.

        Returns:
            The removed draft, or None if the exercise is not in the session.

        Raises:
            IndexError: ``index`` is outside ``0 <= index < len(sets)``
            InvalidInputError: The set is saved or being saved
        """
        self._ensure_in_progress("remove set")
        exercise = self._find_exercise(exercise_id)
        if exercise is None:
            return None
        draft = self._check_index(exercise, index)
        self._ensure_editable(exercise, index, draft, "remove set")
        del exercise.sets[index]
        self._notify()
        return draft

    def update_set(
        self,
        exercise_id: str,
        index: int,
        weight: float,
        reps: int,
    ) -> Optional[SetDraft]:
        """
        Overwrite weight and reps of a draft in place.

        Meant to be called on every field change; completion state is left
        untouched.

        Returns:
            The updated draft, or None if the exercise is not in the session.

        Raises:
            IndexError: ``index`` is out of range
            InvalidInputError: The set is saved or being saved, or the values
                are not numbers (reps must be a whole number)
        """
        self._ensure_in_progress("update set")
        exercise = self._find_exercise(exercise_id)
        if exercise is None:
            return None
        draft = self._check_index(exercise, index)
        self._ensure_editable(exercise, index, draft, "update set")
        try:
            values = SetDraft(weight=weight, reps=reps)
        except ValidationError as e:
            raise InvalidInputError(
                f"Invalid values for set {index + 1} of {exercise.exercise_name}: "
                f"weight={weight!r} reps={reps!r}"
            ) from e
        draft.weight = values.weight
        draft.reps = values.reps
        self._notify()
        return draft

    def merge_performance(
        self,
        exercise_id: str,
        performance: ExercisePerformance,
    ) -> bool:
        """
        Attach fetched history to an exercise still in the session.

        A fetch that completes after the exercise was removed is ignored.

        Returns:
            True if the history was attached.
        """
        exercise = self._find_exercise(exercise_id)
        if exercise is None:
            logger.debug("Dropping late performance for %s: not in workout", exercise_id)
            return False
        exercise.last_performance = performance
        self._notify()
        return True

    # -------------------------------------------------------------------------
    # Durable operations
    # -------------------------------------------------------------------------

    async def save_set(self, exercise_id: str, index: int) -> Optional[SetDraft]:
        """
        Persist the set at ``index`` and mark it completed.

        Validation happens before any gateway call. The persisted weight and
        reps are the values at call time; the draft is located again by id
        once the gateway returns.

        Returns:
            The completed draft, or None if it was removed while saving.

        Raises:
            SessionEndedError: The session has ended
            InvalidInputError: Unknown exercise, invalid set, or a set already
                saved or being saved
            IndexError: ``index`` is out of range
            UnauthenticatedError, GatewayNetworkError: From the gateway
        """
        self._ensure_in_progress("save set")
        exercise = self._find_exercise(exercise_id)
        if exercise is None:
            raise InvalidInputError(f"Exercise {exercise_id} is not in this workout")
        draft = self._check_index(exercise, index)
        if draft.is_completed:
            raise InvalidInputError(
                f"Set {index + 1} of {exercise.exercise_name} is already saved"
            )
        if not draft.is_valid:
            logger.warning(
                "Rejected invalid set for %s: weight=%s reps=%s",
                exercise.exercise_name,
                draft.weight,
                draft.reps,
            )
            raise InvalidInputError("Weight and reps must both be greater than zero")

        set_id = draft.id
        if set_id in self._saving:
            raise InvalidInputError(
                f"Set {index + 1} of {exercise.exercise_name} is already being saved"
            )
        weight, reps = draft.weight, draft.reps
        timestamp = self._clock.now()

        self._saving.add(set_id)
        try:
            async with self._io_lock:
                self._ensure_in_progress("save set")
                try:
                    await self._gateway.save_set(
                        self.id,
                        exercise_id,
                        weight,
                        reps,
                        timestamp,
                        idempotency_key=set_id,
                    )
                except Exception as e:
                    logger.error(
                        "Failed to save set for %s: %s", exercise.exercise_name, e
                    )
                    raise
        finally:
            self._saving.discard(set_id)

        exercise = self._find_exercise(exercise_id)
        target = exercise.find_set(set_id) if exercise is not None else None
        if target is None:
            logger.warning("Set %s was removed while saving; result discarded", set_id)
            return None

        target.weight = weight
        target.reps = reps
        target.is_completed = True
        logger.info(
            "Saved set %s for %s in workout %s",
            target.display_text,
            exercise.exercise_name,
            self.id,
        )
        self._notify()
        return target

    async def end(self) -> WorkoutRecord:
        """
        Finish the workout.

        An open pause is folded into the paused total first; that fold stays
        applied even if persisting fails. ``ended_at`` is only set once the
        gateway has confirmed the update, so a failed or cancelled call
        leaves the session in progress and the caller may retry.

        Returns:
            The final workout record

        Raises:
            SessionEndedError: The session has already ended
            NotFoundError, GatewayNetworkError: From the gateway
        """
        self._ensure_in_progress("end workout")

        async with self._io_lock:
            self._ensure_in_progress("end workout")
            now = self._clock.now()
            if self._timer.resume(now):
                self._notify()

            paused_duration = self._timer.paused_duration
            try:
                await self._gateway.update_workout(self.id, now, paused_duration)
            except Exception as e:
                logger.error("Failed to end workout %s: %s", self.id, e)
                raise

            self._ended_at = now
            self._record = self._record.model_copy(
                update={"ended_at": now, "paused_duration": paused_duration}
            )
            self._exercises.clear()

        logger.info("Workout %s ended after %s", self.id, self.formatted_duration)
        self._notify()
        return self._record
