"""
In-memory implementation of SessionGateway.

Used when no Supabase backend is configured (local development, demos).
Records live in dicts for the lifetime of the process.
"""
import copy
import logging
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from application.exceptions import InvalidInputError, NotFoundError, UnauthenticatedError
from application.ports import Clock, SystemClock
from domain.converters import set_rows_to_performance, workout_record_to_db_row
from domain.models import ExercisePerformance, WorkoutCategory, WorkoutRecord

logger = logging.getLogger(__name__)


class InMemorySessionGateway:
    """
    In-memory SessionGateway.

    Stores workouts and sets as row dicts shaped like the Supabase tables.
    Idempotency keys are honoured: saving a set twice with the same key
    keeps a single row.

    Usage:
        gateway = InMemorySessionGateway(user_id="user-1")
        gateway.seed_sets([{"workout_id": "w0", "exercise_id": "bench", ...}])
    """

    def __init__(
        self,
        user_id: Optional[str] = "local-user",
        *,
        clock: Optional[Clock] = None,
    ):
        self.user_id = user_id
        self._clock = clock or SystemClock()
        self._workouts: Dict[str, Dict[str, Any]] = {}
        self._sets: Dict[str, Dict[str, Any]] = {}

    def reset(self) -> None:
        """Clear all stored workouts and sets."""
        self._workouts.clear()
        self._sets.clear()

    def seed_sets(self, sets: List[Dict[str, Any]]) -> None:
        """
        Seed historical set rows.

        Args:
            sets: Row dicts; ``id``, ``user_id`` and ``created_at`` are filled
                in when missing.
        """
        for row in sets:
            set_id = row.get("id") or str(uuid.uuid4())
            self._sets[set_id] = {
                "user_id": self.user_id,
                "created_at": self._clock.now().isoformat(),
                **row,
                "id": set_id,
            }

    def get_workouts(self) -> List[Dict[str, Any]]:
        return [copy.deepcopy(w) for w in self._workouts.values()]

    def get_sets(self, workout_id: Optional[str] = None) -> List[Dict[str, Any]]:
        rows = self._sets.values()
        if workout_id is not None:
            rows = [r for r in rows if r.get("workout_id") == workout_id]
        return [copy.deepcopy(r) for r in rows]

    def _require_user(self) -> str:
        if not self.user_id:
            raise UnauthenticatedError("No authenticated user")
        return self.user_id

    # =========================================================================
    # SessionGateway Protocol Methods
    # =========================================================================

    async def create_workout(
        self,
        category: str,
        custom_name: Optional[str] = None,
    ) -> WorkoutRecord:
        user_id = self._require_user()
        try:
            label = WorkoutCategory.parse(category).label(custom_name)
        except ValueError as e:
            raise InvalidInputError(str(e)) from e

        record = WorkoutRecord(
            id=str(uuid.uuid4()),
            user_id=user_id,
            category=label,
            started_at=self._clock.now(),
        )
        self._workouts[record.id] = workout_record_to_db_row(record)
        return record

    async def update_workout(
        self,
        workout_id: str,
        ended_at: datetime,
        paused_duration: float,
    ) -> None:
        user_id = self._require_user()
        row = self._workouts.get(workout_id)
        if row is None or row["user_id"] != user_id:
            raise NotFoundError(f"Workout {workout_id} not found")
        row["ended_at"] = ended_at.isoformat()
        row["paused_duration"] = paused_duration

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
        user_id = self._require_user()
        set_id = idempotency_key or str(uuid.uuid4())
        if set_id in self._sets:
            logger.debug(f"Duplicate set {set_id} ignored")
            return
        self._sets[set_id] = {
            "id": set_id,
            "user_id": user_id,
            "workout_id": workout_id,
            "exercise_id": exercise_id,
            "weight": weight,
            "reps": reps,
            "created_at": timestamp.isoformat(),
        }

    async def fetch_last_performance(
        self,
        exercise_id: str,
    ) -> Optional[ExercisePerformance]:
        user_id = self._require_user()
        rows = [
            r
            for r in self._sets.values()
            if r.get("exercise_id") == exercise_id and r.get("user_id") == user_id
        ]
        # Stable sort keeps insertion order for rows sharing a timestamp
        rows = list(reversed(rows))
        rows.sort(key=lambda r: r.get("created_at") or "", reverse=True)
        return set_rows_to_performance(exercise_id, rows)
