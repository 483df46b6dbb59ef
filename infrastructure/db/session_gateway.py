"""
Supabase implementation of SessionGateway.

This module provides the concrete Supabase implementation for persisting
workout sessions. The synchronous Supabase client is injected via the
constructor; blocking calls run in a thread pool so the session's event loop
is never blocked.

Tables:
- workouts(id, user_id, category, started_at, ended_at, paused_duration)
- exercise_sets(id, user_id, workout_id, exercise_id, weight, reps, created_at)
"""
import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, TypeVar
from uuid import uuid4

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from application.exceptions import (
    GatewayNetworkError,
    InvalidInputError,
    NotFoundError,
    UnauthenticatedError,
    WorkoutSessionError,
)
from domain.converters import db_row_to_workout_record, set_rows_to_performance
from domain.models import ExercisePerformance, WorkoutCategory, WorkoutRecord

logger = logging.getLogger(__name__)

T = TypeVar("T")

WORKOUTS_TABLE = "workouts"
SETS_TABLE = "exercise_sets"

# Upper bound on rows scanned when looking for the last session of an exercise
DEFAULT_HISTORY_LIMIT = 50

# PostgREST codes for a rejected or missing JWT and Postgres insufficient_privilege (RLS)
_AUTH_CODES = frozenset({"PGRST301", "PGRST302", "42501"})
_AUTH_STATUSES = frozenset({401, 403})
_AUTH_MARKERS = ("jwt expired", "not authenticated", "row-level security")


def _is_auth_error(error: Exception) -> bool:
    if isinstance(error, httpx.HTTPStatusError):
        return error.response.status_code in _AUTH_STATUSES
    if isinstance(error, APIError):
        if error.code in _AUTH_CODES:
            return True
        lowered = (error.message or "").lower()
        return any(marker in lowered for marker in _AUTH_MARKERS)
    return False


def translate_error(error: Exception, action: str) -> WorkoutSessionError:
    """
    Map a Supabase/PostgREST/transport error onto the gateway taxonomy.

    Classification uses the structured status: the PostgREST error code on
    ``APIError`` and the HTTP status on ``httpx.HTTPStatusError``. Message
    text is only a fallback for an ``APIError`` with another code. Auth
    and RLS failures become UnauthenticatedError; everything else is treated
    as a transient GatewayNetworkError.
    """
    if isinstance(error, WorkoutSessionError):
        return error
    if _is_auth_error(error):
        return UnauthenticatedError(f"Failed to {action}: {error}")
    return GatewayNetworkError(f"Failed to {action}: {error}")


class SupabaseSessionGateway:
    """
    Supabase implementation of SessionGateway protocol.

    All Supabase query logic for workout sessions is encapsulated here.
    """

    def __init__(
        self,
        client: Client,
        user_id: Optional[str],
        *,
        executor: Optional[ThreadPoolExecutor] = None,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
    ):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected, not global)
            user_id: Authenticated user; None means no user context
            executor: Thread pool for blocking client calls
            history_limit: Max set rows scanned per history lookup
        """
        self._client = client
        self._user_id = user_id
        self._executor = executor
        self._history_limit = history_limit

    @classmethod
    def from_session(cls, client: Client, **kwargs: Any) -> "SupabaseSessionGateway":
        """
        Build a gateway for the user signed in on ``client``.

        Raises:
            UnauthenticatedError: The client has no signed-in user
        """
        session = client.auth.get_session()
        user = getattr(session, "user", None) if session else None
        if user is None:
            raise UnauthenticatedError("No signed-in Supabase user")
        return cls(client, str(user.id), **kwargs)

    def _require_user(self) -> str:
        if not self._user_id:
            raise UnauthenticatedError("No authenticated user")
        return self._user_id

    async def _run(self, action: str, func: Callable[[], T]) -> T:
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(self._executor, func)
        except Exception as e:
            logger.error(f"Supabase call failed ({action}): {e}")
            raise translate_error(e, action) from e

    # =========================================================================
    # SessionGateway Protocol Methods
    # =========================================================================

    async def create_workout(
        self,
        category: str,
        custom_name: Optional[str] = None,
    ) -> WorkoutRecord:
        """Insert a workout row; the database assigns id and started_at."""
        user_id = self._require_user()
        try:
            label = WorkoutCategory.parse(category).label(custom_name)
        except ValueError as e:
            raise InvalidInputError(str(e)) from e
        data = {
            "user_id": user_id,
            "category": label,
            "paused_duration": 0,
        }

        def insert() -> Any:
            return self._client.table(WORKOUTS_TABLE).insert(data).execute()

        result = await self._run("create workout", insert)
        if not result.data:
            raise GatewayNetworkError("Failed to create workout: empty response")

        record = db_row_to_workout_record(result.data[0])
        logger.info(f"Workout created for user {user_id}, id: {record.id}")
        return record

    async def update_workout(
        self,
        workout_id: str,
        ended_at: datetime,
        paused_duration: float,
    ) -> None:
        """Write ended_at and paused_duration on an existing workout."""
        user_id = self._require_user()
        data = {
            "ended_at": ended_at.isoformat(),
            "paused_duration": paused_duration,
        }

        def update() -> Any:
            return (
                self._client.table(WORKOUTS_TABLE)
                .update(data)
                .eq("id", workout_id)
                .eq("user_id", user_id)
                .execute()
            )

        result = await self._run("update workout", update)
        if not result.data:
            raise NotFoundError(f"Workout {workout_id} not found")
        logger.info(f"Workout {workout_id} updated (ended_at={data['ended_at']})")

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
        Insert one set row.

        With an idempotency key the row id is the key and the write is an
        upsert that ignores duplicates, so retries do not create extra rows.
        """
        user_id = self._require_user()
        row: Dict[str, Any] = {
            "id": idempotency_key or str(uuid4()),
            "user_id": user_id,
            "workout_id": workout_id,
            "exercise_id": exercise_id,
            "weight": weight,
            "reps": reps,
            "created_at": timestamp.isoformat(),
        }

        def write() -> Any:
            table = self._client.table(SETS_TABLE)
            if idempotency_key:
                return table.upsert(row, on_conflict="id", ignore_duplicates=True).execute()
            return table.insert(row).execute()

        await self._run("save set", write)
        logger.debug(f"Set saved for workout {workout_id}, exercise {exercise_id}")

    async def fetch_last_performance(
        self,
        exercise_id: str,
    ) -> Optional[ExercisePerformance]:
        """Get the sets of the most recent workout containing the exercise."""
        user_id = self._require_user()

        def query() -> Any:
            return (
                self._client.table(SETS_TABLE)
                .select("id, workout_id, weight, reps, created_at")
                .eq("user_id", user_id)
                .eq("exercise_id", exercise_id)
                .order("created_at", desc=True)
                .limit(self._history_limit)
                .execute()
            )

        result = await self._run("fetch last performance", query)
        rows: List[Dict[str, Any]] = result.data or []
        return set_rows_to_performance(exercise_id, rows)
