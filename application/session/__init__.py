"""
Active workout session.

This package contains the session state machine, its owner which models
"no workout" explicitly, and the duration poller used by the UI.

Usage:
    from application.session import ActiveWorkoutTracker, SessionState

    tracker = ActiveWorkoutTracker(gateway)
    session = await tracker.start_workout(WorkoutCategory.PUSH)
    unsubscribe = session.subscribe(render)
"""

from application.session.ticker import DEFAULT_POLL_INTERVAL_SECONDS, iter_duration
from application.session.tracker import (
    ActiveWorkout,
    ActiveWorkoutTracker,
    InSession,
    NoSession,
)
from application.session.workout_session import (
    SessionSnapshot,
    SessionState,
    WorkoutSession,
)

__all__ = [
    "ActiveWorkout",
    "ActiveWorkoutTracker",
    "InSession",
    "NoSession",
    "SessionSnapshot",
    "SessionState",
    "WorkoutSession",
    "DEFAULT_POLL_INTERVAL_SECONDS",
    "iter_duration",
]
