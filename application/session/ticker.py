"""
Live duration polling.

The displayed duration is sampled independently of session state; sampling
never mutates the session.
"""

import asyncio
from typing import AsyncIterator

from application.session.workout_session import WorkoutSession

DEFAULT_POLL_INTERVAL_SECONDS = 1.0


async def iter_duration(
    session: WorkoutSession,
    interval: float = DEFAULT_POLL_INTERVAL_SECONDS,
) -> AsyncIterator[str]:
    """
    Yield the formatted duration every ``interval`` seconds.

    Stops after yielding the final duration once the session has ended.

    Usage:
        async for text in iter_duration(session):
            label.text = text
    """
    while True:
        yield session.formatted_duration
        if not session.is_in_progress:
            return
        await asyncio.sleep(interval)
