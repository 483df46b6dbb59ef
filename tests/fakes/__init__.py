"""
Fake Implementations for Testing.

This package provides in-memory fakes of the application ports for fast,
isolated testing. No database or external dependencies required.

Features:
- Fakes implement the same Protocol interfaces as real implementations
- Calls are recorded and failures can be injected per method
- A manual clock makes timer arithmetic deterministic

Usage:
    from tests.fakes import FakeSessionGateway, ManualClock

    clock = ManualClock()
    gateway = FakeSessionGateway(clock=clock)
    gateway.seed_sets([{"workout_id": "w0", "exercise_id": "bench", "weight": 135, "reps": 10}])
"""
from typing import Dict, Iterable, Optional, Tuple

from tests.fakes.session_gateway import FakeSessionGateway, ManualClock


# =============================================================================
# Factory Functions
# =============================================================================


def create_session_gateway(
    *,
    clock: Optional[ManualClock] = None,
    user_id: Optional[str] = "test_user",
    history: Optional[Dict[str, Iterable[Tuple[float, int]]]] = None,
) -> FakeSessionGateway:
    """
    Create a FakeSessionGateway with optional prior history.

    Args:
        clock: Clock used for server timestamps
        user_id: Authenticated user (None for unauthenticated)
        history: Map of exercise id to (weight, reps) pairs from one
            previous workout

    Returns:
        FakeSessionGateway with seeded sets
    """
    gateway = FakeSessionGateway(user_id=user_id, clock=clock)
    for exercise_id, sets in (history or {}).items():
        gateway.seed_sets(
            [
                {
                    "workout_id": f"previous-{exercise_id}",
                    "exercise_id": exercise_id,
                    "weight": weight,
                    "reps": reps,
                }
                for weight, reps in sets
            ]
        )
    return gateway


__all__ = [
    "FakeSessionGateway",
    "ManualClock",
    "create_session_gateway",
]
