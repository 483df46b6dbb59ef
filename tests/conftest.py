"""
Shared fixtures for the workout session tests.

Fixtures are synchronous; tests start sessions themselves with
``await WorkoutSession.start(...)`` so no async fixtures are needed.
"""
import pytest

from domain.models import ExerciseRef
from tests.fakes import FakeSessionGateway, ManualClock


@pytest.fixture
def clock() -> ManualClock:
    """A clock frozen at 2024-01-01 12:00 UTC."""
    return ManualClock()


@pytest.fixture
def gateway(clock: ManualClock) -> FakeSessionGateway:
    """A fresh fake gateway sharing the test clock."""
    return FakeSessionGateway(clock=clock)


@pytest.fixture
def bench_press() -> ExerciseRef:
    return ExerciseRef(id="bench-press", name="Bench Press")


@pytest.fixture
def squat() -> ExerciseRef:
    return ExerciseRef(id="squat", name="Squat")
