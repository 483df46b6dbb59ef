"""
Unit tests for live duration polling.
"""
import pytest

from application.session import WorkoutSession, iter_duration
from domain.models import WorkoutCategory


pytestmark = pytest.mark.unit


class TestIterDuration:
    @pytest.mark.asyncio
    async def test_yields_current_duration(self, gateway, clock):
        session = await WorkoutSession.start(gateway, WorkoutCategory.PUSH, clock=clock)
        ticks = iter_duration(session, interval=0)

        assert await ticks.__anext__() == "0:00"
        clock.advance(65)
        assert await ticks.__anext__() == "1:05"
        await ticks.aclose()

    @pytest.mark.asyncio
    async def test_stops_after_end(self, gateway, clock):
        session = await WorkoutSession.start(gateway, WorkoutCategory.PUSH, clock=clock)
        clock.advance(30)
        await session.end()

        values = [text async for text in iter_duration(session, interval=0)]

        assert values == ["0:30"]

    @pytest.mark.asyncio
    async def test_sampling_does_not_mutate_session(self, gateway, clock):
        session = await WorkoutSession.start(gateway, WorkoutCategory.PUSH, clock=clock)
        received = []
        session.subscribe(received.append)
        ticks = iter_duration(session, interval=0)

        await ticks.__anext__()
        await ticks.__anext__()
        await ticks.aclose()

        assert received == []
        assert session.is_in_progress is True
