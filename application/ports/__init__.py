"""
Interfaces (Ports) for the workout session core.

This package defines abstract interfaces that decouple the session state
machine from infrastructure (backend, system time). Implementations are
provided in the infrastructure layer.

Architecture follows the Ports & Adapters (Hexagonal) pattern:
- Ports: Abstract interfaces defined here (what the session needs)
- Adapters: Concrete implementations in infrastructure/ (how it's provided)

Usage:
    from application.ports import SessionGateway, SystemClock

    session = await WorkoutSession.start(
        gateway, WorkoutCategory.PUSH, clock=SystemClock()
    )
"""

from application.ports.clock import Clock, SystemClock
from application.ports.session_gateway import SessionGateway

__all__ = [
    "Clock",
    "SystemClock",
    "SessionGateway",
]
