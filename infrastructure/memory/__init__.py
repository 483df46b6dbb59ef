"""
In-memory infrastructure.

Gateways that keep everything in process memory, for local development and
demos without a Supabase project.
"""

from infrastructure.memory.session_gateway import InMemorySessionGateway

__all__ = [
    "InMemorySessionGateway",
]
