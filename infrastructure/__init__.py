"""
Infrastructure Layer for the workout session core.

This package contains concrete implementations of the application ports:
- db/: Supabase gateway and client factory
- memory/: In-memory gateway for local development
"""

from infrastructure.db import (
    SupabaseSessionGateway,
    build_session_gateway,
    get_supabase_client,
)
from infrastructure.memory import InMemorySessionGateway

__all__ = [
    "SupabaseSessionGateway",
    "InMemorySessionGateway",
    "build_session_gateway",
    "get_supabase_client",
]
