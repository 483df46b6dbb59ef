"""
Infrastructure Database Layer.

This package provides the Supabase-backed implementation of the
SessionGateway port defined in application.ports, plus the client factory.

Usage:
    from supabase import create_client
    from infrastructure.db import SupabaseSessionGateway

    # Create Supabase client
    client = create_client(SUPABASE_URL, SUPABASE_KEY)

    # Instantiate the gateway with injected client
    gateway = SupabaseSessionGateway(client, user_id="user_123")
"""

from infrastructure.db.client import (
    build_session_gateway,
    get_supabase_client,
)
from infrastructure.db.session_gateway import SupabaseSessionGateway

__all__ = [
    "SupabaseSessionGateway",
    "build_session_gateway",
    "get_supabase_client",
]
