"""
Supabase client and gateway providers.

Settings and the Supabase client are cached per-process (lru_cache);
gateways are created per user.
"""
import logging
from functools import lru_cache
from typing import Optional

from supabase import Client, create_client

from application.exceptions import UnauthenticatedError
from application.ports import SessionGateway
from backend.settings import Settings, get_settings
from infrastructure.db.session_gateway import SupabaseSessionGateway
from infrastructure.memory import InMemorySessionGateway

logger = logging.getLogger(__name__)


@lru_cache
def get_supabase_client() -> Optional[Client]:
    """
    Get Supabase client instance (cached).

    Creates a Supabase client using credentials from settings.
    Returns None if credentials are not configured.

    Returns:
        Client: Supabase client instance, or None if not configured
    """
    settings = get_settings()

    if not settings.supabase_url or not settings.supabase_key:
        return None

    return create_client(settings.supabase_url, settings.supabase_key)


def build_session_gateway(
    user_id: Optional[str],
    *,
    settings: Optional[Settings] = None,
    client: Optional[Client] = None,
) -> SessionGateway:
    """
    Get the SessionGateway implementation for ``user_id``.

    Uses Supabase when credentials are configured. Outside production, a
    missing configuration falls back to the in-memory gateway.

    Args:
        user_id: Authenticated user; None means the user signed in on the
            Supabase client, if any
        settings: Settings override (defaults to get_settings())
        client: Supabase client override (defaults to get_supabase_client())

    Returns:
        SessionGateway: Gateway for session persistence

    Raises:
        RuntimeError: Supabase is not configured in production
    """
    settings = settings or get_settings()
    client = client or get_supabase_client()

    if client is not None:
        if user_id is not None:
            return SupabaseSessionGateway(
                client,
                user_id,
                history_limit=settings.history_lookup_limit,
            )
        try:
            return SupabaseSessionGateway.from_session(
                client, history_limit=settings.history_lookup_limit
            )
        except UnauthenticatedError:
            logger.warning("No signed-in Supabase user; session writes will be rejected")
            return SupabaseSessionGateway(
                client, None, history_limit=settings.history_lookup_limit
            )

    if settings.is_production:
        raise RuntimeError("Supabase credentials not configured")

    logger.warning("Supabase credentials not configured. Using in-memory session storage.")
    return InMemorySessionGateway(user_id=user_id)
