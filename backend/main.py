"""
Factory for the active-workout tracker.

This module wires settings, logging, error tracking and the session gateway
into a ready-to-use ActiveWorkoutTracker. The factory pattern allows for:
- Easy testing with custom settings or gateways
- Multiple trackers (one per signed-in user)

Usage:
    from backend.main import create_tracker
    from backend.settings import Settings

    # Default tracker (uses get_settings())
    tracker = create_tracker(user_id="user-123")

    # Test tracker with custom settings and an in-memory gateway
    test_settings = Settings(environment="test", _env_file=None)
    tracker = create_tracker(settings=test_settings, gateway=InMemorySessionGateway())
"""

import logging
from typing import Optional

import sentry_sdk

from application.ports import Clock, SessionGateway
from application.session import ActiveWorkoutTracker
from backend.settings import Settings, get_settings

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def create_tracker(
    user_id: Optional[str] = None,
    *,
    settings: Optional[Settings] = None,
    gateway: Optional[SessionGateway] = None,
    clock: Optional[Clock] = None,
) -> ActiveWorkoutTracker:
    """
    Create and configure an ActiveWorkoutTracker.

    Args:
        user_id: Signed-in user; ignored when ``gateway`` is given
        settings: Optional Settings instance. If not provided, uses get_settings()
                  which loads from environment variables.
        gateway: Gateway override (defaults to build_session_gateway())
        clock: Time source override

    Returns:
        Configured ActiveWorkoutTracker instance.
    """
    if settings is None:
        settings = get_settings()

    configure_logging(settings)
    _init_sentry(settings)

    if gateway is None:
        # Imported lazily so the Supabase client is only built when needed
        from infrastructure.db import build_session_gateway

        gateway = build_session_gateway(user_id, settings=settings)

    logger.info(
        "Workout tracker ready (environment=%s, gateway=%s)",
        settings.environment,
        type(gateway).__name__,
    )
    return ActiveWorkoutTracker(
        gateway,
        clock=clock,
        poll_interval=settings.timer_poll_interval_seconds,
    )


def configure_logging(settings: Settings) -> None:
    """Set the root log level and format."""
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
    logging.getLogger().setLevel(settings.log_level)


def _init_sentry(settings: Settings) -> None:
    """Initialize Sentry SDK if DSN is configured."""
    if settings.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            environment=settings.environment,
            traces_sample_rate=0.1,
        )
        logger.info("Sentry initialized for workout tracker")
