"""
Domain services.

Stateless or self-contained helpers that operate on domain values.
"""

from domain.services.session_timer import SessionTimer, format_duration

__all__ = [
    "SessionTimer",
    "format_duration",
]
