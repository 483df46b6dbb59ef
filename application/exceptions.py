"""
Application-layer exceptions.

These exceptions are used across the application and infrastructure layers.
Gateway adapters translate transport errors into the gateway family below;
the session propagates them to the caller unmodified and never retries.
"""


class WorkoutSessionError(Exception):
    """Base class for all workout session errors."""

    pass


class UnauthenticatedError(WorkoutSessionError):
    """No active user context.

    Blocks creating workouts, saving sets and updating workouts.
    """

    pass


class GatewayNetworkError(WorkoutSessionError):
    """Transient transport failure talking to the backend.

    The operation may be retried by the caller.
    """

    pass


class NotFoundError(WorkoutSessionError):
    """The referenced workout or exercise does not exist server-side."""

    pass


class InvalidInputError(WorkoutSessionError):
    """Client-side validation failure.

    Always raised before any gateway call is attempted.
    """

    pass


class SessionEndedError(InvalidInputError):
    """A mutation was attempted on a session that has already ended."""

    pass
