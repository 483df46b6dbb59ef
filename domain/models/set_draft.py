"""
SetDraft entity for sets recorded during an active workout.

A draft is created empty when the user adds a set row, edited freely while
the workout is running, and flagged completed once the gateway has
persisted it.
"""

from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


def format_weight(weight: float) -> str:
    """
    Format a weight for display.

    Integral weights render without a decimal point, everything else with
    exactly one decimal place.

    Examples:
        >>> format_weight(135.0)
        '135'
        >>> format_weight(52.5)
        '52.5'
    """
    if float(weight).is_integer():
        return f"{weight:.0f}"
    return f"{weight:.1f}"


def format_set(weight: float, reps: int) -> str:
    """Format a weight/reps pair as ``"{weight} × {reps}"``."""
    return f"{format_weight(weight)} × {reps}"


class SetDraft(BaseModel):
    """
    A not-yet-saved (weight, reps) entry.

    ``id`` is generated client-side when the row is created and is passed to
    the gateway as an idempotency key, so a retried save of the same draft
    can be deduplicated by backends that support it.

    Examples:
        >>> draft = SetDraft(weight=135, reps=10)
        >>> draft.is_valid
        True
        >>> draft.volume
        1350.0
        >>> SetDraft().display_text
        '- × -'
    """

    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(
        default_factory=lambda: str(uuid4()),
        description="Client-generated identifier, used as idempotency key",
    )
    weight: float = Field(
        default=0.0, allow_inf_nan=False, description="Weight lifted"
    )
    reps: int = Field(default=0, description="Repetitions performed")
    is_completed: bool = Field(
        default=False,
        description="True once the set has been durably persisted",
    )

    @property
    def is_valid(self) -> bool:
        """A set may be saved only with a positive weight and rep count."""
        return self.weight > 0 and self.reps > 0

    @property
    def volume(self) -> float:
        return float(self.weight) * self.reps

    @property
    def display_text(self) -> str:
        if not self.is_valid:
            return "- × -"
        return format_set(self.weight, self.reps)
