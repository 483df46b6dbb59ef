"""
Workout category enumeration.

A session is always started under one of a fixed set of categories. The
``CUSTOM`` category carries a user-supplied name which is stored in place of
the display label.
"""

from enum import Enum
from typing import Optional, Union


class WorkoutCategory(str, Enum):
    """
    Fixed set of workout categories.

    The enum value is the display label persisted on the workout record.

    Examples:
        >>> WorkoutCategory.PUSH.label()
        'Push Day'
        >>> WorkoutCategory.CUSTOM.label("Arms & Abs")
        'Arms & Abs'
    """

    PUSH = "Push Day"
    PULL = "Pull Day"
    LEGS = "Leg Day"
    SHOULDERS = "Shoulder Day"
    CUSTOM = "Custom"

    @classmethod
    def parse(cls, value: Union["WorkoutCategory", str]) -> "WorkoutCategory":
        """
        Look up a category by label ("Push Day") or name ("Push", "LEGS").

        Raises:
            ValueError: If ``value`` matches no category.

        Examples:
            >>> WorkoutCategory.parse("Legs")
            <WorkoutCategory.LEGS: 'Leg Day'>
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            pass
        try:
            return cls[str(value).strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown workout category: {value!r}") from None

    @property
    def is_custom(self) -> bool:
        """Check if this category requires a custom name."""
        return self is WorkoutCategory.CUSTOM

    def label(self, custom_name: Optional[str] = None) -> str:
        """
        Get the category string stored on the workout record.

        Args:
            custom_name: Name for the CUSTOM category (ignored otherwise).

        Returns:
            The stripped custom name for CUSTOM, the display label otherwise.

        Raises:
            ValueError: If CUSTOM is used without a non-empty name.
        """
        if not self.is_custom:
            return self.value
        name = (custom_name or "").strip()
        if not name:
            raise ValueError("Custom workouts require a non-empty name")
        return name
