"""
Activity template module for the Activity Risk engine.

This module defines the ActivityTemplate dataclass which describes an outdoor
activity that can be evaluated against current air quality: its display
metadata, its activity-specific risk factor, its expected duration and its
exertion intensity. Templates are created once and never mutated.
"""

from dataclasses import dataclass
from typing import Any, Optional


INTENSITY_LEVELS = ("low", "medium", "high")


@dataclass(frozen=True)
class ActivityTemplate:
    """
    Represents an outdoor activity evaluated by the decision engine.

    The display fields (name, icon, description) are opaque to the scoring
    math. Only base_risk_factor, duration and intensity influence the score.

    Attributes:
        id: Unique identifier of the activity within a catalog
        name: Human-readable activity name
        icon: Emoji or short glyph used by UI surfaces
        description: Short human-readable description
        base_risk_factor: Activity-specific risk contribution (0.0 - 1.0)
        duration: Expected duration in minutes (must be > 0)
        intensity: Exertion level, one of "low", "medium", "high"
    """

    id: str
    name: str
    icon: str
    description: str
    base_risk_factor: float
    duration: int
    intensity: str

    def validate(self) -> tuple[bool, Optional[str]]:
        """
        Validates the template fields against their acceptable ranges.

        Checks:
        - id must be a non-empty string
        - base_risk_factor must be between 0 and 1
        - duration must be a positive number of minutes
        - intensity must be one of low/medium/high

        Returns:
            A tuple containing:
            - bool: True if all validations pass, False otherwise
            - Optional[str]: None if valid, or a descriptive error message if invalid
        """
        if not self.id:
            return (False, "id must be a non-empty string")

        if self.base_risk_factor < 0 or self.base_risk_factor > 1:
            return (False, "base_risk_factor must be between 0 and 1")

        if self.duration <= 0:
            return (False, "duration must be > 0")

        if self.intensity not in INTENSITY_LEVELS:
            return (False, f"intensity must be one of {', '.join(INTENSITY_LEVELS)}")

        return (True, None)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ActivityTemplate":
        """Builds a template from its camelCase wire form."""
        return cls(
            id=data["id"],
            name=data.get("name", data["id"]),
            icon=data.get("icon", ""),
            description=data.get("description", ""),
            base_risk_factor=float(data["baseRiskFactor"]),
            duration=int(data["duration"]),
            intensity=data.get("intensity", "medium"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "icon": self.icon,
            "description": self.description,
            "baseRiskFactor": self.base_risk_factor,
            "duration": self.duration,
            "intensity": self.intensity,
        }
