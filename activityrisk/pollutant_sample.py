"""
Pollutant sample module for the Activity Risk engine.

This module defines the Concentration and PollutantSample dataclasses which
carry a single pollutant reading (e.g. PM2.5 at 35 µg/m³) from upstream air
quality data into the risk calculator. Samples are read-only and ephemeral.
"""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class Concentration:
    """
    A measured pollutant concentration.

    Attributes:
        value: Measured concentration (expected >= 0)
        units: Units string as reported upstream (e.g. "µg/m³", "ppb")
    """

    value: float
    units: str = ""


@dataclass(frozen=True)
class PollutantSample:
    """
    A single pollutant reading.

    Attributes:
        code: Pollutant identifier ("pm25", "pm10", "o3", "no2", "so2", "co", ...)
        display_name: Human-readable label
        concentration: The measured concentration
    """

    code: str
    display_name: str
    concentration: Concentration

    def validate(self) -> tuple[bool, Optional[str]]:
        """
        Validates the sample for callers that want stricter input checks.

        The risk calculator does not call this; unknown codes and odd values
        are absorbed by its defaults.

        Returns:
            A tuple of (is_valid, error_message)
        """
        if not self.code:
            return (False, "code must be a non-empty string")

        if self.concentration.value < 0:
            return (False, "concentration value must be >= 0")

        return (True, None)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PollutantSample":
        """
        Builds a sample from the upstream wire form.

        Accepts {"code", "displayName", "concentration": {"value", "units"}}.
        A missing concentration value reads as 0.
        """
        concentration = data.get("concentration") or {}
        value = concentration.get("value")
        return cls(
            code=data["code"],
            display_name=data.get("displayName", data["code"].upper()),
            concentration=Concentration(
                value=float(value) if value is not None else 0.0,
                units=concentration.get("units", ""),
            ),
        )
