"""
Scoring profile module for the Activity Risk engine.

This module defines the ScoringProfile dataclass which holds every numeric
constant of the risk score calculation and the best-time-window search. Two
profiles are provided:

- "standard": 70/30 AQI/pollutant blend, no good-range cap. This is the
  default profile.
- "l1": 75/25 blend with the pollutant term scaled by AQI, a score cap of 22
  while AQI <= 50, stricter concentration divisors and a window baseline taken
  from the decision's own current score.

The active profile can be chosen with the ACTIVITYRISK_SCORING_PROFILE
environment variable (loaded from a .env file when present).
"""

import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

from dotenv import load_dotenv

load_dotenv()


WINDOW_BASELINE_FORECAST = "forecast"
WINDOW_BASELINE_CURRENT = "current"


@dataclass(frozen=True)
class ScoringProfile:
    """
    Numeric configuration of the risk score calculation.

    Attributes:
        name: Profile name
        aqi_divisor: AQI is divided by this to map it onto the 0-100 scale
        aqi_ceiling: Upper bound of the normalized AQI
        duration_reference_minutes: Duration at which the full uplift applies
        duration_max_uplift: Relative uplift applied at the reference duration
        aqi_blend: Share of the AQI-based score when pollutants are supplied
        pollutant_blend: Share of the pollutant term when pollutants are supplied
        scale_pollutant_blend_by_aqi: Multiply the pollutant term by
            clamp(aqi / pollutant_aqi_reference, pollutant_aqi_floor, 1)
        pollutant_aqi_reference: AQI at which the pollutant term is fully weighted
        pollutant_aqi_floor: Minimum scale applied to the pollutant term
        good_aqi_threshold: AQI at or below which good_aqi_score_cap applies
        good_aqi_score_cap: Score cap in the good AQI range, or None for no cap
        concentration_divisors: Health-threshold divisor per pollutant code
        high_intensity_divisors: Divisors overriding the above for high intensity
        fallback_divisor: Divisor for codes without one; None means the
            normalized concentration is fixed at default_normalized_concentration
        default_normalized_concentration: Normalized value for codes without a divisor
        ozone_high_intensity_penalty: Multiplier on the ozone term for high intensity
        window_improvement_ratio: Best slot must score below baseline x this ratio
        window_baseline: "forecast" (score of the first slot) or "current"
            (the decision's own current score)
        window_reason_shows_improvement: Include the % improvement in the reason
    """

    name: str
    aqi_divisor: float = 3.0
    aqi_ceiling: float = 100.0
    duration_reference_minutes: float = 120.0
    duration_max_uplift: float = 0.3
    aqi_blend: float = 0.7
    pollutant_blend: float = 0.3
    scale_pollutant_blend_by_aqi: bool = False
    pollutant_aqi_reference: float = 120.0
    pollutant_aqi_floor: float = 0.3
    good_aqi_threshold: float = 50.0
    good_aqi_score_cap: Optional[float] = None
    concentration_divisors: Mapping[str, float] = field(
        default_factory=lambda: MappingProxyType({"pm25": 75.0, "pm10": 150.0, "o3": 100.0})
    )
    high_intensity_divisors: Mapping[str, float] = field(
        default_factory=lambda: MappingProxyType({})
    )
    fallback_divisor: Optional[float] = None
    default_normalized_concentration: float = 0.5
    ozone_high_intensity_penalty: float = 1.3
    window_improvement_ratio: float = 0.8
    window_baseline: str = WINDOW_BASELINE_FORECAST
    window_reason_shows_improvement: bool = False

    def divisor_for(self, code: str, intensity: str) -> Optional[float]:
        """Returns the concentration divisor for a code, or None to use the fixed default."""
        if intensity == "high" and code in self.high_intensity_divisors:
            return self.high_intensity_divisors[code]
        if code in self.concentration_divisors:
            return self.concentration_divisors[code]
        return self.fallback_divisor


STANDARD_PROFILE = ScoringProfile(name="standard")

L1_PROFILE = ScoringProfile(
    name="l1",
    aqi_blend=0.75,
    pollutant_blend=0.25,
    scale_pollutant_blend_by_aqi=True,
    good_aqi_score_cap=22.0,
    concentration_divisors=MappingProxyType({"pm25": 45.0, "pm10": 80.0, "o3": 120.0}),
    high_intensity_divisors=MappingProxyType({"pm25": 35.0}),
    fallback_divisor=100.0,
    window_baseline=WINDOW_BASELINE_CURRENT,
    window_reason_shows_improvement=True,
)

PROFILES: Mapping[str, ScoringProfile] = MappingProxyType({
    STANDARD_PROFILE.name: STANDARD_PROFILE,
    L1_PROFILE.name: L1_PROFILE,
})


def get_profile(name: str) -> ScoringProfile:
    """
    Looks up a built-in profile by name (case-insensitive).

    Raises:
        ValueError: If no profile has that name
    """
    profile = PROFILES.get(name.strip().lower())
    if profile is None:
        raise ValueError(f"Unknown scoring profile '{name}', expected one of: {', '.join(PROFILES)}")
    return profile


def profile_from_env() -> ScoringProfile:
    """Returns the profile named by ACTIVITYRISK_SCORING_PROFILE, or the standard one."""
    name = os.getenv("ACTIVITYRISK_SCORING_PROFILE", "").strip()
    if not name:
        return STANDARD_PROFILE
    return get_profile(name)
