"""
Forecast simulator module for the Activity Risk engine.

This module contains the ForecastSimulator class which produces an hourly AQI
forecast as a random walk around a current reading, together with summary
metadata (average, volatility, confidence). It is not a forecasting model; it
gives the decision engine and the UI plausible hourly data to work with.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional, Sequence

import numpy as np

from .forecast_slot import ForecastIndex, ForecastSlot, format_timestamp
from .pollutant_sample import PollutantSample
from .risk_calculator import round_half_up


# (inclusive upper bound, category); anything above the last bound is hazardous
AQI_CATEGORIES = (
    (50, "EXCELLENT"),
    (100, "MODERATE"),
    (150, "UNHEALTHY_FOR_SENSITIVE_GROUPS"),
    (200, "UNHEALTHY"),
    (300, "VERY_UNHEALTHY"),
)
TOP_AQI_CATEGORY = "HAZARDOUS"

CONFIDENCE_DESCRIPTIONS = {
    "高": "模型輸入穩定，預測可信度高，適合提前規劃戶外活動。",
    "中": "預測仍具參考價值，建議敏感族群持續關注即時數據。",
    "低": "環境波動較大，請以即時監測數據為主，預測僅供參考。",
}


def aqi_category(aqi: float) -> str:
    """Returns the AQI category name for a value."""
    for upper_bound, category in AQI_CATEGORIES:
        if aqi <= upper_bound:
            return category
    return TOP_AQI_CATEGORY


@dataclass(frozen=True)
class ForecastMeta:
    """
    Summary of a simulated forecast.

    Attributes:
        base_aqi: The reading the walk was centred on
        average_aqi: Rounded mean of the simulated values
        confidence_score: 55-95, lower when the simulated values vary more
        confidence_level: "高", "中" or "低"
        confidence_description: Human-readable note for the confidence level
        volatility: Normalized volatility, in percent
        method: How the forecast was produced
    """

    base_aqi: float
    average_aqi: int
    confidence_score: int
    confidence_level: str
    confidence_description: str
    volatility: float
    method: str = "simulated-based-on-current-conditions"


@dataclass(frozen=True)
class ForecastResponse:
    """An hourly forecast plus its metadata and the coordinates it was simulated for."""

    hourly_forecasts: tuple[ForecastSlot, ...]
    meta: ForecastMeta
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class ForecastSimulator:
    """
    Random-walk forecast generator.

    Each hour is the base AQI perturbed by a uniform variation of +/-15%,
    rounded and clipped to [0, 500]. Seeding the simulator makes runs
    reproducible.
    """

    MIN_HOURS = 1
    MAX_HOURS = 96
    VARIATION_RANGE = 0.3  # +/-15%
    MAX_AQI = 500

    MIN_CONFIDENCE = 55
    MAX_CONFIDENCE = 95
    HIGH_CONFIDENCE = 85
    MEDIUM_CONFIDENCE = 72

    def __init__(self, seed: Optional[int] = None):
        self._rng = np.random.default_rng(seed)

    def simulate(
        self,
        base_aqi: float,
        hours: int = 24,
        start: Optional[datetime] = None,
        dominant_pollutant: str = "pm25",
        pollutants: Optional[Sequence[PollutantSample]] = None,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
    ) -> ForecastResponse:
        """
        Simulates an hourly forecast.

        Args:
            base_aqi: Current AQI the walk is centred on
            hours: Number of hourly slots (1-96)
            start: Timestamp of the first slot (now, UTC, if None)
            dominant_pollutant: Pollutant code reported on every slot
            pollutants: Current pollutant samples copied onto every slot
            latitude: Optional latitude of the reading, echoed on the response
            longitude: Optional longitude of the reading, echoed on the response

        Returns:
            ForecastResponse with chronologically ordered slots

        Raises:
            ValueError: If hours is outside 1-96
        """
        if hours < self.MIN_HOURS or hours > self.MAX_HOURS:
            raise ValueError(f"hours must be between {self.MIN_HOURS} and {self.MAX_HOURS}")

        if start is None:
            start = datetime.now(timezone.utc).replace(microsecond=0)

        variations = (self._rng.random(hours) - 0.5) * self.VARIATION_RANGE
        # Half-up rounding, then clip
        values = np.clip(np.floor(base_aqi * (1 + variations) + 0.5), 0, self.MAX_AQI).astype(int)

        carried = tuple(pollutants or ())
        slots = tuple(
            ForecastSlot(
                date_time=format_timestamp(start + timedelta(hours=index), use_z_suffix=True),
                indexes=(
                    ForecastIndex(
                        aqi=int(value),
                        code="uaqi",
                        category=aqi_category(int(value)),
                        dominant_pollutant=dominant_pollutant,
                    ),
                ),
                pollutants=carried,
            )
            for index, value in enumerate(values)
        )

        return ForecastResponse(
            hourly_forecasts=slots,
            meta=self.summarize(base_aqi, values),
            latitude=latitude,
            longitude=longitude,
        )

    def summarize(self, base_aqi: float, values: np.ndarray) -> ForecastMeta:
        """
        Computes the forecast metadata from the simulated values.

        Volatility combines the mean absolute deviation (in AQI units) and the
        range relative to the base AQI. Confidence falls as volatility rises.
        """
        average = float(np.mean(values)) if len(values) else float(base_aqi)

        if base_aqi > 0 and len(values):
            mean_absolute_deviation = float(np.mean(np.abs(values - average)))
            value_range = float(np.max(values) - np.min(values)) / max(base_aqi, 1)
            volatility = mean_absolute_deviation * 0.6 + value_range * 0.4
        else:
            volatility = 0.0

        confidence_score = round_half_up(
            max(self.MIN_CONFIDENCE, min(self.MAX_CONFIDENCE, 100 - volatility * 120))
        )

        if confidence_score >= self.HIGH_CONFIDENCE:
            confidence_level = "高"
        elif confidence_score >= self.MEDIUM_CONFIDENCE:
            confidence_level = "中"
        else:
            confidence_level = "低"

        return ForecastMeta(
            base_aqi=base_aqi,
            average_aqi=round_half_up(average),
            confidence_score=confidence_score,
            confidence_level=confidence_level,
            confidence_description=CONFIDENCE_DESCRIPTIONS[confidence_level],
            volatility=round(volatility * 100, 1),
        )
