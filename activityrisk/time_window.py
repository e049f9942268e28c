"""
Time window module for the Activity Risk engine.

This module defines the TimeWindow dataclass and the BestTimeWindowFinder
class which searches an hourly forecast for a slot that is materially safer
than doing the activity now.
"""

from dataclasses import dataclass
from typing import Optional, Sequence

from .activity_template import ActivityTemplate
from .forecast_slot import ForecastSlot, shift_timestamp
from .risk_calculator import RiskScoreCalculator, round_half_up
from .risk_classifier import normalize_language
from .scoring_profile import WINDOW_BASELINE_CURRENT


REASON_TEMPLATES = {
    "zh": "該時段 AQI 預計為 {aqi}，比現在更適合",
    "en": "AQI is forecast at {aqi} in this slot, better than now",
}
REASON_WITH_IMPROVEMENT_TEMPLATES = {
    "zh": "該時段 AQI 預計為 {aqi}，比目前降低約 {improvement}%",
    "en": "AQI is forecast at {aqi} in this slot, about {improvement}% lower risk than now",
}


@dataclass(frozen=True)
class TimeWindow:
    """
    A recommended time window for an activity.

    Attributes:
        start: ISO-8601 start timestamp (the chosen forecast slot)
        end: ISO-8601 end timestamp (start + activity duration)
        reason: Human-readable justification citing the forecast AQI
    """

    start: str
    end: str
    reason: str

    def to_dict(self) -> dict[str, str]:
        return {"start": self.start, "end": self.end, "reason": self.reason}


def _format_aqi(aqi: float) -> str:
    return str(int(aqi)) if float(aqi).is_integer() else str(aqi)


class BestTimeWindowFinder:
    """
    Finds the best forecast slot for an activity.

    Every slot is scored on AQI alone, since forecasts carry no pollutant
    breakdown. The lowest-scoring slot wins, with the earliest slot winning
    ties. It is only surfaced when it beats the baseline by the profile's
    improvement ratio (at least 20% better by default).
    """

    def __init__(self, calculator: RiskScoreCalculator, language: str = "zh"):
        self.calculator = calculator
        self.language = normalize_language(language)

    def find(
        self,
        forecast: Sequence[ForecastSlot],
        activity: ActivityTemplate,
        current_score: Optional[int] = None,
    ) -> Optional[TimeWindow]:
        """
        Searches the forecast for a materially better slot.

        Args:
            forecast: Chronologically ordered hourly slots
            activity: The activity being planned
            current_score: The decision's current score, used as the baseline
                           when the profile asks for it

        Returns:
            A TimeWindow, or None if the forecast is empty or no slot is
            good enough
        """
        if not forecast:
            return None

        profile = self.calculator.profile

        best_slot = forecast[0]
        best_score = self.calculator.score(best_slot.aqi, activity).score
        baseline = best_score
        for slot in forecast[1:]:
            slot_score = self.calculator.score(slot.aqi, activity).score
            # Strict comparison keeps the earliest slot on ties
            if slot_score < best_score:
                best_slot, best_score = slot, slot_score

        if profile.window_baseline == WINDOW_BASELINE_CURRENT and current_score is not None:
            baseline = current_score

        if not best_score < baseline * profile.window_improvement_ratio:
            return None

        return TimeWindow(
            start=best_slot.date_time,
            end=shift_timestamp(best_slot.date_time, activity.duration),
            reason=self._reason(best_slot.aqi, best_score, baseline),
        )

    def _reason(self, aqi: float, best_score: int, baseline: int) -> str:
        if self.calculator.profile.window_reason_shows_improvement:
            improvement = round_half_up((baseline - best_score) / max(baseline, 1) * 100)
            return REASON_WITH_IMPROVEMENT_TEMPLATES[self.language].format(
                aqi=_format_aqi(aqi), improvement=improvement
            )
        return REASON_TEMPLATES[self.language].format(aqi=_format_aqi(aqi))
