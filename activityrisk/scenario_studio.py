"""
Scenario studio module for the Activity Risk engine.

This module contains the ScenarioStudio class which summarizes a 24-hour
forecast for one activity at one location: it samples the forecast every
three hours, picks the best and worst slots, averages the AQI and asks the
RecommendationService for supplementary advice.
"""

from dataclasses import dataclass
from typing import Optional, Sequence

from .forecast_slot import ForecastSlot, parse_timestamp
from .forecast_simulator import aqi_category
from .llm_service import RecommendationService
from .risk_calculator import round_half_up
from .scenario_time_slot import ScenarioTimeSlot


@dataclass(frozen=True)
class ScenarioAnalysis:
    """
    The analysis of one activity at one location.

    Attributes:
        activity: Activity name
        location: Location name
        time_slots: Sampled slots, chronologically ordered
        best_time_slot: Lowest-AQI slot (earliest on ties)
        worst_time_slot: Highest-AQI slot (earliest on ties)
        average_aqi: Rounded mean AQI of the sampled slots
        recommendation: Advice text
        recommendation_source: "grok" or "fallback"
    """

    activity: str
    location: str
    time_slots: tuple[ScenarioTimeSlot, ...]
    best_time_slot: ScenarioTimeSlot
    worst_time_slot: ScenarioTimeSlot
    average_aqi: int
    recommendation: str
    recommendation_source: str


class ScenarioStudio:
    """Builds ScenarioAnalysis objects from hourly forecasts."""

    SAMPLE_EVERY_HOURS = 3
    INDEX_CODE = "uaqi"

    def __init__(self, recommendation_service: Optional[RecommendationService] = None):
        self.recommendation_service = recommendation_service or RecommendationService()

    def build_time_slots(self, forecast: Sequence[ForecastSlot]) -> list[ScenarioTimeSlot]:
        """
        Samples every third hourly slot, starting with the first.

        The universal AQI index is preferred; slots without it use their
        first index.
        """
        slots = []
        for slot in forecast[:: self.SAMPLE_EVERY_HOURS]:
            index = slot.find_index(self.INDEX_CODE) or (slot.indexes[0] if slot.indexes else None)
            aqi = index.aqi if index else 0
            moment = parse_timestamp(slot.date_time)
            slots.append(
                ScenarioTimeSlot(
                    time=f"{moment.hour:02d}:00" if moment else slot.date_time,
                    date_time=slot.date_time,
                    aqi=aqi,
                    category=(index.category if index and index.category else aqi_category(aqi)),
                    dominant_pollutant=(index.dominant_pollutant if index and index.dominant_pollutant else "unknown"),
                    risk_level=ScenarioTimeSlot.risk_level_for(aqi),
                )
            )
        return slots

    def analyze(
        self,
        activity: str,
        location: str,
        forecast: Sequence[ForecastSlot],
        language: str = "zh",
        sensitivity: Optional[str] = None,
    ) -> ScenarioAnalysis:
        """
        Analyzes a forecast for one activity at one location.

        Args:
            activity: Activity name
            location: Location name
            forecast: Hourly forecast, chronologically ordered
            language: "zh" or "en" for the advice
            sensitivity: Optional sensitivity group passed to the advisor

        Returns:
            The ScenarioAnalysis

        Raises:
            ValueError: If the forecast has no slots
        """
        time_slots = self.build_time_slots(forecast)
        if not time_slots:
            raise ValueError("forecast contains no time slots")

        # min/max return the first extreme, so the earliest slot wins ties
        best_slot = min(time_slots, key=lambda slot: slot.aqi)
        worst_slot = max(time_slots, key=lambda slot: slot.aqi)
        average_aqi = round_half_up(sum(slot.aqi for slot in time_slots) / len(time_slots))

        recommendation, source = self.recommendation_service.get_recommendation(
            activity,
            location,
            time_slots,
            best_time=best_slot.time,
            worst_time=worst_slot.time,
            language=language,
            sensitivity=sensitivity,
        )

        return ScenarioAnalysis(
            activity=activity,
            location=location,
            time_slots=tuple(time_slots),
            best_time_slot=best_slot,
            worst_time_slot=worst_slot,
            average_aqi=average_aqi,
            recommendation=recommendation,
            recommendation_source=source,
        )
