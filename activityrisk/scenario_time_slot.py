"""
Scenario time slot module for the Activity Risk engine.

This module defines the ScenarioTimeSlot dataclass, a sampled forecast hour
as shown in the scenario studio and sent to the recommendation service.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ScenarioTimeSlot:
    """
    One sampled forecast hour.

    Attributes:
        time: "HH:00" label of the slot
        date_time: ISO-8601 timestamp of the slot
        aqi: Forecast AQI
        category: AQI category name
        dominant_pollutant: Code of the dominant pollutant
        risk_level: "safe" (AQI <= 100), "warning" (<= 150) or "danger"
    """

    time: str
    date_time: str
    aqi: float
    category: str
    dominant_pollutant: str
    risk_level: str

    @staticmethod
    def risk_level_for(aqi: float) -> str:
        if aqi <= 100:
            return "safe"
        if aqi <= 150:
            return "warning"
        return "danger"
