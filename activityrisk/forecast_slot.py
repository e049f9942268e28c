"""
Forecast slot module for the Activity Risk engine.

This module defines the ForecastIndex and ForecastSlot dataclasses which
represent one hour of an air quality forecast, plus the timestamp helpers the
engine uses to read and render ISO-8601 slot times.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Optional

from .pollutant_sample import PollutantSample


# AQI assumed for a slot that carries no index at all
DEFAULT_FORECAST_AQI = 50


@dataclass(frozen=True)
class ForecastIndex:
    """
    One air quality index reported for a forecast slot.

    Attributes:
        aqi: Index value
        code: Index family (e.g. "uaqi" for the universal AQI)
        category: Optional category label (e.g. "MODERATE")
        dominant_pollutant: Optional code of the dominant pollutant
    """

    aqi: float
    code: str = "uaqi"
    category: Optional[str] = None
    dominant_pollutant: Optional[str] = None


@dataclass(frozen=True)
class ForecastSlot:
    """
    One hourly forecast entry.

    Slots are expected in chronological order; nothing in the engine sorts
    them. Only the first index's AQI is used for scoring.

    Attributes:
        date_time: ISO-8601 timestamp of the slot
        indexes: Ordered indexes reported for the slot
        pollutants: Optional pollutant readings carried along for display
    """

    date_time: str
    indexes: tuple[ForecastIndex, ...] = ()
    pollutants: tuple[PollutantSample, ...] = field(default=())

    @property
    def aqi(self) -> float:
        """AQI of the first index, or DEFAULT_FORECAST_AQI when the slot has none."""
        if not self.indexes:
            return DEFAULT_FORECAST_AQI
        return self.indexes[0].aqi

    def find_index(self, code: str) -> Optional[ForecastIndex]:
        """Returns the first index with the given code, if any."""
        for index in self.indexes:
            if index.code == code:
                return index
        return None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ForecastSlot":
        """Builds a slot from {"dateTime", "indexes": [{"aqi", ...}], "pollutants"?}."""
        indexes = tuple(
            ForecastIndex(
                aqi=DEFAULT_FORECAST_AQI if item.get("aqi") is None else item["aqi"],
                code=item.get("code", "uaqi"),
                category=item.get("category"),
                dominant_pollutant=item.get("dominantPollutant"),
            )
            for item in data.get("indexes") or []
        )
        pollutants = tuple(
            PollutantSample.from_dict(item) for item in data.get("pollutants") or []
        )
        return cls(date_time=data["dateTime"], indexes=indexes, pollutants=pollutants)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "dateTime": self.date_time,
            "indexes": [
                {
                    "code": index.code,
                    "aqi": index.aqi,
                    "category": index.category,
                    "dominantPollutant": index.dominant_pollutant,
                }
                for index in self.indexes
            ],
        }
        if self.pollutants:
            result["pollutants"] = [
                {
                    "code": sample.code,
                    "displayName": sample.display_name,
                    "concentration": {
                        "value": sample.concentration.value,
                        "units": sample.concentration.units,
                    },
                }
                for sample in self.pollutants
            ]
        return result


def parse_timestamp(value: str) -> Optional[datetime]:
    """
    Parses an ISO-8601 timestamp, accepting a trailing "Z" for UTC.

    Returns:
        The parsed datetime, or None if the string is not a valid timestamp
    """
    if not value:
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def format_timestamp(moment: datetime, use_z_suffix: bool = False) -> str:
    """Renders a datetime as ISO-8601, optionally writing UTC as "Z"."""
    text = moment.isoformat()
    if use_z_suffix and text.endswith("+00:00"):
        text = text[:-6] + "Z"
    return text


def shift_timestamp(value: str, minutes: int) -> str:
    """
    Returns value shifted forward by the given number of minutes.

    The offset and "Z" style of the input are preserved. An unparseable
    timestamp is returned unchanged.
    """
    moment = parse_timestamp(value)
    if moment is None:
        return value
    return format_timestamp(moment + timedelta(minutes=minutes), value.strip().endswith("Z"))


def format_clock(value: str) -> str:
    """Renders the wall-clock "HH:MM" of a timestamp in its own offset."""
    moment = parse_timestamp(value)
    if moment is None:
        return value
    return moment.strftime("%H:%M")
