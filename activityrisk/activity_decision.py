"""
Activity decision module for the Activity Risk engine.

This module defines the ActivityDecision dataclass, the engine's output unit,
and the PollutantContribution entries of its pollutant breakdown.
"""

from dataclasses import dataclass
from typing import Optional

from .activity_template import ActivityTemplate
from .risk_score import RiskScore
from .time_window import TimeWindow


@dataclass(frozen=True)
class PollutantContribution:
    """
    Static importance of one supplied pollutant.

    The contribution is the pollutant's weight x 100, not a measured share
    of the current score.

    Attributes:
        pollutant: Pollutant code
        display_name: Human-readable label
        contribution: Percentage (0 for unknown codes)
    """

    pollutant: str
    display_name: str
    contribution: float


@dataclass(frozen=True)
class ActivityDecision:
    """
    Represents the complete evaluation of one activity.

    Contains the evaluated activity, its risk score, the final advice and,
    when the forecast has a materially better slot, the recommended window.
    A new decision is produced on every call; decisions are never mutated.

    Attributes:
        activity: The evaluated activity template
        risk_score: Classified risk under current conditions
        recommendation: Activity- and window-aware advice
        best_time_window: Better window from the forecast, or None
        pollutant_breakdown: One entry per supplied pollutant sample, in order
    """

    activity: ActivityTemplate
    risk_score: RiskScore
    recommendation: str
    best_time_window: Optional[TimeWindow] = None
    pollutant_breakdown: tuple[PollutantContribution, ...] = ()

    def to_dict(self) -> dict[str, object]:
        """
        Converts the decision to the camelCase dictionary consumed by UIs.

        Returns:
            A JSON-serializable dictionary; bestTimeWindow is omitted when absent
        """
        result: dict[str, object] = {
            "activity": self.activity.to_dict(),
            "riskScore": self.risk_score.to_dict(),
            "recommendation": self.recommendation,
            "pollutantBreakdown": [
                {
                    "pollutant": entry.pollutant,
                    "displayName": entry.display_name,
                    "contribution": entry.contribution,
                }
                for entry in self.pollutant_breakdown
            ],
        }
        if self.best_time_window is not None:
            result["bestTimeWindow"] = self.best_time_window.to_dict()
        return result
