"""
Risk score module for the Activity Risk engine.

This module defines the RiskScore dataclass, the classified result of scoring
one activity under the current air quality.
"""

from dataclasses import dataclass


RISK_LEVELS = ("safe", "caution", "unhealthy", "dangerous")


@dataclass(frozen=True)
class RiskScore:
    """
    A classified 0-100 risk score.

    The level, color, label and recommendation are all determined solely by
    the score through the RiskClassifier thresholds.

    Attributes:
        score: Integer risk score between 0 and 100
        level: One of "safe", "caution", "unhealthy", "dangerous"
        color: Display color code tied to the level
        label: Human-readable level name
        recommendation: Generic level-based advice
    """

    score: int
    level: str
    color: str
    label: str
    recommendation: str

    def to_dict(self) -> dict[str, object]:
        return {
            "score": self.score,
            "level": self.level,
            "color": self.color,
            "label": self.label,
            "recommendation": self.recommendation,
        }
