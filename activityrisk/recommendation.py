"""
Recommendation module for the Activity Risk engine.

This module contains the RecommendationComposer class which turns a risk
score and an optional best time window into the final advice string shown for
an activity. The wording comes from a decision table keyed by
(risk level, has best time window).
"""

from typing import Optional

from .activity_template import ActivityTemplate
from .forecast_slot import format_clock
from .risk_classifier import normalize_language
from .risk_score import RiskScore
from .time_window import TimeWindow


# (level, has_window) -> template; placeholders: base, name, time
RECOMMENDATION_TABLE = {
    "zh": {
        ("safe", False): "{base}。現在是進行{name}的好時機！",
        ("safe", True): "{base}。現在是進行{name}的好時機！",
        ("caution", True): "{base}。建議改到 {time} 進行會更好。",
        ("caution", False): "{base}。建議縮短活動時間或配戴口罩。",
        ("unhealthy", True): "{base}。強烈建議延後到 {time}。",
        ("unhealthy", False): "{base}。建議改為室內替代活動。",
        ("dangerous", False): "{base}。請留在室內，避免暴露在戶外空氣中。",
        ("dangerous", True): "{base}。請留在室內，避免暴露在戶外空氣中。",
    },
    "en": {
        ("safe", False): "{base}. Now is a great time for {name}!",
        ("safe", True): "{base}. Now is a great time for {name}!",
        ("caution", True): "{base}. Moving it to {time} would be better.",
        ("caution", False): "{base}. Consider shortening the activity or wearing a mask.",
        ("unhealthy", True): "{base}. Strongly consider postponing until {time}.",
        ("unhealthy", False): "{base}. Consider an indoor alternative instead.",
        ("dangerous", False): "{base}. Stay indoors and avoid exposure to outdoor air.",
        ("dangerous", True): "{base}. Stay indoors and avoid exposure to outdoor air.",
    },
}


class RecommendationComposer:
    """Composes activity- and window-aware advice from the decision table."""

    def __init__(self, language: str = "zh"):
        self.language = normalize_language(language)

    def compose(
        self,
        activity: ActivityTemplate,
        risk_score: RiskScore,
        best_time_window: Optional[TimeWindow] = None,
    ) -> str:
        """
        Builds the recommendation for one activity.

        Args:
            activity: The evaluated activity
            risk_score: Its classified risk score
            best_time_window: Optional better window found in the forecast

        Returns:
            The final advice string
        """
        has_window = best_time_window is not None
        template = RECOMMENDATION_TABLE[self.language][(risk_score.level, has_window)]
        return template.format(
            base=risk_score.recommendation,
            name=activity.name,
            time=format_clock(best_time_window.start) if has_window else "",
        )
