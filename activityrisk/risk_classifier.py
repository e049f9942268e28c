"""
Risk classifier module for the Activity Risk engine.

This module contains the RiskClassifier class which is a pure classifier for
risk scores. It maps an integer score to a risk level and the display style
(color, label, generic advice) associated with that level.
"""

from .risk_score import RiskScore


SUPPORTED_LANGUAGES = ("zh", "en")

# (upper bound exclusive, level); the last level also covers the upper bound
RISK_THRESHOLDS = (
    (25, "safe"),
    (50, "caution"),
    (75, "unhealthy"),
)
TOP_RISK_LEVEL = "dangerous"

RISK_LEVEL_STYLES = {
    "safe": {
        "color": "#22c55e",
        "label": {"zh": "安全", "en": "Safe"},
        "recommendation": {"zh": "✅ 適合進行此活動", "en": "✅ Suitable for this activity"},
    },
    "caution": {
        "color": "#eab308",
        "label": {"zh": "注意", "en": "Caution"},
        "recommendation": {
            "zh": "⚠️ 可以進行，但請注意身體狀況",
            "en": "⚠️ OK to proceed, but pay attention to how you feel",
        },
    },
    "unhealthy": {
        "color": "#f97316",
        "label": {"zh": "不宜", "en": "Unhealthy"},
        "recommendation": {"zh": "🚫 不建議進行此活動", "en": "🚫 This activity is not recommended"},
    },
    "dangerous": {
        "color": "#ef4444",
        "label": {"zh": "危險", "en": "Dangerous"},
        "recommendation": {
            "zh": "⛔ 強烈建議取消或改為室內活動",
            "en": "⛔ Strongly consider cancelling or moving indoors",
        },
    },
}


def normalize_language(language: str) -> str:
    """Returns a supported language code, falling back to "zh"."""
    code = (language or "").strip().lower()[:2]
    return code if code in SUPPORTED_LANGUAGES else "zh"


class RiskClassifier:
    """
    Pure classifier mapping a score to a RiskScore.

    Thresholds are half-open with an inclusive lower bound:
    [0,25) safe, [25,50) caution, [50,75) unhealthy, [75,100] dangerous.
    Callers round and clamp the score to [0,100] before classifying.
    """

    def __init__(self, language: str = "zh"):
        self.language = normalize_language(language)

    def level_for(self, score: int) -> str:
        """Returns the risk level name for a score."""
        for upper_bound, level in RISK_THRESHOLDS:
            if score < upper_bound:
                return level
        return TOP_RISK_LEVEL

    def classify(self, score: int) -> RiskScore:
        """
        Classifies a pre-rounded, pre-clamped score.

        Args:
            score: Integer score between 0 and 100

        Returns:
            RiskScore carrying the score and its level style in the
            classifier's language
        """
        level = self.level_for(score)
        style = RISK_LEVEL_STYLES[level]
        return RiskScore(
            score=score,
            level=level,
            color=style["color"],
            label=style["label"][self.language],
            recommendation=style["recommendation"][self.language],
        )
