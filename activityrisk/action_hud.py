"""
Action HUD module for the Activity Risk engine.

This module builds the "Action HUD" summary from a batch of activity
decisions: the safest few activities as actionable suggestions, and the
activity carrying the highest risk.
"""

from dataclasses import dataclass
from typing import Optional, Sequence

from .activity_decision import ActivityDecision
from .forecast_slot import format_clock
from .risk_classifier import normalize_language


CTA_LABELS = {
    "zh": {"dangerous": "設定提醒", "default": "加入提醒"},
    "en": {"dangerous": "Set reminder", "default": "Add reminder"},
}


@dataclass(frozen=True)
class ActionSuggestion:
    """
    One suggested action shown in the HUD.

    Attributes:
        activity_id: Id of the suggested activity
        title: "{icon} {name}"
        description: The decision's recommendation
        severity: Risk level of the decision
        color: Display color of the risk level
        cta_label: Call-to-action button text
        best_time_text: "HH:MM → HH:MM" of the best window, if any
    """

    activity_id: str
    title: str
    description: str
    severity: str
    color: str
    cta_label: str
    best_time_text: Optional[str] = None


@dataclass(frozen=True)
class ActionHUD:
    suggestions: tuple[ActionSuggestion, ...]
    dominant_risk: Optional[ActivityDecision]


def to_suggestion(decision: ActivityDecision, language: str = "zh") -> ActionSuggestion:
    labels = CTA_LABELS[normalize_language(language)]
    window = decision.best_time_window
    best_time_text = None
    if window is not None:
        best_time_text = f"{format_clock(window.start)} → {format_clock(window.end)}"

    return ActionSuggestion(
        activity_id=decision.activity.id,
        title=f"{decision.activity.icon} {decision.activity.name}",
        description=decision.recommendation,
        severity=decision.risk_score.level,
        color=decision.risk_score.color,
        cta_label=labels["dangerous"] if decision.risk_score.level == "dangerous" else labels["default"],
        best_time_text=best_time_text,
    )


def build_action_hud(
    decisions: Sequence[ActivityDecision],
    limit: int = 3,
    language: str = "zh",
) -> ActionHUD:
    """
    Builds the HUD from a batch of decisions.

    Args:
        decisions: Decisions from the batch evaluator
        limit: Maximum number of suggestions
        language: "zh" or "en" for call-to-action labels

    Returns:
        ActionHUD with the lowest-risk suggestions (ties keep input order)
        and the highest-risk decision (first one on ties)
    """
    if not decisions:
        return ActionHUD(suggestions=(), dominant_risk=None)

    by_risk = sorted(decisions, key=lambda decision: decision.risk_score.score)
    dominant = max(by_risk, key=lambda decision: decision.risk_score.score)

    return ActionHUD(
        suggestions=tuple(to_suggestion(decision, language) for decision in by_risk[:limit]),
        dominant_risk=dominant,
    )
