"""
Decision engine module for the Activity Risk engine.

This module contains the DecisionEngine class, the orchestrator that turns
current air quality into per-activity decisions. It coordinates the risk
score calculator, the best-time-window finder and the recommendation
composer, builds the pollutant contribution breakdown, and optionally records
each evaluation to a decision log.
"""

import os
from datetime import datetime
from typing import Iterable, Optional, Sequence

import pandas as pd

from .activity_catalog import ActivityCatalog
from .activity_decision import ActivityDecision, PollutantContribution
from .activity_template import ActivityTemplate
from .decision_log import DecisionLog, EvaluationLogEntry
from .forecast_slot import ForecastSlot
from .pollutant_sample import PollutantSample
from .pollutant_weights import PollutantWeightTable
from .recommendation import RecommendationComposer
from .risk_calculator import RiskScoreCalculator
from .risk_classifier import RiskClassifier, normalize_language
from .scoring_profile import STANDARD_PROFILE, ScoringProfile, profile_from_env
from .time_window import BestTimeWindowFinder


RISK_MATRIX_COLUMNS = [
    "activity_id",
    "activity",
    "icon",
    "score",
    "level",
    "label",
    "color",
    "best_window_start",
    "best_window_end",
    "recommendation",
]


class DecisionEngine:
    """
    Core orchestrator for activity risk decisions.

    The engine holds only read-only configuration: the activity catalog, the
    pollutant weight table, the scoring profile and the output language.
    Every evaluation is a pure function of its arguments and that
    configuration, so one engine can be shared freely between callers. The
    only side effect is the optional decision log.
    """

    def __init__(
        self,
        catalog: Optional[ActivityCatalog] = None,
        weights: Optional[PollutantWeightTable] = None,
        profile: ScoringProfile = STANDARD_PROFILE,
        language: str = "zh",
        decision_log: Optional[DecisionLog] = None,
    ):
        """
        Initialize the engine and its collaborators.

        Args:
            catalog: Activities evaluated by evaluate_default (built-in templates if None)
            weights: Pollutant weight table (built-in weights if None)
            profile: Scoring constants; the standard profile by default
            language: "zh" or "en" for labels and advice
            decision_log: Optional log receiving every batch evaluation
        """
        self.catalog = catalog or ActivityCatalog()
        self.weights = weights or PollutantWeightTable()
        self.profile = profile
        self.language = normalize_language(language)
        self.decision_log = decision_log

        self.calculator = RiskScoreCalculator(
            weights=self.weights,
            profile=self.profile,
            classifier=RiskClassifier(self.language),
        )
        self.window_finder = BestTimeWindowFinder(self.calculator, self.language)
        self.composer = RecommendationComposer(self.language)

    @classmethod
    def from_environment(cls, decision_log: Optional[DecisionLog] = None) -> "DecisionEngine":
        """
        Builds an engine configured from environment variables.

        Reads ACTIVITYRISK_SCORING_PROFILE ("standard" or "l1") and
        ACTIVITYRISK_LANGUAGE ("zh" or "en").
        """
        return cls(
            profile=profile_from_env(),
            language=os.getenv("ACTIVITYRISK_LANGUAGE", "zh"),
            decision_log=decision_log,
        )

    def decide(
        self,
        activity: ActivityTemplate,
        aqi: float,
        pollutants: Optional[Sequence[PollutantSample]] = None,
        forecast: Optional[Sequence[ForecastSlot]] = None,
    ) -> ActivityDecision:
        """
        Produces the complete decision for one activity.

        Steps: score the activity, build the static pollutant breakdown,
        search the forecast for a better window, and compose the advice.

        Args:
            activity: The activity to evaluate
            aqi: Current AQI
            pollutants: Optional current pollutant samples
            forecast: Optional chronologically ordered hourly forecast

        Returns:
            A fresh ActivityDecision
        """
        # Step 1: Score under current conditions
        risk_score = self.calculator.score(aqi, activity, pollutants)

        # Step 2: Static contribution per supplied pollutant
        pollutant_breakdown = tuple(
            PollutantContribution(
                pollutant=sample.code,
                display_name=sample.display_name,
                contribution=self.weights.contribution(sample.code),
            )
            for sample in pollutants or ()
        )

        # Step 3: Best time window (only with a non-empty forecast)
        best_time_window = None
        if forecast:
            best_time_window = self.window_finder.find(forecast, activity, risk_score.score)

        # Step 4: Advice text
        recommendation = self.composer.compose(activity, risk_score, best_time_window)

        return ActivityDecision(
            activity=activity,
            risk_score=risk_score,
            recommendation=recommendation,
            best_time_window=best_time_window,
            pollutant_breakdown=pollutant_breakdown,
        )

    def evaluate_all(
        self,
        activities: Iterable[ActivityTemplate],
        aqi: float,
        pollutants: Optional[Sequence[PollutantSample]] = None,
        forecast: Optional[Sequence[ForecastSlot]] = None,
    ) -> list[ActivityDecision]:
        """
        Evaluates every activity independently.

        Returns:
            Decisions in the same order as the input activities
        """
        decisions = [
            self.decide(activity, aqi, pollutants, forecast)
            for activity in activities
        ]

        if self.decision_log is not None:
            self.decision_log.record(
                EvaluationLogEntry(
                    timestamp=datetime.now(),
                    aqi=aqi,
                    decisions=decisions,
                    details={
                        "profile": self.profile.name,
                        "pollutants": str(len(pollutants or ())),
                        "forecast_slots": str(len(forecast or ())),
                    },
                )
            )

        return decisions

    def evaluate_default(
        self,
        aqi: float,
        pollutants: Optional[Sequence[PollutantSample]] = None,
        forecast: Optional[Sequence[ForecastSlot]] = None,
    ) -> list[ActivityDecision]:
        """Evaluates every activity of the engine's catalog."""
        return self.evaluate_all(self.catalog, aqi, pollutants, forecast)

    @staticmethod
    def decisions_to_frame(decisions: Sequence[ActivityDecision]) -> pd.DataFrame:
        """
        Renders decisions as a risk matrix table.

        Returns:
            DataFrame with one row per decision, in decision order
        """
        rows = []
        for decision in decisions:
            window = decision.best_time_window
            rows.append({
                "activity_id": decision.activity.id,
                "activity": decision.activity.name,
                "icon": decision.activity.icon,
                "score": decision.risk_score.score,
                "level": decision.risk_score.level,
                "label": decision.risk_score.label,
                "color": decision.risk_score.color,
                "best_window_start": window.start if window else None,
                "best_window_end": window.end if window else None,
                "recommendation": decision.recommendation,
            })
        return pd.DataFrame(rows, columns=RISK_MATRIX_COLUMNS)
