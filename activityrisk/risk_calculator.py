"""
Risk calculator module for the Activity Risk engine.

This module contains the RiskScoreCalculator class which combines the current
AQI, an activity template and optional pollutant samples into a 0-100 risk
score, then labels it through the RiskClassifier.

Scoring steps (standard profile):
1. normalized AQI = min(aqi / 3, 100)
2. activity multiplier = 1 + base_risk_factor
3. duration multiplier = 1 + (duration / 120) * 0.3
4. score = normalized AQI * activity multiplier * duration multiplier
5. with pollutants: score = score * 0.7 + pollutant risk * 0.3
6. clamp to [0, 100], round, classify
"""

import math
from typing import Optional, Sequence

from .activity_template import ActivityTemplate
from .pollutant_sample import PollutantSample
from .pollutant_weights import PollutantWeightTable
from .risk_classifier import RiskClassifier
from .risk_score import RiskScore
from .scoring_profile import STANDARD_PROFILE, ScoringProfile


MIN_SCORE = 0
MAX_SCORE = 100


def round_half_up(value: float) -> int:
    """Rounds to the nearest integer, with .5 rounding up."""
    return int(math.floor(value + 0.5))


class RiskScoreCalculator:
    """
    Computes activity risk scores.

    Never raises for out-of-domain numeric input: AQI values above the
    saturation point, negative values and unknown pollutant codes are all
    absorbed by saturation, clamping and defaults.
    """

    def __init__(
        self,
        weights: Optional[PollutantWeightTable] = None,
        profile: ScoringProfile = STANDARD_PROFILE,
        classifier: Optional[RiskClassifier] = None,
    ):
        self.weights = weights or PollutantWeightTable()
        self.profile = profile
        self.classifier = classifier or RiskClassifier()

    def raw_score(
        self,
        aqi: float,
        activity: ActivityTemplate,
        pollutants: Optional[Sequence[PollutantSample]] = None,
    ) -> float:
        """
        Computes the unclamped, unrounded score.

        Args:
            aqi: Current AQI (expected 0-500, not validated)
            activity: The activity being evaluated
            pollutants: Optional pollutant samples; None and empty are equivalent

        Returns:
            The blended score before clamping and rounding
        """
        profile = self.profile

        # Map AQI onto 0-100; AQI >= 300 saturates
        normalized_aqi = min(aqi / profile.aqi_divisor, profile.aqi_ceiling)

        activity_multiplier = 1 + activity.base_risk_factor

        # Longer activities scale risk up to +30% at the reference duration
        duration_multiplier = 1 + (
            activity.duration / profile.duration_reference_minutes
        ) * profile.duration_max_uplift

        final_score = normalized_aqi * activity_multiplier * duration_multiplier

        if pollutants:
            pollutant_term = self.pollutant_risk(pollutants, activity) * profile.pollutant_blend
            if profile.scale_pollutant_blend_by_aqi:
                aqi_weight = min(
                    max(aqi / profile.pollutant_aqi_reference, profile.pollutant_aqi_floor), 1
                )
                pollutant_term *= aqi_weight
            final_score = final_score * profile.aqi_blend + pollutant_term

        if profile.good_aqi_score_cap is not None and aqi <= profile.good_aqi_threshold:
            final_score = min(final_score, profile.good_aqi_score_cap)

        return final_score

    def score(
        self,
        aqi: float,
        activity: ActivityTemplate,
        pollutants: Optional[Sequence[PollutantSample]] = None,
    ) -> RiskScore:
        """
        Computes and classifies the risk score for an activity.

        Args:
            aqi: Current AQI
            activity: The activity being evaluated
            pollutants: Optional pollutant samples

        Returns:
            RiskScore with an integer score in [0, 100]
        """
        final_score = self.raw_score(aqi, activity, pollutants)
        final_score = max(MIN_SCORE, min(MAX_SCORE, final_score))
        return self.classifier.classify(round_half_up(final_score))

    def pollutant_risk(
        self,
        pollutants: Sequence[PollutantSample],
        activity: ActivityTemplate,
    ) -> float:
        """
        Weighted pollutant risk on a 0-100 scale.

        Each sample contributes weight x normalized concentration. Unknown
        codes weigh 0, so they add nothing to the sum.
        """
        weighted_risk = 0.0
        for sample in pollutants:
            weight = self.weights.weight(sample.code)
            weighted_risk += weight * self.normalized_concentration(sample, activity)
        return weighted_risk * 100

    def normalized_concentration(self, sample: PollutantSample, activity: ActivityTemplate) -> float:
        """Concentration relative to its health threshold, capped at 1 before the ozone penalty."""
        profile = self.profile
        divisor = profile.divisor_for(sample.code, activity.intensity)
        if divisor is None:
            normalized = profile.default_normalized_concentration
        else:
            normalized = min(sample.concentration.value / divisor, 1)

        # Higher ventilation rate during exertion makes ozone worse
        if sample.code == "o3" and activity.intensity == "high":
            normalized *= profile.ozone_high_intensity_penalty

        return normalized
