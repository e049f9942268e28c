"""
Activity Risk engine.

Converts current air quality (AQI, pollutant readings and an hourly forecast)
into per-activity risk scores, best-time-window suggestions and advice.
"""

from .activity_catalog import ActivityCatalog, DEFAULT_ACTIVITY_TEMPLATES
from .activity_decision import ActivityDecision, PollutantContribution
from .activity_template import ActivityTemplate
from .decision_engine import DecisionEngine
from .forecast_slot import ForecastIndex, ForecastSlot
from .pollutant_sample import Concentration, PollutantSample
from .pollutant_weights import PollutantWeightTable
from .risk_classifier import RiskClassifier
from .risk_score import RiskScore
from .scoring_profile import L1_PROFILE, STANDARD_PROFILE, ScoringProfile, get_profile
from .time_window import TimeWindow

__all__ = [
    'ActivityCatalog',
    'ActivityDecision',
    'ActivityTemplate',
    'Concentration',
    'DEFAULT_ACTIVITY_TEMPLATES',
    'DecisionEngine',
    'ForecastIndex',
    'ForecastSlot',
    'L1_PROFILE',
    'PollutantContribution',
    'PollutantSample',
    'PollutantWeightTable',
    'RiskClassifier',
    'RiskScore',
    'STANDARD_PROFILE',
    'ScoringProfile',
    'TimeWindow',
    'get_profile',
]
