"""
Tests for DecisionEngine component.

Tests cover:
- End-to-end decisions: score, window, breakdown and advice together
- Full decision path coverage: every (risk level, has window) advice branch
- Batch evaluation: order preservation, catalog injection, risk matrix frame
- Configuration: environment-driven profile and language
- Decision logging: lines written per decision
"""

from unittest.mock import patch
import os

import pytest

from activityrisk.activity_catalog import ActivityCatalog
from activityrisk.decision_engine import DecisionEngine, RISK_MATRIX_COLUMNS
from activityrisk.decision_log import DecisionLog
from activityrisk.forecast_slot import ForecastSlot
from activityrisk.scoring_profile import L1_PROFILE, STANDARD_PROFILE


@pytest.fixture
def engine():
    """Fixture providing an engine with the built-in configuration."""
    return DecisionEngine()


class TestDecide:
    """Test suite for single-activity decisions."""

    def test_end_to_end_scenario(self, engine, jogging, make_sample, make_forecast):
        """AQI 150 with PM2.5 80 and O3 110 while jogging → 86, dangerous, window at +2h."""
        pollutants = [
            make_sample("pm25", 80, display_name="PM2.5"),
            make_sample("o3", 110, display_name="O3", units="ppb"),
        ]
        forecast = make_forecast(
            ("2024-05-01T08:00:00Z", 150),
            ("2024-05-01T09:00:00Z", 140),
            ("2024-05-01T10:00:00Z", 60),
        )

        decision = engine.decide(jogging, 150, pollutants, forecast)

        assert decision.risk_score.score == 86
        assert decision.risk_score.level == "dangerous"
        assert decision.best_time_window.start == "2024-05-01T10:00:00Z"
        assert decision.best_time_window.end == "2024-05-01T10:30:00Z"
        assert [entry.contribution for entry in decision.pollutant_breakdown] == pytest.approx([40.0, 25.0])
        assert [entry.display_name for entry in decision.pollutant_breakdown] == ["PM2.5", "O3"]
        assert decision.recommendation == "⛔ 強烈建議取消或改為室內活動。請留在室內，避免暴露在戶外空氣中。"

    def test_no_forecast_no_window(self, engine, jogging):
        decision = engine.decide(jogging, 150)
        assert decision.best_time_window is None
        assert decision.pollutant_breakdown == ()

    def test_null_forecast_aqi_reads_as_50(self, engine, jogging):
        """Edge case: Wire slot with "aqi": null scores as AQI 50 instead of failing."""
        forecast = [
            ForecastSlot.from_dict({"dateTime": "2024-05-01T08:00:00Z", "indexes": [{"aqi": 150}]}),
            ForecastSlot.from_dict({"dateTime": "2024-05-01T09:00:00Z", "indexes": [{"aqi": None}]}),
        ]
        decision = engine.decide(jogging, 150, forecast=forecast)
        assert decision.best_time_window.start == "2024-05-01T09:00:00Z"
        assert decision.best_time_window.reason == "該時段 AQI 預計為 50，比現在更適合"

    def test_unknown_pollutant_contributes_zero(self, engine, jogging, make_sample):
        decision = engine.decide(jogging, 80, [make_sample("xyz", 10)])
        assert decision.pollutant_breakdown[0].contribution == 0

    def test_idempotent(self, engine, jogging, make_sample, make_forecast):
        pollutants = [make_sample("pm25", 30)]
        forecast = make_forecast(("2024-05-01T08:00:00Z", 90), ("2024-05-01T09:00:00Z", 20))
        assert engine.decide(jogging, 90, pollutants, forecast) == engine.decide(jogging, 90, pollutants, forecast)

    # ==================== Full Decision Path Coverage ====================

    def test_path_safe(self, engine, walking):
        decision = engine.decide(walking, 30)
        assert decision.risk_score.level == "safe"
        assert decision.recommendation == "✅ 適合進行此活動。現在是進行散步的好時機！"

    def test_path_caution_with_window(self, engine, jogging, make_forecast):
        forecast = make_forecast(("2024-05-01T08:00:00Z", 80), ("2024-05-01T10:00:00Z", 30))
        decision = engine.decide(jogging, 80, forecast=forecast)
        assert decision.risk_score.score == 49
        assert decision.recommendation == "⚠️ 可以進行，但請注意身體狀況。建議改到 10:00 進行會更好。"

    def test_path_caution_without_window(self, engine, jogging):
        decision = engine.decide(jogging, 80)
        assert decision.recommendation == "⚠️ 可以進行，但請注意身體狀況。建議縮短活動時間或配戴口罩。"

    def test_path_unhealthy_with_window(self, engine, jogging, make_forecast):
        forecast = make_forecast(("2024-05-01T08:00:00Z", 100), ("2024-05-01T10:00:00Z", 40))
        decision = engine.decide(jogging, 100, forecast=forecast)
        assert decision.risk_score.score == 61
        assert decision.recommendation == "🚫 不建議進行此活動。強烈建議延後到 10:00。"

    def test_path_unhealthy_without_window(self, engine, jogging):
        decision = engine.decide(jogging, 100)
        assert decision.recommendation == "🚫 不建議進行此活動。建議改為室內替代活動。"

    def test_path_dangerous_ignores_window(self, engine, jogging, make_forecast):
        forecast = make_forecast(("2024-05-01T08:00:00Z", 200), ("2024-05-01T10:00:00Z", 20))
        decision = engine.decide(jogging, 200, forecast=forecast)
        assert decision.best_time_window is not None
        assert "10:00" not in decision.recommendation

    def test_english_path(self, jogging):
        decision = DecisionEngine(language="en").decide(jogging, 100)
        assert decision.recommendation == (
            "🚫 This activity is not recommended. Consider an indoor alternative instead."
        )

    # ==================== Wire Form ====================

    def test_to_dict_omits_missing_window(self, engine, walking):
        data = engine.decide(walking, 30).to_dict()
        assert "bestTimeWindow" not in data
        assert data["riskScore"]["score"] == 15
        assert data["activity"]["id"] == "walking"
        assert data["pollutantBreakdown"] == []

    def test_to_dict_includes_window(self, engine, jogging, make_forecast):
        forecast = make_forecast(("2024-05-01T08:00:00Z", 150), ("2024-05-01T09:00:00Z", 50))
        data = engine.decide(jogging, 150, forecast=forecast).to_dict()
        assert data["bestTimeWindow"]["start"] == "2024-05-01T09:00:00Z"


class TestBatchEvaluation:
    """Test suite for evaluate_all / evaluate_default."""

    def test_order_preserved(self, engine, catalog):
        activities = [catalog.get("playground"), catalog.get("walking"), catalog.get("jogging")]
        decisions = engine.evaluate_all(activities, 90)
        assert [d.activity.id for d in decisions] == ["playground", "walking", "jogging"]

    def test_evaluate_default_covers_catalog(self, engine, catalog):
        decisions = engine.evaluate_default(90)
        assert [d.activity.id for d in decisions] == list(catalog.ids)
        assert [d.risk_score.score for d in decisions] == [55, 45, 47, 41, 53]

    def test_empty_activity_list(self, engine):
        assert engine.evaluate_all([], 100) == []

    def test_injected_catalog(self, walking):
        engine = DecisionEngine(catalog=ActivityCatalog([walking]))
        assert [d.activity.id for d in engine.evaluate_default(50)] == ["walking"]

    def test_decisions_to_frame(self, engine, make_forecast):
        forecast = make_forecast(("2024-05-01T08:00:00Z", 150), ("2024-05-01T09:00:00Z", 50))
        decisions = engine.evaluate_default(150, forecast=forecast)
        frame = DecisionEngine.decisions_to_frame(decisions)
        assert list(frame.columns) == RISK_MATRIX_COLUMNS
        assert len(frame) == 5
        assert frame.loc[0, "activity_id"] == "jogging"
        assert frame.loc[0, "best_window_start"] == "2024-05-01T09:00:00Z"

    def test_decisions_to_frame_empty(self):
        frame = DecisionEngine.decisions_to_frame([])
        assert frame.empty
        assert list(frame.columns) == RISK_MATRIX_COLUMNS


class TestConfiguration:
    """Test suite for engine configuration."""

    def test_defaults(self, engine):
        assert engine.profile is STANDARD_PROFILE
        assert engine.language == "zh"
        assert engine.decision_log is None

    @patch.dict(os.environ, {"ACTIVITYRISK_SCORING_PROFILE": "L1", "ACTIVITYRISK_LANGUAGE": "en"})
    def test_from_environment(self):
        engine = DecisionEngine.from_environment()
        assert engine.profile is L1_PROFILE
        assert engine.language == "en"

    @patch.dict(os.environ, {"ACTIVITYRISK_SCORING_PROFILE": "aggressive"})
    def test_from_environment_unknown_profile(self):
        with pytest.raises(ValueError, match="aggressive"):
            DecisionEngine.from_environment()

    def test_l1_engine_window_reason(self, jogging, make_sample, make_forecast):
        engine = DecisionEngine(profile=L1_PROFILE)
        pollutants = [make_sample("pm25", 80), make_sample("o3", 110, units="ppb")]
        forecast = make_forecast(("2024-05-01T08:00:00Z", 150), ("2024-05-01T10:00:00Z", 60))
        decision = engine.decide(jogging, 150, pollutants, forecast)
        assert decision.risk_score.score == 86
        assert decision.best_time_window.reason.endswith("57%")


class TestDecisionLogging:
    """Test suite for optional decision logging."""

    def test_batch_written_to_log(self, tmp_path, make_forecast):
        log_file = tmp_path / "logs" / "decisions.log"
        engine = DecisionEngine(decision_log=DecisionLog(log_file))
        forecast = make_forecast(("2024-05-01T08:00:00Z", 150), ("2024-05-01T09:00:00Z", 50))

        engine.evaluate_default(150, forecast=forecast)

        lines = [line for line in log_file.read_text(encoding="utf-8").splitlines() if line.startswith("[")]
        assert len(lines) == 5
        assert "jogging" in lines[0]
        assert "2024-05-01T09:00:00Z -> 2024-05-01T09:30:00Z" in lines[0]
        assert lines[0].rstrip().endswith("standard")

    def test_decide_does_not_log(self, tmp_path, jogging):
        log_file = tmp_path / "decisions.log"
        engine = DecisionEngine(decision_log=DecisionLog(log_file))
        engine.decide(jogging, 100)
        assert not any(line.startswith("[") for line in log_file.read_text(encoding="utf-8").splitlines())
