"""
Tests for scoring profiles and the pollutant weight table.

Tests cover:
- Profile lookup: built-in names, case handling, unknown names
- Environment configuration: ACTIVITYRISK_SCORING_PROFILE
- Divisor resolution: per-code, high-intensity overrides, fallbacks
- Weight table: defaults, unknown codes, custom tables, immutability
"""

from unittest.mock import patch
import os

import pytest

from activityrisk.pollutant_weights import DEFAULT_POLLUTANT_WEIGHTS, PollutantWeightTable
from activityrisk.scoring_profile import (
    L1_PROFILE,
    PROFILES,
    STANDARD_PROFILE,
    WINDOW_BASELINE_CURRENT,
    WINDOW_BASELINE_FORECAST,
    get_profile,
    profile_from_env,
)


class TestScoringProfile:
    """Test suite for ScoringProfile lookup and configuration."""

    def test_builtin_profiles(self):
        assert set(PROFILES) == {"standard", "l1"}
        assert STANDARD_PROFILE.window_baseline == WINDOW_BASELINE_FORECAST
        assert L1_PROFILE.window_baseline == WINDOW_BASELINE_CURRENT

    @pytest.mark.parametrize("name", ["l1", "L1", "  l1 "])
    def test_get_profile_case_insensitive(self, name):
        assert get_profile(name) is L1_PROFILE

    def test_get_unknown_profile_raises(self):
        """Error scenario: Unknown profile name → ValueError."""
        with pytest.raises(ValueError, match="Unknown scoring profile"):
            get_profile("experimental")

    @patch.dict(os.environ, {"ACTIVITYRISK_SCORING_PROFILE": ""})
    def test_env_empty_uses_standard(self):
        assert profile_from_env() is STANDARD_PROFILE

    @patch.dict(os.environ, {"ACTIVITYRISK_SCORING_PROFILE": "l1"})
    def test_env_selects_profile(self):
        assert profile_from_env() is L1_PROFILE

    # ==================== Divisor Resolution ====================

    def test_standard_divisors(self):
        assert STANDARD_PROFILE.divisor_for("pm25", "high") == 75
        assert STANDARD_PROFILE.divisor_for("pm10", "low") == 150
        assert STANDARD_PROFILE.divisor_for("o3", "medium") == 100
        assert STANDARD_PROFILE.divisor_for("no2", "low") is None

    def test_l1_divisors(self):
        assert L1_PROFILE.divisor_for("pm25", "high") == 35
        assert L1_PROFILE.divisor_for("pm25", "medium") == 45
        assert L1_PROFILE.divisor_for("so2", "low") == 100

    def test_profile_is_frozen(self):
        with pytest.raises(AttributeError):
            STANDARD_PROFILE.aqi_blend = 0.5


class TestPollutantWeightTable:
    """Test suite for PollutantWeightTable."""

    def test_default_weights(self):
        table = PollutantWeightTable()
        assert table.weight("pm25") == 0.40
        assert table.weight("o3") == 0.25
        assert sum(table.weights.values()) == pytest.approx(1.0)

    def test_unknown_code_weighs_zero(self):
        table = PollutantWeightTable()
        assert table.weight("xyz") == 0.0
        assert table.contribution("xyz") == 0.0
        assert "xyz" not in table

    def test_contribution_is_weight_times_100(self):
        table = PollutantWeightTable()
        assert table.contribution("pm10") == pytest.approx(15.0)
        assert table.contribution("co") == pytest.approx(5.0)

    def test_custom_table(self):
        table = PollutantWeightTable({"pm25": 1.0})
        assert list(table) == ["pm25"]
        assert table.weight("o3") == 0.0

    def test_table_is_read_only(self):
        table = PollutantWeightTable()
        with pytest.raises(TypeError):
            table.weights["pm25"] = 0.9
        assert DEFAULT_POLLUTANT_WEIGHTS["pm25"] == 0.40
