"""
Tests for RiskClassifier component.

Tests cover:
- Equivalence classes: one score per risk level
- Boundary value analysis: thresholds at 25, 50 and 75
- Edge cases: 0 and 100
- Language handling: zh and en styles
"""

import pytest

from activityrisk.risk_classifier import RiskClassifier, normalize_language


class TestRiskClassifier:
    """Test suite for RiskClassifier."""

    @pytest.fixture
    def classifier(self):
        """Fixture providing a RiskClassifier instance."""
        return RiskClassifier()

    # ==================== Equivalence Classes ====================

    def test_safe_level(self, classifier):
        risk = classifier.classify(10)
        assert risk.level == "safe"
        assert risk.color == "#22c55e"
        assert risk.label == "安全"
        assert risk.recommendation == "✅ 適合進行此活動"

    def test_caution_level(self, classifier):
        risk = classifier.classify(30)
        assert risk.level == "caution"
        assert risk.color == "#eab308"
        assert risk.label == "注意"

    def test_unhealthy_level(self, classifier):
        risk = classifier.classify(60)
        assert risk.level == "unhealthy"
        assert risk.color == "#f97316"
        assert risk.label == "不宜"

    def test_dangerous_level(self, classifier):
        risk = classifier.classify(90)
        assert risk.level == "dangerous"
        assert risk.color == "#ef4444"
        assert risk.label == "危險"

    # ==================== Boundary Value Analysis ====================

    @pytest.mark.parametrize("score,level", [
        (24, "safe"),
        (25, "caution"),
        (49, "caution"),
        (50, "unhealthy"),
        (74, "unhealthy"),
        (75, "dangerous"),
        (100, "dangerous"),
    ])
    def test_threshold_boundaries(self, classifier, score, level):
        """Boundary: lower bounds are inclusive."""
        assert classifier.classify(score).level == level

    # ==================== Edge Cases ====================

    def test_zero_score_is_safe(self, classifier):
        risk = classifier.classify(0)
        assert risk.level == "safe"
        assert risk.score == 0

    def test_score_carried_through(self, classifier):
        assert classifier.classify(42).score == 42

    # ==================== Language ====================

    def test_english_labels(self):
        risk = RiskClassifier(language="en").classify(80)
        assert risk.label == "Dangerous"
        assert risk.recommendation.startswith("⛔")

    def test_unknown_language_falls_back_to_chinese(self):
        assert RiskClassifier(language="fr").classify(10).label == "安全"

    @pytest.mark.parametrize("value,expected", [("en", "en"), ("EN-us", "en"), ("zh-TW", "zh"), ("", "zh")])
    def test_normalize_language(self, value, expected):
        assert normalize_language(value) == expected
