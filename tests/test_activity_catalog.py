"""
Tests for ActivityTemplate and ActivityCatalog components.

Tests cover:
- Equivalence classes: valid and invalid templates
- Boundary value analysis: base risk factor and duration limits
- Error scenarios: duplicate ids, invalid templates in a catalog
- Catalog behavior: ordering, lookup, custom catalogs
"""

import pytest

from activityrisk.activity_catalog import ActivityCatalog, DEFAULT_ACTIVITY_TEMPLATES
from activityrisk.activity_template import ActivityTemplate


def make_template(**overrides):
    fields = {
        "id": "rowing",
        "name": "Rowing",
        "icon": "🚣",
        "description": "Rowing on the river",
        "base_risk_factor": 0.5,
        "duration": 40,
        "intensity": "high",
    }
    fields.update(overrides)
    return ActivityTemplate(**fields)


class TestActivityTemplateValidation:
    """Test suite for ActivityTemplate validation."""

    def test_valid_template(self):
        """Equivalence class: All valid values → validation passes."""
        valid, reason = make_template().validate()
        assert valid is True
        assert reason is None

    def test_empty_id_invalid(self):
        """Error scenario: Empty id → validation fails."""
        valid, reason = make_template(id="").validate()
        assert valid is False
        assert "id" in reason

    @pytest.mark.parametrize("factor", [0.0, 1.0])
    def test_risk_factor_boundaries_valid(self, factor):
        """Boundary: base_risk_factor at 0 and 1 is accepted."""
        valid, _ = make_template(base_risk_factor=factor).validate()
        assert valid is True

    @pytest.mark.parametrize("factor", [-0.01, 1.01])
    def test_risk_factor_out_of_range_invalid(self, factor):
        """Boundary: base_risk_factor just outside [0, 1] is rejected."""
        valid, reason = make_template(base_risk_factor=factor).validate()
        assert valid is False
        assert "base_risk_factor" in reason

    def test_zero_duration_invalid(self):
        """Boundary: duration must be strictly positive."""
        valid, reason = make_template(duration=0).validate()
        assert valid is False
        assert "duration" in reason

    def test_unknown_intensity_invalid(self):
        """Error scenario: Unknown intensity → validation fails."""
        valid, reason = make_template(intensity="extreme").validate()
        assert valid is False
        assert "intensity" in reason


class TestActivityTemplateWireForm:
    """Test suite for camelCase conversion."""

    def test_from_dict(self):
        template = ActivityTemplate.from_dict({
            "id": "yoga",
            "name": "Yoga",
            "icon": "🧘",
            "description": "Outdoor yoga",
            "baseRiskFactor": 0.25,
            "duration": 50,
            "intensity": "low",
        })
        assert template.id == "yoga"
        assert template.base_risk_factor == 0.25
        assert template.duration == 50

    def test_to_dict_uses_camel_case(self):
        data = make_template().to_dict()
        assert data["baseRiskFactor"] == 0.5
        assert "base_risk_factor" not in data


class TestActivityCatalog:
    """Test suite for ActivityCatalog."""

    def test_default_catalog_contents(self, catalog):
        """Built-in catalog holds the five shipped activities in order."""
        assert catalog.ids == ("jogging", "walking", "cycling", "outdoor_dining", "playground")
        assert len(catalog) == len(DEFAULT_ACTIVITY_TEMPLATES)

    def test_default_jogging_parameters(self, jogging):
        assert jogging.base_risk_factor == 0.7
        assert jogging.duration == 30
        assert jogging.intensity == "high"

    def test_lookup_unknown_id_returns_none(self, catalog):
        assert catalog.get("skydiving") is None
        assert "skydiving" not in catalog
        assert "walking" in catalog

    def test_iteration_preserves_order(self):
        first = make_template(id="b")
        second = make_template(id="a")
        catalog = ActivityCatalog([first, second])
        assert list(catalog) == [first, second]

    def test_duplicate_id_rejected(self):
        """Error scenario: Duplicate ids → ValueError."""
        with pytest.raises(ValueError, match="Duplicate"):
            ActivityCatalog([make_template(), make_template()])

    def test_invalid_template_rejected(self):
        """Error scenario: Invalid template → ValueError naming the template."""
        with pytest.raises(ValueError, match="rowing"):
            ActivityCatalog([make_template(duration=-5)])

    def test_empty_catalog_allowed(self):
        catalog = ActivityCatalog([])
        assert len(catalog) == 0
        assert catalog.templates == ()
