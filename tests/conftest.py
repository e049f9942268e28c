"""
Pytest configuration for Activity Risk tests.

Registers custom markers and provides shared fixtures.
"""

import pytest

from activityrisk.activity_catalog import ActivityCatalog
from activityrisk.forecast_slot import ForecastIndex, ForecastSlot
from activityrisk.pollutant_sample import Concentration, PollutantSample


def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )


@pytest.fixture
def catalog():
    """Fixture providing the built-in activity catalog."""
    return ActivityCatalog()


@pytest.fixture
def jogging(catalog):
    """Fixture providing the jogging template (0.7 risk factor, 30 min, high)."""
    return catalog.get("jogging")


@pytest.fixture
def walking(catalog):
    """Fixture providing the walking template (0.3 risk factor, 60 min, low)."""
    return catalog.get("walking")


@pytest.fixture
def cycling(catalog):
    """Fixture providing the cycling template (0.5 risk factor, 20 min, medium)."""
    return catalog.get("cycling")


@pytest.fixture
def make_forecast():
    """Fixture providing a factory for hourly forecasts from (timestamp, aqi) pairs."""
    def _make(*entries):
        return [
            ForecastSlot(date_time=date_time, indexes=(ForecastIndex(aqi=aqi),))
            for date_time, aqi in entries
        ]
    return _make


@pytest.fixture
def make_sample():
    """Fixture providing a factory for pollutant samples."""
    def _make(code, value, display_name=None, units="µg/m³"):
        return PollutantSample(
            code=code,
            display_name=display_name or code.upper(),
            concentration=Concentration(value=value, units=units),
        )
    return _make
