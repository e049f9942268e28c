"""
Pollutant weight module for the Activity Risk engine.

This module contains the PollutantWeightTable class, an immutable mapping of
pollutant code to relative health-impact weight. The weights drive both the
pollutant term of the risk score and the static contribution breakdown shown
to users.
"""

from types import MappingProxyType
from typing import Iterator, Mapping, Optional


DEFAULT_POLLUTANT_WEIGHTS: Mapping[str, float] = MappingProxyType({
    "pm25": 0.40,  # Most important
    "pm10": 0.15,
    "o3": 0.25,  # Strong effect during exercise
    "no2": 0.10,
    "so2": 0.05,
    "co": 0.05,
})


class PollutantWeightTable:
    """
    Read-only pollutant weight lookup.

    Unknown pollutant codes have weight 0, so they are silently ignored in the
    weighted pollutant sum and report a 0% contribution.
    """

    def __init__(self, weights: Optional[Mapping[str, float]] = None):
        """
        Initialize the table.

        Args:
            weights: Optional mapping of pollutant code to weight. Defaults to
                     DEFAULT_POLLUTANT_WEIGHTS.
        """
        source = DEFAULT_POLLUTANT_WEIGHTS if weights is None else weights
        self._weights = MappingProxyType(dict(source))

    def weight(self, code: str) -> float:
        """Returns the weight of a pollutant code, 0.0 when unknown."""
        return self._weights.get(code, 0.0)

    def contribution(self, code: str) -> float:
        """Returns the static contribution percentage (weight x 100) of a code."""
        return self.weight(code) * 100

    @property
    def weights(self) -> Mapping[str, float]:
        return self._weights

    def __contains__(self, code: object) -> bool:
        return code in self._weights

    def __iter__(self) -> Iterator[str]:
        return iter(self._weights)
