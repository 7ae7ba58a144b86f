"""Aggregation logic for temperature observations."""

from __future__ import annotations

import math
from typing import Dict, Iterable, List

from models.config import DEFAULT_DECIMAL_PLACES
from models.records import ResultSet, TemperatureObservation

# Above this every float is already an integer, so there is nothing to round.
_EXACT_INTEGER_LIMIT = 2.0 ** 52


def round_half_away_from_zero(value: float, decimal_places: int = DEFAULT_DECIMAL_PLACES) -> float:
    """Round ``value`` to ``decimal_places`` with ties moving away from zero."""
    factor = 10 ** decimal_places
    scaled = abs(value) * factor
    if not math.isfinite(scaled) or scaled >= _EXACT_INTEGER_LIMIT:
        return value
    rounded = math.floor(scaled + 0.5) / factor
    # Never produce -0.0.
    return -rounded if value < 0 and rounded else rounded


def mean(values: List[float]) -> float:
    """Arithmetic mean that stays finite for any list of finite values."""
    count = len(values)
    return math.fsum(value / count for value in values)


class Aggregator:
    """Pure aggregation component that can be unit tested in isolation."""

    def __init__(self, decimal_places: int = DEFAULT_DECIMAL_PLACES) -> None:
        self.decimal_places = decimal_places

    def group(self, observations: Iterable[TemperatureObservation]) -> Dict[str, List[float]]:
        grouped: Dict[str, List[float]] = {}
        for observation in observations:
            grouped.setdefault(observation.location_id, []).append(observation.value)
        return grouped

    def aggregate(self, observations: Iterable[TemperatureObservation]) -> ResultSet:
        """Average values per location, rounding each average once."""
        results: ResultSet = {}
        for location_id, values in self.group(observations).items():
            results[location_id] = round_half_away_from_zero(mean(values), self.decimal_places)
        return results
