"""Domain models shared across services."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Mapping

RawRecord = Dict[str, str]
"""One CSV data line keyed by normalized header name."""

ResultSet = Dict[str, float]
"""Average temperature keyed by monitoring location id."""

LOCATION_COLUMN = "monitoringlocationid"
CHARACTERISTIC_COLUMN = "characteristicname"
VALUE_COLUMN = "resultvalue"


@dataclass(slots=True, frozen=True)
class MeasurementRecord:
    """The three columns the pipeline reads from each CSV row, trimmed."""

    location_id: str
    characteristic: str
    result_value: str

    @classmethod
    def from_raw(cls, raw: Mapping[str, str]) -> "MeasurementRecord":
        return cls(
            location_id=(raw.get(LOCATION_COLUMN) or "").strip(),
            characteristic=(raw.get(CHARACTERISTIC_COLUMN) or "").strip(),
            result_value=(raw.get(VALUE_COLUMN) or "").strip(),
        )


@dataclass(slots=True, frozen=True)
class TemperatureObservation:
    """A water temperature reading that passed filtering."""

    location_id: str
    value: float


@dataclass
class ProcessingReport:
    """Averages for one file plus the counts logged alongside them."""

    results: ResultSet = field(default_factory=dict)
    row_count: int = 0
    temperature_row_count: int = 0
    processing_ms: int = 0

    @property
    def location_count(self) -> int:
        return len(self.results)
