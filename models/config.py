"""Immutable knobs for a single pipeline run."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from models.records import CHARACTERISTIC_COLUMN, LOCATION_COLUMN, VALUE_COLUMN

DEFAULT_MAX_FILE_SIZE_BYTES = 10 * 1024 * 1024
DEFAULT_TARGET_CHARACTERISTIC = "temperature, water"
DEFAULT_DECIMAL_PLACES = 2


@dataclass(frozen=True)
class PipelineConfig:
    max_file_size_bytes: int = DEFAULT_MAX_FILE_SIZE_BYTES
    required_columns: Tuple[str, ...] = (
        LOCATION_COLUMN,
        CHARACTERISTIC_COLUMN,
        VALUE_COLUMN,
    )
    target_characteristic: str = DEFAULT_TARGET_CHARACTERISTIC
    decimal_places: int = DEFAULT_DECIMAL_PLACES
    # When set, "21.5abc" is rejected instead of read as 21.5.
    strict_numbers: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "target_characteristic", self.target_characteristic.strip().lower()
        )
        if self.max_file_size_bytes <= 0:
            raise ValueError("max_file_size_bytes must be positive.")
        if self.decimal_places < 0:
            raise ValueError("decimal_places must not be negative.")
