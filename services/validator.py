"""Precondition and result checks around the aggregation pipeline."""

from __future__ import annotations

from typing import Optional, Sequence

from models.config import PipelineConfig
from models.errors import (
    EmptyFile,
    EmptyResultError,
    FileTooLarge,
    InsufficientDataError,
    InvalidFileType,
    MissingColumnsError,
    NoTemperatureDataError,
)
from models.records import RawRecord, ResultSet, TemperatureObservation


class Validator:
    """Raises a typed failure as soon as a pipeline precondition is violated."""

    def __init__(self, config: PipelineConfig) -> None:
        self.config = config

    def check_upload(self, filename: Optional[str], size_bytes: int) -> None:
        if not (filename or "").lower().endswith(".csv"):
            raise InvalidFileType()
        if size_bytes > self.config.max_file_size_bytes:
            raise FileTooLarge(self.config.max_file_size_bytes)

    def check_content(self, text: str) -> None:
        if not text.strip():
            raise EmptyFile()

    def check_structure(self, records: Sequence[RawRecord]) -> None:
        if not records:
            raise InsufficientDataError()
        present = records[0].keys()
        missing = [name for name in self.config.required_columns if name not in present]
        if missing:
            raise MissingColumnsError(missing)

    def check_observations(self, observations: Sequence[TemperatureObservation]) -> None:
        if not observations:
            raise NoTemperatureDataError()

    def check_result(self, results: ResultSet) -> None:
        if not results:
            raise EmptyResultError()
