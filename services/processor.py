"""Orchestration of the CSV-to-averages pipeline for a single upload."""

from __future__ import annotations

import logging
import time
from functools import lru_cache
from pathlib import Path
from typing import Optional, Union

from models.config import PipelineConfig
from models.errors import FileReadError, PipelineError
from models.records import MeasurementRecord, ProcessingReport
from services.aggregator import Aggregator
from services.csv_parser import parse_records
from services.row_filter import RowFilter
from services.validator import Validator
from settings import get_settings

logger = logging.getLogger(__name__)


class ProcessorService:
    """Runs one CSV payload through parse, filter, aggregate and validation."""

    def __init__(
        self,
        config: PipelineConfig,
        aggregator: Optional[Aggregator] = None,
        row_filter: Optional[RowFilter] = None,
        validator: Optional[Validator] = None,
    ) -> None:
        self.config = config
        self.aggregator = aggregator or Aggregator(decimal_places=config.decimal_places)
        self.row_filter = row_filter or RowFilter(
            target_characteristic=config.target_characteristic,
            strict_numbers=config.strict_numbers,
        )
        self.validator = validator or Validator(config)

    def process_upload(
        self,
        filename: Optional[str],
        contents: Union[bytes, str],
        size_bytes: Optional[int] = None,
    ) -> ProcessingReport:
        """Validate upload metadata, then aggregate the file contents.

        ``size_bytes`` is the size advertised by the caller; the length of
        ``contents`` is used when it is missing.
        """
        if isinstance(contents, str):
            contents = contents.encode("utf-8")
        size = len(contents) if size_bytes is None else size_bytes
        log_extra = {"upload_name": filename, "size_bytes": size}

        try:
            self.validator.check_upload(filename, size)
            report = self.process_bytes(contents)
        except PipelineError as exc:
            logger.warning(
                "CSV processing rejected: %s",
                exc.message,
                extra={**log_extra, "error_kind": exc.kind.value},
            )
            raise

        logger.info(
            "Processed %d rows, found %d temperature measurements for %d locations",
            report.row_count,
            report.temperature_row_count,
            report.location_count,
            extra={**log_extra, "processing_ms": report.processing_ms},
        )
        return report

    def process_path(self, path: Path) -> ProcessingReport:
        try:
            contents = path.read_bytes()
        except OSError as exc:
            raise FileReadError(f"Failed to read file content: {exc.strerror}") from exc
        return self.process_upload(path.name, contents)

    def process_bytes(self, contents: bytes) -> ProcessingReport:
        start_time = time.perf_counter()
        try:
            text = contents.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise FileReadError("Failed to read file content: file is not valid UTF-8") from exc
        report = self.process_text(text)
        report.processing_ms = int((time.perf_counter() - start_time) * 1000)
        return report

    def process_text(self, text: str) -> ProcessingReport:
        self.validator.check_content(text)

        raw_records = parse_records(text)
        self.validator.check_structure(raw_records)

        records = [MeasurementRecord.from_raw(raw) for raw in raw_records]
        observations = list(self.row_filter.filter(records))
        self.validator.check_observations(observations)

        results = self.aggregator.aggregate(observations)
        self.validator.check_result(results)

        return ProcessingReport(
            results=results,
            row_count=len(records),
            temperature_row_count=len(observations),
        )


@lru_cache
def build_default_processor() -> ProcessorService:
    """Factory that wires the processor from environment settings."""
    return ProcessorService(config=get_settings().pipeline)
