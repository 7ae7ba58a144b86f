"""Selection of water temperature rows from parsed CSV records."""

from __future__ import annotations

import logging
import math
import re
from typing import Iterable, Iterator, Optional

from models.records import MeasurementRecord, TemperatureObservation

logger = logging.getLogger(__name__)

_DECIMAL_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


def parse_number(value: str, strict: bool = False) -> Optional[float]:
    """Read a finite decimal from ``value`` or return ``None``.

    By default only the leading numeric prefix is read, so ``"21.5abc"``
    yields ``21.5`` and ``"1e"`` yields ``1.0``. With ``strict`` the whole
    (trimmed) string must be a decimal literal. Special spellings such as
    ``"nan"``, ``"inf"`` or ``"1_000"`` are never accepted, and values that
    overflow to infinity are rejected.
    """
    candidate = value.strip()
    if strict:
        match = _DECIMAL_RE.fullmatch(candidate)
    else:
        match = _DECIMAL_RE.match(candidate)
    if match is None:
        return None
    number = float(match.group(0))
    if not math.isfinite(number):
        return None
    return number


def is_target_characteristic(characteristic: str, target: str) -> bool:
    return characteristic.lower().strip() == target


class RowFilter:
    """Turns measurement records into temperature observations."""

    def __init__(self, target_characteristic: str, strict_numbers: bool = False) -> None:
        self.target_characteristic = target_characteristic.strip().lower()
        self.strict_numbers = strict_numbers

    def filter(
        self, records: Iterable[MeasurementRecord]
    ) -> Iterator[TemperatureObservation]:
        """Yield observations for matching rows; other rows are skipped silently.

        Skipped rows are logged with their 1-based position among the data
        records, which differs from the file line when quoted cells span lines.
        """
        for record_number, record in enumerate(records, start=1):
            reason = self._rejection_reason(record)
            if reason is not None:
                logger.debug(
                    "Skipping row",
                    extra={"record_number": record_number, "reason": reason},
                )
                continue

            value = parse_number(record.result_value, strict=self.strict_numbers)
            if value is None:
                logger.debug(
                    "Skipping row",
                    extra={"record_number": record_number, "reason": "invalid numeric value"},
                )
                continue

            yield TemperatureObservation(location_id=record.location_id, value=value)

    def _rejection_reason(self, record: MeasurementRecord) -> Optional[str]:
        if not record.location_id:
            return "missing location id"
        if not record.characteristic:
            return "missing characteristic"
        if not record.result_value:
            return "missing value"
        if not is_target_characteristic(record.characteristic, self.target_characteristic):
            return "other characteristic"
        return None
