"""CSV tokenizing with normalized header keys."""

from __future__ import annotations

import csv
import io
from typing import List, Optional

from models.errors import ParseError
from models.records import RawRecord


def normalize_header(name: str | None) -> str:
    """Lower-case and trim a header so lookups ignore case and padding."""
    return (name or "").strip().lower()


def _allow_fields_up_to(size: int) -> None:
    # The csv module caps fields at 128 KiB by default; a single cell may be
    # as large as the whole upload.
    if size > csv.field_size_limit():
        csv.field_size_limit(size)


def parse_records(text: str) -> List[RawRecord]:
    """Parse CSV text into one record per data line, keyed by normalized header.

    The first non-blank line is the header. Quoted fields may contain commas,
    newlines and doubled quotes. Blank lines are skipped, short rows are
    padded with empty strings and cells beyond the header are dropped.
    Malformed quoting raises :class:`ParseError`.
    """
    if text.startswith("\ufeff"):
        text = text[1:]
    _allow_fields_up_to(len(text))

    reader = csv.reader(io.StringIO(text, newline=""), strict=True)
    keys: Optional[List[str]] = None
    records: List[RawRecord] = []
    try:
        for row in reader:
            if not row:
                continue
            if keys is None:
                keys = [normalize_header(name) for name in row]
                continue
            padded = row + [""] * (len(keys) - len(row))
            records.append(dict(zip(keys, padded)))
    except csv.Error as exc:
        raise ParseError(f"line {reader.line_num}: {exc}") from exc
    return records
