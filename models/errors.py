"""Typed failures raised by the temperature pipeline."""

from __future__ import annotations

from enum import Enum
from typing import ClassVar, Iterable, Optional


class ErrorKind(str, Enum):
    """Classification attached to every pipeline failure."""

    no_file_provided = "no_file_provided"
    invalid_file_type = "invalid_file_type"
    file_too_large = "file_too_large"
    file_read_error = "file_read_error"
    empty_file = "empty_file"
    parse_error = "parse_error"
    insufficient_data = "insufficient_data"
    missing_columns = "missing_columns"
    no_temperature_data = "no_temperature_data"
    empty_result = "empty_result"


class PipelineError(Exception):
    """Base class for request-scoped failures; never retried by the core."""

    kind: ClassVar[ErrorKind]
    default_message: ClassVar[str] = "Failed to process file"
    status_code: ClassVar[int] = 400

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_payload(self) -> dict[str, str]:
        return {"detail": self.message, "kind": self.kind.value}


class NoFileProvided(PipelineError):
    kind = ErrorKind.no_file_provided
    default_message = "No CSV file provided"


class InvalidFileType(PipelineError):
    kind = ErrorKind.invalid_file_type
    default_message = "File must be a CSV file"


class FileTooLarge(PipelineError):
    kind = ErrorKind.file_too_large
    default_message = "File size must be less than 10MB"

    def __init__(self, limit_bytes: Optional[int] = None) -> None:
        message = None
        if limit_bytes is not None:
            message = f"File size must be less than {_format_size(limit_bytes)}"
        super().__init__(message)


class FileReadError(PipelineError):
    kind = ErrorKind.file_read_error
    default_message = "Failed to read file content"


class EmptyFile(PipelineError):
    kind = ErrorKind.empty_file
    default_message = "CSV file is empty"


class ParseError(PipelineError):
    kind = ErrorKind.parse_error
    default_message = "CSV parsing failed"

    def __init__(self, detail: Optional[str] = None) -> None:
        message = f"{self.default_message}: {detail}" if detail else None
        super().__init__(message)


class InsufficientDataError(PipelineError):
    kind = ErrorKind.insufficient_data
    default_message = "CSV file must contain at least a header row and one data row"


class MissingColumnsError(PipelineError):
    kind = ErrorKind.missing_columns
    default_message = "CSV must contain required columns"

    def __init__(self, missing: Iterable[str]) -> None:
        self.missing = tuple(missing)
        super().__init__(f"{self.default_message}: {', '.join(self.missing)}")


class NoTemperatureDataError(PipelineError):
    kind = ErrorKind.no_temperature_data
    default_message = (
        "No temperature data found. Please ensure your CSV contains rows with "
        'CharacteristicName="Temperature, water" and valid ResultValue numbers.'
    )


class EmptyResultError(PipelineError):
    kind = ErrorKind.empty_result
    default_message = "No valid temperature data found in the CSV file"


def _format_size(size_bytes: int) -> str:
    mebibytes = size_bytes / (1024 * 1024)
    if mebibytes >= 1 and mebibytes == int(mebibytes):
        return f"{int(mebibytes)}MB"
    return f"{size_bytes} bytes"
