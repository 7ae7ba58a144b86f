from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from models.config import (
    DEFAULT_DECIMAL_PLACES,
    DEFAULT_MAX_FILE_SIZE_BYTES,
    DEFAULT_TARGET_CHARACTERISTIC,
    PipelineConfig,
)


_MAX_UPLOAD_BYTES_ENV = "MAX_UPLOAD_BYTES"
_TARGET_CHARACTERISTIC_ENV = "TARGET_CHARACTERISTIC"
_DECIMAL_PLACES_ENV = "RESULT_DECIMAL_PLACES"
_STRICT_NUMBERS_ENV = "STRICT_NUMERIC_PARSING"
_LOG_LEVEL_ENV = "LOG_LEVEL"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class Settings:
    pipeline: PipelineConfig
    log_level: str


def _read_str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or default


def _read_int_env(name: str, default: int, minimum: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = int(candidate)
    except ValueError:
        return default
    return parsed if parsed >= minimum else default


def _read_bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip().lower()
    if candidate in _TRUTHY:
        return True
    if candidate in _FALSY:
        return False
    return default


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    pipeline = PipelineConfig(
        max_file_size_bytes=_read_int_env(
            _MAX_UPLOAD_BYTES_ENV, DEFAULT_MAX_FILE_SIZE_BYTES, minimum=1
        ),
        target_characteristic=_read_str_env(
            _TARGET_CHARACTERISTIC_ENV, DEFAULT_TARGET_CHARACTERISTIC
        ),
        decimal_places=_read_int_env(
            _DECIMAL_PLACES_ENV, DEFAULT_DECIMAL_PLACES, minimum=0
        ),
        strict_numbers=_read_bool_env(_STRICT_NUMBERS_ENV, False),
    )
    return Settings(pipeline=pipeline, log_level=_read_log_level("INFO"))
