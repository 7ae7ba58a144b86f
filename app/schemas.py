"""Pydantic schemas for the HTTP API layer."""

from __future__ import annotations

from typing import Dict

from pydantic import BaseModel, Field, RootModel

INTERNAL_ERROR_KIND = "internal_error"


class TemperatureAverages(RootModel[Dict[str, float]]):
    """Flat mapping of monitoring location id to average water temperature."""

    model_config = {
        "json_schema_extra": {"examples": [{"LOC001": 21.0, "LOC002": 18.0}]}
    }


class ErrorResponse(BaseModel):
    """Single failure returned for a rejected or failed upload."""

    detail: str = Field(..., description="Human-readable error message.")
    kind: str = Field(
        ...,
        description="Error classification, e.g. missing_columns or internal_error.",
    )


class HealthResponse(BaseModel):
    status: str = "ok"
