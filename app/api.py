"""HTTP route definitions for the service."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile, status
from fastapi.responses import JSONResponse

from app.schemas import (
    INTERNAL_ERROR_KIND,
    ErrorResponse,
    HealthResponse,
    TemperatureAverages,
)
from models.errors import NoFileProvided, PipelineError
from services.processor import ProcessorService, build_default_processor

logger = logging.getLogger(__name__)

PROCESSING_ERROR_MESSAGE = "Unknown error occurred while processing CSV"

router = APIRouter()


def get_processor() -> ProcessorService:
    return build_default_processor()


@router.post(
    "/api/process-csv",
    response_model=TemperatureAverages,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    },
    summary="Average water temperature per monitoring location.",
)
async def process_csv(
    csv_file: Optional[UploadFile] = File(
        None,
        alias="csvFile",
        description="CSV file with MonitoringLocationID, CharacteristicName and ResultValue columns.",
    ),
    processor: ProcessorService = Depends(get_processor),
) -> TemperatureAverages:
    if csv_file is None:
        raise NoFileProvided()

    try:
        contents = await csv_file.read()
    finally:
        await csv_file.close()

    try:
        report = processor.process_upload(
            filename=csv_file.filename,
            contents=contents,
            size_bytes=csv_file.size,
        )
    except PipelineError:
        raise
    except Exception:
        logger.exception(
            "CSV processing failed unexpectedly",
            extra={"upload_name": csv_file.filename},
        )
        payload = ErrorResponse(detail=PROCESSING_ERROR_MESSAGE, kind=INTERNAL_ERROR_KIND)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=payload.model_dump(),
        )
    return TemperatureAverages(report.results)


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
)
async def healthcheck() -> HealthResponse:
    return HealthResponse()


@router.get(
    "/",
    summary="Root endpoint mirrors health information.",
    status_code=status.HTTP_200_OK,
)
async def root() -> dict[str, str]:
    return {"status": "ok", "detail": "See /health for service status."}
