from __future__ import annotations
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.api import router
from logging_config import configure_logging
from models.errors import PipelineError
from services.processor import build_default_processor


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    build_default_processor()
    try:
        yield
    finally:
        build_default_processor.cache_clear()


async def pipeline_error_handler(_request: Request, exc: PipelineError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(
        title="Water Temperature Aggregator",
        description="Averages 'Temperature, water' measurements per monitoring location from a CSV upload.",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.add_exception_handler(PipelineError, pipeline_error_handler)
    app.include_router(router)
    return app

app = create_app()
