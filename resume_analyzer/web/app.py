"""FastAPI app entrypoint for the resume analysis API."""

from __future__ import annotations

import logging
import os
from time import perf_counter
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError

from resume_analyzer.core import AnalysisOrchestrator, AnalyzerConfig, load_config
from resume_analyzer.errors import PreconditionFailure, TotalAnalysisFailure

from .api.v1.router import api_v1_router
from .errors import (
    APIError,
    analysis_failure_handler,
    api_error_handler,
    precondition_error_handler,
    validation_error_handler,
)

logger = logging.getLogger("resume_analyzer.web.api")


def create_app(
    config: Optional[AnalyzerConfig] = None,
    orchestrator: Optional[AnalysisOrchestrator] = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    config = config or load_config()
    max_upload_override = os.getenv("RESUME_ANALYZER_MAX_UPLOAD_BYTES")
    if max_upload_override:
        config.max_upload_bytes = int(max_upload_override)
    orchestrator = orchestrator or AnalysisOrchestrator.from_config(config)

    app = FastAPI(title="Resume Analyzer API", version="0.1.0")
    app.state.config = config
    app.state.orchestrator = orchestrator
    app.include_router(api_v1_router)

    @app.middleware("http")
    async def request_logging_middleware(request: Request, call_next):
        start = perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            duration_ms = (perf_counter() - start) * 1000
            logger.info(
                "api_request method=%s path=%s status=%s duration_ms=%.2f",
                request.method,
                request.url.path,
                500,
                duration_ms,
            )
            raise

        duration_ms = (perf_counter() - start) * 1000
        logger.info(
            "api_request method=%s path=%s status=%s duration_ms=%.2f",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
        )
        return response

    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(PreconditionFailure, precondition_error_handler)
    app.add_exception_handler(TotalAnalysisFailure, analysis_failure_handler)
    return app


def main() -> None:
    """Run development API server."""
    import uvicorn

    uvicorn.run("resume_analyzer.web.app:create_app", factory=True, host="127.0.0.1", port=8000)
