"""API error helpers and exception handlers."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from resume_analyzer.errors import ExtractionFailure, PreconditionFailure, TotalAnalysisFailure

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Application-level API error with status/code mapping."""

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
            }
        }


async def api_error_handler(_: Request, exc: APIError) -> JSONResponse:
    """Render contract-compliant error response."""
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def validation_error_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    """Normalize FastAPI validation errors to API contract shape."""
    return JSONResponse(
        status_code=400,
        content={
            "error": {
                "code": "BAD_REQUEST",
                "message": "Invalid request payload",
                "details": {"errors": exc.errors()},
            }
        },
    )


async def precondition_error_handler(request: Request, exc: PreconditionFailure) -> JSONResponse:
    """Missing or unreadable resume text is the caller's problem: 400."""
    code = "EXTRACTION_FAILED" if isinstance(exc, ExtractionFailure) else "BAD_REQUEST"
    return await api_error_handler(request, APIError(400, code, str(exc)))


async def analysis_failure_handler(request: Request, exc: TotalAnalysisFailure) -> JSONResponse:
    """Provider internals are logged, never returned."""
    logger.error("Analysis failed: %s", exc, exc_info=exc.__cause__)
    return await api_error_handler(
        request,
        APIError(502, "ANALYSIS_FAILED", "Failed to analyze resume with available providers"),
    )
