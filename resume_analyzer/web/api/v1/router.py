"""Top-level v1 API router."""

from __future__ import annotations

from fastapi import APIRouter

from .endpoints.analyze import router as analyze_router
from .endpoints.jobs import router as jobs_router
from .endpoints.system import router as system_router

api_v1_router = APIRouter(prefix="/api/v1")
api_v1_router.include_router(analyze_router)
api_v1_router.include_router(jobs_router)
api_v1_router.include_router(system_router)
