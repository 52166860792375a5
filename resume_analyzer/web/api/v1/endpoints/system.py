"""Operational introspection endpoints."""

from __future__ import annotations

from typing import Dict, List

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from resume_analyzer.core import AnalysisOrchestrator

from ..deps import get_orchestrator

router = APIRouter(tags=["system"])


class HealthResponse(BaseModel):
    status: str
    providers: List[str]
    skipped: Dict[str, str]


@router.get("/health", response_model=HealthResponse)
async def health(
    orchestrator: AnalysisOrchestrator = Depends(get_orchestrator),
) -> HealthResponse:
    return HealthResponse(
        status="ok",
        providers=orchestrator.provider_names,
        skipped=dict(orchestrator.skipped),
    )
