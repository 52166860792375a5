"""Resume analysis endpoints for Web API v1."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, File, UploadFile
from pydantic import BaseModel, Field

from resume_analyzer.core import AnalysisOrchestrator, AnalysisOutcome, AnalyzerConfig
from resume_analyzer.documents import extract_text

from ..deps import get_config, get_orchestrator
from ..upload import check_upload_extension, read_upload_with_limit

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analyze", tags=["analysis"])


class AnalyzeTextRequest(BaseModel):
    text: str = Field(default="")


class AnalyzeResponse(BaseModel):
    analysis: Dict[str, Any]
    state: str
    providers: List[str]


def _to_response(outcome: AnalysisOutcome) -> AnalyzeResponse:
    if outcome.failures:
        logger.info("Provider failures absorbed: %s", outcome.failures)
    return AnalyzeResponse(
        analysis=outcome.record.to_dict(),
        state=outcome.state.value,
        providers=outcome.providers,
    )


@router.post("", response_model=AnalyzeResponse)
async def analyze_resume(
    file: UploadFile = File(...),
    orchestrator: AnalysisOrchestrator = Depends(get_orchestrator),
    config: AnalyzerConfig = Depends(get_config),
) -> AnalyzeResponse:
    filename = file.filename or ""
    check_upload_extension(filename, config.allowed_extensions)
    content = await read_upload_with_limit(file=file, max_bytes=config.max_upload_bytes)
    text = await asyncio.to_thread(extract_text, content, filename)
    logger.info("Extracted %d characters from %s", len(text), filename)
    return _to_response(await orchestrator.analyze(text))


@router.post("/text", response_model=AnalyzeResponse)
async def analyze_text(
    payload: AnalyzeTextRequest,
    orchestrator: AnalysisOrchestrator = Depends(get_orchestrator),
) -> AnalyzeResponse:
    return _to_response(await orchestrator.analyze(payload.text))
