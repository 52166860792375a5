"""Job-search helper endpoints."""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter
from pydantic import BaseModel, Field

from resume_analyzer.analysis import build_job_search_query, normalize

router = APIRouter(prefix="/jobs", tags=["jobs"])


class JobQueryRequest(BaseModel):
    analysis: Dict[str, Any] = Field(default_factory=dict)
    custom_query: Optional[str] = None


class JobQueryResponse(BaseModel):
    query: str


@router.post("/query", response_model=JobQueryResponse)
async def job_search_query(payload: JobQueryRequest) -> JobQueryResponse:
    record = normalize(payload.analysis)
    return JobQueryResponse(query=build_job_search_query(record, payload.custom_query))
