"""Job-search query derived from an analysis record."""

from __future__ import annotations

from typing import Optional

from .record import AnalysisRecord

QUERY_SKILL_COUNT = 3


def build_job_search_query(record: AnalysisRecord, custom_query: Optional[str] = None) -> str:
    """Return ``"<first job title> <top skills>"`` unless a custom query is given."""
    if custom_query and custom_query.strip():
        return custom_query.strip()
    role = record.job_titles[0] if record.job_titles else ""
    skills = " ".join(record.skills[:QUERY_SKILL_COUNT])
    return f"{role} {skills}".strip()
