"""Combination of analysis records from several providers."""

from __future__ import annotations

from functools import reduce
from typing import Sequence

from .record import AnalysisRecord, DetailedAnalysis, dedupe


def merge(a: AnalysisRecord, b: AnalysisRecord) -> AnalysisRecord:
    """Merge two records, ``a`` taking precedence.

    Scalars come from ``a`` unless empty. Lists are concatenated ``a`` first
    and deduplicated on exact string equality, so near-duplicates phrased
    differently by two providers both survive.
    """
    return AnalysisRecord(
        summary=a.summary or b.summary,
        strengths=dedupe([*a.strengths, *b.strengths]),
        areas_to_improve=dedupe([*a.areas_to_improve, *b.areas_to_improve]),
        recommendations=dedupe([*a.recommendations, *b.recommendations]),
        skills=dedupe([*a.skills, *b.skills]),
        resume_score=a.resume_score or b.resume_score,
        job_titles=dedupe([*a.job_titles, *b.job_titles]),
        detailed_analysis=_merge_detailed(a.detailed_analysis, b.detailed_analysis),
    )


def merge_all(records: Sequence[AnalysisRecord]) -> AnalysisRecord:
    """Fold :func:`merge` over ``records`` in priority order."""
    if not records:
        raise ValueError("merge_all() requires at least one record")
    return reduce(merge, records)


def _merge_detailed(a: DetailedAnalysis, b: DetailedAnalysis) -> DetailedAnalysis:
    return DetailedAnalysis(
        professional_profile=a.professional_profile or b.professional_profile,
        key_achievements=dedupe([*a.key_achievements, *b.key_achievements]),
        industry_fit=dedupe([*a.industry_fit, *b.industry_fit]),
        recommended_job_titles=dedupe([*a.recommended_job_titles, *b.recommended_job_titles]),
        skill_gaps=dedupe([*a.skill_gaps, *b.skill_gaps]),
    )
