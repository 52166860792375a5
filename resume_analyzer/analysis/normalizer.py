"""Conversion of raw provider payloads into :class:`AnalysisRecord`.

Two response schemas are in circulation. The newer one nests the long-form
fields under ``detailedAnalysis``; the older one puts ``professionalProfile``,
``keyAchievements`` and friends at the top level, sometimes as plain strings.
Both are accepted.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Tuple

from .extractor import (
    extract_int,
    extract_list,
    extract_list_or_scalar,
    extract_mapping,
    extract_string,
)
from .record import DEFAULT_SCORE, AnalysisRecord, DetailedAnalysis, clamp_score, dedupe

# Candidate keys per canonical field, highest priority first.
SUMMARY_KEYS: Tuple[str, ...] = ("summary",)
SKILL_KEYS: Tuple[str, ...] = ("personalSkills", "skills", "keySkills")
STRENGTH_KEYS: Tuple[str, ...] = ("strengths",)
IMPROVEMENT_KEYS: Tuple[str, ...] = ("areasToImprove", "weaknesses", "improvements")
RECOMMENDATION_KEYS: Tuple[str, ...] = ("recommendations",)
SCORE_KEYS: Tuple[str, ...] = ("resumeScore",)
JOB_TITLE_KEYS: Tuple[str, ...] = ("recommendedJobTitles", "jobTitles")

DETAIL_KEY = "detailedAnalysis"
PROFILE_KEY = "professionalProfile"
DETAIL_LIST_FIELDS: Dict[str, str] = {
    "keyAchievements": "key_achievements",
    "industryFit": "industry_fit",
    "recommendedJobTitles": "recommended_job_titles",
    "skillGaps": "skill_gaps",
}


def normalize(provider_result: Any) -> AnalysisRecord:
    """Build a canonical record from one provider's payload.

    Missing or mistyped fields fall back to empty values; ``resumeScore``
    defaults to 75 and is clamped to ``[0, 100]``.
    """
    return AnalysisRecord(
        summary=extract_string(provider_result, SUMMARY_KEYS),
        strengths=dedupe(extract_list(provider_result, STRENGTH_KEYS)),
        areas_to_improve=dedupe(extract_list(provider_result, IMPROVEMENT_KEYS)),
        recommendations=dedupe(extract_list(provider_result, RECOMMENDATION_KEYS)),
        skills=dedupe(extract_list(provider_result, SKILL_KEYS)),
        resume_score=clamp_score(extract_int(provider_result, SCORE_KEYS, DEFAULT_SCORE)),
        job_titles=dedupe(extract_list(provider_result, JOB_TITLE_KEYS)),
        detailed_analysis=normalize_detailed(provider_result),
    )


def normalize_detailed(provider_result: Any) -> DetailedAnalysis:
    """Resolve the nested section, bridging the legacy top-level layout.

    Each sub-field prefers ``detailedAnalysis.<field>`` and falls back to the
    top-level ``<field>``, where a single string is accepted as a one-item
    list.
    """
    nested = extract_mapping(provider_result, (DETAIL_KEY,))
    top_level = provider_result if isinstance(provider_result, Mapping) else {}

    profile = extract_string(nested, (PROFILE_KEY,)) or extract_string(top_level, (PROFILE_KEY,))

    lists: Dict[str, List[str]] = {}
    for source_key, attr in DETAIL_LIST_FIELDS.items():
        values = _nested_list(nested, source_key)
        if values is None:
            values = extract_list_or_scalar(top_level, (source_key,))
        lists[attr] = dedupe(values)

    return DetailedAnalysis(professional_profile=profile, **lists)


def _nested_list(nested: Dict[str, Any], key: str) -> Optional[List[str]]:
    """Return the nested list for ``key``, or ``None`` when it carries no data."""
    return extract_list_or_scalar(nested, (key,)) or None
