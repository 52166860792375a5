"""Canonical analysis record returned by the analysis pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Tuple

MIN_SCORE = 0
MAX_SCORE = 100
DEFAULT_SCORE = 75


def dedupe(items: Iterable[str]) -> List[str]:
    """Drop repeated entries, keeping the first occurrence of each."""
    seen = set()
    result: List[str] = []
    for item in items:
        if item in seen:
            continue
        seen.add(item)
        result.append(item)
    return result


def clamp_score(value: int) -> int:
    return max(MIN_SCORE, min(MAX_SCORE, int(value)))


def _freeze(instance: Any, names: Tuple[str, ...]) -> None:
    for name in names:
        object.__setattr__(instance, name, tuple(getattr(instance, name)))


@dataclass(frozen=True)
class DetailedAnalysis:
    """Nested long-form section of an analysis."""

    professional_profile: str = ""
    key_achievements: Tuple[str, ...] = ()
    industry_fit: Tuple[str, ...] = ()
    recommended_job_titles: Tuple[str, ...] = ()
    skill_gaps: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        _freeze(self, ("key_achievements", "industry_fit", "recommended_job_titles", "skill_gaps"))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "professionalProfile": self.professional_profile,
            "keyAchievements": list(self.key_achievements),
            "industryFit": list(self.industry_fit),
            "recommendedJobTitles": list(self.recommended_job_titles),
            "skillGaps": list(self.skill_gaps),
        }


@dataclass(frozen=True)
class AnalysisRecord:
    """Fully defaulted resume analysis.

    List fields are deduplicated in insertion order and ``resume_score``
    always lies in ``[0, 100]``. Instances are built by the normalizer, the
    merger or the fallback synthesizer. List arguments are stored as tuples,
    so a record cannot be changed after construction.
    """

    summary: str = ""
    strengths: Tuple[str, ...] = ()
    areas_to_improve: Tuple[str, ...] = ()
    recommendations: Tuple[str, ...] = ()
    skills: Tuple[str, ...] = ()
    resume_score: int = DEFAULT_SCORE
    job_titles: Tuple[str, ...] = ()
    detailed_analysis: DetailedAnalysis = field(default_factory=DetailedAnalysis)

    def __post_init__(self) -> None:
        _freeze(self, ("strengths", "areas_to_improve", "recommendations", "skills", "job_titles"))

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the camelCase JSON shape consumed by clients."""
        return {
            "summary": self.summary,
            "strengths": list(self.strengths),
            "areasToImprove": list(self.areas_to_improve),
            "recommendations": list(self.recommendations),
            "skills": list(self.skills),
            "resumeScore": self.resume_score,
            "jobTitles": list(self.job_titles),
            "detailedAnalysis": self.detailed_analysis.to_dict(),
        }
