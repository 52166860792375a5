"""Tests for the local heuristic analysis."""

from resume_analyzer.analysis import synthesize
from resume_analyzer.analysis.fallback import (
    GENERIC_SKILLS,
    GENERIC_TITLES,
    detect_signals,
    extract_achievements,
    extract_skills,
    score_resume,
    suggest_job_titles,
    suggest_skill_gaps,
)

PM_RESUME = "5 years experience as Project Manager using Agile and Scrum"

DEV_RESUME = (
    "Senior Software Engineer at a fintech company in the Finance industry. "
    "Built services in Python and JavaScript with React and PostgreSQL on AWS. "
    "Led a team of five engineers. Reduced deployment time by 40%. "
    "Bachelor of Science in Computer Science, State University."
)


def test_project_manager_scenario():
    record = synthesize(PM_RESUME)

    assert "Agile" in record.skills
    assert "Scrum" in record.skills
    assert record.job_titles
    assert "Project Manager" in record.job_titles
    assert record.resume_score >= 50
    assert record.summary
    assert record.detailed_analysis.professional_profile == record.summary


def test_synthesize_is_deterministic():
    first = synthesize(DEV_RESUME)
    second = synthesize(DEV_RESUME)
    assert first == second
    assert first.to_dict() == second.to_dict()


def test_developer_resume_signals():
    signals = detect_signals(DEV_RESUME)
    assert signals.skills[:3] == ["JavaScript", "Python", "Java"]
    assert signals.has_education
    assert signals.has_experience
    assert "Finance" in signals.industries


def test_skills_cap_and_generic_fallback():
    many = "Python Java Ruby Swift Kotlin React Angular Django Flask Docker Git Excel"
    assert len(extract_skills(many)) == 10
    assert extract_skills("nothing relevant here") == GENERIC_SKILLS


def test_achievements_are_sentences_with_keywords():
    text = "Increased revenue by 20%. Enjoys hiking! Launched a new product? Won an award."
    assert extract_achievements(text) == [
        "Increased revenue by 20%",
        "Launched a new product",
        "Won an award",
    ]


def test_job_titles_by_skill_category():
    assert suggest_job_titles(["Python"]) == ["Software Developer", "Software Engineer"]
    assert suggest_job_titles(["Python", "React", "SQL"]) == [
        "Software Developer",
        "Software Engineer",
        "Web Developer",
        "Frontend Developer",
        "Full Stack Developer",
    ]
    assert suggest_job_titles(["Excel"]) == GENERIC_TITLES


def test_skill_gaps_are_case_insensitive_and_capped():
    gaps = suggest_skill_gaps(["javascript", "PYTHON"], ["Software Developer"])
    assert gaps == ["Java", "C#", "Git", "Agile"]
    assert len(suggest_skill_gaps([], ["Web Developer", "Data Analyst"])) == 5


def test_skill_gaps_generic_when_nothing_missing():
    gaps = suggest_skill_gaps(["SQL", "Database Design", "Performance Tuning"], ["Database Administrator"])
    assert gaps == ["Industry-specific certifications", "Leadership experience", "Project management skills"]


def test_score_formula():
    signals = detect_signals(PM_RESUME)
    # 50 + 2 skills * 2 + education ("ma" in "manager") + experience
    assert score_resume(signals) == 74


def test_record_without_achievements_explains_the_gap():
    record = synthesize("Python")
    assert len(record.detailed_analysis.key_achievements) == 1
    assert "No significant achievements" in record.detailed_analysis.key_achievements[0]
    assert "No concrete achievements mentioned" in record.areas_to_improve
    assert "Add measurable achievements for each work experience" in record.recommendations
