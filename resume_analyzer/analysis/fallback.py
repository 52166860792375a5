"""Local keyword heuristics used when no LLM provider produced an analysis.

All functions operate on the resume text only -- no I/O, no randomness. The
same text always yields the same record.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, List

from .normalizer import normalize
from .record import AnalysisRecord, clamp_score, dedupe

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

SKILL_KEYWORDS: List[str] = [
    "JavaScript", "Python", "Java", "C++", "C#", "PHP", "Ruby", "Swift", "Kotlin",
    "React", "Angular", "Vue", "Node.js", "Express", "Django", "Flask", "Spring",
    "SQL", "NoSQL", "MongoDB", "MySQL", "PostgreSQL", "Oracle", "Firebase",
    "AWS", "Azure", "GCP", "Docker", "Kubernetes", "CI/CD", "Git", "GitHub",
    "Machine Learning", "AI", "Data Science", "Big Data", "Data Analysis",
    "Project Management", "Agile", "Scrum", "Kanban", "Jira", "Confluence",
    "Leadership", "Communication", "Teamwork", "Problem Solving", "Critical Thinking",
    "Microsoft Office", "Excel", "PowerPoint", "Word", "Outlook",
    "Marketing", "Sales", "Customer Service", "SEO", "SEM", "Content Marketing",
    "Accounting", "Finance", "Budgeting", "Forecasting", "Financial Analysis",
    "HR", "Recruitment", "Talent Management", "Employee Relations", "Training",
]

GENERIC_SKILLS: List[str] = ["Communication", "Problem Solving", "Teamwork", "Analytical Thinking", "Organization"]

ACHIEVEMENT_KEYWORDS: List[str] = [
    "achieved", "improved", "increased", "decreased", "reduced", "saved",
    "developed", "created", "implemented", "launched", "led", "managed",
    "award", "recognition", "certificate", "honor", "prize", "scholarship",
    "achievement",
]

INDUSTRY_KEYWORDS: List[str] = [
    "Technology", "IT", "Software", "Healthcare", "Finance", "Banking",
    "Education", "Manufacturing", "Retail", "E-commerce", "Marketing",
    "Advertising", "Media", "Entertainment", "Hospitality", "Tourism",
    "Construction", "Real Estate", "Automotive", "Aerospace", "Energy",
    "Telecommunications", "Consulting", "Legal", "Government", "Non-profit",
]

EDUCATION_KEYWORDS: List[str] = [
    "Bachelor", "Master", "PhD", "Doctorate", "BSc", "MSc", "BA", "MA", "MBA",
    "University", "College", "School", "Institute", "Academy",
    "Degree", "Diploma", "Certificate", "Certification", "Graduate", "Undergraduate",
]

EXPERIENCE_KEYWORDS: List[str] = [
    "Experience", "Work", "Job", "Career", "Employment", "Position", "Role",
    "Manager", "Director", "Lead", "Senior", "Junior", "Intern", "Specialist",
    "Coordinator", "Supervisor", "Assistant", "Associate", "Consultant", "Leader",
]

TECH_SKILLS = {"JavaScript", "Python", "Java", "C++", "C#", "PHP", "Ruby", "Swift", "Kotlin"}
WEB_SKILLS = {"React", "Angular", "Vue", "HTML", "CSS", "Node.js", "Express", "Django", "Flask"}
DATA_SKILLS = {"SQL", "NoSQL", "MongoDB", "MySQL", "PostgreSQL", "Data Analysis", "Machine Learning", "AI"}

TECH_TITLES = ["Software Developer", "Software Engineer"]
WEB_TITLES = ["Web Developer", "Frontend Developer", "Full Stack Developer"]
DATA_TITLES = ["Data Analyst", "Database Administrator", "Data Engineer"]
GENERIC_TITLES = [
    "Project Manager",
    "Business Analyst",
    "Marketing Specialist",
    "Administrative Assistant",
    "Customer Service Representative",
]

JOB_SKILL_REQUIREMENTS: Dict[str, List[str]] = {
    "Software Developer": ["JavaScript", "Python", "Java", "C#", "Git", "Agile"],
    "Software Engineer": ["Data Structures", "Algorithms", "System Design", "CI/CD"],
    "Web Developer": ["HTML", "CSS", "JavaScript", "React", "Angular", "Node.js"],
    "Frontend Developer": ["HTML", "CSS", "JavaScript", "React", "Vue", "UI/UX"],
    "Full Stack Developer": ["Frontend", "Backend", "Database", "API Design"],
    "Data Analyst": ["SQL", "Excel", "Data Visualization", "Statistics"],
    "Data Engineer": ["SQL", "ETL", "Data Warehousing", "Big Data"],
    "Database Administrator": ["SQL", "Database Design", "Performance Tuning"],
    "Project Manager": ["Project Management", "Agile", "Scrum", "Leadership"],
    "Business Analyst": ["Requirements Analysis", "Process Modeling", "Documentation"],
    "Marketing Specialist": ["Digital Marketing", "SEO", "Content Marketing"],
    "Administrative Assistant": ["Microsoft Office", "Organization", "Communication"],
    "Customer Service Representative": ["Communication", "Problem Solving", "Patience"],
}

GENERIC_SKILL_GAPS = ["Industry-specific certifications", "Leadership experience", "Project management skills"]

WEAKNESS_RECOMMENDATIONS: Dict[str, str] = {
    "Limited skill set": "Add more technical and personal skills to your resume",
    "Missing or insufficient education information": "Detail your education information and add relevant courses",
    "Missing or insufficient work experience": "List your work experiences chronologically and in detail",
    "No concrete achievements mentioned": "Add measurable achievements for each work experience",
    "Resume content is short and insufficient": "Make your resume more comprehensive",
}

MAX_SKILLS = 10
MAX_ACHIEVEMENTS = 5
MAX_INDUSTRIES = 3
MAX_JOB_TITLES = 5
MAX_SKILL_GAPS = 5
SHORT_RESUME_CHARS = 1000


@dataclass(frozen=True)
class ResumeSignals:
    """Facts detected in the resume text that drive the heuristics."""

    skills: List[str]
    achievements: List[str]
    industries: List[str]
    has_education: bool
    has_experience: bool
    text_length: int


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def synthesize(text: str) -> AnalysisRecord:
    """Produce a best-effort analysis from *text* alone."""
    signals = detect_signals(text)
    job_titles = suggest_job_titles(signals.skills)
    weaknesses = determine_weaknesses(signals)
    profile = build_profile(signals)

    if signals.achievements:
        key_achievements: List[str] = signals.achievements
    else:
        key_achievements = [
            "No significant achievements could be extracted from your resume. "
            "Please add your concrete achievements to your resume."
        ]

    if signals.industries:
        industry_fit = f"Your resume appears suitable for the following industries: {', '.join(signals.industries)}"
    else:
        industry_fit = "Your resume shows a generally professional profile."

    # Legacy top-level layout; the normalizer bridges it into detailedAnalysis.
    payload = {
        "summary": profile,
        "professionalProfile": profile,
        "keySkills": signals.skills,
        "strengths": determine_strengths(signals),
        "weaknesses": weaknesses,
        "recommendations": recommend(weaknesses),
        "resumeScore": score_resume(signals),
        "keyAchievements": key_achievements,
        "industryFit": industry_fit,
        "recommendedJobTitles": job_titles,
        "skillGaps": suggest_skill_gaps(signals.skills, job_titles),
    }
    return normalize(payload)


def detect_signals(text: str) -> ResumeSignals:
    return ResumeSignals(
        skills=extract_skills(text),
        achievements=extract_achievements(text),
        industries=extract_industries(text),
        has_education=_contains_any(text, EDUCATION_KEYWORDS),
        has_experience=_contains_any(text, EXPERIENCE_KEYWORDS),
        text_length=len(text),
    )


def extract_skills(text: str) -> List[str]:
    """Vocabulary skills mentioned in *text*, or a generic set when none are."""
    found = _matching_terms(text, SKILL_KEYWORDS)
    if not found:
        return list(GENERIC_SKILLS)
    return found[:MAX_SKILLS]


def extract_achievements(text: str) -> List[str]:
    """Sentences that mention an accomplishment, in document order."""
    sentences = [s.strip() for s in re.split(r"[.!?]+", text) if s.strip()]
    achievements = [
        sentence
        for sentence in sentences
        if any(keyword in sentence.lower() for keyword in ACHIEVEMENT_KEYWORDS)
    ]
    return achievements[:MAX_ACHIEVEMENTS]


def extract_industries(text: str) -> List[str]:
    return _matching_terms(text, INDUSTRY_KEYWORDS)[:MAX_INDUSTRIES]


def suggest_job_titles(skills: List[str]) -> List[str]:
    """Map detected skill categories to a short list of titles."""
    titles: List[str] = []
    if any(skill in TECH_SKILLS for skill in skills):
        titles.extend(TECH_TITLES)
    if any(skill in WEB_SKILLS for skill in skills):
        titles.extend(WEB_TITLES)
    if any(skill in DATA_SKILLS for skill in skills):
        titles.extend(DATA_TITLES)
    if not titles:
        titles = list(GENERIC_TITLES)
    return dedupe(titles)[:MAX_JOB_TITLES]


def suggest_skill_gaps(skills: List[str], job_titles: List[str]) -> List[str]:
    """Skills the suggested titles usually require that the resume lacks."""
    present = {skill.lower() for skill in skills}
    required: List[str] = []
    for title in job_titles:
        required.extend(JOB_SKILL_REQUIREMENTS.get(title, []))
    missing = [skill for skill in dedupe(required) if skill.lower() not in present]
    if not missing:
        return list(GENERIC_SKILL_GAPS)
    return missing[:MAX_SKILL_GAPS]


def score_resume(signals: ResumeSignals) -> int:
    score = 50
    score += min(len(signals.skills) * 2, 15)
    if signals.has_education:
        score += 10
    if signals.has_experience:
        score += 10
    score += min(len(signals.achievements) * 2, 10)
    score += min(signals.text_length // 500, 5)
    return clamp_score(score)


def build_profile(signals: ResumeSignals) -> str:
    parts = ["Your resume has been analyzed."]
    if signals.skills:
        parts.append(f"You appear to be a professional with skills such as {', '.join(signals.skills[:3])}.")
    if signals.has_experience:
        parts.append("Your professional work experience is mentioned in your resume.")
    if signals.has_education:
        parts.append("Your educational background is included in your resume.")
    if signals.industries:
        parts.append(f"Your resume shows experience in the {', '.join(signals.industries)} industries.")
    parts.append("For a more detailed analysis, you can update your resume and try again.")
    return " ".join(parts)


def determine_strengths(signals: ResumeSignals) -> List[str]:
    strengths: List[str] = []
    if len(signals.skills) >= 5:
        strengths.append("Broad skill set")
    if signals.skills:
        strengths.append(f"Expertise in {signals.skills[0]}")
    if signals.has_education:
        strengths.append("Educational background")
    if signals.has_experience:
        strengths.append("Professional experience")
    if signals.achievements:
        strengths.append("Proven achievements")
    return strengths or ["Skills mentioned in your resume", "Professional approach", "Self-expression ability"]


def determine_weaknesses(signals: ResumeSignals) -> List[str]:
    weaknesses: List[str] = []
    if len(signals.skills) < 5:
        weaknesses.append("Limited skill set")
    if not signals.has_education:
        weaknesses.append("Missing or insufficient education information")
    if not signals.has_experience:
        weaknesses.append("Missing or insufficient work experience")
    if not signals.achievements:
        weaknesses.append("No concrete achievements mentioned")
    if signals.text_length < SHORT_RESUME_CHARS:
        weaknesses.append("Resume content is short and insufficient")
    return weaknesses or [
        "Your resume could include more quantitative results",
        "Describe your skills in more detail",
        "You could add industry-specific keywords",
    ]


def recommend(weaknesses: List[str]) -> List[str]:
    return [WEAKNESS_RECOMMENDATIONS.get(weakness, f"Improve on {weakness}") for weakness in weaknesses]


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------


def _matching_terms(text: str, vocabulary: List[str]) -> List[str]:
    lowered = text.lower()
    return [term for term in vocabulary if term.lower() in lowered]


def _contains_any(text: str, keywords: List[str]) -> bool:
    lowered = text.lower()
    return any(keyword.lower() in lowered for keyword in keywords)
