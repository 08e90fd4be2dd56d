"""Shared Pydantic schemas for structured LLM output.

Every node validates the model's JSON against one of these classes, so a
field rename here is a contract change for the matching prompt.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field


SkillCategory = Literal[
    "language",
    "framework",
    "tool",
    "platform",
    "methodology",
    "soft-skill",
    "domain",
    "other",
]
SkillPriority = Literal["required", "preferred", "nice-to-have"]


class Skill(BaseModel):
    name: str = Field(description="Skill name, e.g. 'TypeScript', 'System Design'")
    category: SkillCategory = Field(description="Category of the skill")
    priority: SkillPriority = Field(description="How important this skill is for the role")


# ---------------------------------------------------------------------------
# Parsed job description
# ---------------------------------------------------------------------------

class ParsedJD(BaseModel):
    """Structured output of the PARSE_JD node."""

    company: str = Field(description="Company name")
    role: str = Field(description="Job title")
    level: str = Field(description="Seniority level, e.g. 'Staff', 'Senior', 'Principal'")
    team: Optional[str] = Field(default=None, description="Team or department if mentioned")
    required_skills: List[Skill] = Field(description="Skills explicitly listed as required")
    preferred_skills: List[Skill] = Field(description="Skills listed as preferred or nice-to-have")
    responsibilities: List[str] = Field(description="Key responsibilities of the role")
    tech_stack: List[str] = Field(description="Technologies and tools mentioned")
    culture: List[str] = Field(description="Cultural values, work style signals")
    red_flags: List[str] = Field(description="Unrealistic expectations or concerning signals")
    salary_range: Optional[str] = Field(default=None, description="Salary range if mentioned")


# ---------------------------------------------------------------------------
# Parsed resume
# ---------------------------------------------------------------------------

class Experience(BaseModel):
    company: str = Field(description="Company name")
    role: str = Field(description="Job title held")
    duration: str = Field(description="How long in this role, e.g. '2 years'")
    highlights: List[str] = Field(description="Key accomplishments and responsibilities")
    tech_used: List[str] = Field(description="Technologies used in this role")


class Education(BaseModel):
    institution: str = Field(description="School or university name")
    degree: str = Field(description="Degree earned")
    field: str = Field(description="Field of study")
    year: Optional[str] = Field(default=None, description="Graduation year")


class ParsedResume(BaseModel):
    """Structured output of the PARSE_RESUME node."""

    summary: str = Field(description="Professional summary or objective")
    skills: List[Skill] = Field(description="All skills listed on the resume")
    experiences: List[Experience] = Field(description="Work experience entries, most recent first")
    education: List[Education] = Field(description="Education entries")
    certifications: List[str] = Field(description="Professional certifications")
    years_of_experience: float = Field(description="Total years of professional experience")


# ---------------------------------------------------------------------------
# Fit analysis
# ---------------------------------------------------------------------------

class Match(BaseModel):
    skill: str = Field(description="The skill or experience area")
    evidence: str = Field(description="Specific evidence from the resume that supports this match")
    strength: Literal["strong", "moderate", "weak"] = Field(description="How strong the match is")


class Gap(BaseModel):
    skill: str = Field(description="The missing skill or experience")
    severity: Literal["critical", "moderate", "minor"] = Field(description="How important this gap is")
    suggestion: str = Field(description="How to address or mitigate this gap")


class Reframe(BaseModel):
    existing_experience: str = Field(description="What the candidate already has")
    reframed_as: str = Field(description="How to position it for this role")
    target_requirement: str = Field(description="Which JD requirement this addresses")


class FitAnalysis(BaseModel):
    """Structured output of the ANALYZE_FIT node."""

    overall_score: float = Field(ge=0, le=100, description="Overall fit score from 0 to 100")
    strong_matches: List[Match] = Field(description="Skills and experience that directly align with the JD")
    partial_matches: List[Match] = Field(description="Transferable skills that need reframing")
    gaps: List[Gap] = Field(description="Missing skills with severity and mitigation suggestions")
    overqualified: List[str] = Field(description="Areas where candidate exceeds requirements")
    reframing_suggestions: List[Reframe] = Field(description="How to position existing experience for this role")
    deal_breakers: List[str] = Field(description="Critical gaps that may disqualify the candidate")
    competitive_advantages: List[str] = Field(description="Unique strengths that set the candidate apart")


# ---------------------------------------------------------------------------
# Generator payloads
# ---------------------------------------------------------------------------

class CoverLetterDraft(BaseModel):
    cover_letter: str = Field(description="The full cover letter text, ready to use")


class TailoredBullet(BaseModel):
    bullet: str = Field(description="The resume bullet point text")
    target_requirement: str = Field(description="Which JD requirement this addresses")
    original_experience: str = Field(description="Which resume experience this is based on")


class TailoredBullets(BaseModel):
    bullets: List[TailoredBullet]


class TechnicalQuestion(BaseModel):
    question: str
    why: str = Field(description="Why they might ask this")
    talking_points: List[str]


class BehavioralQuestion(BaseModel):
    question: str
    why: str
    suggested_story: str = Field(description="A specific experience from the resume to use")


class QuestionToAsk(BaseModel):
    question: str
    purpose: str = Field(description="What this question reveals")


class InterviewPrepGuide(BaseModel):
    technical_questions: List[TechnicalQuestion]
    behavioral_questions: List[BehavioralQuestion]
    questions_to_ask: List[QuestionToAsk]
