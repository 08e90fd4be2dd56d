"""Prompt templates for the three GENERATE_OUTPUTS sub-tasks.

Each builder takes an optional ``feedback`` list: validation issues from the
previous attempt for that artifact only.
"""

from typing import List, Optional

from jobfit.infra.models import FitAnalysis, ParsedJD, ParsedResume

COVER_LETTER_SYSTEM = (
    "You are an expert career coach who writes compelling, authentic cover "
    "letters. Respond with JSON only."
)

BULLETS_SYSTEM = (
    "You are an expert resume writer for senior and staff-level software "
    "engineers. Respond with JSON only."
)

INTERVIEW_PREP_SYSTEM = (
    "You are a senior technical interview coach who prepares staff-level "
    "engineers for interviews. Respond with JSON only."
)


def _feedback_section(feedback: Optional[List[str]]) -> str:
    if not feedback:
        return ""
    issues = "\n".join(f"- {item}" for item in feedback)
    return f"""
### PREVIOUS ATTEMPT WAS REJECTED (fix these issues)
{issues}
"""


def build_cover_letter_prompt(
    parsed_jd: ParsedJD,
    parsed_resume: ParsedResume,
    fit_analysis: FitAnalysis,
    feedback: Optional[List[str]] = None,
) -> str:
    recent = parsed_resume.experiences[0] if parsed_resume.experiences else None
    reframes = "\n".join(
        f'- "{r.existing_experience}" -> frame as: "{r.reframed_as}"'
        for r in fit_analysis.reframing_suggestions
    )
    return f"""Write a professional cover letter for the following job application.

### JOB DETAILS
- Company: {parsed_jd.company}
- Role: {parsed_jd.role} ({parsed_jd.level} level)
- Team: {parsed_jd.team or "Not specified"}
- Top requirements: {", ".join(s.name for s in parsed_jd.required_skills)}

### CANDIDATE BACKGROUND
- Years of experience: {parsed_resume.years_of_experience}
- Current/recent role: {recent.role if recent else "N/A"} at {recent.company if recent else "N/A"}
- Key skills: {", ".join(s.name for s in parsed_resume.skills)}

### FIT ANALYSIS
- Overall score: {fit_analysis.overall_score}/100
- Strong matches: {", ".join(m.skill for m in fit_analysis.strong_matches)}
- Key gaps: {", ".join(g.skill for g in fit_analysis.gaps)}
- Competitive advantages: {"; ".join(fit_analysis.competitive_advantages)}

### REFRAMING SUGGESTIONS TO USE
{reframes}
{_feedback_section(feedback)}
### REQUIREMENTS
1. Between 200 and 400 words
2. Mention {parsed_jd.company} by name and address its top 3 requirements specifically
3. Use the reframing suggestions to position experience favorably
4. Include specific accomplishments with numbers
5. Address cultural fit signals: {", ".join(parsed_jd.culture)}
6. End with a confident but not arrogant closing

Return JSON: {{ "cover_letter": "the full cover letter text" }}"""


def build_bullets_prompt(
    parsed_jd: ParsedJD,
    parsed_resume: ParsedResume,
    fit_analysis: FitAnalysis,
    feedback: Optional[List[str]] = None,
) -> str:
    requirements = "\n".join(f"- {s.name}" for s in parsed_jd.required_skills)
    experiences = "\n\n".join(
        f"{e.role} at {e.company} ({e.duration}):\n"
        + "\n".join(f"  - {h}" for h in e.highlights)
        for e in parsed_resume.experiences
    )
    reframes = "\n".join(
        f'- "{r.existing_experience}" -> "{r.reframed_as}" (targets: {r.target_requirement})'
        for r in fit_analysis.reframing_suggestions
    )
    matches = "\n".join(f"- {m.skill}: {m.evidence}" for m in fit_analysis.strong_matches)
    return f"""Generate 5-8 tailored resume bullet points for this job application.

### JOB
{parsed_jd.role} at {parsed_jd.company} ({parsed_jd.level})
Tech stack: {", ".join(parsed_jd.tech_stack)}

### TOP REQUIREMENTS
{requirements}

### CANDIDATE EXPERIENCES
{experiences}

### REFRAMING SUGGESTIONS
{reframes}

### STRONG MATCHES TO HIGHLIGHT
{matches}
{_feedback_section(feedback)}
### REQUIREMENTS FOR EACH BULLET
1. STAR format (Situation/Task -> Action -> Result) with quantified impact
2. Use the JD's tech stack keywords where natural
3. Map each bullet to a specific JD requirement
4. 1-2 sentences, starting with a strong action verb

Return JSON: {{ "bullets": [{{ "bullet": "...", "target_requirement": "...", "original_experience": "..." }}] }}"""


def build_interview_prep_prompt(
    parsed_jd: ParsedJD,
    parsed_resume: ParsedResume,
    fit_analysis: FitAnalysis,
    feedback: Optional[List[str]] = None,
) -> str:
    experiences = "\n".join(
        f"{e.role} at {e.company}: {'; '.join(e.highlights)}" for e in parsed_resume.experiences
    )
    return f"""Create an interview preparation guide for this specific job application.

### JOB
{parsed_jd.role} at {parsed_jd.company} ({parsed_jd.level})
Tech stack: {", ".join(parsed_jd.tech_stack)}
Key responsibilities: {"; ".join(parsed_jd.responsibilities)}

### CANDIDATE
{parsed_resume.years_of_experience} years experience
Strong matches: {", ".join(m.skill for m in fit_analysis.strong_matches)}
Gaps: {", ".join(f"{g.skill} ({g.severity})" for g in fit_analysis.gaps)}

### CANDIDATE'S KEY EXPERIENCES
{experiences}
{_feedback_section(feedback)}
Generate:
1. 4 technical questions they are likely to ask, with talking points from the candidate's actual experience
2. 4 behavioral questions, each with a specific story from the resume
3. 5 questions the candidate should ask the interviewer

Return JSON:
{{
  "technical_questions": [{{ "question": "...", "why": "...", "talking_points": ["..."] }}],
  "behavioral_questions": [{{ "question": "...", "why": "...", "suggested_story": "..." }}],
  "questions_to_ask": [{{ "question": "...", "purpose": "..." }}]
}}"""
