"""Prompt templates for the PARSE_JD and PARSE_RESUME nodes."""

_SKILL_SHAPE = (
    '{ "name": string, "category": "language"|"framework"|"tool"|"platform"|'
    '"methodology"|"soft-skill"|"domain"|"other", "priority": <see below> }'
)

JD_PARSER_SYSTEM = (
    "You are an expert technical recruiter. Extract structured data from job "
    "descriptions. Always respond with valid JSON only: no explanations, no markdown."
)

RESUME_PARSER_SYSTEM = (
    "You are an expert resume analyst. Extract structured data from resumes. "
    "Always respond with valid JSON only: no explanations, no markdown."
)


def build_jd_parser_prompt(jd_text: str) -> str:
    """Build the user prompt that turns raw JD text into a ParsedJD object."""
    return f"""Analyze the following job description and extract structured data.

Return a JSON object with EXACTLY these fields:
- company (string): The company name
- role (string): The job title
- level (string): Seniority level (e.g. "Staff", "Senior", "Principal", "Mid-level")
- team (string, optional): Team or department if mentioned
- required_skills (array): Skills explicitly listed as required. Each item: {_SKILL_SHAPE} with priority "required"
- preferred_skills (array): Preferred or nice-to-have skills. Same shape, priority "preferred" or "nice-to-have"
- responsibilities (array of strings): Key responsibilities
- tech_stack (array of strings): Technologies and tools mentioned
- culture (array of strings): Cultural values and work style signals (e.g. "remote-first", "collaborative")
- red_flags (array of strings): Unrealistic expectations, concerning signals, or potential issues
- salary_range (string, optional): Salary range if mentioned

Only include information that is stated or strongly implied in the JD.

### JOB DESCRIPTION
{jd_text}"""


def build_resume_parser_prompt(resume_text: str) -> str:
    """Build the user prompt that turns raw resume text into a ParsedResume object."""
    return f"""Analyze the following resume and extract structured data.

Return a JSON object with EXACTLY these fields:
- summary (string): Professional summary. If none is stated, write a brief one from the resume content.
- skills (array): All skills mentioned. Each item: {_SKILL_SHAPE} with priority "required"
- experiences (array): Work experience, most recent first. Each item: {{ "company": string, "role": string, "duration": string, "highlights": string[], "tech_used": string[] }}
- education (array): Each item: {{ "institution": string, "degree": string, "field": string, "year": string (optional) }}
- certifications (array of strings): Professional certifications
- years_of_experience (number): Total years of professional experience (estimate from dates if needed)

Capture every skill, technology, and accomplishment mentioned.

### RESUME
{resume_text}"""
