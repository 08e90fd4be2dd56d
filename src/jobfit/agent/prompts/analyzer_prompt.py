"""Prompt template for the ANALYZE_FIT node."""

from jobfit.infra.models import ParsedJD, ParsedResume

FIT_ANALYZER_SYSTEM = (
    "You are an expert career advisor and technical recruiter. Analyze job fit "
    "with precision. Always respond with valid JSON only: no explanations, no markdown."
)


def build_fit_analysis_prompt(parsed_jd: ParsedJD, parsed_resume: ParsedResume) -> str:
    """Build the user prompt comparing a parsed JD against a parsed resume.

    Args:
        parsed_jd: Output of the PARSE_JD node.
        parsed_resume: Output of the PARSE_RESUME node.

    Returns:
        Formatted user prompt string.
    """
    return f"""Analyze the fit between this job description and resume.

### PARSED JOB DESCRIPTION
{parsed_jd.model_dump_json(indent=2)}

### PARSED RESUME
{parsed_resume.model_dump_json(indent=2)}

Return a JSON object with EXACTLY these fields:
- overall_score (number 0-100): 90+ excellent, 70-89 good, 50-69 moderate, below 50 weak
- strong_matches (array): Each {{ "skill": string, "evidence": string, "strength": "strong"|"moderate"|"weak" }}
- partial_matches (array): Transferable skills that could be reframed. Same shape.
- gaps (array): Each {{ "skill": string, "severity": "critical"|"moderate"|"minor", "suggestion": string }}
- overqualified (array of strings): Areas where the candidate exceeds the requirements
- reframing_suggestions (array): Each {{ "existing_experience": string, "reframed_as": string, "target_requirement": string }}
- deal_breakers (array of strings): Critical gaps that may disqualify the candidate
- competitive_advantages (array of strings): Strengths that set the candidate apart

### SCORING GUIDELINES
- Weight required skills more heavily than preferred ones
- Give credit for adjacent and transferable skills
- Consider years of experience and seniority alignment
- Reference actual resume items as evidence, never generic statements"""
