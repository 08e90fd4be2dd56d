"""Prompt templates for the agent nodes."""

from jobfit.agent.prompts.analyzer_prompt import FIT_ANALYZER_SYSTEM, build_fit_analysis_prompt
from jobfit.agent.prompts.generator_prompt import (
    BULLETS_SYSTEM,
    COVER_LETTER_SYSTEM,
    INTERVIEW_PREP_SYSTEM,
    build_bullets_prompt,
    build_cover_letter_prompt,
    build_interview_prep_prompt,
)
from jobfit.agent.prompts.parser_prompt import (
    JD_PARSER_SYSTEM,
    RESUME_PARSER_SYSTEM,
    build_jd_parser_prompt,
    build_resume_parser_prompt,
)

__all__ = [
    "FIT_ANALYZER_SYSTEM",
    "build_fit_analysis_prompt",
    "BULLETS_SYSTEM",
    "COVER_LETTER_SYSTEM",
    "INTERVIEW_PREP_SYSTEM",
    "build_bullets_prompt",
    "build_cover_letter_prompt",
    "build_interview_prep_prompt",
    "JD_PARSER_SYSTEM",
    "RESUME_PARSER_SYSTEM",
    "build_jd_parser_prompt",
    "build_resume_parser_prompt",
]
