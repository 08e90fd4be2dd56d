"""Quality gate for generated outputs.

``validate_outputs`` is pure: same inputs, same ValidationResult. It checks
each artifact independently and keeps evaluating after the first failure so
the retry prompt (and the caller) sees every issue at once.
"""

import re
from typing import List

from loguru import logger

from jobfit.agent.state import GeneratedOutputs, ValidationResult
from jobfit.infra.models import ParsedJD


MIN_COVER_LETTER_WORDS = 150
MAX_COVER_LETTER_WORDS = 450
MIN_BULLETS = 4
MIN_TECH_KEYWORDS = 2

INTERVIEW_PREP_SECTIONS = ("Technical Questions", "Behavioral Questions", "Questions to Ask")

_BULLET_RE = re.compile(r"^- ", re.MULTILINE)


def _company_token(parsed_jd: ParsedJD) -> str:
    """First word of the company name, lower-cased ("Acme Cloud Inc." -> "acme")."""
    tokens = parsed_jd.company.lower().split()
    return tokens[0] if tokens else ""


def _validate_cover_letter(text: str, parsed_jd: ParsedJD, issues: List[str]) -> bool:
    valid = True
    word_count = len(text.split())

    if word_count > MAX_COVER_LETTER_WORDS:
        valid = False
        issues.append(f"Cover letter too long: {word_count} words (max {MAX_COVER_LETTER_WORDS})")

    if word_count < MIN_COVER_LETTER_WORDS:
        valid = False
        issues.append(f"Cover letter too short: {word_count} words (min {MIN_COVER_LETTER_WORDS})")

    lowered = text.lower()
    if _company_token(parsed_jd) not in lowered:
        valid = False
        issues.append("Cover letter doesn't mention the company name")

    if not any(skill.name.lower() in lowered for skill in parsed_jd.required_skills):
        valid = False
        issues.append("Cover letter doesn't reference any required skills from the JD")

    return valid


def _validate_bullets(text: str, parsed_jd: ParsedJD, issues: List[str]) -> bool:
    valid = True

    bullet_count = len(_BULLET_RE.findall(text))
    if bullet_count < MIN_BULLETS:
        valid = False
        issues.append(f"Too few resume bullets: {bullet_count} (min {MIN_BULLETS})")

    lowered = text.lower()
    keyword_hits = [k for k in parsed_jd.tech_stack if k.lower() in lowered]
    if len(keyword_hits) < MIN_TECH_KEYWORDS:
        valid = False
        issues.append(
            f"Resume bullets only reference {len(keyword_hits)} tech stack keywords "
            f"(need at least {MIN_TECH_KEYWORDS})"
        )

    return valid


def _validate_interview_prep(text: str, parsed_jd: ParsedJD, issues: List[str]) -> bool:
    valid = True

    if not all(section in text for section in INTERVIEW_PREP_SECTIONS):
        valid = False
        issues.append(
            "Interview prep missing one or more sections "
            "(Technical, Behavioral, Questions to Ask)"
        )

    # Generic output signal: the guide should name the company
    if _company_token(parsed_jd) not in text.lower():
        valid = False
        issues.append("Interview prep appears generic: doesn't mention the company")

    return valid


def validate_outputs(outputs: GeneratedOutputs, parsed_jd: ParsedJD) -> ValidationResult:
    """Check all three artifacts against the parsed job description.

    Args:
        outputs: Current generated artifacts (any may be None).
        parsed_jd: Reference requirements (company, required skills, tech stack).

    Returns:
        ValidationResult with one flag per artifact and every issue found.
    """
    issues: List[str] = []

    if outputs.cover_letter:
        cover_letter_valid = _validate_cover_letter(outputs.cover_letter, parsed_jd, issues)
    else:
        cover_letter_valid = False
        issues.append("Cover letter is missing")

    if outputs.tailored_bullets:
        bullets_valid = _validate_bullets(outputs.tailored_bullets, parsed_jd, issues)
    else:
        bullets_valid = False
        issues.append("Resume bullets are missing")

    if outputs.interview_prep:
        interview_prep_valid = _validate_interview_prep(outputs.interview_prep, parsed_jd, issues)
    else:
        interview_prep_valid = False
        issues.append("Interview prep is missing")

    passed = cover_letter_valid and bullets_valid and interview_prep_valid

    if passed:
        logger.info("All outputs passed validation")
    else:
        logger.info(f"Validation failed: {len(issues)} issues")
        for issue in issues:
            logger.info(f"  - {issue}")

    return ValidationResult(
        passed=passed,
        cover_letter_valid=cover_letter_valid,
        bullets_valid=bullets_valid,
        interview_prep_valid=interview_prep_valid,
        issues=issues,
    )
