"""Markdown fit report built from a parsed JD and its fit analysis.

Deterministic: the same inputs always render the same report. Gaps are listed
critical first, then moderate, then minor.
"""
import re
from typing import List

from jobfit.infra.models import FitAnalysis, Match, ParsedJD

GAP_SEVERITY_ORDER = {"critical": 0, "moderate": 1, "minor": 2}


def escape_cell(value: str) -> str:
    """Make ``value`` safe inside a markdown table cell."""
    return re.sub(r"\n+", " ", value.replace("|", "\\|")).strip()


def _match_table(matches: List[Match]) -> List[str]:
    if not matches:
        return ["None identified."]
    lines = ["| Skill | Evidence | Strength |", "|---|---|---|"]
    for m in matches:
        lines.append(f"| {escape_cell(m.skill)} | {escape_cell(m.evidence)} | {escape_cell(m.strength)} |")
    return lines


def generate_fit_report(parsed_jd: ParsedJD, fit_analysis: FitAnalysis) -> str:
    sorted_gaps = sorted(
        fit_analysis.gaps,
        key=lambda g: GAP_SEVERITY_ORDER.get(g.severity, len(GAP_SEVERITY_ORDER)),
    )

    lines: List[str] = [
        f"# Fit Report: {parsed_jd.role} @ {parsed_jd.company}",
        "",
        f"- **Overall Score:** {fit_analysis.overall_score:g}/100",
        f"- **Target Level:** {parsed_jd.level}",
        "",
        "## Strong Matches",
        "",
        *_match_table(fit_analysis.strong_matches),
        "",
        "## Partial Matches",
        "",
        *_match_table(fit_analysis.partial_matches),
        "",
        "## Gaps (Ordered by Severity)",
        "",
    ]

    if sorted_gaps:
        lines += ["| Severity | Skill | Recommendation |", "|---|---|---|"]
        for gap in sorted_gaps:
            lines.append(
                f"| {escape_cell(gap.severity)} | {escape_cell(gap.skill)} | {escape_cell(gap.suggestion)} |"
            )
    else:
        lines.append("None identified.")
    lines.append("")

    # Optional sections are omitted entirely when empty
    if fit_analysis.deal_breakers:
        lines += ["## Deal Breakers", ""]
        lines += [f"- {item}" for item in fit_analysis.deal_breakers]
        lines.append("")

    if fit_analysis.overqualified:
        lines += ["## Overqualified Areas", ""]
        lines += [f"- {item}" for item in fit_analysis.overqualified]
        lines.append("")

    lines += ["## Reframing Suggestions", ""]
    if fit_analysis.reframing_suggestions:
        for s in fit_analysis.reframing_suggestions:
            lines.append(f"- **Current:** {s.existing_experience}")
            lines.append(f"  - **Reframe As:** {s.reframed_as}")
            lines.append(f"  - **Targets:** {s.target_requirement}")
    else:
        lines.append("None identified.")
    lines.append("")

    lines += ["## Competitive Advantages", ""]
    if fit_analysis.competitive_advantages:
        lines += [f"- {item}" for item in fit_analysis.competitive_advantages]
    else:
        lines.append("None identified.")

    return "\n".join(lines).strip() + "\n"
