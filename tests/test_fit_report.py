"""Tests for the markdown fit report."""

import re

from jobfit.infra.models import FitAnalysis, Gap, ParsedJD
from jobfit.reporting.fit_report import escape_cell, generate_fit_report

_GAP_ROW_RE = re.compile(r"^\|\s*(critical|moderate|minor)\s*\|", re.IGNORECASE)


class TestGenerateFitReport:
    def test_includes_all_sections(self, parsed_jd: ParsedJD, fit_analysis: FitAnalysis) -> None:
        report = generate_fit_report(parsed_jd, fit_analysis)

        assert report.startswith(f"# Fit Report: {parsed_jd.role} @ {parsed_jd.company}")
        for heading in (
            "## Strong Matches",
            "## Partial Matches",
            "## Gaps (Ordered by Severity)",
            "## Deal Breakers",
            "## Overqualified Areas",
            "## Reframing Suggestions",
            "## Competitive Advantages",
        ):
            assert heading in report
        assert "- **Overall Score:** 68/100" in report
        assert report.endswith("\n")

    def test_is_deterministic(self, parsed_jd: ParsedJD, fit_analysis: FitAnalysis) -> None:
        assert generate_fit_report(parsed_jd, fit_analysis) == generate_fit_report(parsed_jd, fit_analysis)

    def test_gaps_ordered_by_severity(self, parsed_jd: ParsedJD, fit_analysis: FitAnalysis) -> None:
        report = generate_fit_report(parsed_jd, fit_analysis)

        severities = [
            m.group(1).lower() for m in map(_GAP_ROW_RE.match, report.splitlines()) if m
        ]
        assert severities == ["critical", "moderate", "minor"]

    def test_empty_optional_sections_omitted(self, parsed_jd: ParsedJD, fit_analysis: FitAnalysis) -> None:
        analysis = fit_analysis.model_copy(
            update={"deal_breakers": [], "overqualified": [], "gaps": [], "strong_matches": []}
        )

        report = generate_fit_report(parsed_jd, analysis)

        assert "## Deal Breakers" not in report
        assert "## Overqualified Areas" not in report
        assert report.count("None identified.") == 2

    def test_table_cells_escaped(self, parsed_jd: ParsedJD, fit_analysis: FitAnalysis) -> None:
        analysis = fit_analysis.model_copy(
            update={"gaps": [Gap(skill="C|C++", severity="minor", suggestion="Read\n\nthe book")]}
        )

        report = generate_fit_report(parsed_jd, analysis)

        assert "| minor | C\\|C++ | Read the book |" in report


def test_escape_cell() -> None:
    assert escape_cell("  a|b\nc  ") == "a\\|b c"
