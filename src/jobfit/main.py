"""
JobFit command-line entry point.

Usage:
    jobfit analyze https://boards.example.com/jobs/123 --resume resume.pdf
    jobfit analyze jd.txt --resume resume.md --mock --output output/acme
    jobfit list --sort score
    jobfit compare 2026-03-01_acme_staff-engineer 2026-03-02_globex_backend-engineer
    jobfit costs
"""
import asyncio
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

import typer
from loguru import logger

from jobfit.agent.orchestrator import OrchestratorResult, run_orchestrator
from jobfit.agent.state import AgentState, PipelineContext
from jobfit.infra.file_parser import FileParseError, parse_file
from jobfit.infra.llm_client import LLMConfigurationError, create_llm_client
from jobfit.infra.scraper import ScrapeError, scrape_job_posting
from jobfit.storage.output_writer import RunMetadata, run_dir_name, write_run_outputs
from jobfit.storage.run_loader import (
    RunAnalysis,
    RunSortField,
    load_all_runs,
    load_run_analysis,
    sort_runs,
)
from jobfit.utils.config import settings, setup_logging

app = typer.Typer(help="Analyze job fit and generate tailored application material.")

_STATE_LABELS = {
    AgentState.PARSE_JD: "Parsing job description",
    AgentState.PARSE_RESUME: "Parsing resume",
    AgentState.ANALYZE_FIT: "Analyzing fit",
    AgentState.GENERATE_OUTPUTS: "Generating outputs",
    AgentState.VALIDATE: "Validating outputs",
    AgentState.DONE: "Done",
    AgentState.ERROR: "Failed",
}

_ROOT_OPTION = typer.Option(None, "--root", help="Directory holding past runs (default: OUTPUT_DIR)")


# =============================================================================
# TABLE HELPERS
# =============================================================================


def _pad(text: str, width: int) -> str:
    return text[:width] if len(text) >= width else text.ljust(width)


def _truncate(text: str, limit: int) -> str:
    return text if len(text) <= limit else text[: limit - 1] + "…"


def format_tokens(n: int) -> str:
    """1234 -> "1.2k", 2500000 -> "2.5M"."""
    if n >= 1_000_000:
        return f"{n / 1_000_000:.1f}M"
    if n >= 1_000:
        return f"{n / 1_000:.1f}k"
    return str(n)


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'s' if count != 1 else ''}"


# =============================================================================
# ANALYZE
# =============================================================================


def prompt_for_jd_text() -> str:
    typer.echo("Paste the full job description text, then press Ctrl-D:")
    return sys.stdin.read().strip()


def load_job_description(source: str) -> str:
    """Scrape a URL or parse a JD file.

    When scraping fails on an interactive terminal the user can paste the
    posting instead.
    """
    if not source.startswith(("http://", "https://")):
        return parse_file(source).text

    try:
        return scrape_job_posting(source).text
    except ScrapeError as e:
        typer.echo(f"⚠️ Scraping failed: {e}", err=True)
        if not sys.stdin.isatty():
            raise ScrapeError(
                "Scraping failed in non-interactive mode. "
                "Provide a JD text file path instead of a URL."
            ) from e
        jd_text = prompt_for_jd_text()
        if not jd_text:
            raise ScrapeError("Job description text is required after scraping fallback.") from e
        typer.echo(f"📋 Using pasted JD text ({len(jd_text)} chars)")
        return jd_text


def _print_progress(state: AgentState, ctx: PipelineContext) -> None:
    typer.echo(f"  → {_STATE_LABELS.get(state, state.value)}")


def _print_summary(result: OrchestratorResult, output_dir: Path) -> None:
    ctx = result.context
    typer.echo("")
    if ctx.parsed_jd is not None:
        typer.echo(f"Role:      {ctx.parsed_jd.role} @ {ctx.parsed_jd.company}")
    if ctx.fit_analysis is not None:
        typer.echo(f"Fit score: {ctx.fit_analysis.overall_score:g}/100")
    if ctx.validation is not None:
        status = "passed" if ctx.validation.passed else "issues remain"
        typer.echo(f"Quality:   {status} after {ctx.validation_attempts} attempt(s)")
        for issue in ctx.validation.issues:
            typer.echo(f"  - {issue}")
    usage = result.token_usage
    typer.echo(
        f"Tokens:    {usage.total_input_tokens} in / {usage.total_output_tokens} out "
        f"({usage.total_calls} calls, ~${usage.estimated_cost:.4f})"
    )
    typer.echo(f"Duration:  {result.total_duration_ms / 1000:.1f}s")
    for error in ctx.errors:
        typer.echo(f"ERROR: {error}", err=True)
    typer.echo(f"Outputs:   {output_dir}")


@app.command()
def analyze(
    source: str = typer.Argument(..., help="Job posting URL, or a JD file (.txt, .md, .pdf, .docx)"),
    resume: Path = typer.Option(..., "--resume", "-r", help="Resume file (.txt, .md, .pdf, .docx)"),
    mock: bool = typer.Option(False, "--mock", help="Use canned LLM responses (no API calls)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging on the console"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Directory for the run outputs"),
    provider: Optional[str] = typer.Option(None, "--provider", help="LLM provider: openrouter or local"),
    model: Optional[str] = typer.Option(None, "--model", help="Model override"),
):
    """Run the full pipeline for one job description and one resume."""
    log_file = setup_logging(verbose)
    logger.debug(f"Logging to {log_file}")

    try:
        jd_text = load_job_description(source)
        resume_text = parse_file(resume).text
        llm_client = create_llm_client(provider, model, mock_mode=True if mock else None)
    except (ScrapeError, FileParseError, LLMConfigurationError, OSError) as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(1)

    started_at = datetime.now(timezone.utc)
    result = asyncio.run(
        run_orchestrator(jd_text, resume_text, llm_client, on_state_change=_print_progress)
    )

    output_dir = output or settings.output_dir / run_dir_name(result.context.parsed_jd, started_at)
    write_run_outputs(
        output_dir,
        result.context,
        RunMetadata(
            timestamp=started_at.isoformat(),
            success=result.success,
            total_duration_ms=result.total_duration_ms,
            jd_source=source,
            resume_source=str(resume),
            token_usage=result.token_usage,
            log_file=log_file,
        ),
    )
    _print_summary(result, output_dir)

    if not result.success:
        raise typer.Exit(1)


# =============================================================================
# RUN HISTORY
# =============================================================================


@app.command("list")
def list_runs(
    sort: RunSortField = typer.Option(RunSortField.date, "--sort", help="Sort by date, score or cost"),
    root: Optional[Path] = _ROOT_OPTION,
):
    """List past runs with their fit score, cost and validation status."""
    root = root or settings.output_dir
    runs = sort_runs(load_all_runs(root), sort)
    if not runs:
        typer.echo(f"No analysis runs found in {root}")
        return

    typer.echo(
        _pad("Date", 12) + _pad("Company", 22) + _pad("Role", 25)
        + _pad("Score", 8) + _pad("Cost", 10) + "Valid"
    )
    typer.echo("─" * 83)
    for run in runs:
        valid = {True: "✓", False: "✗"}.get(run.validated, "-")
        typer.echo(
            _pad(run.date, 12)
            + _pad(_truncate(run.company, 20), 22)
            + _pad(_truncate(run.role, 23), 25)
            + _pad(f"{run.score:g}/100" if run.score is not None else "-", 8)
            + _pad(f"${run.cost:.4f}" if run.cost is not None else "-", 10)
            + valid
        )
    typer.echo(f"\n{_plural(len(runs), 'application')} tracked")


@app.command()
def compare(
    dirs: List[str] = typer.Argument(..., help="Run directories (names under the root, or paths)"),
    root: Optional[Path] = _ROOT_OPTION,
):
    """Compare fit scores, matches, gaps and advantages across runs."""
    if len(dirs) < 2:
        typer.echo("ERROR: Provide at least 2 run directories to compare.", err=True)
        raise typer.Exit(1)

    root = root or settings.output_dir
    analyses: List[RunAnalysis] = []
    for name in dirs:
        run_dir = Path(name) if Path(name).is_absolute() else root / name
        analysis = load_run_analysis(run_dir)
        if analysis is None:
            typer.echo(f"✗ No analysis.json found in {run_dir}", err=True)
            continue
        analyses.append(analysis)

    if len(analyses) < 2:
        typer.echo("ERROR: Need at least 2 valid analyses to compare.", err=True)
        raise typer.Exit(1)

    analyses.sort(key=lambda a: a.score, reverse=True)
    col = 30

    def row(label: str, values: List[str]) -> str:
        return _pad(label, 18) + "".join(_pad(v, col) for v in values)

    typer.echo(row("", [_truncate(a.company, col - 2) for a in analyses]))
    typer.echo(row("", [_truncate(a.role, col - 2) for a in analyses]))
    typer.echo("─" * (18 + col * len(analyses)))
    typer.echo(row("Fit Score", [f"{a.score:g}/100" for a in analyses]))
    typer.echo(row("Strong Matches", [str(a.strong_matches) for a in analyses]))
    typer.echo(row("Gaps", [str(a.gaps) for a in analyses]))
    typer.echo(row("Advantages", [str(len(a.advantages)) for a in analyses]))
    typer.echo("─" * (18 + col * len(analyses)))

    best = analyses[0]
    typer.echo(f"\n🏆 Best fit: {best.company}, {best.role} ({best.score:g}/100)")


@app.command()
def costs(root: Optional[Path] = _ROOT_OPTION):
    """Token usage and estimated cost per run, with totals."""
    root = root or settings.output_dir
    runs = load_all_runs(root)
    if not runs:
        typer.echo(f"No analysis runs found in {root}")
        return

    typer.echo(
        _pad("Date", 12) + _pad("Company", 22) + _pad("Input", 10)
        + _pad("Output", 10) + _pad("Total", 10) + "Cost"
    )
    typer.echo("─" * 74)

    total_in = total_out = 0
    total_cost = 0.0
    for run in runs:
        tokens_in = run.input_tokens or 0
        tokens_out = run.output_tokens or 0
        cost = run.cost or 0.0
        total_in += tokens_in
        total_out += tokens_out
        total_cost += cost
        typer.echo(
            _pad(run.date, 12)
            + _pad(_truncate(run.company, 20), 22)
            + _pad(format_tokens(tokens_in), 10)
            + _pad(format_tokens(tokens_out), 10)
            + _pad(format_tokens(tokens_in + tokens_out), 10)
            + f"${cost:.4f}"
        )

    typer.echo("─" * 74)
    typer.echo(
        _pad("TOTAL", 34)
        + _pad(format_tokens(total_in), 10)
        + _pad(format_tokens(total_out), 10)
        + _pad(format_tokens(total_in + total_out), 10)
        + f"${total_cost:.4f}"
    )
    typer.echo(f"\n{_plural(len(runs), 'run')}")


@app.callback()
def main():
    """JobFit: job description + resume in, fit analysis and tailored material out."""


if __name__ == "__main__":
    app()
