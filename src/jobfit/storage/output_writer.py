"""Persist a finished run to a directory.

Layout::

    <output_dir>/
        analysis.json          parsed JD, parsed resume, fit analysis (null when missing)
        fit-report.md          only when JD and fit analysis exist
        cover-letter.md        \\
        tailored-bullets.md     > only the artifacts that were produced
        interview-prep.md      /
        metadata.json          timing, sources, token usage, log file, history,
                               validation, errors
"""
import json
import re
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from loguru import logger

from jobfit.agent.state import PipelineContext
from jobfit.infra.llm_client import TokenUsageSummary
from jobfit.infra.models import ParsedJD
from jobfit.reporting.fit_report import generate_fit_report

_ARTIFACT_FILES = {
    "cover_letter": "cover-letter.md",
    "tailored_bullets": "tailored-bullets.md",
    "interview_prep": "interview-prep.md",
}


@dataclass
class RunMetadata:
    timestamp: str
    success: bool
    total_duration_ms: int
    jd_source: str
    resume_source: str
    token_usage: TokenUsageSummary = field(default_factory=TokenUsageSummary)
    log_file: Optional[str] = None


def _slug(value: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", value.lower()).strip("-") or "unknown"


def run_dir_name(parsed_jd: Optional[ParsedJD], when: datetime) -> str:
    """``<date>_<company>_<role>`` with company and role slugified."""
    company = _slug(parsed_jd.company) if parsed_jd else "unknown"
    role = _slug(parsed_jd.role) if parsed_jd else "unknown"
    return f"{when:%Y-%m-%d}_{company}_{role}"


def _dump(model: Optional[Any]) -> Optional[Dict[str, Any]]:
    return model.model_dump() if model is not None else None


def write_run_outputs(
    output_dir: Union[str, Path],
    ctx: PipelineContext,
    meta: RunMetadata,
) -> List[Path]:
    """Write every available output of ``ctx`` and return the paths written."""
    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)
    written: List[Path] = []

    def _write(name: str, content: str) -> None:
        path = out / name
        path.write_text(content, encoding="utf-8")
        written.append(path)

    _write(
        "analysis.json",
        json.dumps(
            {
                "parsed_jd": _dump(ctx.parsed_jd),
                "parsed_resume": _dump(ctx.parsed_resume),
                "fit_analysis": _dump(ctx.fit_analysis),
            },
            indent=2,
        ),
    )

    if ctx.parsed_jd is not None and ctx.fit_analysis is not None:
        _write("fit-report.md", generate_fit_report(ctx.parsed_jd, ctx.fit_analysis))

    for attr, filename in _ARTIFACT_FILES.items():
        content = getattr(ctx.outputs, attr)
        if content:
            _write(filename, content)

    _write(
        "metadata.json",
        json.dumps(
            {
                "timestamp": meta.timestamp,
                "success": meta.success,
                "total_duration_ms": meta.total_duration_ms,
                "jd_source": meta.jd_source,
                "resume_source": meta.resume_source,
                "token_usage": meta.token_usage.as_dict(),
                "log_file": meta.log_file,
                "validation_attempts": ctx.validation_attempts,
                "state_history": [entry.as_dict() for entry in ctx.state_history],
                "validation": ctx.validation.as_dict() if ctx.validation else None,
                "errors": list(ctx.errors),
            },
            indent=2,
        ),
    )

    logger.info(f"💾 Wrote {len(written)} files to {out}")
    return written
