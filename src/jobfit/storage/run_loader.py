"""Read back runs saved by ``write_run_outputs``.

A run is any directory under the output root that holds ``metadata.json``.
Company and role come from ``analysis.json`` when it has a parsed JD,
otherwise from the ``<date>_<company>_<role>`` directory name.
"""
import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from loguru import logger


class RunSortField(str, Enum):
    date = "date"
    score = "score"
    cost = "cost"


@dataclass
class RunSummary:
    dir: str
    date: str
    company: str
    role: str
    score: Optional[float] = None
    validated: Optional[bool] = None
    cost: Optional[float] = None
    input_tokens: Optional[int] = None
    output_tokens: Optional[int] = None


@dataclass
class RunAnalysis:
    """The parts of one run's fit analysis shown side by side by ``compare``."""

    dir: str
    company: str
    role: str
    score: float
    strong_matches: int
    gaps: int
    advantages: List[str] = field(default_factory=list)


def name_from_dir(dir_name: str, part: str) -> str:
    """Recover company or role from a ``<date>_<company>_<role>`` directory name."""
    pieces = dir_name.split("_")
    if len(pieces) < 3:
        return "Unknown"
    if part == "company":
        return pieces[1].replace("-", " ")
    return " ".join(pieces[2:]).replace("-", " ")


def _read_json(path: Path) -> Optional[Dict[str, Any]]:
    if not path.exists():
        return None
    return json.loads(path.read_text(encoding="utf-8"))


def _summarize(run_dir: Path) -> RunSummary:
    meta = _read_json(run_dir / "metadata.json") or {}
    analysis = _read_json(run_dir / "analysis.json") or {}
    parsed_jd = analysis.get("parsed_jd") or {}
    fit = analysis.get("fit_analysis") or {}
    usage = meta.get("token_usage") or {}
    validation = meta.get("validation") or {}
    timestamp = meta.get("timestamp") or ""

    return RunSummary(
        dir=run_dir.name,
        date=timestamp.split("T")[0] if timestamp else run_dir.name[:10],
        company=parsed_jd.get("company") or name_from_dir(run_dir.name, "company"),
        role=parsed_jd.get("role") or name_from_dir(run_dir.name, "role"),
        score=fit.get("overall_score"),
        validated=validation.get("passed"),
        cost=usage.get("estimated_cost"),
        input_tokens=usage.get("total_input_tokens"),
        output_tokens=usage.get("total_output_tokens"),
    )


def load_all_runs(output_root: Union[str, Path]) -> List[RunSummary]:
    """Summaries of every run under ``output_root``, in directory-name order."""
    root = Path(output_root)
    if not root.is_dir():
        return []

    runs: List[RunSummary] = []
    for run_dir in sorted(p for p in root.iterdir() if p.is_dir()):
        if not (run_dir / "metadata.json").exists():
            continue
        try:
            runs.append(_summarize(run_dir))
        except (OSError, ValueError, AttributeError) as e:
            logger.warning(f"⚠️ Skipping unreadable run {run_dir.name}: {e}")

    logger.debug(f"Loaded {len(runs)} runs from {root}")
    return runs


def sort_runs(runs: List[RunSummary], by: RunSortField = RunSortField.date) -> List[RunSummary]:
    """Newest first for ``date``; highest first for ``score`` and ``cost``."""
    if by == RunSortField.score:
        return sorted(runs, key=lambda r: r.score or 0, reverse=True)
    if by == RunSortField.cost:
        return sorted(runs, key=lambda r: r.cost or 0, reverse=True)
    return sorted(runs, key=lambda r: r.date, reverse=True)


def load_run_analysis(run_dir: Union[str, Path]) -> Optional[RunAnalysis]:
    """Fit-analysis digest of one run, or None when it has no ``analysis.json``."""
    run_dir = Path(run_dir)
    data = _read_json(run_dir / "analysis.json")
    if data is None:
        return None

    parsed_jd = data.get("parsed_jd") or {}
    fit = data.get("fit_analysis") or {}
    return RunAnalysis(
        dir=run_dir.name,
        company=parsed_jd.get("company") or "Unknown",
        role=parsed_jd.get("role") or "Unknown",
        score=fit.get("overall_score") or 0,
        strong_matches=len(fit.get("strong_matches") or []),
        gaps=len(fit.get("gaps") or []),
        advantages=list(fit.get("competitive_advantages") or []),
    )
