"""Agent state definitions for the pipeline graph."""

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from jobfit.infra.llm_client import TokenUsage
from jobfit.infra.models import FitAnalysis, ParsedJD, ParsedResume


class AgentState(str, Enum):
    INTAKE = "INTAKE"
    PARSE_JD = "PARSE_JD"
    PARSE_RESUME = "PARSE_RESUME"
    ANALYZE_FIT = "ANALYZE_FIT"
    GENERATE_OUTPUTS = "GENERATE_OUTPUTS"
    VALIDATE = "VALIDATE"
    DONE = "DONE"
    ERROR = "ERROR"

    def __str__(self) -> str:
        return self.value


TERMINAL_STATES = frozenset({AgentState.DONE, AgentState.ERROR})


@dataclass
class GeneratedOutputs:
    """The three artifacts. Each is written only by its own generator."""

    cover_letter: Optional[str] = None
    tailored_bullets: Optional[str] = None
    interview_prep: Optional[str] = None


@dataclass
class ValidationResult:
    passed: bool
    cover_letter_valid: bool
    bullets_valid: bool
    interview_prep_valid: bool
    issues: List[str] = field(default_factory=list)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "passed": self.passed,
            "cover_letter_valid": self.cover_letter_valid,
            "bullets_valid": self.bullets_valid,
            "interview_prep_valid": self.interview_prep_valid,
            "issues": list(self.issues),
        }


@dataclass
class StateHistoryEntry:
    state: AgentState
    timestamp: float
    duration_ms: Optional[int] = None

    def as_dict(self) -> Dict[str, Any]:
        return {
            "state": self.state.value,
            "timestamp": self.timestamp,
            "duration_ms": self.duration_ms,
        }


def _now_ms() -> float:
    return time.time() * 1000


@dataclass
class PipelineContext:
    """Full state of one run, threaded through every node handler.

    The orchestrator creates and owns it. A handler mutates it only for the
    duration of its own call; the three generators inside GENERATE_OUTPUTS
    write disjoint ``outputs`` fields.
    """

    # Inputs
    jd_text: str
    resume_text: str

    # Parsed data, each set once by its own node
    parsed_jd: Optional[ParsedJD] = None
    parsed_resume: Optional[ParsedResume] = None
    fit_analysis: Optional[FitAnalysis] = None

    outputs: GeneratedOutputs = field(default_factory=GeneratedOutputs)

    validation: Optional[ValidationResult] = None
    validation_attempts: int = 0

    current_state: AgentState = AgentState.INTAKE
    state_history: List[StateHistoryEntry] = field(default_factory=list)

    errors: List[str] = field(default_factory=list)
    start_time: float = field(default_factory=_now_ms)
    token_usage: TokenUsage = field(default_factory=TokenUsage)


def create_pipeline_context(jd_text: str, resume_text: str) -> PipelineContext:
    """New context in INTAKE with a single INTAKE history entry."""
    ctx = PipelineContext(jd_text=jd_text, resume_text=resume_text)
    ctx.state_history.append(StateHistoryEntry(state=AgentState.INTAKE, timestamp=ctx.start_time))
    return ctx


def transition_to(ctx: PipelineContext, next_state: AgentState) -> None:
    """Close the previous history entry's duration and record ``next_state``."""
    now = _now_ms()
    if ctx.state_history:
        last_entry = ctx.state_history[-1]
        if last_entry.duration_ms is None:
            last_entry.duration_ms = int(now - last_entry.timestamp)

    ctx.state_history.append(StateHistoryEntry(state=next_state, timestamp=now))
    ctx.current_state = next_state


def add_token_usage(ctx: PipelineContext, usage: TokenUsage) -> None:
    ctx.token_usage.input_tokens += usage.input_tokens
    ctx.token_usage.output_tokens += usage.output_tokens
