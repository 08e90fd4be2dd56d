"""Shared fixtures and configuration for the JobFit test suite."""

import os
from typing import List

import pytest

from jobfit.agent.nodes.generator import format_bullets, format_interview_prep
from jobfit.agent.state import GeneratedOutputs, PipelineContext, create_pipeline_context
from jobfit.infra.llm_client import LLMClient
from jobfit.infra.mock_data import (
    MOCK_BULLETS,
    MOCK_COVER_LETTER,
    MOCK_FIT_ANALYSIS,
    MOCK_INTERVIEW_PREP,
    MOCK_PARSED_JD,
    MOCK_PARSED_RESUME,
)
from jobfit.infra.models import (
    FitAnalysis,
    InterviewPrepGuide,
    ParsedJD,
    ParsedResume,
    TailoredBullets,
)

# --- Model parametrization (live tests only) ---

DEFAULT_TEST_MODELS: List[str] = ["anthropic/claude-sonnet-4.5"]


def _get_test_models() -> List[str]:
    """Read test models from TEST_MODELS env var or use defaults."""
    env = os.getenv("TEST_MODELS", "")
    if env.strip():
        return [m.strip() for m in env.split(",") if m.strip()]
    return DEFAULT_TEST_MODELS


# --- Markers ---


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "live: tests that call the real OpenRouter API")


# --- Fixtures ---


@pytest.fixture(autouse=True)
def no_backoff(monkeypatch: pytest.MonkeyPatch) -> None:
    """Skip retry sleeps so retry tests run instantly."""

    async def _no_sleep(base_delay: float, attempt: int) -> None:
        return None

    monkeypatch.setattr("jobfit.infra.llm_client._sleep_with_jitter", _no_sleep)


@pytest.fixture
def parsed_jd() -> ParsedJD:
    return ParsedJD.model_validate(MOCK_PARSED_JD)


@pytest.fixture
def parsed_resume() -> ParsedResume:
    return ParsedResume.model_validate(MOCK_PARSED_RESUME)


@pytest.fixture
def fit_analysis() -> FitAnalysis:
    return FitAnalysis.model_validate(MOCK_FIT_ANALYSIS)


@pytest.fixture
def good_outputs(parsed_jd: ParsedJD) -> GeneratedOutputs:
    """Artifacts that pass every quality check."""
    return GeneratedOutputs(
        cover_letter=MOCK_COVER_LETTER["cover_letter"],
        tailored_bullets=format_bullets(TailoredBullets.model_validate(MOCK_BULLETS)),
        interview_prep=format_interview_prep(
            InterviewPrepGuide.model_validate(MOCK_INTERVIEW_PREP), parsed_jd
        ),
    )


@pytest.fixture
def analyzed_context(
    parsed_jd: ParsedJD, parsed_resume: ParsedResume, fit_analysis: FitAnalysis
) -> PipelineContext:
    """Context with both inputs parsed and analyzed, ready for GENERATE_OUTPUTS."""
    ctx = create_pipeline_context("jd text", "resume text")
    ctx.parsed_jd = parsed_jd
    ctx.parsed_resume = parsed_resume
    ctx.fit_analysis = fit_analysis
    return ctx


@pytest.fixture
def mock_llm_client() -> LLMClient:
    return LLMClient(mock_mode=True)


@pytest.fixture(params=_get_test_models(), scope="session")
def live_llm_client(request: pytest.FixtureRequest) -> LLMClient:
    """Session-scoped real client parametrized by model.

    Skips if OPENROUTER_API_KEY is not set.
    """
    api_key = os.getenv("OPENROUTER_API_KEY", "")
    if not api_key:
        pytest.skip("OPENROUTER_API_KEY not set")
    return LLMClient(model=request.param, api_key=api_key, mock_mode=False)
