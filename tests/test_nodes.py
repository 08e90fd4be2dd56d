"""Tests for the node handlers, driven by the mock-mode LLM client."""

import asyncio
from typing import List
from unittest.mock import AsyncMock

import pytest

from jobfit.agent.nodes import (
    AnalyzeFitNode,
    GenerateOutputsNode,
    ParseJDNode,
    ParseResumeNode,
    ValidateNode,
)
from jobfit.agent.nodes.generator import format_bullets
from jobfit.agent.nodes.validate import MAX_VALIDATION_ATTEMPTS
from jobfit.agent.state import (
    AgentState,
    GeneratedOutputs,
    PipelineContext,
    ValidationResult,
    create_pipeline_context,
)
from jobfit.infra.llm_client import LLMClient
from jobfit.infra.models import (
    CoverLetterDraft,
    InterviewPrepGuide,
    TailoredBullet,
    TailoredBullets,
)


def _spy(client: LLMClient) -> AsyncMock:
    """Wrap ``client.structured`` so calls are recorded but still executed."""
    spy = AsyncMock(wraps=client.structured)
    client.structured = spy
    return spy


def _schemas_called(spy: AsyncMock) -> List[type]:
    return [call.args[1] for call in spy.await_args_list]


class TestParserNodes:
    @pytest.mark.asyncio
    async def test_parse_jd_populates_context(self, mock_llm_client: LLMClient) -> None:
        ctx = create_pipeline_context("Staff engineer at Acme", "resume")

        next_state = await ParseJDNode(mock_llm_client)(ctx)

        assert next_state == AgentState.PARSE_RESUME
        assert ctx.parsed_jd is not None
        assert ctx.parsed_jd.company == "Acme Cloud Inc."

    @pytest.mark.asyncio
    async def test_parse_jd_rejects_blank_text(self, mock_llm_client: LLMClient) -> None:
        ctx = create_pipeline_context("   ", "resume")

        with pytest.raises(ValueError, match="Job description text is empty"):
            await ParseJDNode(mock_llm_client)(ctx)

    @pytest.mark.asyncio
    async def test_parse_resume_populates_context(self, mock_llm_client: LLMClient) -> None:
        ctx = create_pipeline_context("jd", "Seven years of backend work")

        next_state = await ParseResumeNode(mock_llm_client)(ctx)

        assert next_state == AgentState.ANALYZE_FIT
        assert ctx.parsed_resume.years_of_experience == 7.5


class TestAnalyzeFitNode:
    @pytest.mark.asyncio
    async def test_requires_parsed_inputs(self, mock_llm_client: LLMClient) -> None:
        ctx = create_pipeline_context("jd", "resume")

        with pytest.raises(ValueError, match="requires a parsed JD"):
            await AnalyzeFitNode(mock_llm_client)(ctx)

    @pytest.mark.asyncio
    async def test_sets_fit_analysis(
        self, analyzed_context: PipelineContext, mock_llm_client: LLMClient
    ) -> None:
        analyzed_context.fit_analysis = None

        next_state = await AnalyzeFitNode(mock_llm_client)(analyzed_context)

        assert next_state == AgentState.GENERATE_OUTPUTS
        assert analyzed_context.fit_analysis.overall_score == 68


class TestGenerateOutputsNode:
    """Fan-out generation with partial reuse on retry."""

    @pytest.mark.asyncio
    async def test_first_pass_generates_all_three(
        self, analyzed_context: PipelineContext, mock_llm_client: LLMClient
    ) -> None:
        spy = _spy(mock_llm_client)

        next_state = await GenerateOutputsNode(mock_llm_client)(analyzed_context)

        assert next_state == AgentState.VALIDATE
        assert analyzed_context.validation_attempts == 1
        assert set(_schemas_called(spy)) == {CoverLetterDraft, TailoredBullets, InterviewPrepGuide}
        outputs = analyzed_context.outputs
        assert "Acme Cloud Inc." in outputs.cover_letter
        assert outputs.tailored_bullets.startswith("- **")
        assert outputs.interview_prep.startswith("# Interview Prep Guide")

    @pytest.mark.asyncio
    async def test_retry_regenerates_only_invalid_artifacts(
        self, analyzed_context: PipelineContext, mock_llm_client: LLMClient
    ) -> None:
        analyzed_context.outputs = GeneratedOutputs(
            cover_letter="too short",
            tailored_bullets="kept bullets",
            interview_prep="kept prep",
        )
        analyzed_context.validation = ValidationResult(
            passed=False,
            cover_letter_valid=False,
            bullets_valid=True,
            interview_prep_valid=True,
            issues=["Cover letter too short: 2 words (min 150)"],
        )
        analyzed_context.validation_attempts = 1
        spy = _spy(mock_llm_client)

        await GenerateOutputsNode(mock_llm_client)(analyzed_context)

        assert _schemas_called(spy) == [CoverLetterDraft]
        assert analyzed_context.validation_attempts == 2
        assert analyzed_context.outputs.cover_letter != "too short"
        assert analyzed_context.outputs.tailored_bullets == "kept bullets"
        assert analyzed_context.outputs.interview_prep == "kept prep"

    @pytest.mark.asyncio
    async def test_retry_prompt_includes_artifact_issues(
        self, analyzed_context: PipelineContext, mock_llm_client: LLMClient
    ) -> None:
        analyzed_context.validation = ValidationResult(
            passed=False,
            cover_letter_valid=True,
            bullets_valid=False,
            interview_prep_valid=True,
            issues=["Too few resume bullets: 2 (min 4)"],
        )
        spy = _spy(mock_llm_client)

        await GenerateOutputsNode(mock_llm_client)(analyzed_context)

        prompt = spy.await_args_list[0].args[0]
        assert "Too few resume bullets: 2 (min 4)" in prompt

    @pytest.mark.asyncio
    async def test_generators_run_concurrently(
        self, analyzed_context: PipelineContext, mock_llm_client: LLMClient
    ) -> None:
        in_flight = 0
        peak = 0
        original = mock_llm_client.structured

        async def slow_structured(*args, **kwargs):
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.01)
            in_flight -= 1
            return await original(*args, **kwargs)

        mock_llm_client.structured = slow_structured

        await GenerateOutputsNode(mock_llm_client)(analyzed_context)

        assert peak == 3

    @pytest.mark.asyncio
    async def test_one_generator_failure_fails_the_node(
        self, analyzed_context: PipelineContext, mock_llm_client: LLMClient
    ) -> None:
        original = mock_llm_client.structured

        async def flaky(prompt, schema, **kwargs):
            if schema is TailoredBullets:
                raise RuntimeError("bullets exploded")
            return await original(prompt, schema, **kwargs)

        mock_llm_client.structured = flaky

        with pytest.raises(RuntimeError, match="bullets exploded"):
            await GenerateOutputsNode(mock_llm_client)(analyzed_context)

        assert analyzed_context.outputs.tailored_bullets is None

    @pytest.mark.asyncio
    async def test_failure_cancels_sibling_generators(
        self, analyzed_context: PipelineContext, mock_llm_client: LLMClient
    ) -> None:
        cancelled: List[str] = []

        async def structured(prompt, schema, **kwargs):
            if schema is CoverLetterDraft:
                raise RuntimeError("cover letter exploded")
            try:
                await asyncio.sleep(0.05)
            except asyncio.CancelledError:
                cancelled.append(schema.__name__)
                raise
            mock_llm_client.record_usage(10, 5)
            raise AssertionError("sibling generator should have been cancelled")

        mock_llm_client.structured = structured

        with pytest.raises(RuntimeError, match="cover letter exploded"):
            await GenerateOutputsNode(mock_llm_client)(analyzed_context)
        await asyncio.sleep(0.1)

        assert sorted(cancelled) == ["InterviewPrepGuide", "TailoredBullets"]
        assert mock_llm_client.get_usage_summary().total_calls == 0
        assert analyzed_context.outputs.cover_letter is None

    @pytest.mark.asyncio
    async def test_requires_fit_analysis(self, mock_llm_client: LLMClient) -> None:
        ctx = create_pipeline_context("jd", "resume")

        with pytest.raises(ValueError):
            await GenerateOutputsNode(mock_llm_client)(ctx)

        assert ctx.validation_attempts == 0


class TestValidateNode:
    @pytest.mark.asyncio
    async def test_passing_outputs_finish(
        self, analyzed_context: PipelineContext, good_outputs: GeneratedOutputs
    ) -> None:
        analyzed_context.outputs = good_outputs
        analyzed_context.validation_attempts = 1

        assert await ValidateNode()(analyzed_context) == AgentState.DONE
        assert analyzed_context.validation.passed is True

    @pytest.mark.asyncio
    async def test_failing_outputs_retry_while_attempts_remain(
        self, analyzed_context: PipelineContext
    ) -> None:
        analyzed_context.validation_attempts = 1

        assert await ValidateNode()(analyzed_context) == AgentState.GENERATE_OUTPUTS
        assert analyzed_context.validation.passed is False

    @pytest.mark.asyncio
    async def test_best_effort_done_after_last_attempt(
        self, analyzed_context: PipelineContext
    ) -> None:
        analyzed_context.validation_attempts = MAX_VALIDATION_ATTEMPTS

        assert await ValidateNode()(analyzed_context) == AgentState.DONE
        assert analyzed_context.validation.passed is False
        assert analyzed_context.validation.issues


def test_format_bullets_one_list_item_per_bullet() -> None:
    payload = TailoredBullets(
        bullets=[
            TailoredBullet(bullet="Did X", target_requirement="Req A", original_experience="Job 1"),
            TailoredBullet(bullet="Did Y", target_requirement="Req B", original_experience="Job 2"),
        ]
    )

    rendered = format_bullets(payload)

    assert [line for line in rendered.splitlines() if line.startswith("- ")] == [
        "- **Did X**",
        "- **Did Y**",
    ]
    assert "_Targets: Req A | Based on: Job 1_" in rendered
