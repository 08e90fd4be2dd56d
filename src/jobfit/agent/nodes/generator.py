"""Generator node: produces the cover letter, resume bullets and interview prep.

The three generators are independent, so they run concurrently. On a retry
pass only the artifacts the last validation rejected are regenerated; passing
artifacts are kept as they are.
"""

import asyncio
import dataclasses
from dataclasses import dataclass
from typing import Awaitable, Callable, List, Optional, Sequence, Tuple, TypeVar

from loguru import logger

from jobfit.agent.nodes.base import BaseNode
from jobfit.agent.nodes.validate import MAX_VALIDATION_ATTEMPTS
from jobfit.agent.prompts import (
    BULLETS_SYSTEM,
    COVER_LETTER_SYSTEM,
    INTERVIEW_PREP_SYSTEM,
    build_bullets_prompt,
    build_cover_letter_prompt,
    build_interview_prep_prompt,
)
from jobfit.agent.state import AgentState, PipelineContext, ValidationResult
from jobfit.infra.llm_client import LLMCallResult
from jobfit.infra.mock_data import MOCK_BULLETS, MOCK_COVER_LETTER, MOCK_INTERVIEW_PREP
from jobfit.infra.models import (
    CoverLetterDraft,
    InterviewPrepGuide,
    ParsedJD,
    TailoredBullets,
)


# ---------------------------------------------------------------------------
# Markdown rendering
# ---------------------------------------------------------------------------

def format_bullets(payload: TailoredBullets) -> str:
    """Render bullets as markdown list items, one "- " line per bullet."""
    return "\n\n".join(
        f"- **{b.bullet}**\n  _Targets: {b.target_requirement} | Based on: {b.original_experience}_"
        for b in payload.bullets
    )


def format_interview_prep(guide: InterviewPrepGuide, parsed_jd: ParsedJD) -> str:
    lines: List[str] = [
        "# Interview Prep Guide",
        f"## {parsed_jd.role} at {parsed_jd.company}",
        "",
        "## Technical Questions",
        "",
    ]
    for q in guide.technical_questions:
        lines.append(f"### Q: {q.question}")
        lines.append(f"_Why they ask this: {q.why}_")
        lines.append("")
        lines.append("**Talking Points:**")
        lines.extend(f"- {point}" for point in q.talking_points)
        lines.append("")

    lines.extend(["## Behavioral Questions", ""])
    for q in guide.behavioral_questions:
        lines.append(f"### Q: {q.question}")
        lines.append(f"_Why they ask this: {q.why}_")
        lines.append("")
        lines.append(f"**Suggested Story:** {q.suggested_story}")
        lines.append("")

    lines.extend(["## Questions to Ask the Interviewer", ""])
    for q in guide.questions_to_ask:
        lines.append(f"- **{q.question}**")
        lines.append(f"  _Purpose: {q.purpose}_")
        lines.append("")

    return "\n".join(lines).rstrip() + "\n"


# ---------------------------------------------------------------------------
# Task planning
# ---------------------------------------------------------------------------

Generator = Callable[[PipelineContext, List[str]], Awaitable[LLMCallResult[str]]]
T = TypeVar("T")


@dataclass(frozen=True)
class GenerationTask:
    """One artifact: where it is stored and how it is judged."""

    output_field: str
    valid_flag: str
    issue_prefixes: Tuple[str, ...]


COVER_LETTER_TASK = GenerationTask("cover_letter", "cover_letter_valid", ("Cover letter",))
BULLETS_TASK = GenerationTask(
    "tailored_bullets", "bullets_valid", ("Resume bullets", "Too few resume bullets")
)
INTERVIEW_PREP_TASK = GenerationTask("interview_prep", "interview_prep_valid", ("Interview prep",))


def needs_generation(task: GenerationTask, validation: Optional[ValidationResult]) -> bool:
    """True on the first pass, or when the last validation rejected this artifact."""
    return validation is None or not getattr(validation, task.valid_flag)


def issues_for(task: GenerationTask, validation: Optional[ValidationResult]) -> List[str]:
    if validation is None:
        return []
    return [issue for issue in validation.issues if issue.startswith(task.issue_prefixes)]


async def run_all_or_cancel(coros: Sequence[Awaitable[T]]) -> List[T]:
    """Await ``coros`` concurrently; on the first failure cancel the rest.

    The remaining tasks are cancelled and drained before the first error is
    re-raised, so no generator keeps calling the model after the node fails.
    """
    tasks = [asyncio.ensure_future(coro) for coro in coros]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException as first_error:
        for task in tasks:
            task.cancel()
        outcomes = await asyncio.gather(*tasks, return_exceptions=True)
        for outcome in outcomes:
            if isinstance(outcome, Exception) and outcome is not first_error:
                logger.debug(f"Generator failed alongside the first error: {outcome}")
        raise


class GenerateOutputsNode(BaseNode):
    """GENERATE_OUTPUTS -> VALIDATE."""

    def _generators(self) -> List[Tuple[GenerationTask, Generator]]:
        return [
            (COVER_LETTER_TASK, self._generate_cover_letter),
            (BULLETS_TASK, self._generate_bullets),
            (INTERVIEW_PREP_TASK, self._generate_interview_prep),
        ]

    async def _generate_cover_letter(
        self, ctx: PipelineContext, feedback: List[str]
    ) -> LLMCallResult[str]:
        result = await self.llm_client.structured(
            build_cover_letter_prompt(ctx.parsed_jd, ctx.parsed_resume, ctx.fit_analysis, feedback),
            CoverLetterDraft,
            system_prompt=COVER_LETTER_SYSTEM,
            fallback=MOCK_COVER_LETTER,
            context="cover_letter",
        )
        letter = result.data.cover_letter
        logger.info(f"Cover letter generated ({len(letter.split())} words, {result.duration_ms}ms)")
        return dataclasses.replace(result, data=letter)

    async def _generate_bullets(
        self, ctx: PipelineContext, feedback: List[str]
    ) -> LLMCallResult[str]:
        result = await self.llm_client.structured(
            build_bullets_prompt(ctx.parsed_jd, ctx.parsed_resume, ctx.fit_analysis, feedback),
            TailoredBullets,
            system_prompt=BULLETS_SYSTEM,
            fallback=MOCK_BULLETS,
            context="resume_bullets",
        )
        logger.info(f"Generated {len(result.data.bullets)} tailored bullets ({result.duration_ms}ms)")
        return dataclasses.replace(result, data=format_bullets(result.data))

    async def _generate_interview_prep(
        self, ctx: PipelineContext, feedback: List[str]
    ) -> LLMCallResult[str]:
        result = await self.llm_client.structured(
            build_interview_prep_prompt(ctx.parsed_jd, ctx.parsed_resume, ctx.fit_analysis, feedback),
            InterviewPrepGuide,
            system_prompt=INTERVIEW_PREP_SYSTEM,
            fallback=MOCK_INTERVIEW_PREP,
            context="interview_prep",
        )
        guide = result.data
        logger.info(
            f"Interview prep: {len(guide.technical_questions)} technical, "
            f"{len(guide.behavioral_questions)} behavioral, "
            f"{len(guide.questions_to_ask)} to-ask ({result.duration_ms}ms)"
        )
        return dataclasses.replace(result, data=format_interview_prep(guide, ctx.parsed_jd))

    async def __call__(self, ctx: PipelineContext) -> AgentState:
        """Run every needed generator concurrently and store the results.

        Raises whatever the first failing generator raised; in that case no
        output from this pass is stored.
        """
        if ctx.parsed_jd is None or ctx.parsed_resume is None or ctx.fit_analysis is None:
            raise ValueError("Output generation requires parsed inputs and a fit analysis")

        ctx.validation_attempts += 1
        if ctx.validation_attempts > 1:
            logger.info(
                f"Re-generating outputs (attempt {ctx.validation_attempts}/{MAX_VALIDATION_ATTEMPTS})"
            )

        scheduled = []
        for task, generate in self._generators():
            if needs_generation(task, ctx.validation):
                scheduled.append((task, generate))
            else:
                logger.debug(f"Keeping validated {task.output_field}")

        results = await run_all_or_cancel(
            [generate(ctx, issues_for(task, ctx.validation)) for task, generate in scheduled]
        )

        for (task, _), result in zip(scheduled, results):
            setattr(ctx.outputs, task.output_field, result.data)
            self._record(ctx, result)

        return AgentState.VALIDATE
