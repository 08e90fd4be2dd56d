"""Parser nodes: turn raw JD and resume text into structured data.

Public interface:
    ParseJDNode(BaseNode)     : PARSE_JD -> PARSE_RESUME
    ParseResumeNode(BaseNode) : PARSE_RESUME -> ANALYZE_FIT
"""

from loguru import logger

from jobfit.agent.nodes.base import BaseNode
from jobfit.agent.prompts import (
    JD_PARSER_SYSTEM,
    RESUME_PARSER_SYSTEM,
    build_jd_parser_prompt,
    build_resume_parser_prompt,
)
from jobfit.agent.state import AgentState, PipelineContext
from jobfit.infra.mock_data import MOCK_PARSED_JD, MOCK_PARSED_RESUME
from jobfit.infra.models import ParsedJD, ParsedResume


class ParseJDNode(BaseNode):
    """Extract a ParsedJD from the job description text."""

    async def __call__(self, ctx: PipelineContext) -> AgentState:
        logger.info("Parsing job description...")
        if not ctx.jd_text.strip():
            raise ValueError("Job description text is empty")

        result = await self.llm_client.structured(
            build_jd_parser_prompt(ctx.jd_text),
            ParsedJD,
            system_prompt=JD_PARSER_SYSTEM,
            fallback=MOCK_PARSED_JD,
            context="parse_jd",
        )
        ctx.parsed_jd = result.data
        self._record(ctx, result)

        jd = result.data
        logger.info(
            f"PARSED_JD [{jd.role} @ {jd.company}]: level={jd.level}, "
            f"required={len(jd.required_skills)}, preferred={len(jd.preferred_skills)}, "
            f"tokens={result.usage.input_tokens + result.usage.output_tokens}, {result.duration_ms}ms"
        )
        return AgentState.PARSE_RESUME


class ParseResumeNode(BaseNode):
    """Extract a ParsedResume from the resume text."""

    async def __call__(self, ctx: PipelineContext) -> AgentState:
        logger.info("Parsing resume...")
        if not ctx.resume_text.strip():
            raise ValueError("Resume text is empty")

        result = await self.llm_client.structured(
            build_resume_parser_prompt(ctx.resume_text),
            ParsedResume,
            system_prompt=RESUME_PARSER_SYSTEM,
            fallback=MOCK_PARSED_RESUME,
            context="parse_resume",
        )
        ctx.parsed_resume = result.data
        self._record(ctx, result)

        resume = result.data
        logger.info(
            f"PARSED_RESUME: yrs={resume.years_of_experience}, skills={len(resume.skills)}, "
            f"roles={len(resume.experiences)}, degrees={len(resume.education)}, "
            f"tokens={result.usage.input_tokens + result.usage.output_tokens}, {result.duration_ms}ms"
        )
        return AgentState.ANALYZE_FIT
