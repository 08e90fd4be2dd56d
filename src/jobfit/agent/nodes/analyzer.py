"""Analyzer node: scores the candidate against the parsed job description."""

from loguru import logger

from jobfit.agent.nodes.base import BaseNode
from jobfit.agent.prompts import FIT_ANALYZER_SYSTEM, build_fit_analysis_prompt
from jobfit.agent.state import AgentState, PipelineContext
from jobfit.infra.mock_data import MOCK_FIT_ANALYSIS
from jobfit.infra.models import FitAnalysis


class AnalyzeFitNode(BaseNode):
    """ANALYZE_FIT -> GENERATE_OUTPUTS. Requires both parsed inputs."""

    async def __call__(self, ctx: PipelineContext) -> AgentState:
        if ctx.parsed_jd is None or ctx.parsed_resume is None:
            raise ValueError("Fit analysis requires a parsed JD and a parsed resume")

        run_context = self._run_context(ctx)
        logger.info(f"Analyzing fit [{run_context}]...")

        result = await self.llm_client.structured(
            build_fit_analysis_prompt(ctx.parsed_jd, ctx.parsed_resume),
            FitAnalysis,
            system_prompt=FIT_ANALYZER_SYSTEM,
            fallback=MOCK_FIT_ANALYSIS,
            context=run_context,
        )
        ctx.fit_analysis = result.data
        self._record(ctx, result)

        fit = result.data
        logger.info(
            f"FIT [{run_context}]: score={fit.overall_score}/100, "
            f"strong={len(fit.strong_matches)}, gaps={len(fit.gaps)}, "
            f"reframes={len(fit.reframing_suggestions)}"
        )
        if fit.deal_breakers:
            logger.warning(f"{len(fit.deal_breakers)} potential deal breakers [{run_context}]")
        return AgentState.GENERATE_OUTPUTS
