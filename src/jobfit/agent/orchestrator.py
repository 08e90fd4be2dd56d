"""Orchestrator: one call runs a JD/resume pair from PARSE_JD to DONE or ERROR."""

import time
from dataclasses import dataclass
from typing import Optional

from loguru import logger

from jobfit.agent.graph import StateChangeCallback, build_agent_graph, run_graph
from jobfit.agent.state import AgentState, PipelineContext, create_pipeline_context
from jobfit.infra.llm_client import LLMClient, TokenUsageSummary


@dataclass
class OrchestratorResult:
    context: PipelineContext
    success: bool
    token_usage: TokenUsageSummary
    total_duration_ms: int


async def run_orchestrator(
    jd_text: str,
    resume_text: str,
    llm_client: LLMClient,
    on_state_change: Optional[StateChangeCallback] = None,
) -> OrchestratorResult:
    """Build a fresh context and graph, then run the graph to completion.

    ``success`` only means the run reached DONE. Validation can still have
    failed after the last retry; check ``result.context.validation``.
    Token usage is read from ``llm_client``, so pass a dedicated client per
    run when the totals should cover that run alone.
    """
    ctx = create_pipeline_context(jd_text, resume_text)
    graph = build_agent_graph(llm_client)

    logger.info(f"🤖 Orchestrator starting ({len(graph.nodes)} nodes)")
    await run_graph(graph, ctx, AgentState.PARSE_JD, on_state_change)

    total_duration_ms = int(time.time() * 1000 - ctx.start_time)
    token_usage = llm_client.get_usage_summary()
    success = ctx.current_state == AgentState.DONE

    if success:
        logger.info(
            f"✅ Orchestrator finished in {ctx.current_state.value} ({total_duration_ms}ms, "
            f"{token_usage.total_calls} LLM calls, ${token_usage.estimated_cost:.4f})"
        )
    else:
        logger.error(
            f"❌ Orchestrator finished in {ctx.current_state.value} ({total_duration_ms}ms): "
            f"{'; '.join(ctx.errors)}"
        )

    return OrchestratorResult(
        context=ctx,
        success=success,
        token_usage=token_usage,
        total_duration_ms=total_duration_ms,
    )
