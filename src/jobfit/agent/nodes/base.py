"""Base class for all agent nodes.

Provides shared infrastructure:
    - LLM client injection
    - _run_context(ctx): human-readable log label ("role @ company")
    - _record(ctx, result): fold a call's token usage into the run totals
"""

from abc import ABC, abstractmethod
from typing import Optional

from jobfit.agent.state import AgentState, PipelineContext, add_token_usage
from jobfit.infra.llm_client import LLMCallResult, LLMClient


class BaseNode(ABC):
    """Abstract base for graph node handlers.

    A node is called with the run's context, mutates it in place, and returns
    the next state. Exceptions propagate to the graph runner.
    """

    def __init__(self, llm_client: Optional[LLMClient] = None) -> None:
        self.llm_client = llm_client

    @abstractmethod
    async def __call__(self, ctx: PipelineContext) -> AgentState:
        """Execute this node and return the next state."""

    def _run_context(self, ctx: PipelineContext) -> str:
        """Return a short human-readable label for log messages."""
        if ctx.parsed_jd is None:
            return "unparsed JD"
        return f"{ctx.parsed_jd.role} @ {ctx.parsed_jd.company}"

    def _record(self, ctx: PipelineContext, result: LLMCallResult) -> None:
        add_token_usage(ctx, result.usage)
