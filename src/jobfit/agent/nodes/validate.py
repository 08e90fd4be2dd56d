"""Validate node: quality gate between generation and completion."""

from loguru import logger

from jobfit.agent.nodes.base import BaseNode
from jobfit.agent.state import AgentState, PipelineContext
from jobfit.agent.validator import validate_outputs

# Generation passes allowed before the run completes with whatever it has.
MAX_VALIDATION_ATTEMPTS = 2


class ValidateNode(BaseNode):
    """VALIDATE -> DONE, or back to GENERATE_OUTPUTS while attempts remain.

    Completion is best-effort: once the attempt budget is spent the run ends in
    DONE even if some artifacts still fail, with the issues kept on the context.
    """

    async def __call__(self, ctx: PipelineContext) -> AgentState:
        if ctx.parsed_jd is None:
            raise ValueError("Validation requires a parsed JD")

        result = validate_outputs(ctx.outputs, ctx.parsed_jd)
        ctx.validation = result

        if result.passed:
            logger.info(f"✅ Outputs accepted on attempt {ctx.validation_attempts}")
            return AgentState.DONE

        if ctx.validation_attempts < MAX_VALIDATION_ATTEMPTS:
            logger.warning(
                f"Validation failed with {len(result.issues)} issue(s), retrying "
                f"(attempt {ctx.validation_attempts}/{MAX_VALIDATION_ATTEMPTS})"
            )
            return AgentState.GENERATE_OUTPUTS

        logger.warning(
            f"Validation still failing after {ctx.validation_attempts} attempts, "
            f"completing with {len(result.issues)} unresolved issue(s)"
        )
        return AgentState.DONE
