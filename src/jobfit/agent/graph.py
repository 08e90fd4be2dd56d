"""Agent graph assembly and the execution loop.

Current topology:
    [PARSE_JD] -> [PARSE_RESUME] -> [ANALYZE_FIT] -> [GENERATE_OUTPUTS] -> [VALIDATE] -> [DONE]
                                                            ^                   |
                                                            +---- retry --------+

Any handler exception moves the run to [ERROR]. Each handler decides its own
successor; the runner only checks that a handler exists for the state it is
asked to run.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Awaitable, Callable, FrozenSet, Mapping, Optional

from loguru import logger

from jobfit.agent.nodes import (
    AnalyzeFitNode,
    GenerateOutputsNode,
    ParseJDNode,
    ParseResumeNode,
    ValidateNode,
)
from jobfit.agent.state import (
    TERMINAL_STATES,
    AgentState,
    PipelineContext,
    transition_to,
)
from jobfit.infra.llm_client import LLMClient


NodeHandler = Callable[[PipelineContext], Awaitable[AgentState]]
StateChangeCallback = Callable[[AgentState, PipelineContext], None]


class GraphConfigurationError(Exception):
    """The graph cannot run a requested state (programming error, never retried)."""
    pass


@dataclass(frozen=True)
class AgentGraph:
    """Immutable map of state -> handler plus the terminal state set."""

    nodes: Mapping[AgentState, NodeHandler]
    terminal_states: FrozenSet[AgentState] = field(default=TERMINAL_STATES)

    def __post_init__(self) -> None:
        # Freeze a private copy so later changes to the caller's dict are not seen
        object.__setattr__(self, "nodes", MappingProxyType(dict(self.nodes)))
        object.__setattr__(self, "terminal_states", frozenset(self.terminal_states))

    def handler_for(self, state: AgentState) -> NodeHandler:
        handler = self.nodes.get(state)
        if handler is None:
            raise GraphConfigurationError(f"No handler registered for state: {state.value}")
        return handler


def build_agent_graph(llm_client: LLMClient) -> AgentGraph:
    """Build the five-node pipeline graph backed by one LLM client."""
    return AgentGraph(
        nodes={
            AgentState.PARSE_JD: ParseJDNode(llm_client),
            AgentState.PARSE_RESUME: ParseResumeNode(llm_client),
            AgentState.ANALYZE_FIT: AnalyzeFitNode(llm_client),
            AgentState.GENERATE_OUTPUTS: GenerateOutputsNode(llm_client),
            AgentState.VALIDATE: ValidateNode(),
        },
        terminal_states=TERMINAL_STATES,
    )


async def run_graph(
    graph: AgentGraph,
    ctx: PipelineContext,
    start_state: AgentState,
    on_state_change: Optional[StateChangeCallback] = None,
) -> None:
    """Drive ``ctx`` from ``start_state`` until a terminal state is reached.

    The context is mutated in place; inspect ``ctx.current_state`` afterwards
    (DONE or ERROR). ``on_state_change`` fires synchronously once per visited
    state, terminal state included.

    Raises:
        GraphConfigurationError: A non-terminal state has no handler. Raised
            before the context is touched for that state.
    """
    current_state = start_state

    while current_state not in graph.terminal_states:
        handler = graph.handler_for(current_state)

        transition_to(ctx, current_state)
        if on_state_change is not None:
            on_state_change(current_state, ctx)

        try:
            logger.debug(f"Executing handler for {current_state.value}")
            next_state = AgentState(await handler(ctx))
            logger.debug(f"Handler returned next state: {next_state.value}")
            current_state = next_state
        except Exception as e:
            message = str(e) or type(e).__name__
            logger.error(f"Error in state {current_state.value}: {message}")
            ctx.errors.append(f"{current_state.value}: {message}")
            current_state = AgentState.ERROR

    transition_to(ctx, current_state)
    if on_state_change is not None:
        on_state_change(current_state, ctx)
