"""Graph node handlers, one per non-terminal state."""

from jobfit.agent.nodes.analyzer import AnalyzeFitNode
from jobfit.agent.nodes.generator import GenerateOutputsNode
from jobfit.agent.nodes.parser import ParseJDNode, ParseResumeNode
from jobfit.agent.nodes.validate import ValidateNode

__all__ = [
    "ParseJDNode",
    "ParseResumeNode",
    "AnalyzeFitNode",
    "GenerateOutputsNode",
    "ValidateNode",
]
