"""
Reasoning graph: thought graph construction and grid layout.
"""

from mindtrace.graph.builder import (
    EdgeKind,
    ThoughtEdge,
    ThoughtGraph,
    ThoughtGraphBuilder,
    ThoughtNode,
    build_thought_graph,
)
from mindtrace.graph.layout import GraphLayout, GridLayoutEngine, compute_grid_layout
from mindtrace.graph.summary import SequenceSummary, summarize_sequences

__all__ = [
    "EdgeKind",
    "ThoughtEdge",
    "ThoughtGraph",
    "ThoughtGraphBuilder",
    "ThoughtNode",
    "build_thought_graph",
    "GraphLayout",
    "GridLayoutEngine",
    "compute_grid_layout",
    "SequenceSummary",
    "summarize_sequences",
]
