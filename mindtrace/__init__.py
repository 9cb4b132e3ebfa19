"""Mindtrace - reasoning-graph and project timeline engine."""

from mindtrace.graph import (
    EdgeKind,
    ThoughtGraph,
    build_thought_graph,
    compute_grid_layout,
)
from mindtrace.timeline import (
    aggregate_activities,
    apply_timeline_filters,
    format_relative_time,
)

__version__ = "0.1.0"

__all__ = [
    "EdgeKind",
    "ThoughtGraph",
    "build_thought_graph",
    "compute_grid_layout",
    "aggregate_activities",
    "apply_timeline_filters",
    "format_relative_time",
]
