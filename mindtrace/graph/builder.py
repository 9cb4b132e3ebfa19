"""
Thought Graph Builder.

Turns the flat, numbered thoughts of a reasoning sequence into a directed
graph with three disjoint edge kinds:

- sequential: previous thought (by number) -> plain continuation
- branch: ``branch_from_thought_id`` -> current thought
- revision: ``revises_thought_id`` -> current thought

References are resolved once into node ids; a reference that is dangling
or does not point strictly backwards is dropped with a warning.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Mapping, Optional

import networkx as nx

from mindtrace.core.models.thought import (
    Thought,
    ThinkingSequence,
    ThoughtId,
    ThoughtType,
    coerce_thoughts,
)
from mindtrace.utils.logging import get_logger
from mindtrace.utils.text import truncate

logger = get_logger("graph.builder")


# ============================================================================
# Presentation tables
# ============================================================================


class EdgeKind(str, Enum):
    """Kind of link between two thoughts."""
    SEQUENTIAL = "sequential"
    BRANCH = "branch"
    REVISION = "revision"


@dataclass(frozen=True)
class EdgeStyle:
    """How the renderer draws an edge kind."""

    stroke: str
    stroke_width: int = 1
    dash: Optional[str] = None  # SVG dasharray, None for solid
    label: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "stroke": self.stroke,
            "stroke_width": self.stroke_width,
            "dash": self.dash,
            "label": self.label,
        }


EDGE_STYLES: dict[EdgeKind, EdgeStyle] = {
    EdgeKind.SEQUENTIAL: EdgeStyle(stroke="#666666"),
    EdgeKind.BRANCH: EdgeStyle(stroke="#FF9800", stroke_width=2, label="Branch"),
    EdgeKind.REVISION: EdgeStyle(stroke="#9C27B0", stroke_width=2, dash="5,5", label="Revision"),
}


@dataclass(frozen=True)
class ThoughtTypeStyle:
    color: str
    icon: str
    label: str


DEFAULT_THOUGHT_STYLE = ThoughtTypeStyle(color="#757575", icon="💭", label="Thought")

THOUGHT_TYPE_STYLES: dict[ThoughtType, ThoughtTypeStyle] = {
    ThoughtType.ANALYSIS: ThoughtTypeStyle(color="#2196F3", icon="🔍", label="Analysis"),
    ThoughtType.HYPOTHESIS: ThoughtTypeStyle(color="#FF9800", icon="💡", label="Hypothesis"),
    ThoughtType.DECISION: ThoughtTypeStyle(color="#4CAF50", icon="⚖️", label="Decision"),
    ThoughtType.ACTION: ThoughtTypeStyle(color="#F44336", icon="⚡", label="Action"),
    ThoughtType.REFLECTION: ThoughtTypeStyle(color="#9C27B0", icon="🤔", label="Reflection"),
}


def style_for_thought_type(thought_type: ThoughtType) -> ThoughtTypeStyle:
    return THOUGHT_TYPE_STYLES.get(thought_type, DEFAULT_THOUGHT_STYLE)


# ============================================================================
# Graph records
# ============================================================================


@dataclass(frozen=True)
class ThoughtNode:
    """A positioned-to-be node; ``index`` is its rank in thought order."""

    id: str
    index: int
    thought_number: int
    thought_type: ThoughtType
    label: str
    content: str
    confidence: Optional[float] = None
    is_revision: bool = False

    @property
    def style(self) -> ThoughtTypeStyle:
        return style_for_thought_type(self.thought_type)

    @classmethod
    def from_thought(cls, thought: Thought, index: int, label_length: int) -> "ThoughtNode":
        return cls(
            id=thought.key,
            index=index,
            thought_number=thought.thought_number,
            thought_type=thought.thought_type,
            label=truncate(thought.content, label_length),
            content=thought.content,
            confidence=thought.confidence,
            is_revision=thought.is_revision,
        )

    def to_dict(self) -> dict[str, Any]:
        style = self.style
        return {
            "id": self.id,
            "index": self.index,
            "thought_number": self.thought_number,
            "thought_type": self.thought_type.value,
            "type_label": style.label,
            "icon": style.icon,
            "color": style.color,
            "label": self.label,
            "confidence": self.confidence,
            "is_revision": self.is_revision,
        }


@dataclass(frozen=True)
class ThoughtEdge:
    """A directed link between two thought nodes."""

    source: str
    target: str
    kind: EdgeKind

    @property
    def id(self) -> str:
        if self.kind is EdgeKind.SEQUENTIAL:
            return f"e{self.source}-{self.target}"
        return f"{self.kind.value}-{self.source}-{self.target}"

    @property
    def style(self) -> EdgeStyle:
        return EDGE_STYLES[self.kind]

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "kind": self.kind.value,
            "style": self.style.to_dict(),
        }


@dataclass(frozen=True)
class ThoughtGraph:
    """Nodes in ascending thought order plus typed edges."""

    nodes: tuple[ThoughtNode, ...] = ()
    edges: tuple[ThoughtEdge, ...] = ()
    _index: dict[str, int] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "_index", {n.id: i for i, n in enumerate(self.nodes)})

    @property
    def is_empty(self) -> bool:
        return not self.nodes

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def edge_count(self) -> int:
        return len(self.edges)

    def node(self, node_id: str) -> ThoughtNode | None:
        idx = self._index.get(str(node_id))
        return None if idx is None else self.nodes[idx]

    def edges_of_kind(self, kind: EdgeKind) -> list[ThoughtEdge]:
        return [e for e in self.edges if e.kind is kind]

    def edges_touching(self, node_id: str) -> list[ThoughtEdge]:
        node_id = str(node_id)
        return [e for e in self.edges if node_id in (e.source, e.target)]

    # ========== Export ==========

    def to_networkx(self) -> nx.MultiDiGraph:
        """NetworkX view; a multigraph since branch and revision edges may
        join the same pair of thoughts."""
        graph = nx.MultiDiGraph()
        for node in self.nodes:
            graph.add_node(node.id, **node.to_dict())
        for edge in self.edges:
            graph.add_edge(
                edge.source,
                edge.target,
                key=edge.kind.value,
                id=edge.id,
                kind=edge.kind.value,
            )
        return graph

    def to_dict(self) -> dict[str, Any]:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
        }

    def to_cytoscape(self) -> dict[str, Any]:
        """Export in Cytoscape.js ``elements`` format."""
        elements = [{"data": n.to_dict(), "group": "nodes"} for n in self.nodes]
        elements.extend({"data": e.to_dict(), "group": "edges"} for e in self.edges)
        return {"elements": elements}


# ============================================================================
# Builder
# ============================================================================


def _sort_key(thought: Thought) -> tuple[int, str]:
    # Duplicate thought numbers are a data error; id keeps the order stable
    return (thought.thought_number, thought.key)


class ThoughtGraphBuilder:
    """Builds a ThoughtGraph from a sequence's thoughts.

    Usage:
        builder = ThoughtGraphBuilder()
        graph = builder.build(sequence.thoughts)
        for edge in graph.edges_of_kind(EdgeKind.BRANCH):
            ...
    """

    def __init__(self, label_length: int = 60):
        self.label_length = label_length

    def build(self, thoughts: Iterable[Thought | Mapping[str, Any]] | None) -> ThoughtGraph:
        """Build the graph. ``None`` or an empty list gives an empty graph."""
        ordered = sorted(coerce_thoughts(thoughts), key=_sort_key)
        if not ordered:
            return ThoughtGraph()

        nodes = tuple(
            ThoughtNode.from_thought(t, i, self.label_length) for i, t in enumerate(ordered)
        )
        by_key: dict[str, Thought] = {}
        for thought in ordered:
            by_key.setdefault(thought.key, thought)

        edges: list[ThoughtEdge] = []
        for i, thought in enumerate(ordered):
            if i > 0 and thought.branch_from_thought_id is None and not thought.is_revision:
                edges.append(ThoughtEdge(ordered[i - 1].key, thought.key, EdgeKind.SEQUENTIAL))

            if thought.branch_from_thought_id is not None:
                edge = self._resolve(by_key, thought, thought.branch_from_thought_id, EdgeKind.BRANCH)
                if edge is not None:
                    edges.append(edge)

            if thought.revises_thought_id is not None:
                edge = self._resolve(by_key, thought, thought.revises_thought_id, EdgeKind.REVISION)
                if edge is not None:
                    edges.append(edge)

        graph = ThoughtGraph(nodes=nodes, edges=tuple(edges))
        logger.debug(f"Built thought graph: {graph.node_count} nodes, {graph.edge_count} edges")
        return graph

    def build_sequence(self, sequence: ThinkingSequence) -> ThoughtGraph:
        return self.build(sequence.thoughts)

    def _resolve(
        self,
        by_key: dict[str, Thought],
        thought: Thought,
        ref: ThoughtId,
        kind: EdgeKind,
    ) -> ThoughtEdge | None:
        source = by_key.get(str(ref))
        if source is None:
            logger.warning(
                f"Dropping {kind.value} edge: thought {thought.id} references missing thought {ref}"
            )
            return None
        if source.thought_number >= thought.thought_number:
            logger.warning(
                f"Dropping {kind.value} edge: thought {thought.id} (#{thought.thought_number}) "
                f"references non-earlier thought {ref} (#{source.thought_number})"
            )
            return None
        return ThoughtEdge(source.key, thought.key, kind)


def build_thought_graph(
    thoughts: Iterable[Thought | Mapping[str, Any]] | None,
    label_length: int = 60,
) -> ThoughtGraph:
    """Convenience wrapper around ``ThoughtGraphBuilder.build``."""
    return ThoughtGraphBuilder(label_length=label_length).build(thoughts)
