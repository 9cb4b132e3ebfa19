"""
Deterministic grid layout for thought graphs.

Nodes are placed by their index in thought order, row-major across a
fixed number of columns. Edges become straight connectors between node
positions; there is no routing or collision avoidance. The same graph
and grid always give identical coordinates.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from mindtrace.app.config import LayoutConfig
from mindtrace.graph.builder import EdgeKind, EdgeStyle, ThoughtGraph
from mindtrace.utils.logging import get_logger

logger = get_logger("graph.layout")


@dataclass(frozen=True)
class NodePosition:
    node_id: str
    index: int
    row: int
    col: int
    x: int
    y: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "node_id": self.node_id,
            "row": self.row,
            "col": self.col,
            "x": self.x,
            "y": self.y,
        }


@dataclass(frozen=True)
class Connector:
    """Straight line between two node positions."""

    edge_id: str
    kind: EdgeKind
    source: str
    target: str
    start: tuple[int, int]
    end: tuple[int, int]
    style: EdgeStyle

    def to_dict(self) -> dict[str, Any]:
        return {
            "edge_id": self.edge_id,
            "kind": self.kind.value,
            "source": self.source,
            "target": self.target,
            "start": list(self.start),
            "end": list(self.end),
            "style": self.style.to_dict(),
        }


@dataclass(frozen=True)
class GraphLayout:
    """Coordinates for every node plus connectors and canvas size.

    An empty layout (no nodes) is the placeholder the renderer shows for
    a sequence without thoughts.
    """

    positions: tuple[NodePosition, ...]
    connectors: tuple[Connector, ...]
    columns_per_row: int
    cell_width: int
    cell_height: int
    total_rows: int
    width: int
    height: int

    @property
    def is_empty(self) -> bool:
        return not self.positions

    def position_of(self, node_id: str) -> NodePosition | None:
        node_id = str(node_id)
        for pos in self.positions:
            if pos.node_id == node_id:
                return pos
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "positions": [p.to_dict() for p in self.positions],
            "connectors": [c.to_dict() for c in self.connectors],
            "grid": {
                "columns_per_row": self.columns_per_row,
                "cell_width": self.cell_width,
                "cell_height": self.cell_height,
                "total_rows": self.total_rows,
            },
            "canvas": {"width": self.width, "height": self.height},
            "is_empty": self.is_empty,
        }


class GridLayoutEngine:
    """Assigns grid coordinates from a LayoutConfig.

    Usage:
        engine = GridLayoutEngine(LayoutConfig(columns_per_row=4))
        layout = engine.layout(graph)
        layout.position_of("12")
    """

    def __init__(self, config: LayoutConfig | None = None):
        self.config = config or LayoutConfig()

    def cell_for(self, index: int) -> tuple[int, int]:
        """(row, col) of the node at zero-based ``index``."""
        return divmod(index, self.config.columns_per_row)

    def layout(self, graph: ThoughtGraph | None) -> GraphLayout:
        cfg = self.config
        if graph is None or graph.is_empty:
            return GraphLayout(
                positions=(),
                connectors=(),
                columns_per_row=cfg.columns_per_row,
                cell_width=cfg.cell_width,
                cell_height=cfg.cell_height,
                total_rows=0,
                width=cfg.margin,
                height=cfg.margin,
            )

        positions: list[NodePosition] = []
        by_id: dict[str, NodePosition] = {}
        for index, node in enumerate(graph.nodes):
            row, col = self.cell_for(index)
            pos = NodePosition(
                node_id=node.id,
                index=index,
                row=row,
                col=col,
                x=col * cfg.cell_width,
                y=row * cfg.cell_height,
            )
            positions.append(pos)
            by_id[node.id] = pos

        connectors: list[Connector] = []
        for edge in graph.edges:
            src, dst = by_id.get(edge.source), by_id.get(edge.target)
            if src is None or dst is None:
                logger.warning(f"Skipping connector {edge.id}: endpoint not in graph")
                continue
            connectors.append(
                Connector(
                    edge_id=edge.id,
                    kind=edge.kind,
                    source=edge.source,
                    target=edge.target,
                    start=(src.x, src.y),
                    end=(dst.x, dst.y),
                    style=edge.style,
                )
            )

        n = len(positions)
        total_rows = math.ceil(n / cfg.columns_per_row)
        return GraphLayout(
            positions=tuple(positions),
            connectors=tuple(connectors),
            columns_per_row=cfg.columns_per_row,
            cell_width=cfg.cell_width,
            cell_height=cfg.cell_height,
            total_rows=total_rows,
            width=min(n, cfg.columns_per_row) * cfg.cell_width + cfg.margin,
            height=total_rows * cfg.cell_height + cfg.margin,
        )


def compute_grid_layout(graph: ThoughtGraph | None, config: LayoutConfig | None = None) -> GraphLayout:
    """Convenience wrapper around ``GridLayoutEngine.layout``."""
    return GridLayoutEngine(config).layout(graph)
