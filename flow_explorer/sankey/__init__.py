"""Build, lay out and trace Sankey flow graphs."""

from .models import FlowGraph, ColumnLayout, SelectionState
from .processor import (
    GraphBuilder, build_flow_graph,
    ColumnLayoutEngine, compute_layout,
    PathTracer,
)

__all__ = [
    "FlowGraph",
    "ColumnLayout",
    "SelectionState",
    "GraphBuilder",
    "build_flow_graph",
    "ColumnLayoutEngine",
    "compute_layout",
    "PathTracer",
]
