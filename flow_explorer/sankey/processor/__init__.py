"""Graph building, layout and path tracing."""

from .graph_builder import GraphBuilder, build_flow_graph
from .column_layout import ColumnLayoutEngine, LayoutSettings, compute_layout, parse_node_name
from .link_solver import CircularLinkSolver, LinkSolver, SolvedLink
from .path_tracer import PathTracer, select_key, clear_selection

__all__ = [
    "GraphBuilder",
    "build_flow_graph",
    "ColumnLayoutEngine",
    "LayoutSettings",
    "compute_layout",
    "parse_node_name",
    "CircularLinkSolver",
    "LinkSolver",
    "SolvedLink",
    "PathTracer",
    "select_key",
    "clear_selection",
]
