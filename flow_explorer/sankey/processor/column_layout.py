"""
Deterministic column/row layout for flow graphs.

The column structure is encoded in node names: the leading run of letters
is the column prefix and the digit run right after it is the row order.
``A12`` goes to column ``A`` with suffix 12; ``B`` gets suffix 0. Columns
are ordered alphabetically by prefix, rows ascending by suffix (stable,
so equal suffixes keep graph node order).

Node rectangles are computed here; the link solver is only asked for link
endpoints and circular-link flags.
"""

import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from ..models.dataclasses import ColumnLayout, FlowGraph, Node, PositionedLink, PositionedNode
from .link_solver import CircularLinkSolver, LinkSolver

logger = logging.getLogger(__name__)

NODE_NAME_PATTERN = re.compile(r"^([A-Za-z]+)([0-9]+)?")


@dataclass(frozen=True)
class LayoutSettings:
    """Sizing rules for node rectangles."""
    min_node_width: float = 6
    max_node_width: float = 12
    width_divisor: float = 50       # node width = width / (columns * divisor)
    min_node_height: float = 30
    max_node_height: float = 60
    height_factor: float = 1.5      # node height = height / (max column size * factor)
    min_padding: float = 10
    padding_ratio: float = 0.25     # padding = node height * ratio


DEFAULT_SETTINGS = LayoutSettings()


def parse_node_name(name: str) -> Tuple[str, int]:
    """
    Split a node name into (column prefix, row suffix).

    Examples:
        "A12"  → ("A", 12)
        "Src"  → ("Src", 0)
        "B2x7" → ("B", 2)
        "9lives" → ("9", 0)   (no leading letter: first character)
    """
    match = NODE_NAME_PATTERN.match(name)
    if not match:
        return name[:1], 0

    prefix, digits = match.groups()
    return prefix, int(digits) if digits else 0


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def group_columns(nodes) -> Dict[str, List[Tuple[Node, int]]]:
    """Group nodes by prefix, columns in alphabetical order, rows by suffix."""
    groups: Dict[str, List[Tuple[Node, int]]] = {}
    for node in nodes:
        prefix, suffix = parse_node_name(node.name)
        groups.setdefault(prefix, []).append((node, suffix))

    return {
        prefix: sorted(groups[prefix], key=lambda item: item[1])
        for prefix in sorted(groups)
    }


class ColumnLayoutEngine:
    """Assign every node a column/row slot and rectangle."""

    def __init__(self, settings: Optional[LayoutSettings] = None,
                 solver: Optional[LinkSolver] = None):
        self.settings = settings or DEFAULT_SETTINGS
        self.solver = solver or CircularLinkSolver()

    def layout(self, graph: FlowGraph, width: float, height: float) -> ColumnLayout:
        """
        Lay out ``graph`` inside a ``width`` x ``height`` area.

        Args:
            graph: Flow graph (never modified)
            width: Total layout width
            height: Total layout height

        Raises:
            ValueError: If width or height is negative

        Returns:
            ColumnLayout with positioned nodes and links
        """
        if width < 0 or height < 0:
            raise ValueError(f"Layout size must be non-negative, got {width}x{height}")

        if graph.is_empty:
            return ColumnLayout(width=width, height=height)

        s = self.settings
        columns = group_columns(graph.nodes)
        column_count = len(columns)
        max_column_size = max(len(members) for members in columns.values())

        column_width = width / column_count
        node_width = _clamp(width / (column_count * s.width_divisor),
                            s.min_node_width, s.max_node_width)
        node_height = _clamp(height / (max_column_size * s.height_factor),
                             s.min_node_height, s.max_node_height)
        node_padding = max(s.min_padding, node_height * s.padding_ratio)

        positioned: List[PositionedNode] = []
        for column, (prefix, members) in enumerate(columns.items()):
            x = column * column_width + column_width / 2 - node_width / 2
            block_height = len(members) * node_height + (len(members) - 1) * node_padding
            start_y = (height - block_height) / 2

            for row, (node, suffix) in enumerate(members):
                y = start_y + row * (node_height + node_padding)
                positioned.append(PositionedNode(
                    node=node,
                    column=column,
                    row=row,
                    prefix=prefix,
                    suffix=suffix,
                    x0=x,
                    y0=y,
                    x1=x + node_width,
                    y1=y + node_height,
                ))

            logger.debug(f"Column {column} '{prefix}': {len(members)} node(s)")

        links = self._position_links(graph, positioned)

        return ColumnLayout(
            width=width,
            height=height,
            columns=tuple(columns),
            nodes=tuple(positioned),
            links=tuple(links),
            column_width=column_width,
            node_width=node_width,
            node_height=node_height,
            node_padding=node_padding,
        )

    def _position_links(self, graph: FlowGraph,
                        positioned: List[PositionedNode]) -> List[PositionedLink]:
        """Attach solver results to this engine's rectangles by node name."""
        by_name = {p.name: p for p in positioned}
        column_of = {p.name: p.column for p in positioned}

        links = []
        for solved in self.solver.solve(graph, column_of):
            source = by_name.get(solved.source.name)
            target = by_name.get(solved.target.name)
            if source is None or target is None:
                logger.warning(f"Solver returned link {solved.link} with unplaced endpoint; skipped")
                continue
            links.append(PositionedLink(
                link=solved.link,
                source=source,
                target=target,
                circular=solved.circular,
            ))
        return links


def compute_layout(graph: FlowGraph, width: float, height: float,
                   settings: Optional[LayoutSettings] = None,
                   solver: Optional[LinkSolver] = None) -> ColumnLayout:
    """Lay out a graph (see ColumnLayoutEngine.layout)."""
    return ColumnLayoutEngine(settings=settings, solver=solver).layout(graph, width, height)
