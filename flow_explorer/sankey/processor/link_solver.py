"""
Resolve link endpoints and detect circular links.

The layout engine places nodes itself; a solver only tells it which node
each link starts and ends at, and which links loop back between columns.
Any object with a matching ``solve`` method can stand in for the default
networkx-based solver.
"""

import logging
from dataclasses import dataclass
from typing import List, Mapping, Optional, Protocol

import networkx as nx

from ..models.dataclasses import FlowGraph, Link, Node

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SolvedLink:
    """A link with resolved endpoint nodes."""
    link: Link
    source: Node
    target: Node
    circular: bool = False


class LinkSolver(Protocol):
    """Interface of a link solver."""

    def solve(self, graph: FlowGraph, columns: Mapping[str, int]) -> List[SolvedLink]:
        ...


class CircularLinkSolver:
    """
    Default solver backed by a networkx DiGraph.

    A link is circular when it is a self-loop, or when both endpoints belong
    to the same strongly connected component and the link points to the same
    or an earlier column (the edge that closes the loop in column order).
    """

    def solve(self, graph: FlowGraph, columns: Mapping[str, int]) -> List[SolvedLink]:
        """
        Resolve every link of ``graph``.

        Args:
            graph: Flow graph to solve
            columns: Column index of each node name

        Returns:
            SolvedLinks in graph link order; links with an unknown endpoint
            are skipped with a warning
        """
        digraph = self._build_digraph(graph)
        component_of = {}
        for i, component in enumerate(nx.strongly_connected_components(digraph)):
            for name in component:
                component_of[name] = i

        solved = []
        for link in graph.links:
            source = graph.node(link.source)
            target = graph.node(link.target)
            if source is None or target is None:
                logger.warning(f"Link {link} references an unknown node; skipped")
                continue

            solved.append(SolvedLink(
                link=link,
                source=source,
                target=target,
                circular=self._is_circular(link, component_of, columns),
            ))

        circular_count = sum(1 for s in solved if s.circular)
        if circular_count:
            logger.debug(f"Detected {circular_count} circular link(s)")

        return solved

    @staticmethod
    def _build_digraph(graph: FlowGraph) -> nx.DiGraph:
        digraph = nx.DiGraph()
        digraph.add_nodes_from(node.name for node in graph.nodes)
        digraph.add_edges_from(link.id for link in graph.links)
        return digraph

    @staticmethod
    def _is_circular(link: Link, component_of: Mapping[str, int],
                     columns: Mapping[str, int]) -> bool:
        if link.source == link.target:
            return True
        if component_of.get(link.source) != component_of.get(link.target):
            return False

        source_column: Optional[int] = columns.get(link.source)
        target_column: Optional[int] = columns.get(link.target)
        if source_column is None or target_column is None:
            return True
        return target_column <= source_column
