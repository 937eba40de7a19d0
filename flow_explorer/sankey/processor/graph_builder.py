"""
Build a flow graph from tabular records.

A single pass over the rows collects:
- nodes: every distinct source/destination name
- links: one per (source, destination) pair, aggregating the distinct keys
- key paths: for each key, the links it travels through
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Tuple, Union

from ..models.dataclasses import FlowGraph, KeyPathIndex, Link, Node, Record

logger = logging.getLogger(__name__)

Row = Union[Record, Mapping[Any, Any]]


class _GraphAccumulator:
    """Mutable state for one build; frozen into a FlowGraph at the end."""

    def __init__(self):
        self.nodes: Dict[str, None] = {}
        self.link_keys: Dict[Tuple[str, str], Dict[str, None]] = {}
        self.key_paths: Dict[str, List[Tuple[str, str]]] = {}
        self.dropped = 0

    def add(self, record: Record):
        self.nodes.setdefault(record.source, None)
        self.nodes.setdefault(record.destination, None)

        link_id = (record.source, record.destination)
        self.link_keys.setdefault(link_id, {}).setdefault(record.key, None)

        path = self.key_paths.setdefault(record.key, [])
        if link_id not in path:
            path.append(link_id)

    def freeze(self) -> FlowGraph:
        links = {
            link_id: Link(source=link_id[0], target=link_id[1], flow_keys=tuple(keys))
            for link_id, keys in self.link_keys.items()
        }
        key_paths = KeyPathIndex({
            key: tuple(links[link_id] for link_id in path)
            for key, path in self.key_paths.items()
        })
        return FlowGraph(
            nodes=tuple(Node(name) for name in self.nodes),
            links=tuple(links.values()),
            key_paths=key_paths,
            dropped_rows=self.dropped,
        )


class GraphBuilder:
    """Convert flow rows into a deduplicated, key-aggregated graph."""

    def build(self, rows: Iterable[Row]) -> FlowGraph:
        """
        Build a graph from rows.

        Args:
            rows: Records, or mappings with source/destination/key fields
                (header case ignored). Rows missing a field are skipped.

        Returns:
            FlowGraph; empty when no row is valid
        """
        acc = _GraphAccumulator()
        total = 0

        for row in rows:
            total += 1
            record = row if isinstance(row, Record) else Record.from_row(row)
            if record is None or not record.is_valid:
                acc.dropped += 1
                continue
            acc.add(record)

        graph = acc.freeze()

        if acc.dropped:
            logger.debug(f"Skipped {acc.dropped} of {total} rows with missing fields")
        if graph.is_empty:
            logger.info("No valid flow rows found; graph is empty")
        else:
            logger.info(
                f"Built graph: {len(graph.nodes)} nodes, {len(graph.links)} links, "
                f"{len(graph.key_paths)} keys"
            )

        return graph


def build_flow_graph(rows: Iterable[Row]) -> FlowGraph:
    """Build a flow graph from rows (see GraphBuilder.build)."""
    return GraphBuilder().build(rows)
