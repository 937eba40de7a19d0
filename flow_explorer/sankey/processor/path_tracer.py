"""
Trace the path of one key through a flow graph.

Selection is a two-state machine: nothing selected, or one key selected.
Selecting the selected key again clears it; selecting another key switches
to it directly. Clicking a link selects its first key.
"""

import logging
from typing import FrozenSet, Optional, Tuple

from ..models.dataclasses import FlowGraph, Link, Node, SelectionState
from ..models.enums import HighlightState

logger = logging.getLogger(__name__)

UNSELECTED = SelectionState()


def select_key(state: SelectionState, key: str) -> SelectionState:
    """Toggle ``key``: clears when already selected, else selects it."""
    if state.selected_key == key:
        return UNSELECTED
    return SelectionState(selected_key=key)


def clear_selection(state: SelectionState) -> SelectionState:
    return UNSELECTED


class PathTracer:
    """Classify nodes and links as in-path or not for the selected key."""

    def __init__(self, graph: FlowGraph, state: SelectionState = UNSELECTED):
        self.graph = graph
        self.state = state

    @property
    def selected_key(self) -> Optional[str]:
        return self.state.selected_key

    def links_in_path(self, key: str) -> Tuple[Link, ...]:
        """Links carrying ``key`` (empty for unknown keys)."""
        return self.graph.key_paths.links_for(key)

    def nodes_in_path(self, key: str) -> FrozenSet[Node]:
        """Endpoints of every link carrying ``key``."""
        nodes = set()
        for link in self.links_in_path(key):
            nodes.add(self.graph.node(link.source) or Node(link.source))
            nodes.add(self.graph.node(link.target) or Node(link.target))
        return frozenset(nodes)

    def select(self, key: str) -> SelectionState:
        if key not in self.graph.key_paths:
            logger.debug(f"Selected key '{key}' carries no links")
        self.state = select_key(self.state, key)
        return self.state

    def select_link(self, link: Link) -> SelectionState:
        """Toggle the first key of a clicked link; keyless links do nothing."""
        if link.first_key is None:
            return self.state
        return self.select(link.first_key)

    def clear(self) -> SelectionState:
        self.state = clear_selection(self.state)
        return self.state

    def is_link_in_path(self, link: Link) -> bool:
        key = self.state.selected_key
        if key is None:
            return False
        return any(l.id == link.id for l in self.links_in_path(key))

    def is_node_in_path(self, node: Node) -> bool:
        key = self.state.selected_key
        if key is None:
            return False
        return node.name in {n.name for n in self.nodes_in_path(key)}

    def link_state(self, link: Link) -> HighlightState:
        if not self.state.is_selected:
            return HighlightState.DEFAULT
        return HighlightState.IN_PATH if self.is_link_in_path(link) else HighlightState.DIMMED

    def node_state(self, node: Node) -> HighlightState:
        if not self.state.is_selected:
            return HighlightState.DEFAULT
        return HighlightState.IN_PATH if self.is_node_in_path(node) else HighlightState.DIMMED
