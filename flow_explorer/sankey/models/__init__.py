"""Data models and enums for the flow graph."""

from .enums import RecordField, SelectionStatus, HighlightState
from .dataclasses import (
    Record, Node, Link, KeyPathIndex, FlowGraph,
    PositionedNode, PositionedLink, ColumnLayout, SelectionState, cell_to_str,
)

__all__ = [
    "RecordField",
    "SelectionStatus",
    "HighlightState",
    "Record",
    "Node",
    "Link",
    "KeyPathIndex",
    "FlowGraph",
    "PositionedNode",
    "PositionedLink",
    "ColumnLayout",
    "SelectionState",
    "cell_to_str",
]
