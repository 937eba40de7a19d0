"""Enumerations for flow graph data types."""

from enum import Enum


class RecordField(str, Enum):
    """Required fields of an input row."""
    SOURCE = "source"
    DESTINATION = "destination"
    KEY = "key"


class SelectionStatus(str, Enum):
    """State of the key selection."""
    UNSELECTED = "UNSELECTED"
    SELECTED = "SELECTED"


class HighlightState(str, Enum):
    """How a node or link should be drawn for the current selection."""
    DEFAULT = "DEFAULT"     # Nothing selected
    IN_PATH = "IN_PATH"     # Touched by the selected key
    DIMMED = "DIMMED"       # Not touched by the selected key
