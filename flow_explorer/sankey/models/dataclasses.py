"""Data classes for flow graph structures."""

import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Iterator, List, Mapping, Optional, Tuple

from .enums import RecordField, SelectionStatus


Point = Tuple[float, float]


def cell_to_str(value: Any) -> str:
    """Convert a spreadsheet cell to a string; blanks (None, NaN) become ''."""
    if value is None:
        return ""
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        if value.is_integer():
            return str(int(value))
    return str(value)


@dataclass(frozen=True)
class Record:
    """One valid input row (source → destination, tagged with a key)."""
    source: str
    destination: str
    key: str

    @property
    def is_valid(self) -> bool:
        """True when source, destination and key are all non-empty."""
        return bool(self.source and self.destination and self.key)

    @classmethod
    def from_row(cls, row: Mapping[Any, Any]) -> Optional["Record"]:
        """
        Build a record from a row of named fields.

        Field names are matched case-insensitively, so both ``source`` and
        ``Source`` headers are accepted. When several headers match the same
        field the first non-empty value wins.

        Returns:
            Record, or None when any of the three fields is missing or empty
        """
        values = {f: "" for f in RecordField}

        for header, cell in row.items():
            name = str(header).strip().lower()
            for f in RecordField:
                if name == f.value and not values[f]:
                    values[f] = cell_to_str(cell)

        if not all(values.values()):
            return None

        return cls(
            source=values[RecordField.SOURCE],
            destination=values[RecordField.DESTINATION],
            key=values[RecordField.KEY],
        )


@dataclass(frozen=True)
class Node:
    """A named endpoint in the flow graph."""
    name: str

    def __str__(self) -> str:
        return self.name

    def to_dict(self) -> Dict:
        return {"name": self.name}


@dataclass(frozen=True)
class Link:
    """An aggregated, directed edge (source → target) carrying one or more keys."""
    source: str
    target: str
    flow_keys: Tuple[str, ...] = ()

    @property
    def id(self) -> Tuple[str, str]:
        return (self.source, self.target)

    @property
    def value(self) -> int:
        """Number of distinct keys flowing through this link."""
        return len(self.flow_keys)

    @property
    def first_key(self) -> Optional[str]:
        return self.flow_keys[0] if self.flow_keys else None

    def __str__(self) -> str:
        return f"{self.source} → {self.target}"

    def to_dict(self) -> Dict:
        """Convert to the renderer's link format."""
        return {
            "source": self.source,
            "target": self.target,
            "value": self.value,
            "flowKeys": list(self.flow_keys),
        }


class KeyPathIndex:
    """Read-only mapping from each key to the links that carry it."""

    def __init__(self, paths: Optional[Mapping[str, Tuple[Link, ...]]] = None):
        self._paths = MappingProxyType(
            {key: tuple(links) for key, links in (paths or {}).items()}
        )

    def links_for(self, key: str) -> Tuple[Link, ...]:
        """Links carrying ``key``, in first-seen order (empty for unknown keys)."""
        return self._paths.get(key, ())

    def keys(self) -> List[str]:
        return list(self._paths.keys())

    def items(self):
        return self._paths.items()

    def __contains__(self, key: object) -> bool:
        return key in self._paths

    def __iter__(self) -> Iterator[str]:
        return iter(self._paths)

    def __len__(self) -> int:
        return len(self._paths)

    def __eq__(self, other) -> bool:
        if not isinstance(other, KeyPathIndex):
            return False
        return dict(self._paths) == dict(other._paths)

    __hash__ = None

    def __repr__(self) -> str:
        return f"KeyPathIndex({len(self._paths)} keys)"

    def to_dict(self) -> Dict[str, List[List[str]]]:
        return {
            key: [[link.source, link.target] for link in links]
            for key, links in self._paths.items()
        }


@dataclass(frozen=True)
class FlowGraph:
    """Complete flow graph built from one data load."""
    nodes: Tuple[Node, ...] = ()
    links: Tuple[Link, ...] = ()
    key_paths: KeyPathIndex = field(default_factory=KeyPathIndex)
    dropped_rows: int = field(default=0, compare=False)

    _node_map: Dict[str, Node] = field(init=False, repr=False, compare=False)
    _link_map: Dict[Tuple[str, str], Link] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "_node_map", {n.name: n for n in self.nodes})
        object.__setattr__(self, "_link_map", {l.id: l for l in self.links})

    @property
    def is_empty(self) -> bool:
        return not self.nodes

    def node(self, name: str) -> Optional[Node]:
        return self._node_map.get(name)

    def link(self, source: str, target: str) -> Optional[Link]:
        return self._link_map.get((source, target))

    def node_names(self) -> FrozenSet[str]:
        return frozenset(self._node_map)

    def keys(self) -> List[str]:
        """All distinct keys, sorted for display."""
        return sorted(self.key_paths.keys())

    def to_dict(self) -> Dict:
        """Convert to the renderer's graph format."""
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "links": [l.to_dict() for l in self.links],
        }


@dataclass(frozen=True)
class PositionedNode:
    """A node placed in a column/row slot with resolved rectangle bounds."""
    node: Node
    column: int
    row: int
    prefix: str
    suffix: int
    x0: float
    y0: float
    x1: float
    y1: float

    @property
    def name(self) -> str:
        return self.node.name

    @property
    def width(self) -> float:
        return self.x1 - self.x0

    @property
    def height(self) -> float:
        return self.y1 - self.y0

    @property
    def left_anchor(self) -> Point:
        """Midpoint of the left edge (where incoming links end)."""
        return (self.x0, self.y0 + self.height / 2)

    @property
    def right_anchor(self) -> Point:
        """Midpoint of the right edge (where outgoing links start)."""
        return (self.x1, self.y0 + self.height / 2)

    def to_dict(self) -> Dict:
        return {
            "name": self.name,
            "column": self.column,
            "row": self.row,
            "x0": self.x0,
            "y0": self.y0,
            "x1": self.x1,
            "y1": self.y1,
        }


@dataclass(frozen=True)
class PositionedLink:
    """A link whose endpoints are resolved to positioned nodes."""
    link: Link
    source: PositionedNode
    target: PositionedNode
    circular: bool = False

    @property
    def source_point(self) -> Point:
        return self.source.right_anchor

    @property
    def target_point(self) -> Point:
        return self.target.left_anchor

    def control_points(self, curvature: float = 0.5) -> Tuple[Point, Point]:
        """
        Control points of the horizontal cubic curve between the endpoints.

        Both points sit at the ``curvature`` horizontal interpolation between
        the endpoints, each at the Y of its own endpoint.
        """
        sx, sy = self.source_point
        tx, ty = self.target_point
        return (
            (sx + (tx - sx) * curvature, sy),
            (sx + (tx - sx) * (1 - curvature), ty),
        )

    def to_dict(self) -> Dict:
        data = self.link.to_dict()
        data.update({
            "circular": self.circular,
            "sourcePoint": list(self.source_point),
            "targetPoint": list(self.target_point),
        })
        return data


@dataclass(frozen=True)
class ColumnLayout:
    """Positioned nodes and links for one viewport."""
    width: float
    height: float
    columns: Tuple[str, ...] = ()
    nodes: Tuple[PositionedNode, ...] = ()
    links: Tuple[PositionedLink, ...] = ()
    column_width: float = 0.0
    node_width: float = 0.0
    node_height: float = 0.0
    node_padding: float = 0.0

    @property
    def is_empty(self) -> bool:
        return not self.nodes

    def node(self, name: str) -> Optional[PositionedNode]:
        for positioned in self.nodes:
            if positioned.name == name:
                return positioned
        return None

    def to_dict(self) -> Dict:
        return {
            "width": self.width,
            "height": self.height,
            "columns": list(self.columns),
            "nodes": [n.to_dict() for n in self.nodes],
            "links": [l.to_dict() for l in self.links],
        }


@dataclass(frozen=True)
class SelectionState:
    """Currently selected key, if any."""
    selected_key: Optional[str] = None

    @property
    def status(self) -> SelectionStatus:
        if self.selected_key is None:
            return SelectionStatus.UNSELECTED
        return SelectionStatus.SELECTED

    @property
    def is_selected(self) -> bool:
        return self.selected_key is not None
