"""Write the renderer payload (graph, layout, selection) as JSON."""

import json
import logging
from pathlib import Path
from typing import Dict, Optional

from ..models.dataclasses import ColumnLayout, FlowGraph, SelectionState

logger = logging.getLogger(__name__)


def build_payload(graph: FlowGraph,
                  layout: Optional[ColumnLayout] = None,
                  state: Optional[SelectionState] = None) -> Dict:
    payload = {
        "graph": graph.to_dict(),
        "keys": graph.keys(),
        "keyPaths": graph.key_paths.to_dict(),
        "selectedKey": state.selected_key if state is not None else None,
    }
    if layout is not None:
        payload["layout"] = layout.to_dict()
    return payload


def write_json(path: Path, graph: FlowGraph,
               layout: Optional[ColumnLayout] = None,
               state: Optional[SelectionState] = None) -> Path:
    """
    Write graph data for a renderer.

    Args:
        path: Output file
        graph: Flow graph
        layout: Optional positioned layout
        state: Optional selection state

    Returns:
        Path to written file
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        json.dump(build_payload(graph, layout, state), f, indent=2)

    logger.info(f"Written: {path}")
    return path
