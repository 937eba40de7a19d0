"""
Excel writer for flow graph summaries.

Produces Excel workbooks with:
- Nodes (with column/row slots when a layout is given)
- Links (value and flow keys per source → target pair)
- Key_paths (links and nodes touched by each key)
- Summary
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd

from ..models.dataclasses import ColumnLayout, FlowGraph
from ..processor.path_tracer import PathTracer

logger = logging.getLogger(__name__)


class ExcelWriter:
    """Write flow graph data to an Excel workbook."""

    def __init__(self, output_dir: Path):
        """
        Initialize the writer.

        Args:
            output_dir: Directory for output files
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def write(self, graph: FlowGraph,
              layout: Optional[ColumnLayout] = None,
              tracer: Optional[PathTracer] = None,
              name: Optional[str] = None) -> Path:
        """
        Write a graph to an Excel workbook.

        Args:
            graph: Flow graph to export
            layout: Optional layout for node slots and circular flags
            tracer: Optional tracer; its selected key adds an in_path column
            name: Base name for the file (default: flows)

        Returns:
            Path to written file
        """
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filename = f"{name or 'flows'}_Sankey_{timestamp}.xlsx"
        output_path = self.output_dir / filename

        nodes_df = self._build_nodes_df(graph, layout, tracer)
        links_df = self._build_links_df(graph, layout, tracer)
        paths_df = self._build_key_paths_df(graph, tracer)
        summary_df = self._build_summary_df(graph, layout, tracer)

        with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
            nodes_df.to_excel(writer, sheet_name="Nodes", index=False)
            links_df.to_excel(writer, sheet_name="Links", index=False)
            paths_df.to_excel(writer, sheet_name="Key_paths", index=False)
            summary_df.to_excel(writer, sheet_name="Summary", index=False)

        logger.info(f"Written: {output_path}")
        return output_path

    @staticmethod
    def _selected(tracer: Optional[PathTracer]) -> Optional[str]:
        return tracer.selected_key if tracer is not None else None

    def _build_nodes_df(self, graph: FlowGraph, layout: Optional[ColumnLayout],
                        tracer: Optional[PathTracer]) -> pd.DataFrame:
        """Build the Nodes DataFrame, in layout order when available."""
        columns = ["name"]
        rows: List[Dict] = []

        if layout is not None and not layout.is_empty:
            columns += ["column", "row", "x0", "y0", "x1", "y1"]
            for positioned in layout.nodes:
                rows.append(positioned.to_dict())
        else:
            rows = [node.to_dict() for node in graph.nodes]

        selected = self._selected(tracer)
        if selected is not None:
            columns.append("in_path")
            in_path = {n.name for n in tracer.nodes_in_path(selected)}
            for row in rows:
                row["in_path"] = "Y" if row["name"] in in_path else "N"

        return pd.DataFrame(rows, columns=columns)

    def _build_links_df(self, graph: FlowGraph, layout: Optional[ColumnLayout],
                        tracer: Optional[PathTracer]) -> pd.DataFrame:
        """Build the Links DataFrame, sorted by source then target."""
        columns = ["source", "target", "value", "flow_keys"]
        circular = {}
        if layout is not None:
            columns.append("circular")
            circular = {p.link.id: p.circular for p in layout.links}

        selected = self._selected(tracer)
        in_path = set()
        if selected is not None:
            columns.append("in_path")
            in_path = {l.id for l in tracer.links_in_path(selected)}

        rows = []
        for link in graph.links:
            row = {
                "source": link.source,
                "target": link.target,
                "value": link.value,
                "flow_keys": ", ".join(link.flow_keys),
            }
            if layout is not None:
                row["circular"] = "Y" if circular.get(link.id) else "N"
            if selected is not None:
                row["in_path"] = "Y" if link.id in in_path else "N"
            rows.append(row)

        df = pd.DataFrame(rows, columns=columns)
        if df.empty:
            return df
        return df.sort_values(["source", "target"]).reset_index(drop=True)

    def _build_key_paths_df(self, graph: FlowGraph,
                            tracer: Optional[PathTracer]) -> pd.DataFrame:
        """Build the Key_paths DataFrame, one row per key."""
        tracer = tracer or PathTracer(graph)

        rows = []
        for key in graph.keys():
            links = tracer.links_in_path(key)
            nodes = tracer.nodes_in_path(key)
            rows.append({
                "key": key,
                "link_count": len(links),
                "node_count": len(nodes),
                "links": "; ".join(str(l) for l in links),
                "nodes": ", ".join(sorted(n.name for n in nodes)),
            })

        return pd.DataFrame(rows, columns=["key", "link_count", "node_count", "links", "nodes"])

    def _build_summary_df(self, graph: FlowGraph, layout: Optional[ColumnLayout],
                          tracer: Optional[PathTracer]) -> pd.DataFrame:
        """Build the Summary DataFrame."""
        rows = [
            {"metric": "Nodes", "value": len(graph.nodes)},
            {"metric": "Links", "value": len(graph.links)},
            {"metric": "Unique Keys", "value": len(graph.key_paths)},
            {"metric": "Dropped Rows", "value": graph.dropped_rows},
        ]

        if layout is not None:
            rows.append({"metric": "Columns", "value": ", ".join(layout.columns)})
            rows.append({"metric": "Circular Links",
                         "value": sum(1 for p in layout.links if p.circular)})

        selected = self._selected(tracer)
        if selected is not None:
            rows.append({"metric": "Selected Key", "value": selected})

        return pd.DataFrame(rows, columns=["metric", "value"])
