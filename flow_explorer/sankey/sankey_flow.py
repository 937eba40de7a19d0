#!/usr/bin/env python
"""
Sankey Flow - Build, lay out and trace flow graphs from Excel/CSV files.

Input files need three columns (header case ignored): source, destination, key.

Usage:
    # Summary of a workbook (first sheet only)
    python sankey_flow.py --input flows.xlsx

    # Trace one key and export Excel + renderer JSON
    python sankey_flow.py --input flows.xlsx --trace RUN_042 \\
        --output output/ --json output/flows.json

    # Custom viewport
    python sankey_flow.py --input flows.csv --width 1600 --height 900
"""

import argparse
import logging
import sys
from pathlib import Path

from flow_explorer.sankey.contracts import ValidationError
from flow_explorer.sankey.loader import FlowFileLoader
from flow_explorer.sankey.output import ExcelWriter, write_json
from flow_explorer.sankey.processor import ColumnLayoutEngine, GraphBuilder, PathTracer

logger = logging.getLogger("sankey_flow")


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Build and trace Sankey flow graphs from tabular files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    # Input
    parser.add_argument(
        "--input", "-i",
        type=Path,
        required=True,
        help="Path to Excel (.xlsx/.xls) or CSV file"
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail when source/destination/key columns are missing"
    )

    # Layout
    parser.add_argument(
        "--width",
        type=float,
        default=1200,
        help="Layout width (default: 1200)"
    )
    parser.add_argument(
        "--height",
        type=float,
        default=600,
        help="Layout height (default: 600)"
    )

    # Tracing
    parser.add_argument(
        "--trace",
        type=str,
        help="Key to trace through the graph"
    )

    # Output
    parser.add_argument(
        "--output",
        type=Path,
        help="Output directory for the Excel summary"
    )
    parser.add_argument(
        "--json",
        type=Path,
        help="Path for the renderer JSON payload"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output"
    )

    args = parser.parse_args(argv)

    if args.width < 0 or args.height < 0:
        parser.error("--width and --height must be non-negative")

    return args


def setup_logging(verbose: bool):
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    if not root_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s - %(levelname)s - %(message)s"))
        root_logger.addHandler(handler)


def main(argv=None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    setup_logging(args.verbose)

    if args.verbose:
        print("=" * 60)
        print("Sankey Flow")
        print("=" * 60)

    # Load rows
    print(f"\nLoading: {args.input}")
    loader = FlowFileLoader(strict=args.strict)
    try:
        rows = loader.load(args.input)
    except ValidationError as e:
        logger.error(f"Error loading {args.input}: {e}")
        return 1

    # Build, lay out, trace
    graph = GraphBuilder().build(rows)
    layout = ColumnLayoutEngine().layout(graph, args.width, args.height)
    tracer = PathTracer(graph)

    print(f"  Rows: {len(rows)} ({graph.dropped_rows} dropped)")
    print(f"  Nodes: {len(graph.nodes)}")
    print(f"  Links: {len(graph.links)}")
    print(f"  Unique keys: {len(graph.key_paths)}")
    print(f"  Columns: {', '.join(layout.columns) if layout.columns else '-'}")

    if graph.is_empty:
        print("\nNo flows found. Expected columns: source, destination, key")

    if args.trace:
        tracer.select(args.trace)
        links = tracer.links_in_path(args.trace)
        nodes = tracer.nodes_in_path(args.trace)
        print(f"\nTracing: {args.trace}")
        if not links:
            print("  Key not found in graph")
        for link in links:
            print(f"    {link}")
        print(f"  {len(links)} link(s), {len(nodes)} node(s) in path")

    if args.output:
        path = ExcelWriter(args.output).write(graph, layout=layout, tracer=tracer,
                                              name=args.input.stem)
        print(f"\nWritten: {path}")

    if args.json:
        path = write_json(args.json, graph, layout=layout, state=tracer.state)
        print(f"Written: {path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
