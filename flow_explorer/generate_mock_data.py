#!/usr/bin/env python3
"""
Generate mock flow data for testing the Sankey flow tools.

Creates files with one flow per row (source, destination, key):
- sample_data/flows.xlsx - flows on the first sheet, plus a notes sheet
  that the loader must ignore
- sample_data/flows.csv  - the same flows as CSV

Node names follow the column convention: a letter prefix per stage and a
row number (A1, A2, B1, ...). Each key is one pipeline run that passes
through one node per stage. A few rows have blank fields, and one run
loops back from the last stage to the second (a circular link).
"""

import argparse
import random
from pathlib import Path

import pandas as pd

OUTPUT_DIR = Path(__file__).parent / "sample_data"

# Stage prefix -> number of nodes in that stage
STAGES = {
    "A": 3,   # ingest
    "B": 4,   # validate
    "C": 3,   # transform
    "D": 2,   # publish
}


def randomize_header_case(header: str) -> str:
    """Capitalize headers at random to exercise case-insensitive matching."""
    return header.capitalize() if random.random() < 0.5 else header


def generate_runs(run_count: int = 12) -> list:
    """One row per hop of each run, stage by stage."""
    rows = []
    prefixes = list(STAGES)

    for i in range(1, run_count + 1):
        key = f"RUN_{i:03d}"
        path = [f"{p}{random.randint(1, STAGES[p])}" for p in prefixes]

        for source, destination in zip(path, path[1:]):
            rows.append({"source": source, "destination": destination, "key": key})

        # Occasionally repeat a hop: must not inflate link values
        if random.random() < 0.3:
            rows.append({"source": path[0], "destination": path[1], "key": key})

        # The first run retries: publish loops back to validate
        if i == 1:
            rows.append({"source": path[-1], "destination": path[1], "key": key})

    return rows


def add_blank_rows(rows: list, count: int = 3) -> list:
    """Blank a field in a few rows; the loader drops them."""
    blanks = [
        {"source": "A1", "destination": "", "key": "RUN_BLANK"},
        {"source": "", "destination": "B2", "key": "RUN_BLANK"},
        {"source": "C1", "destination": "D1", "key": ""},
    ]
    return rows + blanks[:count]


def write_files(rows: list, output_dir: Path) -> tuple:
    output_dir.mkdir(parents=True, exist_ok=True)

    df = pd.DataFrame(rows)
    df.columns = [randomize_header_case(c) for c in df.columns]

    xlsx_path = output_dir / "flows.xlsx"
    with pd.ExcelWriter(xlsx_path, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name="Flows", index=False)
        pd.DataFrame({"note": ["Only the first sheet is read"]}).to_excel(
            writer, sheet_name="Notes", index=False
        )

    csv_path = output_dir / "flows.csv"
    df.to_csv(csv_path, index=False)

    return xlsx_path, csv_path


def main():
    parser = argparse.ArgumentParser(description="Generate mock Sankey flow data")
    parser.add_argument("--runs", type=int, default=12, help="Number of pipeline runs")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    parser.add_argument("--output", type=Path, default=OUTPUT_DIR, help="Output directory")
    args = parser.parse_args()

    random.seed(args.seed)

    rows = add_blank_rows(generate_runs(args.runs))
    xlsx_path, csv_path = write_files(rows, args.output)

    print(f"Generated {len(rows)} rows")
    print(f"  Created: {xlsx_path}")
    print(f"  Created: {csv_path}")


if __name__ == "__main__":
    main()
