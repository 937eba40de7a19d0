"""
Validate flow data against the input contract.

Input files (Excel, CSV) carry one flow per row in three columns:
source, destination and key. Header matching is case-insensitive.
"""

from pathlib import Path
from typing import List

import pandas as pd


class ValidationError(Exception):
    """Raised when input doesn't conform to the flow contract."""
    pass


REQUIRED_COLUMNS = [
    "source",
    "destination",
    "key",
]

SUPPORTED_SUFFIXES = (".xlsx", ".xls", ".csv")


def validate_input(path: Path) -> bool:
    """
    Check that an input file exists and has a supported format.

    Args:
        path: Path to input file (xlsx, xls or csv)

    Raises:
        ValidationError: If the file is missing or of an unsupported type

    Returns:
        True if valid
    """
    path = Path(path)

    if not path.exists():
        raise ValidationError(f"Input file not found: {path}")

    if path.suffix.lower() not in SUPPORTED_SUFFIXES:
        raise ValidationError(f"Unsupported file format: {path.suffix}")

    return True


def missing_columns(df: pd.DataFrame) -> List[str]:
    """Required columns absent from the DataFrame (headers compared lowercased)."""
    present = {str(c).strip().lower() for c in df.columns}
    return [c for c in REQUIRED_COLUMNS if c not in present]


def validate_dataframe(df: pd.DataFrame, strict: bool = False) -> bool:
    """
    Validate a DataFrame of flows.

    Rows with blank fields are not an error: they are dropped later when
    records are built. A missing required column only raises in strict mode;
    otherwise every row fails record validation and the graph is empty.

    Args:
        df: pandas DataFrame with flow rows
        strict: Raise when a required column is missing

    Raises:
        ValidationError: In strict mode, if a required column is missing

    Returns:
        True if all required columns are present
    """
    missing = missing_columns(df)
    if missing and strict:
        raise ValidationError(f"Missing required columns: {missing}")

    return not missing
