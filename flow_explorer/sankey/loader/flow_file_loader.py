"""
Load flow rows from Excel or CSV files.

Only the first sheet of a workbook is read; additional sheets are ignored.
Every cell is read as text so keys like ``007`` keep their leading zeros.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd

from ..contracts.validator import ValidationError, validate_dataframe, validate_input
from ..models.dataclasses import Record

logger = logging.getLogger(__name__)


class FlowFileError(ValidationError):
    """Raised when a flow file cannot be read (as opposed to holding no flows)."""
    pass


class FlowFileLoader:
    """Load and parse flow files into row dicts and records."""

    def __init__(self, strict: bool = False):
        """
        Initialize the loader.

        Args:
            strict: Raise when a required column is missing instead of
                yielding an empty record set
        """
        self.strict = strict
        self.rows: List[Dict[str, str]] = []
        self.sheet_name: Optional[str] = None
        self.dropped_rows = 0

    def load(self, path: Path) -> List[Dict[str, str]]:
        """
        Read a flow file into a list of row dicts.

        Args:
            path: Path to .xlsx, .xls or .csv file

        Raises:
            FlowFileError: If the file is missing, unsupported or unreadable
            ValidationError: In strict mode, if required columns are missing

        Returns:
            List of {header: cell} dicts, blanks as empty strings
        """
        path = Path(path)

        try:
            validate_input(path)
        except ValidationError as e:
            raise FlowFileError(str(e)) from e

        if path.suffix.lower() == ".csv":
            df = self._read_csv(path)
        else:
            df = self._read_excel(path)

        validate_dataframe(df, strict=self.strict)

        self.rows = df.to_dict(orient="records")
        logger.info(f"Loaded {len(self.rows)} rows from {path.name}")
        return self.rows

    def load_records(self, path: Path) -> List[Record]:
        """Read a flow file and keep only rows with all three fields set."""
        rows = self.load(path)

        records = []
        for row in rows:
            record = Record.from_row(row)
            if record is not None:
                records.append(record)

        self.dropped_rows = len(rows) - len(records)
        if self.dropped_rows:
            logger.debug(f"Dropped {self.dropped_rows} rows with blank fields")

        return records

    def _read_excel(self, path: Path) -> pd.DataFrame:
        """Read the first sheet of a workbook."""
        try:
            with pd.ExcelFile(path) as xl:
                sheet_names = list(xl.sheet_names)
                self.sheet_name = sheet_names[0]
                df = pd.read_excel(xl, sheet_name=self.sheet_name, dtype=str, na_filter=False)
        except Exception as e:
            raise FlowFileError(f"Cannot read Excel: {e}") from e

        if len(sheet_names) > 1:
            logger.debug(
                f"Using sheet '{self.sheet_name}', ignoring {len(sheet_names) - 1} other sheet(s)"
            )
        return df

    def _read_csv(self, path: Path) -> pd.DataFrame:
        try:
            return pd.read_csv(path, dtype=str, keep_default_na=False)
        except pd.errors.EmptyDataError:
            logger.info(f"{path.name} is empty")
            return pd.DataFrame()
        except Exception as e:
            raise FlowFileError(f"Cannot read CSV: {e}") from e
