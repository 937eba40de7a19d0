"""Contract definitions and validation for flow data exchange."""

from .validator import validate_input, validate_dataframe, missing_columns, ValidationError

__all__ = ["validate_input", "validate_dataframe", "missing_columns", "ValidationError"]
