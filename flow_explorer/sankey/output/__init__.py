"""Output writers."""

from .excel_writer import ExcelWriter
from .json_writer import build_payload, write_json

__all__ = ["ExcelWriter", "build_payload", "write_json"]
