"""Loaders for input files."""

from .flow_file_loader import FlowFileLoader, FlowFileError

__all__ = ["FlowFileLoader", "FlowFileError"]
