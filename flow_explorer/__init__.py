"""Flow Explorer: Sankey flow graphs from tabular source/destination/key data."""

__version__ = "1.0.0"
