"""
Infrastructure package for trackbubbles.

Holds the adapters that talk to the outside world (currently the CSV file
the catalog is read from).
"""

from trackbubbles.infrastructure.csv_source import REQUIRED_COLUMNS, load_rows

__all__ = ["REQUIRED_COLUMNS", "load_rows"]
