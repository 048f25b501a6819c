"""
Exception taxonomy for trackbubbles.

Two failure kinds exist:

- `DataLoadError` is fatal. The source table is missing, unreadable, empty or
  lacks the columns the chart needs. Nothing is drawn; the viewer gets a
  single error panel instead of the chart.
- `FieldCoercionAnomaly` is local to one row. The normalizer catches it and the
  row silently fails the working-set filter.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class TrackBubblesError(Exception):
    """Base class for every error raised by this package."""


class DataLoadError(TrackBubblesError):
    """The source table could not be loaded as a whole."""

    def __init__(self, message: str, source: Optional[Path | str] = None) -> None:
        super().__init__(message)
        self.source = str(source) if source is not None else None

    @property
    def source_name(self) -> str:
        """File name shown on the error panel."""
        if self.source is None:
            return "unknown source"
        return Path(self.source).name


class FieldCoercionAnomaly(TrackBubblesError, ValueError):
    """A single field of a row could not be parsed."""

    def __init__(self, field_name: str, value: object) -> None:
        super().__init__(f"cannot parse {field_name}={value!r}")
        self.field_name = field_name
        self.value = value


__all__ = ["TrackBubblesError", "DataLoadError", "FieldCoercionAnomaly"]
