"""
trackbubbles - interactive bubble chart of a music catalog.

Each track in the catalog becomes one circle:

- x: release date (year plus month, spread within the year)
- y: track popularity (0-100)
- radius: track duration (square-root scale, area-true)
- color: artist followers (logarithmic scale)

The pipeline normalizes the CSV into typed records, keeps the most popular
plottable tracks, builds the scales once, lays out axes and legend, joins one
mark per record with a staggered entrance, and drives hover/click interaction
through a small state machine. Output is SVG or a standalone HTML page.
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from trackbubbles.chart.interaction import InteractionController, MarkState, PointerEvent
from trackbubbles.chart.normalizer import build_working_set, normalize_row
from trackbubbles.chart.scales import ScaleSet, build_scales
from trackbubbles.config import Settings, get_settings
from trackbubbles.domain.models import Mark, Record, Tooltip
from trackbubbles.errors import DataLoadError, FieldCoercionAnomaly, TrackBubblesError
from trackbubbles.pipeline import ChartSession, build_session, render_chart
from trackbubbles.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Pipeline
    "ChartSession",
    "build_session",
    "render_chart",
    # Chart components
    "InteractionController",
    "MarkState",
    "PointerEvent",
    "ScaleSet",
    "build_scales",
    "build_working_set",
    "normalize_row",
    # Domain
    "Mark",
    "Record",
    "Tooltip",
    # Errors
    "DataLoadError",
    "FieldCoercionAnomaly",
    "TrackBubblesError",
    # Logging
    "configure_logging",
    "get_logger",
]
