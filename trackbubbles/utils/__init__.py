"""
Utilities package for trackbubbles.

Exports shared helpers for logging and profiling. Keep this package free of
chart-specific logic.
"""

from trackbubbles.utils.logging import configure_from_settings, configure_logging, get_logger
from trackbubbles.utils.profiler import ProfileStats, profile_block

__all__ = [
    "configure_from_settings",
    "configure_logging",
    "get_logger",
    "ProfileStats",
    "profile_block",
]
