"""
Domain package for trackbubbles.

Exports the data definitions shared by the normalizer, the join engine and
the interaction controller.
"""

from trackbubbles.domain.models import Mark, RawRecord, Record, Tooltip

__all__ = [
    "Mark",
    "RawRecord",
    "Record",
    "Tooltip",
]
