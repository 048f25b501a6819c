"""
Immutable chart context shared by layout, join and interaction.

Everything that is fixed for the session lives here: plot geometry, the
scale set, the palette and the animation timings. Built once after the
working set is known and passed by reference afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

from trackbubbles.chart.scales import ScaleSet, build_scales
from trackbubbles.config import Settings, get_settings
from trackbubbles.domain.models import Record


@dataclass(frozen=True)
class Margins:
    top: float = 60
    right: float = 40
    bottom: float = 80
    left: float = 100


@dataclass(frozen=True)
class Palette:
    background: str = "#121212"
    accent: str = "#1db954"
    neutral: str = "#b3b3b3"
    muted: str = "#535353"


@dataclass(frozen=True)
class Timings:
    entrance_ms: float = 2000.0
    entrance_stagger_ms: float = 15.0
    hover_ms: float = 200.0


@dataclass(frozen=True)
class ChartContext:
    width: float
    height: float
    margins: Margins
    scales: ScaleSet
    palette: Palette = field(default_factory=Palette)
    timings: Timings = field(default_factory=Timings)

    @property
    def outer_width(self) -> float:
        return self.width + self.margins.left + self.margins.right

    @property
    def outer_height(self) -> float:
        return self.height + self.margins.top + self.margins.bottom


def build_context(records: Sequence[Record], settings: Optional[Settings] = None) -> ChartContext:
    """Derive geometry from settings and build the scale set over `records`."""
    settings = settings or get_settings()
    margins = Margins(
        top=settings.margin_top,
        right=settings.margin_right,
        bottom=settings.margin_bottom,
        left=settings.margin_left,
    )
    width = settings.plot_width
    height = settings.plot_height
    return ChartContext(
        width=width,
        height=height,
        margins=margins,
        scales=build_scales(records, width, height),
        timings=Timings(
            entrance_ms=settings.entrance_duration_ms,
            entrance_stagger_ms=settings.entrance_stagger_ms,
            hover_ms=settings.hover_duration_ms,
        ),
    )


__all__ = ["ChartContext", "Margins", "Palette", "Timings", "build_context"]
