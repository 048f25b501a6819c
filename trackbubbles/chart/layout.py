"""
Layout builder: background panel, axes, axis titles and the color legend.

Tick positions and labels are always read back from the scales, and the
legend gradient resamples the log color scale instead of drawing a straight
two-color ramp.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from trackbubbles.chart.context import ChartContext
from trackbubbles.chart.scales import LinearScale, format_number, round_half_up

AXIS_TICKS = 8
LEGEND_STOPS = 10
LEGEND_SIZE = (180.0, 12.0)
LEGEND_ORIGIN = (20.0, -45.0)


@dataclass(frozen=True)
class Panel:
    width: float
    height: float
    fill: str
    opacity: float = 0.3
    corner_radius: float = 8.0


@dataclass(frozen=True)
class Tick:
    value: float
    position: float
    label: str


@dataclass(frozen=True)
class Axis:
    orient: str  # "bottom" or "left"
    offset: Tuple[float, float]
    ticks: Tuple[Tick, ...]
    extent: Tuple[float, float]
    label_color: str


@dataclass(frozen=True)
class AxisTitle:
    text: str
    x: float
    y: float
    rotate: float = 0.0


@dataclass(frozen=True)
class LegendStop:
    offset: float
    value: float
    color: str


@dataclass(frozen=True)
class Legend:
    x: float
    y: float
    width: float
    height: float
    title: str
    stops: Tuple[LegendStop, ...]
    min_label: str = "Few"
    max_label: str = "Many"


@dataclass(frozen=True)
class Layout:
    panel: Panel
    x_axis: Axis
    y_axis: Axis
    titles: Tuple[AxisTitle, ...]
    legend: Legend


def year_label(value: float) -> str:
    return str(round_half_up(value))


def percent_label(value: float) -> str:
    return f"{format_number(value)}%"


def _axis(scale: LinearScale, orient: str, offset, formatter, color: str) -> Axis:
    return Axis(
        orient=orient,
        offset=offset,
        ticks=tuple(Tick(v, scale(v), formatter(v)) for v in scale.ticks(AXIS_TICKS)),
        extent=(min(scale.range), max(scale.range)),
        label_color=color,
    )


def build_legend(context: ChartContext) -> Legend:
    color = context.scales.color
    width, height = LEGEND_SIZE
    return Legend(
        x=LEGEND_ORIGIN[0],
        y=LEGEND_ORIGIN[1],
        width=width,
        height=height,
        title="Artist Followers",
        stops=tuple(
            LegendStop(offset=offset, value=value, color=color(value))
            for offset, value in color.sample(LEGEND_STOPS)
        ),
    )


def build_layout(context: ChartContext) -> Layout:
    palette = context.palette
    return Layout(
        panel=Panel(width=context.width, height=context.height, fill=palette.background),
        x_axis=_axis(context.scales.x, "bottom", (0.0, context.height), year_label, palette.neutral),
        y_axis=_axis(context.scales.y, "left", (0.0, 0.0), percent_label, palette.neutral),
        titles=(
            AxisTitle("Release Year", context.width / 2, context.height + 70),
            AxisTitle("Track Popularity", -context.height / 2, -85, rotate=-90),
        ),
        legend=build_legend(context),
    )


__all__ = [
    "AXIS_TICKS",
    "Axis",
    "AxisTitle",
    "LEGEND_STOPS",
    "Layout",
    "Legend",
    "LegendStop",
    "Panel",
    "Tick",
    "build_layout",
    "build_legend",
    "percent_label",
    "year_label",
]
