"""
Chart package: normalizer, scales, layout, join, transitions, interaction
and SVG/HTML output.

Modules are imported directly (`trackbubbles.chart.scales`, ...); this
package re-exports the entry point of each stage.
"""

from trackbubbles.chart.context import ChartContext, build_context
from trackbubbles.chart.interaction import InteractionController, target_attributes
from trackbubbles.chart.join import baseline_attributes, join_marks
from trackbubbles.chart.layout import Layout, build_layout
from trackbubbles.chart.normalizer import build_working_set, normalize_row
from trackbubbles.chart.scales import ScaleSet, build_scales
from trackbubbles.chart.svg import render_document, render_error_document, render_svg
from trackbubbles.chart.transitions import Animator

__all__ = [
    "Animator",
    "ChartContext",
    "InteractionController",
    "Layout",
    "ScaleSet",
    "baseline_attributes",
    "build_context",
    "build_layout",
    "build_scales",
    "build_working_set",
    "join_marks",
    "normalize_row",
    "render_document",
    "render_error_document",
    "render_svg",
    "target_attributes",
]
