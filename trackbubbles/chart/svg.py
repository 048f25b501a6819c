"""
SVG and HTML output.

`render_svg` draws one frame: the layout plus every mark with the attribute
values it has right now. `render_document` wraps the chart in a standalone
page with the `#visualization` container and the `#tooltip` element; with
`animate=True` the entrance is written as SMIL keyframes sampled from the
elastic curve and hover highlight/dim is expressed in CSS, so the page works
without any script.

The written page is a snapshot of the interaction state. `#tooltip` shows
whatever `InteractionController.tooltip` held at export time (hidden unless a
mark had been clicked); click-to-inspect and click-away run in the controller,
not in the page. Each circle also carries its tooltip lines as a `<title>`,
which browsers show on hover.

`render_error_document` is the failure surface: a single panel in place of
the chart, and no `<svg>` at all.
"""

from __future__ import annotations

import html
import math
from typing import Any, Iterable, List, Sequence

from trackbubbles.chart.context import ChartContext
from trackbubbles.chart.interaction import DIMMED_OPACITY, HOVER_SCALE, tooltip_lines
from trackbubbles.chart.join import data_radius
from trackbubbles.chart.layout import Axis, Layout, Legend
from trackbubbles.chart.transitions import elastic_out, sample_ease
from trackbubbles.domain.models import Mark, Tooltip
from trackbubbles.errors import DataLoadError

CONTAINER_ID = "visualization"
TOOLTIP_ID = "tooltip"
GRADIENT_ID = "legend-gradient"
TICK_SIZE = 6
TICK_PADDING = 3
ENTRANCE_KEYFRAMES = 40


# ---------------------------------------------------------------------------
# HTML / SVG safety helpers
# ---------------------------------------------------------------------------


def _esc(text: Any) -> str:
    """Escape text for HTML/SVG interpolation."""
    return html.escape(str(text), quote=True)


def _num(value: Any, default: float = 0.0) -> str:
    """Compact numeric text for SVG coordinates; non-finite values fall back."""
    try:
        result = float(value)
    except (TypeError, ValueError):
        result = default
    if not math.isfinite(result):
        result = default
    text = f"{result:.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


# ---------------------------------------------------------------------------
# Layout pieces
# ---------------------------------------------------------------------------


def _render_axis(axis: Axis, css_class: str) -> str:
    lo, hi = axis.extent
    parts: List[str] = [
        f'<g class="axis {css_class}" transform="translate({_num(axis.offset[0])},{_num(axis.offset[1])})" '
        f'font-size="10" font-family="sans-serif" fill="none">'
    ]
    if axis.orient == "bottom":
        parts.append(
            f'<path class="domain" stroke="currentColor" '
            f'd="M{_num(lo)},{TICK_SIZE}V0H{_num(hi)}V{TICK_SIZE}"/>'
        )
        for tick in axis.ticks:
            parts.append(
                f'<g class="tick" transform="translate({_num(tick.position)},0)">'
                f'<line stroke="currentColor" y2="{TICK_SIZE}"/>'
                f'<text fill="{_esc(axis.label_color)}" y="{TICK_SIZE + TICK_PADDING}" '
                f'dy="0.71em" text-anchor="middle">{_esc(tick.label)}</text></g>'
            )
    else:
        parts.append(
            f'<path class="domain" stroke="currentColor" '
            f'd="M-{TICK_SIZE},{_num(hi)}H0V{_num(lo)}H-{TICK_SIZE}"/>'
        )
        for tick in axis.ticks:
            parts.append(
                f'<g class="tick" transform="translate(0,{_num(tick.position)})">'
                f'<line stroke="currentColor" x2="-{TICK_SIZE}"/>'
                f'<text fill="{_esc(axis.label_color)}" x="-{TICK_SIZE + TICK_PADDING}" '
                f'dy="0.32em" text-anchor="end">{_esc(tick.label)}</text></g>'
            )
    parts.append("</g>")
    return "".join(parts)


def _render_gradient(legend: Legend) -> str:
    stops = "".join(
        f'<stop offset="{_num(stop.offset * 100)}%" stop-color="{_esc(stop.color)}"/>'
        for stop in legend.stops
    )
    return (
        f'<defs><linearGradient id="{GRADIENT_ID}" x1="0%" x2="100%">{stops}'
        f"</linearGradient></defs>"
    )


def _render_legend(legend: Legend, context: ChartContext) -> str:
    palette = context.palette
    return (
        f'<g class="legend" transform="translate({_num(legend.x)},{_num(legend.y)})">'
        f'<rect width="{_num(legend.width)}" height="{_num(legend.height)}" '
        f'fill="url(#{GRADIENT_ID})" stroke="{palette.muted}" stroke-width="1"/>'
        f'<text x="0" y="-8" font-size="10px" font-weight="bold" fill="{palette.neutral}">'
        f"{_esc(legend.title)}</text>"
        f'<text x="0" y="{_num(legend.height + 12)}" font-size="8px" fill="{palette.muted}">'
        f"{_esc(legend.min_label)}</text>"
        f'<text x="{_num(legend.width)}" y="{_num(legend.height + 12)}" text-anchor="end" '
        f'font-size="8px" fill="{palette.muted}">{_esc(legend.max_label)}</text>'
        "</g>"
    )


def _render_titles(layout: Layout, context: ChartContext) -> str:
    parts = []
    for title in layout.titles:
        transform = f' transform="rotate({_num(title.rotate)})"' if title.rotate else ""
        parts.append(
            f'<text class="axis-title"{transform} x="{_num(title.x)}" y="{_num(title.y)}" '
            f'text-anchor="middle" font-size="14px" font-weight="bold" '
            f'fill="{context.palette.accent}">{_esc(title.text)}</text>'
        )
    return "".join(parts)


# ---------------------------------------------------------------------------
# Marks
# ---------------------------------------------------------------------------


def _entrance_animation(mark: Mark, context: ChartContext) -> str:
    target = data_radius(mark.record, context)
    values = ";".join(_num(target * e) for e in sample_ease(elastic_out, ENTRANCE_KEYFRAMES))
    begin = mark.index * context.timings.entrance_stagger_ms
    return (
        f'<animate attributeName="r" begin="{_num(begin)}ms" '
        f'dur="{_num(context.timings.entrance_ms)}ms" values="{values}" fill="freeze"/>'
    )


def _render_mark(mark: Mark, context: ChartContext, animate: bool) -> str:
    title = _esc("\n".join(tooltip_lines(mark.record)))
    animation = _entrance_animation(mark, context) if animate else ""
    radius = 0.0 if animate else mark.r
    css = "mark highlighted" if mark.highlighted else "mark"
    return (
        f'<circle class="{css}" data-index="{mark.index}" cx="{_num(mark.cx)}" cy="{_num(mark.cy)}" '
        f'r="{_num(radius)}" fill="{_esc(mark.fill)}" opacity="{_num(mark.opacity)}" '
        f'stroke="{_esc(mark.stroke)}" stroke-width="{_num(mark.stroke_width)}">'
        f"<title>{title}</title>{animation}</circle>"
    )


def render_svg(
    context: ChartContext,
    layout: Layout,
    marks: Sequence[Mark],
    animate: bool = False,
) -> str:
    """Render the chart as an SVG string."""
    m = context.margins
    panel = layout.panel
    body: Iterable[str] = (
        f'<rect class="background" width="{_num(panel.width)}" height="{_num(panel.height)}" '
        f'fill="{panel.fill}" opacity="{_num(panel.opacity)}" rx="{_num(panel.corner_radius)}"/>',
        _render_axis(layout.x_axis, "x-axis"),
        _render_axis(layout.y_axis, "y-axis"),
        _render_titles(layout, context),
        '<g class="marks">',
        *(_render_mark(mark, context, animate) for mark in marks),
        "</g>",
        _render_gradient(layout.legend),
        _render_legend(layout.legend, context),
    )
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{_num(context.outer_width)}" '
        f'height="{_num(context.outer_height)}">'
        f'<g transform="translate({_num(m.left)},{_num(m.top)})">'
        + "".join(body)
        + "</g></svg>"
    )


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------


def render_tooltip(tooltip: Tooltip) -> str:
    """Static `#tooltip` element reflecting the controller's current tooltip."""
    css = "tooltip visible" if tooltip.visible else "tooltip"
    if tooltip.lines:
        head, *rest = tooltip.lines
        content = "<br>".join([f"<strong>{_esc(head)}</strong>", *(_esc(line) for line in rest)])
    else:
        content = ""
    return (
        f'<div id="{TOOLTIP_ID}" class="{css}" '
        f'style="left: {_num(tooltip.left)}px; top: {_num(tooltip.top)}px;">{content}</div>'
    )


def _stylesheet(context: ChartContext) -> str:
    p = context.palette
    ms = _num(context.timings.hover_ms)
    return f"""
body {{ background: {p.background}; color: {p.neutral}; font-family: sans-serif; margin: 0; }}
#{CONTAINER_ID} {{ display: flex; justify-content: center; padding: 24px; }}
.axis {{ color: {p.muted}; }}
.marks circle {{
  transition: opacity {ms}ms, stroke-width {ms}ms, transform {ms}ms;
  transform-box: fill-box; transform-origin: center;
}}
.marks:hover circle {{ opacity: {_num(DIMMED_OPACITY)}; }}
.marks circle:hover {{
  opacity: 1; stroke: {p.accent}; stroke-width: 3px; transform: scale({_num(HOVER_SCALE)});
}}
.tooltip {{
  position: absolute; pointer-events: none; opacity: 0;
  background: #282828; border: 1px solid {p.accent}; border-radius: 6px;
  padding: 8px 12px; font-size: 12px; line-height: 1.5;
}}
.tooltip.visible {{ opacity: 1; }}
"""


def _page(title: str, style: str, body: str) -> str:
    return (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n<head>\n<meta charset="utf-8">\n'
        f"<title>{_esc(title)}</title>\n<style>{style}</style>\n</head>\n"
        f"<body>\n{body}\n</body>\n</html>\n"
    )


def render_document(
    context: ChartContext,
    layout: Layout,
    marks: Sequence[Mark],
    tooltip: Tooltip,
    animate: bool = True,
    title: str = "Track popularity by release year",
) -> str:
    """Standalone HTML page holding the chart and the tooltip element."""
    body = (
        f'<div id="{CONTAINER_ID}">{render_svg(context, layout, marks, animate=animate)}</div>\n'
        + render_tooltip(tooltip)
    )
    return _page(title, _stylesheet(context), body)


ERROR_STYLE = """
body { background: #121212; color: #b3b3b3; font-family: sans-serif; }
.error-panel { text-align: center; padding: 50px; color: #b3b3b3; }
.error-panel h2 { color: #1db954; }
.error-panel .detail { color: #535353; font-size: 0.9em; }
"""


def render_error_document(error: DataLoadError) -> str:
    """Error page shown instead of the chart when the data cannot be loaded."""
    name = error.source_name
    body = (
        f'<div id="{CONTAINER_ID}"><div class="error-panel">'
        "<h2>⚠️ File not found</h2>"
        f'<p>Make sure "{_esc(name)}" is in the same folder</p>'
        f'<p class="detail">Looking for: {_esc(name)}</p>'
        f'<p class="detail">{_esc(error)}</p>'
        "</div></div>"
    )
    return _page("Data loading error", ERROR_STYLE, body)


__all__ = [
    "CONTAINER_ID",
    "GRADIENT_ID",
    "TOOLTIP_ID",
    "render_document",
    "render_error_document",
    "render_svg",
    "render_tooltip",
]
