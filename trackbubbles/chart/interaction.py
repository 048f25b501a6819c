"""
Interaction controller: hover highlight, click-to-inspect, click-away dismiss.

Pointer events are plain method calls. What each mark should look like after
an event is decided by `target_attributes`, a pure function of (mark, event
target, event kind); the controller only turns those attribute sets into
transitions and tracks per-mark state and the shared tooltip.

Pointer-leave resets *every* mark to its baseline, not just the one that was
hovered.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

from trackbubbles.chart.context import ChartContext
from trackbubbles.chart.join import baseline_attributes, data_radius
from trackbubbles.chart.scales import format_number
from trackbubbles.chart.transitions import Animator
from trackbubbles.domain.models import Mark, Record, Tooltip
from trackbubbles.utils.logging import get_logger

log = get_logger(__name__)

HOVER_SCALE = 1.5
HOVER_STROKE_WIDTH = 3.0
HOVER_OPACITY = 1.0
DIMMED_OPACITY = 0.15
TOOLTIP_OFFSET = (15.0, -28.0)


class MarkState(Enum):
    IDLE = "idle"
    HOVERED = "hovered"
    DIMMED = "dimmed"


class EventKind(Enum):
    POINTER_ENTER = "pointerenter"
    POINTER_LEAVE = "pointerleave"


@dataclass
class PointerEvent:
    page_x: float = 0.0
    page_y: float = 0.0
    propagation_stopped: bool = field(default=False)

    def stop_propagation(self) -> None:
        self.propagation_stopped = True


def to_fixed(value: float, digits: int) -> str:
    """Fixed-point text with ties rounded away from zero: 4.25 -> "4.3"."""
    quantum = Decimal(1).scaleb(-digits)
    return str(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def format_count(n: float) -> str:
    """Abbreviate a follower count: 1200000 -> 1.2M, 45000 -> 45K."""
    if n >= 1e6:
        return f"{to_fixed(n / 1e6, 1)}M"
    if n >= 1e3:
        return f"{to_fixed(n / 1e3, 0)}K"
    return format_number(n)


def tooltip_lines(record: Record) -> Tuple[str, ...]:
    return (
        record.title,
        f"by {record.creator}",
        f"{record.release_year} • {format_number(record.popularity)}%",
        f"{format_count(record.creator_follower_count)} • {to_fixed(record.duration_minutes, 1)}min",
    )


def target_attributes(
    mark: Mark,
    target: Mark,
    kind: EventKind,
    context: ChartContext,
) -> Dict[str, object]:
    """
    Attributes `mark` should transition to when `kind` fires on `target`.
    """
    if kind is EventKind.POINTER_LEAVE:
        return baseline_attributes(mark.record, context)
    if mark is target:
        return {
            "r": data_radius(mark.record, context) * HOVER_SCALE,
            "stroke": context.palette.accent,
            "stroke_width": HOVER_STROKE_WIDTH,
            "opacity": HOVER_OPACITY,
        }
    return {"opacity": DIMMED_OPACITY}


class InteractionController:
    """
    Per-mark hover state plus the session-wide selection and tooltip.
    """

    def __init__(self, marks: Sequence[Mark], context: ChartContext, animator: Animator) -> None:
        self.marks: List[Mark] = list(marks)
        self.context = context
        self.animator = animator
        self.tooltip = Tooltip()
        self.selected: Optional[Mark] = None
        self._states: Dict[int, MarkState] = {m.index: MarkState.IDLE for m in self.marks}

    def state_of(self, mark: Mark) -> MarkState:
        return self._states[mark.index]

    def _apply(self, target: Mark, kind: EventKind) -> None:
        duration = self.context.timings.hover_ms
        for mark in self.marks:
            attrs = target_attributes(mark, target, kind, self.context)
            self.animator.start(mark, attrs, duration=duration)

    def pointer_enter(self, mark: Mark) -> None:
        self._apply(mark, EventKind.POINTER_ENTER)
        for other in self.marks:
            other.highlighted = other is mark
            self._states[other.index] = MarkState.HOVERED if other is mark else MarkState.DIMMED
        log.debug("Mark hovered", extra={"mark": mark.index})

    def pointer_leave(self, mark: Mark) -> None:
        self._apply(mark, EventKind.POINTER_LEAVE)
        for other in self.marks:
            other.highlighted = False
            self._states[other.index] = MarkState.IDLE
        log.debug("Hover cleared", extra={"mark": mark.index})

    def click(self, mark: Mark, event: PointerEvent) -> None:
        """Show the tooltip for `mark` next to the pointer."""
        event.stop_propagation()
        dx, dy = TOOLTIP_OFFSET
        self.selected = mark
        self.tooltip = Tooltip(
            visible=True,
            left=event.page_x + dx,
            top=event.page_y + dy,
            lines=tooltip_lines(mark.record),
        )
        log.debug("Mark selected", extra={"mark": mark.index})

    def document_click(self, event: PointerEvent) -> None:
        if event.propagation_stopped:
            return
        self.selected = None
        self.tooltip = Tooltip(
            visible=False, left=self.tooltip.left, top=self.tooltip.top, lines=self.tooltip.lines
        )

    def dispatch_click(self, event: PointerEvent, mark: Optional[Mark] = None) -> None:
        """Deliver a click the way it bubbles: mark handler first, then document."""
        if mark is not None:
            self.click(mark, event)
        self.document_click(event)


__all__ = [
    "DIMMED_OPACITY",
    "EventKind",
    "HOVER_SCALE",
    "InteractionController",
    "MarkState",
    "PointerEvent",
    "format_count",
    "target_attributes",
    "to_fixed",
    "tooltip_lines",
]
