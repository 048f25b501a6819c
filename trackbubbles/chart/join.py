"""
Render/join engine: one mark per record, bound by working-set index.

The working set never changes after load, so the join only has an enter
phase. Marks start collapsed (r = 0) and grow to their data radius with a
staggered elastic entrance.
"""

from __future__ import annotations

from typing import Dict, List, Sequence

from trackbubbles.chart.context import ChartContext
from trackbubbles.chart.transitions import Animator, elastic_out
from trackbubbles.domain.models import Mark, Record
from trackbubbles.utils.logging import get_logger

log = get_logger(__name__)

BASE_STROKE_WIDTH = 1.5
BASE_OPACITY = 0.6


def data_radius(record: Record, context: ChartContext) -> float:
    return context.scales.radius(record.duration_minutes)


def baseline_attributes(record: Record, context: ChartContext) -> Dict[str, object]:
    """Resting state of a mark; used for both the entrance target and every reset."""
    return {
        "r": data_radius(record, context),
        "stroke": context.palette.neutral,
        "stroke_width": BASE_STROKE_WIDTH,
        "opacity": BASE_OPACITY,
    }


def enter_mark(index: int, record: Record, context: ChartContext) -> Mark:
    scales = context.scales
    baseline = baseline_attributes(record, context)
    return Mark(
        index=index,
        record=record,
        cx=scales.x(record.jittered_x),  # type: ignore[arg-type]
        cy=scales.y(record.popularity),
        r=0.0,
        fill=scales.color(record.creator_follower_count),
        stroke=baseline["stroke"],  # type: ignore[arg-type]
        stroke_width=baseline["stroke_width"],  # type: ignore[arg-type]
        opacity=baseline["opacity"],  # type: ignore[arg-type]
    )


def join_marks(
    records: Sequence[Record],
    context: ChartContext,
    animator: Animator,
) -> List[Mark]:
    """
    Create exactly one mark per record and schedule its entrance.

    Entrance: r -> data radius over `timings.entrance_ms` with elastic
    easing, delayed by index * `timings.entrance_stagger_ms`.
    """
    timings = context.timings
    marks = [enter_mark(i, record, context) for i, record in enumerate(records)]
    for mark in marks:
        animator.start(
            mark,
            {"r": data_radius(mark.record, context)},
            duration=timings.entrance_ms,
            delay=mark.index * timings.entrance_stagger_ms,
            ease=elastic_out,
        )
    log.info("Marks joined", extra={"marks": len(marks)})
    return marks


__all__ = [
    "BASE_OPACITY",
    "BASE_STROKE_WIDTH",
    "baseline_attributes",
    "data_radius",
    "enter_mark",
    "join_marks",
]
