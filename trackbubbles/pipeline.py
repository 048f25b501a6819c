"""
Pipeline for turning a catalog CSV into a bubble chart.

Stages run in a fixed order, each profiled and logged:

    load -> working_set -> scales -> layout -> join

Usage (example from CLI):
    from trackbubbles.pipeline import render_chart

    outcome = render_chart("spotify_sampled.csv", "results/bubbles.html")
    print(outcome.ok, outcome.marks)

A `DataLoadError` aborts before anything is drawn; `render_chart` then writes
the error page in place of the chart.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, TypeVar

from trackbubbles.chart.context import ChartContext, build_context
from trackbubbles.chart.interaction import InteractionController
from trackbubbles.chart.join import join_marks
from trackbubbles.chart.layout import Layout, build_layout
from trackbubbles.chart.normalizer import build_working_set
from trackbubbles.chart.svg import render_document, render_error_document, render_svg
from trackbubbles.chart.transitions import Animator
from trackbubbles.config import Settings, get_settings
from trackbubbles.domain.models import Mark, RawRecord, Record
from trackbubbles.errors import DataLoadError
from trackbubbles.infrastructure.csv_source import load_rows
from trackbubbles.utils.logging import get_logger
from trackbubbles.utils.profiler import ProfileStats, profile_block

log = get_logger(__name__)

T = TypeVar("T")


@dataclass
class ChartSession:
    """
    Everything built for one chart: fixed context and layout, the marks and
    the runtime pieces that mutate them.
    """

    records: List[Record]
    context: ChartContext
    layout: Layout
    marks: List[Mark]
    animator: Animator
    controller: InteractionController
    timings: List[ProfileStats] = field(default_factory=list)

    def svg(self) -> str:
        """Current frame as SVG."""
        return render_svg(self.context, self.layout, self.marks)

    def document(self, animate: bool = True) -> str:
        return render_document(
            self.context, self.layout, self.marks, self.controller.tooltip, animate=animate
        )


@dataclass
class RenderOutcome:
    ok: bool
    output: Path
    marks: int = 0
    error: Optional[str] = None
    timings: List[Dict[str, object]] = field(default_factory=list)


def _stage(name: str, timings: List[ProfileStats], fn: Callable[[], T]) -> T:
    log.info(f"[STAGE START] {name}", extra={"stage": name})
    with profile_block(name) as stats:
        result = fn()
    timings.append(stats)
    log.info(
        f"[STAGE DONE] {name}",
        extra={"stage": name, "duration_ms": round(stats.duration_ms, 3)},
    )
    return result


def build_session_from_rows(
    rows: Sequence[RawRecord],
    settings: Optional[Settings] = None,
    timings: Optional[List[ProfileStats]] = None,
) -> ChartSession:
    """
    Run every stage after loading.

    Raises
    ------
    DataLoadError
        If no row survives the working-set filter.
    """
    settings = settings or get_settings()
    timings = timings if timings is not None else []

    records = _stage(
        "working_set",
        timings,
        lambda: build_working_set(
            rows, limit=settings.top_n, min_year=settings.min_release_year
        ),
    )
    if not records:
        raise DataLoadError("no plottable rows in the catalog")

    context = _stage("scales", timings, lambda: build_context(records, settings))
    layout = _stage("layout", timings, lambda: build_layout(context))
    animator = Animator()
    marks = _stage("join", timings, lambda: join_marks(records, context, animator))

    return ChartSession(
        records=records,
        context=context,
        layout=layout,
        marks=marks,
        animator=animator,
        controller=InteractionController(marks, context, animator),
        timings=timings,
    )


def build_session(path: Path | str, settings: Optional[Settings] = None) -> ChartSession:
    """Load `path` and build the full chart session."""
    timings: List[ProfileStats] = []
    source = Path(path)
    rows = _stage("load", timings, lambda: load_rows(source))
    try:
        return build_session_from_rows(rows, settings, timings)
    except DataLoadError as exc:
        if exc.source is None:
            exc.source = str(source)
        raise


def _write(output: Path, text: str) -> None:
    output.parent.mkdir(parents=True, exist_ok=True)
    with output.open("w", encoding="utf-8") as f:
        f.write(text)


def render_chart(
    path: Path | str,
    output: Path | str,
    settings: Optional[Settings] = None,
    animate: bool = True,
) -> RenderOutcome:
    """
    Build the chart for `path` and write a standalone HTML page to `output`.

    On `DataLoadError` the page holds only the error panel and the outcome
    reports the failure; the error is logged once and not raised.
    """
    target = Path(output)
    try:
        session = build_session(path, settings)
    except DataLoadError as exc:
        log.error("Data loading error", extra={"source": exc.source, "error": str(exc)})
        _write(target, render_error_document(exc))
        return RenderOutcome(ok=False, output=target, error=str(exc))

    _write(target, session.document(animate=animate))
    log.info("Chart written", extra={"output": str(target), "marks": len(session.marks)})
    return RenderOutcome(
        ok=True,
        output=target,
        marks=len(session.marks),
        timings=[stats.as_dict() for stats in session.timings],
    )


__all__ = [
    "ChartSession",
    "RenderOutcome",
    "build_session",
    "build_session_from_rows",
    "render_chart",
]
