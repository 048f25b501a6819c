from __future__ import annotations

import pytest

from trackbubbles.chart.join import BASE_OPACITY, BASE_STROKE_WIDTH, data_radius
from trackbubbles.pipeline import build_session_from_rows


def test_one_mark_per_record_keyed_by_index(session) -> None:
    assert len(session.marks) == len(session.records)
    for i, (mark, record) in enumerate(zip(session.marks, session.records)):
        assert mark.index == i
        assert mark.record is record


def test_marks_sit_where_the_scales_put_them(session) -> None:
    scales = session.context.scales
    for mark in session.marks:
        record = mark.record
        assert mark.cx == scales.x(record.jittered_x)
        assert mark.cy == scales.y(record.popularity)
        assert mark.fill == scales.color(record.creator_follower_count)


def test_entrance_starts_collapsed_and_staggers(sample_rows, test_settings) -> None:
    fresh = build_session_from_rows(sample_rows, test_settings)
    marks = fresh.marks

    assert all(m.r == 0.0 for m in marks)
    assert fresh.animator.active_count == len(marks)

    fresh.animator.advance(10)
    assert marks[0].r > 0
    assert marks[1].r == 0.0


def test_entrance_settles_at_data_radius(session) -> None:
    for mark in session.marks:
        assert mark.r == data_radius(mark.record, session.context)
        assert mark.stroke == session.context.palette.neutral
        assert mark.stroke_width == BASE_STROKE_WIDTH
        assert mark.opacity == BASE_OPACITY
    assert session.animator.active_count == 0


def test_last_mark_finishes_after_stagger(sample_rows, test_settings) -> None:
    fresh = build_session_from_rows(sample_rows, test_settings)
    timings = fresh.context.timings

    fresh.animator.settle()

    last = len(fresh.marks) - 1
    assert fresh.animator.now == pytest.approx(
        timings.entrance_ms + last * timings.entrance_stagger_ms
    )
