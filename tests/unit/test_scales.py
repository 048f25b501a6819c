from __future__ import annotations

import math

import pytest

from trackbubbles.chart.scales import (
    LinearScale,
    LogScale,
    SqrtScale,
    build_scales,
    format_number,
    parse_color,
    tick_increment,
    ticks,
)

PLOT_WIDTH = 960.0
PLOT_HEIGHT = 510.0


def test_ticks_use_round_increments() -> None:
    assert ticks(0, 100, 8) == [0, 10, 20, 30, 40, 50, 60, 70, 80, 90, 100]
    assert ticks(0, 1, 5) == [0.0, 0.2, 0.4, 0.6, 0.8, 1.0]
    assert ticks(5, 5, 8) == [5]
    assert ticks(0, 10, 0) == []


def test_ticks_support_fractional_years() -> None:
    values = ticks(2020.5, 2025.1, 8)

    assert values[0] >= 2020.5
    assert values[-1] <= 2025.1
    assert tick_increment(2020.5, 2025.1, 8) == -2  # half-year steps
    assert values[:3] == [2020.5, 2021.0, 2021.5]


def test_nice_extends_to_round_bounds() -> None:
    scale = LinearScale(domain=(0.5, 99.2), range=(0.0, 1.0)).nice()

    assert scale.domain == (0, 100)


def test_y_axis_is_inverted(sample_records) -> None:
    scales = build_scales(sample_records, PLOT_WIDTH, PLOT_HEIGHT)

    assert scales.y(100) < scales.y(0)
    assert scales.y(0) == PLOT_HEIGHT
    assert scales.y(100) == 0
    assert scales.y.domain == (0, 100)


def test_x_domain_is_padded_jitter_extent(sample_records) -> None:
    scales = build_scales(sample_records, PLOT_WIDTH, PLOT_HEIGHT)
    xs = [r.jittered_x for r in sample_records]

    assert scales.x.domain == pytest.approx((min(xs) - 0.6, max(xs) + 0.6))
    assert scales.x.range == (0.0, PLOT_WIDTH)


def test_x_scale_is_monotone(sample_records) -> None:
    scales = build_scales(sample_records, PLOT_WIDTH, PLOT_HEIGHT)
    positions = [scales.x(x) for x in sorted(r.jittered_x for r in sample_records)]

    assert positions == sorted(positions)
    assert all(0 < p < PLOT_WIDTH for p in positions)


def test_radius_is_monotone_and_area_true(sample_records) -> None:
    scales = build_scales(sample_records, PLOT_WIDTH, PLOT_HEIGHT)
    radius = scales.radius
    d_min, d_max = radius.domain

    assert radius(d_min) == pytest.approx(4.0)
    assert radius(d_max) == pytest.approx(25.0)

    durations = sorted(r.duration_minutes for r in sample_records)
    radii = [radius(d) for d in durations]
    assert radii == sorted(radii)
    for d, r in zip(durations, radii):
        expected = (math.sqrt(d) - math.sqrt(d_min)) / (math.sqrt(d_max) - math.sqrt(d_min))
        assert (r - 4.0) / 21.0 == pytest.approx(expected)


def test_sqrt_scale_squares_to_linear_from_zero() -> None:
    scale = SqrtScale(domain=(0.0, 16.0), range=(0.0, 8.0))

    r1, r2 = scale(4.0), scale(9.0)
    assert r1 < r2
    assert r1**2 / r2**2 == pytest.approx(4.0 / 9.0)


def test_single_value_domain_maps_to_middle() -> None:
    assert SqrtScale(domain=(3.0, 3.0), range=(4.0, 25.0))(3.0) == pytest.approx(14.5)
    assert LinearScale(domain=(1.0, 1.0), range=(0.0, 10.0))(1.0) == 5.0


def test_color_scale_ends_and_log_midpoint() -> None:
    color = LogScale(domain=(100.0, 1_000_000.0), range=("#121212", "#1db954"))

    assert color(100.0) == "rgb(18, 18, 18)"
    assert color(1_000_000.0) == "rgb(29, 185, 84)"
    mid = parse_color(color(10_000.0))
    for channel, expected in zip(mid, (23.5, 101.5, 51.0)):
        assert abs(channel - expected) <= 0.5


def test_color_scale_rejects_non_positive_domain() -> None:
    with pytest.raises(ValueError):
        LogScale(domain=(0.0, 10.0), range=("#000000", "#ffffff"))


def test_legend_sampling_is_geometric() -> None:
    color = LogScale(domain=(10.0, 1_000.0), range=("#000000", "#ffffff"))
    samples = color.sample(10)

    assert len(samples) == 11
    assert samples[0] == (0.0, 10.0)
    assert samples[5][1] == pytest.approx(100.0)
    assert samples[10][1] == pytest.approx(1_000.0)


def test_build_scales_rejects_empty_working_set() -> None:
    with pytest.raises(ValueError):
        build_scales([], PLOT_WIDTH, PLOT_HEIGHT)


def test_parse_color_formats() -> None:
    assert parse_color("#1db954") == (29.0, 185.0, 84.0)
    assert parse_color("#fff") == (255.0, 255.0, 255.0)
    assert parse_color("rgb(1, 2, 3)") == (1.0, 2.0, 3.0)
    with pytest.raises(ValueError):
        parse_color("green")


def test_format_number_drops_integral_fraction() -> None:
    assert format_number(10.0) == "10"
    assert format_number(2021.5) == "2021.5"
