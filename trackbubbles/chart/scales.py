"""
Scales: pure mappings from data values to visual values.

Four scales drive the chart. `x` and `y` are linear positions, `radius` is a
square-root scale so circle *area* grows linearly with duration, and `color`
is a logarithmic scale over follower counts whose output is an RGB blend.

Tick generation follows the usual 1/2/5 x 10^n increments so axes always agree
with the scale that positions the marks.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Callable, List, Protocol, Sequence, Tuple, runtime_checkable

from trackbubbles.domain.models import Record

X_PADDING = 0.6
POPULARITY_DOMAIN: Tuple[float, float] = (0.0, 100.0)
RADIUS_RANGE: Tuple[float, float] = (4.0, 25.0)
COLOR_RANGE: Tuple[str, str] = ("#121212", "#1db954")

_E10 = math.sqrt(50)
_E5 = math.sqrt(10)
_E2 = math.sqrt(2)

_HEX = re.compile(r"^#([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")
_RGB = re.compile(r"^rgb\(\s*(-?[\d.]+)\s*,\s*(-?[\d.]+)\s*,\s*(-?[\d.]+)\s*\)$")

RGB = Tuple[float, float, float]


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def format_number(value: float) -> str:
    """Shortest text for a tick value: `10` rather than `10.0`."""
    if float(value).is_integer():
        return str(int(value))
    return repr(round(value, 12))


# --------------------------------------------------------------------------- colors


def parse_color(value: str) -> RGB:
    """Parse `#rgb`, `#rrggbb` or `rgb(r, g, b)` into channel floats."""
    text = value.strip()
    match = _HEX.match(text)
    if match:
        digits = match.group(1)
        if len(digits) == 3:
            digits = "".join(c * 2 for c in digits)
        return (
            float(int(digits[0:2], 16)),
            float(int(digits[2:4], 16)),
            float(int(digits[4:6], 16)),
        )
    match = _RGB.match(text)
    if match:
        return (float(match.group(1)), float(match.group(2)), float(match.group(3)))
    raise ValueError(f"unsupported color: {value!r}")


def format_rgb(rgb: RGB) -> str:
    def clamp(channel: float) -> int:
        if math.isnan(channel):
            return 0
        return max(0, min(255, round_half_up(channel)))

    r, g, b = rgb
    return f"rgb({clamp(r)}, {clamp(g)}, {clamp(b)})"


def interpolate_rgb(start: str, end: str) -> Callable[[float], str]:
    """Per-channel linear blend between two colors, formatted as `rgb()`."""
    a = parse_color(start)
    b = parse_color(end)

    def at(t: float) -> str:
        return format_rgb(tuple(a[i] + (b[i] - a[i]) * t for i in range(3)))  # type: ignore[arg-type]

    return at


# --------------------------------------------------------------------------- ticks


def _tick_spec(start: float, stop: float, count: float) -> Tuple[int, int, float]:
    step = (stop - start) / max(0.0, count)
    power = math.floor(math.log10(step))
    error = step / 10**power
    factor = 10 if error >= _E10 else 5 if error >= _E5 else 2 if error >= _E2 else 1
    if power < 0:
        inc = 10 ** (-power) / factor
        i1 = round_half_up(start * inc)
        i2 = round_half_up(stop * inc)
        if i1 / inc < start:
            i1 += 1
        if i2 / inc > stop:
            i2 -= 1
        inc = -inc
    else:
        inc = 10**power * factor
        i1 = round_half_up(start / inc)
        i2 = round_half_up(stop / inc)
        if i1 * inc < start:
            i1 += 1
        if i2 * inc > stop:
            i2 -= 1
    if i2 < i1 and 0.5 <= count < 2:
        return _tick_spec(start, stop, count * 2)
    return i1, i2, inc


def tick_increment(start: float, stop: float, count: float) -> float:
    """
    Step between ticks; negative values mean "divide by -inc" (sub-unit steps).
    """
    return _tick_spec(start, stop, count)[2]


def ticks(start: float, stop: float, count: float) -> List[float]:
    """Round-valued ticks covering [start, stop], roughly `count` of them."""
    if not count > 0:
        return []
    if start == stop:
        return [start]
    reverse = stop < start
    i1, i2, inc = _tick_spec(stop, start, count) if reverse else _tick_spec(start, stop, count)
    if not i2 >= i1:
        return []
    n = i2 - i1 + 1
    if reverse:
        if inc < 0:
            return [(i2 - i) / -inc for i in range(n)]
        return [(i2 - i) * inc for i in range(n)]
    if inc < 0:
        return [(i1 + i) / -inc for i in range(n)]
    return [(i1 + i) * inc for i in range(n)]


# --------------------------------------------------------------------------- scales


def _normalizer(a: float, b: float) -> Callable[[float], float]:
    span = b - a
    if span:
        return lambda x: (x - a) / span
    # single-valued domain: everything maps to the middle of the range
    return lambda x: 0.5


@runtime_checkable
class Scale(Protocol):
    """
    Common interface of every scale.

    Attributes
    ----------
    domain : tuple
        Data extent (min, max).
    range : tuple
        Visual extent.
    """

    domain: Tuple[float, float]
    range: Tuple

    def __call__(self, value: float):
        ...


@dataclass(frozen=True)
class LinearScale:
    domain: Tuple[float, float]
    range: Tuple[float, float]

    def __call__(self, value: float) -> float:
        t = _normalizer(*self.domain)(value)
        r0, r1 = self.range
        return r0 + (r1 - r0) * t

    def ticks(self, count: int = 10) -> List[float]:
        return ticks(self.domain[0], self.domain[-1], count)

    def nice(self, count: int = 10) -> "LinearScale":
        """Return a copy whose domain is extended to round tick boundaries."""
        start, stop = self.domain
        reverse = stop < start
        if reverse:
            start, stop = stop, start
        prestep = None
        for _ in range(10):
            step = tick_increment(start, stop, count)
            if step == prestep:
                break
            if step > 0:
                start = math.floor(start / step) * step
                stop = math.ceil(stop / step) * step
            elif step < 0:
                start = math.ceil(start * step) / step
                stop = math.floor(stop * step) / step
            else:
                break
            prestep = step
        domain = (stop, start) if reverse else (start, stop)
        return LinearScale(domain=domain, range=self.range)


def _sqrt(value: float) -> float:
    return -math.sqrt(-value) if value < 0 else math.sqrt(value)


@dataclass(frozen=True)
class SqrtScale:
    """Power scale with exponent 1/2."""

    domain: Tuple[float, float]
    range: Tuple[float, float]

    def __call__(self, value: float) -> float:
        t = _normalizer(_sqrt(self.domain[0]), _sqrt(self.domain[1]))(_sqrt(value))
        r0, r1 = self.range
        return r0 + (r1 - r0) * t


@dataclass(frozen=True)
class LogScale:
    """
    Logarithmic scale whose range is a pair of colors.

    Both domain ends must be strictly positive.
    """

    domain: Tuple[float, float]
    range: Tuple[str, str]

    def __post_init__(self) -> None:
        if not (self.domain[0] > 0 and self.domain[1] > 0):
            raise ValueError(f"log scale domain must be positive, got {self.domain}")

    def __call__(self, value: float) -> str:
        t = _normalizer(math.log(self.domain[0]), math.log(self.domain[1]))(
            math.log(value) if value > 0 else math.nan
        )
        return interpolate_rgb(*self.range)(t)

    def sample(self, stops: int) -> List[Tuple[float, float]]:
        """
        `stops + 1` evenly spaced points in log space as (offset, value)
        pairs, offset in [0, 1].
        """
        lo, hi = self.domain
        return [(i / stops, lo * (hi / lo) ** (i / stops)) for i in range(stops + 1)]


@dataclass(frozen=True)
class ScaleSet:
    x: LinearScale
    y: LinearScale
    radius: SqrtScale
    color: LogScale


def _extent(values: Sequence[float]) -> Tuple[float, float]:
    return min(values), max(values)


def build_scales(records: Sequence[Record], plot_width: float, plot_height: float) -> ScaleSet:
    """
    Build the four scales from the working set.

    Domains come from the filtered records, not the raw table, so the
    working-set invariant guarantees a positive color domain.
    """
    if not records:
        raise ValueError("cannot build scales from an empty working set")

    x_min, x_max = _extent([r.jittered_x for r in records])  # type: ignore[misc]
    d_min, d_max = _extent([r.duration_minutes for r in records])
    f_min, f_max = _extent([r.creator_follower_count for r in records])

    return ScaleSet(
        x=LinearScale(domain=(x_min - X_PADDING, x_max + X_PADDING), range=(0.0, plot_width)),
        y=LinearScale(domain=POPULARITY_DOMAIN, range=(plot_height, 0.0)).nice(),
        radius=SqrtScale(domain=(d_min, d_max), range=RADIUS_RANGE),
        color=LogScale(domain=(f_min, f_max), range=COLOR_RANGE),
    )


__all__ = [
    "COLOR_RANGE",
    "LinearScale",
    "LogScale",
    "POPULARITY_DOMAIN",
    "RADIUS_RANGE",
    "Scale",
    "ScaleSet",
    "SqrtScale",
    "X_PADDING",
    "build_scales",
    "format_number",
    "format_rgb",
    "interpolate_rgb",
    "parse_color",
    "round_half_up",
    "tick_increment",
    "ticks",
]
