"""
Time-driven attribute transitions for marks.

The animator runs on a virtual millisecond clock that callers advance
explicitly, so rendering a frame at any point in time is deterministic.

Each mark holds at most one live transition. Starting a new one hands out a
fresh token and invalidates the previous token; a superseded transition is
dropped the next time the clock moves and never writes again.
"""

from __future__ import annotations

import itertools
import math
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Mapping, Optional

from trackbubbles.chart.scales import interpolate_rgb
from trackbubbles.domain.models import Mark
from trackbubbles.utils.logging import get_logger

log = get_logger(__name__)

Ease = Callable[[float], float]
Interpolator = Callable[[float], object]

ANIMATABLE = frozenset({"cx", "cy", "r", "fill", "stroke", "stroke_width", "opacity"})


def linear(t: float) -> float:
    return t


def cubic_in_out(t: float) -> float:
    t *= 2
    if t <= 1:
        return t * t * t / 2
    t -= 2
    return (t * t * t + 2) / 2


def _tpmt(x: float) -> float:
    return (2 ** (-10 * x) - 0.0009765625) * 1.0009775171065494


def make_elastic_out(amplitude: float = 1.0, period: float = 0.3) -> Ease:
    """Elastic ease-out: overshoots the target and settles with a decaying wobble."""
    amplitude = max(1.0, amplitude)
    p = period / (2 * math.pi)
    s = math.asin(1 / amplitude) * p

    def elastic_out(t: float) -> float:
        return 1 - amplitude * _tpmt(t) * math.sin((t + s) / p)

    return elastic_out


elastic_out = make_elastic_out()


def interpolate(start: object, end: object) -> Interpolator:
    """Numeric lerp, or an RGB blend when both ends are color strings."""
    if isinstance(start, str) and isinstance(end, str):
        return interpolate_rgb(start, end)
    if isinstance(start, (int, float)) and isinstance(end, (int, float)):
        a, b = float(start), float(end)
        return lambda t: a + (b - a) * t
    raise TypeError(f"cannot interpolate {start!r} -> {end!r}")


def sample_ease(ease: Ease, steps: int) -> List[float]:
    """`steps + 1` evenly spaced samples of an easing curve, t in [0, 1]."""
    return [ease(i / steps) for i in range(steps + 1)]


@dataclass
class Transition:
    token: int
    mark: Mark
    targets: Dict[str, object]
    start_at: float
    duration: float
    ease: Ease
    interpolators: Optional[Dict[str, Interpolator]] = field(default=None)

    @property
    def end_at(self) -> float:
        return self.start_at + self.duration


class Animator:
    """
    Scheduler for mark transitions on a virtual clock.

    Parameters
    ----------
    now : float
        Initial clock value in milliseconds.
    """

    def __init__(self, now: float = 0.0) -> None:
        self.now = now
        self._counter = itertools.count(1)
        self._current: Dict[int, int] = {}
        self._live: List[Transition] = []

    @property
    def active_count(self) -> int:
        return sum(1 for tr in self._live if self._current.get(tr.mark.index) == tr.token)

    def current_token(self, mark: Mark) -> Optional[int]:
        return self._current.get(mark.index)

    def is_current(self, token: int, mark: Mark) -> bool:
        return self._current.get(mark.index) == token

    def start(
        self,
        mark: Mark,
        targets: Mapping[str, object],
        duration: float,
        delay: float = 0.0,
        ease: Ease = cubic_in_out,
    ) -> int:
        """
        Schedule a transition of `targets` on `mark` and return its token.

        Start values are read from the mark when the delay elapses, so a
        transition picks up wherever an interrupted one left off.
        """
        unknown = set(targets) - ANIMATABLE
        if unknown:
            raise ValueError(f"not animatable: {', '.join(sorted(unknown))}")

        token = next(self._counter)
        self._current[mark.index] = token
        self._live.append(
            Transition(
                token=token,
                mark=mark,
                targets=dict(targets),
                start_at=self.now + max(0.0, delay),
                duration=max(0.0, duration),
                ease=ease,
            )
        )
        return token

    def advance(self, ms: float) -> None:
        """Move the clock forward and apply every live transition."""
        if ms < 0:
            raise ValueError("the clock only moves forward")
        self.now += ms
        still_live: List[Transition] = []
        for tr in self._live:
            if not self.is_current(tr.token, tr.mark):
                continue
            if self.now < tr.start_at:
                still_live.append(tr)
                continue
            if tr.interpolators is None:
                tr.interpolators = {
                    name: interpolate(getattr(tr.mark, name), target)
                    for name, target in tr.targets.items()
                }
            t = 1.0 if tr.duration == 0 else min(1.0, (self.now - tr.start_at) / tr.duration)
            if t >= 1.0:
                for name, target in tr.targets.items():
                    setattr(tr.mark, name, target)
                continue
            eased = tr.ease(t)
            for name, interp in tr.interpolators.items():
                setattr(tr.mark, name, interp(eased))
            still_live.append(tr)
        self._live = still_live

    def settle(self) -> None:
        """Run the clock until every live transition has finished."""
        live = [tr for tr in self._live if self.is_current(tr.token, tr.mark)]
        if not live:
            self._live = []
            return
        end = max(tr.end_at for tr in live)
        self.advance(max(0.0, end - self.now))
        log.debug("Transitions settled", extra={"clock_ms": self.now})


__all__ = [
    "ANIMATABLE",
    "Animator",
    "Ease",
    "Transition",
    "cubic_in_out",
    "elastic_out",
    "interpolate",
    "linear",
    "make_elastic_out",
    "sample_ease",
]
