"""
Profiling utilities for the chart pipeline.

Each pipeline stage (load, normalize, scales, layout, join) runs inside
`profile_block` so the CLI can report where time went:

    from trackbubbles.utils.profiler import profile_block

    with profile_block("scales") as stats:
        build_scales(...)

    print(stats.duration_ms, stats.rss_bytes)
"""

from __future__ import annotations

import contextlib
import time
from dataclasses import dataclass, field
from typing import Any, Generator, Optional

try:
    import psutil
except ImportError:  # pragma: no cover - optional until dependencies are installed
    psutil = None  # type: ignore[assignment]


@dataclass
class ProfileStats:
    """
    Container for a single stage measurement.
    """

    label: str
    start_ts: float = field(default=0.0)
    end_ts: float = field(default=0.0)
    duration_seconds: float = field(default=0.0)
    rss_bytes: Optional[int] = field(default=None)
    cpu_percent: Optional[float] = field(default=None)
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def duration_ms(self) -> float:
        return self.duration_seconds * 1000.0

    def as_dict(self) -> dict[str, Any]:
        return {
            "label": self.label,
            "duration_ms": round(self.duration_ms, 3),
            "rss_bytes": self.rss_bytes,
            "cpu_percent": round(self.cpu_percent, 1) if self.cpu_percent is not None else None,
            **self.extra,
        }


@contextlib.contextmanager
def profile_block(label: str) -> Generator[ProfileStats, None, None]:
    """
    Context manager measuring wall time, and RSS/CPU when psutil is present.

    The stats object is filled in on exit, including when the block raises,
    so failed stages still report how long they ran.
    """
    stats = ProfileStats(label=label)
    process = psutil.Process() if psutil else None

    # cpu_percent needs a priming call
    if process:
        process.cpu_percent(interval=None)

    stats.start_ts = time.perf_counter()
    try:
        yield stats
    finally:
        stats.end_ts = time.perf_counter()
        stats.duration_seconds = stats.end_ts - stats.start_ts
        if process:
            stats.rss_bytes = process.memory_info().rss
            stats.cpu_percent = process.cpu_percent(interval=None)


__all__ = ["ProfileStats", "profile_block"]
