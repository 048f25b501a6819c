from __future__ import annotations

from typing import Any, Dict, List, Sequence

from rich import box
from rich.console import Console
from rich.table import Table

from trackbubbles.chart.interaction import format_count
from trackbubbles.domain.models import Record


def print_working_set(records: Sequence[Record], limit: int = 20, console: Console | None = None) -> None:
    """
    Render the head of the working set as a rich table, most popular first.
    """
    console = console or Console()

    if not records:
        console.print("[yellow]No plottable records.[/yellow]")
        return

    table = Table(
        title="Working Set",
        box=box.ROUNDED,
        caption=f"Top {min(limit, len(records))} of {len(records)} by popularity",
    )
    table.add_column("#", justify="right", style="dim")
    table.add_column("Track", style="cyan", no_wrap=True)
    table.add_column("Artist", style="magenta")
    table.add_column("Released", justify="right", style="blue")
    table.add_column("Popularity", justify="right", style="bold green")
    table.add_column("Followers", justify="right", style="yellow")
    table.add_column("Duration (min)", justify="right", style="green")
    table.add_column("Explicit", justify="center")

    for rank, record in enumerate(records[:limit], start=1):
        released = record.release_date.isoformat() if record.release_date else "N/A"
        table.add_row(
            str(rank),
            record.title,
            record.creator,
            released,
            f"{record.popularity:.0f}",
            format_count(record.creator_follower_count),
            f"{record.duration_minutes:.1f}",
            "E" if record.explicit else "",
        )

    console.print(table)


def print_timings(timings: List[Dict[str, Any]], console: Console | None = None) -> None:
    """Render per-stage timings collected by the pipeline."""
    console = console or Console()

    if not timings:
        console.print("[yellow]No timings to display.[/yellow]")
        return

    table = Table(title="Pipeline Stages", box=box.ROUNDED)
    table.add_column("Stage", style="cyan", no_wrap=True)
    table.add_column("Duration (ms)", justify="right", style="green")
    table.add_column("RSS (MB)", justify="right", style="yellow")

    for stage in timings:
        rss = stage.get("rss_bytes")
        rss_str = f"{rss / (1024 * 1024):.2f}" if rss else "N/A"
        table.add_row(str(stage.get("label", "?")), f"{stage.get('duration_ms', 0.0):.2f}", rss_str)

    console.print(table)


__all__ = ["print_timings", "print_working_set"]
