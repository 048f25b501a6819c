from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Optional

import typer

from trackbubbles.chart.normalizer import build_working_set
from trackbubbles.config import get_settings
from trackbubbles.errors import DataLoadError
from trackbubbles.infrastructure.csv_source import load_rows
from trackbubbles.pipeline import render_chart
from trackbubbles.reporter import print_timings, print_working_set
from trackbubbles.utils.logging import configure_from_settings

app = typer.Typer(help="Bubble chart of a music catalog: popularity vs. release date.")


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"env={settings.app_env} data={settings.data_path} output={settings.output_path} | "
        f"top_n={settings.top_n} min_year={settings.min_release_year} | "
        f"size={settings.chart_width}x{settings.chart_height} "
        f"plot={settings.plot_width}x{settings.plot_height}"
    )


@app.command()
def render(
    data: Optional[Path] = typer.Option(
        None,
        "--data",
        "-d",
        help="Catalog CSV to plot (default from settings).",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="HTML file to write (default from settings).",
    ),
    top: Optional[int] = typer.Option(
        None,
        "--top",
        "-n",
        min=1,
        help="Override the working-set size.",
    ),
    static: bool = typer.Option(
        False,
        "--static",
        help="Write the settled chart without entrance animation.",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the outcome as JSON instead of tables.",
    ),
) -> None:
    """
    Build the chart and write it as a standalone HTML page.
    """
    settings = get_settings()
    configure_from_settings(settings)
    if top is not None:
        settings = settings.model_copy(update={"top_n": top})

    source = data or Path(settings.data_path)
    target = output or Path(settings.output_path)
    if not as_json:
        typer.echo(f"Rendering {source} -> {target} (top {settings.top_n}).")

    outcome = render_chart(source, target, settings=settings, animate=not static)

    if as_json:
        # stdout carries nothing but the outcome object
        typer.echo(
            json.dumps(
                {
                    "ok": outcome.ok,
                    "output": str(outcome.output),
                    "marks": outcome.marks,
                    "error": outcome.error,
                    "timings": outcome.timings,
                },
                indent=2,
            )
        )
        if not outcome.ok:
            raise typer.Exit(code=1)
        return

    if not outcome.ok:
        typer.echo(f"Data loading error: {outcome.error}", err=True)
        raise typer.Exit(code=1)
    print_timings(outcome.timings)
    typer.echo(f"Wrote {outcome.marks} marks to {outcome.output}.")


@app.command()
def top(
    data: Optional[Path] = typer.Option(
        None,
        "--data",
        "-d",
        help="Catalog CSV to read (default from settings).",
    ),
    limit: int = typer.Option(
        20,
        "--limit",
        "-l",
        help="Number of rows to show.",
    ),
) -> None:
    """
    Show the head of the working set.
    """
    settings = get_settings()
    configure_from_settings(settings)
    source = data or Path(settings.data_path)
    try:
        rows = load_rows(source)
    except DataLoadError as exc:
        typer.echo(f"Data loading error: {exc}", err=True)
        raise typer.Exit(code=1)
    records = build_working_set(rows, limit=settings.top_n, min_year=settings.min_release_year)
    print_working_set(records, limit=limit)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
