"""
Synthetic catalog generator for trackbubbles.

Writes a deterministic pseudo-random CSV with the catalog's column set. A
share of rows is intentionally unplottable (zero popularity, pre-2021
releases, blank or garbled numbers) so the working-set filter has something
to drop.
"""

from __future__ import annotations

import csv
import random
import sys
import time
from datetime import date, timedelta
from pathlib import Path

import typer

app = typer.Typer(help="Generate a synthetic music catalog CSV.")

COLUMNS = [
    "track_name",
    "artist_name",
    "track_popularity",
    "artist_popularity",
    "artist_followers",
    "album_total_tracks",
    "track_duration_min",
    "explicit",
    "album_release_date",
]

_WORDS = [
    "midnight", "echo", "golden", "river", "neon", "summer", "ghost", "velvet",
    "fire", "paper", "ocean", "city", "dream", "static", "wild", "heart",
]


def _title(rng: random.Random) -> str:
    return " ".join(w.capitalize() for w in rng.sample(_WORDS, rng.randint(1, 3)))


def _release_date(rng: random.Random) -> str:
    day = date(2018, 1, 1) + timedelta(days=rng.randint(0, 365 * 7))
    precision = rng.random()
    if precision < 0.05:
        return str(day.year)
    if precision < 0.1:
        return f"{day.year}-{day.month:02d}"
    return day.isoformat()


def _generate_rows_csv(csv_path: Path, rows: int, seed: int, invalid_ratio: float = 0.1) -> None:
    rng = random.Random(seed)
    artists = [(f"Artist {i:03d}", int(10 ** rng.uniform(2, 8))) for i in range(max(1, rows // 5))]

    with csv_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(COLUMNS)
        for _ in range(rows):
            artist, followers = rng.choice(artists)
            popularity = str(rng.randint(0, 100))
            followers_cell = str(followers)
            duration = f"{rng.uniform(1.5, 7.5):.2f}"
            if rng.random() < invalid_ratio:
                broken = rng.choice(["popularity", "duration", "followers"])
                if broken == "popularity":
                    popularity = "0"
                elif broken == "duration":
                    duration = ""
                else:
                    followers_cell = "n/a"
            writer.writerow(
                [
                    _title(rng),
                    artist,
                    popularity,
                    rng.randint(0, 100),
                    followers_cell,
                    rng.randint(1, 24),
                    duration,
                    "TRUE" if rng.random() < 0.3 else "FALSE",
                    _release_date(rng),
                ]
            )


@app.command()
def main(
    rows: int = typer.Option(
        2_000,
        "--rows",
        "-r",
        help="Number of rows to generate.",
    ),
    seed: int = typer.Option(
        42,
        "--seed",
        help="Deterministic RNG seed.",
    ),
    invalid_ratio: float = typer.Option(
        0.1,
        "--invalid-ratio",
        help="Share of rows with a deliberately broken field.",
    ),
    output: Path = typer.Option(
        Path("spotify_sampled.csv"),
        "--output",
        "-o",
        help="CSV output path.",
    ),
) -> None:
    """
    Generate a synthetic catalog CSV.
    """
    start = time.perf_counter()
    output.parent.mkdir(parents=True, exist_ok=True)
    typer.echo(f"Generating {rows:,} rows -> {output} (seed={seed})")
    _generate_rows_csv(output, rows=rows, seed=seed, invalid_ratio=invalid_ratio)
    typer.echo(f"CSV generation completed in {time.perf_counter() - start:.2f}s")


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)
