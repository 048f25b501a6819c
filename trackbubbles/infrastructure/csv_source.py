"""
CSV source for the catalog table.

Reads the whole file up front: the chart pipeline either gets every row or a
`DataLoadError`, never a partial table.
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import List, Sequence

from trackbubbles.domain.models import RawRecord
from trackbubbles.errors import DataLoadError
from trackbubbles.utils.logging import get_logger

log = get_logger(__name__)

REQUIRED_COLUMNS: tuple[str, ...] = (
    "track_name",
    "artist_name",
    "track_popularity",
    "artist_followers",
    "track_duration_min",
    "album_release_date",
)


def _check_header(header: Sequence[str] | None, path: Path) -> None:
    if not header:
        raise DataLoadError(f"{path.name} is empty", source=path)
    missing = [name for name in REQUIRED_COLUMNS if name not in header]
    if missing:
        raise DataLoadError(
            f"{path.name} is missing required columns: {', '.join(missing)}", source=path
        )


def load_rows(path: Path | str) -> List[RawRecord]:
    """
    Decode a comma-separated file into a list of column-name -> string rows.

    Short rows leave missing cells as None; the normalizer turns those into
    NaN so the row is dropped later.

    Raises
    ------
    DataLoadError
        If the file is missing, unreadable, undecodable, empty, or lacks one
        of `REQUIRED_COLUMNS`.
    """
    source = Path(path)
    log.info("Loading catalog", extra={"source": str(source)})
    try:
        with source.open("r", newline="", encoding="utf-8-sig") as f:
            reader = csv.DictReader(f, strict=True)
            _check_header(reader.fieldnames, source)
            rows: List[RawRecord] = [dict(row) for row in reader]
    except FileNotFoundError as exc:
        raise DataLoadError(f"{source.name} not found", source=source) from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise DataLoadError(f"cannot read {source.name}: {exc}", source=source) from exc
    except csv.Error as exc:
        raise DataLoadError(f"{source.name} is not valid CSV: {exc}", source=source) from exc

    log.info("Catalog loaded", extra={"source": str(source), "rows": len(rows)})
    return rows


__all__ = ["REQUIRED_COLUMNS", "load_rows"]
