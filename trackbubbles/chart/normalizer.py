"""
Record normalizer: raw CSV rows -> typed records -> working set.

The working set is what the chart actually draws: records that pass
`is_plottable`, ranked by popularity (highest first, ties keep file order)
and cut to the first `limit`.
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime
from typing import Iterable, List, Optional

from trackbubbles.domain.models import RawRecord, Record
from trackbubbles.errors import FieldCoercionAnomaly
from trackbubbles.utils.logging import get_logger

log = get_logger(__name__)

DEFAULT_LIMIT = 300
DEFAULT_MIN_YEAR = 2021

_YEAR_ONLY = re.compile(r"^\d{4}$")
_YEAR_MONTH = re.compile(r"^(\d{4})-(\d{1,2})$")


def coerce_number(value: Optional[str]) -> float:
    """
    Numeric coercion for a CSV cell.

    Blank text is 0, a missing cell or anything unparseable is NaN. Digit
    separators (`1_000`) are not numbers in the export format. Non-finite
    results are also NaN so they can never reach a scale domain.
    """
    if value is None:
        return math.nan
    text = value.strip()
    if not text:
        return 0.0
    if "_" in text:
        return math.nan
    try:
        number = float(text)
    except ValueError:
        return math.nan
    return number if math.isfinite(number) else math.nan


def coerce_flag(value: Optional[str]) -> bool:
    return value == "TRUE"


def parse_release_date(value: Optional[str]) -> date:
    """
    Parse an album release date.

    Accepts the precisions found in catalog exports (`2022`, `2022-06`,
    `2022-06-15`), full ISO timestamps and `MM/DD/YYYY`.

    Raises
    ------
    FieldCoercionAnomaly
        When no format matches.
    """
    text = (value or "").strip()
    if not text:
        raise FieldCoercionAnomaly("album_release_date", value)
    try:
        if _YEAR_ONLY.match(text):
            return date(int(text), 1, 1)
        match = _YEAR_MONTH.match(text)
        if match:
            return date(int(match.group(1)), int(match.group(2)), 1)
        try:
            return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
        except ValueError:
            return datetime.strptime(text, "%m/%d/%Y").date()
    except ValueError as exc:
        raise FieldCoercionAnomaly("album_release_date", value) from exc


def normalize_row(raw: RawRecord) -> Record:
    """Coerce one raw row and derive the release fields."""
    try:
        released: Optional[date] = parse_release_date(raw.get("album_release_date"))
    except FieldCoercionAnomaly:
        released = None

    year = month = None
    jittered_x = None
    if released is not None:
        year, month = released.year, released.month
        jittered_x = year + month / 12 - 0.5

    return Record(
        title=raw.get("track_name") or "",
        creator=raw.get("artist_name") or "",
        popularity=coerce_number(raw.get("track_popularity")),
        creator_popularity=coerce_number(raw.get("artist_popularity")),
        creator_follower_count=coerce_number(raw.get("artist_followers")),
        album_total_tracks=coerce_number(raw.get("album_total_tracks")),
        duration_minutes=coerce_number(raw.get("track_duration_min")),
        explicit=coerce_flag(raw.get("explicit")),
        release_date=released,
        release_year=year,
        release_month=month,
        jittered_x=jittered_x,
    )


def is_plottable(record: Record, min_year: int = DEFAULT_MIN_YEAR) -> bool:
    # NaN compares false against everything, so unparsed fields fail here.
    return (
        0 < record.popularity <= 100
        and record.creator_follower_count > 0
        and record.duration_minutes > 0
        and record.release_year is not None
        and record.release_year >= min_year
    )


def build_working_set(
    rows: Iterable[RawRecord],
    limit: int = DEFAULT_LIMIT,
    min_year: int = DEFAULT_MIN_YEAR,
) -> List[Record]:
    """
    Normalize, filter, rank by popularity descending and truncate.

    Parameters
    ----------
    rows : iterable of RawRecord
        Decoded CSV rows.
    limit : int
        Maximum working-set size, at least 1.
    min_year : int
        Earliest release year kept.

    Raises
    ------
    ValueError
        If `limit` is below 1.
    """
    if limit < 1:
        raise ValueError(f"working-set limit must be at least 1, got {limit}")
    records = [normalize_row(raw) for raw in rows]
    kept = [r for r in records if is_plottable(r, min_year)]
    # sorted() is stable with reverse=True, equal popularity keeps file order
    ranked = sorted(kept, key=lambda r: r.popularity, reverse=True)[:limit]

    log.info(
        "Working set built",
        extra={
            "rows": len(records),
            "plottable": len(kept),
            "dropped": len(records) - len(kept),
            "working_set": len(ranked),
        },
    )
    return ranked


__all__ = [
    "DEFAULT_LIMIT",
    "DEFAULT_MIN_YEAR",
    "build_working_set",
    "coerce_flag",
    "coerce_number",
    "is_plottable",
    "normalize_row",
    "parse_release_date",
]
