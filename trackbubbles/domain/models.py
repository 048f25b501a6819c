"""
Domain models for trackbubbles.

`Record` is the typed, immutable form of one catalog row. `Mark` is the
mutable visual counterpart the join engine creates for every record in the
working set, and `Tooltip` is the single inspect panel shared by all marks.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Optional, Tuple

from pydantic import BaseModel, Field

RawRecord = Dict[str, str]


class Record(BaseModel):
    """
    One track of the catalog after coercion.

    Numeric fields hold NaN when the source text could not be parsed; such
    records never pass the working-set filter.
    """

    title: str = Field("", description="Track name.")
    creator: str = Field("", description="Artist name.")
    popularity: float = Field(..., description="Track popularity, 0-100.")
    creator_popularity: float = Field(float("nan"), description="Artist popularity, 0-100.")
    creator_follower_count: float = Field(..., description="Artist follower count.")
    album_total_tracks: float = Field(float("nan"), description="Tracks on the album.")
    duration_minutes: float = Field(..., description="Track duration in minutes.")
    explicit: bool = Field(False, description="Explicit lyrics flag.")
    release_date: Optional[date] = Field(None, description="Album release date.")
    release_year: Optional[int] = Field(None, description="Year of release_date.")
    release_month: Optional[int] = Field(None, ge=1, le=12, description="Month of release_date.")
    jittered_x: Optional[float] = Field(
        None, description="release_year + release_month / 12 - 0.5"
    )

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "arbitrary_types_allowed": False,
    }


@dataclass
class Mark:
    """
    Visual attributes of the circle bound to one record.

    `index` is the join key: the record's position in the working set.
    """

    index: int
    record: Record
    cx: float
    cy: float
    r: float
    fill: str
    stroke: str
    stroke_width: float
    opacity: float
    highlighted: bool = False

    def attributes(self) -> Dict[str, object]:
        return {
            "cx": self.cx,
            "cy": self.cy,
            "r": self.r,
            "fill": self.fill,
            "stroke": self.stroke,
            "stroke_width": self.stroke_width,
            "opacity": self.opacity,
        }


@dataclass
class Tooltip:
    visible: bool = False
    left: float = 0.0
    top: float = 0.0
    lines: Tuple[str, ...] = field(default_factory=tuple)


__all__ = ["RawRecord", "Record", "Mark", "Tooltip"]
