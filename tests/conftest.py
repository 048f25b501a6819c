"""
Pytest configuration for trackbubbles.

Provides fixtures for:
- Settings with test-friendly values
- Raw catalog rows and typed records
- CSV files on disk for loader and end-to-end tests
- A fully built chart session with the entrance animation settled
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, List

import pytest

from trackbubbles.chart.normalizer import normalize_row
from trackbubbles.config import Settings
from trackbubbles.domain.models import RawRecord, Record
from trackbubbles.pipeline import ChartSession, build_session_from_rows
from tests.factories import make_row, write_catalog


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """
    Settings fixture with the default geometry and verbose logging.
    """
    return Settings(log_level="DEBUG", top_n=300, min_release_year=2021)


@pytest.fixture
def row_factory() -> Callable[..., RawRecord]:
    return make_row


@pytest.fixture
def sample_rows() -> List[RawRecord]:
    """Five plottable rows spanning the follower, duration and date ranges."""
    return [
        make_row(track_name="Alpha", artist_name="A", track_popularity="85",
                 artist_followers="1200000", track_duration_min="3.5",
                 explicit="TRUE", album_release_date="2022-06-15"),
        make_row(track_name="Beta", artist_name="B", track_popularity="70",
                 artist_followers="500", track_duration_min="2.0",
                 album_release_date="2021-02-01"),
        make_row(track_name="Gamma", artist_name="C", track_popularity="92",
                 artist_followers="45000", track_duration_min="6.5",
                 album_release_date="2023-11-30"),
        make_row(track_name="Delta", artist_name="D", track_popularity="40",
                 artist_followers="80000000", track_duration_min="4.25",
                 album_release_date="2024"),
        make_row(track_name="Epsilon", artist_name="E", track_popularity="63",
                 artist_followers="3000", track_duration_min="3.1",
                 album_release_date="2022-09"),
    ]


@pytest.fixture
def sample_records(sample_rows: List[RawRecord]) -> List[Record]:
    return [normalize_row(row) for row in sample_rows]


@pytest.fixture
def catalog_csv(tmp_path: Path, sample_rows: List[RawRecord]) -> Path:
    rows = sample_rows + [
        make_row(track_name="Old", album_release_date="2019-05-05"),
        make_row(track_name="Silent", track_popularity="0"),
        make_row(track_name="Garbled", artist_followers="lots"),
    ]
    return write_catalog(tmp_path / "catalog.csv", rows)


@pytest.fixture
def session(sample_rows: List[RawRecord], test_settings: Settings) -> ChartSession:
    built = build_session_from_rows(sample_rows, test_settings)
    built.animator.settle()
    return built
