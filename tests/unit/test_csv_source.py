from __future__ import annotations

from pathlib import Path

import pytest

from trackbubbles.errors import DataLoadError
from trackbubbles.infrastructure.csv_source import REQUIRED_COLUMNS, load_rows
from tests.factories import make_row, write_catalog


def test_load_rows_returns_string_cells(tmp_path: Path) -> None:
    path = write_catalog(tmp_path / "c.csv", [make_row(track_name="A, with comma")])

    rows = load_rows(path)

    assert len(rows) == 1
    assert rows[0]["track_name"] == "A, with comma"
    assert rows[0]["track_popularity"] == "50"


def test_load_rows_strips_byte_order_mark(tmp_path: Path) -> None:
    path = tmp_path / "bom.csv"
    path.write_text("\ufeff" + ",".join(REQUIRED_COLUMNS) + "\nx,y,1,2,3,2022\n", encoding="utf-8")

    assert load_rows(path)[0]["track_name"] == "x"


def test_short_rows_leave_missing_cells_empty(tmp_path: Path) -> None:
    path = tmp_path / "short.csv"
    path.write_text(",".join(REQUIRED_COLUMNS) + "\nonly,two\n", encoding="utf-8")

    row = load_rows(path)[0]

    assert row["artist_name"] == "two"
    assert row["album_release_date"] is None


def test_missing_file_is_a_load_error(tmp_path: Path) -> None:
    with pytest.raises(DataLoadError) as excinfo:
        load_rows(tmp_path / "nope.csv")

    assert excinfo.value.source_name == "nope.csv"
    assert "not found" in str(excinfo.value)


def test_empty_file_is_a_load_error(tmp_path: Path) -> None:
    path = tmp_path / "empty.csv"
    path.write_text("", encoding="utf-8")

    with pytest.raises(DataLoadError, match="is empty"):
        load_rows(path)


def test_missing_columns_are_reported(tmp_path: Path) -> None:
    path = tmp_path / "cols.csv"
    path.write_text("track_name,artist_name\na,b\n", encoding="utf-8")

    with pytest.raises(DataLoadError) as excinfo:
        load_rows(path)

    assert "track_popularity" in str(excinfo.value)
    assert "artist_name," not in str(excinfo.value)


def test_undecodable_file_is_a_load_error(tmp_path: Path) -> None:
    path = tmp_path / "latin.csv"
    path.write_bytes(b"track_name\n\xff\xfe\xfa\n")

    with pytest.raises(DataLoadError):
        load_rows(path)
