"""
End-to-end tests for the CSV -> HTML path.

These tests run the whole pipeline against small catalogs written to a
temporary directory and verify that:
1. A valid catalog produces a chart page with one mark per plottable row
2. Every data loading failure produces the error page and no chart
3. The CLI wires options through to the pipeline and reports failures
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from trackbubbles import main as cli
from trackbubbles.pipeline import build_session, render_chart
from tests.factories import write_catalog

pytestmark = pytest.mark.integration

EXPECTED_MARKS = 5


@pytest.fixture
def runner(monkeypatch) -> CliRunner:
    # keep the root handler off CliRunner's temporary streams
    monkeypatch.setattr(cli, "configure_from_settings", lambda settings: None)
    return CliRunner()


class TestRenderChart:
    """Test the render pipeline on files."""

    def test_valid_catalog_renders_every_plottable_row(self, catalog_csv: Path, tmp_path: Path, test_settings):
        output = tmp_path / "out" / "chart.html"

        outcome = render_chart(catalog_csv, output, settings=test_settings)

        assert outcome.ok
        assert outcome.marks == EXPECTED_MARKS
        page = output.read_text(encoding="utf-8")
        assert page.count("<circle") == EXPECTED_MARKS
        assert "Old" not in page and "Silent" not in page and "Garbled" not in page
        assert [t["label"] for t in outcome.timings] == ["load", "working_set", "scales", "layout", "join"]

    def test_top_n_caps_the_chart(self, catalog_csv: Path, tmp_path: Path, test_settings):
        settings = test_settings.model_copy(update={"top_n": 2})

        session = build_session(catalog_csv, settings)

        assert [r.title for r in session.records] == ["Gamma", "Alpha"]

    def test_missing_file_writes_error_page(self, tmp_path: Path, test_settings):
        output = tmp_path / "chart.html"

        outcome = render_chart(tmp_path / "spotify_sampled.csv", output, settings=test_settings)

        assert not outcome.ok
        assert outcome.marks == 0
        page = output.read_text(encoding="utf-8")
        assert "<svg" not in page
        assert "Looking for: spotify_sampled.csv" in page

    def test_missing_columns_write_error_page(self, tmp_path: Path, test_settings):
        source = tmp_path / "bad.csv"
        source.write_text("track_name,artist_name\nx,y\n", encoding="utf-8")
        output = tmp_path / "chart.html"

        outcome = render_chart(source, output, settings=test_settings)

        assert not outcome.ok
        assert "missing required columns" in outcome.error
        assert "<svg" not in output.read_text(encoding="utf-8")

    def test_empty_file_writes_error_page(self, tmp_path: Path, test_settings):
        source = tmp_path / "empty.csv"
        source.write_text("", encoding="utf-8")
        output = tmp_path / "chart.html"

        outcome = render_chart(source, output, settings=test_settings)

        assert not outcome.ok
        assert "<svg" not in output.read_text(encoding="utf-8")

    def test_catalog_without_plottable_rows_writes_error_page(self, tmp_path: Path, row_factory, test_settings):
        source = write_catalog(
            tmp_path / "old.csv", [row_factory(album_release_date="2015-01-01")]
        )
        output = tmp_path / "chart.html"

        outcome = render_chart(source, output, settings=test_settings)

        assert not outcome.ok
        assert outcome.error == "no plottable rows in the catalog"
        page = output.read_text(encoding="utf-8")
        assert "Looking for: old.csv" in page


class TestCli:
    """Test the typer commands."""

    def test_render_command_writes_chart(self, runner: CliRunner, catalog_csv: Path, tmp_path: Path):
        output = tmp_path / "chart.html"

        result = runner.invoke(cli.app, ["render", "--data", str(catalog_csv), "--output", str(output), "--static"])

        assert result.exit_code == 0, result.output
        assert f"Wrote {EXPECTED_MARKS} marks" in result.output
        page = output.read_text(encoding="utf-8")
        assert "<animate" not in page

    def test_render_command_json_outcome(self, runner: CliRunner, catalog_csv: Path, tmp_path: Path):
        output = tmp_path / "chart.html"

        result = runner.invoke(
            cli.app,
            ["render", "-d", str(catalog_csv), "-o", str(output), "--top", "3", "--json"],
        )

        assert result.exit_code == 0, result.output
        payload = json.loads(result.output)
        assert payload["ok"] is True
        assert payload["marks"] == 3
        assert payload["error"] is None

    def test_render_command_json_reports_failure(self, runner: CliRunner, tmp_path: Path):
        result = runner.invoke(
            cli.app,
            ["render", "-d", str(tmp_path / "missing.csv"), "-o", str(tmp_path / "c.html"), "--json"],
        )

        assert result.exit_code == 1
        payload = json.loads(result.output)
        assert payload["ok"] is False
        assert "not found" in payload["error"]

    @pytest.mark.parametrize("top", ["0", "-1"])
    def test_render_command_rejects_non_positive_top(self, runner: CliRunner, catalog_csv: Path, tmp_path: Path, top: str):
        output = tmp_path / "chart.html"

        result = runner.invoke(cli.app, ["render", "-d", str(catalog_csv), "-o", str(output), "--top", top])

        assert result.exit_code == 2
        assert not output.exists()

    def test_render_command_fails_on_missing_data(self, runner: CliRunner, tmp_path: Path):
        output = tmp_path / "chart.html"

        result = runner.invoke(cli.app, ["render", "--data", str(tmp_path / "missing.csv"), "--output", str(output)])

        assert result.exit_code == 1
        assert output.exists()

    def test_top_command_lists_working_set(self, runner: CliRunner, catalog_csv: Path):
        result = runner.invoke(
            cli.app, ["top", "--data", str(catalog_csv), "--limit", "3"], env={"COLUMNS": "200"}
        )

        assert result.exit_code == 0, result.output
        assert "Gamma" in result.output
        assert "Delta" not in result.output

    def test_info_command(self, runner: CliRunner):
        result = runner.invoke(cli.app, ["info"])

        assert result.exit_code == 0
        assert "plot=960x510" in result.output
        assert "env=" in result.output
