"""Tests for the typer CLI."""

from __future__ import annotations

import json
from datetime import datetime, timezone

import pytest
from typer.testing import CliRunner

from eaterwatch.cli.main import app
from eaterwatch.core.backends import FetchError
from eaterwatch.core.normalize import RestaurantRecord
from eaterwatch.core.orchestrator import RunStats
from eaterwatch.persistence import write_history
from eaterwatch.persistence.models import Snapshot, VersionHistory

runner = CliRunner()


def _history(target_url: str) -> VersionHistory:
    first = [RestaurantRecord(name="Pidgin", slug="pidgin"), RestaurantRecord(name="Suyo", slug="suyo")]
    second = [RestaurantRecord(name="Kissa Tanto", slug="kissa-tanto"), RestaurantRecord(name="Suyo", slug="suyo")]
    return VersionHistory(
        source=target_url,
        versions=[
            Snapshot(id="20180101000000", date="2018-01-01", source_url="a", restaurants=first),
            Snapshot(id="live", date="2026-01-15", source_url=target_url, restaurants=second),
        ],
        generated_at=datetime(2026, 1, 15, tzinfo=timezone.utc),
    )


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return tmp_path


class TestVersionCommand:
    def test_version_flag(self) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output


class TestVersionsCommand:
    def test_lists_versions(self, workdir, target_url) -> None:
        path = write_history(_history(target_url), workdir / "versions.json")

        result = runner.invoke(app, ["versions", "--input", str(path), "--top", "1"])

        assert result.exit_code == 0
        assert "2018-01-01" in result.output
        assert "live" in result.output
        assert "Suyo" in result.output

    def test_missing_history(self, workdir) -> None:
        result = runner.invoke(app, ["versions", "--input", str(workdir / "none.json")])
        assert result.exit_code == 1


class TestExtractCommand:
    def test_extracts_saved_page(self, workdir, map_points_page, make_names) -> None:
        page = workdir / "capture.html"
        page.write_text(map_points_page(make_names(30)), encoding="utf-8")

        result = runner.invoke(app, ["extract", str(page)])

        assert result.exit_code == 0
        assert "30 restaurants via map_points" in result.output

    def test_page_without_list(self, workdir) -> None:
        page = workdir / "empty.html"
        page.write_text("<html><body>nothing</body></html>", encoding="utf-8")

        assert runner.invoke(app, ["extract", str(page)]).exit_code == 1

    def test_missing_file(self, workdir) -> None:
        assert runner.invoke(app, ["extract", str(workdir / "nope.html")]).exit_code == 1


class TestSyncCommand:
    def test_writes_artifact(self, workdir, target_url, monkeypatch) -> None:
        seen = {}

        async def fake_build_history(config):
            seen["archive"] = config.archive.enabled
            return _history(target_url), RunStats(versions_accepted=2, live_added=True)

        monkeypatch.setattr("eaterwatch.cli.commands.sync.build_history", fake_build_history)

        result = runner.invoke(app, ["sync", "--no-archive", "--output", "out/versions.json"])

        assert result.exit_code == 0, result.output
        assert seen["archive"] is False
        data = json.loads((workdir / "out" / "versions.json").read_text(encoding="utf-8"))
        assert [v["id"] for v in data["versions"]] == ["20180101000000", "live"]
        assert data["generatedAt"] == "2026-01-15T00:00:00.000Z"

    def test_live_fetch_failure_exits_nonzero(self, workdir, target_url, monkeypatch) -> None:
        async def failing_build_history(config):
            raise FetchError(f"HTTP 503 for {target_url}", url=target_url, status_code=503)

        monkeypatch.setattr("eaterwatch.cli.commands.sync.build_history", failing_build_history)

        result = runner.invoke(app, ["sync"])

        assert result.exit_code == 1
        assert not (workdir / "data" / "versions.json").exists()

    def test_bad_config_exits_nonzero(self, workdir) -> None:
        (workdir / "app.yaml").write_text("target_url: not-a-url\n", encoding="utf-8")
        assert runner.invoke(app, ["sync", "--config", "app.yaml"]).exit_code == 1
