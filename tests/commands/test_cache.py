"""Tests for the cache command group."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from orgkubectl.cli import cli


def _seed(cache_path: Path) -> None:
    cache_path.parent.mkdir(parents=True, exist_ok=True)
    cache_path.write_text(json.dumps({"a": ["org1", "folder2"], "b": ["org2"]}))


class TestCacheShow:
    def test_show_all(self, cli_runner: CliRunner, cache_path: Path) -> None:
        _seed(cache_path)
        result = cli_runner.invoke(
            cli, ["--cache-path", str(cache_path), "--json", "cache", "show"]
        )
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["data"]["count"] == 2
        assert data["data"]["items"][0] == {"id": "a", "ancestors": ["org1", "folder2"]}

    def test_show_one_table(self, cli_runner: CliRunner, cache_path: Path) -> None:
        _seed(cache_path)
        result = cli_runner.invoke(cli, ["--cache-path", str(cache_path), "cache", "show", "a"])
        assert result.exit_code == 0
        assert "org1 → folder2" in result.output
        assert "1 cached" in result.output

    def test_show_unknown_project(self, cli_runner: CliRunner, cache_path: Path) -> None:
        _seed(cache_path)
        result = cli_runner.invoke(
            cli, ["--cache-path", str(cache_path), "--json", "cache", "show", "zzz"]
        )
        assert result.exit_code == 1
        assert json.loads(result.output)["error"]["code"] == "NOT_CACHED"

    def test_show_without_cache_file(self, cli_runner: CliRunner, cache_path: Path) -> None:
        result = cli_runner.invoke(
            cli, ["--cache-path", str(cache_path), "--json", "cache", "show"]
        )
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["data"]["status"] == "missing"
        assert data["data"]["count"] == 0

    def test_default_path_under_home(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(cli, ["--json", "cache", "show"])
        assert result.exit_code == 0
        path = json.loads(result.output)["data"]["path"]
        assert path == str(tmp_path / "home" / ".kube" / "cache" / "org-kubectl.json")


class TestCacheClear:
    def test_clear(self, cli_runner: CliRunner, cache_path: Path) -> None:
        _seed(cache_path)
        result = cli_runner.invoke(
            cli, ["--cache-path", str(cache_path), "--json", "cache", "clear"]
        )
        assert result.exit_code == 0
        assert json.loads(result.output)["data"]["removed"] is True
        assert not cache_path.exists()

    def test_clear_missing(self, cli_runner: CliRunner, cache_path: Path) -> None:
        result = cli_runner.invoke(
            cli, ["--cache-path", str(cache_path), "--json", "cache", "clear"]
        )
        assert result.exit_code == 0
        assert json.loads(result.output)["data"]["removed"] is False

    def test_group_help(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["cache", "--help"])
        assert result.exit_code == 0
        assert "show" in result.output
        assert "clear" in result.output
