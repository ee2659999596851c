"""Shared pytest fixtures and test helpers for org-kubectl tests."""

from __future__ import annotations

import threading
from collections.abc import Iterable
from pathlib import Path

import pytest
from click.testing import CliRunner

from orgkubectl.config.settings import OrgSettings
from orgkubectl.domain.errors import AncestryLookupError, ListError


class FakeInventory:
    """In-memory stand-in for the Cloud Resource Manager client.

    Args:
        ancestries: project id → ancestor ids returned by ``get_ancestry``.
        projects: project ids returned by ``list_projects`` (default: the
            keys of *ancestries*).
        failing: project ids whose ancestry lookup raises.
        list_fails: make ``list_projects`` raise ``ListError``.
        block: project ids whose lookup waits on :attr:`release`.
    """

    def __init__(
        self,
        ancestries: dict[str, list[str]] | None = None,
        *,
        projects: Iterable[str] | None = None,
        failing: Iterable[str] = (),
        list_fails: bool = False,
        block: Iterable[str] = (),
    ) -> None:
        self.ancestries = dict(ancestries or {})
        self.projects = list(projects) if projects is not None else list(self.ancestries)
        self.failing = set(failing)
        self.list_fails = list_fails
        self.block = set(block)
        self.release = threading.Event()
        self.calls: list[str] = []
        self._lock = threading.Lock()

    def list_projects(self) -> list[str]:
        if self.list_fails:
            raise ListError("could not list projects: 403 Forbidden")
        return list(self.projects)

    def get_ancestry(self, project_id: str) -> list[str]:
        with self._lock:
            self.calls.append(project_id)
        if project_id in self.block:
            self.release.wait(timeout=5)
        if project_id in self.failing:
            raise AncestryLookupError(project_id, f"could not get ancestry for {project_id}")
        return list(self.ancestries.get(project_id, []))


class NoRemoteInventory:
    """Client that fails the test if any remote call is made."""

    def list_projects(self) -> list[str]:
        raise AssertionError("unexpected list_projects call")

    def get_ancestry(self, project_id: str) -> list[str]:
        raise AssertionError(f"unexpected get_ancestry call for {project_id}")


# Scenario shared across resolver, service, and command tests.
SCENARIO_ANCESTRIES: dict[str, list[str]] = {
    "a": ["org1", "folder2"],
    "b": ["org2"],
    "c": ["folder2", "org1"],
}


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep every test away from the real home directory, config, and env."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(tmp_path)
    for name in (
        "ORGKUBECTL_CONFIG",
        "ORGKUBECTL_QUIET",
        "ORGKUBECTL_JSON_OUTPUT",
        "ORGKUBECTL_CACHE__PATH",
        "ORGKUBECTL_RESOLVER__MAX_WORKERS",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def cache_path(tmp_path: Path) -> Path:
    """Cache file location inside the test's temp dir (not created)."""
    return tmp_path / "cache" / "org-kubectl.json"


@pytest.fixture
def settings(cache_path: Path) -> OrgSettings:
    """Default settings with the cache redirected to *cache_path*."""
    return OrgSettings.from_cli().with_overrides(cache_path=str(cache_path))


@pytest.fixture
def scenario_inventory() -> FakeInventory:
    return FakeInventory(SCENARIO_ANCESTRIES)


@pytest.fixture
def patch_inventory(monkeypatch: pytest.MonkeyPatch):
    """Route the lazily built Google client to a fake for CLI tests."""

    def _patch(fake: FakeInventory) -> FakeInventory:
        monkeypatch.setattr(
            "orgkubectl.infrastructure.inventory.GoogleInventoryClient",
            lambda **_kwargs: fake,
        )
        return fake

    return _patch
