"""Tests for config models — defaults and sparse overrides."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from orgkubectl.config.models import CacheConfig, InventoryConfig, ResolverConfig


class TestCacheConfig:
    def test_defaults(self) -> None:
        cfg = CacheConfig()
        assert cfg.enabled is True
        assert cfg.path == "~/.kube/cache/org-kubectl.json"

    def test_resolved_path_expands_home(self, tmp_path: Path) -> None:
        cfg = CacheConfig(path="~/x.json")
        assert cfg.resolved_path == tmp_path / "home" / "x.json"

    def test_absolute_path_untouched(self) -> None:
        assert CacheConfig(path="/srv/c.json").resolved_path == Path("/srv/c.json")


class TestResolverConfig:
    def test_defaults_mean_unbounded(self) -> None:
        cfg = ResolverConfig()
        assert cfg.max_workers == 0
        assert cfg.timeout == 0

    def test_sparse_override(self) -> None:
        cfg = ResolverConfig.model_validate({"max_workers": 16})
        assert cfg.max_workers == 16
        assert cfg.timeout == 0  # default preserved

    @pytest.mark.parametrize("field", ["max_workers", "timeout"])
    def test_negative_rejected(self, field: str) -> None:
        with pytest.raises(ValidationError):
            ResolverConfig.model_validate({field: -1})


class TestInventoryConfig:
    def test_defaults(self) -> None:
        cfg = InventoryConfig()
        assert cfg.num_retries == 3
        assert cfg.page_size == 500

    def test_zero_page_size_rejected(self) -> None:
        with pytest.raises(ValidationError):
            InventoryConfig(page_size=0)
