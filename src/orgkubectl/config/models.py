"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, orgkubectl.toml only contains
overrides. No config file is needed at all for the default behaviour.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

# --- orgkubectl.toml sections ---


class CacheConfig(BaseModel):
    """[cache] section."""

    model_config = {"frozen": True}

    enabled: bool = True
    path: str = "~/.kube/cache/org-kubectl.json"

    @property
    def resolved_path(self) -> Path:
        """``path`` with ``~`` expanded."""
        return Path(self.path).expanduser()


class ResolverConfig(BaseModel):
    """[resolver] section.

    ``max_workers = 0`` runs one lookup thread per cache miss.
    ``timeout = 0`` leaves the resolution unbounded.
    """

    model_config = {"frozen": True}

    max_workers: int = Field(default=0, ge=0)
    timeout: float = Field(default=0.0, ge=0)


class InventoryConfig(BaseModel):
    """[inventory] section."""

    model_config = {"frozen": True}

    num_retries: int = Field(default=3, ge=0)
    page_size: int = Field(default=500, ge=1)
