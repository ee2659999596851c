"""OrgSettings — one frozen object for CLI flags, environment and TOML.

Sources, strongest first:

1. keyword arguments, i.e. the global CLI flags Click parsed
2. ``ORGKUBECTL_*`` environment variables (``__`` separates sections,
   e.g. ``ORGKUBECTL_RESOLVER__MAX_WORKERS=8``)
3. the nearest ``orgkubectl.toml`` (see :mod:`orgkubectl.config.discovery`)
4. defaults on the section models in :mod:`orgkubectl.config.models`
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from orgkubectl.config.discovery import find_config
from orgkubectl.config.models import CacheConfig, InventoryConfig, ResolverConfig


def _read_toml(path: Path | None) -> dict[str, Any]:
    if path is None or not path.is_file():
        return {}
    try:
        with path.open("rb") as fh:
            return tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise click.ClickException(f"Invalid TOML in {path}: {exc}") from exc


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Settings source backed by a parsed ``orgkubectl.toml``."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data = _read_toml(toml_path)

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# The TOML path chosen by from_cli(), visible to settings_customise_sources.
_pending = threading.local()


class OrgSettings(BaseSettings):
    """Unified settings for the org-kubectl CLI.

    Stored on the :class:`~orgkubectl.commands._context.AppContext` at the
    CLI root and read by every service.

    Attributes:
        config_path: The TOML file in effect, or None if none was found.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "ORGKUBECTL_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbosity: int = 0
    log_json: bool = False

    # --- TOML sections ---
    cache: CacheConfig = Field(default_factory=CacheConfig)
    resolver: ResolverConfig = Field(default_factory=ResolverConfig)
    inventory: InventoryConfig = Field(default_factory=InventoryConfig)

    @property
    def verbose(self) -> bool:
        return self.verbosity > 0

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """CLI flags, then environment, then TOML. No dotenv or secrets dir."""
        toml = TomlSettingsSource(settings_cls, getattr(_pending, "toml_path", None))
        return init_settings, env_settings, toml

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        search_from: Path | None = None,
        **cli_flags: Any,
    ) -> OrgSettings:
        """Build settings for one CLI invocation.

        An explicit *config_path* replaces discovery; if it names no file,
        no TOML is read. Flags passed as None are left out so they do not
        mask env or TOML values.
        """
        if config_path:
            explicit = Path(config_path)
            toml_path = explicit if explicit.is_file() else None
        else:
            toml_path = find_config(search_from)

        flags = {name: value for name, value in cli_flags.items() if value is not None}

        _pending.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **flags)
        finally:
            _pending.toml_path = None

    def with_overrides(
        self,
        *,
        cache_path: str | None = None,
        no_cache: bool = False,
        max_workers: int | None = None,
        timeout: float | None = None,
    ) -> OrgSettings:
        """Copy with per-command section overrides applied."""
        cache_update: dict[str, Any] = {}
        if cache_path is not None:
            cache_update["path"] = cache_path
        if no_cache:
            cache_update["enabled"] = False

        resolver_update: dict[str, Any] = {}
        if max_workers is not None:
            resolver_update["max_workers"] = max_workers
        if timeout is not None:
            resolver_update["timeout"] = timeout

        return self.model_copy(
            update={
                "cache": self.cache.model_copy(update=cache_update),
                "resolver": self.resolver.model_copy(update=resolver_update),
            }
        )
