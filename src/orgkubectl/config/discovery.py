"""Locate ``orgkubectl.toml``.

``ORGKUBECTL_CONFIG`` names a file explicitly. Otherwise the nearest
``orgkubectl.toml`` in the working directory or any parent wins.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "orgkubectl.toml"
CONFIG_ENV_VAR = "ORGKUBECTL_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file in effect for *start* (default: cwd), or None.

    A set ``ORGKUBECTL_CONFIG`` that points at nothing disables discovery
    rather than falling back to the walk-up.
    """
    explicit = os.environ.get(CONFIG_ENV_VAR)
    if explicit:
        path = Path(explicit)
        return path if path.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
