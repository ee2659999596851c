"""Persisted project → ancestor-chain mapping.

The cache file is a plain JSON object mapping project ids to arrays of
ancestor ids::

    {"my-project": ["my-project", "1234", "5678"]}

INVARIANT: loading never fails the run. A missing, unreadable, or corrupt
file yields an empty cache and a :class:`CacheLoadResult` describing why.
Saving raises :class:`CacheSaveError`; callers report it as a warning.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

from orgkubectl.domain.errors import CacheLoadError, CacheSaveError
from orgkubectl.domain.types import AncestorChain, ProjectId, as_chain

logger = logging.getLogger(__name__)


class AncestryCache:
    """Thread-safe in-memory mapping guarded by a single lock.

    Entries are never re-fetched within a run; writing the same project
    twice keeps the last chain.
    """

    def __init__(self, entries: Mapping[ProjectId, AncestorChain] | None = None) -> None:
        self._lock = threading.Lock()
        self._entries: dict[ProjectId, AncestorChain] = {}
        for project_id, chain in (entries or {}).items():
            self._entries[project_id] = as_chain(chain)

    def get(self, project_id: ProjectId) -> AncestorChain | None:
        """Return the cached chain, or None on a miss."""
        with self._lock:
            return self._entries.get(project_id)

    def put(self, project_id: ProjectId, chain: AncestorChain) -> None:
        with self._lock:
            self._entries[project_id] = as_chain(chain)

    def snapshot(self) -> dict[ProjectId, AncestorChain]:
        """Copy of the current entries, safe to iterate without the lock."""
        with self._lock:
            return dict(self._entries)

    def __contains__(self, project_id: object) -> bool:
        with self._lock:
            return project_id in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __iter__(self) -> Iterator[ProjectId]:
        return iter(self.snapshot())


class CacheStatus(StrEnum):
    """Outcome of reading the cache file."""

    LOADED = "loaded"
    MISSING = "missing"
    UNREADABLE = "unreadable"
    CORRUPT = "corrupt"
    DISABLED = "disabled"


@dataclass(frozen=True)
class CacheLoadResult:
    """A loaded cache plus how it was obtained.

    ``error`` is set only for ``UNREADABLE`` and ``CORRUPT``; the cache is
    empty in both cases and the run proceeds.
    """

    cache: AncestryCache
    status: CacheStatus
    path: Path | None = None
    error: CacheLoadError | None = None

    @property
    def degraded(self) -> bool:
        return self.error is not None


def _decode(raw: str) -> dict[ProjectId, AncestorChain]:
    """Parse and validate the JSON payload. Raises ValueError on bad shape."""
    data = json.loads(raw)
    if not isinstance(data, dict):
        msg = f"expected a JSON object, got {type(data).__name__}"
        raise ValueError(msg)

    entries: dict[ProjectId, AncestorChain] = {}
    for project_id, chain in data.items():
        if not isinstance(chain, list) or not all(isinstance(a, str) for a in chain):
            msg = f"ancestors of {project_id!r} must be a list of strings"
            raise ValueError(msg)
        entries[project_id] = as_chain(chain)
    return entries


def load_cache(path: Path) -> CacheLoadResult:
    """Read the cache file at *path*. Never raises."""
    try:
        raw = path.read_text(encoding="utf-8")
        entries = _decode(raw)
    except FileNotFoundError:
        logger.debug("No ancestry cache at %s", path)
        return CacheLoadResult(cache=AncestryCache(), status=CacheStatus.MISSING, path=path)
    except OSError as exc:
        err = CacheLoadError(f"could not open cache file {path}: {exc}")
        logger.warning("Ignoring ancestry cache: %s", err)
        return CacheLoadResult(
            cache=AncestryCache(), status=CacheStatus.UNREADABLE, path=path, error=err
        )
    except ValueError as exc:
        # JSONDecodeError and UnicodeDecodeError are both ValueError subclasses
        err = CacheLoadError(f"could not decode cache {path}: {exc}")
        logger.warning("Ignoring ancestry cache: %s", err)
        return CacheLoadResult(
            cache=AncestryCache(), status=CacheStatus.CORRUPT, path=path, error=err
        )

    logger.debug("Loaded %d cached ancestries from %s", len(entries), path)
    return CacheLoadResult(cache=AncestryCache(entries), status=CacheStatus.LOADED, path=path)


def save_cache(path: Path, cache: AncestryCache) -> None:
    """Write *cache* to *path* atomically.

    Creates parent directories. The previous file stays intact if any step
    fails.
    """
    payload = {pid: list(chain) for pid, chain in sorted(cache.snapshot().items())}
    tmp_name: str | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
        )
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            json.dump(payload, fh, indent=2)
            fh.write("\n")
        os.replace(tmp_name, path)
        tmp_name = None
    except (OSError, TypeError) as exc:
        raise CacheSaveError(f"could not write cache file {path}: {exc}") from exc
    finally:
        if tmp_name is not None:
            Path(tmp_name).unlink(missing_ok=True)
    logger.debug("Saved %d cached ancestries to %s", len(payload), path)


def clear_cache(path: Path) -> bool:
    """Delete the cache file. Returns False if there was nothing to delete."""
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    except OSError as exc:
        raise CacheSaveError(f"could not delete cache file {path}: {exc}") from exc
    return True
