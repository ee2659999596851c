"""CacheService — inspect and reset the ancestry cache file."""

from __future__ import annotations

from orgkubectl.domain.errors import CacheSaveError
from orgkubectl.infrastructure.ancestry_cache import clear_cache, load_cache
from orgkubectl.services.base import BaseService
from orgkubectl.services.result import ServiceResult


class CacheService(BaseService):
    """Read-only view of the cache plus a reset. Never needs credentials."""

    def show(self, project_id: str | None = None) -> ServiceResult:
        """Cached ancestor chains, for every project or just *project_id*."""
        op = "cache_show"
        path = self._settings.cache.resolved_path
        loaded = load_cache(path)
        warnings = [f"Ignoring ancestry cache: {loaded.error}"] if loaded.error else []

        entries = loaded.cache.snapshot()
        if project_id is not None:
            if project_id not in entries:
                return ServiceResult.failure(
                    op,
                    "NOT_CACHED",
                    f"No cached ancestry for {project_id}",
                    warnings=warnings,
                    path=str(path),
                )
            entries = {project_id: entries[project_id]}

        items = [{"id": pid, "ancestors": list(chain)} for pid, chain in sorted(entries.items())]
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "path": str(path),
                "status": str(loaded.status),
                "count": len(items),
                "items": items,
            },
            warnings=warnings,
        )

    def clear(self) -> ServiceResult:
        """Delete the cache file so the next run looks everything up again."""
        op = "cache_clear"
        path = self._settings.cache.resolved_path
        try:
            removed = clear_cache(path)
        except CacheSaveError as exc:
            return ServiceResult.failure(op, "CLEAR_FAILED", str(exc), path=str(path))
        return ServiceResult(ok=True, op=op, data={"path": str(path), "removed": removed})
