"""ProjectService — projects beneath an organization or folder.

Pipeline: LOAD CACHE → LIST → RESOLVE → SAVE CACHE → REPORT

INVARIANT: Cache problems are warnings, never errors. Listing and lookup
failures fail the whole operation with no project list.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

from orgkubectl.domain.errors import (
    AncestryLookupError,
    AuthError,
    CacheSaveError,
    ListError,
    ResolutionCancelledError,
)
from orgkubectl.infrastructure.ancestry_cache import (
    AncestryCache,
    CacheLoadResult,
    CacheStatus,
    load_cache,
    save_cache,
)
from orgkubectl.services.base import BaseService
from orgkubectl.services.resolver import AncestryResolver
from orgkubectl.services.result import ServiceResult

if TYPE_CHECKING:
    import threading

logger = logging.getLogger(__name__)


class ProjectService(BaseService):
    """Lists projects and filters them by ancestry."""

    def list_projects(self) -> ServiceResult:
        """Every project visible to the caller's credentials."""
        op = "list_projects"
        try:
            projects = self._inventory().list_projects()
        except AuthError as exc:
            return ServiceResult.failure(op, "AUTH_FAILED", str(exc))
        except ListError as exc:
            return ServiceResult.failure(op, "LIST_FAILED", str(exc))

        items = [{"id": p} for p in sorted(projects)]
        return ServiceResult(ok=True, op=op, data={"count": len(items), "items": items})

    def find_child_projects(
        self,
        target: str,
        *,
        cancel: threading.Event | None = None,
    ) -> ServiceResult:
        """Projects whose ancestor chain contains *target*.

        The ancestry cache is loaded first and saved last, including after
        a failed resolution, so completed lookups are kept for the next run.
        """
        op = "find_projects"
        started = time.perf_counter()
        warnings: list[str] = []

        loaded = self._load_cache()
        if loaded.error is not None:
            warnings.append(f"Ignoring ancestry cache: {loaded.error}")

        try:
            projects = self._inventory().list_projects()
        except AuthError as exc:
            return ServiceResult.failure(op, "AUTH_FAILED", str(exc), warnings=warnings)
        except ListError as exc:
            return ServiceResult.failure(op, "LIST_FAILED", str(exc), warnings=warnings)
        logger.info("Found %d projects", len(projects))

        cached_before = len(loaded.cache)
        resolver = AncestryResolver(
            self._inventory(),
            loaded.cache,
            max_workers=self._settings.resolver.max_workers,
        )

        error: AncestryLookupError | None = None
        matches: list[str] = []
        try:
            matches = resolver.resolve_all(
                projects,
                target,
                cancel=cancel,
                timeout=self._settings.resolver.timeout or None,
            )
        except AncestryLookupError as exc:
            error = exc
        finally:
            # Runs on interrupts too, so completed lookups survive Ctrl-C.
            self._save_cache(loaded.cache, warnings)

        if isinstance(error, ResolutionCancelledError):
            return ServiceResult.failure(op, "CANCELLED", str(error), warnings=warnings)
        if error is not None:
            return ServiceResult.failure(
                op,
                "ANCESTRY_LOOKUP_FAILED",
                f"could not get project ancestors: {error}",
                warnings=warnings,
                project_id=error.project_id,
            )

        items = [{"id": p} for p in sorted(matches)]
        data: dict[str, Any] = {
            "target": target,
            "count": len(items),
            "items": items,
            "cache": {
                "status": str(loaded.status),
                "path": str(loaded.path) if loaded.path else None,
                "entries": len(loaded.cache),
                "lookups": len(loaded.cache) - cached_before,
            },
        }
        return ServiceResult(
            ok=True,
            op=op,
            data=data,
            warnings=warnings,
            meta={
                "projects_scanned": len(projects),
                "duration_ms": round((time.perf_counter() - started) * 1000, 2),
            },
        )

    # ------------------------------------------------------------------
    # Cache boundary
    # ------------------------------------------------------------------

    def _load_cache(self) -> CacheLoadResult:
        if not self._settings.cache.enabled:
            return CacheLoadResult(cache=AncestryCache(), status=CacheStatus.DISABLED)
        return load_cache(self._settings.cache.resolved_path)

    def _save_cache(self, cache: AncestryCache, warnings: list[str]) -> None:
        """Persist *cache*. Failures become a warning on the result."""
        if not self._settings.cache.enabled:
            return
        try:
            save_cache(self._settings.cache.resolved_path, cache)
        except CacheSaveError as exc:
            logger.warning("Could not save ancestry cache: %s", exc)
            warnings.append(f"Could not save ancestry cache: {exc}")
