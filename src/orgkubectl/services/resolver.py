"""Ancestry resolution — cache-first membership tests with a cancel-on-error pool.

Pipeline: PARTITION (cache hits inline) → FAN OUT (one task per miss) → COLLECT

INVARIANT: resolve_all returns either the complete filtered list or raises.
A partial list is never returned.
"""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import FIRST_EXCEPTION, Future, ThreadPoolExecutor, wait
from typing import TYPE_CHECKING

from orgkubectl.domain.errors import AncestryLookupError, ResolutionCancelledError
from orgkubectl.domain.types import AncestorChain, ProjectId, ResourceId, as_chain, chain_contains

if TYPE_CHECKING:
    from collections.abc import Iterable

    from orgkubectl.infrastructure.ancestry_cache import AncestryCache
    from orgkubectl.infrastructure.inventory import InventoryClient

logger = logging.getLogger(__name__)

# How often the coordinator wakes to check caller cancellation and timeout.
_POLL_INTERVAL = 0.1


class AncestryResolver:
    """Decides which projects sit beneath a target ancestor.

    Parameters:
        client: Inventory client used on cache misses.
        cache: Shared ancestry cache, mutated in place.
        max_workers: Upper bound on concurrent lookups. ``0`` means one
            worker per distinct cache miss.
    """

    def __init__(
        self,
        client: InventoryClient,
        cache: AncestryCache,
        *,
        max_workers: int = 0,
    ) -> None:
        self._client = client
        self._cache = cache
        self._max_workers = max_workers

    @property
    def cache(self) -> AncestryCache:
        return self._cache

    # ------------------------------------------------------------------
    # Single project
    # ------------------------------------------------------------------

    def resolve(self, project_id: ProjectId, target: ResourceId) -> bool:
        """Whether *target* is an ancestor of *project_id*.

        Cache hits never touch the network. Misses query the inventory and
        cache the chain whether or not it matches.

        Raises:
            AncestryLookupError: the remote query failed.
        """
        chain = self._cache.get(project_id)
        if chain is not None:
            logger.debug("Cache hit for %s", project_id)
            return chain_contains(chain, target)
        return chain_contains(self._fetch(project_id), target)

    def _fetch(self, project_id: ProjectId) -> AncestorChain:
        """Remote lookup for one project, recorded in the cache."""
        logger.debug("Looking up ancestry for %s", project_id)
        chain = as_chain(self._client.get_ancestry(project_id))
        for ancestor in chain:
            logger.debug("ancestry for %s: %s", project_id, ancestor)
        self._cache.put(project_id, chain)
        return chain

    # ------------------------------------------------------------------
    # Coordinator
    # ------------------------------------------------------------------

    def resolve_all(
        self,
        projects: Iterable[ProjectId],
        target: ResourceId,
        *,
        cancel: threading.Event | None = None,
        timeout: float | None = None,
    ) -> list[ProjectId]:
        """Projects whose ancestry contains *target*, in no particular order.

        Cache hits are resolved on the calling thread. Each distinct miss is
        looked up on a worker thread. The first failure stops new lookups,
        cancels queued ones, and is raised; matches gathered so far are
        dropped. Chains fetched before the failure stay cached.

        Args:
            projects: Project ids to test.
            target: Ancestor id that marks a project as in scope.
            cancel: Caller-owned event; setting it aborts the resolution.
            timeout: Seconds before the resolution is abandoned.

        Raises:
            AncestryLookupError: a lookup failed.
            ResolutionCancelledError: *cancel* was set or *timeout* elapsed.
        """
        logger.info("Looking for projects with ancestor %s", target)
        matches: list[ProjectId] = []
        misses: list[ProjectId] = []
        for project_id in dict.fromkeys(projects):
            chain = self._cache.get(project_id)
            if chain is None:
                misses.append(project_id)
            elif chain_contains(chain, target):
                matches.append(project_id)

        logger.debug("%d cache hits matched, %d projects need lookup", len(matches), len(misses))
        if not misses:
            return matches

        deadline = time.monotonic() + timeout if timeout else None
        _check_cancelled(cancel, deadline)

        abort = threading.Event()
        matches_lock = threading.Lock()

        def task(project_id: ProjectId) -> None:
            if abort.is_set() or (cancel is not None and cancel.is_set()):
                return
            try:
                chain = self._fetch(project_id)
            except BaseException:
                abort.set()
                raise
            if chain_contains(chain, target):
                logger.debug("%s is beneath %s", project_id, target)
                with matches_lock:
                    matches.append(project_id)

        workers = len(misses)
        if self._max_workers > 0:
            workers = min(workers, self._max_workers)

        executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="ancestry")
        try:
            futures = {executor.submit(task, project_id): project_id for project_id in misses}
            self._wait_all(futures, cancel, deadline)
        except BaseException:
            abort.set()
            # Lookups already in flight finish in the background. Their
            # matches are dropped; their cache writes stay valid.
            executor.shutdown(wait=False, cancel_futures=True)
            raise
        executor.shutdown(wait=True)

        return matches

    @staticmethod
    def _wait_all(
        futures: dict[Future[None], ProjectId],
        cancel: threading.Event | None,
        deadline: float | None,
    ) -> None:
        """Block until every future succeeds, or raise the first failure.

        *futures* maps each lookup to its project id so unexpected client
        errors still name the project that failed.
        """
        pending: set[Future[None]] = set(futures)
        while pending:
            done, pending = wait(pending, timeout=_POLL_INTERVAL, return_when=FIRST_EXCEPTION)
            for future in done:
                exc = future.exception()
                if exc is None:
                    continue
                if isinstance(exc, AncestryLookupError):
                    raise exc
                project_id = futures[future]
                raise AncestryLookupError(
                    project_id, f"ancestry lookup failed for {project_id}: {exc}"
                ) from exc
            _check_cancelled(cancel, deadline)


def _check_cancelled(cancel: threading.Event | None, deadline: float | None) -> None:
    if cancel is not None and cancel.is_set():
        raise ResolutionCancelledError()
    if deadline is not None and time.monotonic() >= deadline:
        raise ResolutionCancelledError("ancestry resolution timed out")
