"""Async batch dispatcher running blocking resizes on worker threads."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from iconcache.errors.exceptions import IconCacheError, PlaceholderUnavailable
from iconcache.types import ErrorKind, ResizeResult, ResultStatus

if TYPE_CHECKING:
    from iconcache.core import IconCache

logger = logging.getLogger(__name__)


class ResizePool:
    """Runs many resize requests concurrently, bounded by a semaphore.

    Each request still goes through the cache's own lock, so with the default
    global lock the populate steps serialize while source reads overlap.
    """

    def __init__(self, cache: IconCache, max_workers: int = 4) -> None:
        if max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {max_workers}")
        self._cache = cache
        self._max_workers = max_workers

    @property
    def max_workers(self) -> int:
        return self._max_workers

    async def process_batch(self, target_size: int, sources: list[Any]) -> list[ResizeResult]:
        """Resize every source to ``target_size``.

        Returns one ResizeResult per source, in input order.
        """
        semaphore = asyncio.Semaphore(self._max_workers)

        async def worker(source: Any) -> ResizeResult:
            async with semaphore:
                return await asyncio.to_thread(
                    self._cache.resize_and_cache_result, target_size, source
                )

        outcomes = await asyncio.gather(*(worker(s) for s in sources), return_exceptions=True)

        # A rejected item becomes a degraded result instead of failing the batch
        results: list[ResizeResult] = []
        for index, outcome in enumerate(outcomes):
            if isinstance(outcome, PlaceholderUnavailable):
                raise outcome
            if isinstance(outcome, Exception):
                logger.error("Batch item %d failed: %s", index, outcome)
                outcome = self._failed(outcome)
            results.append(outcome)

        degraded = sum(1 for r in results if r.degraded)
        if degraded:
            logger.warning("%d of %d images fell back to the error icon", degraded, len(results))
        return results

    def _failed(self, error: Exception) -> ResizeResult:
        kind = error.kind if isinstance(error, IconCacheError) else ErrorKind.UNKNOWN
        return ResizeResult(
            path=self._cache.fallback.error_image(),
            status=ResultStatus.DEGRADED,
            error_kind=kind,
            reason=str(error),
        )
