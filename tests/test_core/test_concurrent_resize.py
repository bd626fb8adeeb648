"""Concurrent resize calls against one cache."""

from concurrent.futures import ThreadPoolExecutor

import pytest
from PIL import Image

from iconcache.core import IconCache
from iconcache.types import ResultStatus


@pytest.mark.parametrize("lock_mode", ["global", "per_key"])
class TestConcurrentResize:
    def test_distinct_keys_all_succeed(self, cache_dir, png_factory, lock_mode):
        sources = [png_factory(40 + i, 20 + i) for i in range(12)]
        cache = IconCache(cache_dir=cache_dir, lock_mode=lock_mode)
        try:
            with ThreadPoolExecutor(max_workers=6) as executor:
                results = list(executor.map(lambda s: cache.resize_and_cache_result(16, s), sources))
        finally:
            cache.close()

        assert all(r.status == ResultStatus.RESIZED for r in results)
        assert len({r.path for r in results}) == len(sources)
        for source, result in zip(sources, results, strict=True):
            with Image.open(result.path) as img:
                assert max(img.size) == 16
        leftovers = [p for p in cache_dir.iterdir() if p.name.startswith(".")]
        assert leftovers == []

    def test_same_key_populated_once(self, cache_dir, sample_image_bytes, lock_mode):
        cache = IconCache(cache_dir=cache_dir, lock_mode=lock_mode)
        try:
            with ThreadPoolExecutor(max_workers=8) as executor:
                results = list(
                    executor.map(lambda _: cache.resize_and_cache_result(16, sample_image_bytes), range(8))
                )
        finally:
            cache.close()

        statuses = [r.status for r in results]
        assert statuses.count(ResultStatus.RESIZED) == 1
        assert statuses.count(ResultStatus.CACHED) == 7
        assert len({r.path for r in results}) == 1
