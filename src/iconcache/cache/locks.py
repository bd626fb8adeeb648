"""Locks guarding the lookup-or-populate sequence."""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager

from iconcache.types import LockMode


class GlobalLock:
    """One process-wide lock: a single resize runs at a time."""

    def __init__(self) -> None:
        self._lock = threading.RLock()

    @contextmanager
    def hold(self, key: str) -> Iterator[None]:
        with self._lock:
            yield


class KeyedLock:
    """One lock per key, created on demand and dropped when nobody waits on it.

    Unrelated keys populate concurrently; the same key is populated at most
    once at a time.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, threading.RLock] = {}
        self._waiters: dict[str, int] = {}

    @contextmanager
    def hold(self, key: str) -> Iterator[None]:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.RLock()
                self._locks[key] = lock
            self._waiters[key] = self._waiters.get(key, 0) + 1
        try:
            with lock:
                yield
        finally:
            with self._guard:
                self._waiters[key] -= 1
                if self._waiters[key] == 0:
                    del self._waiters[key]
                    del self._locks[key]

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)


def make_lock(mode: LockMode | str) -> GlobalLock | KeyedLock:
    """Build the lock implementation for a configured lock mode."""
    mode = LockMode(mode)
    if mode == LockMode.PER_KEY:
        return KeyedLock()
    return GlobalLock()
