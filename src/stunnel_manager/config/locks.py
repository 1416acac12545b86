"""Per-path mutual exclusion for config mutations."""

import os
import threading
from collections.abc import Iterator
from contextlib import contextmanager


class PathLockRegistry:
    """Hands out one re-entrant lock per resolved config path.

    A mutation holds the lock of its path from backup until validation and
    rollback are done, so two writers of the same file never interleave.

    Entries are never evicted: the registry holds one lock per distinct path
    ever mutated, which stays small for a service managing a few configs.
    """

    def __init__(self) -> None:
        self._locks: dict[str, threading.RLock] = {}
        self._lock = threading.Lock()

    @staticmethod
    def _key(path: str) -> str:
        return os.path.realpath(os.path.abspath(path))

    def lock_for(self, path: str) -> threading.RLock:
        """Get (creating if needed) the lock guarding ``path``."""
        key = self._key(path)
        with self._lock:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.RLock()
                self._locks[key] = lock
            return lock

    @contextmanager
    def hold(self, path: str) -> Iterator[None]:
        """Hold the lock of ``path`` for the duration of the block."""
        lock = self.lock_for(path)
        with lock:
            yield

    def __len__(self) -> int:
        with self._lock:
            return len(self._locks)
