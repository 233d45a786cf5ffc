"""Per-key mutual exclusion for filesystem entries."""

import threading
from contextlib import contextmanager
from typing import Dict, Iterator, List


class KeyedLock:
    """
    Registry of locks keyed by identifier.

    A lock exists only while at least one thread holds or waits for it, so
    the registry does not grow with the number of identifiers ever seen.
    Operations on different keys never contend.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: Dict[str, List] = {}

    @contextmanager
    def hold(self, key: str) -> Iterator[None]:
        """
        Hold the lock for key for the duration of the with-block.

        Args:
            key: Identifier to serialize on
        """
        with self._guard:
            entry = self._locks.get(key)
            if entry is None:
                entry = [threading.Lock(), 0]
                self._locks[key] = entry
            entry[1] += 1

        lock = entry[0]
        lock.acquire()
        try:
            yield
        finally:
            lock.release()
            with self._guard:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._locks[key]

    def active_keys(self) -> int:
        """Number of keys currently held or waited on."""
        with self._guard:
            return len(self._locks)
