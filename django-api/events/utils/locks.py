"""Process-local keyed locks."""

import threading
from collections.abc import Hashable, Iterator
from contextlib import contextmanager


class KeyedLocks:
    """Lazily created re-entrant lock per key.

    ``dict.setdefault`` is atomic, so creating a lock for one key never
    waits on a lock for another.
    """

    def __init__(self) -> None:
        self._locks: dict[Hashable, threading.RLock] = {}

    def get(self, key: Hashable) -> threading.RLock:
        lock = self._locks.get(key)
        if lock is None:
            lock = self._locks.setdefault(key, threading.RLock())
        return lock

    @contextmanager
    def hold(self, key: Hashable) -> Iterator[None]:
        with self.get(key):
            yield
