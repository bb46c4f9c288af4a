# File: app/services/locks.py

"""
Per-roadmap critical sections.

Reading positions and writing new ones must not interleave with another
request doing the same on the same roadmap. One instance is created by
``create_application()`` and shared through ``app.state``.

An entry exists only while some request holds or waits for it, so ids that
never resolve to a roadmap leave nothing behind.
"""

import threading
from contextlib import contextmanager
from typing import Iterator


class _Entry:
    __slots__ = ("lock", "users")

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.users = 0


class RoadmapLocks:
    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[tuple[int, int], _Entry] = {}

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)

    @contextmanager
    def hold(self, owner_id: int, roadmap_id: int) -> Iterator[None]:
        key = (owner_id, roadmap_id)
        with self._guard:
            entry = self._locks.get(key)
            if entry is None:
                entry = self._locks[key] = _Entry()
            entry.users += 1

        try:
            with entry.lock:
                yield
        finally:
            with self._guard:
                entry.users -= 1
                if entry.users == 0:
                    del self._locks[key]
