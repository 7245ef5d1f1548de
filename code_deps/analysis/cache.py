"""Per-file dependency cache shared by concurrent analyses."""

from __future__ import annotations

import threading

from code_deps.models import Dependency


class DependencyCache:
    """Thread-safe mapping of file path to its extracted dependencies.

    Entries live as long as the cache; nothing invalidates them when a
    file changes on disk.
    """

    def __init__(self):
        self._entries: dict[str, list[Dependency]] = {}
        self._lock = threading.Lock()

    def get(self, path: str) -> list[Dependency] | None:
        with self._lock:
            return self._entries.get(path)

    def set(self, path: str, dependencies: list[Dependency]) -> None:
        with self._lock:
            self._entries[path] = dependencies

    def set_default(self, path: str, dependencies: list[Dependency]) -> list[Dependency]:
        """Store *dependencies* unless an entry exists; return the stored list.

        The first writer for a path wins, so concurrent analyses of the same
        file all observe one result.
        """
        with self._lock:
            return self._entries.setdefault(path, dependencies)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, path: object) -> bool:
        with self._lock:
            return path in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
