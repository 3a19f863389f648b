from __future__ import annotations

import threading
from typing import Iterable, Iterator

from viberooms_core.types import CatalogItem


class Catalog:
    """
    Read-only item collection shared by every session.

    `reload` swaps the whole tuple under a lock; readers grab one snapshot
    per request and never see a partial update.
    """

    def __init__(self, items: Iterable[CatalogItem] = ()):
        self._lock = threading.Lock()
        self._items: tuple[CatalogItem, ...] = tuple(items)
        self._version = 0

    def snapshot(self) -> tuple[CatalogItem, ...]:
        with self._lock:
            return self._items

    def versioned_snapshot(self) -> tuple[tuple[CatalogItem, ...], int]:
        with self._lock:
            return self._items, self._version

    def reload(self, items: Iterable[CatalogItem]) -> int:
        fresh = tuple(items)
        with self._lock:
            self._items = fresh
            self._version += 1
            return self._version

    @property
    def version(self) -> int:
        return self._version

    def __len__(self) -> int:
        return len(self.snapshot())

    def __iter__(self) -> Iterator[CatalogItem]:
        return iter(self.snapshot())
