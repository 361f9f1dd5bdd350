from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, TypeVar

from invoice_actions.core.ports.outbound.cache import PathCache

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class InMemoryPathCache(PathCache):
    """
    Rendered data per logical path, dropped when the path is revalidated.

    A render that overlaps a revalidation of the same path is returned to its
    caller but not stored.
    """

    _entries: Dict[str, Any] = field(default_factory=dict)
    _generations: Dict[str, int] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock)

    def get_or_render(self, path: str, render: Callable[[], T]) -> T:
        with self._lock:
            if path in self._entries:
                return self._entries[path]
            generation = self._generations.get(path, 0)

        value = render()

        with self._lock:
            if self._generations.get(path, 0) == generation:
                self._entries[path] = value
        return value

    def revalidate_path(self, path: str) -> None:
        with self._lock:
            self._entries.pop(path, None)
            self._generations[path] = self._generations.get(path, 0) + 1
        logger.info("path revalidated: %s", path)
