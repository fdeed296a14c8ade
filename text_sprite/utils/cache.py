"""LRU cache of render results keyed by request hash."""

from __future__ import annotations

import threading
from collections import OrderedDict

from text_sprite.core.pipeline import SpriteResult


class SpriteCache:
    """Simple LRU cache for sprite renders.

    Keys are RenderRequest.hash() strings. Safe to share between render
    worker threads.
    """

    def __init__(self, max_size: int = 32) -> None:
        self._max_size = max_size
        self._cache: OrderedDict[str, SpriteResult] = OrderedDict()
        self._lock = threading.Lock()

    def get(self, request_hash: str) -> SpriteResult | None:
        """Get a cached result, or None if not present."""
        with self._lock:
            if request_hash in self._cache:
                self._cache.move_to_end(request_hash)
                return self._cache[request_hash]
            return None

    def put(self, request_hash: str, value: SpriteResult) -> None:
        """Cache a render result."""
        with self._lock:
            if request_hash in self._cache:
                self._cache.move_to_end(request_hash)
            elif len(self._cache) >= self._max_size:
                self._cache.popitem(last=False)
            self._cache[request_hash] = value

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()

    @property
    def size(self) -> int:
        with self._lock:
            return len(self._cache)
