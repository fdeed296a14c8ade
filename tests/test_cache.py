"""Tests for the sprite render cache."""

import threading

import numpy as np

from text_sprite.core.pipeline import render_sprite
from text_sprite.core.request import RenderRequest
from text_sprite.utils.cache import SpriteCache


def _result():
    request = RenderRequest(width=2, height=2, outline_color=None, shadow_color=None)
    return render_sprite(request, bitmap=np.zeros((2, 2, 3), dtype=np.uint8))


class TestSpriteCache:
    def test_get_missing(self):
        assert SpriteCache().get("abc") is None

    def test_put_and_get(self):
        cache = SpriteCache()
        result = _result()
        cache.put("abc", result)
        assert cache.get("abc") is result
        assert cache.size == 1

    def test_evicts_least_recently_used(self):
        cache = SpriteCache(max_size=2)
        result = _result()
        cache.put("a", result)
        cache.put("b", result)
        cache.get("a")
        cache.put("c", result)
        assert cache.get("b") is None
        assert cache.get("a") is result
        assert cache.get("c") is result

    def test_clear(self):
        cache = SpriteCache()
        cache.put("a", _result())
        cache.clear()
        assert cache.size == 0

    def test_keyed_by_request_hash(self):
        cache = SpriteCache()
        cache.put(RenderRequest().hash(), _result())
        assert cache.get(RenderRequest().hash()) is not None
        assert cache.get(RenderRequest(dithering=True).hash()) is None

    def test_concurrent_puts_keep_size_bounded(self):
        cache = SpriteCache(max_size=8)
        result = _result()

        def fill(prefix):
            for i in range(500):
                cache.put(f"{prefix}-{i}", result)
                cache.get(f"{prefix}-{i // 2}")

        threads = [threading.Thread(target=fill, args=(n,)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert cache.size == 8
