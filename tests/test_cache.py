"""Tests for the per-file dependency cache."""

import threading

from code_deps.analysis.cache import DependencyCache
from code_deps.models import Dependency, DependencyType


def _dep(target):
    return Dependency(source="/a.js", target=target, type=DependencyType.IMPORT)


class TestDependencyCache:
    def test_absent(self):
        cache = DependencyCache()
        assert cache.get("/a.js") is None
        assert "/a.js" not in cache

    def test_set_overwrites(self):
        cache = DependencyCache()
        first, second = [_dep("/b.js")], [_dep("/c.js")]
        cache.set("/a.js", first)
        cache.set("/a.js", second)
        assert cache.get("/a.js") is second
        assert len(cache) == 1

    def test_empty_list_is_cached(self):
        cache = DependencyCache()
        cache.set("/a.js", [])
        assert cache.get("/a.js") == []
        assert "/a.js" in cache

    def test_set_default_first_writer_wins(self):
        cache = DependencyCache()
        first, second = [_dep("/b.js")], [_dep("/c.js")]
        assert cache.set_default("/a.js", first) is first
        assert cache.set_default("/a.js", second) is first
        assert cache.get("/a.js") is first

    def test_clear(self):
        cache = DependencyCache()
        cache.set("/a.js", [])
        cache.clear()
        assert len(cache) == 0

    def test_concurrent_writers_agree(self):
        cache = DependencyCache()
        results = []
        barrier = threading.Barrier(8)

        def worker(i):
            barrier.wait()
            results.append(cache.set_default("/a.js", [_dep(f"/t{i}.js")]))

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(results) == 8
        assert all(r is results[0] for r in results)
        assert cache.get("/a.js") is results[0]
