"""Tests for the per-graph result cache."""

from __future__ import annotations

import gc
import threading
import time

import networkx as nx
import pytest

from optgraph.cache import ResultCache, default_cache, fingerprint
from optgraph.types import CacheTag


def test_save_check_recall(cache, c5):
    assert not cache.check(c5, CacheTag.CHROMATIC_NUMBER)
    cache.save(c5, CacheTag.CHROMATIC_NUMBER, 3)
    assert cache.check(c5, CacheTag.CHROMATIC_NUMBER)
    assert cache.recall(c5, CacheTag.CHROMATIC_NUMBER) == 3
    assert not cache.check(c5, CacheTag.EDGE_CHROMATIC_NUMBER)


def test_recall_missing_raises(cache, c5):
    with pytest.raises(KeyError):
        cache.recall(c5, CacheTag.MIN_EDGE_CUT)
    assert cache.get(c5, CacheTag.MIN_EDGE_CUT) is None


def test_entries_are_per_graph_identity(cache):
    G1 = nx.cycle_graph(5)
    G2 = nx.cycle_graph(5)
    cache.save(G1, CacheTag.CHROMATIC_NUMBER, 3)
    assert not cache.check(G2, CacheTag.CHROMATIC_NUMBER)


def test_mutation_invalidates_entries(cache):
    G = nx.path_graph(4)
    cache.save(G, CacheTag.CHROMATIC_NUMBER, 2)
    G.add_edge(0, 2)
    assert not cache.check(G, CacheTag.CHROMATIC_NUMBER)


def test_fingerprint_ignores_edge_orientation():
    G1 = nx.Graph([(0, 1), (1, 2)])
    G2 = nx.Graph([(2, 1), (1, 0)])
    assert fingerprint(G1) == fingerprint(G2)


def test_graphs_are_held_weakly(cache):
    G = nx.cycle_graph(5)
    cache.save(G, CacheTag.CHROMATIC_NUMBER, 3)
    assert len(cache) == 1
    del G
    gc.collect()
    assert len(cache) == 0


def test_clear(cache):
    G1, G2 = nx.path_graph(2), nx.path_graph(3)
    cache.save(G1, CacheTag.CHROMATIC_NUMBER, 2)
    cache.save(G2, CacheTag.CHROMATIC_NUMBER, 2)
    cache.clear(G1)
    assert not cache.check(G1, CacheTag.CHROMATIC_NUMBER)
    assert cache.check(G2, CacheTag.CHROMATIC_NUMBER)
    cache.clear()
    assert len(cache) == 0


def test_compute_runs_once(cache, c5):
    calls = []

    def fn():
        calls.append(1)
        return 3

    assert cache.compute(c5, CacheTag.CHROMATIC_NUMBER, fn) == 3
    assert cache.compute(c5, CacheTag.CHROMATIC_NUMBER, fn) == 3
    assert len(calls) == 1


def test_compute_does_not_save_failures(cache, c5):
    def fn():
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        cache.compute(c5, CacheTag.CHROMATIC_NUMBER, fn)
    assert not cache.check(c5, CacheTag.CHROMATIC_NUMBER)


def test_concurrent_compute_is_serialized(cache, petersen):
    calls = []
    lock = threading.Lock()

    def slow():
        with lock:
            calls.append(1)
        time.sleep(0.05)
        return 4

    results = []

    def worker():
        results.append(cache.compute(petersen, CacheTag.EDGE_CHROMATIC_NUMBER, slow))

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for th in threads:
        th.start()
    for th in threads:
        th.join()

    assert results == [4] * 8
    assert len(calls) == 1


def test_default_cache_is_shared():
    assert default_cache() is default_cache()
    assert isinstance(default_cache(), ResultCache)


def test_params_distinguish_entries(cache, c5):
    cache.save(c5, CacheTag.VERTEX_COLORING, {0: 1}, params=(3,))
    assert cache.check(c5, CacheTag.VERTEX_COLORING, (3,))
    assert not cache.check(c5, CacheTag.VERTEX_COLORING, (4,))
    assert not cache.check(c5, CacheTag.VERTEX_COLORING)
    assert cache.recall(c5, CacheTag.VERTEX_COLORING, (3,)) == {0: 1}
    with pytest.raises(KeyError, match=r"VERTEX_COLORING\(4,\)"):
        cache.recall(c5, CacheTag.VERTEX_COLORING, (4,))


def test_compute_with_params(cache, c5):
    assert cache.compute(c5, CacheTag.AB_COLORING, lambda: "x", params=(5, 2)) == "x"
    assert cache.compute(c5, CacheTag.AB_COLORING, lambda: "y", params=(5, 2)) == "x"
    assert cache.compute(c5, CacheTag.AB_COLORING, lambda: "z", params=(6, 2)) == "z"
