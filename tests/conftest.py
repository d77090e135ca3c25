"""Global pytest configuration and shared fixtures.

Graph fixtures cover the reference instances used throughout the suite
(cycles, complete and complete bipartite graphs, the Petersen and Grötzsch
graphs). Backend fixtures wrap the real PuLP backend to count oracle calls, or
replace it with a stub that never reaches a verdict.
"""

from __future__ import annotations

from typing import List

import networkx as nx
import pulp
import pytest

from optgraph.cache import ResultCache
from optgraph.solver.backend import PulpBackend
from optgraph.types import SolveResult, SolveStatus


class CountingBackend:
    """Delegate to a real backend and record every call."""

    def __init__(self) -> None:
        self.inner = PulpBackend()
        self.problems: List[str] = []
        self.results: List[SolveResult] = []

    @property
    def calls(self) -> int:
        return len(self.problems)

    def solve(self, problem: pulp.LpProblem) -> SolveResult:
        self.problems.append(problem.name)
        result = self.inner.solve(problem)
        self.results.append(result)
        return result


class UndecidedBackend:
    """Pretend every solve hit a time limit without a solution."""

    def __init__(self) -> None:
        self.calls = 0

    def solve(self, problem: pulp.LpProblem) -> SolveResult:
        self.calls += 1
        return SolveResult(status=SolveStatus.OTHER, raw_status="Not Solved/No Solution Found")


@pytest.fixture
def counting_backend() -> CountingBackend:
    return CountingBackend()


@pytest.fixture
def undecided_backend() -> UndecidedBackend:
    return UndecidedBackend()


@pytest.fixture
def cache() -> ResultCache:
    """Fresh cache so tests never observe each other's results."""
    return ResultCache()


@pytest.fixture
def c5() -> nx.Graph:
    return nx.cycle_graph(5)


@pytest.fixture
def petersen() -> nx.Graph:
    return nx.petersen_graph()


@pytest.fixture
def grotzsch() -> nx.Graph:
    # Triangle-free, chromatic number 4
    return nx.mycielski_graph(4)


@pytest.fixture
def k33() -> nx.Graph:
    return nx.complete_bipartite_graph(3, 3)


@pytest.fixture
def barbell() -> nx.Graph:
    # Two K5 joined by the single bridge 4-5
    return nx.barbell_graph(5, 0)


@pytest.fixture
def two_triangles() -> nx.Graph:
    G = nx.Graph()
    G.add_edges_from([(0, 1), (1, 2), (2, 0), ("a", "b"), ("b", "c"), ("c", "a")])
    return G


def assert_proper_vertex_coloring(G: nx.Graph, coloring: dict, k: int) -> None:
    assert set(coloring) == set(G.nodes)
    assert all(1 <= c <= k for c in coloring.values())
    for u, v in G.edges():
        assert coloring[u] != coloring[v], f"edge {u}-{v} is monochromatic"


def assert_proper_edge_coloring(G: nx.Graph, coloring: dict, k: int) -> None:
    assert len(coloring) == G.number_of_edges()
    assert all(G.has_edge(u, v) for u, v in coloring)
    assert all(1 <= c <= k for c in coloring.values())
    for v in G.nodes:
        seen = [c for (a, b), c in coloring.items() if v in (a, b)]
        assert len(seen) == len(set(seen)), f"two edges at {v} share a color"


@pytest.fixture
def check_vertex_coloring():
    return assert_proper_vertex_coloring


@pytest.fixture
def check_edge_coloring():
    return assert_proper_edge_coloring
