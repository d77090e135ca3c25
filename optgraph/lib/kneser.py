"""Kneser graphs, the targets of a:b-coloring homomorphisms."""

from __future__ import annotations

from itertools import combinations
from typing import FrozenSet

import networkx as nx

from optgraph.errors import InvalidArgument


def kneser_graph(a: int, b: int) -> nx.Graph:
    """Build the Kneser graph K(a, b).

    Vertices are the ``b``-element subsets of ``{1, ..., a}`` (as frozensets);
    two vertices are adjacent when the subsets are disjoint. For ``b == 0`` the
    single vertex (the empty set) is disjoint from itself and carries a
    self-loop. For ``a < b`` the graph has no vertices.

    Args:
        a: Size of the ground set.
        b: Subset size.

    Returns:
        Undirected graph whose nodes are frozensets of ints.

    Raises:
        InvalidArgument: If ``a`` or ``b`` is negative.
    """
    if a < 0 or b < 0:
        raise InvalidArgument(f"Kneser graph parameters must be nonnegative, got ({a}, {b})")

    K = nx.Graph(name=f"Kneser({a},{b})")
    subsets: list[FrozenSet[int]] = [
        frozenset(c) for c in combinations(range(1, a + 1), b)
    ]
    K.add_nodes_from(subsets)
    if b == 0:
        K.add_edge(subsets[0], subsets[0])
        return K
    for i, s in enumerate(subsets):
        for t in subsets[i + 1 :]:
            if s.isdisjoint(t):
                K.add_edge(s, t)
    return K
