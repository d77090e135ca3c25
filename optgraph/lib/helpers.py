"""Exact graph subroutines backed by NetworkX.

These are the black-box collaborators of the search layer: maximum clique,
maximum independent set, greedy coloring, maximum matching, bipartite
two-coloring and path existence. Each wraps a NetworkX algorithm and adapts
its output to optgraph conventions (1-based colors, ``Infeasible`` instead of
NetworkX exceptions).
"""

from __future__ import annotations

from typing import Set

import networkx as nx

from optgraph.errors import Infeasible, InvalidArgument
from optgraph.types.base import Edge, NodeID, VertexColoring


def validate_graph(G: nx.Graph) -> None:
    """Check that ``G`` is a simple undirected NetworkX graph.

    Raises:
        InvalidArgument: If ``G`` is not a graph, is directed, is a multigraph,
            or has self-loops.
    """
    if not isinstance(G, nx.Graph):
        raise InvalidArgument(f"Expected a networkx.Graph, got {type(G).__name__}")
    if G.is_directed():
        raise InvalidArgument("Directed graphs are not supported")
    if G.is_multigraph():
        raise InvalidArgument("Multigraphs are not supported")
    if nx.number_of_selfloops(G) > 0:
        raise InvalidArgument("Graphs with self-loops have no proper coloring")


def require_node(G: nx.Graph, v: NodeID) -> None:
    """Raise ``InvalidArgument`` if ``v`` is not a vertex of ``G``."""
    if v not in G:
        raise InvalidArgument(f"{v!r} is not a vertex of this graph")


def max_degree(G: nx.Graph) -> int:
    """Maximum vertex degree, 0 for graphs without vertices."""
    return max((d for _, d in G.degree()), default=0)


def max_clique(G: nx.Graph) -> Set[NodeID]:
    """Vertex set of a maximum clique (empty for the null graph)."""
    if G.number_of_nodes() == 0:
        return set()
    clique, _ = nx.max_weight_clique(G, weight=None)
    return set(clique)


def max_independent_set(G: nx.Graph) -> Set[NodeID]:
    """Vertex set of a maximum independent set.

    Computed as a maximum clique of the complement graph.
    """
    if G.number_of_nodes() == 0:
        return set()
    return max_clique(nx.complement(G))


def greedy_coloring(G: nx.Graph) -> VertexColoring:
    """Proper coloring with colors ``1..k`` from the largest-first heuristic."""
    coloring = nx.greedy_color(G, strategy="largest_first")
    return {v: c + 1 for v, c in coloring.items()}


def max_matching(G: nx.Graph) -> Set[Edge]:
    """Edges of a maximum-cardinality matching."""
    return set(nx.max_weight_matching(G, maxcardinality=True))


def two_color(G: nx.Graph) -> VertexColoring:
    """Proper 2-coloring with colors 1 and 2.

    Raises:
        Infeasible: If ``G`` is not bipartite.
    """
    if not nx.is_bipartite(G):
        raise Infeasible("This graph has no 2-coloring")
    return {v: c + 1 for v, c in nx.bipartite.color(G).items()}


def has_path(G: nx.Graph, s: NodeID, t: NodeID) -> bool:
    """Whether ``t`` is reachable from ``s``."""
    return nx.has_path(G, s, t)


def is_connected(G: nx.Graph) -> bool:
    """Whether ``G`` is connected; the null graph counts as disconnected."""
    if G.number_of_nodes() == 0:
        return False
    return nx.is_connected(G)
