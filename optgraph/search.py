"""Exact chromatic and edge-chromatic numbers with few oracle calls.

``chromatic_number`` binary-searches the bracket from
:func:`~optgraph.bounds.estimate_bounds`; colorability is monotone in ``k``,
so each probe halves the bracket and the number of oracle calls is
``O(log(upper - lower))``.

``edge_chromatic_number`` relies on Vizing's theorem (the answer is either
the maximum degree or one more) and needs at most one oracle call.

Both consult the result cache first and store their answer. ``SolverError``
from a probe propagates unchanged: an undecided probe proves nothing.
"""

from __future__ import annotations

from typing import Optional

import networkx as nx

from optgraph.bounds import estimate_bounds
from optgraph.cache import ResultCache, default_cache
from optgraph.coloring import edge_color, vertex_color
from optgraph.errors import Infeasible
from optgraph.lib.helpers import max_degree, validate_graph
from optgraph.logging import get_logger
from optgraph.solver.backend import SolverBackend
from optgraph.types.base import CacheTag

logger = get_logger(__name__)


def _search_chromatic_number(
    G: nx.Graph, backend: Optional[SolverBackend], cache: ResultCache
) -> int:
    n = G.number_of_nodes()
    if n == 0:
        return 0
    if G.number_of_edges() == 0:
        return 1

    lb, ub = estimate_bounds(G)
    probes = 0
    while lb < ub:
        mid = (lb + ub) // 2
        logger.debug("%d <= chi(G) <= %d; looking for a %d-coloring", lb, ub, mid)
        try:
            vertex_color(G, mid, backend=backend, cache=cache)
        except Infeasible:
            logger.debug("No %d-coloring", mid)
            lb = mid + 1
        else:
            logger.debug("Found a %d-coloring", mid)
            ub = mid
        probes += 1

    logger.debug("chi(G) = %d after %d probes", lb, probes)
    return lb


def chromatic_number(
    G: nx.Graph,
    *,
    backend: Optional[SolverBackend] = None,
    cache: Optional[ResultCache] = None,
) -> int:
    """Return the chromatic number of ``G``.

    Args:
        G: Simple undirected graph.
        backend: Solver backend (defaults to the global backend).
        cache: Result cache (defaults to the global cache).

    Returns:
        Minimum number of colors in a proper vertex coloring; 0 for the
        null graph.

    Raises:
        SolverError: If any probe is left undecided by the solver.
    """
    validate_graph(G)
    if cache is None:
        cache = default_cache()
    return cache.compute(
        G,
        CacheTag.CHROMATIC_NUMBER,
        lambda: _search_chromatic_number(G, backend, cache),
    )


def _search_edge_chromatic_number(
    G: nx.Graph, backend: Optional[SolverBackend], cache: ResultCache
) -> int:
    delta = max_degree(G)
    if delta == 0:
        return 0
    try:
        edge_color(G, delta, backend=backend, cache=cache)
    except Infeasible:
        logger.debug("No %d-edge-coloring; class 2 graph", delta)
        return delta + 1
    logger.debug("Found a %d-edge-coloring; class 1 graph", delta)
    return delta


def edge_chromatic_number(
    G: nx.Graph,
    *,
    backend: Optional[SolverBackend] = None,
    cache: Optional[ResultCache] = None,
) -> int:
    """Return the edge chromatic number of ``G``.

    Raises:
        SolverError: If the single probe is left undecided by the solver.
    """
    validate_graph(G)
    if cache is None:
        cache = default_cache()
    return cache.compute(
        G,
        CacheTag.EDGE_CHROMATIC_NUMBER,
        lambda: _search_edge_chromatic_number(G, backend, cache),
    )
