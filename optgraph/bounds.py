"""Cheap bracket for the chromatic number.

The lower bound is ``max(floor(n / alpha), omega)``: every color class is an
independent set, so at least ``n / alpha`` classes are needed, and a clique of
size ``omega`` needs ``omega`` distinct colors. The upper bound is the number
of colors used by a greedy coloring, which is always proper.
"""

from __future__ import annotations

import networkx as nx

from optgraph.lib.helpers import greedy_coloring, max_clique, max_independent_set
from optgraph.logging import get_logger
from optgraph.types.dto import ColorBounds

logger = get_logger(__name__)


def estimate_bounds(G: nx.Graph) -> ColorBounds:
    """Return ``ColorBounds(lower, upper)`` with ``lower <= chi(G) <= upper``.

    The null graph yields ``(0, 0)`` and an edgeless graph ``(1, 1)``.

    Args:
        G: Simple undirected graph.

    Returns:
        Valid bracket for the chromatic number.
    """
    n = G.number_of_nodes()
    if n == 0:
        return ColorBounds(0, 0)
    if G.number_of_edges() == 0:
        return ColorBounds(1, 1)

    alpha = len(max_independent_set(G))
    omega = len(max_clique(G))
    lower = max(n // alpha, omega)

    coloring = greedy_coloring(G)
    upper = len(set(coloring.values()))

    logger.debug(
        "Bounds for n=%d: alpha=%d omega=%d greedy=%d -> %d <= chi <= %d",
        n,
        alpha,
        omega,
        upper,
        lower,
        upper,
    )
    return ColorBounds(lower, upper)
