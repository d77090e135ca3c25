"""Minimum edge cuts and edge connectivity as single optimization queries.

Global minimum cut (partition model). Binary ``a[v]``/``b[v]`` place each
vertex on side A or side B, both sides nonempty; a binary indicator ``c[e]``
for every edge ``uv`` is forced to 1 when the edge crosses::

    c[e] >= a[u] + b[v] - 1
    c[e] >= a[v] + b[u] - 1

and ``sum(c)`` is minimized.

s-t edge connectivity (unit-capacity flow model). Binary ``f[u, v]`` for both
orientations of every edge, at most one orientation per edge, conservation at
every vertex other than ``s`` and ``t``, no flow into ``s`` or out of ``t``,
and source outflow equal to sink inflow. The maximum outflow of ``s`` is the
maximum number of edge-disjoint s-t paths, which equals the minimum s-t edge
cut by max-flow/min-cut duality.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, List, Optional, Tuple

import networkx as nx
import pulp

from optgraph.cache import ResultCache, default_cache
from optgraph.errors import GraphPrecondition, InvalidArgument
from optgraph.lib.helpers import has_path, is_connected, require_node, validate_graph
from optgraph.lib.index import ElementIndex
from optgraph.logging import get_logger
from optgraph.solver.backend import SolverBackend, get_backend, require_optimum
from optgraph.types.base import BINARY_THRESHOLD, CacheTag, CutSet, Edge, NodeID

logger = get_logger(__name__)


def min_cut_problem(
    G: nx.Graph,
) -> Tuple[pulp.LpProblem, Dict[int, pulp.LpVariable], ElementIndex]:
    """Build the partition model for a global minimum edge cut.

    Returns:
        ``(problem, c, edges)`` where ``c[j]`` indicates that edge ``j`` crosses.
    """
    nodes = ElementIndex.from_items(G.nodes)
    edges: ElementIndex[Edge] = ElementIndex.from_items(G.edges())
    problem = pulp.LpProblem("min_edge_cut", pulp.LpMinimize)

    a = {i: pulp.LpVariable(f"a_{i}", cat=pulp.LpBinary) for i in nodes}  # in part A
    b = {i: pulp.LpVariable(f"b_{i}", cat=pulp.LpBinary) for i in nodes}  # in part B
    c = {j: pulp.LpVariable(f"c_{j}", cat=pulp.LpBinary) for j in edges}  # crosses

    problem += pulp.lpSum(c.values()), "cut_size"

    for i in nodes:
        problem += a[i] + b[i] == 1, f"side_of_{i}"
    problem += pulp.lpSum(a.values()) >= 1, "part_a_nonempty"
    problem += pulp.lpSum(b.values()) >= 1, "part_b_nonempty"

    for j in edges:
        u, v = edges.to_item[j]
        iu, iv = nodes.to_index[u], nodes.to_index[v]
        problem += a[iu] + b[iv] - 1 <= c[j], f"cross_{j}_ab"
        problem += a[iv] + b[iu] - 1 <= c[j], f"cross_{j}_ba"

    return problem, c, edges


def _solve_min_edge_cut(G: nx.Graph, backend: Optional[SolverBackend]) -> frozenset:
    if not is_connected(G):
        logger.debug("Graph is disconnected; empty cut")
        return frozenset()

    problem, c, edges = min_cut_problem(G)
    result = (backend or get_backend()).solve(problem)
    size = require_optimum(result, "minimum edge cut")

    cut = frozenset(
        edges.to_item[j]
        for j, var in c.items()
        if var.varValue is not None and var.varValue > BINARY_THRESHOLD
    )
    logger.debug("Minimum edge cut of size %d (objective %.3f)", len(cut), size)
    return cut


def min_edge_cut(
    G: nx.Graph,
    *,
    backend: Optional[SolverBackend] = None,
    cache: Optional[ResultCache] = None,
) -> CutSet:
    """Return a minimum set of edges whose removal disconnects ``G``.

    A disconnected graph yields the empty set without a solver call.

    Args:
        G: Simple undirected graph with at least two vertices.
        backend: Solver backend (defaults to the global backend).
        cache: Result cache (defaults to the global cache).

    Returns:
        Set of ``(u, v)`` edges as yielded by ``G.edges()``.

    Raises:
        GraphPrecondition: If ``G`` has fewer than two vertices.
        SolverError: If the solver does not prove an optimum.
    """
    validate_graph(G)
    if G.number_of_nodes() < 2:
        raise GraphPrecondition("Graph must have at least two vertices")
    if cache is None:
        cache = default_cache()
    cut = cache.compute(
        G, CacheTag.MIN_EDGE_CUT, lambda: _solve_min_edge_cut(G, backend)
    )
    return set(cut)


def st_flow_problem(
    G: nx.Graph, s: NodeID, t: NodeID
) -> Tuple[pulp.LpProblem, Dict[Tuple[int, int], pulp.LpVariable], ElementIndex]:
    """Build the unit-capacity s-t flow model.

    Only ordered pairs along existing edges get a variable; flow on self-pairs
    and non-edges is identically zero.

    Returns:
        ``(problem, f, nodes)`` where ``f[i, j]`` is the flow on arc ``i -> j``.
    """
    nodes = ElementIndex.from_items(G.nodes)
    si, ti = nodes.to_index[s], nodes.to_index[t]
    problem = pulp.LpProblem("st_max_flow", pulp.LpMaximize)

    f: Dict[Tuple[int, int], pulp.LpVariable] = {}
    out_arcs: Dict[int, List[pulp.LpVariable]] = defaultdict(list)
    in_arcs: Dict[int, List[pulp.LpVariable]] = defaultdict(list)
    for u, v in G.edges():
        iu, iv = nodes.to_index[u], nodes.to_index[v]
        for i, j in ((iu, iv), (iv, iu)):
            var = pulp.LpVariable(f"f_{i}_{j}", cat=pulp.LpBinary)
            f[i, j] = var
            out_arcs[i].append(var)
            in_arcs[j].append(var)
        # no flow on both antiparallel arcs
        problem += f[iu, iv] + f[iv, iu] <= 1, f"one_way_{iu}_{iv}"

    problem += pulp.lpSum(out_arcs[si]), "source_outflow"

    for i in nodes:
        if i in (si, ti) or not out_arcs[i]:
            continue
        problem += pulp.lpSum(out_arcs[i]) == pulp.lpSum(in_arcs[i]), f"conserve_{i}"

    for var in in_arcs[si]:
        problem += var == 0, f"no_inflow_{var.name}"
    for var in out_arcs[ti]:
        problem += var == 0, f"no_outflow_{var.name}"

    problem += pulp.lpSum(out_arcs[si]) == pulp.lpSum(in_arcs[ti]), "source_to_sink"

    return problem, f, nodes


def _st_edge_connectivity(
    G: nx.Graph, s: NodeID, t: NodeID, backend: Optional[SolverBackend]
) -> int:
    if not has_path(G, s, t):
        return 0

    problem, f, nodes = st_flow_problem(G, s, t)
    result = (backend or get_backend()).solve(problem)
    value = int(round(require_optimum(result, f"maximum flow from {s!r} to {t!r}")))

    arcs = [
        (nodes.to_item[i], nodes.to_item[j])
        for (i, j), var in f.items()
        if var.varValue is not None and var.varValue > BINARY_THRESHOLD
    ]
    logger.debug("Flow of %d from %r to %r uses arcs %s", value, s, t, arcs)
    return value


def edge_connectivity(
    G: nx.Graph,
    s: Optional[NodeID] = None,
    t: Optional[NodeID] = None,
    *,
    backend: Optional[SolverBackend] = None,
    cache: Optional[ResultCache] = None,
) -> int:
    """Return the edge connectivity of ``G`` or of the pair ``(s, t)``.

    Without ``s`` and ``t`` this is the size of a minimum edge cut of ``G``.
    With both, it is the minimum number of edges whose removal separates
    ``s`` from ``t`` (0 if they are already separated).

    Raises:
        InvalidArgument: If only one of ``s``/``t`` is given, either is not a
            vertex, or ``s == t``.
        GraphPrecondition: If ``G`` has fewer than two vertices (global case).
        SolverError: If the solver does not prove an optimum.
    """
    validate_graph(G)
    if s is None and t is None:
        return len(min_edge_cut(G, backend=backend, cache=cache))
    if s is None or t is None:
        raise InvalidArgument("Both source and sink are required")
    require_node(G, s)
    require_node(G, t)
    if s == t:
        raise InvalidArgument("Source and sink cannot be the same")
    if cache is None:
        cache = default_cache()
    # Connectivity is symmetric, so (s, t) and (t, s) share an entry
    return cache.compute(
        G,
        CacheTag.ST_EDGE_CONNECTIVITY,
        lambda: _st_edge_connectivity(G, s, t, backend),
        params=(frozenset((s, t)),),
    )