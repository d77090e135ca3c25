"""Feasibility oracle for vertex, edge and a:b colorings.

Each query either returns a proper coloring or raises ``Infeasible``. Cheap
necessary conditions are checked first (cached chromatic numbers, k = 1,
bipartiteness for k = 2, maximum degree and matching size for edge colorings)
and only the remaining instances are formulated as 0/1 programs:

- vertex k-coloring: ``x[v, c]`` binary, one color per vertex,
  ``x[u, c] + x[v, c] <= 1`` for every edge ``uv`` and color ``c``;
- edge k-coloring: ``y[e, c]`` binary, one color per edge, at most one edge
  of each color at every vertex;
- a:b-coloring: a homomorphism into the Kneser graph K(a, b), itself found
  with a 0/1 program (:func:`homomorphism`).

Answers, including proven infeasibility, are cached per graph and number of
colors, and callers receive a copy of the cached coloring. A solver that stops without
a verdict raises ``SolverError``; it is never reported as infeasibility and
nothing is cached.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Callable, Dict, List, Optional, Tuple

import networkx as nx
import pulp

from optgraph.cache import ResultCache, default_cache
from optgraph.errors import Infeasible, InvalidArgument, SolverError
from optgraph.lib.helpers import max_degree, max_matching, two_color, validate_graph
from optgraph.lib.index import ElementIndex
from optgraph.lib.kneser import kneser_graph
from optgraph.logging import get_logger
from optgraph.solver.backend import SolverBackend, get_backend, require_solution
from optgraph.types.base import (
    BINARY_THRESHOLD,
    CacheTag,
    Edge,
    EdgeColoring,
    NodeID,
    SetColoring,
    VertexColoring,
)

logger = get_logger(__name__)

Assignment = Dict[Tuple[int, int], pulp.LpVariable]


def _read_assignment(
    x: Assignment,
    index: ElementIndex,
    what: str,
    values: Optional[ElementIndex] = None,
) -> Dict:
    """Translate binary ``x[i, c]`` values into ``{element: c}``.

    If ``values`` is given, ``c`` is an index into it and the element is
    mapped to ``values.to_item[c]`` instead.

    Raises:
        SolverError: If some element received no value.
    """
    result = {}
    for (i, c), var in x.items():
        val = var.varValue
        if val is not None and val > BINARY_THRESHOLD:
            result[index.to_item[i]] = c if values is None else values.to_item[c]
    if len(result) != len(index):
        raise SolverError(f"Solver returned an incomplete {what}")
    return result


def _cached_outcome(
    G: nx.Graph,
    cache: ResultCache,
    tag: CacheTag,
    params: Tuple,
    solve: Callable[[], Dict],
    err_msg: str,
) -> Dict:
    """Run ``solve`` through ``cache`` and return a copy of its result.

    A proven infeasibility is cached as ``None`` and raised again on later
    calls without consulting the solver.
    """

    def outcome() -> Optional[Dict]:
        try:
            return solve()
        except Infeasible:
            return None

    found = cache.compute(G, tag, outcome, params=params)
    if found is None:
        raise Infeasible(err_msg)
    return dict(found)


def vertex_coloring_problem(
    G: nx.Graph, k: int
) -> Tuple[pulp.LpProblem, Assignment, ElementIndex]:
    """Build the vertex k-coloring feasibility model.

    Returns:
        ``(problem, x, nodes)`` where ``x[i, c]`` is 1 if the vertex with index
        ``i`` gets color ``c`` in ``1..k``.
    """
    nodes = ElementIndex.from_items(G.nodes)
    colors = range(1, k + 1)
    problem = pulp.LpProblem(f"vertex_{k}_coloring", pulp.LpMinimize)
    x = {
        (i, c): pulp.LpVariable(f"x_{i}_{c}", cat=pulp.LpBinary)
        for i in nodes
        for c in colors
    }

    for i in nodes:
        problem += pulp.lpSum(x[i, c] for c in colors) == 1, f"color_of_{i}"

    for u, v in G.edges():
        iu, iv = nodes.to_index[u], nodes.to_index[v]
        for c in colors:
            problem += x[iu, c] + x[iv, c] <= 1, f"edge_{iu}_{iv}_{c}"

    return problem, x, nodes


def vertex_color(
    G: nx.Graph,
    k: Optional[int] = None,
    *,
    backend: Optional[SolverBackend] = None,
    cache: Optional[ResultCache] = None,
) -> VertexColoring:
    """Return a proper ``k``-coloring of ``G`` with colors ``1..k``.

    If ``k`` is omitted, the chromatic number of ``G`` is used.

    Args:
        G: Simple undirected graph.
        k: Number of colors.
        backend: Solver backend (defaults to the global backend).
        cache: Result cache (defaults to the global cache).

    Returns:
        Mapping from vertex to color.

    Raises:
        InvalidArgument: If ``k < 1``.
        Infeasible: If ``G`` has no proper ``k``-coloring.
        SolverError: If the solver does not decide the instance.
    """
    validate_graph(G)
    if cache is None:
        cache = default_cache()

    if k is None:
        from optgraph.search import chromatic_number

        k = chromatic_number(G, backend=backend, cache=cache)
        if k == 0:
            return {}

    if k < 1:
        raise InvalidArgument("Number of colors must be positive")

    if G.number_of_nodes() == 0:
        return {}

    err_msg = f"This graph has no {k}-coloring"

    def solve() -> VertexColoring:
        chi = cache.get(G, CacheTag.CHROMATIC_NUMBER)
        if chi is not None and k < chi:
            raise Infeasible(err_msg)

        if k == 1:
            if G.number_of_edges() > 0:
                raise Infeasible(err_msg)
            return {v: 1 for v in G.nodes}

        if k == 2:
            return two_color(G)

        problem, x, nodes = vertex_coloring_problem(G, k)
        result = (backend or get_backend()).solve(problem)
        require_solution(result, f"{k}-coloring")
        return _read_assignment(x, nodes, f"{k}-coloring")

    return _cached_outcome(G, cache, CacheTag.VERTEX_COLORING, (k,), solve, err_msg)


def edge_coloring_problem(
    G: nx.Graph, k: int
) -> Tuple[pulp.LpProblem, Assignment, ElementIndex]:
    """Build the edge k-coloring feasibility model.

    Edges meeting at a vertex form a clique in the line graph, so a single
    ``sum <= 1`` per vertex and color replaces the pairwise constraints.

    Returns:
        ``(problem, y, edges)`` where ``y[j, c]`` is 1 if edge ``j`` gets color ``c``.
    """
    edges: ElementIndex[Edge] = ElementIndex.from_items(G.edges())
    colors = range(1, k + 1)
    problem = pulp.LpProblem(f"edge_{k}_coloring", pulp.LpMinimize)
    y = {
        (j, c): pulp.LpVariable(f"y_{j}_{c}", cat=pulp.LpBinary)
        for j in edges
        for c in colors
    }

    incident: Dict[NodeID, List[int]] = defaultdict(list)
    for j in edges:
        u, v = edges.to_item[j]
        incident[u].append(j)
        incident[v].append(j)
        problem += pulp.lpSum(y[j, c] for c in colors) == 1, f"color_of_{j}"

    for i, (v, js) in enumerate(incident.items()):
        if len(js) < 2:
            continue
        for c in colors:
            problem += pulp.lpSum(y[j, c] for j in js) <= 1, f"vertex_{i}_{c}"

    return problem, y, edges


def edge_color(
    G: nx.Graph,
    k: int,
    *,
    backend: Optional[SolverBackend] = None,
    cache: Optional[ResultCache] = None,
) -> EdgeColoring:
    """Return a proper ``k``-edge-coloring of ``G`` with colors ``1..k``.

    Edges are keyed by the ``(u, v)`` tuples yielded by ``G.edges()``.

    Raises:
        InvalidArgument: If ``k < 1``.
        Infeasible: If ``G`` has no proper ``k``-edge-coloring.
        SolverError: If the solver does not decide the instance.
    """
    validate_graph(G)
    if k < 1:
        raise InvalidArgument("Number of colors must be positive")
    if cache is None:
        cache = default_cache()

    m = G.number_of_edges()
    if m == 0:
        return {}

    err_msg = f"This graph has no {k}-edge-coloring"

    def solve() -> EdgeColoring:
        if k < max_degree(G):
            raise Infeasible(err_msg)

        chi_prime = cache.get(G, CacheTag.EDGE_CHROMATIC_NUMBER)
        if chi_prime is not None and k < chi_prime:
            raise Infeasible(err_msg)

        # Each color class is a matching
        matching_size = len(max_matching(G))
        if m > matching_size * k:
            logger.debug(
                "Edge %d-coloring rejected: %d edges > %d colors x matching %d",
                k,
                m,
                k,
                matching_size,
            )
            raise Infeasible(err_msg)

        problem, y, edges = edge_coloring_problem(G, k)
        result = (backend or get_backend()).solve(problem)
        require_solution(result, f"{k}-edge-coloring")
        return _read_assignment(y, edges, f"{k}-edge-coloring")

    return _cached_outcome(G, cache, CacheTag.EDGE_COLORING, (k,), solve, err_msg)


def homomorphism(
    G: nx.Graph,
    H: nx.Graph,
    *,
    backend: Optional[SolverBackend] = None,
) -> Dict[NodeID, NodeID]:
    """Find a graph homomorphism ``f: G -> H``.

    Adjacent vertices of ``G`` must map to adjacent vertices of ``H``. ``H``
    may contain self-loops; a looped target can absorb adjacent vertices.

    Raises:
        Infeasible: If no homomorphism exists.
        SolverError: If the solver does not decide the instance.
    """
    if G.number_of_nodes() == 0:
        return {}
    targets = list(H.nodes)
    if not targets:
        raise Infeasible("No homomorphism into a graph without vertices")
    if G.number_of_edges() == 0:
        return {v: targets[0] for v in G.nodes}
    if H.number_of_edges() == 0:
        raise Infeasible("No homomorphism of a graph with edges into an edgeless graph")

    src = ElementIndex.from_items(G.nodes)
    dst = ElementIndex.from_items(targets)
    problem = pulp.LpProblem("homomorphism", pulp.LpMinimize)
    x = {
        (i, t): pulp.LpVariable(f"h_{i}_{t}", cat=pulp.LpBinary)
        for i in src
        for t in dst
    }
    for i in src:
        problem += pulp.lpSum(x[i, t] for t in dst) == 1, f"image_of_{i}"

    non_adjacent = {
        t: [
            s
            for s in dst
            if not H.has_edge(dst.to_item[t], dst.to_item[s])
        ]
        for t in dst
    }
    for u, v in G.edges():
        iu, iv = src.to_index[u], src.to_index[v]
        for t in dst:
            if not non_adjacent[t]:
                continue
            problem += (
                x[iu, t] + pulp.lpSum(x[iv, s] for s in non_adjacent[t]) <= 1,
                f"edge_{iu}_{iv}_{t}",
            )

    name = H.graph.get("name") or "target graph"
    result = (backend or get_backend()).solve(problem)
    require_solution(result, f"homomorphism into {name}")
    return _read_assignment(x, src, f"homomorphism into {name}", values=dst)


def vertex_ab_color(
    G: nx.Graph,
    a: int,
    b: int,
    *,
    backend: Optional[SolverBackend] = None,
    cache: Optional[ResultCache] = None,
) -> SetColoring:
    """Return an ``a:b``-coloring of ``G``.

    Each vertex gets a ``b``-element subset of ``{1, ..., a}`` and adjacent
    vertices get disjoint subsets. This is exactly a homomorphism into the
    Kneser graph K(a, b).

    Raises:
        InvalidArgument: If ``a`` or ``b`` is negative.
        Infeasible: If ``G`` has no ``a:b``-coloring.
        SolverError: If the solver does not decide the instance.
    """
    validate_graph(G)
    if a < 0 or b < 0:
        raise InvalidArgument(
            f"Arguments in vertex_ab_color(G, {a}, {b}) must be nonnegative"
        )
    if b == 0:
        return {v: frozenset() for v in G.nodes}
    if cache is None:
        cache = default_cache()

    return _cached_outcome(
        G,
        cache,
        CacheTag.AB_COLORING,
        (a, b),
        lambda: homomorphism(G, kneser_graph(a, b), backend=backend),
        f"This graph does not have a {a}:{b} coloring",
    )
