"""optgraph: exact graph invariants through 0/1 programming.

Each query is reduced to one or more small binary programs that are handed to
an exact solver (CBC via PuLP by default). The search layer keeps the number
of solver calls low: bounds narrow the chromatic number before a binary
search, Vizing's theorem leaves a single probe for the edge chromatic number,
and cuts are single optimization queries. Results are memoized per graph.

Primary API:
    chromatic_number(G), vertex_color(G, k), vertex_ab_color(G, a, b)
    edge_chromatic_number(G), edge_color(G, k)
    min_edge_cut(G), edge_connectivity(G), edge_connectivity(G, s, t)
    estimate_bounds(G)

Example:
    import networkx as nx
    import optgraph

    G = nx.petersen_graph()
    optgraph.chromatic_number(G)        # 3
    optgraph.edge_chromatic_number(G)   # 4
"""

from __future__ import annotations

from optgraph import logging
from optgraph.bounds import estimate_bounds
from optgraph.cache import ResultCache, default_cache
from optgraph.coloring import edge_color, homomorphism, vertex_ab_color, vertex_color
from optgraph.config import SOLVER_CONFIG, SolverConfig
from optgraph.cuts import edge_connectivity, min_edge_cut
from optgraph.errors import (
    GraphPrecondition,
    Infeasible,
    InvalidArgument,
    OptGraphError,
    SolverError,
)
from optgraph.lib.kneser import kneser_graph
from optgraph.search import chromatic_number, edge_chromatic_number
from optgraph.solver import PulpBackend, SolverBackend, get_backend, set_backend
from optgraph.types import CacheTag, ColorBounds, SolveResult, SolveStatus

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Coloring
    "chromatic_number",
    "vertex_color",
    "vertex_ab_color",
    "edge_chromatic_number",
    "edge_color",
    "estimate_bounds",
    "homomorphism",
    "kneser_graph",
    # Cuts
    "min_edge_cut",
    "edge_connectivity",
    # Cache
    "ResultCache",
    "default_cache",
    "CacheTag",
    # Solver
    "SolverBackend",
    "PulpBackend",
    "get_backend",
    "set_backend",
    "SolverConfig",
    "SOLVER_CONFIG",
    "SolveResult",
    "SolveStatus",
    "ColorBounds",
    # Errors
    "OptGraphError",
    "InvalidArgument",
    "Infeasible",
    "SolverError",
    "GraphPrecondition",
    # Utilities
    "logging",
]
