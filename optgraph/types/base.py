"""Base type aliases and enums shared across optgraph."""

from __future__ import annotations

from enum import IntEnum
from typing import Dict, FrozenSet, Hashable, Set, Tuple

#: Any hashable networkx node.
NodeID = Hashable

#: Undirected edge as yielded by ``networkx.Graph.edges()``.
Edge = Tuple[NodeID, NodeID]

#: Proper vertex coloring with colors ``1..k``.
VertexColoring = Dict[NodeID, int]

#: Proper edge coloring with colors ``1..k``.
EdgeColoring = Dict[Edge, int]

#: a:b coloring; each vertex gets a b-subset of ``{1..a}``.
SetColoring = Dict[NodeID, FrozenSet[int]]

#: Set of edges forming a cut.
CutSet = Set[Edge]

#: Values below this are treated as 0 when reading binary variables back.
BINARY_THRESHOLD = 0.5


class CacheTag(IntEnum):
    """Graph invariants memoized by :class:`optgraph.cache.ResultCache`."""

    CHROMATIC_NUMBER = 1
    EDGE_CHROMATIC_NUMBER = 2
    MIN_EDGE_CUT = 3
    #: Keyed by the number of colors.
    VERTEX_COLORING = 4
    #: Keyed by the number of colors.
    EDGE_COLORING = 5
    #: Keyed by ``(a, b)``.
    AB_COLORING = 6
    #: Keyed by the unordered endpoint pair.
    ST_EDGE_CONNECTIVITY = 7


class SolveStatus(IntEnum):
    """Terminal status of one oracle call, normalized across solvers."""

    #: Proven optimal (or, for pure feasibility models, a solution was found).
    OPTIMAL = 1
    #: An integer-feasible solution exists but optimality is not proven.
    FEASIBLE = 2
    #: Proven infeasible.
    INFEASIBLE = 3
    #: Anything else: not solved, time limit, unbounded, undefined.
    OTHER = 4
