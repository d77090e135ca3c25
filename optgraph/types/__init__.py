"""Shared typing constructs for optgraph.

Type aliases for graph elements and colorings, status enums, and the small
frozen result containers passed between the search layer and the solver.
"""

from optgraph.types.base import (
    BINARY_THRESHOLD,
    CacheTag,
    CutSet,
    Edge,
    EdgeColoring,
    NodeID,
    SetColoring,
    SolveStatus,
    VertexColoring,
)
from optgraph.types.dto import ColorBounds, SolveResult

__all__ = [
    # Enums
    "CacheTag",
    "SolveStatus",
    # Type aliases and constants
    "NodeID",
    "Edge",
    "VertexColoring",
    "EdgeColoring",
    "SetColoring",
    "CutSet",
    "BINARY_THRESHOLD",
    # DTOs
    "ColorBounds",
    "SolveResult",
]
