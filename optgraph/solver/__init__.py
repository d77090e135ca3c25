"""Solver interface binding 0/1 formulations to an external exact solver.

Formulations never call a solver directly; they submit a ``pulp.LpProblem``
to a :class:`SolverBackend` and interpret the normalized status.
"""

from optgraph.solver.backend import (
    PulpBackend,
    SolverBackend,
    classify_status,
    get_backend,
    require_optimum,
    require_solution,
    set_backend,
)

__all__ = [
    "PulpBackend",
    "SolverBackend",
    "classify_status",
    "get_backend",
    "require_optimum",
    "require_solution",
    "set_backend",
]
