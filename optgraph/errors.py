"""Exception taxonomy shared by all optgraph queries.

``Infeasible`` is a proof: the requested object does not exist. ``SolverError``
is the absence of a proof: the solver stopped (time limit, numerical trouble,
missing binary) without deciding the instance. Callers must never treat the
second as the first.
"""

from __future__ import annotations

from typing import Optional


class OptGraphError(Exception):
    """Base class for optgraph errors."""


class InvalidArgument(OptGraphError, ValueError):
    """A parameter is out of range or names something not in the graph."""


class GraphPrecondition(OptGraphError, ValueError):
    """The graph does not meet the structural requirement of a query."""


class Infeasible(OptGraphError):
    """The decision instance provably has no solution."""


class SolverError(OptGraphError, RuntimeError):
    """The solver terminated without proving optimality or infeasibility.

    Attributes:
        status: Raw solver status string, when available.
    """

    def __init__(self, message: str, status: Optional[str] = None) -> None:
        super().__init__(message)
        self.status = status
