"""Narrow interface between formulations and the external 0/1 solver.

Formulations build a ``pulp.LpProblem`` and hand it to a
:class:`SolverBackend`. The backend runs a solver and returns a
:class:`~optgraph.types.dto.SolveResult` with a normalized status; variable
values are left on the problem's variables for the formulation to read.
Any solver PuLP can drive (CBC, HiGHS, GLPK, Gurobi, CPLEX, ...) can be used
by configuring :class:`~optgraph.config.SolverConfig`, and a completely
different engine only needs a ``solve(problem)`` method.

:func:`require_solution` and :func:`require_optimum` translate a status into
the optgraph error taxonomy. They are the only place where a solver status
becomes ``Infeasible``; everything that is neither a proof of infeasibility
nor a solution becomes ``SolverError``.
"""

from __future__ import annotations

import threading
from time import perf_counter
from typing import Optional, Protocol

import pulp

from optgraph.config import SOLVER_CONFIG, SolverConfig
from optgraph.errors import Infeasible, SolverError
from optgraph.logging import get_logger
from optgraph.types.base import SolveStatus
from optgraph.types.dto import SolveResult

logger = get_logger(__name__)


class SolverBackend(Protocol):
    """Anything that can solve a ``pulp.LpProblem`` in place."""

    def solve(self, problem: pulp.LpProblem) -> SolveResult: ...


def classify_status(status: int, sol_status: int) -> SolveStatus:
    """Map PuLP's ``(status, sol_status)`` pair to a :class:`SolveStatus`.

    Args:
        status: ``problem.status`` (``pulp.LpStatus*`` constant).
        sol_status: ``problem.sol_status`` (``pulp.LpSolution*`` constant).

    Returns:
        Normalized status. A solution found before a limit was hit is
        ``FEASIBLE``, never ``OPTIMAL``.
    """
    if status == pulp.LpStatusOptimal:
        if sol_status == pulp.LpSolutionIntegerFeasible:
            return SolveStatus.FEASIBLE
        return SolveStatus.OPTIMAL
    if status == pulp.LpStatusInfeasible:
        return SolveStatus.INFEASIBLE
    if (
        status == pulp.LpStatusNotSolved
        and sol_status == pulp.LpSolutionIntegerFeasible
    ):
        return SolveStatus.FEASIBLE
    return SolveStatus.OTHER


def _raw_status(status: int, sol_status: int) -> str:
    return (
        f"{pulp.LpStatus.get(status, status)}"
        f"/{pulp.LpSolution.get(sol_status, sol_status)}"
    )


class PulpBackend:
    """Solve problems with a PuLP-managed solver.

    Args:
        config: Solver configuration; defaults to the global ``SOLVER_CONFIG``
            as it is at call time.
    """

    def __init__(self, config: Optional[SolverConfig] = None) -> None:
        self._config = config

    @property
    def config(self) -> SolverConfig:
        return self._config if self._config is not None else SOLVER_CONFIG

    def _make_solver(self):
        config = self.config
        try:
            return pulp.getSolver(config.solver_name, **config.solver_kwargs())
        except pulp.PulpSolverError as e:
            raise SolverError(
                f"Cannot create solver '{config.solver_name}': {e}", status="Error"
            ) from e

    def solve(self, problem: pulp.LpProblem) -> SolveResult:
        """Run the configured solver on ``problem``.

        Raises:
            SolverError: If the solver cannot be created or crashes.
        """
        solver = self._make_solver()
        logger.debug(
            "Solving %s: %d variables, %d constraints with %s",
            problem.name,
            len(problem.variables()),
            problem.numConstraints(),
            self.config.solver_name,
        )
        start = perf_counter()
        try:
            problem.solve(solver)
        except pulp.PulpSolverError as e:
            raise SolverError(f"Solver failed on {problem.name}: {e}", status="Error") from e
        elapsed = perf_counter() - start

        status = classify_status(problem.status, problem.sol_status)
        objective: Optional[float] = None
        if status in (SolveStatus.OPTIMAL, SolveStatus.FEASIBLE):
            if problem.objective is not None:
                objective = pulp.value(problem.objective)
        result = SolveResult(
            status=status,
            raw_status=_raw_status(problem.status, problem.sol_status),
            objective=objective,
            wall_time=elapsed,
        )
        logger.debug(
            "Solved %s: %s (%s) in %.3fs",
            problem.name,
            result.status.name,
            result.raw_status,
            elapsed,
        )
        return result


_backend_lock = threading.Lock()
_default_backend: Optional[SolverBackend] = None


def get_backend() -> SolverBackend:
    """Return the process-wide default backend, creating it on first use."""
    global _default_backend
    with _backend_lock:
        if _default_backend is None:
            _default_backend = PulpBackend()
        return _default_backend


def set_backend(backend: Optional[SolverBackend]) -> None:
    """Replace the default backend; ``None`` restores a fresh ``PulpBackend``."""
    global _default_backend
    with _backend_lock:
        _default_backend = backend


def require_solution(result: SolveResult, what: str) -> None:
    """Accept any solution; raise on proven infeasibility or anything else.

    Used for feasibility queries, where any solution answers the question.

    Raises:
        Infeasible: If the solver proved there is no solution.
        SolverError: For every other non-solution status.
    """
    if result.has_solution:
        return
    if result.status == SolveStatus.INFEASIBLE:
        raise Infeasible(f"This graph has no {what}")
    raise SolverError(
        f"Solver did not decide whether a {what} exists "
        f"(status {result.raw_status})",
        status=result.raw_status,
    )


def require_optimum(result: SolveResult, what: str) -> float:
    """Accept only a proven optimum and return its objective value.

    Raises:
        SolverError: If the status is anything but proven optimal, including
            infeasibility, which optimization models here never exhibit.
    """
    if result.status == SolveStatus.OPTIMAL and result.objective is not None:
        return result.objective
    raise SolverError(
        f"Solver did not prove an optimum for the {what} "
        f"(status {result.raw_status})",
        status=result.raw_status,
    )
