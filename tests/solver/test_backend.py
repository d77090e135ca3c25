"""Tests for the PuLP solver backend and status translation."""

import pulp
import pytest

from optgraph.config import SolverConfig
from optgraph.errors import Infeasible, SolverError
from optgraph.solver.backend import (
    PulpBackend,
    classify_status,
    get_backend,
    require_optimum,
    require_solution,
    set_backend,
)
from optgraph.types import SolveResult, SolveStatus


@pytest.mark.parametrize(
    "status,sol_status,expected",
    [
        (pulp.LpStatusOptimal, pulp.LpSolutionOptimal, SolveStatus.OPTIMAL),
        (pulp.LpStatusOptimal, pulp.LpSolutionIntegerFeasible, SolveStatus.FEASIBLE),
        (pulp.LpStatusInfeasible, pulp.LpSolutionInfeasible, SolveStatus.INFEASIBLE),
        (pulp.LpStatusNotSolved, pulp.LpSolutionIntegerFeasible, SolveStatus.FEASIBLE),
        (pulp.LpStatusNotSolved, pulp.LpSolutionNoSolutionFound, SolveStatus.OTHER),
        (pulp.LpStatusUnbounded, pulp.LpSolutionUnbounded, SolveStatus.OTHER),
        (pulp.LpStatusUndefined, pulp.LpSolutionNoSolutionFound, SolveStatus.OTHER),
    ],
)
def test_classify_status(status, sol_status, expected):
    assert classify_status(status, sol_status) == expected


def _knapsack():
    problem = pulp.LpProblem("tiny", pulp.LpMaximize)
    x = pulp.LpVariable("x", cat=pulp.LpBinary)
    y = pulp.LpVariable("y", cat=pulp.LpBinary)
    problem += 3 * x + 2 * y
    problem += x + y <= 1
    return problem, x, y


def test_pulp_backend_optimal():
    problem, x, y = _knapsack()
    result = PulpBackend().solve(problem)
    assert result.status == SolveStatus.OPTIMAL
    assert result.has_solution
    assert result.objective == pytest.approx(3.0)
    assert x.varValue == pytest.approx(1.0)
    assert result.wall_time >= 0.0


def test_pulp_backend_infeasible():
    problem = pulp.LpProblem("impossible", pulp.LpMinimize)
    x = pulp.LpVariable("x", cat=pulp.LpBinary)
    problem += x
    problem += x >= 2
    result = PulpBackend().solve(problem)
    assert result.status == SolveStatus.INFEASIBLE
    assert not result.has_solution
    assert result.objective is None


def test_unknown_solver_name():
    backend = PulpBackend(SolverConfig(solver_name="NO_SUCH_SOLVER"))
    problem, _, _ = _knapsack()
    with pytest.raises(SolverError) as excinfo:
        backend.solve(problem)
    assert "NO_SUCH_SOLVER" in str(excinfo.value)


def test_backend_config_defaults_to_global():
    from optgraph.config import SOLVER_CONFIG

    assert PulpBackend().config is SOLVER_CONFIG
    custom = SolverConfig(time_limit=5)
    assert PulpBackend(custom).config is custom


class TestRequireSolution:
    def test_accepts_feasible_and_optimal(self):
        require_solution(SolveResult(SolveStatus.FEASIBLE, "NotSolved/x"), "thing")
        require_solution(SolveResult(SolveStatus.OPTIMAL, "Optimal/x"), "thing")

    def test_infeasible(self):
        with pytest.raises(Infeasible, match="no 3-coloring"):
            require_solution(SolveResult(SolveStatus.INFEASIBLE, "Infeasible"), "3-coloring")

    def test_other_is_solver_error_not_infeasible(self):
        with pytest.raises(SolverError) as excinfo:
            require_solution(SolveResult(SolveStatus.OTHER, "Not Solved"), "3-coloring")
        assert excinfo.value.status == "Not Solved"
        assert not isinstance(excinfo.value, Infeasible)


class TestRequireOptimum:
    def test_returns_objective(self):
        result = SolveResult(SolveStatus.OPTIMAL, "Optimal", objective=4.0)
        assert require_optimum(result, "cut") == 4.0

    @pytest.mark.parametrize(
        "status", [SolveStatus.FEASIBLE, SolveStatus.INFEASIBLE, SolveStatus.OTHER]
    )
    def test_rejects_anything_else(self, status):
        with pytest.raises(SolverError):
            require_optimum(SolveResult(status, "raw", objective=1.0), "cut")


def test_get_and_set_backend():
    sentinel = object()
    set_backend(sentinel)
    try:
        assert get_backend() is sentinel
    finally:
        set_backend(None)
    fresh = get_backend()
    assert isinstance(fresh, PulpBackend)
    assert get_backend() is fresh
