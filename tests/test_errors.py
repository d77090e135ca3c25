"""Tests for the error taxonomy."""

import pytest

from optgraph.errors import (
    GraphPrecondition,
    Infeasible,
    InvalidArgument,
    OptGraphError,
    SolverError,
)


@pytest.mark.parametrize("cls", [InvalidArgument, GraphPrecondition, Infeasible, SolverError])
def test_all_errors_share_a_base(cls):
    assert issubclass(cls, OptGraphError)


def test_builtin_compatibility():
    assert issubclass(InvalidArgument, ValueError)
    assert issubclass(GraphPrecondition, ValueError)
    assert issubclass(SolverError, RuntimeError)


def test_solver_error_is_not_infeasible():
    assert not issubclass(SolverError, Infeasible)
    assert not issubclass(Infeasible, SolverError)


def test_solver_error_keeps_status():
    err = SolverError("time limit", status="Not Solved")
    assert err.status == "Not Solved"
    assert str(err) == "time limit"
    assert SolverError("x").status is None
