"""Immutable result containers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional

from optgraph.types.base import SolveStatus


@dataclass(frozen=True)
class ColorBounds:
    """Bracket ``lower <= chi(G) <= upper`` for the chromatic number.

    Attributes:
        lower: Lower bound from clique number and independence number.
        upper: Colors used by a greedy coloring.
    """

    lower: int
    upper: int

    def __post_init__(self) -> None:
        if self.lower > self.upper:
            raise ValueError(
                f"Invalid bounds: lower={self.lower} exceeds upper={self.upper}"
            )

    @property
    def width(self) -> int:
        """Number of candidate values still in the bracket minus one."""
        return self.upper - self.lower

    def __iter__(self) -> Iterator[int]:
        yield self.lower
        yield self.upper


@dataclass(frozen=True)
class SolveResult:
    """Outcome of one solver invocation.

    Variable values are left on the submitted problem; this object only
    carries the normalized verdict.

    Attributes:
        status: Normalized status.
        raw_status: Solver-specific status text, for error messages.
        objective: Objective value when a solution is available.
        wall_time: Seconds spent inside the solver.
    """

    status: SolveStatus
    raw_status: str
    objective: Optional[float] = None
    wall_time: float = 0.0

    @property
    def has_solution(self) -> bool:
        return self.status in (SolveStatus.OPTIMAL, SolveStatus.FEASIBLE)
