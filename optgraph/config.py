"""Configuration classes for optgraph components."""

import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class SolverConfig:
    """Configuration for the default PuLP solver backend."""

    # Any name accepted by pulp.getSolver / pulp.listSolvers()
    solver_name: str = "PULP_CBC_CMD"

    # Wall-clock limit per oracle call in seconds; None means unlimited
    time_limit: Optional[float] = None

    # Forward solver output to stdout
    msg: bool = False

    # Solver threads; None leaves the solver default
    threads: Optional[int] = None

    # Extra keyword arguments passed verbatim to pulp.getSolver
    options: Dict[str, Any] = field(default_factory=dict)

    def solver_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for ``pulp.getSolver(self.solver_name, **kwargs)``."""
        kwargs: Dict[str, Any] = {"msg": self.msg}
        if self.time_limit is not None:
            kwargs["timeLimit"] = self.time_limit
        if self.threads is not None:
            kwargs["threads"] = self.threads
        kwargs.update(self.options)
        return kwargs

    @classmethod
    def from_env(cls) -> "SolverConfig":
        """Build a config honoring ``OPTGRAPH_SOLVER`` and ``OPTGRAPH_TIME_LIMIT``.

        Raises:
            ValueError: If ``OPTGRAPH_TIME_LIMIT`` is not a positive number.
        """
        config = cls()
        name = os.environ.get("OPTGRAPH_SOLVER")
        if name:
            config.solver_name = name
        limit = os.environ.get("OPTGRAPH_TIME_LIMIT")
        if limit:
            try:
                value = float(limit)
            except ValueError:
                raise ValueError(
                    f"OPTGRAPH_TIME_LIMIT must be a number, got '{limit}'"
                ) from None
            if value <= 0:
                raise ValueError(f"OPTGRAPH_TIME_LIMIT must be positive, got {value}")
            config.time_limit = value
        return config


# Global configuration instance
SOLVER_CONFIG = SolverConfig.from_env()
