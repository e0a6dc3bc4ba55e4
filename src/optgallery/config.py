"""
Configuration dataclasses for gallery solves.

The defaults reproduce the worked examples: HiGHS through SciPy for the
graph ILPs, and a 2000 x 100 correlated dataset with lambda = 10 for the
logistic regression.
"""

from dataclasses import dataclass, asdict
from typing import Optional, Dict, Any


MILP_BACKENDS = ("auto", "scipy", "gurobi")


@dataclass
class MILPConfig:
    """Settings shared by every graph ILP solve."""
    backend: str = "auto"
    suppress_output: bool = True
    time_limit: Optional[float] = None

    def __post_init__(self):
        if self.backend not in MILP_BACKENDS:
            raise ValueError(f"Unknown MILP backend '{self.backend}', expected one of {MILP_BACKENDS}")
        if self.time_limit is not None and self.time_limit <= 0:
            raise ValueError(f"time_limit must be positive, got {self.time_limit}")

    def solver_kwargs(self) -> Dict[str, Any]:
        return {"suppress_output": self.suppress_output, "time_limit": self.time_limit}


@dataclass
class LogisticConfig:
    """Dataset and model settings for the logistic regression example."""
    n_samples: int = 2000
    n_features: int = 100
    corr: float = 1.0
    seed: int = 2713
    lam: float = 10.0
    solver: Optional[str] = None
    formulation: str = "conic"

    def __post_init__(self):
        if self.n_samples < 1 or self.n_features < 1:
            raise ValueError("n_samples and n_features must be positive")
        if self.lam < 0:
            raise ValueError(f"Regularization lambda must be non-negative, got {self.lam}")
        if self.formulation not in ("conic", "atom"):
            raise ValueError(f"Unknown formulation '{self.formulation}'")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
