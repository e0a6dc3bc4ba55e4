"""
ILP backends for the gallery graph problems.

Each backend exposes the same four operations (vertex cover, dominating set,
matching, coloring). SciPy/HiGHS is always available with a recent SciPy;
Gurobi is used when gurobipy is installed and licensed.
"""

from .scipy_milp import (
    solve_vertex_cover_scipy,
    solve_dominating_set_scipy,
    solve_matching_scipy,
    solve_coloring_scipy,
    SCIPY_MILP_AVAILABLE,
)
from .milp import (
    solve_vertex_cover_milp,
    solve_dominating_set_milp,
    solve_matching_milp,
    solve_coloring_milp,
    GUROBI_AVAILABLE,
)

__all__ = [
    "solve_vertex_cover_scipy",
    "solve_dominating_set_scipy",
    "solve_matching_scipy",
    "solve_coloring_scipy",
    "solve_vertex_cover_milp",
    "solve_dominating_set_milp",
    "solve_matching_milp",
    "solve_coloring_milp",
    "SCIPY_MILP_AVAILABLE",
    "GUROBI_AVAILABLE",
]
