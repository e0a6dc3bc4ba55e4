"""
Optimization model gallery: graph problems and logistic regression

This package expresses classic problems as mathematical optimization models
and hands them to general-purpose solvers:
1. Minimum vertex cover, dominating set, maximum matching and minimum
   k-coloring as integer linear programs (SciPy/HiGHS or Gurobi)
2. ℓ1/ℓ2-regularized logistic regression as an exponential cone program (cvxpy)

Each worked example builds its model from a small hand-written adjacency
matrix or a seeded synthetic dataset, solves it, and reports the result.
"""

from .algorithms import (
    verify_vertex_cover,
    verify_dominating_set,
    verify_matching,
    verify_coloring,
    find_min_vertex_cover_brute_force,
    find_min_dominating_set_brute_force,
    find_max_matching_brute_force,
    find_chromatic_number_brute_force,
)
from .graphs import (
    graph_from_adjacency,
    adjacency_from_graph,
    membership_vector,
    coloring_membership,
    vertex_cover_graph,
    dominating_set_graph,
    matching_graph,
    coloring_graph,
)
from .exceptions import OptGalleryError, SolverError, SolverUnavailableError, InvalidGraphError

from .solvers.scipy_milp import (
    solve_vertex_cover_scipy,
    solve_dominating_set_scipy,
    solve_matching_scipy,
    solve_coloring_scipy,
    get_vertex_cover_number_scipy,
    get_domination_number_scipy,
    get_matching_number_scipy,
    get_chromatic_number_scipy,
    SCIPY_MILP_AVAILABLE,
)
from .solvers.milp import (
    solve_vertex_cover_milp as solve_vertex_cover_gurobi,
    solve_dominating_set_milp as solve_dominating_set_gurobi,
    solve_matching_milp as solve_matching_gurobi,
    solve_coloring_milp as solve_coloring_gurobi,
    get_vertex_cover_number_milp as get_vertex_cover_number_gurobi,
    get_domination_number_milp as get_domination_number_gurobi,
    get_matching_number_milp as get_matching_number_gurobi,
    get_chromatic_number_milp as get_chromatic_number_gurobi,
    GUROBI_AVAILABLE,
)
from .regression import (
    generate_dataset,
    softplus,
    build_logit_model,
    build_sparse_logit_model,
    build_atom_logit_model,
    fit_logistic_regression,
    count_nonzero,
    LogisticFit,
)

# Generic MILP functions: prefer Gurobi if available, otherwise use SciPy
MILP_AVAILABLE = GUROBI_AVAILABLE or SCIPY_MILP_AVAILABLE

if GUROBI_AVAILABLE:
    solve_vertex_cover = solve_vertex_cover_gurobi
    solve_dominating_set = solve_dominating_set_gurobi
    solve_matching = solve_matching_gurobi
    solve_coloring = solve_coloring_gurobi
    get_vertex_cover_number = get_vertex_cover_number_gurobi
    get_domination_number = get_domination_number_gurobi
    get_matching_number = get_matching_number_gurobi
    get_chromatic_number = get_chromatic_number_gurobi
else:
    solve_vertex_cover = solve_vertex_cover_scipy
    solve_dominating_set = solve_dominating_set_scipy
    solve_matching = solve_matching_scipy
    solve_coloring = solve_coloring_scipy
    get_vertex_cover_number = get_vertex_cover_number_scipy
    get_domination_number = get_domination_number_scipy
    get_matching_number = get_matching_number_scipy
    get_chromatic_number = get_chromatic_number_scipy

__version__ = "0.1.0"
__all__ = [
    # Graphs
    "graph_from_adjacency",
    "adjacency_from_graph",
    "membership_vector",
    "coloring_membership",
    "vertex_cover_graph",
    "dominating_set_graph",
    "matching_graph",
    "coloring_graph",
    # Verification and ground truth
    "verify_vertex_cover",
    "verify_dominating_set",
    "verify_matching",
    "verify_coloring",
    "find_min_vertex_cover_brute_force",
    "find_min_dominating_set_brute_force",
    "find_max_matching_brute_force",
    "find_chromatic_number_brute_force",
    # Generic MILP solvers
    "solve_vertex_cover",
    "solve_dominating_set",
    "solve_matching",
    "solve_coloring",
    "get_vertex_cover_number",
    "get_domination_number",
    "get_matching_number",
    "get_chromatic_number",
    # Specific MILP solvers
    "solve_vertex_cover_scipy",
    "solve_dominating_set_scipy",
    "solve_matching_scipy",
    "solve_coloring_scipy",
    "get_vertex_cover_number_scipy",
    "get_domination_number_scipy",
    "get_matching_number_scipy",
    "get_chromatic_number_scipy",
    "solve_vertex_cover_gurobi",
    "solve_dominating_set_gurobi",
    "solve_matching_gurobi",
    "solve_coloring_gurobi",
    "get_vertex_cover_number_gurobi",
    "get_domination_number_gurobi",
    "get_matching_number_gurobi",
    "get_chromatic_number_gurobi",
    # Logistic regression
    "generate_dataset",
    "softplus",
    "build_logit_model",
    "build_sparse_logit_model",
    "build_atom_logit_model",
    "fit_logistic_regression",
    "count_nonzero",
    "LogisticFit",
    # Exceptions
    "OptGalleryError",
    "SolverError",
    "SolverUnavailableError",
    "InvalidGraphError",
    # Availability flags
    "MILP_AVAILABLE",
    "GUROBI_AVAILABLE",
    "SCIPY_MILP_AVAILABLE",
]
