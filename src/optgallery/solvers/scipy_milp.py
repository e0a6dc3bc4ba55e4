"""
ILP solvers for the gallery graph problems using SciPy.

These solvers use scipy.optimize.milp, which relies on the HiGHS backend.
This provides a dependency-light, open-source alternative to Gurobi.

Mathematical Formulations (all variables binary):
- Vertex cover:   minimize Σy_v  subject to y_u + y_v ≥ 1 for each edge (u,v)
- Dominating set: minimize Σx_v  subject to Σ_{u ∈ N[v]} x_u ≥ 1 for each vertex v
- Matching:       maximize Σx_e  subject to Σ_{e ∋ u} x_e ≤ 1 for each vertex u
- k-coloring:     minimize Σy_i  subject to Σ_i c_{v,i} = 1,
                  c_{u,i} + c_{v,i} ≤ 1 for each edge and color,
                  c_{v,i} ≤ y_i

Note: scipy.milp minimizes, so we minimize -Σx_e to maximize Σx_e.
"""

import logging
import networkx as nx
import numpy as np
from typing import Dict, List, Optional, Set, Tuple

from ..algorithms import compact_coloring
from ..exceptions import SolverError, SolverUnavailableError
from ..graphs import canonical_edges

try:
    from scipy.optimize import milp, OptimizeResult, Bounds, LinearConstraint
    from scipy.sparse import lil_matrix
    SCIPY_MILP_AVAILABLE = True
except ImportError:
    SCIPY_MILP_AVAILABLE = False
    milp = None
    OptimizeResult = None
    Bounds = None
    LinearConstraint = None
    lil_matrix = None


logger = logging.getLogger(__name__)


def _require_scipy():
    if not SCIPY_MILP_AVAILABLE:
        raise SolverUnavailableError(
            "scipy.optimize.milp is not available. Please upgrade SciPy to version 1.9.0 or later."
        )


def _solve_binary_program(
    name: str,
    c: np.ndarray,
    constraints: List,
    suppress_output: bool,
    time_limit: Optional[float],
) -> np.ndarray:
    """Solve min c^T x over binary x and return the solution vector."""
    num_rows = sum(con.A.shape[0] for con in constraints)
    logger.debug("%s: %d binary variables, %d constraint rows", name, len(c), num_rows)

    options = {'disp': not suppress_output}
    if time_limit is not None:
        options['time_limit'] = time_limit

    res: OptimizeResult = milp(
        c=c,
        constraints=constraints,
        integrality=np.ones(len(c)),
        bounds=Bounds(0, 1),
        options=options
    )

    if not res.success:
        raise SolverError(f"SciPy MILP optimization failed for {name} (status {res.status}): {res.message}")

    logger.info("%s: optimal objective %.1f", name, res.fun)
    return res.x


def solve_vertex_cover_scipy(
    graph: nx.Graph,
    suppress_output: bool = True,
    time_limit: Optional[float] = None,
) -> Set:
    """
    Find a minimum vertex cover of a graph using scipy.optimize.milp.

    Args:
        graph: Input graph
        suppress_output: Whether to suppress solver output
        time_limit: Optional wall-clock limit in seconds

    Returns:
        Set of nodes forming a minimum vertex cover

    Raises:
        SolverUnavailableError: If scipy.optimize.milp is not available
        SolverError: If optimization fails
    """
    _require_scipy()

    nodes = list(graph.nodes())
    n = len(nodes)

    if n == 0 or graph.number_of_edges() == 0:
        return set()

    node_to_idx = {node: i for i, node in enumerate(nodes)}

    c = np.ones(n)

    # Constraints: y_u + y_v >= 1 for each edge (u, v)
    num_constraints = graph.number_of_edges()
    A = lil_matrix((num_constraints, n), dtype=np.float64)
    for i, (u, v) in enumerate(graph.edges()):
        A[i, node_to_idx[u]] = 1
        A[i, node_to_idx[v]] = 1

    constraints = [LinearConstraint(A.tocsr(), np.ones(num_constraints), np.inf)]

    x = _solve_binary_program("vertex_cover", c, constraints, suppress_output, time_limit)
    return {nodes[i] for i, val in enumerate(x) if val > 0.5}


def solve_dominating_set_scipy(
    graph: nx.Graph,
    suppress_output: bool = True,
    time_limit: Optional[float] = None,
    total: bool = False,
) -> Set:
    """
    Find a minimum dominating set of a graph using scipy.optimize.milp.

    Args:
        graph: Input graph
        suppress_output: Whether to suppress solver output
        time_limit: Optional wall-clock limit in seconds
        total: Use open neighbourhoods, so every vertex needs a neighbour
            in the set (minimum total dominating set)

    Returns:
        Set of nodes forming a minimum (total) dominating set

    Raises:
        SolverUnavailableError: If scipy.optimize.milp is not available
        SolverError: If optimization fails or, for total domination, the
            graph has an isolated vertex
    """
    _require_scipy()

    nodes = list(graph.nodes())
    n = len(nodes)

    if n == 0:
        return set()

    isolated = [v for v in nodes if graph.degree(v) == 0]
    if total and isolated:
        raise SolverError(f"No total dominating set exists: isolated vertices {isolated}")

    if graph.number_of_edges() == 0:
        return set(nodes)

    node_to_idx = {node: i for i, node in enumerate(nodes)}

    c = np.ones(n)

    # Constraints: one covering row per vertex over its neighbourhood
    A = lil_matrix((n, n), dtype=np.float64)
    for i, v in enumerate(nodes):
        if not total:
            A[i, i] = 1
        for u in graph.neighbors(v):
            A[i, node_to_idx[u]] = 1

    constraints = [LinearConstraint(A.tocsr(), np.ones(n), np.inf)]

    name = "total_dominating_set" if total else "dominating_set"
    x = _solve_binary_program(name, c, constraints, suppress_output, time_limit)
    return {nodes[i] for i, val in enumerate(x) if val > 0.5}


def solve_matching_scipy(
    graph: nx.Graph,
    suppress_output: bool = True,
    time_limit: Optional[float] = None,
) -> Set[Tuple]:
    """
    Find a maximum matching of a graph using scipy.optimize.milp.

    One binary variable per edge; each vertex may be covered by at most one
    selected edge.

    Args:
        graph: Input graph
        suppress_output: Whether to suppress solver output
        time_limit: Optional wall-clock limit in seconds

    Returns:
        Set of matched edges as (u, v) tuples, u before v in graph node order

    Raises:
        SolverUnavailableError: If scipy.optimize.milp is not available
        SolverError: If optimization fails
    """
    _require_scipy()

    edges = canonical_edges(graph)
    m = len(edges)

    if m == 0:
        return set()

    nodes = [v for v in graph.nodes() if graph.degree(v) > 0]
    node_to_row = {node: i for i, node in enumerate(nodes)}

    # Objective: maximize Σx_e  --->  minimize -Σx_e
    c = -np.ones(m)

    # Constraints: Σ_{e incident to u} x_e <= 1 for each non-isolated vertex u
    A = lil_matrix((len(nodes), m), dtype=np.float64)
    for j, (u, v) in enumerate(edges):
        A[node_to_row[u], j] = 1
        A[node_to_row[v], j] = 1

    constraints = [LinearConstraint(A.tocsr(), -np.inf, np.ones(len(nodes)))]

    x = _solve_binary_program("matching", c, constraints, suppress_output, time_limit)
    return {edges[j] for j, val in enumerate(x) if val > 0.5}


def solve_coloring_scipy(
    graph: nx.Graph,
    suppress_output: bool = True,
    time_limit: Optional[float] = None,
    num_colors: Optional[int] = None,
    symmetry_breaking: bool = False,
) -> Dict:
    """
    Find a minimum coloring of a graph using scipy.optimize.milp.

    Variables c_{v,i} (vertex v takes color i) are laid out row-major at
    index v * k + i, followed by the k color-used indicators y_i.

    Args:
        graph: Input graph
        suppress_output: Whether to suppress solver output
        time_limit: Optional wall-clock limit in seconds
        num_colors: Upper bound k on the number of colors (default: |V|)
        symmetry_breaking: Add y_i >= y_{i+1} so colors are used in order

    Returns:
        Dict mapping each node to a color in 0..chi-1

    Raises:
        ValueError: If num_colors < 1
        SolverUnavailableError: If scipy.optimize.milp is not available
        SolverError: If optimization fails (e.g. k is below the chromatic number)
    """
    _require_scipy()

    nodes = list(graph.nodes())
    n = len(nodes)
    k = n if num_colors is None else num_colors

    if num_colors is not None and num_colors < 1:
        raise ValueError(f"num_colors must be at least 1, got {num_colors}")

    if n == 0:
        return {}

    if graph.number_of_edges() == 0:
        return {node: 0 for node in nodes}

    node_to_idx = {node: i for i, node in enumerate(nodes)}
    num_vars = n * k + k

    def col(v_idx: int, color: int) -> int:
        return v_idx * k + color

    def used(color: int) -> int:
        return n * k + color

    c = np.zeros(num_vars)
    c[n * k:] = 1

    constraints = []

    # Each vertex takes exactly one color
    A_assign = lil_matrix((n, num_vars), dtype=np.float64)
    for v_idx in range(n):
        for color in range(k):
            A_assign[v_idx, col(v_idx, color)] = 1
    constraints.append(LinearConstraint(A_assign.tocsr(), np.ones(n), np.ones(n)))

    # Adjacent vertices never share a color
    edges = list(graph.edges())
    A_edge = lil_matrix((len(edges) * k, num_vars), dtype=np.float64)
    for e_idx, (u, v) in enumerate(edges):
        for color in range(k):
            row = e_idx * k + color
            A_edge[row, col(node_to_idx[u], color)] = 1
            A_edge[row, col(node_to_idx[v], color)] = 1
    constraints.append(LinearConstraint(A_edge.tocsr(), -np.inf, np.ones(len(edges) * k)))

    # c_{v,i} <= y_i
    A_link = lil_matrix((n * k, num_vars), dtype=np.float64)
    for v_idx in range(n):
        for color in range(k):
            row = col(v_idx, color)
            A_link[row, col(v_idx, color)] = 1
            A_link[row, used(color)] = -1
    constraints.append(LinearConstraint(A_link.tocsr(), -np.inf, np.zeros(n * k)))

    if symmetry_breaking and k > 1:
        A_sym = lil_matrix((k - 1, num_vars), dtype=np.float64)
        for color in range(k - 1):
            A_sym[color, used(color + 1)] = 1
            A_sym[color, used(color)] = -1
        constraints.append(LinearConstraint(A_sym.tocsr(), -np.inf, np.zeros(k - 1)))

    x = _solve_binary_program("coloring", c, constraints, suppress_output, time_limit)

    coloring = {}
    for v_idx, node in enumerate(nodes):
        for color in range(k):
            if x[col(v_idx, color)] > 0.5:
                coloring[node] = color
                break
        else:
            raise SolverError(f"Solver returned no color for vertex {node}")

    return compact_coloring(coloring)


def get_vertex_cover_number_scipy(
    graph: nx.Graph,
    suppress_output: bool = True,
    time_limit: Optional[float] = None,
) -> int:
    """Size of a minimum vertex cover using SciPy."""
    return len(solve_vertex_cover_scipy(graph, suppress_output, time_limit))


def get_domination_number_scipy(
    graph: nx.Graph,
    suppress_output: bool = True,
    time_limit: Optional[float] = None,
    total: bool = False,
) -> int:
    """Size of a minimum (total) dominating set using SciPy."""
    return len(solve_dominating_set_scipy(graph, suppress_output, time_limit, total=total))


def get_matching_number_scipy(
    graph: nx.Graph,
    suppress_output: bool = True,
    time_limit: Optional[float] = None,
) -> int:
    """Cardinality of a maximum matching using SciPy."""
    return len(solve_matching_scipy(graph, suppress_output, time_limit))


def get_chromatic_number_scipy(
    graph: nx.Graph,
    suppress_output: bool = True,
    time_limit: Optional[float] = None,
) -> int:
    """Chromatic number using SciPy."""
    coloring = solve_coloring_scipy(graph, suppress_output, time_limit, symmetry_breaking=True)
    return len(set(coloring.values()))
