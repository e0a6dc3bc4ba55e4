"""
ILP solvers for the gallery graph problems using Gurobi.

Same formulations as the SciPy backend, written against gurobipy's matrix
API. Gurobi is optional: the functions raise SolverUnavailableError when
gurobipy cannot be imported.
"""

import logging
import networkx as nx
import numpy as np
from contextlib import contextmanager
from typing import Dict, Optional, Set, Tuple

from ..algorithms import compact_coloring
from ..exceptions import SolverError, SolverUnavailableError
from ..graphs import canonical_edges

try:
    import gurobipy as gp
    from gurobipy import GRB
    GUROBI_AVAILABLE = True
except ImportError:
    GUROBI_AVAILABLE = False
    gp = None
    GRB = None


logger = logging.getLogger(__name__)


@contextmanager
def _gurobi_model(name: str, suppress_output: bool, time_limit: Optional[float]):
    """Yield a fresh Gurobi model inside its own environment."""
    if not GUROBI_AVAILABLE:
        raise SolverUnavailableError(
            "Gurobi is not available. Please install gurobipy and ensure "
            "you have a valid Gurobi license."
        )

    try:
        with gp.Env(empty=True) as env:
            if suppress_output:
                env.setParam('OutputFlag', 0)
            env.start()

            with gp.Model(name, env=env) as model:
                if time_limit is not None:
                    model.setParam('TimeLimit', time_limit)
                yield model
    except gp.GurobiError as e:
        raise SolverError(f"Gurobi error: {e}") from e


def _optimize(model, name: str):
    model.optimize()

    if model.status == GRB.OPTIMAL:
        logger.info("%s: optimal objective %.1f", name, model.ObjVal)
        return
    if model.status == GRB.INFEASIBLE:
        raise SolverError(f"MILP model for {name} is infeasible")
    raise SolverError(f"Optimization of {name} failed with status: {model.status}")


def solve_vertex_cover_milp(
    graph: nx.Graph,
    suppress_output: bool = True,
    time_limit: Optional[float] = None,
) -> Set:
    """
    Find a minimum vertex cover of a graph using a Gurobi MILP model.

    Formulation:
    - Variables: y_v ∈ {0, 1} for each vertex v
    - Objective: minimize Σy_v
    - Constraints: y_u + y_v ≥ 1 for every edge (u, v)

    Args:
        graph: The input networkx graph.
        suppress_output: Whether to suppress Gurobi's console output.
        time_limit: Optional wall-clock limit in seconds.

    Returns:
        A set of node IDs forming a minimum vertex cover.

    Raises:
        SolverUnavailableError: If Gurobi is not available.
        SolverError: If the optimization fails.
    """
    nodes = list(graph.nodes())

    if not nodes or graph.number_of_edges() == 0:
        return set()

    node_to_idx = {node: i for i, node in enumerate(nodes)}

    with _gurobi_model("vertex_cover", suppress_output, time_limit) as model:
        y = model.addMVar(shape=len(nodes), vtype=GRB.BINARY, name="y")
        model.setObjective(y.sum(), GRB.MINIMIZE)

        for u, v in graph.edges():
            model.addConstr(y[node_to_idx[u]] + y[node_to_idx[v]] >= 1, f"edge_{u}_{v}")

        _optimize(model, "vertex_cover")
        return {nodes[i] for i, val in enumerate(y.X) if val > 0.5}


def solve_dominating_set_milp(
    graph: nx.Graph,
    suppress_output: bool = True,
    time_limit: Optional[float] = None,
    total: bool = False,
) -> Set:
    """
    Find a minimum dominating set of a graph using a Gurobi MILP model.

    Formulation:
    - Variables: x_v ∈ {0, 1} for each vertex v
    - Objective: minimize Σx_v
    - Constraints: Σ_{u ∈ N[v]} x_u ≥ 1 for every vertex v
      (open neighbourhood N(v) when total=True)

    Args:
        graph: The input networkx graph.
        suppress_output: Whether to suppress Gurobi's console output.
        time_limit: Optional wall-clock limit in seconds.
        total: Require a neighbour of every vertex in the set.

    Returns:
        A set of node IDs forming a minimum (total) dominating set.

    Raises:
        SolverUnavailableError: If Gurobi is not available.
        SolverError: If the optimization fails.
    """
    nodes = list(graph.nodes())

    if not nodes:
        return set()

    isolated = [v for v in nodes if graph.degree(v) == 0]
    if total and isolated:
        raise SolverError(f"No total dominating set exists: isolated vertices {isolated}")

    if graph.number_of_edges() == 0:
        return set(nodes)

    node_to_idx = {node: i for i, node in enumerate(nodes)}
    name = "total_dominating_set" if total else "dominating_set"

    with _gurobi_model(name, suppress_output, time_limit) as model:
        x = model.addMVar(shape=len(nodes), vtype=GRB.BINARY, name="x")
        model.setObjective(x.sum(), GRB.MINIMIZE)

        for v in nodes:
            neighborhood = [node_to_idx[u] for u in graph.neighbors(v)]
            if not total:
                neighborhood.append(node_to_idx[v])
            model.addConstr(x[np.array(neighborhood)].sum() >= 1, f"dominate_{v}")

        _optimize(model, name)
        return {nodes[i] for i, val in enumerate(x.X) if val > 0.5}


def solve_matching_milp(
    graph: nx.Graph,
    suppress_output: bool = True,
    time_limit: Optional[float] = None,
) -> Set[Tuple]:
    """
    Find a maximum matching of a graph using a Gurobi MILP model.

    Formulation:
    - Variables: x_e ∈ {0, 1} for each edge e
    - Objective: maximize Σx_e
    - Constraints: Σ_{e ∋ u} x_e ≤ 1 for every vertex u

    Returns:
        A set of matched edges as (u, v) tuples, u before v in graph node order.
    """
    edges = canonical_edges(graph)

    if not edges:
        return set()

    incident = {}
    for j, (u, v) in enumerate(edges):
        incident.setdefault(u, []).append(j)
        incident.setdefault(v, []).append(j)

    with _gurobi_model("matching", suppress_output, time_limit) as model:
        x = model.addMVar(shape=len(edges), vtype=GRB.BINARY, name="x")
        model.setObjective(x.sum(), GRB.MAXIMIZE)

        for u, edge_indices in incident.items():
            model.addConstr(x[np.array(edge_indices)].sum() <= 1, f"vertex_{u}")

        _optimize(model, "matching")
        return {edges[j] for j, val in enumerate(x.X) if val > 0.5}


def solve_coloring_milp(
    graph: nx.Graph,
    suppress_output: bool = True,
    time_limit: Optional[float] = None,
    num_colors: Optional[int] = None,
    symmetry_breaking: bool = False,
) -> Dict:
    """
    Find a minimum coloring of a graph using a Gurobi MILP model.

    Formulation:
    - Variables: c_{v,i} ∈ {0, 1} (vertex v gets color i), y_i ∈ {0, 1}
    - Objective: minimize Σy_i
    - Constraints: Σ_i c_{v,i} = 1; c_{u,i} + c_{v,i} ≤ 1 for each edge;
      c_{v,i} ≤ y_i

    Returns:
        Dict mapping each node to a color in 0..chi-1.

    Raises:
        ValueError: If num_colors < 1.
        SolverUnavailableError: If Gurobi is not available.
        SolverError: If the optimization fails.
    """
    if num_colors is not None and num_colors < 1:
        raise ValueError(f"num_colors must be at least 1, got {num_colors}")

    nodes = list(graph.nodes())
    n = len(nodes)
    k = n if num_colors is None else num_colors

    if n == 0:
        return {}

    if graph.number_of_edges() == 0:
        return {node: 0 for node in nodes}

    node_to_idx = {node: i for i, node in enumerate(nodes)}

    with _gurobi_model("coloring", suppress_output, time_limit) as model:
        y = model.addMVar(shape=k, vtype=GRB.BINARY, name="y")
        c = model.addMVar(shape=(n, k), vtype=GRB.BINARY, name="c")
        model.setObjective(y.sum(), GRB.MINIMIZE)

        model.addConstr(c.sum(axis=1) == np.ones(n), "colour")
        for u, v in graph.edges():
            model.addConstr(c[node_to_idx[u], :] + c[node_to_idx[v], :] <= 1, f"neighbours_{u}_{v}")
        for i in range(n):
            model.addConstr(c[i, :] <= y, f"mincol_{i}")
        if symmetry_breaking and k > 1:
            model.addConstr(y[1:] <= y[:-1], "symmetry")

        _optimize(model, "coloring")
        values = c.X

    coloring = {}
    for i, node in enumerate(nodes):
        chosen = np.flatnonzero(values[i] > 0.5)
        if len(chosen) == 0:
            raise SolverError(f"Solver returned no color for vertex {node}")
        coloring[node] = int(chosen[0])

    return compact_coloring(coloring)


def get_vertex_cover_number_milp(
    graph: nx.Graph,
    suppress_output: bool = True,
    time_limit: Optional[float] = None,
) -> int:
    """Size of a minimum vertex cover using Gurobi."""
    return len(solve_vertex_cover_milp(graph, suppress_output, time_limit))


def get_domination_number_milp(
    graph: nx.Graph,
    suppress_output: bool = True,
    time_limit: Optional[float] = None,
    total: bool = False,
) -> int:
    """Size of a minimum (total) dominating set using Gurobi."""
    return len(solve_dominating_set_milp(graph, suppress_output, time_limit, total=total))


def get_matching_number_milp(
    graph: nx.Graph,
    suppress_output: bool = True,
    time_limit: Optional[float] = None,
) -> int:
    """Cardinality of a maximum matching using Gurobi."""
    return len(solve_matching_milp(graph, suppress_output, time_limit))


def get_chromatic_number_milp(
    graph: nx.Graph,
    suppress_output: bool = True,
    time_limit: Optional[float] = None,
) -> int:
    """Chromatic number using Gurobi."""
    coloring = solve_coloring_milp(graph, suppress_output, time_limit, symmetry_breaking=True)
    return len(set(coloring.values()))
