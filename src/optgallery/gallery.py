"""
Runner for the worked examples.

Each example is a single pass: take the literal input (an adjacency matrix
or a seeded dataset), build the model, solve it, check the certificate, and
render the result as text.
"""

import time
import networkx as nx
import numpy as np
import pandas as pd
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from .algorithms import verify_coloring, verify_dominating_set, verify_matching, verify_vertex_cover
from .config import LogisticConfig, MILPConfig
from .exceptions import OptGalleryError, SolverUnavailableError
from .graphs import (
    coloring_graph,
    coloring_membership,
    dominating_set_graph,
    matching_graph,
    membership_vector,
    vertex_cover_graph,
)
from .regression import accuracy, fit_logistic_regression, generate_dataset
from .solvers import milp as gurobi_milp
from .solvers import scipy_milp


GRAPH_PROBLEMS = ("vertex_cover", "dominating_set", "matching", "coloring")
REGRESSION_PROBLEMS = ("logistic_l2", "logistic_l1")
PROBLEMS = GRAPH_PROBLEMS + REGRESSION_PROBLEMS


@dataclass
class GalleryResult:
    """Outcome of running one worked example."""
    problem: str
    value: float
    solution: Any
    backend: str
    runtime_seconds: float
    valid: bool

    graph_size: Optional[int] = None
    graph_edges: Optional[int] = None
    details: Dict[str, Any] = field(default_factory=dict)


def get_milp_solvers(backend: str = "auto") -> Dict[str, Callable]:
    """
    Map each graph problem to the solve function of a backend.

    Args:
        backend: "scipy", "gurobi", or "auto" (Gurobi when installed).

    Returns:
        Dict with the backend name under "backend" and one callable per problem.

    Raises:
        SolverUnavailableError: If the requested backend is not installed.
    """
    if backend == "auto":
        backend = "gurobi" if gurobi_milp.GUROBI_AVAILABLE else "scipy"

    if backend == "gurobi":
        if not gurobi_milp.GUROBI_AVAILABLE:
            raise SolverUnavailableError("Gurobi backend requested but gurobipy is not installed")
        return {
            "backend": "gurobi",
            "vertex_cover": gurobi_milp.solve_vertex_cover_milp,
            "dominating_set": gurobi_milp.solve_dominating_set_milp,
            "matching": gurobi_milp.solve_matching_milp,
            "coloring": gurobi_milp.solve_coloring_milp,
        }
    if backend == "scipy":
        if not scipy_milp.SCIPY_MILP_AVAILABLE:
            raise SolverUnavailableError("SciPy backend requested but scipy.optimize.milp is not available")
        return {
            "backend": "scipy",
            "vertex_cover": scipy_milp.solve_vertex_cover_scipy,
            "dominating_set": scipy_milp.solve_dominating_set_scipy,
            "matching": scipy_milp.solve_matching_scipy,
            "coloring": scipy_milp.solve_coloring_scipy,
        }
    raise ValueError(f"Unknown MILP backend '{backend}'")


def _timed(func: Callable, *args, **kwargs):
    start_time = time.time()
    result = func(*args, **kwargs)
    return result, time.time() - start_time


def run_vertex_cover(graph: Optional[nx.Graph] = None, config: Optional[MILPConfig] = None) -> GalleryResult:
    """Minimum vertex cover of the 6-vertex example graph (or a given graph)."""
    graph = vertex_cover_graph() if graph is None else graph
    config = config or MILPConfig()
    solvers = get_milp_solvers(config.backend)

    cover, runtime = _timed(solvers["vertex_cover"], graph, **config.solver_kwargs())
    return GalleryResult(
        problem="vertex_cover",
        value=len(cover),
        solution=cover,
        backend=solvers["backend"],
        runtime_seconds=runtime,
        valid=verify_vertex_cover(graph, cover),
        graph_size=graph.number_of_nodes(),
        graph_edges=graph.number_of_edges(),
        details={"membership": membership_vector(graph, cover)},
    )


def run_dominating_set(
    graph: Optional[nx.Graph] = None,
    config: Optional[MILPConfig] = None,
    total: bool = False,
) -> GalleryResult:
    """Minimum (total) dominating set of the 11-vertex example graph (or a given graph)."""
    graph = dominating_set_graph() if graph is None else graph
    config = config or MILPConfig()
    solvers = get_milp_solvers(config.backend)

    dominating, runtime = _timed(solvers["dominating_set"], graph, total=total, **config.solver_kwargs())
    return GalleryResult(
        problem="total_dominating_set" if total else "dominating_set",
        value=len(dominating),
        solution=dominating,
        backend=solvers["backend"],
        runtime_seconds=runtime,
        valid=verify_dominating_set(graph, dominating, total=total),
        graph_size=graph.number_of_nodes(),
        graph_edges=graph.number_of_edges(),
        details={"membership": membership_vector(graph, dominating)},
    )


def run_matching(graph: Optional[nx.Graph] = None, config: Optional[MILPConfig] = None) -> GalleryResult:
    """Maximum matching of the 8-vertex example graph (or a given graph)."""
    graph = matching_graph() if graph is None else graph
    config = config or MILPConfig()
    solvers = get_milp_solvers(config.backend)

    matching, runtime = _timed(solvers["matching"], graph, **config.solver_kwargs())

    # Symmetric edge-indicator matrix, the form the matching is usually displayed in
    nodes = list(graph.nodes())
    index = {node: i for i, node in enumerate(nodes)}
    indicator = np.zeros((len(nodes), len(nodes)), dtype=np.int64)
    for u, v in matching:
        indicator[index[u], index[v]] = indicator[index[v], index[u]] = 1

    return GalleryResult(
        problem="matching",
        value=len(matching),
        solution=matching,
        backend=solvers["backend"],
        runtime_seconds=runtime,
        valid=verify_matching(graph, matching),
        graph_size=graph.number_of_nodes(),
        graph_edges=graph.number_of_edges(),
        details={"indicator": indicator},
    )


def run_coloring(
    graph: Optional[nx.Graph] = None,
    config: Optional[MILPConfig] = None,
    num_colors: Optional[int] = None,
    symmetry_breaking: bool = False,
) -> GalleryResult:
    """Minimum coloring of the 10-vertex example graph (or a given graph)."""
    graph = coloring_graph() if graph is None else graph
    config = config or MILPConfig()
    solvers = get_milp_solvers(config.backend)

    coloring, runtime = _timed(
        solvers["coloring"],
        graph,
        num_colors=num_colors,
        symmetry_breaking=symmetry_breaking,
        **config.solver_kwargs()
    )
    return GalleryResult(
        problem="coloring",
        value=len(set(coloring.values())),
        solution=coloring,
        backend=solvers["backend"],
        runtime_seconds=runtime,
        valid=verify_coloring(graph, coloring),
        graph_size=graph.number_of_nodes(),
        graph_edges=graph.number_of_edges(),
        details={"membership": coloring_membership(graph, coloring)},
    )


def run_logistic_regression(
    config: Optional[LogisticConfig] = None,
    penalty: str = "l1",
    data: Optional[tuple] = None,
) -> GalleryResult:
    """
    Fit the regularized logistic regression example.

    The value reported is the number of nonzero coefficients, which is the
    quantity of interest for the sparse (ℓ1) model.
    """
    config = config or LogisticConfig()
    if data is None:
        data = generate_dataset(config.n_samples, config.n_features, corr=config.corr, seed=config.seed)
    X, y = data

    fit = fit_logistic_regression(
        X, y,
        lam=config.lam,
        penalty=penalty,
        solver=config.solver,
        formulation=config.formulation,
    )
    nonzeros = fit.nonzero_count()

    return GalleryResult(
        problem=f"logistic_{penalty}",
        value=nonzeros,
        solution=fit.theta,
        backend=fit.solver,
        runtime_seconds=fit.solve_time,
        valid=bool(np.all(np.isfinite(fit.theta))),
        details={
            "objective": fit.objective,
            "status": fit.status,
            "accuracy": accuracy(X, y, fit.theta),
            "num_coefficients": len(fit.theta),
            "lam": fit.lam,
        },
    )


def run_gallery(
    problems: Optional[List[str]] = None,
    milp_config: Optional[MILPConfig] = None,
    logistic_config: Optional[LogisticConfig] = None,
    verbose: bool = True,
) -> Dict[str, GalleryResult]:
    """
    Run the selected worked examples in order.

    Args:
        problems: Subset of PROBLEMS to run (default: all of them).
        milp_config: Settings for the graph ILPs.
        logistic_config: Settings for the regression dataset and model.
        verbose: Whether to print a progress line per example.

    Returns:
        Dictionary mapping problem names to GalleryResult objects. Examples
        whose solver is unavailable or fails are reported and skipped.
    """
    if problems is None:
        problems = list(PROBLEMS)

    unknown = [p for p in problems if p not in PROBLEMS]
    if unknown:
        raise ValueError(f"Unknown problems {unknown}, expected a subset of {PROBLEMS}")

    milp_config = milp_config or MILPConfig()
    logistic_config = logistic_config or LogisticConfig()
    data = None

    results = {}

    for problem in problems:
        if verbose:
            print(f"Running {problem}...")

        try:
            if problem == "vertex_cover":
                result = run_vertex_cover(config=milp_config)
            elif problem == "dominating_set":
                result = run_dominating_set(config=milp_config)
            elif problem == "matching":
                result = run_matching(config=milp_config)
            elif problem == "coloring":
                result = run_coloring(config=milp_config)
            else:
                if data is None:
                    data = generate_dataset(
                        logistic_config.n_samples,
                        logistic_config.n_features,
                        corr=logistic_config.corr,
                        seed=logistic_config.seed,
                    )
                penalty = problem.split("_", 1)[1]
                result = run_logistic_regression(logistic_config, penalty=penalty, data=data)
        except OptGalleryError as e:
            if verbose:
                print(f"  ✗ {problem}: {e}")
            continue

        results[problem] = result

        if verbose:
            mark = "✓" if result.valid else "✗"
            print(f"  {mark} {problem}: value = {result.value}, "
                  f"backend = {result.backend}, runtime = {result.runtime_seconds:.3f}s")

    return results


def render_result(result: GalleryResult) -> str:
    """Multi-line text rendering of a single example's solution."""
    lines = [f"{result.problem} ({result.backend}): value = {result.value}"]

    if result.problem in ("vertex_cover", "dominating_set", "total_dominating_set"):
        lines.append(f"  selected vertices: {sorted(result.solution)}")
        lines.append(f"  membership:        {result.details['membership']}")
    elif result.problem == "matching":
        lines.append(f"  matched edges: {sorted(result.solution)}")
        for row in result.details["indicator"]:
            lines.append("  " + " ".join(str(int(x)) for x in row))
    elif result.problem == "coloring":
        lines.append(f"  colors per vertex: {result.details['membership']}")
    else:
        details = result.details
        lines.append(f"  nonzero coefficients: {result.value} (out of {details['num_coefficients']})")
        lines.append(f"  objective: {details['objective']:.4f}  status: {details['status']}")
        lines.append(f"  training accuracy: {details['accuracy']:.3f}")

    lines.append(f"  valid: {result.valid}")
    return "\n".join(lines)


def results_to_dataframe(results: Dict[str, GalleryResult]) -> pd.DataFrame:
    """
    Create a pandas DataFrame summarizing gallery results.

    Returns:
        DataFrame with columns: problem, value, backend, runtime_seconds,
                               valid, graph_size, graph_edges (nullable Int64)
    """
    rows = []
    for name, result in results.items():
        rows.append({
            'problem': name,
            'value': result.value,
            'backend': result.backend,
            'runtime_seconds': result.runtime_seconds,
            'valid': result.valid,
            'graph_size': result.graph_size,
            'graph_edges': result.graph_edges,
        })
    df = pd.DataFrame(rows, columns=[
        'problem', 'value', 'backend', 'runtime_seconds', 'valid', 'graph_size', 'graph_edges'
    ])
    # Regression rows have no graph, so keep the sizes as nullable integers
    return df.astype({'graph_size': 'Int64', 'graph_edges': 'Int64'})
