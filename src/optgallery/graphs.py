"""
Adjacency-matrix graphs used throughout the gallery.

Graphs are written down as dense 0/1 adjacency matrices: row and column i
both refer to vertex i, and entry (i, j) is 1 exactly when vertices i and j
are adjacent. They are converted to undirected networkx graphs whose nodes
are the 0-based row indices.
"""

import networkx as nx
import numpy as np
from typing import Dict, Iterable, List, Set, Sequence, Union

from .exceptions import InvalidGraphError


ArrayLike = Union[np.ndarray, Sequence[Sequence[int]]]


# Edges 0-1, 1-2, 1-3, 2-4, 2-5, 3-4
VERTEX_COVER_ADJACENCY = np.array([
    [0, 1, 0, 0, 0, 0],
    [1, 0, 1, 1, 0, 0],
    [0, 1, 0, 0, 1, 1],
    [0, 1, 0, 0, 1, 0],
    [0, 0, 1, 1, 0, 0],
    [0, 0, 1, 0, 0, 0],
], dtype=np.int64)

DOMINATING_SET_ADJACENCY = np.array([
    [0, 1, 0, 0, 0, 0, 0, 0, 0, 1, 0],
    [1, 0, 1, 0, 0, 0, 0, 0, 0, 0, 1],
    [0, 1, 0, 1, 0, 1, 0, 0, 0, 0, 0],
    [0, 0, 1, 0, 1, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 1, 0, 1, 0, 0, 0, 0, 0],
    [0, 0, 1, 0, 1, 0, 1, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 1, 0, 1, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 1, 0, 1, 0, 1],
    [0, 0, 0, 0, 0, 0, 0, 1, 0, 1, 1],
    [1, 0, 0, 0, 0, 0, 0, 0, 1, 0, 1],
    [0, 1, 0, 0, 0, 0, 0, 1, 1, 1, 0],
], dtype=np.int64)

MATCHING_ADJACENCY = np.array([
    [0, 0, 0, 0, 1, 0, 0, 0],
    [0, 0, 0, 0, 0, 1, 0, 0],
    [0, 0, 0, 0, 0, 0, 1, 0],
    [0, 0, 0, 0, 0, 0, 0, 1],
    [1, 0, 0, 0, 0, 1, 0, 1],
    [0, 1, 0, 0, 1, 0, 1, 0],
    [0, 0, 1, 0, 0, 1, 0, 1],
    [0, 0, 0, 1, 1, 0, 1, 0],
], dtype=np.int64)

# Pentagonal prism: outer 5-cycle 0..4, inner 5-cycle 5..9, spokes i -- i+5
COLORING_ADJACENCY = np.array([
    [0, 1, 0, 0, 1, 1, 0, 0, 0, 0],
    [1, 0, 1, 0, 0, 0, 1, 0, 0, 0],
    [0, 1, 0, 1, 0, 0, 0, 1, 0, 0],
    [0, 0, 1, 0, 1, 0, 0, 0, 1, 0],
    [1, 0, 0, 1, 0, 0, 0, 0, 0, 1],
    [1, 0, 0, 0, 0, 0, 1, 0, 0, 1],
    [0, 1, 0, 0, 0, 1, 0, 1, 0, 0],
    [0, 0, 1, 0, 0, 0, 1, 0, 1, 0],
    [0, 0, 0, 1, 0, 0, 0, 1, 0, 1],
    [0, 0, 0, 0, 1, 1, 0, 0, 1, 0],
], dtype=np.int64)


def validate_adjacency(matrix: ArrayLike) -> np.ndarray:
    """
    Check that a matrix is a valid simple-graph adjacency matrix.

    Args:
        matrix: Square array-like of 0/1 entries.

    Returns:
        The matrix as an integer numpy array.

    Raises:
        InvalidGraphError: If the matrix is not square, not symmetric,
            has entries other than 0 and 1, or has self-loops.
    """
    A = np.asarray(matrix)

    if A.ndim != 2 or A.shape[0] != A.shape[1]:
        raise InvalidGraphError(f"Adjacency matrix must be square, got shape {A.shape}")

    if not np.isin(A, (0, 1)).all():
        raise InvalidGraphError("Adjacency matrix entries must be 0 or 1")

    A = A.astype(np.int64)

    if not np.array_equal(A, A.T):
        raise InvalidGraphError("Adjacency matrix must be symmetric")

    if np.any(np.diag(A)):
        loops = [int(i) for i in np.flatnonzero(np.diag(A))]
        raise InvalidGraphError(f"Adjacency matrix has self-loops at vertices {loops}")

    return A


def graph_from_adjacency(matrix: ArrayLike) -> nx.Graph:
    """
    Build an undirected networkx graph from a 0/1 adjacency matrix.

    Nodes are the integers 0..n-1 in row order, including isolated vertices.
    """
    A = validate_adjacency(matrix)
    graph = nx.from_numpy_array(A)
    # from_numpy_array stores the matrix entry as an edge weight
    for _, _, data in graph.edges(data=True):
        data.pop("weight", None)
    return graph


def adjacency_from_graph(graph: nx.Graph) -> np.ndarray:
    """Dense 0/1 adjacency matrix of a graph, rows in node order."""
    return nx.to_numpy_array(graph, nodelist=list(graph.nodes()), weight=None, dtype=np.int64)


def membership_vector(graph: nx.Graph, selected: Iterable) -> List[int]:
    """
    Indicator list for a vertex subset, one entry per node in node order.

    This is the rounded value vector of the binary decision variables, i.e.
    1 for vertices in the cover/dominating set and 0 elsewhere.
    """
    selected = set(selected)
    unknown = selected - set(graph.nodes())
    if unknown:
        raise ValueError(f"Selected vertices not in graph: {sorted(unknown)}")
    return [1 if node in selected else 0 for node in graph.nodes()]


def coloring_membership(graph: nx.Graph, coloring: Dict) -> List[int]:
    """Color index per node in node order."""
    missing = [node for node in graph.nodes() if node not in coloring]
    if missing:
        raise ValueError(f"Coloring does not assign a color to vertices {missing}")
    return [int(coloring[node]) for node in graph.nodes()]


def vertex_cover_graph() -> nx.Graph:
    """The 6-vertex graph of the minimum vertex cover example."""
    return graph_from_adjacency(VERTEX_COVER_ADJACENCY)


def dominating_set_graph() -> nx.Graph:
    """The 11-vertex graph of the dominating set example."""
    return graph_from_adjacency(DOMINATING_SET_ADJACENCY)


def matching_graph() -> nx.Graph:
    """The 8-vertex graph of the maximum matching example."""
    return graph_from_adjacency(MATCHING_ADJACENCY)


def coloring_graph() -> nx.Graph:
    """The 10-vertex graph of the k-coloring example."""
    return graph_from_adjacency(COLORING_ADJACENCY)


def edge_key(u, v, node_to_idx: Dict) -> tuple:
    """Orient an undirected edge from the earlier to the later node in graph order."""
    return (u, v) if node_to_idx[u] <= node_to_idx[v] else (v, u)


def canonical_edges(graph: nx.Graph) -> List[tuple]:
    """
    Edges of a graph, each oriented by node position rather than by label.

    Node labels need not be mutually comparable, so a graph mixing int and
    str nodes still gets a stable orientation.
    """
    node_to_idx = {node: i for i, node in enumerate(graph.nodes())}
    return [edge_key(u, v, node_to_idx) for u, v in graph.edges()]


def closed_neighborhood(graph: nx.Graph, v) -> Set:
    return set(graph.neighbors(v)) | {v}
