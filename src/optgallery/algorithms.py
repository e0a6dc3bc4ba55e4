"""
Certificate checks and brute-force ground truths for the graph problems.

The brute-force searches enumerate subsets (or color assignments) from the
most promising size outwards and return the first certificate found. They
are only practical for small graphs but serve as ground truth for testing
the ILP formulations.
"""

import networkx as nx
from typing import Dict, Iterable, Optional, Set, Tuple
from itertools import combinations, product

from .graphs import canonical_edges, closed_neighborhood


def verify_vertex_cover(graph: nx.Graph, node_set: Iterable) -> bool:
    """
    Verify that every edge has at least one endpoint in the node set.

    Args:
        graph: The input networkx graph.
        node_set: Candidate cover.

    Returns:
        True if the node set covers every edge, False otherwise.
    """
    node_set = set(node_set)
    if not node_set <= set(graph.nodes()):
        return False
    for u, v in graph.edges():
        if u not in node_set and v not in node_set:
            return False
    return True


def verify_dominating_set(graph: nx.Graph, node_set: Iterable, total: bool = False) -> bool:
    """
    Verify that every vertex is dominated by the node set.

    Args:
        graph: The input networkx graph.
        node_set: Candidate dominating set.
        total: If True, every vertex needs a *neighbour* in the set
            (total domination); otherwise the vertex itself also counts.

    Returns:
        True if the node set dominates the graph, False otherwise.
    """
    node_set = set(node_set)
    if not node_set <= set(graph.nodes()):
        return False
    for v in graph.nodes():
        neighborhood = set(graph.neighbors(v)) if total else closed_neighborhood(graph, v)
        if not neighborhood & node_set:
            return False
    return True


def verify_matching(graph: nx.Graph, edge_set: Iterable[Tuple]) -> bool:
    """
    Verify that a set of edges exists in the graph and is vertex disjoint.
    """
    seen = set()
    for u, v in edge_set:
        if u == v or not graph.has_edge(u, v):
            return False
        if u in seen or v in seen:
            return False
        seen.update((u, v))
    return True


def verify_coloring(graph: nx.Graph, coloring: Dict, num_colors: Optional[int] = None) -> bool:
    """
    Verify that a coloring is proper.

    Args:
        graph: The input networkx graph.
        coloring: Mapping from node to color index.
        num_colors: If given, every color must lie in range(num_colors).

    Returns:
        True if every node is colored and no edge joins two equal colors.
    """
    for node in graph.nodes():
        if node not in coloring:
            return False
        if num_colors is not None and not 0 <= coloring[node] < num_colors:
            return False
    for u, v in graph.edges():
        if coloring[u] == coloring[v]:
            return False
    return True


def find_min_vertex_cover_brute_force(graph: nx.Graph) -> Set:
    """
    Find a minimum vertex cover by enumerating vertex subsets by size.
    """
    nodes = list(graph.nodes())

    for k in range(0, len(nodes) + 1):
        for combo in combinations(nodes, k):
            if verify_vertex_cover(graph, combo):
                return set(combo)

    return set(nodes)


def find_min_dominating_set_brute_force(graph: nx.Graph, total: bool = False) -> Optional[Set]:
    """
    Find a minimum (total) dominating set by enumerating vertex subsets by size.

    Returns:
        A minimum dominating set, or None when no total dominating set
        exists (the graph has an isolated vertex).
    """
    nodes = list(graph.nodes())

    for k in range(0, len(nodes) + 1):
        for combo in combinations(nodes, k):
            if verify_dominating_set(graph, combo, total=total):
                return set(combo)

    return None


def find_max_matching_brute_force(graph: nx.Graph) -> Set[Tuple]:
    """
    Find a maximum matching by enumerating edge subsets from largest to smallest.
    """
    edges = canonical_edges(graph)
    max_size = graph.number_of_nodes() // 2

    for k in range(min(max_size, len(edges)), 0, -1):
        for combo in combinations(edges, k):
            if verify_matching(graph, combo):
                return set(combo)

    return set()


def find_chromatic_number_brute_force(graph: nx.Graph) -> int:
    """
    Smallest k for which some assignment of k colors is proper.
    """
    nodes = list(graph.nodes())
    if not nodes:
        return 0

    for k in range(1, len(nodes) + 1):
        # Fixing the first vertex's color removes the k-fold label symmetry
        for rest in product(range(k), repeat=len(nodes) - 1):
            coloring = dict(zip(nodes, (0,) + rest))
            if verify_coloring(graph, coloring):
                return k

    return len(nodes)


def compact_coloring(coloring: Dict) -> Dict:
    """
    Relabel colors to 0..chi-1 in order of first appearance.
    """
    relabel = {}
    compacted = {}
    for node, color in coloring.items():
        if color not in relabel:
            relabel[color] = len(relabel)
        compacted[node] = relabel[color]
    return compacted
