"""
Unit tests for certificate checks and brute-force ground truths.
"""

import unittest
import networkx as nx
import sys
import os

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from optgallery.algorithms import (
    compact_coloring,
    find_chromatic_number_brute_force,
    find_max_matching_brute_force,
    find_min_dominating_set_brute_force,
    find_min_vertex_cover_brute_force,
    verify_coloring,
    verify_dominating_set,
    verify_matching,
    verify_vertex_cover,
)
from optgallery.graphs import coloring_graph, dominating_set_graph, matching_graph, vertex_cover_graph


class TestVerification(unittest.TestCase):
    """Test the certificate checks."""

    def test_vertex_cover(self):
        G = nx.path_graph(4)  # 0-1-2-3
        self.assertTrue(verify_vertex_cover(G, {1, 2}))
        self.assertFalse(verify_vertex_cover(G, {1}))
        self.assertTrue(verify_vertex_cover(nx.empty_graph(3), set()))

    def test_vertex_cover_rejects_unknown_nodes(self):
        self.assertFalse(verify_vertex_cover(nx.path_graph(2), {0, 7}))

    def test_dominating_set_closed_vs_open(self):
        G = nx.star_graph(3)  # hub 0
        self.assertTrue(verify_dominating_set(G, {0}))
        # The hub has no neighbour in {0}
        self.assertFalse(verify_dominating_set(G, {0}, total=True))
        self.assertTrue(verify_dominating_set(G, {0, 1}, total=True))

    def test_matching(self):
        G = nx.cycle_graph(4)
        self.assertTrue(verify_matching(G, {(0, 1), (2, 3)}))
        self.assertFalse(verify_matching(G, {(0, 1), (1, 2)}))
        self.assertFalse(verify_matching(G, {(0, 2)}))
        self.assertTrue(verify_matching(G, set()))

    def test_coloring(self):
        G = nx.cycle_graph(4)
        self.assertTrue(verify_coloring(G, {0: 0, 1: 1, 2: 0, 3: 1}))
        self.assertFalse(verify_coloring(G, {0: 0, 1: 0, 2: 1, 3: 1}))
        self.assertFalse(verify_coloring(G, {0: 0, 1: 1, 2: 0}))
        self.assertFalse(verify_coloring(G, {0: 0, 1: 1, 2: 0, 3: 1}, num_colors=1))


class TestBruteForce(unittest.TestCase):
    """Test the brute-force searches on small graphs."""

    def test_empty_graph(self):
        G = nx.empty_graph(0)
        self.assertEqual(find_min_vertex_cover_brute_force(G), set())
        self.assertEqual(find_min_dominating_set_brute_force(G), set())
        self.assertEqual(find_max_matching_brute_force(G), set())
        self.assertEqual(find_chromatic_number_brute_force(G), 0)

    def test_isolated_vertices(self):
        G = nx.empty_graph(3)
        self.assertEqual(find_min_vertex_cover_brute_force(G), set())
        self.assertEqual(find_min_dominating_set_brute_force(G), {0, 1, 2})
        self.assertIsNone(find_min_dominating_set_brute_force(G, total=True))
        self.assertEqual(find_chromatic_number_brute_force(G), 1)

    def test_cycle_graph(self):
        G = nx.cycle_graph(5)
        cover = find_min_vertex_cover_brute_force(G)
        self.assertEqual(len(cover), 3)
        self.assertTrue(verify_vertex_cover(G, cover))
        self.assertEqual(len(find_max_matching_brute_force(G)), 2)
        self.assertEqual(find_chromatic_number_brute_force(G), 3)

    def test_gallery_graphs(self):
        """Known optima of the four worked-example graphs."""
        self.assertEqual(len(find_min_vertex_cover_brute_force(vertex_cover_graph())), 3)
        self.assertEqual(len(find_min_dominating_set_brute_force(dominating_set_graph())), 4)
        self.assertEqual(len(find_max_matching_brute_force(matching_graph())), 4)
        self.assertEqual(find_chromatic_number_brute_force(coloring_graph()), 3)

    def test_matching_edges_are_canonical(self):
        matching = find_max_matching_brute_force(nx.path_graph(2))
        self.assertEqual(matching, {(0, 1)})


class TestCompactColoring(unittest.TestCase):

    def test_relabels_in_order_of_appearance(self):
        self.assertEqual(compact_coloring({0: 7, 1: 3, 2: 7, 3: 9}), {0: 0, 1: 1, 2: 0, 3: 2})

    def test_empty(self):
        self.assertEqual(compact_coloring({}), {})


if __name__ == '__main__':
    unittest.main()
