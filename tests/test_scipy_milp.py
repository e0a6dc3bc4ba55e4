"""
Tests for the SciPy/HiGHS ILP solvers of the gallery graph problems.

Solutions are checked for validity with the certificate checks and for
optimality against known values or brute force.
"""

import pytest
import networkx as nx

from optgallery.algorithms import (
    find_chromatic_number_brute_force,
    find_max_matching_brute_force,
    find_min_dominating_set_brute_force,
    find_min_vertex_cover_brute_force,
    verify_coloring,
    verify_dominating_set,
    verify_matching,
    verify_vertex_cover,
)
from optgallery.exceptions import SolverError
from optgallery.solvers.scipy_milp import (
    SCIPY_MILP_AVAILABLE,
    get_chromatic_number_scipy,
    get_domination_number_scipy,
    get_matching_number_scipy,
    get_vertex_cover_number_scipy,
    solve_coloring_scipy,
    solve_dominating_set_scipy,
    solve_matching_scipy,
    solve_vertex_cover_scipy,
)

pytestmark = pytest.mark.skipif(not SCIPY_MILP_AVAILABLE, reason="scipy.optimize.milp not available")


class TestKnownOptima:
    """Small graphs with hand-checked optimal values."""

    def test_vertex_cover(self, small_test_graphs):
        for name, G, expected in small_test_graphs:
            cover = solve_vertex_cover_scipy(G)
            assert verify_vertex_cover(G, cover), f"{name}: invalid cover {cover}"
            assert len(cover) == expected["cover"], f"{name}: got {len(cover)}"

    def test_dominating_set(self, small_test_graphs):
        for name, G, expected in small_test_graphs:
            dominating = solve_dominating_set_scipy(G)
            assert verify_dominating_set(G, dominating), f"{name}: invalid dominating set"
            assert len(dominating) == expected["domination"], f"{name}: got {len(dominating)}"

    def test_matching(self, small_test_graphs):
        for name, G, expected in small_test_graphs:
            matching = solve_matching_scipy(G)
            assert verify_matching(G, matching), f"{name}: invalid matching {matching}"
            assert len(matching) == expected["matching"], f"{name}: got {len(matching)}"

    def test_coloring(self, small_test_graphs):
        for name, G, expected in small_test_graphs:
            coloring = solve_coloring_scipy(G)
            assert verify_coloring(G, coloring), f"{name}: invalid coloring {coloring}"
            assert len(set(coloring.values())) == expected["chromatic"], f"{name}"

    def test_number_helpers(self, small_test_graphs):
        for name, G, expected in small_test_graphs:
            assert get_vertex_cover_number_scipy(G) == expected["cover"], name
            assert get_domination_number_scipy(G) == expected["domination"], name
            assert get_matching_number_scipy(G) == expected["matching"], name
            assert get_chromatic_number_scipy(G) == expected["chromatic"], name


class TestAgainstBruteForce:
    """Medium graphs compared with exhaustive search."""

    def test_vertex_cover(self, medium_test_graphs):
        for name, G in medium_test_graphs:
            expected = len(find_min_vertex_cover_brute_force(G))
            assert get_vertex_cover_number_scipy(G) == expected, name

    def test_dominating_set(self, medium_test_graphs):
        for name, G in medium_test_graphs:
            expected = len(find_min_dominating_set_brute_force(G))
            assert get_domination_number_scipy(G) == expected, name

    def test_total_dominating_set(self, medium_test_graphs):
        for name, G in medium_test_graphs:
            brute = find_min_dominating_set_brute_force(G, total=True)
            if brute is None:
                with pytest.raises(SolverError):
                    solve_dominating_set_scipy(G, total=True)
                continue
            total_set = solve_dominating_set_scipy(G, total=True)
            assert verify_dominating_set(G, total_set, total=True), name
            assert len(total_set) == len(brute), name

    def test_matching(self, medium_test_graphs):
        for name, G in medium_test_graphs:
            expected = len(find_max_matching_brute_force(G))
            assert get_matching_number_scipy(G) == expected, name

    def test_matching_agrees_with_networkx(self, medium_test_graphs):
        for name, G in medium_test_graphs:
            expected = len(nx.max_weight_matching(G, maxcardinality=True))
            assert get_matching_number_scipy(G) == expected, name

    def test_coloring(self, medium_test_graphs):
        for name, G in medium_test_graphs:
            expected = find_chromatic_number_brute_force(G)
            assert get_chromatic_number_scipy(G) == expected, name


class TestGalleryGraphs:
    """The four worked-example graphs."""

    def test_vertex_cover(self, gallery_graphs):
        G, expected = gallery_graphs["vertex_cover"]
        cover = solve_vertex_cover_scipy(G)
        assert verify_vertex_cover(G, cover)
        assert len(cover) == expected

    def test_dominating_set(self, gallery_graphs):
        G, expected = gallery_graphs["dominating_set"]
        dominating = solve_dominating_set_scipy(G)
        assert verify_dominating_set(G, dominating)
        assert len(dominating) == expected

    def test_matching(self, gallery_graphs):
        G, expected = gallery_graphs["matching"]
        matching = solve_matching_scipy(G)
        assert verify_matching(G, matching)
        assert len(matching) == expected
        # A perfect matching on 8 vertices
        assert {v for e in matching for v in e} == set(G.nodes())

    def test_coloring(self, gallery_graphs):
        G, expected = gallery_graphs["coloring"]
        for symmetry_breaking in (False, True):
            coloring = solve_coloring_scipy(G, symmetry_breaking=symmetry_breaking)
            assert verify_coloring(G, coloring)
            assert set(coloring.values()) == set(range(expected))


class TestEdgeCases:

    def test_empty_graph(self):
        G = nx.Graph()
        assert solve_vertex_cover_scipy(G) == set()
        assert solve_dominating_set_scipy(G) == set()
        assert solve_matching_scipy(G) == set()
        assert solve_coloring_scipy(G) == {}

    def test_graph_without_edges(self):
        G = nx.empty_graph(4)
        assert solve_vertex_cover_scipy(G) == set()
        assert solve_dominating_set_scipy(G) == {0, 1, 2, 3}
        assert solve_matching_scipy(G) == set()
        assert solve_coloring_scipy(G) == {0: 0, 1: 0, 2: 0, 3: 0}

    def test_isolated_vertex_must_dominate_itself(self):
        G = nx.path_graph(3)
        G.add_node(9)
        dominating = solve_dominating_set_scipy(G)
        assert 9 in dominating
        assert len(dominating) == 2

    def test_total_domination_with_isolated_vertex(self):
        G = nx.path_graph(3)
        G.add_node(9)
        with pytest.raises(SolverError):
            solve_dominating_set_scipy(G, total=True)

    def test_total_domination_of_star(self):
        # The hub needs a neighbour in the set, so one leaf joins it
        assert len(solve_dominating_set_scipy(nx.star_graph(4), total=True)) == 2

    def test_matching_edges_follow_node_order(self):
        G = nx.Graph()
        G.add_nodes_from(range(4))
        G.add_edges_from([(3, 1), (2, 0)])
        assert solve_matching_scipy(G) == {(1, 3), (0, 2)}

    def test_mixed_node_label_types(self):
        G = nx.Graph()
        G.add_nodes_from(["hub", 0, 1, "leaf"])
        G.add_edges_from([(0, "hub"), ("hub", 1), (1, "leaf")])
        matching = solve_matching_scipy(G)
        assert matching == {("hub", 0), (1, "leaf")}
        assert verify_matching(G, matching)
        assert len(find_max_matching_brute_force(G)) == 2

    def test_string_node_labels(self):
        G = nx.Graph([("a", "b"), ("b", "c")])
        assert solve_vertex_cover_scipy(G) == {"b"}
        assert len(solve_matching_scipy(G)) == 1
        coloring = solve_coloring_scipy(G)
        assert verify_coloring(G, coloring)

    def test_invalid_num_colors(self):
        with pytest.raises(ValueError):
            solve_coloring_scipy(nx.path_graph(3), num_colors=0)

    def test_too_few_colors_is_infeasible(self):
        with pytest.raises(SolverError):
            solve_coloring_scipy(nx.complete_graph(3), num_colors=2)

    def test_explicit_color_bound(self):
        coloring = solve_coloring_scipy(nx.cycle_graph(6), num_colors=3)
        assert len(set(coloring.values())) == 2

    def test_time_limit_accepted(self):
        cover = solve_vertex_cover_scipy(nx.petersen_graph(), time_limit=30.0)
        assert len(cover) == 6

    def test_number_helpers_forward_time_limit(self, monkeypatch):
        from optgallery.solvers import scipy_milp

        seen = []

        def record(name, result):
            def fake(graph, suppress_output=True, time_limit=None, **kwargs):
                seen.append((name, time_limit))
                return result
            return fake

        monkeypatch.setattr(scipy_milp, "solve_vertex_cover_scipy", record("cover", {0}))
        monkeypatch.setattr(scipy_milp, "solve_dominating_set_scipy", record("domination", {0}))
        monkeypatch.setattr(scipy_milp, "solve_matching_scipy", record("matching", {(0, 1)}))
        monkeypatch.setattr(scipy_milp, "solve_coloring_scipy", record("coloring", {0: 0, 1: 1}))

        G = nx.path_graph(2)
        assert scipy_milp.get_vertex_cover_number_scipy(G, time_limit=5.0) == 1
        assert scipy_milp.get_domination_number_scipy(G, time_limit=5.0, total=True) == 1
        assert scipy_milp.get_matching_number_scipy(G, time_limit=5.0) == 1
        assert scipy_milp.get_chromatic_number_scipy(G, time_limit=5.0) == 2
        assert seen == [("cover", 5.0), ("domination", 5.0), ("matching", 5.0), ("coloring", 5.0)]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
