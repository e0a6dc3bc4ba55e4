"""
Pytest configuration and common fixtures for the test suite.
"""

import pytest
import networkx as nx
import numpy as np
import os
import sys

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))


@pytest.fixture
def small_test_graphs():
    """
    Fixture providing small graphs with known optima.

    Keys: vertex cover number, domination number, matching number and
    chromatic number.
    """
    graphs = []

    graphs.append(("Triangle K3", nx.complete_graph(3),
                   {"cover": 2, "domination": 1, "matching": 1, "chromatic": 3}))
    graphs.append(("4-cycle", nx.cycle_graph(4),
                   {"cover": 2, "domination": 2, "matching": 2, "chromatic": 2}))
    graphs.append(("4-path", nx.path_graph(4),
                   {"cover": 2, "domination": 2, "matching": 2, "chromatic": 2}))
    graphs.append(("Complete K4", nx.complete_graph(4),
                   {"cover": 3, "domination": 1, "matching": 2, "chromatic": 4}))
    graphs.append(("Star 5 nodes", nx.star_graph(4),
                   {"cover": 1, "domination": 1, "matching": 1, "chromatic": 2}))
    graphs.append(("5-cycle", nx.cycle_graph(5),
                   {"cover": 3, "domination": 2, "matching": 2, "chromatic": 3}))
    graphs.append(("Petersen", nx.petersen_graph(),
                   {"cover": 6, "domination": 3, "matching": 5, "chromatic": 3}))

    return graphs


@pytest.fixture
def medium_test_graphs():
    """Fixture providing medium-sized graphs checked against brute force."""
    graphs = []

    graphs.append(("Wheel 7", nx.wheel_graph(7)))
    graphs.append(("Grid 3x3", nx.convert_node_labels_to_integers(nx.grid_2d_graph(3, 3))))
    graphs.append(("Random G(9,0.4)", nx.erdos_renyi_graph(9, 0.4, seed=42)))
    graphs.append(("Barbell 3-1", nx.barbell_graph(3, 1)))

    return graphs


@pytest.fixture
def gallery_graphs():
    """The four worked-example graphs with their known optima."""
    from optgallery.graphs import coloring_graph, dominating_set_graph, matching_graph, vertex_cover_graph

    return {
        "vertex_cover": (vertex_cover_graph(), 3),
        "dominating_set": (dominating_set_graph(), 4),
        "matching": (matching_graph(), 4),
        "coloring": (coloring_graph(), 3),
    }


@pytest.fixture
def small_logistic_data():
    """A small correlated dataset in the shape of the regression example."""
    from optgallery.regression import generate_dataset

    return generate_dataset(n_samples=200, n_features=10, corr=1.0, seed=0)


@pytest.fixture
def sparse_signal_data():
    """Two informative features followed by eight pure-noise features and an intercept."""
    rng = np.random.default_rng(1)
    n = 300
    X = rng.standard_normal((n, 10))
    y = np.sign(2.0 * X[:, 0] - 1.5 * X[:, 1] + 0.3 * rng.standard_normal(n))
    y[y == 0] = 1.0
    X = np.hstack([X, np.ones((n, 1))])
    return X, y


@pytest.fixture
def check_gurobi_available():
    """Fixture to check if Gurobi is available."""
    try:
        from optgallery import GUROBI_AVAILABLE
        return GUROBI_AVAILABLE
    except ImportError:
        return False


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "requires_gurobi: mark test as requiring Gurobi")
    config.addinivalue_line("markers", "slow: mark test as slow running")
    config.addinivalue_line("markers", "integration: mark test as integration test")
