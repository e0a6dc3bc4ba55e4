"""
Problems on graphs, solved as integer linear programs.

Walks through the four graph examples in order: minimum vertex cover,
dominating set, maximum matching and minimum k-coloring. Each graph is a
hand-written adjacency matrix; the ILP solution is checked against a
brute-force search and printed as a per-vertex membership vector.
"""

import argparse
import logging
import sys
import os

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from optgallery.algorithms import (
    find_chromatic_number_brute_force,
    find_max_matching_brute_force,
    find_min_dominating_set_brute_force,
    find_min_vertex_cover_brute_force,
)
from optgallery.config import MILPConfig
from optgallery.exceptions import SolverError, SolverUnavailableError
from optgallery.gallery import (
    render_result,
    run_coloring,
    run_dominating_set,
    run_matching,
    run_vertex_cover,
)
from optgallery.graphs import coloring_graph, dominating_set_graph, matching_graph, vertex_cover_graph


def report(result, expected, quiet=False):
    """Print a result and compare it with the brute-force value."""
    correct = result.value == expected
    if not quiet:
        print(render_result(result))
        print(f"  brute force: {expected}")
        print(f"  runtime: {result.runtime_seconds:.3f}s")
    mark = "✓" if correct and result.valid else "✗"
    print(f"{mark} {result.problem}: {result.value} (expected {expected})")
    print()
    return correct and result.valid


def main():
    """Run the graph examples."""
    parser = argparse.ArgumentParser(
        description="Minimum vertex cover, dominating set, maximum matching and k-coloring as ILPs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python problems_on_graphs.py
  python problems_on_graphs.py --backend scipy --total-domination
        """
    )
    parser.add_argument("--backend", choices=["auto", "scipy", "gurobi"], default="auto",
                        help="ILP backend")
    parser.add_argument("--total-domination", action="store_true",
                        help="Use open neighbourhoods in the dominating set constraints")
    parser.add_argument("--num-colors", type=int, default=None,
                        help="Number of colors available to the coloring model (default: |V|)")
    parser.add_argument("--quiet", action="store_true", help="Suppress detailed output")
    parser.add_argument("--verbose", action="store_true", help="Show solver log messages")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)
    config = MILPConfig(backend=args.backend, suppress_output=not args.verbose)

    print("=== Problems on Graphs ===\n")

    try:
        outcomes = []

        graph = vertex_cover_graph()
        result = run_vertex_cover(graph, config)
        outcomes.append(report(result, len(find_min_vertex_cover_brute_force(graph)), args.quiet))

        graph = dominating_set_graph()
        result = run_dominating_set(graph, config, total=args.total_domination)
        expected = find_min_dominating_set_brute_force(graph, total=args.total_domination)
        outcomes.append(report(result, len(expected), args.quiet))

        graph = matching_graph()
        result = run_matching(graph, config)
        outcomes.append(report(result, len(find_max_matching_brute_force(graph)), args.quiet))

        graph = coloring_graph()
        result = run_coloring(graph, config, num_colors=args.num_colors, symmetry_breaking=True)
        outcomes.append(report(result, find_chromatic_number_brute_force(graph), args.quiet))

    except SolverUnavailableError as e:
        print(f"⚠️  Solver not available: {e}")
        return 1
    except SolverError as e:
        print(f"✗ Solve failed: {e}")
        return 1

    print(f"{sum(outcomes)}/{len(outcomes)} examples matched the brute-force optimum")
    return 0 if all(outcomes) else 1


if __name__ == "__main__":
    sys.exit(main())
