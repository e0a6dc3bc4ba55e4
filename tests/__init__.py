"""
Test suite for the optimization model gallery.

This package contains tests covering:
- Adjacency-matrix graphs and the gallery example graphs
- Certificate checks and brute-force ground truths
- ILP formulations on the SciPy and Gurobi backends
- Conic logistic regression on cvxpy
- The gallery runner and command-line entry point
"""
