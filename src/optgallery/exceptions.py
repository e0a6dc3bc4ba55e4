"""
Custom exceptions for the optimization model gallery.
"""


class OptGalleryError(Exception):
    """Base exception for optimization gallery errors."""
    pass


class SolverError(OptGalleryError):
    """Raised when a solver fails to return an optimal solution."""
    pass


class SolverUnavailableError(OptGalleryError):
    """Raised when a required solver is not available or not installed."""
    pass


class InvalidGraphError(OptGalleryError, ValueError):
    """Raised when an adjacency matrix does not describe a simple undirected graph."""
    pass
