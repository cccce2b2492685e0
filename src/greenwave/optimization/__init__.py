"""Solution state and optimisation heuristics."""

from .solution import Solution

__all__ = ["Solution"]
