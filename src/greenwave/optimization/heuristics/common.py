"""Shared helpers for the construction and local-search heuristics."""

from __future__ import annotations

import random as _random

from greenwave.core.errors import InvalidGraphError, InvalidParameterError
from greenwave.network.graph import Graph
from greenwave.optimization.solution import Solution


def make_rng(seed: int | None) -> _random.Random:
    """Return a call-scoped generator (``None`` seeds from system entropy)."""
    return _random.Random(seed)


def check_graph(graph: Graph, *, require_neighbours: bool = False) -> None:
    """Fail fast when ``graph`` breaks the contract the heuristics rely on."""
    if graph.cycle() < 1:
        raise InvalidGraphError(f"cycle must be >= 1 (got {graph.cycle()})")
    if graph.num_vertices() < 1:
        raise InvalidGraphError("graph must contain at least one vertex")
    if require_neighbours:
        for vertex in range(graph.num_vertices()):
            if not graph.neighbors_of(vertex):
                raise InvalidGraphError(f"Vertex {vertex} has no neighbours")


def check_solution(graph: Graph, solution: Solution, label: str = "solution") -> None:
    """Ensure ``solution`` assigns exactly one timing per graph vertex."""
    if len(solution) != graph.num_vertices():
        raise InvalidGraphError(
            f"{label} covers {len(solution)} vertices but the graph has {graph.num_vertices()}"
        )


def require_positive(name: str, value: int) -> None:
    if value < 1:
        raise InvalidParameterError(f"{name} must be >= 1 (got {value})")


__all__ = ["make_rng", "check_graph", "check_solution", "require_positive"]
