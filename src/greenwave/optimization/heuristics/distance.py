"""Circular distance between two timing assignments."""

from __future__ import annotations

from greenwave.core.types import TimeUnit
from greenwave.network.graph import Graph
from greenwave.optimization.heuristics.common import check_solution
from greenwave.optimization.solution import Solution


def distance(graph: Graph, a: Solution, b: Solution) -> TimeUnit:
    """Sum over vertices of ``min(|a(v) - b(v)|, C - |a(v) - b(v)|)``.

    Symmetric, zero iff the solutions match, and bounded by ``N * floor(C / 2)``.
    """
    check_solution(graph, a, "a")
    check_solution(graph, b, "b")
    cycle = graph.cycle()
    total = 0
    for vertex in range(graph.num_vertices()):
        clockwise = abs(a.get_timing(vertex) - b.get_timing(vertex))
        total += min(clockwise, cycle - clockwise)
    return total


def mean_pairwise_distance(graph: Graph, solutions: list[Solution]) -> float:
    """Average :func:`distance` over every unordered pair (0.0 for fewer than two)."""
    pairs = 0
    total = 0
    for i, first in enumerate(solutions):
        for second in solutions[i + 1 :]:
            total += distance(graph, first, second)
            pairs += 1
    return total / pairs if pairs else 0.0


__all__ = ["distance", "mean_pairwise_distance"]
