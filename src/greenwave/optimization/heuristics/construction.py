"""Initial-solution constructors (pure random and randomized pairwise greedy)."""

from __future__ import annotations

from greenwave.core.types import TimeUnit, Vertex
from greenwave.network.graph import Graph
from greenwave.optimization.heuristics.common import (
    check_graph,
    make_rng,
    require_positive,
)
from greenwave.optimization.solution import Solution

DEFAULT_TUPLES_PER_ITERATION = 1


def construct_random_solution(graph: Graph, *, seed: int | None = None) -> Solution:
    """Draw every vertex timing independently and uniformly from ``[0, C)``."""
    check_graph(graph)
    rng = make_rng(seed)
    last_timing = graph.cycle() - 1
    solution = Solution(graph.num_vertices())
    for vertex in range(graph.num_vertices()):
        solution.set_timing(vertex, rng.randint(0, last_timing))
    return solution


def construct_heuristic_solution(
    graph: Graph,
    tuples_per_iteration: int = DEFAULT_TUPLES_PER_ITERATION,
    *,
    seed: int | None = None,
) -> Solution:
    """Build a solution by randomized pairwise local optimisation.

    Parameters
    ----------
    graph : Graph
        Network whose vertices all have at least one neighbour.
    tuples_per_iteration : int, default=1
        Number of random ``(t1, t2)`` timing pairs tested for each popped vertex and
        one of its neighbours.
    seed : int | None
        RNG seed; ``None`` draws a fresh seed from system entropy.

    Returns
    -------
    Solution
        Timings biased toward low pairwise penalty. Every vertex is popped once as
        the primary vertex; a neighbour fixed as the secondary vertex stays in the
        work list and may be reassigned later.
    """
    require_positive("tuples_per_iteration", tuples_per_iteration)
    check_graph(graph, require_neighbours=True)
    rng = make_rng(seed)
    last_timing = graph.cycle() - 1
    solution = Solution(graph.num_vertices())
    unvisited: list[Vertex] = list(range(graph.num_vertices()))
    rng.shuffle(unvisited)

    while unvisited:
        vertex1 = unvisited.pop()
        neighbours = list(graph.neighbors_of(vertex1))
        vertex2 = neighbours[rng.randrange(len(neighbours))]

        candidates: list[tuple[TimeUnit, TimeUnit]] = [
            (rng.randint(0, last_timing), rng.randint(0, last_timing))
            for _ in range(tuples_per_iteration)
        ]

        best_pair = candidates[0]
        best_penalty: int | None = None
        for timing1, timing2 in candidates:
            solution.set_timing(vertex1, timing1)
            solution.set_timing(vertex2, timing2)
            penalty = graph.vertex_penalty(vertex1, solution) + graph.vertex_penalty(
                vertex2, solution
            )
            if best_penalty is None or penalty < best_penalty:
                best_penalty = penalty
                best_pair = (timing1, timing2)

        solution.set_timing(vertex1, best_pair[0])
        solution.set_timing(vertex2, best_pair[1])

    return solution


__all__ = [
    "DEFAULT_TUPLES_PER_ITERATION",
    "construct_random_solution",
    "construct_heuristic_solution",
]
