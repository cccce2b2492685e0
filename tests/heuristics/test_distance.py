from __future__ import annotations

import pytest
from hypothesis import given, settings, strategies as st

from greenwave.core.errors import InvalidGraphError
from greenwave.network.graph import TrafficGraph
from greenwave.optimization.heuristics import distance, mean_pairwise_distance
from greenwave.optimization.solution import Solution


def _path(size: int, cycle: int) -> TrafficGraph:
    return TrafficGraph(size, cycle, [(v, v + 1, 1) for v in range(size - 1)])


@st.composite
def _solution_pairs(draw):
    cycle = draw(st.integers(min_value=1, max_value=40))
    size = draw(st.integers(min_value=2, max_value=10))
    timing = st.integers(min_value=0, max_value=cycle - 1)
    first = draw(st.lists(timing, min_size=size, max_size=size))
    second = draw(st.lists(timing, min_size=size, max_size=size))
    return _path(size, cycle), Solution.from_timings(first), Solution.from_timings(second)


def test_distance_uses_shorter_arc():
    graph = TrafficGraph(2, 4, [(0, 1, 1)])
    a = Solution.from_timings([0, 0])
    b = Solution.from_timings([3, 1])
    assert distance(graph, a, b) == 2


@settings(max_examples=200, deadline=None)
@given(case=_solution_pairs())
def test_distance_symmetry_identity_and_bound(case):
    graph, a, b = case
    assert distance(graph, a, b) == distance(graph, b, a)
    assert distance(graph, a, a) == 0
    assert distance(graph, b, b) == 0
    assert distance(graph, a, b) <= graph.num_vertices() * (graph.cycle() // 2)


@settings(max_examples=200, deadline=None)
@given(case=_solution_pairs())
def test_distance_is_zero_only_for_identical_solutions(case):
    graph, a, b = case
    assert (distance(graph, a, b) == 0) == (a == b)


def test_distance_counts_single_vertex_difference():
    graph = TrafficGraph(3, 6, [(0, 1, 1), (1, 2, 1)])
    a = Solution.from_timings([1, 2, 3])
    b = Solution.from_timings([1, 2, 4])
    assert distance(graph, a, b) == 1


def test_distance_reaches_bound_for_opposite_timings():
    graph = TrafficGraph(2, 6, [(0, 1, 1)])
    assert distance(graph, Solution.from_timings([0, 1]), Solution.from_timings([3, 4])) == 6


def test_distance_rejects_mismatched_solution():
    graph = TrafficGraph(2, 4, [(0, 1, 1)])
    with pytest.raises(InvalidGraphError):
        distance(graph, Solution(2), Solution(3))


def test_mean_pairwise_distance():
    graph = TrafficGraph(2, 8, [(0, 1, 1)])
    solutions = [
        Solution.from_timings([0, 0]),
        Solution.from_timings([1, 0]),
        Solution.from_timings([0, 3]),
    ]
    # pairs: 1, 3, 4
    assert mean_pairwise_distance(graph, solutions) == pytest.approx(8 / 3)
    assert mean_pairwise_distance(graph, solutions[:1]) == 0.0
