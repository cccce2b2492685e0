from __future__ import annotations

import pytest

from greenwave.core.errors import InvalidGraphError
from greenwave.network.graph import TrafficGraph, circular_gap
from greenwave.optimization.solution import Solution


def _ring(num_vertices: int, cycle: int, travel_time: int = 2) -> TrafficGraph:
    roads = [(v, (v + 1) % num_vertices, travel_time) for v in range(num_vertices)]
    return TrafficGraph(num_vertices, cycle, roads, name="ring")


def test_circular_gap_wraps_around_cycle():
    assert circular_gap(0, 3, 4) == 1
    assert circular_gap(3, 0, 4) == 1
    assert circular_gap(5, 1, 4) == 0
    assert circular_gap(2, 0, 4) == 2


def test_vertex_penalty_counts_both_directions():
    graph = TrafficGraph(2, 4, [(0, 1, 1)])
    aligned = Solution.from_timings([0, 0])
    assert graph.vertex_penalty(0, aligned) == 2
    assert graph.vertex_penalty(1, aligned) == 2
    assert graph.total_penalty(aligned) == 4

    offset = Solution.from_timings([0, 1])
    # 0 -> 1 arrives exactly on time; 1 -> 0 arrives two units off.
    assert graph.vertex_penalty(0, offset) == 2
    assert graph.total_penalty(offset) == 4


def test_single_vertex_move_changes_total_by_twice_vertex_delta():
    graph = _ring(5, 10, travel_time=3)
    before = Solution.from_timings([0, 4, 7, 1, 9])
    after = before.copy()
    after.set_timing(2, 3)
    vertex_delta = graph.vertex_penalty(2, after) - graph.vertex_penalty(2, before)
    total_delta = graph.total_penalty(after) - graph.total_penalty(before)
    assert total_delta == 2 * vertex_delta


def test_neighbors_are_symmetric_and_read_only():
    graph = TrafficGraph(3, 6, [(0, 1, 2), (1, 2, 5)])
    assert dict(graph.neighbors_of(1)) == {0: 2, 2: 5}
    assert dict(graph.neighbors_of(0)) == {1: 2}
    assert graph.num_roads() == 2
    with pytest.raises(TypeError):
        graph.neighbors_of(0)[2] = 1  # type: ignore[index]


@pytest.mark.parametrize(
    ("num_vertices", "cycle", "roads", "message"),
    [
        (2, 0, [(0, 1, 1)], "cycle"),
        (0, 4, [], "num_vertices"),
        (3, 4, [(0, 1, 1)], "without neighbours"),
        (2, 4, [(0, 0, 1), (0, 1, 1)], "self-loop"),
        (2, 4, [(0, 1, 1), (1, 0, 2)], "Duplicate"),
        (2, 4, [(0, 2, 1)], "unknown vertex"),
        (2, 4, [(0, 1, -1)], "negative"),
    ],
)
def test_invalid_graphs_fail_fast(num_vertices, cycle, roads, message):
    with pytest.raises(InvalidGraphError, match=message):
        TrafficGraph(num_vertices, cycle, roads)
