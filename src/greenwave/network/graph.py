"""Graph contract consumed by the heuristics, plus the adjacency-list network."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Protocol

from greenwave.core.errors import InvalidGraphError
from greenwave.core.types import TimeUnit, Vertex, Weight
from greenwave.network.contract import NetworkSpec

if TYPE_CHECKING:
    from greenwave.optimization.solution import Solution


class Graph(Protocol):
    """Read-only topology and penalty oracle used by the heuristics."""

    def num_vertices(self) -> int:
        """Return the number of vertices (>= 1)."""

    def cycle(self) -> TimeUnit:
        """Return the cycle length ``C`` (timings live on the ring ``[0, C)``)."""

    def neighbors_of(self, vertex: Vertex) -> Mapping[Vertex, Weight]:
        """Return the non-empty neighbour → weight mapping of ``vertex``."""

    def vertex_penalty(self, vertex: Vertex, solution: Solution) -> int:
        """Return the non-negative conflict cost of ``vertex`` under ``solution``."""

    def total_penalty(self, solution: Solution) -> int:
        """Return the non-negative conflict cost of the whole network."""


def circular_gap(a: TimeUnit, b: TimeUnit, cycle: TimeUnit) -> TimeUnit:
    """Shortest distance between two offsets on the ring ``[0, cycle)``."""
    gap = (a - b) % cycle
    return min(gap, cycle - gap)


class TrafficGraph:
    """Undirected road network with a platoon-arrival penalty.

    A platoon leaving ``u`` at ``t(u)`` reaches ``v`` after the road's travel time
    ``w``; the road's penalty is the circular gap between that arrival and ``t(v)``,
    summed over both travel directions. ``vertex_penalty(v)`` adds up every road
    incident to ``v``, so moving ``t(v)`` shifts :meth:`total_penalty` by twice
    the change in ``vertex_penalty(v)``.
    """

    def __init__(
        self,
        num_vertices: int,
        cycle: TimeUnit,
        roads: Iterable[tuple[Vertex, Vertex, Weight]],
        name: str = "network",
    ) -> None:
        if cycle < 1:
            raise InvalidGraphError(f"cycle must be >= 1 (got {cycle})")
        if num_vertices < 1:
            raise InvalidGraphError(f"num_vertices must be >= 1 (got {num_vertices})")
        adjacency: list[dict[Vertex, Weight]] = [{} for _ in range(num_vertices)]
        for source, target, travel_time in roads:
            if not (0 <= source < num_vertices and 0 <= target < num_vertices):
                raise InvalidGraphError(f"Road {source}-{target} references an unknown vertex")
            if source == target:
                raise InvalidGraphError(f"Road {source}-{target} is a self-loop")
            if travel_time < 0:
                raise InvalidGraphError(f"Road {source}-{target} has negative travel time")
            if target in adjacency[source]:
                raise InvalidGraphError(f"Duplicate road between vertices {source} and {target}")
            adjacency[source][target] = travel_time
            adjacency[target][source] = travel_time
        isolated = [vertex for vertex, neighbours in enumerate(adjacency) if not neighbours]
        if isolated:
            raise InvalidGraphError(f"Vertices without neighbours: {isolated}")
        self.name = name
        self._cycle = cycle
        self._adjacency = tuple(MappingProxyType(neighbours) for neighbours in adjacency)

    @classmethod
    def from_spec(cls, spec: NetworkSpec) -> TrafficGraph:
        return cls(
            spec.num_vertices,
            spec.cycle,
            ((road.source, road.target, road.travel_time) for road in spec.roads),
            name=spec.name,
        )

    def num_vertices(self) -> int:
        return len(self._adjacency)

    def cycle(self) -> TimeUnit:
        return self._cycle

    def neighbors_of(self, vertex: Vertex) -> Mapping[Vertex, Weight]:
        return self._adjacency[vertex]

    def num_roads(self) -> int:
        return sum(len(neighbours) for neighbours in self._adjacency) // 2

    def vertex_penalty(self, vertex: Vertex, solution: Solution) -> int:
        cycle = self._cycle
        own = solution.get_timing(vertex)
        penalty = 0
        for neighbour, travel_time in self._adjacency[vertex].items():
            other = solution.get_timing(neighbour)
            penalty += circular_gap(other + travel_time, own, cycle)
            penalty += circular_gap(own + travel_time, other, cycle)
        return penalty

    def total_penalty(self, solution: Solution) -> int:
        return sum(self.vertex_penalty(vertex, solution) for vertex in range(self.num_vertices()))

    def __repr__(self) -> str:
        return (
            f"TrafficGraph(name={self.name!r}, num_vertices={self.num_vertices()}, "
            f"cycle={self._cycle}, roads={self.num_roads()})"
        )


__all__ = ["Graph", "TrafficGraph", "circular_gap"]
