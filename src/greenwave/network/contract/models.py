"""Pydantic models describing greenwave network inputs."""

from __future__ import annotations

from pydantic import BaseModel, field_validator, model_validator

from greenwave.core.types import TimeUnit, Vertex, Weight


class Road(BaseModel):
    """Undirected road connecting two signalised vertices.

    Attributes
    ----------
    source, target:
        Zero-indexed endpoints (must be distinct and lie in ``[0, num_vertices)``).
    travel_time:
        Time units a platoon needs to cover the road. Defaults to 0.
    """

    source: Vertex
    target: Vertex
    travel_time: Weight = 0

    @field_validator("source", "target", "travel_time")
    @classmethod
    def _non_negative(cls, value: int) -> int:
        if value < 0:
            raise ValueError("Road endpoints and travel_time must be non-negative")
        return value

    @model_validator(mode="after")
    def _no_self_loop(self) -> Road:
        if self.source == self.target:
            raise ValueError(f"Road {self.source}-{self.target} is a self-loop")
        return self

    def key(self) -> tuple[Vertex, Vertex]:
        """Return the endpoint pair in canonical (low, high) order."""
        return (min(self.source, self.target), max(self.source, self.target))


class NetworkSpec(BaseModel):
    """Road network and signal cycle consumed by the optimisation heuristics."""

    name: str = "network"
    cycle: TimeUnit
    num_vertices: int
    roads: list[Road]

    @field_validator("cycle")
    @classmethod
    def _cycle_positive(cls, value: int) -> int:
        if value < 1:
            raise ValueError("cycle must be >= 1")
        return value

    @field_validator("num_vertices")
    @classmethod
    def _vertices_positive(cls, value: int) -> int:
        if value < 1:
            raise ValueError("num_vertices must be >= 1")
        return value

    @model_validator(mode="after")
    def _roads_cover_vertices(self) -> NetworkSpec:
        seen: set[tuple[Vertex, Vertex]] = set()
        connected: set[Vertex] = set()
        for road in self.roads:
            for endpoint in (road.source, road.target):
                if endpoint >= self.num_vertices:
                    raise ValueError(
                        f"Road {road.source}-{road.target} references unknown vertex {endpoint}"
                    )
            key = road.key()
            if key in seen:
                raise ValueError(f"Duplicate road between vertices {key[0]} and {key[1]}")
            seen.add(key)
            connected.update(key)
        isolated = sorted(set(range(self.num_vertices)) - connected)
        if isolated:
            raise ValueError(f"Vertices without neighbours: {isolated}")
        return self


__all__ = ["Road", "NetworkSpec"]
