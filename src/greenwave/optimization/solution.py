"""Mutable per-vertex timing assignment shared by the heuristics."""

from __future__ import annotations

from collections.abc import Iterable
from numbers import Integral

from greenwave.core.errors import InvalidParameterError
from greenwave.core.types import TimeUnit, Vertex


class Solution:
    """Dense ``vertex → timing`` assignment; every timing starts at 0.

    Mutation happens in place through :meth:`set_timing`. :meth:`copy` returns an
    independent solution, never an alias of this one.
    """

    __slots__ = ("_timings",)

    def __init__(self, num_vertices: int) -> None:
        if num_vertices < 0:
            raise InvalidParameterError("num_vertices must be non-negative")
        self._timings: list[TimeUnit] = [0] * num_vertices

    @classmethod
    def from_timings(cls, timings: Iterable[TimeUnit]) -> Solution:
        values: list[TimeUnit] = []
        for vertex, timing in enumerate(timings):
            if isinstance(timing, bool) or not isinstance(timing, Integral):
                raise InvalidParameterError(
                    f"Timing of vertex {vertex} must be an integer (got {timing!r})"
                )
            values.append(int(timing))
        solution = cls(0)
        solution._timings = values
        return solution

    def get_timing(self, vertex: Vertex) -> TimeUnit:
        return self._timings[vertex]

    def set_timing(self, vertex: Vertex, timing: TimeUnit) -> None:
        self._timings[vertex] = timing

    def copy(self) -> Solution:
        clone = Solution(0)
        clone._timings = self._timings[:]
        return clone

    @property
    def timings(self) -> tuple[TimeUnit, ...]:
        """Snapshot of the current timings, indexed by vertex."""
        return tuple(self._timings)

    def validate(self, cycle: TimeUnit) -> None:
        """Raise when any timing falls outside the ring ``[0, cycle)``."""
        for vertex, timing in enumerate(self._timings):
            if not 0 <= timing < cycle:
                raise InvalidParameterError(
                    f"Timing {timing} of vertex {vertex} is outside [0, {cycle})"
                )

    def __len__(self) -> int:
        return len(self._timings)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Solution):
            return NotImplemented
        return self._timings == other._timings

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Solution({self._timings!r})"


__all__ = ["Solution"]
