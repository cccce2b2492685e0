"""Stop criteria for the local search (``True`` means keep iterating)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from greenwave.core.errors import InvalidParameterError

if TYPE_CHECKING:
    from greenwave.optimization.heuristics.local_search import LocalSearchMetrics


class StopCriterion(Protocol):
    """Predicate evaluated once per iteration, before any mutation."""

    def __call__(self, metrics: LocalSearchMetrics) -> bool:
        """Return ``True`` while the search should continue."""


@dataclass(frozen=True, slots=True)
class IterationLimit:
    """Continue while fewer than ``limit`` iterations have run."""

    limit: int

    def __call__(self, metrics: LocalSearchMetrics) -> bool:
        return metrics.iterations < self.limit


@dataclass(frozen=True, slots=True)
class StallLimit:
    """Continue while fewer than ``limit`` consecutive iterations failed to improve."""

    limit: int

    def __call__(self, metrics: LocalSearchMetrics) -> bool:
        return metrics.iterations_without_improvement < self.limit


@dataclass(frozen=True, slots=True)
class AllOf:
    """Continue only while every wrapped criterion continues."""

    criteria: tuple[StopCriterion, ...]

    def __call__(self, metrics: LocalSearchMetrics) -> bool:
        return all(criterion(metrics) for criterion in self.criteria)


def _check_limit(limit: int) -> None:
    if limit < 0:
        raise InvalidParameterError(f"Stop limit must be non-negative (got {limit})")


def number_of_iterations(limit: int) -> StopCriterion:
    _check_limit(limit)
    return IterationLimit(limit)


def number_of_iterations_without_improvement(limit: int) -> StopCriterion:
    _check_limit(limit)
    return StallLimit(limit)


def all_of(*criteria: StopCriterion) -> StopCriterion:
    """Combine criteria; the search stops as soon as any of them says stop."""
    if not criteria:
        raise InvalidParameterError("all_of requires at least one criterion")
    return AllOf(tuple(criteria))


__all__ = [
    "StopCriterion",
    "IterationLimit",
    "StallLimit",
    "AllOf",
    "number_of_iterations",
    "number_of_iterations_without_improvement",
    "all_of",
]
