"""Solver configuration profiles exposed via the CLI."""

from __future__ import annotations

from dataclasses import dataclass, replace

from greenwave.optimization.heuristics import (
    StopCriterion,
    number_of_iterations,
    number_of_iterations_without_improvement,
)

STOP_KINDS = ("iterations", "stall")
INITIAL_METHODS = ("random", "heuristic")


@dataclass(frozen=True)
class SearchProfile:
    """Named local-search configuration (construction, perturbations, stop rule)."""

    name: str
    description: str
    perturbations: int = 4
    stop: str = "iterations"
    limit: int = 1000
    initial: str = "heuristic"
    tuples_per_iteration: int = 1

    def stop_criterion(self) -> StopCriterion:
        if self.stop == "stall":
            return number_of_iterations_without_improvement(self.limit)
        return number_of_iterations(self.limit)


DEFAULT_PROFILES: dict[str, SearchProfile] = {
    "default": SearchProfile(
        name="default",
        description="Heuristic start, 4 perturbations, 1000 iterations.",
    ),
    "quick": SearchProfile(
        name="quick",
        description="Random start and a short 200-iteration run for smoke checks.",
        perturbations=2,
        limit=200,
        initial="random",
    ),
    "intense": SearchProfile(
        name="intense",
        description="Wider construction sample and 10 perturbations over 20000 iterations.",
        perturbations=10,
        limit=20000,
        tuples_per_iteration=4,
    ),
    "stall": SearchProfile(
        name="stall",
        description="Stop after 500 consecutive iterations without improvement.",
        perturbations=4,
        stop="stall",
        limit=500,
    ),
}


def get_profile(name: str) -> SearchProfile:
    key = name.lower()
    if key not in DEFAULT_PROFILES:
        available = ", ".join(sorted(DEFAULT_PROFILES))
        raise KeyError(f"Unknown profile '{name}'. Available: {available}")
    return DEFAULT_PROFILES[key]


def list_profiles() -> tuple[SearchProfile, ...]:
    return tuple(DEFAULT_PROFILES[key] for key in sorted(DEFAULT_PROFILES))


def merge_profile_with_cli(
    profile: SearchProfile,
    *,
    perturbations: int | None = None,
    iterations: int | None = None,
    stall: int | None = None,
    initial: str | None = None,
    tuples_per_iteration: int | None = None,
) -> SearchProfile:
    """Return ``profile`` with explicitly supplied CLI values taking precedence."""
    if iterations is not None and stall is not None:
        raise ValueError("Use either --iterations or --stall, not both.")
    updates: dict[str, object] = {}
    if perturbations is not None:
        updates["perturbations"] = perturbations
    if iterations is not None:
        updates.update(stop="iterations", limit=iterations)
    if stall is not None:
        updates.update(stop="stall", limit=stall)
    if initial is not None:
        if initial not in INITIAL_METHODS:
            raise ValueError(f"Unknown initial method '{initial}'")
        updates["initial"] = initial
    if tuples_per_iteration is not None:
        updates["tuples_per_iteration"] = tuples_per_iteration
    return replace(profile, **updates) if updates else profile


__all__ = [
    "SearchProfile",
    "DEFAULT_PROFILES",
    "STOP_KINDS",
    "INITIAL_METHODS",
    "get_profile",
    "list_profiles",
    "merge_profile_with_cli",
]
