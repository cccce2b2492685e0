"""Construction and local-search heuristics for timing assignments."""

from .construction import construct_heuristic_solution, construct_random_solution
from .distance import distance, mean_pairwise_distance
from .local_search import (
    LocalSearchMetrics,
    LocalSearchResult,
    Perturbation,
    local_search_heuristic,
    run_local_search,
)
from .stop_criteria import (
    StopCriterion,
    all_of,
    number_of_iterations,
    number_of_iterations_without_improvement,
)

__all__ = [
    "construct_random_solution",
    "construct_heuristic_solution",
    "distance",
    "mean_pairwise_distance",
    "LocalSearchMetrics",
    "LocalSearchResult",
    "Perturbation",
    "local_search_heuristic",
    "run_local_search",
    "StopCriterion",
    "all_of",
    "number_of_iterations",
    "number_of_iterations_without_improvement",
]
