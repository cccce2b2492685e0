"""Randomized local search with roulette acceptance and best-so-far tracking."""

from __future__ import annotations

from contextlib import nullcontext
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from greenwave.core.types import TimeUnit
from greenwave.network.graph import Graph
from greenwave.optimization.heuristics.common import (
    check_graph,
    check_solution,
    make_rng,
    require_positive,
)
from greenwave.optimization.heuristics.stop_criteria import StopCriterion
from greenwave.optimization.solution import Solution
from greenwave.telemetry import RunTelemetryLogger

__all__ = [
    "LocalSearchMetrics",
    "LocalSearchResult",
    "Perturbation",
    "local_search_heuristic",
    "roulette_select",
    "run_local_search",
]


@dataclass(slots=True)
class LocalSearchMetrics:
    """Iteration counters exposed to stop criteria (reset only at run start)."""

    iterations: int = 0
    iterations_without_improvement: int = 0


@dataclass(slots=True)
class Perturbation:
    timing: TimeUnit
    penalty: int


@dataclass(slots=True)
class LocalSearchResult:
    """Outcome of :func:`run_local_search`."""

    best_solution: Solution
    solution: Solution
    metrics: LocalSearchMetrics
    initial_penalty: int
    best_penalty: int
    telemetry_run_id: str | None = None


def roulette_select(perturbations: list[Perturbation], target: int) -> Perturbation:
    """Walk ``perturbations`` accumulating penalties; return the first reaching ``target``.

    ``target`` is drawn from ``[0, sum(penalties)]`` so the walk always terminates.
    """
    roulette = 0
    for perturbation in perturbations:
        roulette += perturbation.penalty
        if target <= roulette:
            return perturbation
    return perturbations[-1]


def run_local_search(
    graph: Graph,
    initial_solution: Solution,
    number_of_perturbations: int,
    stop_criteria_not_met: StopCriterion,
    *,
    seed: int | None = None,
    telemetry_log: str | Path | None = None,
    telemetry_context: dict[str, Any] | None = None,
    step_interval: int | None = 100,
) -> LocalSearchResult:
    """Refine ``initial_solution`` until ``stop_criteria_not_met`` returns ``False``.

    Parameters
    ----------
    graph : Graph
        Network providing the cycle length and per-vertex penalty oracle.
    initial_solution : Solution
        Starting point; it is copied and never mutated.
    number_of_perturbations : int
        Random timings ``M`` (>= 1) sampled for the picked vertex each iteration.
    stop_criteria_not_met : StopCriterion
        Evaluated before every iteration; ``False`` ends the run.
    seed : int | None
        RNG seed; ``None`` draws a fresh seed from system entropy.
    telemetry_log : str | pathlib.Path | None
        Optional JSONL path receiving a run record (and step records every
        ``step_interval`` iterations).
    telemetry_context : dict[str, Any] | None
        Extra metadata merged into the telemetry run record.
    step_interval : int | None, default=100
        Step logging cadence; ``None`` or ``<= 0`` disables step records.

    Returns
    -------
    LocalSearchResult
        ``best_solution`` is tracked independently of the accepted trajectory
        (``solution``). Each iteration either lowers the picked vertex's penalty in
        ``best_solution`` or leaves it untouched.

    Notes
    -----
    Acceptance is a roulette over the ``M + 1`` candidates weighted by their penalty
    (not its inverse), so higher-penalty timings are the more likely pick for the
    working trajectory. Slot 0 keeps the vertex's current timing paired with the
    best-so-far penalty.
    """
    require_positive("number_of_perturbations", number_of_perturbations)
    check_graph(graph)
    check_solution(graph, initial_solution, "initial_solution")

    rng = make_rng(seed)
    solution = initial_solution.copy()
    best_solution = initial_solution.copy()
    last_vertex = graph.num_vertices() - 1
    last_timing = graph.cycle() - 1
    metrics = LocalSearchMetrics()
    initial_penalty = graph.total_penalty(initial_solution)

    telemetry_logger: RunTelemetryLogger | None = None
    if telemetry_log:
        context_payload = dict(telemetry_context or {})
        telemetry_logger = RunTelemetryLogger(
            log_path=Path(telemetry_log),
            solver="local_search",
            network=getattr(graph, "name", None),
            seed=seed,
            config={
                "number_of_perturbations": number_of_perturbations,
                "stop_criteria": repr(stop_criteria_not_met),
            },
            context={
                "num_vertices": graph.num_vertices(),
                "cycle": graph.cycle(),
                **context_payload,
            },
            step_interval=step_interval,
        )

    with telemetry_logger if telemetry_logger else nullcontext() as run_logger:
        while stop_criteria_not_met(metrics):
            had_improvement = False
            vertex = rng.randint(0, last_vertex)

            current_penalty = graph.vertex_penalty(vertex, solution)
            best_penalty = graph.vertex_penalty(vertex, best_solution)
            best_timing = best_solution.get_timing(vertex)

            perturbations = [Perturbation(solution.get_timing(vertex), best_penalty)]
            roulette_max = best_penalty
            for _ in range(number_of_perturbations):
                timing = rng.randint(0, last_timing)
                solution.set_timing(vertex, timing)
                penalty = graph.vertex_penalty(vertex, solution)
                perturbations.append(Perturbation(timing, penalty))
                roulette_max += penalty
                if penalty < current_penalty:
                    had_improvement = True

                best_solution.set_timing(vertex, timing)
                candidate_penalty = graph.vertex_penalty(vertex, best_solution)
                if candidate_penalty < best_penalty:
                    best_timing = timing
                    best_penalty = candidate_penalty

            best_solution.set_timing(vertex, best_timing)

            perturbations.sort(key=lambda perturbation: perturbation.penalty)
            chosen = roulette_select(perturbations, rng.randint(0, roulette_max))
            solution.set_timing(vertex, chosen.timing)

            metrics.iterations += 1
            if had_improvement:
                metrics.iterations_without_improvement = 0
            else:
                metrics.iterations_without_improvement += 1

            if run_logger and telemetry_logger and telemetry_logger.step_interval:
                step = metrics.iterations
                if step == 1 or step % telemetry_logger.step_interval == 0:
                    run_logger.log_step(
                        iteration=metrics.iterations,
                        penalty=graph.total_penalty(solution),
                        best_penalty=graph.total_penalty(best_solution),
                        iterations_without_improvement=metrics.iterations_without_improvement,
                    )

        final_best_penalty = graph.total_penalty(best_solution)
        result = LocalSearchResult(
            best_solution=best_solution,
            solution=solution,
            metrics=metrics,
            initial_penalty=initial_penalty,
            best_penalty=final_best_penalty,
        )
        if run_logger and telemetry_logger:
            run_logger.finalize(
                metrics={
                    "initial_penalty": initial_penalty,
                    "best_penalty": final_best_penalty,
                    "penalty": graph.total_penalty(solution),
                    "penalty_delta_vs_initial": final_best_penalty - initial_penalty,
                },
                extra={
                    "iterations": metrics.iterations,
                    "iterations_without_improvement": metrics.iterations_without_improvement,
                },
            )
            result.telemetry_run_id = telemetry_logger.run_id

    return result


def local_search_heuristic(
    graph: Graph,
    initial_solution: Solution,
    number_of_perturbations: int,
    stop_criteria_not_met: StopCriterion,
    *,
    seed: int | None = None,
    telemetry_log: str | Path | None = None,
    telemetry_context: dict[str, Any] | None = None,
    step_interval: int | None = 100,
) -> Solution:
    """Run :func:`run_local_search` and return the best-so-far solution."""
    return run_local_search(
        graph,
        initial_solution,
        number_of_perturbations,
        stop_criteria_not_met,
        seed=seed,
        telemetry_log=telemetry_log,
        telemetry_context=telemetry_context,
        step_interval=step_interval,
    ).best_solution
