from __future__ import annotations

import statistics
import time
from pathlib import Path

import click
import pandas as pd
import typer
from rich.console import Console
from rich.table import Table

from greenwave.cli.profiles import (
    INITIAL_METHODS,
    SearchProfile,
    get_profile,
    list_profiles,
    merge_profile_with_cli,
)
from greenwave.core.errors import GreenwaveValueError
from greenwave.network.graph import TrafficGraph
from greenwave.network.io import load_network
from greenwave.optimization.heuristics import (
    construct_heuristic_solution,
    construct_random_solution,
    mean_pairwise_distance,
    run_local_search,
)
from greenwave.optimization.solution import Solution

app = typer.Typer(add_completion=False, no_args_is_help=True)
console = Console()
METHOD = click.Choice(list(INITIAL_METHODS), case_sensitive=False)


def _load(network: Path) -> TrafficGraph:
    try:
        return load_network(network)
    except GreenwaveValueError as exc:
        console.print(f"[red]{exc}[/]")
        raise typer.Exit(1) from exc


def _construct(
    graph: TrafficGraph, method: str, tuples_per_iteration: int, seed: int | None
) -> Solution:
    if method.lower() == "random":
        return construct_random_solution(graph, seed=seed)
    return construct_heuristic_solution(graph, tuples_per_iteration, seed=seed)


def _write_solution(solution: Solution, out: Path) -> None:
    frame = pd.DataFrame(
        {"vertex": range(len(solution)), "timing": list(solution.timings)},
        columns=["vertex", "timing"],
    )
    out.parent.mkdir(parents=True, exist_ok=True)
    frame.to_csv(str(out), index=False)


def _seed_for_run(seed: int | None, offset: int) -> int | None:
    return None if seed is None else seed + offset


@app.command()
def validate(network: Path):
    """Validate a network YAML file and print a short summary."""
    graph = _load(network)
    console.print(
        f"[green]Network OK[/]: {graph.name} | vertices={graph.num_vertices()} "
        f"roads={graph.num_roads()} cycle={graph.cycle()}"
    )


@app.command()
def construct(
    network: Path,
    method: str = typer.Option(
        "heuristic", "--method", "-m", help="Construction method.", click_type=METHOD
    ),
    tuples: int = typer.Option(
        1, "--tuples", min=1, help="Timing pairs tested per vertex (heuristic only)."
    ),
    seed: int | None = typer.Option(None, "--seed", help="RNG seed (default: system entropy)."),
    out: Path | None = typer.Option(None, "--out", help="Optional CSV output path."),
):
    """Build an initial solution and report its total penalty."""
    graph = _load(network)
    solution = _construct(graph, method, tuples, seed)
    console.print(f"Penalty ({method.lower()}): {graph.total_penalty(solution)}")
    if out is not None:
        _write_solution(solution, out)
        console.print(f"Saved to {out}")


@app.command()
def search(
    network: Path,
    profile: str = typer.Option("default", "--profile", help="Search profile name."),
    initial: str | None = typer.Option(
        None, "--initial", help="Initial solution method.", click_type=METHOD
    ),
    perturbations: int | None = typer.Option(
        None, "--perturbations", "-p", min=1, help="Random timings sampled per iteration."
    ),
    iterations: int | None = typer.Option(
        None, "--iterations", "-n", min=0, help="Stop after this many iterations."
    ),
    stall: int | None = typer.Option(
        None, "--stall", min=0, help="Stop after this many iterations without improvement."
    ),
    tuples: int | None = typer.Option(
        None, "--tuples", min=1, help="Timing pairs tested per vertex during construction."
    ),
    seed: int | None = typer.Option(None, "--seed", help="RNG seed (default: system entropy)."),
    telemetry_log: Path | None = typer.Option(
        None,
        "--telemetry-log",
        help="Append run telemetry to a JSONL file; step logs land in steps/ beside it.",
        writable=True,
        dir_okay=False,
    ),
    out: Path | None = typer.Option(None, "--out", help="Optional CSV output path."),
    list_profiles_flag: bool = typer.Option(
        False, "--list-profiles", help="Show available search profiles and exit."
    ),
):
    """Construct a solution and refine it with the roulette local search."""
    if list_profiles_flag:
        _print_profiles(list_profiles())
        raise typer.Exit()
    try:
        resolved = merge_profile_with_cli(
            get_profile(profile),
            perturbations=perturbations,
            iterations=iterations,
            stall=stall,
            initial=initial.lower() if initial else None,
            tuples_per_iteration=tuples,
        )
    except (KeyError, ValueError) as exc:
        raise typer.BadParameter(str(exc.args[0] if exc.args else exc)) from exc

    graph = _load(network)
    start = _construct(graph, resolved.initial, resolved.tuples_per_iteration, seed)
    result = run_local_search(
        graph,
        start,
        resolved.perturbations,
        resolved.stop_criterion(),
        seed=_seed_for_run(seed, 1),
        telemetry_log=telemetry_log,
        telemetry_context={"source": "cli.search", "profile": resolved.name},
    )
    table = Table(title=f"Local search ({resolved.name})")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_row("Initial penalty", str(result.initial_penalty))
    table.add_row("Best penalty", str(result.best_penalty))
    table.add_row("Iterations", str(result.metrics.iterations))
    table.add_row(
        "Iterations without improvement", str(result.metrics.iterations_without_improvement)
    )
    console.print(table)
    if result.telemetry_run_id:
        console.print(f"[dim]Telemetry run id: {result.telemetry_run_id}[/]")
    if out is not None:
        _write_solution(result.best_solution, out)
        console.print(f"Saved to {out}")


@app.command()
def compare(
    network: Path,
    runs: int = typer.Option(10, "--runs", "-r", min=2, help="Solutions built per method."),
    tuples: int = typer.Option(
        1, "--tuples", min=1, help="Timing pairs tested per vertex (heuristic only)."
    ),
    seed: int | None = typer.Option(None, "--seed", help="Base RNG seed."),
):
    """Compare variety, penalty and build time of random versus heuristic construction."""
    graph = _load(network)
    table = Table(title=f"Initial solution construction ({runs} runs)")
    table.add_column("Method")
    table.add_column("Mean penalty", justify="right")
    table.add_column("Mean distance", justify="right")
    table.add_column("Mean time (ms)", justify="right")
    summary: dict[str, tuple[float, float, float]] = {}
    for method in INITIAL_METHODS:
        solutions: list[Solution] = []
        elapsed = 0.0
        for run in range(runs):
            started = time.perf_counter()
            solutions.append(_construct(graph, method, tuples, _seed_for_run(seed, run)))
            elapsed += time.perf_counter() - started
        summary[method] = (
            statistics.fmean(graph.total_penalty(solution) for solution in solutions),
            mean_pairwise_distance(graph, solutions),
            elapsed * 1000.0 / runs,
        )
        penalty, variety, millis = summary[method]
        table.add_row(method, f"{penalty:.2f}", f"{variety:.2f}", f"{millis:.3f}")
    console.print(table)

    factors = Table(title="Heuristic/Random factors")
    factors.add_column("Measure")
    factors.add_column("Factor", justify="right")
    for label, index in (("Penalty", 0), ("Variety", 1), ("Time", 2)):
        factors.add_row(
            label, _format_factor(summary["heuristic"][index], summary["random"][index])
        )
    console.print(factors)


def _format_factor(numerator: float, denominator: float) -> str:
    if denominator == 0:
        return "n/a"
    return f"{numerator / denominator:.3f}"


def _print_profiles(profiles: tuple[SearchProfile, ...]) -> None:
    table = Table(title="Search profiles")
    table.add_column("Name")
    table.add_column("Description")
    for item in profiles:
        table.add_row(item.name, item.description)
    console.print(table)


if __name__ == "__main__":
    app()
