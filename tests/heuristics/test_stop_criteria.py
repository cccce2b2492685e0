from __future__ import annotations

import pytest

from greenwave.core.errors import InvalidParameterError
from greenwave.optimization.heuristics import (
    LocalSearchMetrics,
    all_of,
    number_of_iterations,
    number_of_iterations_without_improvement,
)


def test_number_of_iterations():
    criterion = number_of_iterations(3)
    assert criterion(LocalSearchMetrics(iterations=2, iterations_without_improvement=50))
    assert not criterion(LocalSearchMetrics(iterations=3))
    assert not number_of_iterations(0)(LocalSearchMetrics())


def test_number_of_iterations_without_improvement():
    criterion = number_of_iterations_without_improvement(2)
    assert criterion(LocalSearchMetrics(iterations=100, iterations_without_improvement=1))
    assert not criterion(LocalSearchMetrics(iterations=1, iterations_without_improvement=2))


def test_criteria_do_not_mutate_metrics():
    metrics = LocalSearchMetrics(iterations=4, iterations_without_improvement=1)
    number_of_iterations(10)(metrics)
    number_of_iterations_without_improvement(10)(metrics)
    assert metrics == LocalSearchMetrics(iterations=4, iterations_without_improvement=1)


def test_all_of_stops_when_any_criterion_stops():
    criterion = all_of(number_of_iterations(10), number_of_iterations_without_improvement(2))
    assert criterion(LocalSearchMetrics(iterations=5, iterations_without_improvement=1))
    assert not criterion(LocalSearchMetrics(iterations=5, iterations_without_improvement=2))
    assert not criterion(LocalSearchMetrics(iterations=10, iterations_without_improvement=0))


def test_invalid_limits_rejected():
    with pytest.raises(InvalidParameterError):
        number_of_iterations(-1)
    with pytest.raises(InvalidParameterError):
        number_of_iterations_without_improvement(-5)
    with pytest.raises(InvalidParameterError):
        all_of()
