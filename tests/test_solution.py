from __future__ import annotations

import pytest

from greenwave.core.errors import InvalidParameterError
from greenwave.optimization.solution import Solution


def test_new_solution_starts_at_zero():
    solution = Solution(4)
    assert len(solution) == 4
    assert solution.timings == (0, 0, 0, 0)


def test_copy_is_independent():
    original = Solution.from_timings([1, 2, 3])
    clone = original.copy()
    assert clone == original
    clone.set_timing(0, 9)
    assert original.get_timing(0) == 1
    assert clone != original


def test_validate_rejects_out_of_range_timings():
    Solution.from_timings([0, 3]).validate(4)
    with pytest.raises(InvalidParameterError, match="vertex 1"):
        Solution.from_timings([0, 4]).validate(4)
    with pytest.raises(InvalidParameterError):
        Solution.from_timings([-1]).validate(4)


def test_solutions_are_unhashable():
    with pytest.raises(TypeError):
        hash(Solution(2))


@pytest.mark.parametrize("timings", [[1, 2.9], ["3"], [True, 0]])
def test_from_timings_rejects_non_integers(timings):
    with pytest.raises(InvalidParameterError, match="must be an integer"):
        Solution.from_timings(timings)
