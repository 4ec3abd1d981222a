"""Tests for the grid interpolation cache and neighbor search."""

import logging

import numpy as np
import pytest

from ephemerides.core.settings import GridSettings
from ephemerides.errors import EmptyGridQuery
from ephemerides.interpolation.grid import GridInterpolationCache
from ephemerides.interpolation.neighbors import (
    NeighborLocator,
    closest_index,
    select_neighborhood,
)


def three_point_grid(**kwargs):
    grid = GridInterpolationCache(3, **kwargs)
    grid.insert(0.0, 1.0)
    grid.insert(10.0, 2.0)
    grid.insert(20.0, 1.0)
    return grid


def irregular_grid(interpolation_points=4, **kwargs):
    """Samples of a smooth coefficient at uneven dates, inserted out of order."""
    rng = np.random.default_rng(7)
    dates = np.cumsum(rng.uniform(0.5, 3.0, size=25))
    grid = GridInterpolationCache(interpolation_points, **kwargs)
    for i in rng.permutation(dates.size):
        grid.insert(dates[i], np.sin(0.3 * dates[i]))
    return grid, dates


def test_empty_grid_query():
    """Test a fresh cache cannot interpolate."""
    grid = GridInterpolationCache(3)

    with pytest.raises(EmptyGridQuery):
        grid.value_at(5.0)


def test_cleared_grid_query():
    """Test a cleared cache behaves like a fresh one."""
    grid = three_point_grid()
    grid.value_at(18.0)

    grid.clear()

    assert len(grid) == 0
    assert grid.hint == 0
    with pytest.raises(EmptyGridQuery):
        grid.value_at(5.0)


def test_single_sample_is_constant():
    grid = GridInterpolationCache(3)
    grid.insert(4.0, 2.5)

    assert grid.value_at(-100.0) == 2.5
    assert grid.value_at(4.0) == 2.5
    assert grid.value_at(100.0) == 2.5


def test_interpolation_exact_at_samples():
    """Test the interpolant reproduces sample values exactly."""
    grid = three_point_grid()

    assert grid.value_at(10.0) == 2.0
    assert grid.value_at(0.0) == 1.0
    assert grid.value_at(20.0) == 1.0


def test_interpolation_between_samples():
    """Parabola through (0,1), (10,2), (20,1) is 1 + 0.2t - 0.01t²."""
    grid = three_point_grid()

    for t in (2.5, 5.0, 13.0, 17.5):
        assert grid.value_at(t) == pytest.approx(1.0 + 0.2 * t - 0.01 * t**2)


def test_extrapolation_outside_grid():
    """Test queries beyond the grid use the full neighborhood without error."""
    grid = three_point_grid()

    assert grid.value_at(-5.0) == pytest.approx(-0.25)
    assert grid.value_at(25.0) == pytest.approx(-0.25)


def test_sorted_after_arbitrary_inserts():
    """Test the grid stays strictly ascending whatever the insertion order."""
    grid, dates = irregular_grid()

    assert len(grid) == dates.size
    assert np.all(np.diff(grid.dates) > 0)
    assert np.allclose(grid.dates, np.sort(dates))
    assert np.allclose(grid.values, np.sin(0.3 * np.asarray(grid.dates)))


def test_insert_at_ends_and_middle():
    grid = GridInterpolationCache(2)
    for date in (5.0, 1.0, 9.0, 3.0, 7.0, 0.0, 10.0):
        grid.insert(date, date * 2)

    assert grid.dates == (0.0, 1.0, 3.0, 5.0, 7.0, 9.0, 10.0)
    assert grid.values == (0.0, 2.0, 6.0, 10.0, 14.0, 18.0, 20.0)


def test_insert_overwrites_existing_date():
    """Test re-inserting a date only changes its value."""
    grid, dates = irregular_grid()
    before = grid.dates

    for d in (dates[0], dates[12], dates[-1]):
        grid.insert(d, 42.0)

    assert grid.dates == before
    assert len(grid) == dates.size
    for d in (dates[0], dates[12], dates[-1]):
        assert grid.values[grid.dates.index(d)] == 42.0


def test_results_independent_of_query_order():
    """Test the search hint never changes returned values."""
    grid, dates = irregular_grid()
    queries = np.linspace(dates[0] - 2.0, dates[-1] + 2.0, 97)

    forward = np.array([grid.value_at(q) for q in queries])
    backward = np.array([grid.value_at(q) for q in queries[::-1]])[::-1]

    order = np.random.default_rng(3).permutation(queries.size)
    shuffled = np.empty_like(forward)
    for i in order:
        shuffled[i] = grid.value_at(queries[i])

    assert np.array_equal(forward, backward)
    assert np.array_equal(forward, shuffled)


def test_cold_and_warm_hint_agree():
    """Test a cache resetting its hint every call gives identical values."""
    warm, dates = irregular_grid()
    cold, _ = irregular_grid(persistent_hint=False)
    queries = np.random.default_rng(11).uniform(dates[0] - 1, dates[-1] + 1, 60)

    for q in queries:
        assert warm.value_at(q) == cold.value_at(q)


def test_hint_follows_queries():
    """Test the hint tracks the last closest sample."""
    grid, dates = irregular_grid()
    d = grid.dates

    grid.value_at(d[20] + 1e-6)
    assert grid.hint == 20

    grid.value_at(d[3] - 1e-6)
    assert grid.hint == 3


def test_cubic_reproduced_with_four_points():
    """Test a 4-point neighborhood reproduces a cubic exactly."""
    def cubic(t):
        return 0.5 * t**3 - 2.0 * t**2 + t - 3.0

    grid = GridInterpolationCache(4)
    for t in (0.0, 0.7, 1.9, 2.2, 3.8, 4.1, 6.0, 7.5):
        grid.insert(t, cubic(t))

    for t in np.linspace(0.0, 7.5, 31):
        assert grid.value_at(t) == pytest.approx(cubic(t), rel=1e-9, abs=1e-9)


def test_local_interpolation_accuracy():
    grid, dates = irregular_grid(interpolation_points=5)
    queries = np.linspace(dates[0], dates[-1], 40)

    values = np.array([grid.value_at(q) for q in queries])

    assert np.allclose(values, np.sin(0.3 * queries), atol=1e-2)


def test_neighbors_whole_grid_when_small():
    grid = three_point_grid()

    assert grid.neighbors(100.0) == [0, 1, 2]


def test_from_settings():
    grid = GridInterpolationCache.from_settings(
        GridSettings(interpolation_points=5, persistent_hint=False)
    )

    assert grid.interpolation_points == 5


def test_invalid_interpolation_points():
    with pytest.raises(ValueError):
        GridInterpolationCache(0)


def test_closest_index_clamps_to_ends():
    abscissae = [0.0, 1.0, 4.0, 9.0]

    assert closest_index(abscissae, -3.0, 2) == 0
    assert closest_index(abscissae, 0.0, 3) == 0
    assert closest_index(abscissae, 9.0, 0) == 3
    assert closest_index(abscissae, 12.0, 1) == 3


def test_closest_index_tie_goes_lower():
    abscissae = [0.0, 10.0, 20.0]

    assert closest_index(abscissae, 5.0, 0) == 0
    assert closest_index(abscissae, 5.0, 2) == 0
    assert closest_index(abscissae, 15.0, 0) == 1


def test_closest_index_matches_brute_force_from_any_hint():
    """Test every starting hint yields the true nearest sample."""
    abscissae = [0.0, 0.4, 1.5, 1.6, 3.0, 7.2, 7.3, 9.9]
    queries = np.linspace(-1.0, 11.0, 121)

    for q in queries:
        # argmin returns the first minimum, i.e. the lower index on a tie
        expected = int(np.argmin(np.abs(np.asarray(abscissae) - q)))
        for hint in range(len(abscissae)):
            assert closest_index(abscissae, q, hint) == expected


def test_select_neighborhood_grows_toward_closer_side():
    abscissae = [0.0, 1.0, 2.0, 2.5, 6.0]

    assert select_neighborhood(abscissae, 2.1, 2, 3) == [2, 3, 1]
    assert select_neighborhood(abscissae, 2.1, 2, 4) == [2, 3, 1, 0]


def test_select_neighborhood_tie_goes_lower():
    abscissae = [0.0, 1.0, 2.0, 3.0, 4.0]

    assert select_neighborhood(abscissae, 2.0, 2, 2) == [2, 1]
    assert select_neighborhood(abscissae, 2.0, 2, 3) == [2, 1, 3]


def test_select_neighborhood_exhausts_one_side():
    abscissae = [0.0, 1.0, 2.0, 3.0, 4.0]

    assert select_neighborhood(abscissae, -1.0, 0, 3) == [0, 1, 2]
    assert select_neighborhood(abscissae, 10.0, 4, 3) == [4, 3, 2]
    assert select_neighborhood(abscissae, 0.9, 1, 4) == [1, 0, 2, 3]


def test_locator_modes():
    abscissae = [0.0, 1.0, 2.0, 3.0]
    warm = NeighborLocator()
    cold = NeighborLocator(persistent=False)

    assert warm.locate(abscissae, 2.9) == 3
    assert cold.locate(abscissae, 2.9) == 3
    assert warm.locate(abscissae, 0.2) == 0

    warm.locate(abscissae, 2.0)
    warm.reset()
    assert warm.hint == 0


@pytest.mark.parametrize("date", [float("nan"), float("inf"), -float("inf")])
def test_non_finite_insert_rejected(date):
    """Test a NaN or infinite date cannot break the ascending order."""
    grid = three_point_grid()

    with pytest.raises(ValueError):
        grid.insert(date, 5.0)

    assert grid.dates == (0.0, 10.0, 20.0)
    assert grid.values == (1.0, 2.0, 1.0)


@pytest.mark.parametrize("date", [float("nan"), float("inf")])
def test_non_finite_query_rejected(date):
    grid, _ = irregular_grid()

    with pytest.raises(ValueError, match="finite"):
        grid.value_at(date)
    with pytest.raises(ValueError, match="finite"):
        grid.neighbors(date)


def test_sorted_insertion_is_logged(caplog):
    grid = three_point_grid()

    with caplog.at_level(logging.DEBUG, logger="ephemerides.interpolation.grid"):
        grid.insert(15.0, 3.0)

    assert "inserted at index 2" in caplog.text
