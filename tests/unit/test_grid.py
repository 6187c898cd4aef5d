"""Unit tests for GridState."""

import numpy as np
import pytest

from sand_sim.model.grid import GridState, InvalidGridError, EMPTY, FULL


class TestGridCreation:
    """Tests for grid construction."""

    def test_initial_pattern(self):
        grid = GridState(5, 4)
        assert grid.density.shape == (4, 5)
        assert np.all(grid.density[:2] == FULL)
        assert np.all(grid.density[2:] == EMPTY)
        assert grid.full_count() == 10

    def test_dimensions(self):
        grid = GridState(7, 3)
        assert grid.dimensions == (7, 3)

    def test_single_row_grid(self):
        grid = GridState(4, 1)
        assert grid.full_count() == 4

    @pytest.mark.parametrize("width, height", [(0, 5), (5, 0), (0, 0), (-1, 3), (3, -2)])
    def test_rejects_non_positive_dimensions(self, width, height):
        with pytest.raises(InvalidGridError):
            GridState(width, height)

    @pytest.mark.parametrize("width, height", [(2.5, 3), (3, "4"), (True, 3)])
    def test_rejects_non_integer_dimensions(self, width, height):
        with pytest.raises(InvalidGridError):
            GridState(width, height)

    def test_invalid_grid_error_is_value_error(self):
        with pytest.raises(ValueError):
            GridState(0, 1)

    def test_from_array(self):
        grid = GridState.from_array([[0, 1, 0], [0, 0, 0]])
        assert grid.dimensions == (3, 2)
        assert grid.cell(1, 0) == FULL
        assert grid.full_count() == 1

    def test_from_array_rejects_fractional_values(self):
        with pytest.raises(InvalidGridError):
            GridState.from_array([[0.5, 1.0]])

    def test_from_array_rejects_wrong_rank(self):
        with pytest.raises(InvalidGridError):
            GridState.from_array([1, 0, 1])


class TestReset:
    """Tests for restoring the initial pattern."""

    def test_reset_restores_pattern(self):
        grid = GridState(4, 4)
        grid.density[:, :] = FULL
        grid.reset()
        assert grid == GridState(4, 4)

    def test_reset_is_idempotent(self):
        grid = GridState.from_array(np.eye(5))
        grid.reset()
        first = grid.copy()
        grid.reset()
        assert grid == first
        assert np.all(grid.density[:2] == FULL)
        assert np.all(grid.density[2:] == EMPTY)


class TestCellAccess:
    """Tests for bounds checks and indexed access."""

    def test_in_bounds(self):
        grid = GridState(3, 2)
        assert grid.in_bounds(0, 0)
        assert grid.in_bounds(2, 1)
        assert not grid.in_bounds(3, 0)
        assert not grid.in_bounds(0, 2)
        assert not grid.in_bounds(-1, 0)
        assert not grid.in_bounds(0, -1)

    def test_cell_reads_occupancy(self):
        grid = GridState(3, 3)
        assert grid.cell(2, 1) == FULL
        assert grid.cell(2, 2) == EMPTY
        assert grid.is_full(0, 0)
        assert not grid.is_full(0, 2)

    @pytest.mark.parametrize("x, y", [(-1, 0), (0, -1), (3, 0), (0, 3)])
    def test_cell_out_of_bounds_raises(self, x, y):
        grid = GridState(3, 3)
        with pytest.raises(IndexError):
            grid.cell(x, y)

    def test_linear_index(self):
        grid = GridState(4, 3)
        assert grid.index(0, 0) == 0
        assert grid.index(3, 0) == 3
        assert grid.index(1, 2) == 9
        assert grid.density.ravel()[grid.index(1, 1)] == grid.cell(1, 1)

    def test_copy_is_independent(self):
        grid = GridState(3, 3)
        clone = grid.copy()
        clone.density[0, 0] = EMPTY
        assert grid.cell(0, 0) == FULL

    def test_empty_like(self):
        grid = GridState(5, 2)
        blank = GridState.empty_like(grid)
        assert blank.dimensions == (5, 2)
        assert blank.full_count() == 0
