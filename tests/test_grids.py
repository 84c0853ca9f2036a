"""Tests for grid matching and polynomial interpolation weights."""

import numpy as np
import pytest

from abs_lookup.errors import GridPointNotFound, InsufficientGridForOrder
from abs_lookup.grids import (
    extended_range,
    find_new_grid_in_old_grid,
    gridpos_poly,
    interpolation_weights_2d,
    is_strictly_decreasing,
    is_strictly_increasing,
)


class TestFindNewGridInOldGrid:
    """Tests for locating a new grid in an old grid."""

    def test_points_within_tolerance(self):
        """Test points within 1 Hz are matched to their neighbours."""
        pos = find_new_grid_in_old_grid([100.0, 200.0, 300.0], [100.4, 299.6])
        assert pos.tolist() == [0, 2]

    def test_point_not_found(self):
        """Test a point far from every old point fails."""
        with pytest.raises(GridPointNotFound) as excinfo:
            find_new_grid_in_old_grid([100.0, 200.0, 300.0], [250.0])
        assert excinfo.value.index == 0
        assert excinfo.value.value == 250.0

    def test_identical_grids(self):
        """Test an identical grid maps onto itself."""
        grid = np.linspace(1e11, 2e11, 11)
        pos = find_new_grid_in_old_grid(grid, grid)
        assert pos.tolist() == list(range(11))

    def test_empty_new_grid(self):
        """Test an empty new grid gives no positions."""
        pos = find_new_grid_in_old_grid([1.0, 2.0], [])
        assert len(pos) == 0

    def test_custom_tolerance(self):
        """Test the tolerance can be widened."""
        old = [100.0, 200.0, 300.0]
        with pytest.raises(GridPointNotFound):
            find_new_grid_in_old_grid(old, [205.0])
        assert find_new_grid_in_old_grid(old, [205.0], tolerance=10.0).tolist() == [1]

    def test_point_beyond_last_old_point(self):
        """Test a point above the old grid fails once the grid is exhausted."""
        with pytest.raises(GridPointNotFound) as excinfo:
            find_new_grid_in_old_grid([100.0, 200.0], [100.0, 400.0])
        assert excinfo.value.index == 1


class TestMonotonicity:
    """Tests for grid ordering helpers."""

    def test_increasing(self):
        assert is_strictly_increasing([1, 2, 3])
        assert not is_strictly_increasing([1, 2, 2])
        assert is_strictly_increasing([])

    def test_decreasing(self):
        assert is_strictly_decreasing([3, 2, 1])
        assert not is_strictly_decreasing([3, 1, 2])


class TestExtendedRange:
    """Tests for half-bin range extension."""

    def test_uses_adjacent_spacing(self):
        """Test each end is extended by half of its own spacing."""
        lower, upper = extended_range([0.0, 1.0, 5.0])
        assert lower == pytest.approx(-0.5)
        assert upper == pytest.approx(7.0)

    def test_decreasing_grid(self):
        """Test a decreasing grid gives the same range as its reverse."""
        lower, upper = extended_range([1000.0, 500.0, 100.0])
        assert lower == pytest.approx(-100.0)
        assert upper == pytest.approx(1250.0)

    def test_single_point(self):
        """Test a single-point grid has no extension."""
        assert extended_range([3.0]) == (3.0, 3.0)


class TestGridposPoly:
    """Tests for polynomial grid positions."""

    @pytest.fixture
    def grid(self):
        return np.array([0.0, 1.0, 2.0, 3.0, 4.0])

    def test_linear_midpoint(self, grid):
        """Test linear interpolation halfway between two points."""
        gp = gridpos_poly(grid, 1.5, 1)
        assert gp.indices.tolist() == [1, 2]
        assert np.allclose(gp.weights, [0.5, 0.5])
        assert gp.order == 1

    @pytest.mark.parametrize("x, expected", [(1.4, 1), (1.6, 2), (0.0, 0), (4.0, 4)])
    def test_order_zero_picks_nearest(self, grid, x, expected):
        """Test order 0 selects the nearest node."""
        gp = gridpos_poly(grid, x, 0)
        assert gp.indices.tolist() == [expected]
        assert gp.weights.tolist() == [1.0]

    def test_odd_stencil_centred_on_nearest(self, grid):
        """Test a 3-point stencil is centred on the nearest node."""
        assert gridpos_poly(grid, 1.4, 2).indices.tolist() == [0, 1, 2]
        assert gridpos_poly(grid, 1.6, 2).indices.tolist() == [1, 2, 3]

    def test_even_stencil_brackets(self, grid):
        """Test a 4-point stencil brackets the target."""
        assert gridpos_poly(grid, 1.5, 3).indices.tolist() == [0, 1, 2, 3]
        assert gridpos_poly(grid, 2.5, 3).indices.tolist() == [1, 2, 3, 4]

    def test_stencil_clamped_at_edges(self, grid):
        """Test stencils near the ends shift inwards."""
        assert gridpos_poly(grid, 0.1, 2).indices.tolist() == [0, 1, 2]
        assert gridpos_poly(grid, 3.9, 3).indices.tolist() == [1, 2, 3, 4]

    def test_extrapolation(self, grid):
        """Test linear extrapolation below the grid."""
        gp = gridpos_poly(grid, -0.3, 1)
        assert gp.indices.tolist() == [0, 1]
        assert np.allclose(gp.weights, [1.3, -0.3])

    def test_decreasing_grid(self):
        """Test positions on a decreasing grid."""
        grid = np.array([4.0, 3.0, 2.0, 1.0, 0.0])
        gp = gridpos_poly(grid, 1.5, 1)
        assert gp.indices.tolist() == [2, 3]
        assert np.allclose(gp.weights, [0.5, 0.5])

    @pytest.mark.parametrize("order", [0, 1, 2, 3, 4])
    def test_one_hot_at_node(self, grid, order):
        """Test weights are one-hot when the target is a node."""
        gp = gridpos_poly(grid, 2.0, order)
        values = grid[gp.indices]
        assert np.sum(gp.weights) == pytest.approx(1.0)
        assert np.allclose(gp.weights, (values == 2.0).astype(float))

    def test_quadratic_reproduced(self):
        """Test order 2 reproduces a quadratic on an irregular grid."""
        grid = np.array([0.0, 0.5, 2.0, 3.0, 4.5])

        def f(x):
            return 3 * x**2 - 2 * x + 1

        gp = gridpos_poly(grid, 2.7, 2)
        assert np.sum(gp.weights * f(grid[gp.indices])) == pytest.approx(f(2.7))

    def test_insufficient_grid(self, grid):
        """Test an order needing more points than available fails."""
        with pytest.raises(InsufficientGridForOrder) as excinfo:
            gridpos_poly(grid, 1.0, 5, axis="pressure")
        assert excinfo.value.axis == "pressure"
        assert excinfo.value.n_points == 5

    def test_negative_order(self, grid):
        with pytest.raises(InsufficientGridForOrder):
            gridpos_poly(grid, 1.0, -1)

    def test_weights_2d(self, grid):
        """Test 2D weights are the outer product of both stencils."""
        a = gridpos_poly(grid, 1.5, 1)
        b = gridpos_poly(grid, 2.25, 1)
        w = interpolation_weights_2d(a, b)
        assert w.shape == (2, 2)
        assert np.allclose(w, [[0.375, 0.125], [0.375, 0.125]])
        assert np.sum(w) == pytest.approx(1.0)
