"""
Tests for bilinear field sampling.

Validates node identity, agreement with an independent bilinear
reference and clamping outside the domain.
"""

import pytest
import numpy as np
import sys
import os

from scipy.ndimage import map_coordinates

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from macfluid.constants import AXIS_X, AXIS_Y
from macfluid.grid import Grid
from macfluid.observables import velocity_arrays
from macfluid.sampling import (
    back_smoke,
    back_velocity,
    front_velocity,
    sample_field,
    sample_velocity,
)


@pytest.fixture
def grid():
    """Grid with distinct back velocities and smoke per cell."""
    grid = Grid(5, 4, 0.5)
    for it in grid.index_iter():
        x, y = it.index
        cell = grid.cell(it.index)
        cell.velocity.back[:] = [10.0 * x + y, -(10.0 * y + x) - 0.5]
        cell.smoke.back = 100.0 + x * y
    return grid


class TestNodeIdentity:
    """Sampling at a node's staggered position returns the stored value."""

    @pytest.mark.parametrize("axis", [AXIS_X, AXIS_Y])
    def test_nodes(self, grid, axis):
        h = grid.cell_width
        for it in grid.index_iter():
            x, y = it.index
            pos = np.array([x * h, y * h]) + grid.offsets[axis]

            value = sample_field(grid, pos, axis, back_velocity)

            assert np.isclose(value, grid.cell(it.index).velocity.back[axis], atol=1e-12)

    def test_smoke_nodes(self, grid):
        h = grid.cell_width
        pos = np.array([3 * h, 2 * h]) + grid.offsets[AXIS_X]
        assert np.isclose(sample_field(grid, pos, AXIS_X, back_smoke), 106.0)

    def test_grid_method(self, grid):
        pos = np.array([1.0, 1.25])
        assert grid.sample_field(pos, AXIS_X, back_velocity) == sample_field(
            grid, pos, AXIS_X, back_velocity
        )


class TestBilinear:
    """Compare against scipy's linear interpolation."""

    @pytest.mark.parametrize("axis", [AXIS_X, AXIS_Y])
    def test_matches_reference(self, grid, axis):
        rng = np.random.default_rng(42)
        h = grid.cell_width
        field = velocity_arrays(grid, buffer="back")[axis]

        upper = np.array([grid.dim.x - 1, grid.dim.y - 1], dtype=np.float64) * h
        for _ in range(50):
            node_pos = rng.uniform(0.0, 1.0, size=2) * upper
            pos = node_pos + grid.offsets[axis]

            expected = map_coordinates(
                field, [[node_pos[1] / h], [node_pos[0] / h]], order=1
            )[0]
            value = sample_field(grid, pos, axis, back_velocity)

            assert np.isclose(value, expected, rtol=1e-10, atol=1e-10)

    def test_midpoint_average(self, grid):
        """Centre of a stencil is the mean of its four values."""
        h = grid.cell_width
        pos = np.array([1.5 * h, 2.5 * h]) + grid.offsets[AXIS_Y]

        values = [grid.cell(i).velocity.back[AXIS_Y] for i in [(1, 2), (2, 2), (1, 3), (2, 3)]]
        assert np.isclose(sample_field(grid, pos, AXIS_Y, back_velocity), np.mean(values))


class TestClamping:
    """Sampling is total over all positions."""

    @pytest.mark.parametrize("axis", [AXIS_X, AXIS_Y])
    def test_below_domain(self, grid, axis):
        value = sample_field(grid, np.array([-100.0, -3.0]), axis, back_velocity)
        assert np.isclose(value, grid.cell((0, 0)).velocity.back[axis])

    @pytest.mark.parametrize("axis", [AXIS_X, AXIS_Y])
    def test_above_domain(self, grid, axis):
        value = sample_field(grid, np.array([1e6, 1e6]), axis, back_velocity)
        corner = grid.cell((grid.dim.x - 1, grid.dim.y - 1))
        assert np.isclose(value, corner.velocity.back[axis])

    def test_far_positions_finite(self, grid):
        for pos in [(-1e9, 2.0), (2.0, 1e9), (0.0, 0.0)]:
            assert np.isfinite(sample_field(grid, np.array(pos), AXIS_X, back_velocity))


class TestSampleVelocity:
    """Test vector sampling."""

    def test_components_use_own_offset(self, grid):
        pos = np.array([1.1, 0.7])
        velocity = sample_velocity(grid, pos)

        assert velocity.shape == (2,)
        assert velocity[0] == sample_field(grid, pos, AXIS_X, back_velocity)
        assert velocity[1] == sample_field(grid, pos, AXIS_Y, back_velocity)

    def test_front_buffer(self, grid):
        pos = np.array([1.1, 0.7])
        velocity = sample_velocity(grid, pos, buffer="front")
        assert velocity[0] == sample_field(grid, pos, AXIS_X, front_velocity)

    def test_unknown_buffer(self, grid):
        with pytest.raises(ValueError):
            sample_velocity(grid, np.zeros(2), buffer="middle")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
