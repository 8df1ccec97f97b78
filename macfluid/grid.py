"""
Staggered MAC Grid

Owns all cells of the simulation domain in flat row-major storage.

The requested interior size is padded with a one-cell solid border on every
side, so a (W, H) request is stored as (W + 2, H + 2) cells:

    S S S S S S
    S F F F F S        S: solid
    S F F F F S        F: fluid
    S S S S S S

The border is the impermeable domain boundary the projection relies on.
"""

import logging

import numpy as np

from .cell import Cell, CellType
from .errors import ContractViolation
from .indexing import (
    Index2,
    full_range,
    interior_range,
    is_inside_border,
    is_inside_range,
    to_data_index,
)
from .integrator import Integrate, integrate_grid

logger = logging.getLogger(__name__)


class Grid(Integrate):
    """
    2D staggered grid of cells.

    Parameters
    ----------
    width : int
        Requested number of fluid cells in x-direction
    height : int
        Requested number of fluid cells in y-direction
    cell_width : float
        Physical spacing h between nodes

    Attributes
    ----------
    dim : Index2
        Stored dimensions including the border, (width + 2, height + 2)
    cell_width : float
        Physical spacing h
    extent : ndarray
        Physical size dim * h, shape (2,)
    offsets : tuple of ndarray
        Staggering offset per velocity axis: (0, h/2) for x, (h/2, 0) for y
    """

    def __init__(self, width, height, cell_width):
        if width < 1 or height < 1:
            raise ValueError(f"Grid size must be >= 1 per axis (got {width}x{height})")
        if cell_width <= 0.0:
            raise ValueError(f"cell_width must be > 0 (got {cell_width})")

        self.cell_width = float(cell_width)
        self.dim = Index2(int(width) + 2, int(height) + 2)
        self.extent = np.array(self.dim, dtype=np.float64) * self.cell_width

        h_2 = 0.5 * self.cell_width
        self.offsets = (
            np.array([0.0, h_2], dtype=np.float64),
            np.array([h_2, 0.0], dtype=np.float64),
        )

        cells = []
        for it in full_range(self.dim):
            mode = CellType.FLUID if is_inside_border(self.dim, it.index) else CellType.SOLID
            cells.append(Cell(it.index, mode))
        self._cells = cells

        logger.debug(
            "Grid created: dim=(%d, %d), h=%g", self.dim.x, self.dim.y, self.cell_width
        )

    @property
    def cells(self):
        """Read-only view of the flat cell storage."""
        return tuple(self._cells)

    def __len__(self):
        return len(self._cells)

    def data_index(self, index):
        """Flat storage offset of `index`."""
        return to_data_index(self.dim, index)

    def index_iter(self):
        """Fresh iterator over the full grid."""
        return full_range(self.dim)

    def inside_index_iter(self):
        """Fresh iterator over the cells strictly inside the border."""
        return interior_range(self.dim)

    def cell(self, index):
        """Cell at `index`. The caller guarantees `index` is in range."""
        return self._cells[index[0] + index[1] * self.dim.x]

    def cell_opt(self, index):
        """Cell at `index`, or None if `index` is outside the grid."""
        if not is_inside_range((0, 0), self.dim, index):
            return None
        return self.cell(index)

    def modify_cells(self, indices, fn):
        """
        Give `fn` simultaneous access to several distinct cells.

        Parameters
        ----------
        indices : sequence of Index2
            Distinct in-range coordinates
        fn : callable
            Called once with the tuple of cells, in the order of `indices`

        Returns
        -------
        result
            Whatever `fn` returns

        Raises
        ------
        ContractViolation
            If a coordinate is out of range or appears more than once
        """
        offsets = []
        for index in indices:
            if not is_inside_range((0, 0), self.dim, index):
                raise ContractViolation(f"Wrong indices: {index} is outside the grid")
            offsets.append(self.data_index(index))

        if len(set(offsets)) != len(offsets):
            raise ContractViolation(f"Wrong indices: {list(indices)} are not distinct")

        return fn(tuple(self._cells[i] for i in offsets))

    def integrate(self, dt, gravity):
        integrate_grid(self, dt, gravity)

    def solve_incompressibility(self, dt, iterations, density):
        from .solver import solve_incompressibility

        return solve_incompressibility(self, dt, iterations, density)

    def sample_field(self, pos, axis, get_value):
        from .sampling import sample_field

        return sample_field(self, pos, axis, get_value)

    def __repr__(self):
        return f"Grid(dim=({self.dim.x}, {self.dim.y}), cell_width={self.cell_width})"
