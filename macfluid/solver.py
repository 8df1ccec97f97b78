"""
Incompressibility Solver

Gauss-Seidel pressure projection with overrelaxation on the staggered grid.

For each fluid cell the net outflow is

    div = (u[x+1, y] - u[x, y]) + (v[x, y+1] - v[x, y])

and the correction p = div / s is distributed over the s open faces
(faces whose neighbour is not solid):

    u[x, y]   += r * s[x-1] * p        v[x, y]   += r * s[y-1] * p
    u[x+1, y] -= r * s[x+1] * p        v[x, y+1] -= r * s[y+1] * p

with the overrelaxation factor r. Corrections are written into the front
velocity in place, so cells later in the sweep already see the updated
values of their neighbours. Sweep order (row-major over the interior) is
part of the algorithm.

The pressure accumulates -rho * h / dt * p over all iterations.
"""

import logging

from .cell import CellType
from .constants import OVERRELAXATION
from .errors import ContractViolation
from .indexing import is_inside_border, neighbor_indices

logger = logging.getLogger(__name__)


def validate_step_parameters(dt, iterations, density):
    """
    Validate projection parameters.

    Raises
    ------
    ValueError
        If dt <= 0, density <= 0 or iterations < 0
    """
    if dt <= 0.0:
        raise ValueError(f"dt must be > 0 (got {dt})")
    if density <= 0.0:
        raise ValueError(f"density must be > 0 (got {density})")
    if iterations < 0:
        raise ValueError(f"iterations must be >= 0 (got {iterations})")


def open_factor(grid, index):
    """1.0 if the cell at `index` lets flow through, 0.0 if it is solid."""
    return 0.0 if grid.cell(index).mode == CellType.SOLID else 1.0


def project_cell(grid, index, cp, r=OVERRELAXATION):
    """
    Apply one Gauss-Seidel correction to the fluid cell at `index`.

    Parameters
    ----------
    grid : Grid
        Grid to update in-place
    index : Index2
        Interior fluid cell
    cp : float
        Pressure scale rho * h / dt
    r : float
        Overrelaxation factor

    Returns
    -------
    projected : bool
        False if the cell has no open face and was skipped
    """
    nbs = neighbor_indices(index)

    # Open-face factors for negative/positive neighbours, per axis.
    s_neg = (open_factor(grid, nbs[0][0]), open_factor(grid, nbs[0][1]))
    s_pos = (open_factor(grid, nbs[1][0]), open_factor(grid, nbs[1][1]))
    s = s_neg[0] + s_neg[1] + s_pos[0] + s_pos[1]

    if s == 0.0:
        logger.warning("Fluid in-face count is 0 for (%d, %d)", index[0], index[1])
        return False

    def update(cells):
        cell, nb_x, nb_y = cells
        vel = cell.velocity.front

        # Net outflow of this cell.
        div = (nb_x.velocity.front[0] - vel[0]) + (nb_y.velocity.front[1] - vel[1])

        p = div / s
        cell.pressure -= cp * p

        vel[0] += r * s_neg[0] * p
        vel[1] += r * s_neg[1] * p
        nb_x.velocity.front[0] -= r * s_pos[0] * p
        nb_y.velocity.front[1] -= r * s_pos[1] * p

    grid.modify_cells((index, nbs[1][0], nbs[1][1]), update)
    return True


def solve_incompressibility(grid, dt, iterations, density, r=OVERRELAXATION):
    """
    Drive the velocity divergence of every fluid cell towards zero.

    Runs `iterations` sweeps over the interior, then swaps the velocity
    buffers of every cell exactly once, so the projected field becomes the
    back (committed) velocity.

    Parameters
    ----------
    grid : Grid
        Grid to update in-place
    dt : float
        Time step
    iterations : int
        Number of relaxation sweeps
    density : float
        Fluid density
    r : float
        Overrelaxation factor (default 1.9)

    Returns
    -------
    skipped : int
        Number of cell visits skipped because the cell had no open face

    Raises
    ------
    ValueError
        For invalid dt, iterations or density
    ContractViolation
        If an interior coordinate is not inside the solid border
    """
    validate_step_parameters(dt, iterations, density)

    cp = density * grid.cell_width / dt
    dim = grid.dim
    skipped = 0

    logger.debug("Solve incompressibility: %d iterations.", iterations)

    for _ in range(iterations):
        for it in grid.inside_index_iter():
            index = it.index

            if not is_inside_border(dim, index):
                raise ContractViolation(f"Index ({index.x}, {index.y}) is not inside")

            if grid.cell(index).mode == CellType.SOLID:
                continue

            if not project_cell(grid, index, cp, r):
                skipped += 1

    for it in grid.index_iter():
        grid.cell(it.index).velocity.swap()

    return skipped
