"""
Solid Boundary Handling

Enforces the no-through-flow condition at solid cells of the staggered grid.

A solid cell owns the velocity samples on its left and bottom faces. Its
right face sample is stored in the x+1 neighbour (x-component) and its top
face sample in the y+1 neighbour (y-component), so those components have to
be clamped as well:

        +---------+---------+
        |         |         |
        |  solid  u  nb x+1 |   u: x-velocity of nb x+1
        |         |         |
        +---------+---------+

Also provides helpers for carving obstacles out of the fluid domain.
"""

import logging

import numpy as np

from .cell import CellType
from .constants import DIMENSIONS
from .indexing import is_inside_border

logger = logging.getLogger(__name__)


def enforce_solid_constraints(grid):
    """
    Reset velocities at and next to solid cells to their previous value.

    For every solid cell, the front velocity is set to the back velocity on
    both axes. Then, for each axis, the positive neighbour's component along
    that axis is reset as well; its other component is left untouched.
    Neighbours outside the grid are skipped.

    Parameters
    ----------
    grid : Grid
        Grid to constrain in-place
    """
    logger.debug("Enforce solid constraints on solid cells.")

    for it in grid.index_iter():
        index = it.index
        cell = grid.cell(index)
        if cell.mode != CellType.SOLID:
            continue

        cell.velocity.front = cell.velocity.back.copy()

        for axis in range(DIMENSIONS):
            nb_index = (index.x + 1, index.y) if axis == 0 else (index.x, index.y + 1)

            nb = grid.cell_opt(nb_index)
            if nb is not None:
                nb.velocity.front[axis] = nb.velocity.back[axis]


def solid_mask(grid):
    """
    Boolean solid mask of the grid.

    Returns
    -------
    mask : ndarray
        True for solid cells, shape (dim.y, dim.x)
    """
    mask = np.zeros((grid.dim.y, grid.dim.x), dtype=bool)
    for it in grid.index_iter():
        mask[it.index.y, it.index.x] = grid.cell(it.index).mode == CellType.SOLID
    return mask


def create_circle_mask(grid, center, radius):
    """
    Create a solid mask for a circular obstacle.

    A cell is inside when its centre ((x + 1/2) h, (y + 1/2) h) lies within
    `radius` of `center`.

    Parameters
    ----------
    grid : Grid
        Grid providing dimensions and cell width
    center : array_like
        Obstacle centre in physical coordinates, shape (2,)
    radius : float
        Obstacle radius in physical units

    Returns
    -------
    mask : ndarray
        Boolean mask (True for solid), shape (dim.y, dim.x)
    """
    h = grid.cell_width
    x = (np.arange(grid.dim.x) + 0.5) * h
    y = (np.arange(grid.dim.y) + 0.5) * h
    X, Y = np.meshgrid(x, y)

    distance = np.sqrt((X - center[0])**2 + (Y - center[1])**2)
    return distance <= radius


def apply_solid_mask(grid, mask):
    """
    Mark the masked cells as solid.

    The border ring is solid already and unmasked cells keep their mode.

    Parameters
    ----------
    grid : Grid
        Grid to modify in-place
    mask : ndarray
        Boolean mask, shape (dim.y, dim.x)

    Returns
    -------
    changed : int
        Number of fluid cells turned solid
    """
    mask = np.asarray(mask, dtype=bool)
    if mask.shape != (grid.dim.y, grid.dim.x):
        raise ValueError(
            f"Mask shape {mask.shape} does not match grid shape "
            f"{(grid.dim.y, grid.dim.x)}"
        )

    changed = 0
    for it in grid.inside_index_iter():
        index = it.index
        if not mask[index.y, index.x]:
            continue
        cell = grid.cell(index)
        if cell.mode == CellType.FLUID:
            cell.mode = CellType.SOLID
            changed += 1

    logger.debug("Marked %d cells solid.", changed)
    return changed


def is_border_solid(grid):
    """True if every cell of the one-cell border ring is solid."""
    for it in grid.index_iter():
        if not is_inside_border(grid.dim, it.index) and grid.cell(it.index).mode != CellType.SOLID:
            return False
    return True
