"""
Field Export and Derived Quantities

Copies cell state into numpy arrays for analysis and external rendering.
All arrays have shape (dim.y, dim.x) and are indexed [y, x].

The discrete divergence on the staggered grid is

    div[y, x] = (ux[y, x+1] - ux[y, x]) + (uy[y+1, x] - uy[y, x])

evaluated on interior fluid cells only.
"""

import numpy as np

from .cell import CellType


def _select_velocity(cell, buffer):
    if buffer == "front":
        return cell.velocity.front
    if buffer == "back":
        return cell.velocity.back
    raise ValueError(f"Unknown buffer: {buffer}. Use 'front' or 'back'.")


def velocity_arrays(grid, buffer="back"):
    """
    Staggered velocity components as arrays.

    Parameters
    ----------
    grid : Grid
        Source grid
    buffer : str
        'front' or 'back' (default 'back')

    Returns
    -------
    ux, uy : ndarray
        Velocity components, shape (dim.y, dim.x)
    """
    ux = np.zeros((grid.dim.y, grid.dim.x), dtype=np.float64)
    uy = np.zeros((grid.dim.y, grid.dim.x), dtype=np.float64)

    for it in grid.index_iter():
        x, y = it.index
        vel = _select_velocity(grid.cell(it.index), buffer)
        ux[y, x] = vel[0]
        uy[y, x] = vel[1]

    return ux, uy


def pressure_array(grid):
    """Pressure field, shape (dim.y, dim.x)."""
    p = np.zeros((grid.dim.y, grid.dim.x), dtype=np.float64)
    for it in grid.index_iter():
        p[it.index.y, it.index.x] = grid.cell(it.index).pressure
    return p


def smoke_array(grid, buffer="back"):
    """Smoke field, shape (dim.y, dim.x)."""
    if buffer not in ("front", "back"):
        raise ValueError(f"Unknown buffer: {buffer}. Use 'front' or 'back'.")

    s = np.zeros((grid.dim.y, grid.dim.x), dtype=np.float64)
    for it in grid.index_iter():
        smoke = grid.cell(it.index).smoke
        s[it.index.y, it.index.x] = smoke.front if buffer == "front" else smoke.back
    return s


def compute_divergence(grid, buffer="back"):
    """
    Net outflow of every interior fluid cell.

    Solid and border cells are reported as 0.

    Parameters
    ----------
    grid : Grid
        Source grid
    buffer : str
        'front' or 'back' (default 'back')

    Returns
    -------
    div : ndarray
        Divergence field, shape (dim.y, dim.x)
    """
    ux, uy = velocity_arrays(grid, buffer)

    div = np.zeros_like(ux)
    div[1:-1, 1:-1] = (
        (ux[1:-1, 2:] - ux[1:-1, 1:-1]) +
        (uy[2:, 1:-1] - uy[1:-1, 1:-1])
    )

    for it in grid.inside_index_iter():
        if grid.cell(it.index).mode == CellType.SOLID:
            div[it.index.y, it.index.x] = 0.0

    return div


def max_abs_divergence(grid, buffer="back"):
    """Largest absolute divergence over all fluid cells."""
    return float(np.abs(compute_divergence(grid, buffer)).max())


def compute_velocity_magnitude(ux, uy):
    """
    Compute velocity magnitude.

    Parameters
    ----------
    ux, uy : ndarray
        Velocity components

    Returns
    -------
    u_mag : ndarray
        Velocity magnitude |u| = sqrt(ux^2 + uy^2)
    """
    return np.sqrt(ux**2 + uy**2)
