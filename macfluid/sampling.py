"""
Field Sampling

Bilinear reconstruction of grid quantities at arbitrary physical positions.

Each velocity axis lives on its own staggered sub-grid, so the position is
first shifted by that axis' offset. The sample then blends the 2x2 stencil

    (x, y+1)   (x+1, y+1)
    (x, y)     (x+1, y)

first along y, then along x. Positions and stencil coordinates are clamped
into the grid, which makes sampling total over all real positions.
"""

import numpy as np

from .constants import AXIS_X, AXIS_Y
from .indexing import clamp_to_range


def sample_field(grid, pos, axis, get_value):
    """
    Sample a cell quantity at a continuous position.

    Parameters
    ----------
    grid : Grid
        Grid to sample
    pos : array_like
        Physical position, shape (2,)
    axis : int
        Selects the staggering offset (0: x-faces, 1: y-faces)
    get_value : callable
        Maps (cell, axis) to a float

    Returns
    -------
    value : float
        Bilinearly interpolated value
    """
    h = grid.cell_width
    h_inv = 1.0 / h

    # Position on the staggered sub-grid of this axis.
    pos = np.asarray(pos, dtype=np.float64) - grid.offsets[axis]
    pos = np.clip(pos, 0.0, grid.extent)

    max_index = (grid.dim.x - 1, grid.dim.y - 1)

    def clamp_index(i):
        return clamp_to_range((0, 0), max_index, i)

    x, y = clamp_index((int(pos[0] * h_inv), int(pos[1] * h_inv)))
    alpha_x = (pos[0] - x * h) * h_inv
    alpha_y = (pos[1] - y * h) * h_inv

    v00 = get_value(grid.cell((x, y)), axis)
    v01 = get_value(grid.cell(clamp_index((x, y + 1))), axis)
    v10 = get_value(grid.cell(clamp_index((x + 1, y))), axis)
    v11 = get_value(grid.cell(clamp_index((x + 1, y + 1))), axis)

    # Blend each column along y, then the columns along x.
    f0 = (1.0 - alpha_y) * v00 + alpha_y * v01
    f1 = (1.0 - alpha_y) * v10 + alpha_y * v11

    return float((1.0 - alpha_x) * f0 + alpha_x * f1)


def front_velocity(cell, axis):
    return cell.velocity.front[axis]


def back_velocity(cell, axis):
    return cell.velocity.back[axis]


def front_smoke(cell, axis):
    return cell.smoke.front


def back_smoke(cell, axis):
    return cell.smoke.back


def pressure_value(cell, axis):
    return cell.pressure


def sample_velocity(grid, pos, buffer="back"):
    """
    Sample the full velocity vector at `pos`.

    Each component is interpolated on its own staggered sub-grid.

    Parameters
    ----------
    grid : Grid
        Grid to sample
    pos : array_like
        Physical position, shape (2,)
    buffer : str
        'front' or 'back' velocity buffer (default 'back')

    Returns
    -------
    velocity : ndarray
        Interpolated velocity, shape (2,)
    """
    if buffer == "front":
        get_value = front_velocity
    elif buffer == "back":
        get_value = back_velocity
    else:
        raise ValueError(f"Unknown buffer: {buffer}. Use 'front' or 'back'.")

    return np.array([
        sample_field(grid, pos, AXIS_X, get_value),
        sample_field(grid, pos, AXIS_Y, get_value),
    ])
