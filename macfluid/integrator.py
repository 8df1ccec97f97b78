"""
Force Integration

The `Integrate` capability is shared by single cells and the whole grid:
    - integrate(dt, gravity): apply external acceleration
    - solve_incompressibility(dt, iterations, density): pressure projection

The grid implements both in terms of per-cell behaviour.
"""

import logging
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class Integrate(ABC):
    """Time integration capability."""

    @abstractmethod
    def integrate(self, dt, gravity):
        """
        Apply the external acceleration `gravity` over the step `dt`.

        Parameters
        ----------
        dt : float
            Time step
        gravity : array_like
            Acceleration vector, shape (2,)
        """

    def solve_incompressibility(self, dt, iterations, density):
        """Remove velocity divergence. Only meaningful for aggregates."""
        raise NotImplementedError(
            f"{type(self).__name__} does not support incompressibility solves"
        )


def integrate_grid(grid, dt, gravity):
    """
    Integrate gravity on every cell and re-apply solid constraints.

    Every cell, solid or fluid, gets front = back + dt * gravity. Solid cells
    and the faces they share with their neighbours are then reset to the
    previous step's velocity so the projection never sees flow through a
    solid face.

    Parameters
    ----------
    grid : Grid
        Grid to update in-place
    dt : float
        Time step
    gravity : array_like
        Acceleration vector, shape (2,)
    """
    from .boundary import enforce_solid_constraints

    logger.debug("Integrate grid.")

    for cell in grid.cells:
        cell.integrate(dt, gravity)

    enforce_solid_constraints(grid)
