"""
Grid Cell

Per-node physical state of the staggered grid.

Velocity components are stored at the cell faces, relative to the
cell's corner:
    - v_x at (0, h/2)  (left face)
    - v_y at (h/2, 0)  (bottom face)

Pressure and smoke belong to the cell itself.
"""

from enum import Enum

import numpy as np

from .buffer import FrontBackBuffer
from .indexing import Index2
from .integrator import Integrate


class CellType(Enum):
    """Cell classification."""
    SOLID = 0
    FLUID = 1


class Cell(Integrate):
    """
    One node of the discretized domain.

    Parameters
    ----------
    index : Index2
        Integer grid coordinate, fixed for the lifetime of the cell
    mode : CellType
        Solid or fluid (default fluid)

    Attributes
    ----------
    velocity : FrontBackBuffer
        Staggered velocity, front/back are float64 arrays of shape (2,)
    pressure : float
        Accumulated pressure correction
    smoke : FrontBackBuffer
        Passive scalar, front/back are floats
    mode : CellType
        Solid or fluid
    """

    __slots__ = ("velocity", "pressure", "smoke", "mode", "_index")

    def __init__(self, index, mode=CellType.FLUID):
        self.velocity = FrontBackBuffer(np.zeros(2, dtype=np.float64))
        self.pressure = 0.0
        self.smoke = FrontBackBuffer(0.0)
        self.mode = mode
        self._index = Index2(*index)

    @property
    def index(self):
        return self._index

    @property
    def is_solid(self):
        return self.mode == CellType.SOLID

    def integrate(self, dt, gravity):
        """Semi-implicit Euler update of the force term: front = back + dt * g."""
        self.velocity.front = self.velocity.back + dt * np.asarray(gravity, dtype=np.float64)

    def __repr__(self):
        return (
            f"Cell(index=({self._index.x}, {self._index.y}), mode={self.mode.name}, "
            f"velocity={self.velocity.front}, pressure={self.pressure:.6g})"
        )
