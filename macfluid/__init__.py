"""
macfluid: pressure projection on a staggered 2D grid.
"""

from .buffer import FrontBackBuffer
from .cell import Cell, CellType
from .errors import ContractViolation, MacFluidError
from .grid import Grid
from .indexing import Index2
from .integrator import Integrate, integrate_grid
from .solver import solve_incompressibility
from .boundary import enforce_solid_constraints
from .sampling import sample_field, sample_velocity

__all__ = [
    "Cell",
    "CellType",
    "ContractViolation",
    "FrontBackBuffer",
    "Grid",
    "Index2",
    "Integrate",
    "MacFluidError",
    "enforce_solid_constraints",
    "integrate_grid",
    "sample_field",
    "sample_velocity",
    "solve_incompressibility",
]
