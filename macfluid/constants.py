"""
Staggered Grid Constants

Defines the axis layout and solver defaults for 2D MAC grid simulations.
"""
import numpy as np

# Velocity components live on cell faces:
#
#     +-------+
#     |       |
#     u   c   |      u: x-velocity at (0, h/2)
#     |       |      v: y-velocity at (h/2, 0)
#     +---v---+      c: pressure / smoke at the cell
#
AXIS_X = 0
AXIS_Y = 1

# Number of spatial dimensions
DIMENSIONS = 2

# Overrelaxation factor for the Gauss-Seidel projection
OVERRELAXATION = 1.9

# Solver defaults
DEFAULT_GRAVITY = np.array([0.0, -9.81], dtype=np.float64)
DEFAULT_DENSITY = 1000.0
DEFAULT_ITERATIONS = 40
