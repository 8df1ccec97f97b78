"""
Error types raised by the solver core.
"""


class MacFluidError(Exception):
    """Base class for all macfluid errors."""


class ContractViolation(MacFluidError, AssertionError):
    """
    A caller or invariant bug.

    Raised for duplicate or out-of-range coordinates handed to batched cell
    access, and for interior coordinates that are not inside the solid border.
    Never caught inside the package.
    """
