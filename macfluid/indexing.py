"""
Grid Indexing and Iteration

Maps 2D cell coordinates to flat row-major storage offsets and produces
bounded traversals of the grid.

Two traversals are used by the solver core:
    - FULL:     [(0, 0), dim)
    - INTERIOR: [(1, 1), dim - (1, 1))

Both proceed row-major (x fastest) and are single-pass.
"""

from collections import namedtuple

from .errors import ContractViolation


Index2 = namedtuple("Index2", ["x", "y"])


def is_inside_range(min_index, max_index, index):
    """
    Check `min_index <= index < max_index` component-wise (half-open).

    Parameters
    ----------
    min_index, max_index : Index2
        Lower (inclusive) and upper (exclusive) bounds
    index : Index2
        Coordinate to test

    Returns
    -------
    inside : bool
    """
    return (
        min_index[0] <= index[0] < max_index[0]
        and min_index[1] <= index[1] < max_index[1]
    )


def is_inside_border(dim, index):
    """True if `index` is strictly inside the one-cell border of a `dim` grid."""
    return 0 < index[0] < dim[0] - 1 and 0 < index[1] < dim[1] - 1


def clamp_to_range(min_index, max_index, index):
    """
    Clamp each component of `index` into [min, max] (inclusive).

    Works for integer coordinates and float positions alike; the result has
    the type of the input components.
    """
    return (
        min(max(index[0], min_index[0]), max_index[0]),
        min(max(index[1], min_index[1]), max_index[1]),
    )


def to_data_index(dim, index):
    """Flat storage offset of `index` in a row-major `dim` grid."""
    return index[0] + dim[0] * index[1]


class GridIndex:
    """A coordinate together with the dimensions of the grid it belongs to."""

    __slots__ = ("index", "dim")

    def __init__(self, index, dim):
        self.index = Index2(*index)
        self.dim = Index2(*dim)

    def to_data_index(self):
        return to_data_index(self.dim, self.index)

    def __repr__(self):
        return f"GridIndex(index=({self.index.x}, {self.index.y}), dim=({self.dim.x}, {self.dim.y}))"


class GridIndexIterator:
    """
    Row-major iterator over the half-open range [min_index, max_index).

    Yields `GridIndex` records. The iterator is finite and single-pass:
    once exhausted it stays exhausted, a new one must be built to iterate
    again.

    Parameters
    ----------
    min_index, max_index : Index2
        Half-open iteration bounds
    dim : Index2
        Dimensions of the grid the yielded coordinates address
    """

    def __init__(self, min_index, max_index, dim):
        self.min = Index2(*min_index)
        self.max = Index2(*max_index)
        self.dim = Index2(*dim)
        self._x = self.min.x
        self._y = self.min.y

    def __iter__(self):
        return self

    def __next__(self):
        x, y = self._x, self._y

        if not is_inside_range(self.min, self.max, (x, y)):
            raise StopIteration

        # Advance to next cell
        self._x += 1
        if self._x >= self.max.x:
            self._x = self.min.x
            self._y += 1

        return GridIndex((x, y), self.dim)

    def __len__(self):
        """Number of coordinates not yet yielded."""
        if not is_inside_range(self.min, self.max, (self._x, self._y)):
            return 0
        width = self.max.x - self.min.x
        rows_left = self.max.y - self._y
        return rows_left * width - (self._x - self.min.x)


def full_range(dim):
    """Iterator over every coordinate of a `dim` grid."""
    return GridIndexIterator((0, 0), dim, dim)


def interior_range(dim):
    """Iterator over the coordinates strictly inside the border."""
    return GridIndexIterator((1, 1), (dim[0] - 1, dim[1] - 1), dim)


def neighbor_indices(index):
    """
    Negative and positive face neighbours of `index`.

    Parameters
    ----------
    index : Index2
        Cell coordinate, both components >= 1

    Returns
    -------
    neighbors : tuple
        ((x-1, y), (x, y-1)), ((x+1, y), (x, y+1)) as `Index2`

    Raises
    ------
    ContractViolation
        If a negative neighbour would leave the grid (component == 0)
    """
    x, y = int(index[0]), int(index[1])
    if x < 1 or y < 1:
        raise ContractViolation(
            f"Negative neighbours of ({x}, {y}) are outside the grid"
        )

    return (
        (Index2(x - 1, y), Index2(x, y - 1)),
        (Index2(x + 1, y), Index2(x, y + 1)),
    )
