"""
Tests for grid indexing and iteration.

Validates row-major traversal, range predicates and neighbour lookup.
"""

import pytest
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from macfluid.errors import ContractViolation
from macfluid.indexing import (
    Index2,
    GridIndexIterator,
    clamp_to_range,
    full_range,
    interior_range,
    is_inside_border,
    is_inside_range,
    neighbor_indices,
    to_data_index,
)


class TestRangePredicates:
    """Test half-open range and border checks."""

    def test_inside_range_half_open(self):
        assert is_inside_range((0, 0), (4, 3), (0, 0))
        assert is_inside_range((0, 0), (4, 3), (3, 2))
        assert not is_inside_range((0, 0), (4, 3), (4, 2))
        assert not is_inside_range((0, 0), (4, 3), (3, 3))
        assert not is_inside_range((0, 0), (4, 3), (-1, 0))

    def test_inside_border(self):
        dim = Index2(5, 4)
        assert is_inside_border(dim, (1, 1))
        assert is_inside_border(dim, (3, 2))
        assert not is_inside_border(dim, (0, 1))
        assert not is_inside_border(dim, (4, 1))
        assert not is_inside_border(dim, (2, 3))

    def test_clamp_integers(self):
        assert clamp_to_range((0, 0), (4, 4), (-2, 7)) == (0, 4)
        assert clamp_to_range((0, 0), (4, 4), (2, 3)) == (2, 3)

    def test_clamp_floats(self):
        assert clamp_to_range((0.0, 0.0), (2.5, 1.5), (3.0, -0.1)) == (2.5, 0.0)

    def test_data_index_row_major(self):
        dim = Index2(5, 4)
        assert to_data_index(dim, (0, 0)) == 0
        assert to_data_index(dim, (4, 0)) == 4
        assert to_data_index(dim, (0, 1)) == 5
        assert to_data_index(dim, (2, 3)) == 17


class TestIteration:
    """Test FULL and INTERIOR traversals."""

    def test_full_range_coverage(self):
        """FULL yields dim.x * dim.y distinct coordinates in row-major order."""
        dim = Index2(5, 4)
        indices = [it.index for it in full_range(dim)]

        expected = [(x, y) for y in range(4) for x in range(5)]
        assert indices == expected
        assert len(set(indices)) == 20

    def test_interior_range_coverage(self):
        dim = Index2(6, 5)
        indices = [it.index for it in interior_range(dim)]

        assert len(indices) == (6 - 2) * (5 - 2)
        assert all(is_inside_border(dim, i) for i in indices)
        assert indices[0] == (1, 1)
        assert indices[1] == (2, 1)
        assert indices[-1] == (4, 3)

    def test_data_index_sequence(self):
        """Full traversal visits the flat storage in order."""
        dim = Index2(3, 3)
        offsets = [it.to_data_index() for it in full_range(dim)]
        assert offsets == list(range(9))

    def test_single_pass(self):
        it = full_range(Index2(3, 3))
        assert len(list(it)) == 9
        assert list(it) == []
        assert len(it) == 0

    def test_len_counts_remaining(self):
        it = interior_range(Index2(5, 5))
        assert len(it) == 9
        next(it)
        next(it)
        assert len(it) == 7

    def test_empty_range(self):
        assert list(GridIndexIterator((1, 1), (1, 1), (2, 2))) == []
        assert list(interior_range(Index2(2, 2))) == []


class TestNeighbors:
    """Test face neighbour lookup."""

    def test_neighbors(self):
        negative, positive = neighbor_indices(Index2(2, 3))
        assert negative == ((1, 3), (2, 2))
        assert positive == ((3, 3), (2, 4))

    @pytest.mark.parametrize("index", [(0, 1), (1, 0), (0, 0)])
    def test_no_wraparound_at_zero(self, index):
        with pytest.raises(ContractViolation):
            neighbor_indices(index)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
