"""Tests for polygonal numbers."""

import pytest

from euler_sequences.core.sequence import SequenceList
from euler_sequences.errors import (
    InternalConsistencyError,
    InvalidArgumentError,
    NoSuchElementError,
)
from euler_sequences.figurate import (
    HeptagonalNumber,
    HexagonalNumber,
    OctagonalNumber,
    PentagonalNumber,
    PolygonalNumber,
    SquareNumber,
    TriangularNumber,
    polygonal,
)
from euler_sequences.figurate import polygonal_number as polygonal_module


class TestPolygonalFormula:
    """Tests for the closed form."""

    def test_values(self):
        """Test a few values of each family."""
        assert polygonal(3, 5) == 15
        assert polygonal(4, 7) == 49
        assert polygonal(5, 4) == 22
        assert polygonal(6, 4) == 28

    def test_invalid(self):
        """Test rejected arguments."""
        with pytest.raises(InvalidArgumentError):
            polygonal(2, 1)
        with pytest.raises(InvalidArgumentError):
            polygonal(3, -1)


class TestNamedFamilies:
    """Tests for the named subclasses."""

    @pytest.mark.parametrize(
        "cls,catalog_id,terms",
        [
            (TriangularNumber, "A000217", [0, 1, 3, 6, 10, 15]),
            (SquareNumber, "A000290", [0, 1, 4, 9, 16, 25]),
            (PentagonalNumber, "A000326", [0, 1, 5, 12, 22, 35]),
            (HexagonalNumber, "A000384", [0, 1, 6, 15, 28, 45]),
            (HeptagonalNumber, "A000566", [0, 1, 7, 18, 34, 55]),
            (OctagonalNumber, "A000567", [0, 1, 8, 21, 40, 65]),
        ],
    )
    def test_terms(self, cls, catalog_id, terms):
        """Test the opening terms and catalog ids."""
        seq = cls()
        assert seq.catalog_id == catalog_id
        assert seq.sub_list(0, len(terms)) == terms
        assert seq.is_unique()

    def test_triangular_fifth(self):
        """Test T(5)."""
        assert TriangularNumber().get(5) == 15

    def test_generic_matches_named(self):
        """Test that PolygonalNumber(s) agrees with the named class."""
        assert PolygonalNumber(5).sub_list(0, 30) == PentagonalNumber().sub_list(0, 30)


class TestInversion:
    """Tests for rank_of and index_of."""

    def test_rank_of_members(self):
        """Test that every term maps back to its rank."""
        for cls in (TriangularNumber, PentagonalNumber, OctagonalNumber):
            seq = cls()
            for r in range(200):
                assert seq.rank_of(seq.get(r)) == r

    def test_rank_of_non_members(self):
        """Test values that are not polygonal."""
        assert TriangularNumber().rank_of(14) is None
        assert SquareNumber().rank_of(50) is None
        assert PentagonalNumber().rank_of(23) is None
        assert TriangularNumber().rank_of(-3) is None

    def test_contains(self):
        """Test the membership operator."""
        assert 40755 in TriangularNumber()
        assert 40755 in PentagonalNumber()
        assert 40755 in HexagonalNumber()
        assert 40756 not in HexagonalNumber()

    def test_index_of_view_relative(self):
        """Test that index_of is relative to the view start."""
        view = TriangularNumber(start_index=10, end_index=20)
        assert view.index_of(55) == 0
        assert view.index_of(45) is None
        assert view.index_of(210) is None
        assert 55 in view

    def test_inconsistent_inverse(self, monkeypatch):
        """Test that a rank that does not reproduce its value raises."""
        seq = SquareNumber()
        monkeypatch.setattr(polygonal_module, "polygonal", lambda sides, r: -1)
        with pytest.raises(InternalConsistencyError):
            seq.rank_of(49)


class TestViews:
    """Tests for bounded and offset views."""

    def test_sides_validated(self):
        """Test that fewer than three sides is rejected."""
        with pytest.raises(InvalidArgumentError):
            PolygonalNumber(2)

    def test_unbounded_has_no_len(self):
        """Test that unbounded views have no length."""
        with pytest.raises(TypeError):
            len(TriangularNumber())
        assert TriangularNumber()

    def test_bounded_len_and_get(self):
        """Test length and relative indexing of a bounded view."""
        view = TriangularNumber(5, 8)
        assert len(view) == 3
        assert view.get(0) == 15
        assert view.get(2) == 28
        with pytest.raises(NoSuchElementError):
            view.get(3)

    def test_bounded_iteration_stops(self):
        """Test that iteration over a bounded view ends."""
        assert list(TriangularNumber(5, 8)) == [15, 21, 28]

    def test_empty_view(self):
        """Test an empty view."""
        view = SquareNumber(4, 4)
        assert len(view) == 0
        assert not view
        assert list(view) == []

    def test_view_of_view(self):
        """Test nesting views."""
        view = HexagonalNumber(10, 30).view(5, 8)
        assert isinstance(view, HexagonalNumber)
        assert (view.start_index, view.end_index) == (15, 18)
        assert list(view) == [polygonal(6, r) for r in range(15, 18)]

    def test_view_bounds(self):
        """Test that views cannot extend past their parent."""
        with pytest.raises(InvalidArgumentError):
            TriangularNumber(0, 10).view(5, 11)
        with pytest.raises(InvalidArgumentError):
            TriangularNumber().view(5, 4)

    def test_generic_view_keeps_sides(self):
        """Test that views of PolygonalNumber keep the side count."""
        view = PolygonalNumber(9).view(1, 3)
        assert view.sides == 9
        assert list(view) == [1, 9]

    def test_sub_list(self):
        """Test that sub_list materializes a SequenceList."""
        part = TriangularNumber(5, 8).sub_list(1, 3)
        assert isinstance(part, SequenceList)
        assert part == [21, 28]
        with pytest.raises(InvalidArgumentError):
            TriangularNumber(5, 8).sub_list(0, 4)

    def test_iterator_backwards(self):
        """Test stepping back over the differences."""
        it = PentagonalNumber().list_iterator(4)
        assert it.next() == 22
        assert it.previous() == 22
        assert it.previous() == 12
        assert it.previous() == 5
        assert it.previous() == 1
        assert it.previous() == 0
        assert not it.has_previous()

    def test_bounded_iterator_end(self):
        """Test that a bounded iterator refuses to run past the end."""
        it = TriangularNumber(0, 2).list_iterator()
        it.next()
        it.next()
        assert not it.has_next()
        with pytest.raises(NoSuchElementError):
            it.next()
