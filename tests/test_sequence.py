"""Tests for the sequence contract, SequenceList and the iterator."""

import numpy as np
import pytest

from euler_sequences.core.sequence import (
    BidirectionalIterator,
    IndexedStep,
    Sequence,
    SequenceList,
    check_range,
)
from euler_sequences.errors import (
    InvalidArgumentError,
    NoSuchElementError,
    UnsupportedOperationError,
    require_non_negative,
)
from euler_sequences.recurrence import FibonacciNumber


class Squares(Sequence[int]):
    catalog_id = "A000290"

    def get(self, n):
        require_non_negative(n)
        return n * n


class TestSequence:
    """Tests for the default Sequence behaviour."""

    def test_get_and_index(self):
        """Test random access."""
        seq = Squares()
        assert seq.get(7) == 49
        assert seq[7] == 49

    def test_negative_index(self):
        """Test that negative indices raise."""
        with pytest.raises(InvalidArgumentError):
            Squares().get(-1)

    def test_slice(self):
        """Test slicing into a SequenceList."""
        part = Squares()[2:5]
        assert isinstance(part, SequenceList)
        assert part == [4, 9, 16]
        assert part.catalog_id == "A000290"

    def test_open_slice_rejected(self):
        """Test that slices without a stop or with a step raise."""
        with pytest.raises(InvalidArgumentError):
            Squares()[3:]
        with pytest.raises(InvalidArgumentError):
            Squares()[0:10:2]

    def test_sub_list(self):
        """Test sub_list size and contents."""
        seq = Squares()
        part = seq.sub_list(3, 8)
        assert len(part) == 5
        assert list(part) == [seq.get(n) for n in range(3, 8)]

    def test_sub_list_invalid(self):
        """Test sub_list argument checks."""
        seq = Squares()
        with pytest.raises(InvalidArgumentError):
            seq.sub_list(-1, 3)
        with pytest.raises(InvalidArgumentError):
            seq.sub_list(3, 3)
        with pytest.raises(InvalidArgumentError):
            seq.sub_list(5, 3)

    def test_take(self):
        """Test taking a prefix."""
        assert Squares().take(4) == (0, 1, 4, 9)
        with pytest.raises(InvalidArgumentError):
            Squares().take(0)

    def test_iteration(self):
        """Test that iteration matches get."""
        seq = Squares()
        for n, value in zip(range(20), seq):
            assert value == seq.get(n)

    def test_no_len(self):
        """Test that infinite sequences have no length."""
        with pytest.raises(TypeError):
            len(Squares())

    def test_unique_flag(self):
        """Test the declarative uniqueness flag."""
        assert Squares().is_unique()


class TestBidirectionalIterator:
    """Tests for the cursor bookkeeping."""

    def test_next_then_previous(self):
        """Test that previous returns the element just returned by next."""
        it = Squares().list_iterator()
        assert it.next() == 0
        assert it.next() == 1
        assert it.next() == 4
        assert it.previous() == 4
        assert it.previous() == 1
        assert it.next() == 1

    def test_indices(self):
        """Test next_index and previous_index."""
        it = Squares().list_iterator(5)
        assert it.next_index() == 5
        assert it.previous_index() == 4
        it.next()
        assert it.next_index() == 6

    def test_previous_at_start(self):
        """Test that moving before the start raises."""
        it = Squares().list_iterator()
        assert not it.has_previous()
        with pytest.raises(NoSuchElementError):
            it.previous()

    def test_offset_can_go_back(self):
        """Test stepping back from an offset iterator."""
        it = Squares().list_iterator(3)
        assert it.has_previous()
        assert it.previous() == 4

    def test_unbounded_has_next(self):
        """Test that an unbounded iterator never runs out."""
        it = Squares().list_iterator()
        for _ in range(100):
            it.next()
        assert it.has_next()

    def test_bounded(self):
        """Test an iterator with an upper bound."""
        it = BidirectionalIterator(IndexedStep(lambda n: n, 0), upper=2)
        assert list(it) == [0, 1]
        assert not it.has_next()
        with pytest.raises(NoSuchElementError):
            it.next()

    def test_mutation_unsupported(self):
        """Test that remove, add and set raise."""
        it = Squares().list_iterator()
        with pytest.raises(UnsupportedOperationError):
            it.remove()
        with pytest.raises(UnsupportedOperationError):
            it.add(1)
        with pytest.raises(UnsupportedOperationError):
            it.set(1)

    def test_start_out_of_bounds(self):
        """Test that the cursor must start inside its bounds."""
        with pytest.raises(InvalidArgumentError):
            BidirectionalIterator(IndexedStep(lambda n: n, 0), index=5, upper=3)
        with pytest.raises(InvalidArgumentError):
            Squares().list_iterator(-1)


class TestCheckRange:
    """Tests for check_range."""

    def test_valid(self):
        """Test that a valid range passes."""
        check_range(0, 1)

    def test_invalid(self):
        """Test rejected ranges."""
        with pytest.raises(InvalidArgumentError):
            check_range(-1, 1)
        with pytest.raises(InvalidArgumentError):
            check_range(2, 2)


class TestSequenceList:
    """Tests for the immutable finite view."""

    def test_tuple_like(self):
        """Test length, indexing and membership."""
        part = SequenceList([5, 6, 7], "A", False)
        assert len(part) == 3
        assert part[-1] == 7
        assert part.get(0) == 5
        assert 6 in part
        assert 8 not in part
        assert not part.is_unique()
        assert part.index(7) == 2

    def test_slicing(self):
        """Test that slices stay SequenceLists."""
        part = SequenceList(range(10))
        sliced = part[2:4]
        assert isinstance(sliced, SequenceList)
        assert sliced == [2, 3]

    def test_sub_list_bounds(self):
        """Test sub_list on a finite view."""
        part = SequenceList(range(5))
        assert part.sub_list(1, 5) == [1, 2, 3, 4]
        with pytest.raises(InvalidArgumentError):
            part.sub_list(1, 6)

    @pytest.mark.parametrize(
        "mutate",
        [
            lambda s: s.append(1),
            lambda s: s.extend([1]),
            lambda s: s.insert(0, 1),
            lambda s: s.remove(1),
            lambda s: s.pop(),
            lambda s: s.clear(),
            lambda s: s.sort(),
            lambda s: s.reverse(),
            lambda s: s.__setitem__(0, 1),
            lambda s: s.__delitem__(0),
        ],
    )
    def test_immutable(self, mutate):
        """Test that every mutator raises."""
        part = SequenceList([1, 2, 3])
        with pytest.raises(UnsupportedOperationError):
            mutate(part)
        assert part == [1, 2, 3]

    def test_unhashable(self):
        """Test that equality-by-value views are not hashable."""
        with pytest.raises(TypeError):
            hash(SequenceList([1]))

    def test_bounded_iterator(self):
        """Test the list iterator over a finite view."""
        part = SequenceList([1, 2, 3])
        it = part.list_iterator(3)
        assert not it.has_next()
        assert it.previous() == 3
        with pytest.raises(InvalidArgumentError):
            part.list_iterator(4)

    def test_to_list(self):
        """Test converting to a plain list."""
        assert SequenceList((1, 2)).to_list() == [1, 2]

    def test_to_array_object(self):
        """Test that object arrays keep exact big integers."""
        values = FibonacciNumber().sub_list(95, 100)
        arr = values.to_array()
        assert arr.dtype == object
        assert arr[-1] == FibonacciNumber().get(99)

    def test_to_array_int64(self):
        """Test packing into fixed-width integers."""
        arr = FibonacciNumber().sub_list(0, 93).to_array(np.int64)
        assert arr.dtype == np.int64
        np.testing.assert_array_equal(arr[:6], [0, 1, 1, 2, 3, 5])

    def test_to_array_overflow(self):
        """Test that values too large for the dtype raise."""
        with pytest.raises(InvalidArgumentError):
            FibonacciNumber().sub_list(0, 94).to_array(np.int64)

    def test_to_array_unsupported(self):
        """Test that non-integer dtypes are rejected."""
        with pytest.raises(InvalidArgumentError, match="unsupported array type"):
            SequenceList([1, 2]).to_array(float)
