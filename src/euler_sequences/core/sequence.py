"""Sequence contract, finite sequence views and the bidirectional iterator.

A ``Sequence`` is a conceptually infinite list indexed from 0. Every
sequence offers random access (``get`` / ``seq[n]``), a bidirectional
``list_iterator`` and finite, immutable ``sub_list`` snapshots.

Iteration is split in two parts:

* ``BidirectionalIterator`` does the bookkeeping common to every sequence:
  cursor tracking, bounds checks and refusing mutation.
* A ``Step`` strategy knows how to produce the element under the cursor and
  move one position either way. Recurrences keep a small window of recent
  values so each step is O(1); ``IndexedStep`` falls back to ``get(n)``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence as _AbcSequence
from typing import Any, Callable, Generic, Iterable, Iterator, Optional, Tuple, TypeVar, Union

import numpy as np

from euler_sequences.errors import (
    InvalidArgumentError,
    NoSuchElementError,
    UnsupportedOperationError,
    require_non_negative,
)

E = TypeVar("E")


class Step(ABC, Generic[E]):
    """Strategy that moves a private window one position at a time."""

    @abstractmethod
    def advance(self) -> E:
        """Return the element under the cursor, then move forward one."""

    @abstractmethod
    def retreat(self) -> E:
        """Move back one, then return the element under the cursor."""


class IndexedStep(Step[E]):
    """Step that derives every element through random access."""

    def __init__(self, getter: Callable[[int], E], index: int = 0):
        self._get = getter
        self._index = index

    def advance(self) -> E:
        value = self._get(self._index)
        self._index += 1
        return value

    def retreat(self) -> E:
        self._index -= 1
        return self._get(self._index)


class BidirectionalIterator(Generic[E]):
    """Read-only cursor over a sequence.

    ``next()`` returns the element at ``next_index()`` and advances;
    ``previous()`` steps back and returns the element at the new position.
    Instances hold private state and must not be shared between threads.

    Attributes:
        lower: Smallest index ``previous()`` may move to.
        upper: Exclusive end of the range, or None for unbounded sequences.
    """

    def __init__(
        self,
        step: Step[E],
        index: int = 0,
        lower: int = 0,
        upper: Optional[int] = None,
    ):
        if index < lower:
            raise InvalidArgumentError(f"index must be >= {lower}, got {index}")
        if upper is not None and index > upper:
            raise InvalidArgumentError(f"index must be <= {upper}, got {index}")
        self._step = step
        self._idx = index
        self.lower = lower
        self.upper = upper

    def __iter__(self) -> 'BidirectionalIterator[E]':
        return self

    def __next__(self) -> E:
        if not self.has_next():
            raise StopIteration
        return self.next()

    def has_next(self) -> bool:
        return self.upper is None or self._idx < self.upper

    def next(self) -> E:
        """Return the next element.

        Raises:
            NoSuchElementError: If the iterator is at the end of a bounded range.
        """
        if not self.has_next():
            raise NoSuchElementError(f"no element at index {self._idx}")
        value = self._step.advance()
        self._idx += 1
        return value

    def has_previous(self) -> bool:
        return self._idx > self.lower

    def previous(self) -> E:
        """Return the previous element.

        Raises:
            NoSuchElementError: If the iterator is already at its lower bound.
        """
        if not self.has_previous():
            raise NoSuchElementError(f"no element before index {self._idx}")
        value = self._step.retreat()
        self._idx -= 1
        return value

    def next_index(self) -> int:
        return self._idx

    def previous_index(self) -> int:
        return self._idx - 1

    def remove(self) -> None:
        raise UnsupportedOperationError("sequence iterators are read-only")

    def add(self, value: E) -> None:
        raise UnsupportedOperationError("sequence iterators are read-only")

    def set(self, value: E) -> None:
        raise UnsupportedOperationError("sequence iterators are read-only")


def check_range(from_index: int, to_index: int) -> None:
    """Validate a half-open [from_index, to_index) range.

    Raises:
        InvalidArgumentError: If from_index < 0 or from_index >= to_index.
    """
    if from_index < 0:
        raise InvalidArgumentError(f"from_index must be >= 0, got {from_index}")
    if not from_index < to_index:
        raise InvalidArgumentError(
            f"from_index ({from_index}) must be smaller than to_index ({to_index})"
        )


def _slice_bounds(key: slice) -> Tuple[int, int]:
    if key.step not in (None, 1):
        raise InvalidArgumentError(f"slice step must be 1, got {key.step}")
    start = 0 if key.start is None else key.start
    if key.stop is None:
        raise InvalidArgumentError("slice of an infinite sequence needs a stop")
    return start, key.stop


class Sequence(ABC, Generic[E]):
    """Semi-infinite sequence with random access and bidirectional iteration.

    Subclasses set ``catalog_id`` (an OEIS number such as ``"A000045"``) and
    ``unique`` and implement ``get``. The default ``list_iterator`` derives
    elements through ``get``; subclasses with a cheaper incremental step
    override it.

    Infinite sequences deliberately have no ``__len__``.
    """

    catalog_id: str = ""
    unique: bool = True

    def is_unique(self) -> bool:
        """Whether elements never repeat. Declarative only; not enforced."""
        return self.unique

    @abstractmethod
    def get(self, n: int) -> E:
        """Return element n.

        Raises:
            InvalidArgumentError: If n is negative.
        """

    def __getitem__(self, key: Union[int, slice]) -> Any:
        if isinstance(key, slice):
            return self.sub_list(*_slice_bounds(key))
        return self.get(key)

    def list_iterator(self, start_index: int = 0) -> BidirectionalIterator[E]:
        """Bidirectional iterator positioned so that ``next()`` returns element start_index."""
        require_non_negative(start_index, "start_index")
        return BidirectionalIterator(IndexedStep(self.get, start_index), index=start_index)

    def iterator(self) -> BidirectionalIterator[E]:
        return self.list_iterator()

    def __iter__(self) -> Iterator[E]:
        return self.list_iterator()

    def sub_list(self, from_index: int, to_index: int) -> 'SequenceList[E]':
        """Materialize elements [from_index, to_index) as an immutable list.

        Raises:
            InvalidArgumentError: If from_index < 0 or from_index >= to_index.
        """
        check_range(from_index, to_index)
        values = []
        iterator = self.list_iterator(from_index)
        for _ in range(to_index - from_index):
            if not iterator.has_next():
                break
            values.append(iterator.next())
        return SequenceList(values, self.catalog_id, self.is_unique())

    def take(self, count: int) -> 'SequenceList[E]':
        """First count elements."""
        if count < 1:
            raise InvalidArgumentError(f"count must be >= 1, got {count}")
        return self.sub_list(0, count)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.catalog_id})"


class SequenceList(_AbcSequence, Generic[E]):
    """Finite, immutable snapshot of part of a sequence.

    Behaves like a tuple; every mutating list method raises
    ``UnsupportedOperationError``.
    """

    def __init__(self, elements: Iterable[E], catalog_id: str = "", unique: bool = True):
        self._elements: Tuple[E, ...] = tuple(elements)
        self.catalog_id = catalog_id
        self.unique = unique

    def is_unique(self) -> bool:
        return self.unique

    def __len__(self) -> int:
        return len(self._elements)

    def __getitem__(self, key):
        if isinstance(key, slice):
            return SequenceList(self._elements[key], self.catalog_id, self.unique)
        return self._elements[key]

    def get(self, n: int) -> E:
        return self._elements[n]

    def __iter__(self) -> Iterator[E]:
        return iter(self._elements)

    def __contains__(self, value: object) -> bool:
        return value in self._elements

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SequenceList):
            return self._elements == other._elements
        if isinstance(other, (list, tuple)):
            return self._elements == tuple(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"SequenceList({list(self._elements)!r}, catalog_id={self.catalog_id!r})"

    def list_iterator(self, start_index: int = 0) -> BidirectionalIterator[E]:
        if not 0 <= start_index <= len(self):
            raise InvalidArgumentError(
                f"start_index must be between 0 and {len(self)}, got {start_index}"
            )
        return BidirectionalIterator(
            IndexedStep(self._elements.__getitem__, start_index),
            index=start_index,
            upper=len(self),
        )

    def sub_list(self, from_index: int, to_index: int) -> 'SequenceList[E]':
        check_range(from_index, to_index)
        if to_index > len(self):
            raise InvalidArgumentError(f"to_index must be <= {len(self)}, got {to_index}")
        return self[from_index:to_index]

    def to_list(self) -> list:
        return list(self._elements)

    def to_array(self, dtype: Any = object) -> np.ndarray:
        """Copy the elements into a NumPy array.

        Args:
            dtype: ``object`` keeps exact Python integers; a NumPy integer
                dtype (or ``int``) packs them into fixed-width integers.

        Returns:
            One-dimensional array of the elements.

        Raises:
            InvalidArgumentError: For non-integer dtypes, or if an element
                does not fit the requested integer width.
        """
        dt = np.dtype(dtype)
        if dt == np.dtype(object):
            result = np.empty(len(self._elements), dtype=object)
            result[:] = self._elements
            return result
        if dt.kind not in "iu":
            raise InvalidArgumentError(f"unsupported array type: {dt}")
        info = np.iinfo(dt)
        for value in self._elements:
            if not info.min <= value <= info.max:
                raise InvalidArgumentError(f"{value} does not fit in {dt}")
        return np.array(self._elements, dtype=dt)

    def _read_only(self, *args, **kwargs):
        raise UnsupportedOperationError("SequenceList is immutable")

    __setitem__ = _read_only
    __delitem__ = _read_only
    __iadd__ = _read_only
    append = _read_only
    extend = _read_only
    insert = _read_only
    remove = _read_only
    pop = _read_only
    clear = _read_only
    sort = _read_only
    reverse = _read_only
