"""Polygonal numbers.

The r-th s-gonal number is

    P(s, r) = r * ((s - 2) * r - (s - 4)) / 2

so triangular numbers are P(3, r), squares P(4, r) and so on. Values are
closed-form, so nothing is cached. Consecutive terms differ by
(s - 2) * r + 1, which the iterator uses to step in either direction.

A ``PolygonalNumber`` can be restricted to the ranks [start_index,
end_index); indices passed to ``get`` are then relative to start_index.
"""

from __future__ import annotations

from math import isqrt
from typing import ClassVar, Optional

from euler_sequences.core.sequence import BidirectionalIterator, Sequence, Step
from euler_sequences.errors import (
    InternalConsistencyError,
    InvalidArgumentError,
    NoSuchElementError,
    require_non_negative,
)


def polygonal(sides: int, r: int) -> int:
    """Return the r-th polygonal number with the given number of sides.

    Raises:
        InvalidArgumentError: If sides < 3 or r < 0.
    """
    if sides < 3:
        raise InvalidArgumentError(f"sides must be >= 3, got {sides}")
    require_non_negative(r, "r")
    return r * ((sides - 2) * r - (sides - 4)) // 2


class _PolygonalStep(Step[int]):
    def __init__(self, sides: int, rank: int):
        self._k = sides - 2
        self._rank = rank
        self._value = polygonal(sides, rank)

    def advance(self) -> int:
        value = self._value
        self._value += self._k * self._rank + 1
        self._rank += 1
        return value

    def retreat(self) -> int:
        self._rank -= 1
        self._value -= self._k * self._rank + 1
        return self._value


class PolygonalNumber(Sequence[int]):
    """s-gonal numbers, optionally restricted to a range of ranks.

    Attributes:
        sides: Number of polygon sides (>= 3).
        start_index: First rank in the view.
        end_index: Exclusive last rank, or None when unbounded.
    """

    SIDES: ClassVar[Optional[int]] = None

    def __init__(self, sides: int, start_index: int = 0, end_index: Optional[int] = None):
        """Create a view of the s-gonal numbers.

        Raises:
            InvalidArgumentError: If sides < 3, start_index < 0 or
                end_index < start_index.
        """
        if sides < 3:
            raise InvalidArgumentError(f"sides must be >= 3, got {sides}")
        require_non_negative(start_index, "start_index")
        if end_index is not None and end_index < start_index:
            raise InvalidArgumentError(
                f"end_index ({end_index}) must be >= start_index ({start_index})"
            )
        self.sides = sides
        self.start_index = start_index
        self.end_index = end_index
        self.unique = True

    def _with_range(self, start_index: int, end_index: Optional[int]) -> 'PolygonalNumber':
        if type(self).SIDES is None:
            return PolygonalNumber(self.sides, start_index, end_index)
        return type(self)(start_index, end_index)

    @property
    def bounded(self) -> bool:
        return self.end_index is not None

    def __len__(self) -> int:
        if self.end_index is None:
            raise TypeError(f"{type(self).__name__} without end_index is unbounded")
        return self.end_index - self.start_index

    def __bool__(self) -> bool:
        return self.end_index is None or self.end_index > self.start_index

    def get(self, n: int) -> int:
        """Return the term at position n of this view.

        Raises:
            InvalidArgumentError: If n is negative.
            NoSuchElementError: If n is past the end of a bounded view.
        """
        require_non_negative(n)
        if self.end_index is not None and n >= len(self):
            raise NoSuchElementError(f"index {n} is outside a view of length {len(self)}")
        return polygonal(self.sides, self.start_index + n)

    def rank_of(self, value: int) -> Optional[int]:
        """Absolute rank r with P(sides, r) == value, or None.

        Inverts the formula: 8(s-2)x + (s-4)^2 must be a perfect square S^2
        and S + s - 4 must be divisible by 2(s-2).

        Raises:
            InternalConsistencyError: If the inverted rank does not reproduce
                value.
        """
        if not isinstance(value, int) or isinstance(value, bool) or value < 0:
            return None
        if value == 0:
            return 0
        s = self.sides
        disc = 8 * (s - 2) * value + (s - 4) ** 2
        root = isqrt(disc)
        if root * root != disc:
            return None
        rank, remainder = divmod(root + s - 4, 2 * (s - 2))
        if remainder:
            return None
        if polygonal(s, rank) != value:
            raise InternalConsistencyError(
                f"rank {rank} does not reproduce {value} for {s}-gonal numbers"
            )
        return rank

    def index_of(self, value: int) -> Optional[int]:
        """Position of value within this view, or None."""
        rank = self.rank_of(value)
        if rank is None or rank < self.start_index:
            return None
        if self.end_index is not None and rank >= self.end_index:
            return None
        return rank - self.start_index

    def __contains__(self, value: object) -> bool:
        return self.index_of(value) is not None  # type: ignore[arg-type]

    def view(self, from_index: int, to_index: int) -> 'PolygonalNumber':
        """Bounded view over positions [from_index, to_index) of this one."""
        if from_index < 0 or to_index < from_index:
            raise InvalidArgumentError(
                f"invalid range [{from_index}, {to_index})"
            )
        if self.end_index is not None and to_index > len(self):
            raise InvalidArgumentError(f"to_index must be <= {len(self)}, got {to_index}")
        return self._with_range(self.start_index + from_index, self.start_index + to_index)

    def sub_list(self, from_index: int, to_index: int):
        if self.end_index is not None and to_index > len(self):
            raise InvalidArgumentError(f"to_index must be <= {len(self)}, got {to_index}")
        return super().sub_list(from_index, to_index)

    def list_iterator(self, start_index: int = 0) -> BidirectionalIterator[int]:
        require_non_negative(start_index, "start_index")
        upper = None if self.end_index is None else len(self)
        return BidirectionalIterator(
            _PolygonalStep(self.sides, self.start_index + start_index),
            index=start_index,
            upper=upper,
        )

    def __repr__(self) -> str:
        end = "" if self.end_index is None else f", {self.end_index}"
        return f"{type(self).__name__}(sides={self.sides}, {self.start_index}{end})"


class _NamedPolygonal(PolygonalNumber):
    def __init__(self, start_index: int = 0, end_index: Optional[int] = None):
        super().__init__(self.SIDES, start_index, end_index)


class TriangularNumber(_NamedPolygonal):
    """0, 1, 3, 6, 10, 15, ..."""
    SIDES = 3
    catalog_id = "A000217"


class SquareNumber(_NamedPolygonal):
    """0, 1, 4, 9, 16, 25, ..."""
    SIDES = 4
    catalog_id = "A000290"


class PentagonalNumber(_NamedPolygonal):
    """0, 1, 5, 12, 22, 35, ..."""
    SIDES = 5
    catalog_id = "A000326"


class HexagonalNumber(_NamedPolygonal):
    """0, 1, 6, 15, 28, 45, ..."""
    SIDES = 6
    catalog_id = "A000384"


class HeptagonalNumber(_NamedPolygonal):
    """0, 1, 7, 18, 34, 55, ..."""
    SIDES = 7
    catalog_id = "A000566"


class OctagonalNumber(_NamedPolygonal):
    """0, 1, 8, 21, 40, 65, ..."""
    SIDES = 8
    catalog_id = "A000567"
