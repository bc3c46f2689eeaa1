"""Primitive Pythagorean triples generated from Euclid's formula.

For coprime m > n > 0 of opposite parity,

    a = m^2 - n^2,  b = 2mn,  c = m^2 + n^2

is a primitive triple, and every primitive triple arises exactly once in the
ternary tree rooted at (m, n) = (2, 1), i.e. (3, 4, 5). Each node has three
children:

    U: (m, n) -> (2m - n, m)
    A: (m, n) -> (2m + n, m)
    D: (m, n) -> (m + 2n, n)

Triples are numbered breadth-first: 0 is the root, 1-3 its children, 4-12
its grandchildren, and so on.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from math import gcd
from typing import List, Tuple

from euler_sequences.core.sequence import Sequence
from euler_sequences.errors import InvalidArgumentError, require_non_negative


@dataclass(frozen=True)
class PythagoreanTriple:
    """Triple (a, b, c) with a^2 + b^2 = c^2 built from Euclid parameters."""
    m: int
    n: int
    a: int = field(init=False)
    b: int = field(init=False)
    c: int = field(init=False)

    def __post_init__(self) -> None:
        if self.m < 2:
            raise InvalidArgumentError(f"m must be >= 2, got {self.m}")
        if not 0 < self.n < self.m:
            raise InvalidArgumentError(f"n must be between 0 and m={self.m} exclusive, got {self.n}")
        object.__setattr__(self, "a", self.m * self.m - self.n * self.n)
        object.__setattr__(self, "b", 2 * self.m * self.n)
        object.__setattr__(self, "c", self.m * self.m + self.n * self.n)

    @property
    def sides(self) -> Tuple[int, int, int]:
        return self.a, self.b, self.c

    @property
    def perimeter(self) -> int:
        return self.a + self.b + self.c

    @property
    def area(self) -> int:
        return self.a * self.b // 2

    @property
    def inradius(self) -> int:
        return self.n * (self.m - self.n)

    def is_primitive(self) -> bool:
        return gcd(self.m, self.n) == 1 and (self.m - self.n) % 2 == 1

    def children(self) -> List['PythagoreanTriple']:
        """The U, A and D children in the ternary tree."""
        m, n = self.m, self.n
        return [
            PythagoreanTriple(2 * m - n, m),
            PythagoreanTriple(2 * m + n, m),
            PythagoreanTriple(m + 2 * n, n),
        ]

    @classmethod
    def from_index(cls, index: int) -> 'PythagoreanTriple':
        """Triple at the given breadth-first position of the ternary tree.

        Raises:
            InvalidArgumentError: If index is negative.
        """
        require_non_negative(index)
        branches = []
        while index > 0:
            index, branch = divmod(index - 1, 3)
            branches.append(branch)

        m, n = 2, 1
        for branch in reversed(branches):
            if branch == 0:
                m, n = 2 * m - n, m
            elif branch == 1:
                m, n = 2 * m + n, m
            else:
                m = m + 2 * n
        return cls(m, n)


class PythagoreanTripleSequence(Sequence[PythagoreanTriple]):
    """Primitive triples in breadth-first tree order."""

    unique = True

    def get(self, n: int) -> PythagoreanTriple:
        return PythagoreanTriple.from_index(n)
