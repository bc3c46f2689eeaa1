"""Lucas numbers (OEIS A000032)."""

from __future__ import annotations

from typing import List, Optional

from euler_sequences.core.cache import SequenceCache
from euler_sequences.recurrence.base import RecurrenceSequence
from euler_sequences.recurrence.fibonacci import FibonacciNumber, shared_fibonacci


class LucasNumber(RecurrenceSequence):
    """L(0) = 2, L(1) = 1, L(n) = L(n-1) + L(n-2).

    Uncached terms come from ``L(n) = F(n-1) + F(n+1)``, so the cost is that
    of two Fibonacci lookups.
    """

    catalog_id = "A000032"
    unique = True
    seeds = (2, 1)
    static_size = 100

    def __init__(
        self,
        cache: Optional[SequenceCache[int]] = None,
        fibonacci: Optional[FibonacciNumber] = None,
    ):
        """Create the sequence.

        Args:
            cache: Cache for Lucas numbers.
            fibonacci: Fibonacci sequence to delegate to. Defaults to the
                shared instance.
        """
        self.fibonacci = fibonacci if fibonacci is not None else shared_fibonacci()
        super().__init__(cache)

    @staticmethod
    def _forward(window: List[int], i: int) -> int:
        return window[0] + window[1]

    @staticmethod
    def _backward(window: List[int], i: int) -> int:
        return window[1] - window[0]

    def _compute(self, n: int) -> int:
        return self.fibonacci.get(n - 1) + self.fibonacci.get(n + 1)
