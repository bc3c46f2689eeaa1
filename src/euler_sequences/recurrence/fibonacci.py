"""Fibonacci numbers (OEIS A000045).

Random access uses the tripling identities, with m = n // 3:

    F(3m)   = 2 F(m)^3 + 3 F(m+1) F(m) F(m-1)
    F(3m+1) = F(m+1)^3 + 3 F(m+1) F(m)^2 - F(m)^3
    F(3m+2) = F(m+1)^3 + 3 F(m+1)^2 F(m) + F(m)^3

Each level divides the index by three and the three inner terms are fetched
through the cache, so F(n) costs O(log n) big-integer multiplications.
"""

from __future__ import annotations

import threading
from typing import List, Optional

from euler_sequences.recurrence.base import RecurrenceSequence


class FibonacciNumber(RecurrenceSequence):
    """F(0) = 0, F(1) = 1, F(n) = F(n-1) + F(n-2)."""

    catalog_id = "A000045"
    unique = False  # F(1) == F(2)
    seeds = (0, 1)
    static_size = 100

    @staticmethod
    def _forward(window: List[int], i: int) -> int:
        return window[0] + window[1]

    @staticmethod
    def _backward(window: List[int], i: int) -> int:
        return window[1] - window[0]

    def _compute(self, n: int) -> int:
        m, r = divmod(n, 3)
        if r == 0:
            a, b, c = self._derived(m - 1), self._derived(m), self._derived(m + 1)
            return 2 * b ** 3 + 3 * c * b * a
        b, c = self._derived(m), self._derived(m + 1)
        if r == 1:
            return c ** 3 + 3 * c * b ** 2 - b ** 3
        return c ** 3 + 3 * c ** 2 * b + b ** 3


_shared_lock = threading.Lock()
_shared: Optional[FibonacciNumber] = None


def shared_fibonacci() -> FibonacciNumber:
    """Process-wide Fibonacci instance used by sequences derived from it."""
    global _shared
    if _shared is None:
        with _shared_lock:
            if _shared is None:
                _shared = FibonacciNumber()
    return _shared
