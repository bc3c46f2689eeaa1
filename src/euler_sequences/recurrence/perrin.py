"""Perrin sequence (OEIS A001608).

Random access halves the index. With m = n // 2 and u, v, w the terms
m-1, m, m+1:

    23 Pe(2m)   = 7v^2 - 6u^2 - 2w^2 - 4uv + 18uw + 6vw
    23 Pe(2m+1) = 9u^2 + v^2 + 3w^2 + 6uv - 4uw + 14vw

The constants come from the minimal polynomial x^3 - x - 1, whose
discriminant is -23; the right-hand side is always an exact multiple of 23.
"""

from __future__ import annotations

from typing import List

from euler_sequences.errors import InternalConsistencyError
from euler_sequences.recurrence.base import RecurrenceSequence


class PerrinSequence(RecurrenceSequence):
    """Pe(0) = 3, Pe(1) = 0, Pe(2) = 2, Pe(n) = Pe(n-2) + Pe(n-3)."""

    catalog_id = "A001608"
    unique = False
    seeds = (3, 0, 2)
    static_size = 100

    @staticmethod
    def _forward(window: List[int], i: int) -> int:
        return window[0] + window[1]

    @staticmethod
    def _backward(window: List[int], i: int) -> int:
        return window[2] - window[0]

    def _compute(self, n: int) -> int:
        m = n // 2
        u, v, w = self._derived(m - 1), self._derived(m), self._derived(m + 1)
        if n % 2 == 0:
            x = 7 * v * v - 6 * u * u - 2 * w * w - 4 * u * v + 18 * u * w + 6 * v * w
        else:
            x = 9 * u * u + v * v + 3 * w * w + 6 * u * v - 4 * u * w + 14 * v * w
        value, remainder = divmod(x, 23)
        if remainder:
            raise InternalConsistencyError(
                f"Perrin identity for n={n} is not divisible by 23 (remainder {remainder})"
            )
        return value
