"""Factorial numbers (OEIS A000142)."""

from __future__ import annotations

from typing import List

from euler_sequences.recurrence.base import RecurrenceSequence


class FactorialNumber(RecurrenceSequence):
    """0! = 1, n! = n * (n-1)!

    First-order recurrence whose multiplier depends on the index, so the
    window is a single value and the rules use the position.
    """

    catalog_id = "A000142"
    unique = False  # 0! == 1!
    seeds = (1,)
    static_size = 10

    @staticmethod
    def _forward(window: List[int], i: int) -> int:
        return window[0] * (i + 1)

    @staticmethod
    def _backward(window: List[int], i: int) -> int:
        return window[0] // (i + 1)
