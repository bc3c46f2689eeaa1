"""Pell numbers (OEIS A000129)."""

from __future__ import annotations

from typing import List

from euler_sequences.recurrence.base import RecurrenceSequence


class PellNumber(RecurrenceSequence):
    """P(0) = 0, P(1) = 1, P(n) = 2 P(n-1) + P(n-2)."""

    catalog_id = "A000129"
    unique = True
    seeds = (0, 1)
    static_size = 10

    @staticmethod
    def _forward(window: List[int], i: int) -> int:
        return 2 * window[1] + window[0]

    @staticmethod
    def _backward(window: List[int], i: int) -> int:
        return window[1] - 2 * window[0]
