"""Padovan sequence (OEIS A000931)."""

from __future__ import annotations

from typing import List

from euler_sequences.recurrence.base import RecurrenceSequence


class PadovanSequence(RecurrenceSequence):
    """P(0) = 1, P(1) = P(2) = 0, P(n) = P(n-2) + P(n-3)."""

    catalog_id = "A000931"
    unique = False
    seeds = (1, 0, 0)
    static_size = 20

    @staticmethod
    def _forward(window: List[int], i: int) -> int:
        return window[0] + window[1]

    @staticmethod
    def _backward(window: List[int], i: int) -> int:
        return window[2] - window[0]
