"""Recurrence sequences with cache-assisted random access."""

from euler_sequences.recurrence.base import RecurrenceSequence, RecurrenceStep
from euler_sequences.recurrence.factorial import FactorialNumber
from euler_sequences.recurrence.fibonacci import FibonacciNumber, shared_fibonacci
from euler_sequences.recurrence.lucas import LucasNumber
from euler_sequences.recurrence.padovan import PadovanSequence
from euler_sequences.recurrence.pell import PellNumber
from euler_sequences.recurrence.perrin import PerrinSequence

__all__ = [
    "RecurrenceSequence",
    "RecurrenceStep",
    "FactorialNumber",
    "FibonacciNumber",
    "LucasNumber",
    "PadovanSequence",
    "PellNumber",
    "PerrinSequence",
    "shared_fibonacci",
]
