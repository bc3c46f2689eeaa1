"""euler_sequences - lazy, cache-backed integer sequences."""

__version__ = "0.1.0"

from euler_sequences.core.sieve import generate_primes, is_prime, is_prime_array
from euler_sequences.figurate import TriangularNumber
from euler_sequences.prime import PrimeSequence
from euler_sequences.recurrence import FibonacciNumber, LucasNumber, PellNumber
from euler_sequences.registry import get_sequence

__all__ = [
    "generate_primes",
    "is_prime",
    "is_prime_array",
    "FibonacciNumber",
    "LucasNumber",
    "PellNumber",
    "PrimeSequence",
    "TriangularNumber",
    "get_sequence",
]
