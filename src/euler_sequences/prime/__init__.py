"""The primes as a sequence."""

from euler_sequences.prime.prime_number import PrimeSequence

__all__ = ["PrimeSequence"]
