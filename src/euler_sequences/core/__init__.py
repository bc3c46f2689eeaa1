"""Core building blocks: sieves, caches and the sequence contract."""

from euler_sequences.core.cache import InMemorySequenceCache, NullSequenceCache, SequenceCache
from euler_sequences.core.sequence import BidirectionalIterator, Sequence, SequenceList
from euler_sequences.core.sieve import (
    SieveOfAtkin,
    SieveOfEratosthenes,
    generate_primes,
    is_prime,
    is_prime_array,
)

__all__ = [
    "SequenceCache",
    "InMemorySequenceCache",
    "NullSequenceCache",
    "Sequence",
    "SequenceList",
    "BidirectionalIterator",
    "SieveOfAtkin",
    "SieveOfEratosthenes",
    "generate_primes",
    "is_prime",
    "is_prime_array",
]
