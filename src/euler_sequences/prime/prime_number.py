"""Prime numbers (OEIS A000040) exposed through the sequence contract."""

from __future__ import annotations

from typing import Dict, Optional

from euler_sequences.core.sequence import BidirectionalIterator, Sequence
from euler_sequences.core.sieve import BitSieve, SieveOfEratosthenes, get_eratosthenes_sieve
from euler_sequences.errors import InvalidArgumentError, require_non_negative


class PrimeSequence(Sequence[int]):
    """2, 3, 5, 7, 11, ...

    Lookups delegate to a sieve: ``get`` to its prime cache, membership and
    ``index_of`` to its primality table. The sequence is infinite, so it has
    no ``len()``.

    Attributes:
        sieve: Backing sieve. Defaults to the shared Sieve of Eratosthenes.
    """

    catalog_id = "A000040"
    unique = True

    def __init__(self, sieve: Optional[BitSieve] = None):
        self.sieve = sieve if sieve is not None else get_eratosthenes_sieve()

    def get(self, n: int) -> int:
        require_non_negative(n)
        return self.sieve.nth_prime(n)

    def is_prime(self, n: int) -> bool:
        return self.sieve.is_prime(n)

    def contains(self, value: int) -> bool:
        return value in self.sieve

    __contains__ = contains

    def index_of(self, value: int) -> Optional[int]:
        """Index of value in the sequence, or None if value is not prime."""
        return self.sieve.index_of(value)

    def factorize(self, n: int) -> Dict[int, int]:
        """Prime factorization of n.

        Raises:
            InvalidArgumentError: If the backing sieve cannot factorize.
        """
        if not isinstance(self.sieve, SieveOfEratosthenes):
            raise InvalidArgumentError(
                f"{type(self.sieve).__name__} does not record prime factors"
            )
        return self.sieve.factorize(n)

    def list_iterator(self, start_index: int = 0) -> BidirectionalIterator[int]:
        return self.sieve.list_iterator(start_index)
