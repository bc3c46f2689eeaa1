"""Prime sieves with lazy growth and thread-safe reads.

Two engines share the same interface (``BitSieve``):

* ``SieveOfAtkin`` keeps one bit per integer in a ``bitarray``; the bit is
  set when the integer is prime.
* ``SieveOfEratosthenes`` keeps, in a NumPy array, the smallest prime factor
  of every composite and 0 for primes, so it can also factorize.

Both are built once at construction and rebuilt from scratch at 1.5x the
requested size whenever a query falls outside the current range. Rebuilds
take the exclusive side of a read-write lock; lookups take the shared side.

The module-level helpers (``generate_primes``, ``is_prime``, ...) answer from
a process-wide Sieve of Eratosthenes that is built on first use.
"""

from __future__ import annotations

import bisect
import logging
import threading
import time
from abc import ABC, abstractmethod
from math import isqrt
from typing import Dict, Iterator, List, Optional

import numpy as np
from bitarray import bitarray

from euler_sequences.config import SequenceConfig, SieveConfig
from euler_sequences.core.rwlock import ReadWriteLock
from euler_sequences.core.sequence import BidirectionalIterator, Step
from euler_sequences.errors import (
    InvalidArgumentError,
    NoSuchElementError,
    require_non_negative,
)

logger = logging.getLogger(__name__)

# Smallest window scanned when looking for the next or previous prime.
_SCAN_CHUNK = 1024


def _upper_bound_for_count(n: int) -> int:
    """Upper bound on the nth prime (1-indexed) from the prime number theorem."""
    if n < 6:
        return 15
    return max(100, int(n * (np.log(n) + np.log(np.log(n + 1)) + 2)))


class BitSieve(ABC):
    """Resizable, thread-safe primality sieve.

    Attributes:
        config: Sizing parameters.
    """

    def __init__(self, size: Optional[int] = None, config: Optional[SieveConfig] = None):
        """Build the sieve and its prime cache.

        Args:
            size: Number of integers (0 to size-1) to sieve initially.
                Defaults to ``config.initial_size``.
            config: Sizing parameters. Defaults to ``SieveConfig()``.

        Raises:
            InvalidArgumentError: If size < 6.
        """
        self.config = config if config is not None else SieveConfig()
        if size is None:
            size = self.config.initial_size
        if size < 6:
            raise InvalidArgumentError(f"size must be >= 6, got {size}")

        self._lock = ReadWriteLock()
        self._cache_lock = threading.Lock()
        self._size = 0
        self._rebuild(size)

        self._prime_cache: List[int] = []
        with self._cache_lock:
            self._extend_prime_cache(self.config.prime_cache_size)

    # -- storage hooks ----------------------------------------------------

    @abstractmethod
    def _build(self, size: int):
        """Return fresh storage covering 0 to size-1."""

    @abstractmethod
    def _test(self, n: int) -> bool:
        """Primality of n from current storage. Caller holds the read lock."""

    @abstractmethod
    def _primes_in(self, lo: int, hi: int) -> np.ndarray:
        """Primes p with lo <= p < hi <= size. Caller holds the read lock."""

    @abstractmethod
    def _count_in(self, lo: int, hi: int) -> int:
        """Number of primes in [lo, hi). Caller holds the read lock."""

    # -- sizing -----------------------------------------------------------

    @property
    def size(self) -> int:
        """Number of integers currently covered (0 to size-1)."""
        return self._size

    def _rebuild(self, size: int) -> None:
        start = time.perf_counter()
        storage = self._build(size)
        self._storage = storage
        self._size = size
        logger.debug(
            "%s built for %d integers in %.3fs",
            type(self).__name__, size, time.perf_counter() - start,
        )

    def resize(self, n: int) -> None:
        """Grow the sieve so that n is covered.

        The sieve is rebuilt from scratch at ``config.grown_size(n)``. Calls
        that find the sieve already large enough do nothing.

        Args:
            n: Integer that must become testable.
        """
        require_non_negative(n, "n")
        with self._lock.write_locked():
            if n < self._size:
                return
            new_size = self.config.grown_size(n)
            logger.info(
                "Resizing %s from %d to %d integers",
                type(self).__name__, self._size, new_size,
            )
            self._rebuild(new_size)

    def _ensure_capacity(self, n: int) -> None:
        # The sieve never shrinks, so an unlocked size check is safe.
        if n >= self._size:
            self.resize(n)

    # -- queries ----------------------------------------------------------

    def is_prime(self, n: int) -> bool:
        """Check whether n is prime, growing the sieve if needed.

        Raises:
            InvalidArgumentError: If n is negative.
        """
        require_non_negative(n, "n")
        self._ensure_capacity(n)
        with self._lock.read_locked():
            return self._test(n)

    def __contains__(self, n: object) -> bool:
        if not isinstance(n, (int, np.integer)) or isinstance(n, bool) or n < 0:
            return False
        return self.is_prime(int(n))

    def next_prime(self, n: int) -> int:
        """Smallest prime strictly greater than n."""
        lo = max(n + 1, 0)
        chunk = _SCAN_CHUNK
        while True:
            hi = lo + chunk
            self._ensure_capacity(hi - 1)
            with self._lock.read_locked():
                found = self._primes_in(lo, hi)
            if found.size:
                return int(found[0])
            lo = hi
            chunk *= 2

    def previous_prime(self, n: int) -> int:
        """Largest prime strictly less than n.

        Raises:
            NoSuchElementError: If n <= 2.
        """
        if n <= 2:
            raise NoSuchElementError(f"there is no prime below {n}")
        hi = n
        self._ensure_capacity(hi - 1)
        chunk = _SCAN_CHUNK
        while hi > 2:
            lo = max(2, hi - chunk)
            with self._lock.read_locked():
                found = self._primes_in(lo, hi)
            if found.size:
                return int(found[-1])
            hi = lo
            chunk *= 2
        raise NoSuchElementError(f"there is no prime below {n}")

    def _extend_prime_cache(self, count: int) -> None:
        # Caller holds self._cache_lock.
        target = _upper_bound_for_count(count)
        lo = self._prime_cache[-1] + 1 if self._prime_cache else 0
        if target >= self._size > lo + 1:
            # Harvest what is already sieved before forcing a rebuild.
            target = self._size - 1
        while len(self._prime_cache) < count:
            lo = self._prime_cache[-1] + 1 if self._prime_cache else 0
            self._ensure_capacity(target)
            with self._lock.read_locked():
                found = self._primes_in(lo, target + 1)
            self._prime_cache.extend(int(p) for p in found)
            target = int(target * self.config.growth_factor) + 1

    def nth_prime(self, n: int) -> int:
        """Return the nth prime, counting from 0 (``nth_prime(0) == 2``).

        Small indices come straight from the prime cache; larger ones extend
        the cache, which only ever grows.

        Raises:
            InvalidArgumentError: If n is negative.
        """
        require_non_negative(n, "n")
        cache = self._prime_cache
        if n < len(cache):
            return cache[n]
        with self._cache_lock:
            if n >= len(cache):
                self._extend_prime_cache(n + 1)
            return cache[n]

    def first_primes(self, count: int) -> np.ndarray:
        """The first count primes as an int64 array.

        Raises:
            InvalidArgumentError: If count is negative.
        """
        require_non_negative(count, "count")
        with self._cache_lock:
            if count > len(self._prime_cache):
                self._extend_prime_cache(count)
            return np.array(self._prime_cache[:count], dtype=np.int64)

    def index_of(self, candidate: int) -> Optional[int]:
        """Position of candidate in the sequence of primes, or None.

        Args:
            candidate: Value to look up.

        Returns:
            0-based index of candidate among the primes, or None if it is
            not prime.
        """
        if candidate < 2 or not self.is_prime(candidate):
            return None
        cache = self._prime_cache
        if candidate > cache[-1]:
            with self._cache_lock:
                while cache[-1] < candidate:
                    self._extend_prime_cache(int(len(cache) * self.config.growth_factor) + 1)
        return bisect.bisect_left(cache, candidate)

    def count_primes(self, limit: int) -> int:
        """Count primes <= limit."""
        if limit < 2:
            return 0
        self._ensure_capacity(limit)
        with self._lock.read_locked():
            return self._count_in(0, limit + 1)

    def primes_up_to(self, limit: int) -> np.ndarray:
        """All primes <= limit as an int64 array."""
        if limit < 2:
            return np.array([], dtype=np.int64)
        self._ensure_capacity(limit)
        with self._lock.read_locked():
            return self._primes_in(0, limit + 1).astype(np.int64)

    def mask(self, limit: int) -> np.ndarray:
        """Boolean array of length limit where mask[i] is True iff i is prime."""
        result = np.zeros(max(limit, 0), dtype=bool)
        if limit <= 2:
            return result
        result[self.primes_up_to(limit - 1)] = True
        return result

    # -- iteration --------------------------------------------------------

    def list_iterator(self, start_index: int = 0) -> BidirectionalIterator[int]:
        """Bidirectional iterator over the primes, starting at the given index."""
        require_non_negative(start_index, "start_index")
        return BidirectionalIterator(_PrimeStep(self, start_index), index=start_index)

    def __iter__(self) -> Iterator[int]:
        return self.list_iterator()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(size={self._size})"


class _PrimeStep(Step[int]):
    """Walks the primes by scanning the sieve in either direction."""

    def __init__(self, sieve: BitSieve, start_index: int):
        self._sieve = sieve
        self._current = sieve.nth_prime(start_index)

    def advance(self) -> int:
        value = self._current
        self._current = self._sieve.next_prime(value)
        return value

    def retreat(self) -> int:
        self._current = self._sieve.previous_prime(self._current)
        return self._current


class SieveOfAtkin(BitSieve):
    """Sieve of Atkin stored as one bit per integer."""

    def _build(self, size: int) -> bitarray:
        root = isqrt(size) + 1
        y = np.arange(1, root, dtype=np.int64)
        y2 = y * y
        parity = np.zeros((size + 7) // 8, dtype=np.uint8)

        # Each quadratic form toggles n once per representation, so a
        # candidate survives when its representation count is odd. Working
        # one x at a time keeps temporaries at O(sqrt(size)); bit n lives at
        # parity[n >> 3], position n & 7.
        x = 1
        while 2 * x * x + 2 * x - 1 < size:
            x2 = x * x
            n1 = 4 * x2 + y2
            n1 = n1[(n1 < size) & ((n1 % 12 == 1) | (n1 % 12 == 5))]
            n2 = 3 * x2 + y2
            n2 = n2[(n2 < size) & (n2 % 12 == 7)]
            n3 = 3 * x2 - y2[:x - 1]
            n3 = n3[(n3 < size) & (n3 % 12 == 11)]
            flips = np.concatenate([n1, n2, n3])
            np.bitwise_xor.at(parity, flips >> 3, (1 << (flips & 7)).astype(np.uint8))
            x += 1

        bits = bitarray(endian="little")
        bits.frombytes(parity.tobytes())
        del parity
        del bits[size:]

        # Remove multiples of squares of the surviving candidates.
        for r in range(5, isqrt(size - 1) + 1):
            if bits[r]:
                step = r * r
                bits[step::step] = False

        # The quadratic forms do not cover n < 5.
        bits[0] = False
        bits[1] = False
        bits[2] = True
        bits[3] = True
        return bits

    def _test(self, n: int) -> bool:
        return bool(self._storage[n])

    def _primes_in(self, lo: int, hi: int) -> np.ndarray:
        hi = min(hi, self._size)
        if lo >= hi:
            return np.array([], dtype=np.int64)
        flags = np.frombuffer(self._storage[lo:hi].unpack(), dtype=np.uint8)
        return np.flatnonzero(flags).astype(np.int64) + lo

    def _count_in(self, lo: int, hi: int) -> int:
        return self._storage.count(1, lo, min(hi, self._size))


class SieveOfEratosthenes(BitSieve):
    """Sieve of Eratosthenes recording the smallest prime factor of each composite."""

    def _build(self, size: int) -> np.ndarray:
        dtype = np.int32 if size < np.iinfo(np.int32).max else np.int64
        spf = np.zeros(size, dtype=dtype)
        for p in range(2, isqrt(size - 1) + 1):
            if spf[p] == 0:
                multiples = spf[p * p::p]
                multiples[multiples == 0] = p
        return spf

    def _test(self, n: int) -> bool:
        return n >= 2 and bool(self._storage[n] == 0)

    def _primes_in(self, lo: int, hi: int) -> np.ndarray:
        lo = max(lo, 2)
        hi = min(hi, self._size)
        if lo >= hi:
            return np.array([], dtype=np.int64)
        return np.flatnonzero(self._storage[lo:hi] == 0).astype(np.int64) + lo

    def _count_in(self, lo: int, hi: int) -> int:
        return int(self._primes_in(lo, hi).size)

    def smallest_prime_factor(self, n: int) -> int:
        """Smallest prime dividing n (n itself when n is prime).

        Raises:
            InvalidArgumentError: If n < 2.
        """
        if n < 2:
            raise InvalidArgumentError(f"n must be >= 2, got {n}")
        self._ensure_capacity(n)
        with self._lock.read_locked():
            factor = int(self._storage[n])
        return factor if factor else n

    def factorize(self, n: int) -> Dict[int, int]:
        """Prime factorization of n as {prime: exponent}, primes ascending.

        Args:
            n: Positive integer. ``factorize(1)`` is empty.

        Raises:
            InvalidArgumentError: If n < 1.
        """
        if n < 1:
            raise InvalidArgumentError(f"n must be >= 1, got {n}")
        factors: Dict[int, int] = {}
        self._ensure_capacity(n)
        with self._lock.read_locked():
            spf = self._storage
            while n > 1:
                factor = int(spf[n]) or n
                factors[factor] = factors.get(factor, 0) + 1
                n //= factor
        return factors

    def largest_prime_factor(self, n: int) -> int:
        """Largest prime dividing n.

        Raises:
            InvalidArgumentError: If n < 2.
        """
        if n < 2:
            raise InvalidArgumentError(f"n must be >= 2, got {n}")
        return max(self.factorize(n))


_shared_lock = threading.Lock()
_shared: Dict[type, BitSieve] = {}


def _shared_sieve(cls: type) -> BitSieve:
    sieve = _shared.get(cls)
    if sieve is None:
        with _shared_lock:
            sieve = _shared.get(cls)
            if sieve is None:
                sieve = cls(config=SequenceConfig.from_env().sieve)
                _shared[cls] = sieve
    return sieve


def get_atkin_sieve() -> SieveOfAtkin:
    """Process-wide Sieve of Atkin, built on first use."""
    return _shared_sieve(SieveOfAtkin)


def get_eratosthenes_sieve() -> SieveOfEratosthenes:
    """Process-wide Sieve of Eratosthenes, built on first use."""
    return _shared_sieve(SieveOfEratosthenes)


def generate_n_primes(n: int) -> np.ndarray:
    """Generate the first n prime numbers.

    Args:
        n: Number of primes to generate.

    Returns:
        Array of the first n prime numbers.

    Raises:
        InvalidArgumentError: If n is less than 1.
    """
    if n < 1:
        raise InvalidArgumentError(f"n must be >= 1, got {n}")

    return get_eratosthenes_sieve().first_primes(n)


def generate_primes(limit: int) -> np.ndarray:
    """Generate all prime numbers up to and including limit.

    Args:
        limit: Upper bound for prime generation (inclusive).

    Returns:
        Array of prime numbers up to limit.

    Raises:
        InvalidArgumentError: If limit is less than 2.
    """
    if limit < 2:
        raise InvalidArgumentError(f"Limit must be >= 2, got {limit}")

    return get_eratosthenes_sieve().primes_up_to(limit)


def generate_primes_range(start: int, stop: int) -> np.ndarray:
    """Generate prime numbers in range [start, stop].

    Args:
        start: Lower bound (inclusive).
        stop: Upper bound (inclusive).

    Returns:
        Array of primes in the specified range.
    """
    if start > stop:
        raise InvalidArgumentError(f"start ({start}) must be <= stop ({stop})")

    all_primes = get_eratosthenes_sieve().primes_up_to(stop)
    return all_primes[all_primes >= start]


def nth_prime(n: int) -> int:
    """Return the nth prime number (1-indexed).

    Args:
        n: Which prime to return (1 = first prime = 2).

    Returns:
        The nth prime number.
    """
    if n < 1:
        raise InvalidArgumentError(f"n must be >= 1, got {n}")

    return get_eratosthenes_sieve().nth_prime(n - 1)


def count_primes(limit: int) -> int:
    """Count prime numbers up to limit.

    Args:
        limit: Upper bound for counting.

    Returns:
        Number of primes <= limit.
    """
    return get_eratosthenes_sieve().count_primes(limit)


def is_prime(n: int) -> bool:
    """Check if a single number is prime.

    Unlike ``BitSieve.is_prime``, negative numbers are simply not prime.

    Args:
        n: Number to check.

    Returns:
        True if n is prime, False otherwise.
    """
    if n < 2:
        return False
    return get_eratosthenes_sieve().is_prime(n)


def is_prime_array(numbers: np.ndarray) -> np.ndarray:
    """Check primality for an array of numbers.

    Args:
        numbers: Array of integers to check.

    Returns:
        Boolean array where True indicates prime.
    """
    numbers = np.asarray(numbers)
    if len(numbers) == 0:
        return np.array([], dtype=bool)

    numbers = numbers.astype(np.int64)
    max_val = int(numbers.max())

    if max_val < 2:
        return np.zeros(len(numbers), dtype=bool)

    mask = get_eratosthenes_sieve().mask(max_val + 1)
    result = np.zeros(len(numbers), dtype=bool)
    valid = numbers >= 0
    result[valid] = mask[numbers[valid]]
    return result


def prime_sieve_mask(limit: int) -> np.ndarray:
    """Generate a boolean mask where mask[i] is True if i is prime.

    Args:
        limit: Size of the mask (0 to limit-1).

    Returns:
        Boolean array of length limit.
    """
    return get_eratosthenes_sieve().mask(limit)
