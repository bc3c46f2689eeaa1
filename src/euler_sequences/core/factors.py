"""Arithmetic functions derived from prime factorizations.

All functions factor through the shared Sieve of Eratosthenes, which records
the smallest prime factor of every composite. Recent factorizations are
memoized since the functions below are usually evaluated together for the
same argument.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Dict, Tuple

from euler_sequences.core.sieve import get_eratosthenes_sieve
from euler_sequences.errors import InvalidArgumentError


@lru_cache(maxsize=64)
def _factor_items(n: int) -> Tuple[Tuple[int, int], ...]:
    return tuple(get_eratosthenes_sieve().factorize(n).items())


def factorize(n: int) -> Dict[int, int]:
    """Prime factorization of n as {prime: exponent}, primes ascending.

    Args:
        n: Positive integer.

    Raises:
        InvalidArgumentError: If n < 1.
    """
    if n < 1:
        raise InvalidArgumentError(f"n must be >= 1, got {n}")
    return dict(_factor_items(n))


def format_factors(factors: Dict[int, int]) -> str:
    """Render a factorization as ``"2^3, 3, 7"``."""
    if not factors:
        return "1"
    return ", ".join(
        str(p) if e == 1 else f"{p}^{e}" for p, e in sorted(factors.items())
    )


def omega(n: int) -> int:
    """Number of distinct prime factors of n (OEIS A001221)."""
    return len(factorize(n))


def big_omega(n: int) -> int:
    """Number of prime factors of n counted with multiplicity (OEIS A001222)."""
    return sum(factorize(n).values())


def totient(n: int) -> int:
    """Euler's totient: count of 1 <= k <= n coprime to n (OEIS A000010)."""
    phi = 1
    for p, e in factorize(n).items():
        phi *= (p - 1) * p ** (e - 1)
    return phi


def sigma(n: int) -> int:
    """Sum of the divisors of n (OEIS A000203)."""
    total = 1
    for p, e in factorize(n).items():
        total *= (p ** (e + 1) - 1) // (p - 1)
    return total


def aliquot_sum(n: int) -> int:
    """Sum of the proper divisors of n (OEIS A001065)."""
    return sigma(n) - n
