"""Configuration for caches and sieves.

Defaults mirror the sizes used throughout the package: a 1000-entry dynamic
cache tier, a sieve covering the first 10,000 primes (104,729 is the
10,000th prime) and 50% headroom whenever a sieve has to grow.

Values can be overridden from the environment:

    EULER_SEQUENCES_CACHE_CAPACITY
    EULER_SEQUENCES_SIEVE_SIZE
    EULER_SEQUENCES_PRIME_CACHE_SIZE
"""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Mapping, Optional

from euler_sequences.errors import InvalidArgumentError

ENV_PREFIX = "EULER_SEQUENCES_"


@dataclass
class CacheConfig:
    """Sizing of the dynamic (evictable) cache tier."""
    capacity: int = 1000

    def __post_init__(self) -> None:
        if self.capacity < 0:
            raise InvalidArgumentError(f"capacity must be >= 0, got {self.capacity}")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> 'CacheConfig':
        return cls(**{k: v for k, v in d.items() if k in cls.__dataclass_fields__})


@dataclass
class SieveConfig:
    """Sizing of the prime sieves."""
    initial_size: int = 104730
    prime_cache_size: int = 10000
    growth_factor: float = 1.5

    def __post_init__(self) -> None:
        if self.initial_size < 6:
            raise InvalidArgumentError(f"initial_size must be >= 6, got {self.initial_size}")
        if self.prime_cache_size < 1:
            raise InvalidArgumentError(
                f"prime_cache_size must be >= 1, got {self.prime_cache_size}"
            )
        if self.growth_factor < 1.0:
            raise InvalidArgumentError(
                f"growth_factor must be >= 1.0, got {self.growth_factor}"
            )

    def grown_size(self, requested: int) -> int:
        """Size to rebuild a sieve at so that ``requested`` is covered."""
        return max(requested + 1, int(requested * self.growth_factor))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> 'SieveConfig':
        return cls(**{k: v for k, v in d.items() if k in cls.__dataclass_fields__})


@dataclass
class SequenceConfig:
    """Top-level configuration bundle."""
    cache: CacheConfig = field(default_factory=CacheConfig)
    sieve: SieveConfig = field(default_factory=SieveConfig)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> 'SequenceConfig':
        return cls(
            cache=CacheConfig.from_dict(d.get("cache", {})),
            sieve=SieveConfig.from_dict(d.get("sieve", {})),
        )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'SequenceConfig':
        """Build a configuration from ``EULER_SEQUENCES_*`` variables.

        Args:
            environ: Mapping to read from. Defaults to ``os.environ``.

        Returns:
            Configuration with any overrides applied.

        Raises:
            InvalidArgumentError: If a variable is not an integer or is out
                of range.
        """
        env = os.environ if environ is None else environ

        def _int(name: str, default: int) -> int:
            raw = env.get(ENV_PREFIX + name)
            if raw is None or raw == "":
                return default
            try:
                return int(raw)
            except ValueError:
                raise InvalidArgumentError(
                    f"{ENV_PREFIX + name} must be an integer, got {raw!r}"
                ) from None

        defaults = SieveConfig()
        return cls(
            cache=CacheConfig(capacity=_int("CACHE_CAPACITY", CacheConfig().capacity)),
            sieve=SieveConfig(
                initial_size=_int("SIEVE_SIZE", defaults.initial_size),
                prime_cache_size=_int("PRIME_CACHE_SIZE", defaults.prime_cache_size),
                growth_factor=defaults.growth_factor,
            ),
        )


DEFAULT_CONFIG = SequenceConfig()
