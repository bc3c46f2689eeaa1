"""Index-to-value caches used by the sequences.

A cache has two tiers:

* a static tier: the first ``static_size`` values, loaded once by
  ``initialize`` and never evicted;
* a dynamic tier: values stored later with ``put``, bounded by ``capacity``.
  When it overflows, the entry that was *inserted* first is dropped. Reads
  do not refresh an entry; this is FIFO, not LRU.

``get`` returns ``None`` on a miss; computing and storing the value is the
caller's job. Custom caches (for example one backed by a database) only
need to implement ``SequenceCache``.
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from collections import OrderedDict
from dataclasses import asdict, dataclass
from itertools import islice
from typing import Any, Dict, Generic, Iterable, Iterator, List, Optional, TypeVar

from euler_sequences.config import CacheConfig
from euler_sequences.errors import AlreadyInitializedError, require_non_negative

logger = logging.getLogger(__name__)

E = TypeVar("E")


@dataclass
class CacheStats:
    """Counters describing cache effectiveness."""
    hits: int = 0
    misses: int = 0
    evictions: int = 0
    static_size: int = 0
    dynamic_size: int = 0

    @property
    def hit_rate(self) -> float:
        lookups = self.hits + self.misses
        return self.hits / lookups if lookups else 0.0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class SequenceCache(ABC, Generic[E]):
    """Contract shared by all sequence caches."""

    @abstractmethod
    def is_read_only(self) -> bool:
        """Whether ``put`` is ignored."""

    @abstractmethod
    def set_read_only(self, read_only: bool) -> None:
        """Toggle mutability."""

    @abstractmethod
    def is_initialized(self) -> bool:
        """Whether the static tier has been loaded."""

    @abstractmethod
    def initialize(self, values: Iterable[E], count: Optional[int] = None) -> bool:
        """Load the static tier.

        Args:
            values: Values for indices 0, 1, 2, ... (a list or any iterator).
            count: If given, load at most this many values; required when
                ``values`` is an infinite iterator.

        Returns:
            True once the cache is initialized.

        Raises:
            AlreadyInitializedError: If the cache was already initialized.
        """

    @abstractmethod
    def get(self, n: int) -> Optional[E]:
        """Cached value for index n, or None on a miss."""

    @abstractmethod
    def put(self, n: int, value: E) -> None:
        """Store a value in the dynamic tier. No-op on a read-only cache."""

    @abstractmethod
    def reset(self) -> None:
        """Clear the dynamic tier. The static tier is kept."""

    def __contains__(self, n: object) -> bool:
        return isinstance(n, int) and n >= 0 and self.get(n) is not None

    def stats(self) -> CacheStats:
        return CacheStats()


class InMemorySequenceCache(SequenceCache[E]):
    """Two-tier cache kept in process memory.

    Attributes:
        capacity: Maximum number of entries in the dynamic tier.
    """

    def __init__(self, capacity: Optional[int] = None):
        """Initialize an empty, uninitialized cache.

        Args:
            capacity: Dynamic tier size. Defaults to ``CacheConfig().capacity``
                (1000).
        """
        if capacity is None:
            capacity = CacheConfig().capacity
        require_non_negative(capacity, "capacity")
        self.capacity = capacity
        self._static: List[E] = []
        self._dynamic: "OrderedDict[int, E]" = OrderedDict()
        self._read_only = False
        self._initialized = False
        self._lock = threading.RLock()
        self._stats = CacheStats()

    @classmethod
    def from_config(cls, config: CacheConfig) -> 'InMemorySequenceCache':
        return cls(capacity=config.capacity)

    def is_read_only(self) -> bool:
        return self._read_only

    def set_read_only(self, read_only: bool) -> None:
        self._read_only = bool(read_only)

    def is_initialized(self) -> bool:
        return self._initialized

    @property
    def static_size(self) -> int:
        return len(self._static)

    def initialize(self, values: Iterable[E], count: Optional[int] = None) -> bool:
        with self._lock:
            if self._initialized:
                raise AlreadyInitializedError("Cache is already initialized")
            if count is not None:
                require_non_negative(count, "count")
                values = islice(values, count)
            self._static.extend(values)
            self._initialized = True
        logger.debug("Cache initialized with %d static values", len(self._static))
        return True

    def get(self, n: int) -> Optional[E]:
        with self._lock:
            if 0 <= n < len(self._static):
                self._stats.hits += 1
                return self._static[n]
            value = self._dynamic.get(n)
            if value is None:
                self._stats.misses += 1
            else:
                self._stats.hits += 1
            return value

    def put(self, n: int, value: E) -> None:
        if self._read_only:
            return
        require_non_negative(n, "n")
        with self._lock:
            if n < len(self._static):
                return
            self._dynamic[n] = value
            while len(self._dynamic) > self.capacity:
                evicted, _ = self._dynamic.popitem(last=False)
                self._stats.evictions += 1
                logger.debug("Evicted index %d from dynamic cache", evicted)

    def reset(self) -> None:
        with self._lock:
            self._dynamic.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._static) + len(self._dynamic)

    def dynamic_keys(self) -> Iterator[int]:
        """Snapshot of dynamic-tier indices, oldest insertion first."""
        with self._lock:
            return iter(list(self._dynamic.keys()))

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(
                hits=self._stats.hits,
                misses=self._stats.misses,
                evictions=self._stats.evictions,
                static_size=len(self._static),
                dynamic_size=len(self._dynamic),
            )

    def __repr__(self) -> str:
        return (
            f"InMemorySequenceCache(static={len(self._static)}, "
            f"dynamic={len(self._dynamic)}/{self.capacity})"
        )


class NullSequenceCache(SequenceCache[E]):
    """Cache stand-in that never stores anything.

    It reports itself as initialized and read-only, so ``initialize`` always
    fails and ``put`` is silently ignored.
    """

    def is_read_only(self) -> bool:
        return True

    def set_read_only(self, read_only: bool) -> None:
        pass

    def is_initialized(self) -> bool:
        return True

    def initialize(self, values: Iterable[E], count: Optional[int] = None) -> bool:
        raise AlreadyInitializedError("cache is already initialized")

    def get(self, n: int) -> Optional[E]:
        return None

    def put(self, n: int, value: E) -> None:
        pass

    def reset(self) -> None:
        pass

    def __len__(self) -> int:
        return 0

    def __repr__(self) -> str:
        return "NullSequenceCache()"
