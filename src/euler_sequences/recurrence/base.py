"""Shared machinery for linear recurrence sequences.

A recurrence of order k is described by its k seed values and two rules:

* ``_forward(window, i)`` gives a(i+k) from the window a(i), ..., a(i+k-1);
* ``_backward(window, i)`` gives a(i) from the window a(i+1), ..., a(i+k).

Iterators carry that window and step in O(1). Random access goes through
``get``, which checks the cache and otherwise calls ``_compute``; the default
``_compute`` walks forward from the closest run of k cached values, storing
every value it passes. Sequences with a faster identity (Fibonacci, Perrin)
override ``_compute``.
"""

from __future__ import annotations

import logging
import threading
from abc import abstractmethod
from typing import Callable, ClassVar, List, Optional, Tuple

from euler_sequences.core.cache import InMemorySequenceCache, SequenceCache
from euler_sequences.core.sequence import BidirectionalIterator, Sequence, Step
from euler_sequences.errors import InternalConsistencyError, require_non_negative

logger = logging.getLogger(__name__)

Rule = Callable[[List[int], int], int]


class RecurrenceStep(Step[int]):
    """Sliding window over a recurrence.

    Args:
        window: Values a(index), ..., a(index+k-1).
        index: Index of the first value in the window.
        forward: Rule producing a(i+k) from a(i..i+k-1).
        backward: Rule producing a(i) from a(i+1..i+k).
    """

    def __init__(self, window: List[int], index: int, forward: Rule, backward: Rule):
        self._window = list(window)
        self._index = index
        self._forward = forward
        self._backward = backward

    def advance(self) -> int:
        w = self._window
        value = w[0]
        w.append(self._forward(w, self._index))
        del w[0]
        self._index += 1
        return value

    def retreat(self) -> int:
        self._index -= 1
        w = self._window
        w.insert(0, self._backward(w, self._index))
        del w[-1]
        return w[0]


class RecurrenceSequence(Sequence[int]):
    """Base class for cache-backed recurrence sequences.

    Subclasses define ``seeds``, ``catalog_id``, ``unique``, ``static_size``
    and the ``_forward`` / ``_backward`` rules.

    Attributes:
        cache: Value cache; its static tier holds the first ``static_size``
            terms.
    """

    seeds: ClassVar[Tuple[int, ...]] = ()
    static_size: ClassVar[int] = 100

    def __init__(self, cache: Optional[SequenceCache[int]] = None):
        """Create the sequence and load the cache's static tier.

        Args:
            cache: Cache to use. Defaults to a new ``InMemorySequenceCache``.
                A cache that is already initialized (including
                ``NullSequenceCache``) is used as is.
        """
        self.cache: SequenceCache[int] = cache if cache is not None else InMemorySequenceCache()
        self._lock = threading.RLock()
        if not self.cache.is_initialized():
            self.cache.initialize(self.list_iterator(), self.static_size)

    @property
    def order(self) -> int:
        return len(self.seeds)

    @staticmethod
    @abstractmethod
    def _forward(window: List[int], i: int) -> int:
        """a(i+k) from the window a(i), ..., a(i+k-1)."""

    @staticmethod
    @abstractmethod
    def _backward(window: List[int], i: int) -> int:
        """a(i) from the window a(i+1), ..., a(i+k)."""

    def get(self, n: int) -> int:
        """Return term n of the sequence.

        Concurrent callers are serialized per instance, so each missing term
        is computed once and later callers see the cached value.

        Raises:
            InvalidArgumentError: If n is negative.
        """
        require_non_negative(n)
        if n < len(self.seeds):
            return self.seeds[n]
        with self._lock:
            value = self.cache.get(n)
            if value is None:
                value = self._compute(n)
                self.cache.put(n, value)
        return value

    def _derived(self, n: int) -> int:
        """Term n requested by an identity; negative indices are a bug."""
        if n < 0:
            raise InternalConsistencyError(
                f"{type(self).__name__} derived a negative index {n}"
            )
        return self.get(n)

    def _known(self, n: int) -> Optional[int]:
        if n < len(self.seeds):
            return self.seeds[n]
        return self.cache.get(n)

    def _nearest_window(self, n: int) -> Tuple[int, List[int]]:
        """Highest index m < n whose k consecutive values are all known."""
        k = self.order
        for m in range(n - k, 0, -1):
            window = []
            for j in range(k - 1, -1, -1):
                value = self._known(m + j)
                if value is None:
                    break
                window.append(value)
            else:
                window.reverse()
                return m, window
        return 0, list(self.seeds)

    def _compute(self, n: int) -> int:
        start, window = self._nearest_window(n)
        logger.debug("%s: walking from %d to %d", type(self).__name__, start, n)
        step = RecurrenceStep(window, start, self._forward, self._backward)
        for idx in range(start, n):
            self.cache.put(idx, step.advance())
        return step.advance()

    def list_iterator(self, start_index: int = 0) -> BidirectionalIterator[int]:
        """Bidirectional iterator whose first ``next()`` is term start_index.

        An offset iterator seeds its window with k calls to ``get``; after
        that every step is a single application of the recurrence.
        """
        require_non_negative(start_index, "start_index")
        if start_index == 0:
            window = list(self.seeds)
        else:
            window = [self.get(start_index + j) for j in range(self.order)]
        step = RecurrenceStep(window, start_index, self._forward, self._backward)
        return BidirectionalIterator(step, index=start_index)
