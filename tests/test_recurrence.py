"""Tests for the recurrence engines."""

import pytest

from euler_sequences.core.cache import InMemorySequenceCache, NullSequenceCache
from euler_sequences.errors import InternalConsistencyError, InvalidArgumentError
from euler_sequences.recurrence import (
    FactorialNumber,
    FibonacciNumber,
    LucasNumber,
    PadovanSequence,
    PellNumber,
    PerrinSequence,
    RecurrenceSequence,
    shared_fibonacci,
)


class RecurrenceContract:
    """Checks every recurrence must pass.

    Subclasses set ``sequence_class``, ``catalog_id``, ``unique`` and
    ``expected`` (the first terms).
    """

    sequence_class = None
    catalog_id = ""
    unique = True
    expected = ()

    def make(self, cache=None):
        return self.sequence_class(cache)

    def test_first_terms(self):
        """Test the opening terms."""
        seq = self.make()
        assert seq.sub_list(0, len(self.expected)) == list(self.expected)

    def test_metadata(self):
        """Test catalog id and uniqueness flag."""
        seq = self.make()
        assert seq.catalog_id == self.catalog_id
        assert seq.is_unique() is self.unique

    def test_get_matches_iteration(self):
        """Test that random access agrees with the iterator past the static tier."""
        seq = self.make()
        iterated = [value for _, value in zip(range(250), seq.list_iterator())]
        for n in (0, 1, 2, 99, 100, 101, 150, 249):
            assert seq.get(n) == iterated[n], f"mismatch at {n}"

    def test_get_without_cache(self):
        """Test that values are still right when nothing is cached."""
        seq = self.make(NullSequenceCache())
        reference = self.make()
        for n in (0, 5, 17, 120, 200):
            assert seq.get(n) == reference.get(n)

    def test_round_trip(self):
        """Test forward then backward iteration."""
        it = self.make().list_iterator()
        forward = [it.next() for _ in range(40)]
        backward = [it.previous() for _ in range(40)]
        assert backward == forward[::-1]
        assert not it.has_previous()

    def test_offset_iterator(self):
        """Test an iterator starting beyond the static tier."""
        seq = self.make()
        it = seq.list_iterator(300)
        assert it.next() == seq.get(300)
        assert it.next() == seq.get(301)
        assert it.previous() == seq.get(301)
        assert it.previous() == seq.get(300)
        assert it.previous() == seq.get(299)

    def test_negative_index(self):
        """Test that negative indices raise."""
        with pytest.raises(InvalidArgumentError):
            self.make().get(-1)

    def test_computed_values_cached(self):
        """Test that computed terms are stored in the dynamic tier."""
        cache = InMemorySequenceCache()
        seq = self.make(cache)
        value = seq.get(500)
        assert cache.get(500) == value

    def test_injected_cache_initialized(self):
        """Test that the static tier is loaded from the iterator."""
        cache = InMemorySequenceCache()
        seq = self.make(cache)
        assert cache.static_size == seq.static_size
        assert cache.get(0) == self.expected[0]
        assert cache.get(seq.static_size) is None


class TestFibonacci(RecurrenceContract):
    """Tests for FibonacciNumber."""

    sequence_class = FibonacciNumber
    catalog_id = "A000045"
    unique = False
    expected = (0, 1, 1, 2, 3, 5, 8, 13, 21, 34, 55)

    def test_tenth(self):
        """Test F(10)."""
        assert FibonacciNumber().get(10) == 55

    def test_known_large_value(self):
        """Test F(100) and F(300)."""
        seq = FibonacciNumber()
        assert seq.get(100) == 354224848179261915075
        assert seq.get(300) == (
            222232244629420445529739893461909967206666939096499764990979600
        )

    def test_doubling_identity(self):
        """Test F(2n) == F(n) * (2 F(n+1) - F(n))."""
        seq = FibonacciNumber(NullSequenceCache())
        for n in (50, 101, 333, 1000):
            assert seq.get(2 * n) == seq.get(n) * (2 * seq.get(n + 1) - seq.get(n))

    def test_cassini(self):
        """Test F(n-1) F(n+1) - F(n)^2 == (-1)^n."""
        seq = FibonacciNumber()
        for n in (200, 777):
            assert seq.get(n - 1) * seq.get(n + 1) - seq.get(n) ** 2 == (-1) ** n

    def test_shared_instance(self):
        """Test the process-wide instance."""
        assert shared_fibonacci() is shared_fibonacci()


class TestLucas(RecurrenceContract):
    """Tests for LucasNumber."""

    sequence_class = LucasNumber
    catalog_id = "A000032"
    unique = True
    expected = (2, 1, 3, 4, 7, 11, 18, 29, 47, 76, 123)

    def test_fibonacci_identity(self):
        """Test L(n) == F(n-1) + F(n+1)."""
        fib = FibonacciNumber()
        lucas = LucasNumber(fibonacci=fib)
        for n in (1, 10, 150, 420):
            assert lucas.get(n) == fib.get(n - 1) + fib.get(n + 1)

    def test_injected_fibonacci(self):
        """Test that an injected Fibonacci engine is used."""
        fib = FibonacciNumber(NullSequenceCache())
        lucas = LucasNumber(fibonacci=fib)
        assert lucas.fibonacci is fib
        assert lucas.get(150) == LucasNumber().get(150)

    def test_default_fibonacci_shared(self):
        """Test that the shared Fibonacci engine is the default."""
        assert LucasNumber().fibonacci is shared_fibonacci()


class TestPell(RecurrenceContract):
    """Tests for PellNumber."""

    sequence_class = PellNumber
    catalog_id = "A000129"
    unique = True
    expected = (0, 1, 2, 5, 12, 29, 70, 169, 408, 985)

    def test_fourth(self):
        """Test P(4)."""
        assert PellNumber().get(4) == 12

    def test_pell_equation(self):
        """Test that H(n)^2 - 2 P(n)^2 == (-1)^n with H(n) = P(n) + P(n-1)."""
        seq = PellNumber()
        for n in (5, 60, 333):
            h = seq.get(n) + seq.get(n - 1)
            assert h * h - 2 * seq.get(n) ** 2 == (-1) ** n


class TestPadovan(RecurrenceContract):
    """Tests for PadovanSequence."""

    sequence_class = PadovanSequence
    catalog_id = "A000931"
    unique = False
    expected = (1, 0, 0, 1, 0, 1, 1, 1, 2, 2, 3, 4, 5, 7, 9)

    def test_recurrence(self):
        """Test P(n) == P(n-2) + P(n-3) far from the seeds."""
        seq = PadovanSequence()
        for n in (40, 401):
            assert seq.get(n) == seq.get(n - 2) + seq.get(n - 3)


class TestPerrin(RecurrenceContract):
    """Tests for PerrinSequence."""

    sequence_class = PerrinSequence
    catalog_id = "A001608"
    unique = False
    expected = (3, 0, 2, 3, 2, 5, 5, 7, 10, 12, 17, 22, 29, 39)

    def test_prime_divisibility(self):
        """Test that p divides Pe(p) for primes p."""
        seq = PerrinSequence()
        for p in (101, 211, 307, 1009):
            assert seq.get(p) % p == 0

    def test_recurrence(self):
        """Test Pe(n) == Pe(n-2) + Pe(n-3) on computed terms."""
        seq = PerrinSequence(NullSequenceCache())
        for n in (150, 1001):
            assert seq.get(n) == seq.get(n - 2) + seq.get(n - 3)

    def test_derived_negative_index(self):
        """Test that an identity asking for a negative index raises."""
        with pytest.raises(InternalConsistencyError):
            PerrinSequence()._derived(-1)


class TestFactorial(RecurrenceContract):
    """Tests for FactorialNumber."""

    sequence_class = FactorialNumber
    catalog_id = "A000142"
    unique = False
    expected = (1, 1, 2, 6, 24, 120, 720, 5040, 40320, 362880, 3628800)

    def test_ratio(self):
        """Test n! / (n-1)! == n."""
        seq = FactorialNumber()
        for n in (12, 130, 400):
            assert seq.get(n) // seq.get(n - 1) == n

    def test_walk_resumes_from_cache(self):
        """Test that later lookups start from cached terms."""
        cache = InMemorySequenceCache()
        seq = FactorialNumber(cache)
        seq.get(50)
        misses = cache.stats().misses
        seq.get(52)
        # Only 52 and 51 miss.
        assert cache.stats().misses - misses <= 3


class TestRecurrenceBase:
    """Tests for the RecurrenceSequence contract itself."""

    def test_missing_rule_rejected(self):
        """Test that a recurrence without a backward rule cannot be built."""

        class ForwardOnly(RecurrenceSequence):
            seeds = (1, 1)

            @staticmethod
            def _forward(window, i):
                return window[0] + window[1]

        with pytest.raises(TypeError):
            ForwardOnly()
