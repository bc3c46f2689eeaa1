"""Named lookup of the built-in sequences.

Each entry maps a short name to a factory. ``get_sequence`` builds the
instance on first use and hands out the same instance afterwards, so callers
share caches. Lookups accept either the short name or the OEIS catalog id.
"""

from __future__ import annotations

import threading
from typing import Callable, Dict, List, Optional

from euler_sequences.core.sequence import Sequence
from euler_sequences.errors import InvalidArgumentError
from euler_sequences.figurate import (
    HeptagonalNumber,
    HexagonalNumber,
    OctagonalNumber,
    PentagonalNumber,
    SquareNumber,
    TriangularNumber,
)
from euler_sequences.prime import PrimeSequence
from euler_sequences.pythagoras import PythagoreanTripleSequence
from euler_sequences.recurrence import (
    FactorialNumber,
    LucasNumber,
    PadovanSequence,
    PellNumber,
    PerrinSequence,
    shared_fibonacci,
)

SEQUENCES: Dict[str, Callable[[], Sequence]] = {
    "fibonacci": shared_fibonacci,
    "lucas": LucasNumber,
    "pell": PellNumber,
    "padovan": PadovanSequence,
    "perrin": PerrinSequence,
    "factorial": FactorialNumber,
    "prime": PrimeSequence,
    "triangular": TriangularNumber,
    "square": SquareNumber,
    "pentagonal": PentagonalNumber,
    "hexagonal": HexagonalNumber,
    "heptagonal": HeptagonalNumber,
    "octagonal": OctagonalNumber,
    "pythagorean": PythagoreanTripleSequence,
}

_instances: Dict[str, Sequence] = {}
_lock = threading.Lock()


def available_sequences() -> List[str]:
    """Sorted list of registered sequence names."""
    return sorted(SEQUENCES)


def _resolve(name: str) -> str:
    key = name.strip().lower()
    if key in SEQUENCES:
        return key
    for candidate, factory in SEQUENCES.items():
        catalog_id = getattr(factory, "catalog_id", None)
        if catalog_id is None:
            catalog_id = get_sequence(candidate).catalog_id
        if catalog_id and catalog_id.lower() == key:
            return candidate
    raise InvalidArgumentError(
        f"unknown sequence {name!r}; choose from {', '.join(available_sequences())}"
    )


def get_sequence(name: str) -> Sequence:
    """Shared instance of the sequence registered under name.

    Args:
        name: Registered name (``"fibonacci"``) or catalog id (``"A000045"``),
            case-insensitive.

    Raises:
        InvalidArgumentError: If name is not registered.
    """
    key = _resolve(name)
    instance: Optional[Sequence] = _instances.get(key)
    if instance is None:
        with _lock:
            instance = _instances.get(key)
            if instance is None:
                instance = SEQUENCES[key]()
                _instances[key] = instance
    return instance


def catalog() -> Dict[str, str]:
    """Mapping of registered name to catalog id."""
    return {name: get_sequence(name).catalog_id for name in available_sequences()}
