"""Fisher-Yates shuffling with an injectable random source.

Production callers use the process-wide `random` module. Tests pass a
`SeededRandom` (or call `shuffle_seeded`) to get reproducible orders.
"""

from __future__ import annotations

import random
from collections import Counter
from typing import Protocol, Sequence, TypeVar

T = TypeVar("T")

_LCG_MULTIPLIER = 1103515245
_LCG_INCREMENT = 12345
_LCG_MODULUS = 2**31


class RandomSource(Protocol):
    """Anything with a `random()` method returning a float in [0, 1)."""

    def random(self) -> float: ...


class SeededRandom:
    """Deterministic linear congruential generator.

    Same seed, same stream. Not suitable for anything but ordering.

    The state is stepped in IEEE double precision: products past 2**53 are
    rounded, so seeds in [0, 2**31) give the same stream as clients that
    compute it with doubles.
    """

    def __init__(self, seed: int):
        self._state = float(int(seed) % _LCG_MODULUS)

    def random(self) -> float:
        self._state = (self._state * _LCG_MULTIPLIER + _LCG_INCREMENT) % _LCG_MODULUS
        return self._state / _LCG_MODULUS


def _fisher_yates(items: list[T], rng: RandomSource) -> list[T]:
    for i in range(len(items) - 1, 0, -1):
        j = int(rng.random() * (i + 1))
        items[i], items[j] = items[j], items[i]
    return items


def shuffle(seq: Sequence[T], rng: RandomSource | None = None) -> list[T]:
    """Return a new list with the elements of `seq` in random order."""
    return _fisher_yates(list(seq), rng if rng is not None else random)


def shuffle_in_place(seq: list[T], rng: RandomSource | None = None) -> list[T]:
    """Shuffle `seq` in place and return the same list."""
    return _fisher_yates(seq, rng if rng is not None else random)


def shuffle_seeded(seq: Sequence[T], seed: int) -> list[T]:
    """Shuffle deterministically: the same seed and input always give the same order."""
    return shuffle(seq, SeededRandom(seed))


def pick_random(seq: Sequence[T], count: int, rng: RandomSource | None = None) -> list[T]:
    """Pick `count` distinct positions of `seq` at random, without replacement."""
    if count >= len(seq):
        return shuffle(seq, rng)
    if count <= 0:
        return []
    return shuffle(seq, rng)[:count]


def validate_shuffle(original: Sequence[T], shuffled: Sequence[T]) -> bool:
    """Check that `shuffled` holds exactly the elements of `original`, with multiplicity."""
    if len(original) != len(shuffled):
        return False
    try:
        return Counter(original) == Counter(shuffled)
    except TypeError:
        # Unhashable elements: compare by equality instead.
        remaining = list(shuffled)
        for item in original:
            try:
                remaining.remove(item)
            except ValueError:
                return False
        return not remaining
