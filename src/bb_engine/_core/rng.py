# Area: Core
"""
bb_engine._core.rng — Deterministic random number generation
============================================================

Mulberry32 32-bit generator plus the sampling helpers used by every
randomness-consuming transition.

Transitions never keep a generator alive between calls. The stored seed
is advanced first (``next_seed``) and a fresh ``DeterministicRNG`` is
built from the new value for use inside that one transition.
"""

from __future__ import annotations

from typing import List, Sequence, TypeVar

from ..errors import EmptyParticipantsError

T = TypeVar("T")

_MASK = 0xFFFFFFFF


def _imul(a: int, b: int) -> int:
    """32-bit wrapping multiply."""
    return (a * b) & _MASK


def _mulberry32_step(state: int):
    """Advance a mulberry32 state, returning (new_state, uint32 output)."""
    state = (state + 0x6D2B79F5) & _MASK
    t = _imul(state ^ (state >> 15), 1 | state)
    t = ((t + _imul(t ^ (t >> 7), 61 | t)) & _MASK) ^ t
    return state, (t ^ (t >> 14)) & _MASK


class DeterministicRNG:
    """Seeded generator producing floats in [0, 1)."""

    def __init__(self, seed: int):
        self._state = int(seed) & _MASK

    def next_uint32(self) -> int:
        self._state, value = _mulberry32_step(self._state)
        return value

    def next_float(self) -> float:
        return self.next_uint32() / 4294967296

    def __call__(self) -> float:
        return self.next_float()


def next_seed(seed: int) -> int:
    """Return the first 32-bit output of a generator seeded with ``seed``."""
    return DeterministicRNG(seed).next_uint32()


def pick_one(rng: DeterministicRNG, items: Sequence[T]) -> T:
    """Draw a single item uniformly.

    Raises
    ------
    EmptyParticipantsError
        If ``items`` is empty.
    """
    if not items:
        raise EmptyParticipantsError("pick_one")
    return items[int(rng.next_float() * len(items))]


def pick_n(rng: DeterministicRNG, items: Sequence[T], n: int) -> List[T]:
    """Sample ``n`` items without replacement, in draw order."""
    if not items:
        raise EmptyParticipantsError("pick_n")
    pool = list(items)
    picked: List[T] = []
    for _ in range(min(n, len(pool))):
        idx = int(rng.next_float() * len(pool))
        picked.append(pool.pop(idx))
    return picked


def shuffle(rng: DeterministicRNG, items: Sequence[T]) -> List[T]:
    """Return a seeded permutation of ``items`` (empty input gives [])."""
    if not items:
        return []
    return pick_n(rng, items, len(items))


def hash_str(text: str) -> int:
    """31-multiplier string hash over UTF-16 code units, unsigned 32-bit.

    Characters outside the BMP contribute both surrogate halves.
    """
    h = 0
    data = text.encode("utf-16-le", "surrogatepass")
    for i in range(0, len(data), 2):
        h = (_imul(31, h) + int.from_bytes(data[i:i + 2], "little")) & _MASK
    return h


def fnv1a32(text: str) -> int:
    """FNV-1a 32-bit hash over the UTF-8 bytes of ``text``."""
    h = 0x811C9DC5
    for byte in text.encode("utf-8"):
        h ^= byte
        h = _imul(h, 0x01000193)
    return h
