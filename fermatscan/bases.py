# fermatscan/bases.py
# Base generators for the Fermat trials.
# - RandomBaseSource: uniform a in [2, p-1] from random.Random
# - SequenceBaseSource: scripted bases (tests, replay)
# - candidate_seed: independent per-candidate streams for worker pools

from __future__ import annotations
import random
from typing import Iterable, Optional, Protocol, Sequence

from .errors import InvalidInput

# 64-bit golden-ratio constant
_SEED_MIX = 0x9E3779B97F4A7C15


class BaseSource(Protocol):
    def draw(self, p: int) -> int:
        """Return a base a with 2 <= a <= p-1."""
        ...


def _check_candidate(p: int) -> None:
    if p < 3:
        raise InvalidInput(f"candidate must be >= 3 (got {p})", p)


def candidate_seed(seed: Optional[int], p: int) -> Optional[int]:
    """Seed for candidate p derived from a run seed; None keeps system entropy."""
    if seed is None:
        return None
    return ((int(seed) << 32) ^ _SEED_MIX ^ int(p)) & ((1 << 64) - 1)


class RandomBaseSource:
    """Uniform bases from a random.Random (not cryptographic)."""

    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None):
        self.seed = seed
        self.rng = rng if rng is not None else random.Random(seed)

    def draw(self, p: int) -> int:
        _check_candidate(p)
        # p == 3 -> randrange(1) == 0 -> base 2, the only valid one
        return self.rng.randrange(p - 2) + 2


class SequenceBaseSource:
    """Replays a fixed list of bases, cycling when it runs out."""

    def __init__(self, bases: Iterable[int]):
        self.bases: Sequence[int] = tuple(int(a) for a in bases)
        if not self.bases:
            raise ValueError("SequenceBaseSource needs at least one base")
        self.pos = 0

    def draw(self, p: int) -> int:
        _check_candidate(p)
        a = self.bases[self.pos % len(self.bases)]
        self.pos += 1
        if not 2 <= a <= p - 1:
            raise InvalidInput(f"base {a} outside [2, {p - 1}] for candidate {p}", a)
        return a
