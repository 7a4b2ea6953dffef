"""Domain-separated deterministic RNG using xxhash.

The outcome of a run depends ONLY on WorldSeed + the sequence of inputs.

Formula: RNG_Value = Hash(WorldSeed, Domain, Key, Draw)
"""

from __future__ import annotations

import struct
from typing import Sequence, TypeVar

import xxhash

from mazerun.core.enums import Domain

T = TypeVar("T")


class DeterministicRNG:
    """Stateless domain-separated pseudo-random number generator.

    Each call is a pure function of (seed, domain, key, draw) with no
    internal mutable state.
    """

    __slots__ = ("_seed",)

    _MAX_UINT64 = (1 << 64) - 1

    def __init__(self, seed: int) -> None:
        self._seed = seed

    def _hash(self, domain: Domain, key: int, draw: int) -> int:
        payload = struct.pack("<qiqi", self._seed, domain.value, key, draw)
        return xxhash.xxh64(payload).intdigest()

    def next_float(self, domain: Domain, key: int, draw: int) -> float:
        """Return a deterministic float in [0.0, 1.0)."""
        return self._hash(domain, key, draw) / (self._MAX_UINT64 + 1)

