"""Domain-separated RNG using xxhash.

Each domain (behavior draws, timers, wander destinations, perception,
spawning) owns its own counter, so adding a draw in one domain never
shifts the values seen by another.

Formula: RNG_Value = Hash(Seed, Domain, Counter[Domain])

The engine is not meant to replay runs: without an explicit seed the
generator seeds itself from OS entropy. A fixed seed exists for tests and
for diagnosing a particular run from the CLI.
"""

from __future__ import annotations

import random
import struct
from typing import Protocol

import xxhash

from flysim.core.enums import Domain


class RandomSource(Protocol):
    """Anything that can produce a float in [0.0, 1.0) for a domain."""

    def next_float(self, domain: Domain) -> float: ...


class DomainRNG:
    """Counter-based pseudo-random generator with per-domain streams."""

    __slots__ = ("_seed", "_counters")

    _SCALE = 1.0 / (1 << 53)

    def __init__(self, seed: int | None = None) -> None:
        if seed is None:
            seed = random.SystemRandom().getrandbits(63)
        self._seed = seed
        self._counters: dict[Domain, int] = {d: 0 for d in Domain}

    @property
    def seed(self) -> int:
        return self._seed

    def _hash(self, domain: Domain, counter: int) -> int:
        payload = struct.pack("<qiq", self._seed, domain.value, counter)
        return xxhash.xxh64(payload).intdigest()

    def next_float(self, domain: Domain) -> float:
        """Return a float in [0.0, 1.0) and advance the domain's stream."""
        counter = self._counters[domain]
        self._counters[domain] = counter + 1
        # Top 53 bits keep the result strictly below 1.0
        return (self._hash(domain, counter) >> 11) * self._SCALE


def uniform(rng: RandomSource, domain: Domain, low: float, high: float) -> float:
    """Return a float in [low, high)."""
    return low + rng.next_float(domain) * (high - low)
