"""Deterministic randomness for arenas and agents.

Two layers live here:

- **Seed derivation** (``blake2b256``, ``derive``, ``arena_seed``): a pure
  hash chain.  A child seed is the BLAKE2b-256 digest of the parent seed
  with a path tag appended.  Arena randomness is always re-derived from
  values that are already fixed (the arena's id, a revealed commitment),
  so no participant can steer it.
- **GameRNG**: a forkable wrapper around ``random.Random`` used by play
  agents and the simulation runner, where reproducibility matters but
  nothing is adversarial.
"""

from __future__ import annotations

import hashlib
import random
from typing import Union

DIGEST_SIZE = 32

PathTag = Union[int, bytes]


def blake2b256(data: bytes) -> bytes:
    """Return the 32-byte BLAKE2b digest of *data*."""
    return hashlib.blake2b(data, digest_size=DIGEST_SIZE).digest()


def _encode_tag(tag: PathTag) -> bytes:
    if isinstance(tag, bytes):
        return tag
    if not 0 <= tag <= 255:
        raise ValueError(f"Integer path tags must fit in one byte, got {tag}")
    return bytes([tag])


def derive(seed: bytes, tag: PathTag) -> bytes:
    """Derive a child seed: ``blake2b256(seed || tag)``.

    Integer tags are encoded as a single byte, so ``derive(s, 0)`` and
    ``derive(s, b"\\x00")`` agree.
    """
    return blake2b256(bytes(seed) + _encode_tag(tag))


def arena_seed(arena_id: str) -> bytes:
    """Seed an arena from its own identity."""
    return blake2b256(arena_id.encode())


def round_byte(seed: bytes, round_: int) -> int:
    """Pick the byte of *seed* belonging to *round_* (wrapping every 32 rounds)."""
    return seed[round_ % len(seed)]


class GameRNG:
    """Deterministic RNG that can be forked into independent sub-streams.

    Parameters
    ----------
    seed:
        Integer seed for the underlying Mersenne Twister.
    """

    def __init__(self, seed: int) -> None:
        self._seed = seed
        self._rng = random.Random(seed)

    @property
    def seed(self) -> int:
        return self._seed

    def random_int(self, low: int, high: int) -> int:
        """Return a random integer *N* such that ``low <= N <= high``."""
        return self._rng.randint(low, high)

    def random_bytes(self, n: int) -> bytes:
        """Return *n* reproducible bytes (salts in simulations)."""
        return bytes(self._rng.getrandbits(8) for _ in range(n))

    def fork(self, name: str) -> GameRNG:
        """Create a child RNG whose seed is derived from this RNG's seed and
        *name*.

        Forking with the same *name* always yields the same child, so
        each agent or salt stream gets its own independent sequence.
        """
        digest = hashlib.sha256(f"{self._seed}:{name}".encode()).digest()
        return GameRNG(int.from_bytes(digest[:8], "big"))

    def __repr__(self) -> str:
        return f"GameRNG(seed={self._seed})"
