"""Client-side helpers for the commit-reveal protocol.

A commitment is ``blake2b256(move_byte || salt)``.  The salt must stay
secret until the reveal; the arena itself does not track salts, so
keeping them fresh is up to the client (``CommitmentBook`` does that
for one player).
"""

from __future__ import annotations

import hmac
import secrets
from dataclasses import dataclass, field

from capymon.core.rng import blake2b256

DEFAULT_SALT_SIZE = 16


def make_commitment(move: int, salt: bytes) -> bytes:
    """Return the 32-byte digest sealing *move* with *salt*."""
    if not 0 <= move <= 255:
        raise ValueError(f"move must fit in one byte, got {move}")
    return blake2b256(bytes([move]) + bytes(salt))


def verify_commitment(digest: bytes, move: int, salt: bytes) -> bool:
    """Check that *move* and *salt* open *digest*."""
    if not 0 <= move <= 255:
        return False
    return hmac.compare_digest(make_commitment(move, salt), digest)


def new_salt(size: int = DEFAULT_SALT_SIZE) -> bytes:
    return secrets.token_bytes(size)


@dataclass
class SealedMove:
    move: int
    salt: bytes
    digest: bytes


@dataclass
class CommitmentBook:
    """Remembers one player's sealed move until it is revealed.

    Hands out fresh salts and refuses to seal with a salt it has already
    used, since a reused salt lets an observer match digests across
    rounds.
    """

    salt_size: int = DEFAULT_SALT_SIZE
    _pending: SealedMove | None = field(default=None, init=False)
    _used_salts: set[bytes] = field(default_factory=set, init=False)

    @property
    def pending(self) -> SealedMove | None:
        return self._pending

    def seal(self, move: int, salt: bytes | None = None) -> SealedMove:
        """Seal *move*, generating a salt unless one is given."""
        if self._pending is not None:
            raise ValueError("A sealed move is already waiting to be revealed")
        if salt is None:
            salt = new_salt(self.salt_size)
            while salt in self._used_salts:
                salt = new_salt(self.salt_size)
        elif salt in self._used_salts:
            raise ValueError("Salt has already been used for an earlier commitment")

        self._used_salts.add(salt)
        self._pending = SealedMove(move=move, salt=salt, digest=make_commitment(move, salt))
        return self._pending

    def opened(self) -> SealedMove:
        """Return the pending sealed move and forget it."""
        if self._pending is None:
            raise ValueError("Nothing has been sealed")
        sealed, self._pending = self._pending, None
        return sealed
