"""Player model and its commitment state.

A player's pending commitment is an explicit tagged state rather than a
nullable digest, so "nothing committed" and "committed to X" are both
spelled out in the serialized arena.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, field_validator

from capymon.core.rng import DIGEST_SIZE
from capymon.core.stats import Stats


# ---------------------------------------------------------------------------
# Commitment
# ---------------------------------------------------------------------------

class NoCommitment(BaseModel):
    kind: Literal["none"] = "none"


class Committed(BaseModel):
    """A sealed move: the 32-byte digest of ``move || salt``."""

    kind: Literal["committed"] = "committed"
    digest: bytes

    @field_validator("digest")
    @classmethod
    def _validate_digest(cls, v: bytes) -> bytes:
        if len(v) != DIGEST_SIZE:
            raise ValueError(f"digest must be {DIGEST_SIZE} bytes, got {len(v)}")
        return v


Commitment = Annotated[Union[NoCommitment, Committed], Field(discriminator="kind")]


# ---------------------------------------------------------------------------
# Player
# ---------------------------------------------------------------------------

class Player(BaseModel):
    """One side of an arena."""

    account: str
    """Opaque identity supplied by the caller's identity layer."""

    starting_hp: int
    stats: Stats
    commitment: Commitment = Field(default_factory=NoCommitment)
    next_round: int = 0
    """Number of rounds this player has revealed."""

    @classmethod
    def from_stats(cls, account: str, stats: Stats) -> Player:
        return cls(account=account, starting_hp=stats.hp, stats=stats)

    @property
    def hp(self) -> int:
        return self.stats.hp

    @property
    def has_commitment(self) -> bool:
        return isinstance(self.commitment, Committed)

    @property
    def pending_digest(self) -> bytes | None:
        if isinstance(self.commitment, Committed):
            return self.commitment.digest
        return None
