"""Arena state for player-versus-player battles.

Optional parts of the arena are explicit tagged states:

- ``player_two`` is ``Vacant`` until someone joins, then ``Seated``.
- ``outcome`` is ``Undecided`` until a reveal knocks a player out, then
  ``Decided`` and never touched again.

``Arena.status`` is derived from those two tags, so every combination
maps onto exactly one of the three lifecycle states.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from capymon.core.entities import Player


class ArenaStatus(str, Enum):
    WAITING_FOR_PLAYER_TWO = "waiting_for_player_two"
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"


# ---------------------------------------------------------------------------
# Tagged slots
# ---------------------------------------------------------------------------

class Vacant(BaseModel):
    kind: Literal["vacant"] = "vacant"


class Seated(BaseModel):
    kind: Literal["seated"] = "seated"
    player: Player


PlayerSlot = Annotated[Union[Vacant, Seated], Field(discriminator="kind")]


class Undecided(BaseModel):
    kind: Literal["undecided"] = "undecided"


class Decided(BaseModel):
    kind: Literal["decided"] = "decided"
    winner: str


Outcome = Annotated[Union[Undecided, Decided], Field(discriminator="kind")]


# ---------------------------------------------------------------------------
# Arena
# ---------------------------------------------------------------------------

class Arena(BaseModel):
    """The shared, authoritative state of one two-player battle."""

    id: str
    seed: bytes
    """Derived once from ``id`` at creation."""

    round: int = 0
    player_one: Player
    player_two: PlayerSlot = Field(default_factory=Vacant)
    outcome: Outcome = Field(default_factory=Undecided)

    @property
    def status(self) -> ArenaStatus:
        if isinstance(self.outcome, Decided):
            return ArenaStatus.FINISHED
        if isinstance(self.player_two, Seated):
            return ArenaStatus.IN_PROGRESS
        return ArenaStatus.WAITING_FOR_PLAYER_TWO

    @property
    def winner(self) -> str | None:
        if isinstance(self.outcome, Decided):
            return self.outcome.winner
        return None

    @property
    def opponent(self) -> Player | None:
        """The second player, or ``None`` while the slot is vacant."""
        if isinstance(self.player_two, Seated):
            return self.player_two.player
        return None

    @property
    def players(self) -> list[Player]:
        second = self.opponent
        return [self.player_one] if second is None else [self.player_one, second]

    def player_for(self, account: str) -> Player | None:
        """Return the player owned by *account*, if any."""
        for player in self.players:
            if player.account == account:
                return player
        return None

    def other_player(self, account: str) -> Player | None:
        """Return the player *not* owned by *account* (requires both seated)."""
        second = self.opponent
        if second is None:
            return None
        if self.player_one.account == account:
            return second
        if second.account == account:
            return self.player_one
        return None
