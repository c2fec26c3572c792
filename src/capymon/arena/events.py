"""Events emitted by arena operations.

Events are informational only: observers read them to follow a battle,
but the arena state is always the source of truth.  Each event carries
the ``sender`` whose operation produced it.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from capymon.core.stats import Stats


class _ArenaEventBase(BaseModel):
    model_config = {"frozen": True}

    arena_id: str
    sender: str


class ArenaCreated(_ArenaEventBase):
    kind: Literal["arena_created"] = "arena_created"


class PlayerJoined(_ArenaEventBase):
    kind: Literal["player_joined"] = "player_joined"


class PlayerCommit(_ArenaEventBase):
    kind: Literal["player_commit"] = "player_commit"


class PlayerReveal(_ArenaEventBase):
    kind: Literal["player_reveal"] = "player_reveal"
    move: int


class RoundResult(_ArenaEventBase):
    """Hp of both sides after the sender's attack landed."""

    kind: Literal["round_result"] = "round_result"
    attacker_hp: int
    defender_hp: int


# -- player versus bot -------------------------------------------------------

class BotArenaCreated(_ArenaEventBase):
    kind: Literal["bot_arena_created"] = "bot_arena_created"
    player_stats: Stats
    bot_stats: Stats


class BotRoundResult(_ArenaEventBase):
    kind: Literal["bot_round_result"] = "bot_round_result"
    player_move: int
    bot_move: int | None
    """``None`` when the bot was knocked out before it could answer."""

    player_hp: int
    bot_hp: int


ArenaEvent = Annotated[
    Union[
        ArenaCreated,
        PlayerJoined,
        PlayerCommit,
        PlayerReveal,
        RoundResult,
        BotArenaCreated,
        BotRoundResult,
    ],
    Field(discriminator="kind"),
]
