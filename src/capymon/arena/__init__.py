"""Arenas: state, events, the commit-reveal state machine and its host.

Usage::

    from capymon.arena import ArenaHost, make_commitment

    host = ArenaHost()
    arena = host.create("alice")
    host.join(arena.id, "bob")
    host.commit(arena.id, "alice", make_commitment(0, salt))
"""

from capymon.arena.bot import BOT_ACCOUNT, BotArena, new_bot_arena
from capymon.arena.commitment import (
    CommitmentBook,
    SealedMove,
    make_commitment,
    new_salt,
    verify_commitment,
)
from capymon.arena.events import (
    ArenaCreated,
    ArenaEvent,
    BotArenaCreated,
    BotRoundResult,
    PlayerCommit,
    PlayerJoined,
    PlayerReveal,
    RoundResult,
)
from capymon.arena.host import ArenaHost, LoggedEvent
from capymon.arena.machine import Transition, commit, create, join, reveal
from capymon.arena.models import Arena, ArenaStatus, Decided, Seated, Undecided, Vacant
from capymon.arena.observer import ArenaObserver

__all__ = [
    # models
    "Arena",
    "ArenaStatus",
    "Vacant",
    "Seated",
    "Undecided",
    "Decided",
    # events
    "ArenaEvent",
    "ArenaCreated",
    "PlayerJoined",
    "PlayerCommit",
    "PlayerReveal",
    "RoundResult",
    "BotArenaCreated",
    "BotRoundResult",
    # machine
    "Transition",
    "create",
    "join",
    "commit",
    "reveal",
    # commitments
    "make_commitment",
    "verify_commitment",
    "new_salt",
    "CommitmentBook",
    "SealedMove",
    # bot
    "BotArena",
    "BOT_ACCOUNT",
    "new_bot_arena",
    # host
    "ArenaHost",
    "LoggedEvent",
    "ArenaObserver",
]
