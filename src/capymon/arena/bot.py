"""Player-versus-bot arenas.

A lighter variant with no commit-reveal: the bot has no secret to protect,
so the player simply attacks and the bot answers in the same operation.
All randomness comes from the arena seed and the round number, so a
replay of the same moves on the same arena id reproduces the battle.
"""

from __future__ import annotations

import logging
import uuid

from pydantic import BaseModel, Field

from capymon.arena.events import ArenaEvent, BotArenaCreated, BotRoundResult
from capymon.arena.machine import PLAYER_ONE_TAG, PLAYER_TWO_TAG, ROUND_RANDOMNESS_TAG, Transition
from capymon.arena.models import Decided, Outcome, Undecided
from capymon.core.damage import attack as deal_attack
from capymon.core.entities import Player
from capymon.core.rng import arena_seed, derive
from capymon.core.rules import DEFAULT_RULES, RuleSet
from capymon.core.stats import generate_stats
from capymon.errors import AuthorizationError, PreconditionError

logger = logging.getLogger(__name__)

BOT_ACCOUNT = "bot"


class BotArena(BaseModel):
    id: str
    seed: bytes
    round: int = 0
    player: Player
    bot: Player
    outcome: Outcome = Field(default_factory=Undecided)

    @property
    def winner(self) -> str | None:
        if isinstance(self.outcome, Decided):
            return self.outcome.winner
        return None


def _round_seed(arena: BotArena) -> bytes:
    tag = bytes([ROUND_RANDOMNESS_TAG]) + arena.round.to_bytes(8, "big")
    return derive(arena.seed, tag)


def new_bot_arena(
    player: str,
    arena_id: str | None = None,
    rules: RuleSet = DEFAULT_RULES,
) -> Transition[BotArena]:
    """Open an arena where *player* fights the house bot."""
    if player == BOT_ACCOUNT:
        raise AuthorizationError(f"{BOT_ACCOUNT!r} is reserved for the house bot")

    arena_id = arena_id or uuid.uuid4().hex
    seed = arena_seed(arena_id)
    player_stats = generate_stats(derive(seed, PLAYER_ONE_TAG), rules)
    bot_stats = generate_stats(derive(seed, PLAYER_TWO_TAG), rules)

    arena = BotArena(
        id=arena_id,
        seed=seed,
        player=Player.from_stats(player, player_stats),
        bot=Player.from_stats(BOT_ACCOUNT, bot_stats),
    )
    event = BotArenaCreated(
        arena_id=arena_id,
        sender=player,
        player_stats=player_stats,
        bot_stats=bot_stats,
    )
    return Transition(arena, [event])


def attack(
    arena: BotArena,
    sender: str,
    move: int,
    rules: RuleSet = DEFAULT_RULES,
) -> Transition[BotArena]:
    """Player attacks with *move*; if the bot survives it strikes back."""
    if sender != arena.player.account:
        raise AuthorizationError(f"{sender} is not the player in arena {arena.id}")
    if arena.winner is not None:
        raise PreconditionError(f"Arena {arena.id} is finished; winner is {arena.winner}")
    if not rules.is_valid_move(move):
        raise PreconditionError(f"Unknown move {move}")

    new = arena.model_copy(deep=True)
    seed = _round_seed(new)
    span, low = rules.random_byte_span, rules.min_random_byte

    deal_attack(new.player.stats, new.bot.stats, move, seed[0] % span + low, rules)

    bot_move: int | None = None
    if new.bot.stats.is_fainted:
        new.outcome = Decided(winner=new.player.account)
    else:
        bot_move = seed[1] % rules.num_moves
        deal_attack(new.bot.stats, new.player.stats, bot_move, seed[2] % span + low, rules)
        if new.player.stats.is_fainted:
            new.outcome = Decided(winner=BOT_ACCOUNT)

    new.round += 1
    events: list[ArenaEvent] = [
        BotRoundResult(
            arena_id=arena.id,
            sender=sender,
            player_move=move,
            bot_move=bot_move,
            player_hp=new.player.hp,
            bot_hp=new.bot.hp,
        )
    ]
    logger.debug("Bot arena %s round %d: %s vs %s", arena.id, arena.round, move, bot_move)
    return Transition(new, events)
