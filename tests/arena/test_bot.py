"""Tests for player-versus-bot arenas."""

import pytest

from capymon.arena.bot import BOT_ACCOUNT, attack, new_bot_arena
from capymon.arena.events import BotArenaCreated, BotRoundResult
from capymon.core.rng import arena_seed, derive
from capymon.core.stats import generate_stats
from capymon.errors import AuthorizationError, PreconditionError


def _play_out(arena, move=0):
    for _ in range(200):
        if arena.winner is not None:
            return arena
        arena = attack(arena, "dave", move).arena
    raise AssertionError("bot battle did not finish")


class TestNewBotArena:
    def test_stats_from_seed(self):
        transition = new_bot_arena("dave", "bot-1")
        arena = transition.arena
        seed = arena_seed("bot-1")
        assert arena.seed == seed
        assert arena.player.stats == generate_stats(derive(seed, 0))
        assert arena.bot.stats == generate_stats(derive(seed, 1))
        assert arena.bot.account == BOT_ACCOUNT
        assert arena.winner is None

    def test_created_event_carries_stats(self):
        transition = new_bot_arena("dave", "bot-1")
        (event,) = transition.events
        assert isinstance(event, BotArenaCreated)
        assert event.player_stats == transition.arena.player.stats
        assert event.bot_stats == transition.arena.bot.stats

    def test_bot_identity_reserved(self):
        with pytest.raises(AuthorizationError):
            new_bot_arena(BOT_ACCOUNT)


class TestAttack:
    def test_both_sides_trade_blows(self):
        arena = new_bot_arena("dave", "bot-1").arena
        arena.bot.stats.hp = 1000 * arena.bot.starting_hp
        transition = attack(arena, "dave", 1)
        after = transition.arena
        assert after.round == 1
        assert after.bot.hp < arena.bot.hp
        assert after.player.hp < arena.player.hp

        (event,) = transition.events
        assert isinstance(event, BotRoundResult)
        assert event.player_move == 1
        assert event.bot_move in (0, 1, 2)
        assert event.player_hp == after.player.hp
        assert event.bot_hp == after.bot.hp

    def test_input_untouched(self):
        arena = new_bot_arena("dave", "bot-1").arena
        before = arena.model_dump()
        attack(arena, "dave", 0)
        assert arena.model_dump() == before

    def test_replay_is_deterministic(self):
        a = _play_out(new_bot_arena("dave", "bot-1").arena, move=2)
        b = _play_out(new_bot_arena("dave", "bot-1").arena, move=2)
        assert a.model_dump() == b.model_dump()

    def test_knocked_out_bot_does_not_answer(self):
        arena = new_bot_arena("dave", "bot-1").arena
        arena.bot.stats.hp = 1
        transition = attack(arena, "dave", 0)
        assert transition.arena.winner == "dave"
        assert transition.events[0].bot_move is None
        assert transition.arena.player.hp == arena.player.hp

    def test_bot_can_win(self):
        arena = new_bot_arena("dave", "bot-1").arena
        arena.bot.stats.hp = 1000 * arena.bot.starting_hp
        arena.player.stats.hp = 1
        transition = attack(arena, "dave", 0)
        assert transition.arena.winner == BOT_ACCOUNT
        assert transition.arena.player.hp == 0

    def test_only_player_attacks(self):
        arena = new_bot_arena("dave", "bot-1").arena
        with pytest.raises(AuthorizationError):
            attack(arena, "mallory", 0)
        with pytest.raises(AuthorizationError):
            attack(arena, BOT_ACCOUNT, 0)

    def test_unknown_move(self):
        with pytest.raises(PreconditionError):
            attack(new_bot_arena("dave").arena, "dave", 3)

    def test_finished_arena(self):
        arena = _play_out(new_bot_arena("dave", "bot-1").arena)
        with pytest.raises(PreconditionError):
            attack(arena, "dave", 0)
