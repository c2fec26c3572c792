"""Tests for the move-choosing agents."""

from capymon.core.entities import Player
from capymon.core.rng import GameRNG
from capymon.core.rules import DEFAULT_RULES, ElementType
from capymon.core.stats import Stats
from capymon.play_agents import HeuristicAgent, PlayAgent, RandomAgent

S = DEFAULT_RULES.scaling_factor


def _make_player(account: str, element: ElementType, **kwargs) -> Player:
    defaults = dict(
        hp=40 * S, attack=30, defence=25, special_attack=30,
        special_defence=25, speed=30, level=10, types=[element],
    )
    defaults.update(kwargs)
    return Player.from_stats(account, Stats(**defaults))


class TestRandomAgent:
    def test_is_play_agent(self):
        assert isinstance(RandomAgent(), PlayAgent)

    def test_moves_in_range(self):
        agent = RandomAgent(GameRNG(1))
        me = _make_player("a", ElementType.FIRE)
        opp = _make_player("b", ElementType.WATER)
        moves = {agent.choose_move(me, opp) for _ in range(100)}
        assert moves == {0, 1, 2}

    def test_deterministic(self):
        me = _make_player("a", ElementType.FIRE)
        opp = _make_player("b", ElementType.WATER)
        a, b = RandomAgent(GameRNG(5)), RandomAgent(GameRNG(5))
        assert [a.choose_move(me, opp) for _ in range(20)] == [b.choose_move(me, opp) for _ in range(20)]


class TestHeuristicAgent:
    def test_prefers_super_effective_same_type(self):
        agent = HeuristicAgent()
        me = _make_player("a", ElementType.FIRE)
        opp = _make_player("b", ElementType.WATER)
        assert agent.choose_move(me, opp) == 0

    def test_power_and_effectiveness_combine(self):
        """Earth (60 power, 2.0x, same type) beats Water's 80 power at 0.5x."""
        agent = HeuristicAgent()
        me = _make_player("a", ElementType.EARTH)
        opp = _make_player("b", ElementType.FIRE)
        assert agent.choose_move(me, opp) == 1

    def test_expected_damage_uses_mid_roll(self):
        agent = HeuristicAgent()
        me = _make_player("a", ElementType.EARTH)
        opp = _make_player("b", ElementType.FIRE)
        # 776000000 * (S*236//255) // S
        assert agent.expected_damage(me, opp, 0) == 776_000_000 * 92_549_019 // S
