"""Greedy agent -- plays the move with the highest expected damage.

Expected damage is the damage engine's output at the middle of the roll
range, so type effectiveness, the same-type bonus and move power are all
weighed exactly as the arena will weigh them.  Ties go to the lowest
move index.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from capymon.core.damage import calculate_damage
from capymon.core.rules import DEFAULT_RULES, RuleSet
from capymon.play_agents.base import PlayAgent

if TYPE_CHECKING:
    from capymon.core.entities import Player


class HeuristicAgent(PlayAgent):
    def __init__(self, rules: RuleSet = DEFAULT_RULES) -> None:
        self._rules = rules

    def expected_damage(self, me: Player, opponent: Player, move: int) -> int:
        mid_roll = (self._rules.min_random_byte + self._rules.max_random_byte) // 2
        return calculate_damage(me.stats, opponent.stats, move, mid_roll, self._rules)

    def choose_move(self, me: Player, opponent: Player) -> int:
        return max(
            range(self._rules.num_moves),
            key=lambda move: (self.expected_damage(me, opponent, move), -move),
        )
