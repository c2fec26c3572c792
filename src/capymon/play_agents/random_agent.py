"""Random agent -- picks a move uniformly at random.

Used as the baseline in batch simulations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from capymon.core.rng import GameRNG
from capymon.core.rules import DEFAULT_RULES, RuleSet
from capymon.play_agents.base import PlayAgent

if TYPE_CHECKING:
    from capymon.core.entities import Player


class RandomAgent(PlayAgent):
    """Agent that plays a random move each round.

    Parameters
    ----------
    rng:
        Seeded RNG for deterministic randomness.  If ``None``, a default
        ``GameRNG(seed=0)`` is created.
    """

    def __init__(self, rng: GameRNG | None = None, rules: RuleSet = DEFAULT_RULES) -> None:
        self._rng = rng or GameRNG(seed=0)
        self._rules = rules

    def choose_move(self, me: Player, opponent: Player) -> int:
        return self._rng.random_int(0, self._rules.num_moves - 1)
