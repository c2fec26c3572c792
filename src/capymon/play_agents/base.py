"""Base class for agents that pick moves in a battle.

The battle runner and the CLI call ``choose_move`` once per round; the
agent sees both players (its own side and the opponent) and returns a
move index.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from capymon.core.entities import Player


class PlayAgent(ABC):
    """Base class for move-choosing agents."""

    @abstractmethod
    def choose_move(self, me: Player, opponent: Player) -> int:
        """Return the move index to play this round.

        Parameters
        ----------
        me:
            The agent's own player, as currently stored in the arena.
        opponent:
            The other player.  Its pending commitment is visible only as a
            digest, so the agent cannot read the opponent's move.
        """
