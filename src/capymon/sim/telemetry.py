"""Telemetry data models for simulated battles.

Plain dataclasses (not pydantic models) to keep collection cheap during
batch runs.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class BattleTelemetry:
    """Stats from a single simulated battle.

    Attributes
    ----------
    arena_id:
        Id of the arena the battle was played in.
    seed:
        Seed the runner used for agents and salts.
    player_one, player_two:
        Account identities of the two sides.
    winner:
        Winning account, or ``None`` if ``max_rounds`` ran out first.
    rounds:
        Completed rounds (the arena's round counter at the end).
    hp_start:
        Starting hp of ``(player_one, player_two)``, scaled.
    hp_history:
        ``(player_one_hp, player_two_hp)`` after every reveal.
    moves:
        Moves revealed by each account, in order.
    """

    arena_id: str
    seed: int
    player_one: str
    player_two: str
    winner: str | None
    rounds: int
    hp_start: tuple[int, int]
    hp_history: list[tuple[int, int]] = field(default_factory=list)
    moves: dict[str, list[int]] = field(default_factory=dict)

    @property
    def finished(self) -> bool:
        return self.winner is not None

    @property
    def hp_end(self) -> tuple[int, int]:
        return self.hp_history[-1] if self.hp_history else self.hp_start


@dataclass
class BatchSummary:
    """Aggregate of many battles between the same two agent kinds."""

    battles: list[BattleTelemetry] = field(default_factory=list)

    @property
    def player_one_wins(self) -> int:
        return sum(1 for b in self.battles if b.winner == b.player_one)

    @property
    def player_two_wins(self) -> int:
        return sum(1 for b in self.battles if b.winner == b.player_two)

    @property
    def unfinished(self) -> int:
        return sum(1 for b in self.battles if not b.finished)

    @property
    def mean_rounds(self) -> float:
        if not self.battles:
            return 0.0
        return sum(b.rounds for b in self.battles) / len(self.battles)
