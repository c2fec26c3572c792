"""Creature statistics and their generation from a derived seed.

Seed layout (one byte each)::

    0: hp   1: attack   2: defence   3: special attack
    4: special defence   5: speed   6: element type
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from capymon.core.rules import DEFAULT_RULES, ElementType, RuleSet

STAT_BYTES = 7


class Stats(BaseModel):
    """A creature's battle statistics.

    ``hp`` is scaled by ``RuleSet.scaling_factor`` and only ever goes down,
    saturating at zero.
    """

    hp: int = Field(ge=0)
    attack: int
    defence: int
    special_attack: int
    special_defence: int
    speed: int
    level: int = Field(ge=0, le=100)
    types: list[ElementType]

    @field_validator("types")
    @classmethod
    def _validate_types(cls, v: list[ElementType]) -> list[ElementType]:
        if len(v) != 1:
            raise ValueError(f"Exactly one element type expected, got {len(v)}")
        return v

    @property
    def element(self) -> ElementType:
        return self.types[0]

    @property
    def is_fainted(self) -> bool:
        return self.hp == 0

    def take_damage(self, amount: int) -> int:
        """Subtract *amount* from hp, never going below zero.

        Returns the hp actually lost.
        """
        if amount <= 0:
            return 0
        lost = min(self.hp, amount)
        self.hp -= lost
        return lost


def smooth(byte: int, rules: RuleSet = DEFAULT_RULES) -> int:
    """Fold a raw byte into the ``[stat_floor, stat_cap]`` band.

    ``((byte mod 50) + 50) / 2`` lands in 25..49; the floor is kept so a
    looser rule set can never drop below it.
    """
    return max(rules.stat_floor, ((byte % rules.stat_cap) + rules.stat_cap) // 2)


def generate_stats(seed: bytes, rules: RuleSet = DEFAULT_RULES) -> Stats:
    """Map a derived seed onto bounded creature stats."""
    if len(seed) < STAT_BYTES:
        raise ValueError(f"Seed needs at least {STAT_BYTES} bytes, got {len(seed)}")

    return Stats(
        hp=(rules.base_hp + smooth(seed[0], rules)) * rules.scaling_factor,
        attack=smooth(seed[1], rules),
        defence=smooth(seed[2], rules),
        special_attack=smooth(seed[3], rules),
        special_defence=smooth(seed[4], rules),
        speed=smooth(seed[5], rules),
        level=rules.level,
        types=[ElementType(seed[6] % rules.num_types)],
    )
