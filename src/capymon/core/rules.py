"""The canonical rule set: every constant the stat and damage formulas read.

Earlier prototypes drifted apart on the stat-smoothing bounds; this module
is the one place those numbers live.  Pure functions across the package
accept an optional ``rules=`` argument and fall back to ``DEFAULT_RULES``.
"""

from __future__ import annotations

from enum import IntEnum

from pydantic import BaseModel, model_validator


class ElementType(IntEnum):
    """Elemental types.  Move ``i`` carries element ``i``."""

    FIRE = 0
    EARTH = 1
    WATER = 2


MOVE_NAMES: tuple[str, ...] = tuple(e.name.capitalize() for e in ElementType)


class RuleSet(BaseModel):
    """Immutable bundle of battle constants.

    All arithmetic is integer.  ``hp`` is stored multiplied by
    ``scaling_factor`` so that truncating division keeps enough precision;
    effectiveness and the same-type bonus are expressed in tenths.
    """

    model_config = {"frozen": True}

    scaling_factor: int = 100_000_000
    level: int = 10
    move_powers: tuple[int, ...] = (40, 60, 80)

    effectiveness: tuple[tuple[int, ...], ...] = (
        # defender:  FIRE EARTH WATER
        (10, 5, 20),  # FIRE move
        (20, 10, 5),  # EARTH move
        (5, 20, 10),  # WATER move
    )
    """Indexed ``[move_type][defender_type]``."""

    effectiveness_scaling: int = 10
    stab_bonus: int = 15

    min_random_byte: int = 217
    max_random_byte: int = 255

    stat_floor: int = 10
    stat_cap: int = 50
    base_hp: int = 10

    @model_validator(mode="after")
    def _check_shape(self) -> RuleSet:
        n = len(self.move_powers)
        if n != len(ElementType):
            raise ValueError(
                f"Expected {len(ElementType)} move powers, got {n}"
            )
        if len(self.effectiveness) != n or any(len(row) != n for row in self.effectiveness):
            raise ValueError(f"effectiveness must be a {n}x{n} matrix")
        if not 0 <= self.level <= 100:
            raise ValueError(f"level must be within 0..100, got {self.level}")
        if not 0 < self.min_random_byte <= self.max_random_byte <= 255:
            raise ValueError("random byte range must sit inside 1..255")
        return self

    # -- derived quantities --------------------------------------------------

    @property
    def num_types(self) -> int:
        return len(ElementType)

    @property
    def num_moves(self) -> int:
        return len(self.move_powers)

    @property
    def random_byte_span(self) -> int:
        """Number of distinct values a round's random byte can take."""
        return self.max_random_byte - self.min_random_byte

    def move_power(self, move: int) -> int:
        return self.move_powers[move]

    def is_valid_move(self, move: int) -> bool:
        return 0 <= move < self.num_moves

    def format_hp(self, hp: int) -> str:
        """Render scaled hp as a two-decimal number."""
        return f"{hp / self.scaling_factor:.2f}"


DEFAULT_RULES = RuleSet()
