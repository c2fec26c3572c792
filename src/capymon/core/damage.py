"""Damage calculation and application.

Pipeline (integer arithmetic; order matters because every division
truncates)::

    level_mod    = (2 * level * 1 / 5) + 2
    atk_def      = (S * attack) / defence
    base         = (level_mod * power * atk_def / 50) + 2 * S
    random_factor = (S * random_byte) / 255
    raw          = base * random_factor / S
    raw          = raw * effectiveness[move_type][defender_type] / 10
    raw          = raw * 15 / 10          (only if move_type == attacker type)

where ``S`` is the hp scaling factor.  The result is subtracted from the
defender's hp, saturating at zero.
"""

from __future__ import annotations

from capymon.core.rules import DEFAULT_RULES, ElementType, RuleSet
from capymon.core.stats import Stats
from capymon.errors import PreconditionError


def move_type(move: int) -> ElementType:
    return ElementType(move)


def type_effectiveness(
    move: int, defender_type: ElementType, rules: RuleSet = DEFAULT_RULES
) -> int:
    """Effectiveness in tenths for *move* hitting *defender_type*."""
    return rules.effectiveness[move_type(move)][defender_type]


def calculate_damage(
    attacker: Stats,
    defender: Stats,
    move: int,
    random_byte: int,
    rules: RuleSet = DEFAULT_RULES,
) -> int:
    """Compute the damage *attacker* deals to *defender* with *move*.

    Raises
    ------
    PreconditionError
        If *random_byte* lies outside the roll range or *move* is unknown.
    """
    if not rules.min_random_byte <= random_byte <= rules.max_random_byte:
        raise PreconditionError(
            f"random byte must be within [{rules.min_random_byte}, "
            f"{rules.max_random_byte}], got {random_byte}"
        )
    if not rules.is_valid_move(move):
        raise PreconditionError(f"Unknown move {move}")

    scale = rules.scaling_factor

    level_mod = (2 * attacker.level * 1 // 5) + 2
    atk_def_ratio = (scale * attacker.attack) // defender.defence
    base = (level_mod * rules.move_power(move) * atk_def_ratio // 50) + 2 * scale
    random_factor = (scale * random_byte) // 255
    raw = base * random_factor // scale

    raw = raw * type_effectiveness(move, defender.element, rules) // rules.effectiveness_scaling

    # Same-type bonus
    if move_type(move) == attacker.element:
        raw = raw * rules.stab_bonus // rules.effectiveness_scaling

    return raw


def attack(
    attacker: Stats,
    defender: Stats,
    move: int,
    random_byte: int,
    rules: RuleSet = DEFAULT_RULES,
) -> int:
    """Deal *move* from *attacker* to *defender*, mutating the defender's hp.

    Returns the computed damage (which may exceed the hp actually lost).
    """
    damage = calculate_damage(attacker, defender, move, random_byte, rules)
    defender.take_damage(damage)
    return damage
