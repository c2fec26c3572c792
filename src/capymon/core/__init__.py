"""Core battle primitives: rules, seed derivation, stats, damage, players."""

from capymon.core.damage import attack, calculate_damage, type_effectiveness
from capymon.core.entities import Commitment, Committed, NoCommitment, Player
from capymon.core.rng import GameRNG, arena_seed, blake2b256, derive
from capymon.core.rules import DEFAULT_RULES, MOVE_NAMES, ElementType, RuleSet
from capymon.core.stats import Stats, generate_stats, smooth

__all__ = [
    # rules
    "RuleSet",
    "DEFAULT_RULES",
    "ElementType",
    "MOVE_NAMES",
    # rng
    "GameRNG",
    "blake2b256",
    "derive",
    "arena_seed",
    # stats
    "Stats",
    "smooth",
    "generate_stats",
    # damage
    "calculate_damage",
    "attack",
    "type_effectiveness",
    # entities
    "Player",
    "Commitment",
    "NoCommitment",
    "Committed",
]
