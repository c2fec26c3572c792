"""Tests for damage calculation and application."""

import pytest

from capymon.core.damage import attack, calculate_damage, type_effectiveness
from capymon.core.rules import DEFAULT_RULES, ElementType
from capymon.core.stats import Stats
from capymon.errors import PreconditionError

S = DEFAULT_RULES.scaling_factor

FIRE, EARTH, WATER = ElementType.FIRE, ElementType.EARTH, ElementType.WATER


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _make_stats(element=EARTH, **kwargs) -> Stats:
    defaults = dict(
        hp=40 * S, attack=30, defence=25, special_attack=30,
        special_defence=25, speed=30, level=10, types=[element],
    )
    defaults.update(kwargs)
    return Stats(**defaults)


# ---------------------------------------------------------------------------
# calculate_damage -- base formula
# ---------------------------------------------------------------------------

class TestCalculateDamageBase:
    def test_max_roll_neutral(self):
        """level_mod 6, ratio 1.2 S -> 6*40*1.2S/50 + 2S = 7.76 S."""
        attacker = _make_stats(EARTH)
        defender = _make_stats(FIRE)
        assert calculate_damage(attacker, defender, 0, 255) == 776_000_000

    def test_min_roll_truncates(self):
        """random factor S*217/255 = 85098039; 776000000*85098039/S = 660360782."""
        attacker = _make_stats(EARTH)
        defender = _make_stats(FIRE)
        assert calculate_damage(attacker, defender, 0, 217) == 660_360_782

    def test_ratio_truncates(self):
        """31/27: ratio 114814814, base 551111107 + 2S."""
        attacker = _make_stats(EARTH, attack=31)
        defender = _make_stats(FIRE, defence=27)
        assert calculate_damage(attacker, defender, 0, 255) == 751_111_107

    def test_level_zero(self):
        attacker = _make_stats(EARTH, level=0)
        defender = _make_stats(FIRE)
        assert calculate_damage(attacker, defender, 0, 255) == 392_000_000

    def test_move_power_scales_base(self):
        """Water (power 80) into Fire is 0.5x: (6*80*1.2S/50 + 2S) / 2."""
        attacker = _make_stats(EARTH)
        defender = _make_stats(FIRE)
        assert calculate_damage(attacker, defender, 2, 255) == 676_000_000


# ---------------------------------------------------------------------------
# calculate_damage -- type effectiveness and same-type bonus
# ---------------------------------------------------------------------------

class TestEffectiveness:
    def test_matrix_keyed_move_then_defender(self):
        assert type_effectiveness(0, WATER) == 20  # Fire beats Water
        assert type_effectiveness(2, FIRE) == 5
        assert type_effectiveness(2, EARTH) == 20  # Water beats Earth
        assert type_effectiveness(1, FIRE) == 20  # Earth beats Fire
        for element in ElementType:
            assert type_effectiveness(int(element), element) == 10

    def test_not_very_effective(self):
        attacker = _make_stats(EARTH)
        defender = _make_stats(EARTH)
        # Fire into Earth: 776000000 * 5 / 10
        assert calculate_damage(attacker, defender, 0, 255) == 388_000_000

    def test_super_effective_with_same_type_bonus(self):
        attacker = _make_stats(FIRE)
        defender = _make_stats(WATER)
        # 776000000 * 20 / 10 * 15 / 10
        assert calculate_damage(attacker, defender, 0, 255) == 2_328_000_000

    def test_same_type_bonus_follows_attacker_type(self):
        defender = _make_stats(FIRE)
        with_bonus = calculate_damage(_make_stats(FIRE), defender, 0, 255)
        without = calculate_damage(_make_stats(WATER), defender, 0, 255)
        assert with_bonus == without * 15 // 10

    def test_defender_type_does_not_grant_bonus(self):
        attacker = _make_stats(EARTH)
        defender = _make_stats(FIRE)
        assert calculate_damage(attacker, defender, 0, 255) == 776_000_000


# ---------------------------------------------------------------------------
# calculate_damage -- preconditions
# ---------------------------------------------------------------------------

class TestPreconditions:
    @pytest.mark.parametrize("byte", [0, 216, 256])
    def test_random_byte_out_of_range(self, byte):
        with pytest.raises(PreconditionError):
            calculate_damage(_make_stats(), _make_stats(), 0, byte)

    @pytest.mark.parametrize("byte", [217, 236, 255])
    def test_random_byte_in_range(self, byte):
        assert calculate_damage(_make_stats(), _make_stats(), 0, byte) > 0

    @pytest.mark.parametrize("move", [-1, 3])
    def test_unknown_move(self, move):
        with pytest.raises(PreconditionError):
            calculate_damage(_make_stats(), _make_stats(), move, 255)


# ---------------------------------------------------------------------------
# attack -- application
# ---------------------------------------------------------------------------

class TestAttack:
    def test_subtracts_from_defender(self):
        attacker = _make_stats(EARTH)
        defender = _make_stats(FIRE)
        damage = attack(attacker, defender, 0, 255)
        assert damage == 776_000_000
        assert defender.hp == 40 * S - 776_000_000
        assert attacker.hp == 40 * S

    def test_saturates_at_zero(self):
        attacker = _make_stats(EARTH)
        defender = _make_stats(FIRE, hp=S)
        damage = attack(attacker, defender, 0, 255)
        assert damage == 776_000_000
        assert defender.hp == 0

    def test_fainted_defender_stays_at_zero(self):
        attacker = _make_stats(EARTH)
        defender = _make_stats(FIRE, hp=0)
        attack(attacker, defender, 2, 217)
        assert defender.hp == 0

    def test_rejected_roll_leaves_hp(self):
        defender = _make_stats(FIRE)
        with pytest.raises(PreconditionError):
            attack(_make_stats(), defender, 0, 100)
        assert defender.hp == 40 * S
