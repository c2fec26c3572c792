"""Tests for stat generation."""

import pytest
from pydantic import ValidationError

from capymon.core.rules import DEFAULT_RULES, ElementType
from capymon.core.stats import Stats, generate_stats, smooth

S = DEFAULT_RULES.scaling_factor


class TestSmooth:
    @pytest.mark.parametrize("byte", range(256))
    def test_always_within_bounds(self, byte):
        assert 10 <= smooth(byte) <= 50

    @pytest.mark.parametrize(
        "byte, expected",
        [(0, 25), (1, 25), (2, 26), (49, 49), (50, 25), (99, 49), (100, 25), (255, 27)],
    )
    def test_known_values(self, byte, expected):
        assert smooth(byte) == expected


class TestGenerateStats:
    @pytest.mark.parametrize("byte", range(256))
    def test_bounds_hold_for_every_byte(self, byte):
        stats = generate_stats(bytes([byte] * 7))
        assert stats.hp >= 10 * S
        for value in (
            stats.attack,
            stats.defence,
            stats.special_attack,
            stats.special_defence,
            stats.speed,
        ):
            assert 10 <= value <= 50
        assert stats.element == ElementType(byte % 3)

    def test_byte_layout(self):
        stats = generate_stats(bytes([0, 49, 50, 99, 255, 7, 5]))
        assert stats.hp == 35 * S  # (10 + 25) * S
        assert stats.attack == 49
        assert stats.defence == 25
        assert stats.special_attack == 49
        assert stats.special_defence == 27
        assert stats.speed == 28
        assert stats.types == [ElementType.WATER]

    def test_level_is_rule_constant(self):
        assert generate_stats(bytes(32)).level == DEFAULT_RULES.level

    def test_extra_bytes_ignored(self):
        assert generate_stats(bytes(7)) == generate_stats(bytes(7) + b"\xff" * 25)

    def test_short_seed_rejected(self):
        with pytest.raises(ValueError):
            generate_stats(bytes(6))


class TestStatsModel:
    def _make_stats(self, **kwargs) -> Stats:
        defaults = dict(
            hp=40 * S, attack=30, defence=25, special_attack=30,
            special_defence=25, speed=30, level=10, types=[ElementType.FIRE],
        )
        defaults.update(kwargs)
        return Stats(**defaults)

    def test_take_damage_saturates(self):
        stats = self._make_stats(hp=5)
        assert stats.take_damage(100) == 5
        assert stats.hp == 0
        assert stats.is_fainted

    def test_take_damage_partial(self):
        stats = self._make_stats(hp=100)
        assert stats.take_damage(30) == 30
        assert stats.hp == 70

    def test_non_positive_damage_is_ignored(self):
        stats = self._make_stats(hp=100)
        assert stats.take_damage(0) == 0
        assert stats.take_damage(-5) == 0
        assert stats.hp == 100

    def test_exactly_one_type(self):
        with pytest.raises(ValidationError):
            self._make_stats(types=[ElementType.FIRE, ElementType.WATER])
        with pytest.raises(ValidationError):
            self._make_stats(types=[])

    def test_negative_hp_rejected(self):
        with pytest.raises(ValidationError):
            self._make_stats(hp=-1)
