"""Tests for seed derivation and GameRNG."""

import hashlib

import pytest

from capymon.core.rng import GameRNG, arena_seed, blake2b256, derive, round_byte


def _blake(data: bytes) -> bytes:
    return hashlib.blake2b(data, digest_size=32).digest()


class TestDerive:
    def test_appends_tag_then_hashes(self):
        seed = b"parent-seed"
        assert derive(seed, 0) == _blake(seed + b"\x00")
        assert derive(seed, 2) == _blake(seed + b"\x02")

    def test_int_and_byte_tags_agree(self):
        assert derive(b"abc", 1) == derive(b"abc", b"\x01")

    def test_multi_byte_tag(self):
        assert derive(b"abc", b"\x02\x00\x01") == _blake(b"abc\x02\x00\x01")

    def test_deterministic(self):
        assert derive(b"same", 7) == derive(b"same", 7)

    def test_tags_give_different_children(self):
        assert derive(b"seed", 0) != derive(b"seed", 1)

    def test_digest_is_32_bytes(self):
        assert len(derive(b"", 0)) == 32

    @pytest.mark.parametrize("tag", [-1, 256])
    def test_int_tag_out_of_byte_range(self, tag):
        with pytest.raises(ValueError):
            derive(b"seed", tag)


class TestArenaSeed:
    def test_hashes_arena_id(self):
        assert arena_seed("arena-1") == _blake(b"arena-1")
        assert blake2b256(b"arena-1") == arena_seed("arena-1")

    def test_distinct_ids_distinct_seeds(self):
        assert arena_seed("a") != arena_seed("b")


class TestRoundByte:
    def test_indexes_by_round(self):
        seed = bytes(range(32))
        assert round_byte(seed, 0) == 0
        assert round_byte(seed, 5) == 5

    def test_wraps_after_digest_length(self):
        seed = bytes(range(32))
        assert round_byte(seed, 33) == 1


class TestGameRNG:
    def test_same_seed_same_sequence(self):
        a, b = GameRNG(42), GameRNG(42)
        assert [a.random_int(0, 100) for _ in range(10)] == [b.random_int(0, 100) for _ in range(10)]

    def test_fork_is_deterministic(self):
        assert GameRNG(1).fork("salts").seed == GameRNG(1).fork("salts").seed

    def test_fork_names_are_independent(self):
        rng = GameRNG(1)
        assert rng.fork("a").seed != rng.fork("b").seed

    def test_random_bytes(self):
        rng = GameRNG(3)
        data = rng.random_bytes(16)
        assert isinstance(data, bytes)
        assert len(data) == 16
        assert GameRNG(3).random_bytes(16) == data

    def test_repr(self):
        assert repr(GameRNG(9)) == "GameRNG(seed=9)"
