"""Tests for the seeded random stream."""

import pytest

from meshfixtures.errors import EmptyInputError, FixtureError
from meshfixtures.rng import Rng


class TestDeterminism:
    def test_same_seed_same_sequence(self):
        a, b = Rng(42), Rng(42)
        assert [a.next() for _ in range(100)] == [b.next() for _ in range(100)]

    def test_different_seeds_diverge(self):
        a, b = Rng(1), Rng(2)
        assert [a.next() for _ in range(10)] != [b.next() for _ in range(10)]

    def test_instances_do_not_share_state(self):
        a, b = Rng(7), Rng(7)
        a.next()
        a.next()
        fresh = Rng(7)
        assert b.next() == fresh.next()

    def test_seed_is_truncated_to_32_bits(self):
        a, b = Rng(1), Rng(1 + 2**32)
        assert a.hex(16) == b.hex(16)

    def test_default_seed_from_clock(self):
        r = Rng()
        assert 0 <= r.next() < 1

    def test_known_hex_for_seed_1(self):
        assert Rng(1).hex(16) == "a08ff49b6f772632"


class TestRanges:
    def test_next_in_unit_interval(self):
        r = Rng(3)
        for _ in range(1000):
            assert 0 <= r.next() < 1

    def test_randint_inclusive_bounds(self):
        r = Rng(5)
        seen = {r.randint(1, 3) for _ in range(500)}
        assert seen == {1, 2, 3}

    def test_randint_single_value(self):
        assert Rng(5).randint(9, 9) == 9

    def test_uniform_range(self):
        r = Rng(11)
        for _ in range(500):
            assert 2.5 <= r.uniform(2.5, 3.0) < 3.0

    def test_chance_extremes(self):
        r = Rng(13)
        assert not any(r.chance(0) for _ in range(100))
        assert all(r.chance(1) for _ in range(100))

    def test_hex_length_and_alphabet(self):
        h = Rng(17).hex(32)
        assert len(h) == 32
        assert set(h) <= set("0123456789abcdef")

    def test_big_int_bounds(self):
        r = Rng(19)
        for _ in range(100):
            assert 0 <= r.big_int() < 16**16


class TestPick:
    def test_pick_returns_member(self):
        r = Rng(23)
        pool = ("a", "b", "c")
        assert all(r.pick(pool) in pool for _ in range(50))

    def test_pick_empty_raises(self):
        with pytest.raises(EmptyInputError, match="empty"):
            Rng(1).pick([])

    def test_empty_input_is_a_value_error(self):
        with pytest.raises(ValueError):
            Rng(1).pick(())
        with pytest.raises(FixtureError):
            Rng(1).pick("")
