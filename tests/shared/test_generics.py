"""Tests for generic filler values."""

from datetime import UTC, datetime, timedelta

from meshfixtures.rng import Rng
from meshfixtures.shared.generics import WORD_POOL, epoch_ms, iso_past_date, sentence, word

NOW = datetime(2025, 1, 1, 0, 0, 1, tzinfo=UTC)


class TestWords:
    def test_word_from_pool(self):
        r = Rng(1)
        assert all(word(r) in WORD_POOL for _ in range(100))

    def test_sentence_shape(self):
        r = Rng(2)
        for _ in range(100):
            s = sentence(r)
            assert s.endswith(".")
            assert s[0].isupper()
            words = s[:-1].lower().split(" ")
            assert 3 <= len(words) <= 8
            assert all(w in WORD_POOL for w in words)

    def test_sentence_custom_bounds(self):
        s = sentence(Rng(3), 1, 1)
        assert s[:-1].lower() in WORD_POOL


class TestDates:
    def test_iso_past_date_format_and_range(self):
        r = Rng(4)
        for _ in range(100):
            value = iso_past_date(r, NOW)
            assert value.endswith("Z")
            parsed = datetime.strptime(value, "%Y-%m-%dT%H:%M:%S.%fZ").replace(tzinfo=UTC)
            assert NOW - timedelta(milliseconds=1_000_000_000) <= parsed <= NOW - timedelta(milliseconds=10_000)
            assert len(value.split(".")[1]) == 4

    def test_epoch_ms(self):
        assert epoch_ms(NOW) == 1735689601000
