"""Generic filler values (words, pseudo-sentences, past timestamps)."""

from datetime import datetime, timedelta

from meshfixtures.rng import Rng

WORD_POOL = (
    "alpha",
    "beta",
    "gamma",
    "delta",
    "omega",
    "nova",
    "terra",
    "luna",
    "sol",
    "aqua",
    "zen",
    "ion",
    "neo",
    "flux",
    "quark",
)


def word(r: Rng) -> str:
    """One word from the fixed pool."""
    return r.pick(WORD_POOL)


def sentence(r: Rng, min_words: int = 3, max_words: int = 8) -> str:
    """Capitalized, period-terminated run of ``word()`` (not real language)."""
    count = r.randint(min_words, max_words)
    s = " ".join(word(r) for _ in range(count))
    return f"{s[:1].upper()}{s[1:]}."


def iso_past_date(r: Rng, now: datetime) -> str:
    """ISO-8601 UTC timestamp shortly before ``now`` (85% within ~5.5h)."""
    delta_ms = r.randint(10_000, 20_000_000 if r.chance(0.85) else 1_000_000_000)
    past = now - timedelta(milliseconds=delta_ms)
    return past.strftime("%Y-%m-%dT%H:%M:%S.") + f"{past.microsecond // 1000:03d}Z"


def epoch_ms(now: datetime) -> int:
    """Milliseconds since the Unix epoch for an aware datetime."""
    return int(now.timestamp() * 1000)
