"""Punctuation-aware display timing."""

from rsvp_reader.core.tokenizer import SENTENCE_END_CHARS

SENTENCE_PAUSE = 2.0
CLAUSE_PAUSE = 1.5
DASH_PAUSE = 1.2
NO_PAUSE = 1.0

CLAUSE_CHARS = (",", ":", ";")
DASH_CHARS = frozenset("-–—()")


def pause_multiplier(text: str) -> float:
    """Return the delay multiplier for a token's punctuation."""
    if text.endswith(SENTENCE_END_CHARS):
        return SENTENCE_PAUSE
    if text.endswith(CLAUSE_CHARS):
        return CLAUSE_PAUSE
    if any(ch in DASH_CHARS for ch in text):
        return DASH_PAUSE
    return NO_PAUSE


def base_interval_ms(words_per_minute: int) -> float:
    return 60000 / words_per_minute


def token_delay_ms(text: str, words_per_minute: int) -> float:
    """Milliseconds a token stays on screen at the given speed."""
    return base_interval_ms(words_per_minute) * pause_multiplier(text)


def pause_totals(texts: list[str]) -> list[float]:
    """Suffix sums of pause multipliers.

    Entry ``i`` is the summed multiplier of ``texts[i:]``; the list has one
    more entry than ``texts`` and ends with 0.
    """
    totals = [0.0] * (len(texts) + 1)
    for i in range(len(texts) - 1, -1, -1):
        totals[i] = totals[i + 1] + pause_multiplier(texts[i])
    return totals
