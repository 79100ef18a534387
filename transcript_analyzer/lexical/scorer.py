"""
Lexical indicator scoring.

A speaker's text is scored against a word list by counting occurrences of each
listed word or phrase. The default ``substring`` mode is a plain,
case-sensitive substring count: short entries also match inside longer words
("um" in "umbrella"). ``word_boundary`` mode only counts whole-word matches and
changes results accordingly, so it is opt-in.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from enum import StrEnum

from transcript_analyzer.domain import IndicatorScore


class MatchMode(StrEnum):
    """How indicator words are matched in a text."""

    SUBSTRING = "substring"
    WORD_BOUNDARY = "word_boundary"


def count_words(text: str) -> int:
    """Counts whitespace-delimited words."""
    return len(text.split())


def count_occurrences(
    word: str, text: str, match_mode: MatchMode = MatchMode.SUBSTRING
) -> int:
    """Counts non-overlapping, case-sensitive occurrences of ``word`` in ``text``."""
    if not word:
        return 0
    if match_mode == MatchMode.WORD_BOUNDARY:
        return len(re.findall(rf"(?<!\w){re.escape(word)}(?!\w)", text))
    return text.count(word)


def score(
    words: Iterable[str],
    text: str,
    word_count: int,
    match_mode: MatchMode = MatchMode.SUBSTRING,
) -> IndicatorScore:
    """
    Scores the density of indicator words in a text.

    Arguments:
        words (Iterable[str]): Indicator words or phrases.
        text (str): Text to search.
        word_count (int): Number of words in ``text``; must be positive.
        match_mode (MatchMode, optional): Matching strategy.

    Returns:
        IndicatorScore: ``ratio`` is ``100 * total_matches / word_count``
            rounded to two decimals; ``catalog`` maps each matched word to its
            count, highest first.

    Raises:
        ValueError: If ``word_count`` is not positive.
    """
    if word_count <= 0:
        raise ValueError(f"word_count must be positive, got {word_count}.")

    counts: dict[str, int] = {}
    # Sorting keeps tie order stable for unordered inputs.
    for word in sorted(words):
        occurrences = count_occurrences(word, text, match_mode)
        if occurrences > 0:
            counts[word] = occurrences

    catalog = dict(sorted(counts.items(), key=lambda item: item[1], reverse=True))
    ratio = round(100 * sum(catalog.values()) / word_count, 2)
    return IndicatorScore(ratio=ratio, catalog=catalog)
