"""Domain data structures for cues, speaker groups, scores, and reports."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import NamedTuple, TypeAlias


class Cue(NamedTuple):
    """One timed caption unit; timing is carried but never interpreted."""

    text: str
    start_seconds: float = 0.0
    end_seconds: float = 0.0


class SkipReason(StrEnum):
    """Why the segmenter dropped a cue."""

    NO_DELIMITER = "no_delimiter"
    EMPTY_SPEAKER = "empty_speaker"


class SkippedCue(NamedTuple):
    """A cue that contributed to no speaker, kept for auditing."""

    index: int
    cue: Cue
    reason: SkipReason


UtteranceGroups: TypeAlias = dict[str, list[str]]


@dataclass(frozen=True)
class Segmentation:
    """Speaker groups in first-appearance order plus dropped cues."""

    groups: UtteranceGroups
    skipped: tuple[SkippedCue, ...] = ()


@dataclass(frozen=True, slots=True)
class WordLists:
    """The three indicator word lists scored for every speaker."""

    weasel: frozenset[str]
    hedge: frozenset[str]
    filler: frozenset[str]

    def items(self) -> tuple[tuple[str, frozenset[str]], ...]:
        """Returns ``(name, words)`` pairs in report column order."""
        return (
            ("weasel", self.weasel),
            ("hedge", self.hedge),
            ("filler", self.filler),
        )


@dataclass(frozen=True, slots=True)
class IndicatorScore:
    """Density of one indicator list within a speaker's text."""

    ratio: float
    catalog: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class Sentiment:
    """Document-level sentiment as reported by the analysis provider."""

    label: str
    score: float


@dataclass(frozen=True, slots=True)
class Keyword:
    """One ranked keyword with its relevance in ``[0, 1]``."""

    text: str
    relevance: float


@dataclass(frozen=True, slots=True)
class Concept:
    """One ranked concept with its relevance in ``[0, 1]``."""

    text: str
    relevance: float
    dbpedia_resource: str | None = None


@dataclass(frozen=True)
class SemanticResult:
    """Externally computed signals for one block of text."""

    sentiment: Sentiment
    emotions: dict[str, float] = field(default_factory=dict)
    keywords: tuple[Keyword, ...] = ()
    concepts: tuple[Concept, ...] = ()
    language: str | None = None


@dataclass(frozen=True)
class ReportRow:
    """Per-speaker report line."""

    speaker: str
    word_count: int
    weasel: IndicatorScore
    hedge: IndicatorScore
    filler: IndicatorScore
    sentiment: Sentiment
    emotions: tuple[tuple[str, float], ...]
    keywords: tuple[Keyword, ...]
    concepts: tuple[Concept, ...] = ()


@dataclass(frozen=True)
class ReportSummary:
    """Whole-transcript sentiment and ranked keywords."""

    sentiment: Sentiment
    keywords: tuple[Keyword, ...]


@dataclass(frozen=True)
class Report:
    """Full analysis output for one transcript."""

    rows: tuple[ReportRow, ...]
    summary: ReportSummary
    skipped_cues: tuple[SkippedCue, ...] = ()
    excluded_speakers: tuple[str, ...] = ()
