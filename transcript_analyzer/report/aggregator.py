"""
Report aggregation for the Transcript Analyzer tool.

The aggregator segments cues by speaker, scores every speaker with enough
words against the indicator word lists, merges in the semantic analysis for
that speaker, and finishes with one analysis of the whole transcript.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

from transcript_analyzer.config import ReportConfig
from transcript_analyzer.domain import (
    Cue,
    IndicatorScore,
    Report,
    ReportRow,
    ReportSummary,
    SemanticResult,
    WordLists,
)
from transcript_analyzer.lexical.scorer import MatchMode, count_words, score
from transcript_analyzer.semantic.contracts import (
    AnalysisOptions,
    AnalyzeCallable,
    ExternalServiceFailure,
    SemanticAnalyzer,
    speaker_options,
    summary_options,
)
from transcript_analyzer.transcript.segmenter import segment
from transcript_analyzer.utils.logger import get_logger

logger: logging.Logger = get_logger(__name__)

SUMMARY_SCOPE = "summary"


@dataclass(frozen=True)
class _SpeakerText:
    speaker: str
    text: str
    word_count: int


@dataclass(frozen=True)
class ReportSettings:
    """Policy knobs for one aggregator instance."""

    min_word_count: int = 10
    keyword_relevance_threshold: float = 0.5
    speaker_options: AnalysisOptions = field(
        default_factory=lambda: speaker_options(ReportConfig())
    )
    summary_options: AnalysisOptions = field(
        default_factory=lambda: summary_options(ReportConfig())
    )
    match_mode: MatchMode = MatchMode.SUBSTRING
    max_workers: int = 1

    @classmethod
    def from_config(
        cls, config: ReportConfig, match_mode: MatchMode = MatchMode.SUBSTRING
    ) -> ReportSettings:
        return cls(
            min_word_count=config.min_word_count,
            keyword_relevance_threshold=config.keyword_relevance_threshold,
            speaker_options=speaker_options(config),
            summary_options=summary_options(config),
            match_mode=match_mode,
            max_workers=config.max_workers,
        )


class ReportAggregator:
    """Builds speaker rows and the transcript summary from cues."""

    def __init__(
        self,
        word_lists: WordLists,
        analyzer: SemanticAnalyzer,
        settings: ReportSettings | None = None,
    ) -> None:
        self.word_lists = word_lists
        self.analyzer = analyzer
        self.settings = settings or ReportSettings()

    def build_report(self, cues: Iterable[Cue]) -> Report:
        """
        Builds the full report for a transcript.

        Arguments:
            cues (Iterable[Cue]): Caption cues in transcript order.

        Returns:
            Report: Rows in first-appearance order and the summary.

        Raises:
            ExternalServiceFailure: If any semantic analysis call fails. The
                ``scope`` names the speaker, or ``"summary"`` for the final
                whole-transcript call. No partial report is produced.
        """
        segmentation = segment(cues)

        transcript_parts: list[str] = []
        qualifying: list[_SpeakerText] = []
        excluded: list[str] = []
        for speaker, utterances in segmentation.groups.items():
            row_text = "\n".join(utterances)
            # Short speakers still count towards the whole-transcript summary.
            transcript_parts.append(row_text + "\n")
            word_count = count_words(row_text)
            if word_count < self.settings.min_word_count:
                logger.info(
                    "Skipping speaker %r: %s words is below the %s-word minimum.",
                    speaker,
                    word_count,
                    self.settings.min_word_count,
                )
                excluded.append(speaker)
                continue
            qualifying.append(_SpeakerText(speaker, row_text, word_count))

        analyses = self._analyze_speakers(qualifying)
        rows = tuple(
            self._build_row(item, analysis)
            for item, analysis in zip(qualifying, analyses, strict=True)
        )

        summary_result = self._analyze(
            "".join(transcript_parts),
            self.settings.summary_options,
            SUMMARY_SCOPE,
            is_summary=True,
        )
        summary = ReportSummary(
            sentiment=summary_result.sentiment,
            keywords=summary_result.keywords,
        )
        logger.info(
            "Report built with %s speaker rows (%s speakers excluded).",
            len(rows),
            len(excluded),
        )
        return Report(
            rows=rows,
            summary=summary,
            skipped_cues=segmentation.skipped,
            excluded_speakers=tuple(excluded),
        )

    def _analyze_speakers(
        self, speakers: Sequence[_SpeakerText]
    ) -> list[SemanticResult]:
        """Runs per-speaker analyses, keeping input order."""
        options = self.settings.speaker_options
        if self.settings.max_workers <= 1 or len(speakers) <= 1:
            return [
                self._analyze(item.text, options, item.speaker) for item in speakers
            ]

        with ThreadPoolExecutor(max_workers=self.settings.max_workers) as executor:
            futures = [
                executor.submit(self._analyze, item.text, options, item.speaker)
                for item in speakers
            ]
            try:
                return [future.result() for future in futures]
            except BaseException:
                for future in futures:
                    future.cancel()
                raise

    def _analyze(
        self,
        text: str,
        options: AnalysisOptions,
        scope: str,
        is_summary: bool = False,
    ) -> SemanticResult:
        try:
            return self.analyzer.analyze(text, options)
        except ExternalServiceFailure as err:
            target = "the transcript summary" if is_summary else f"speaker {scope!r}"
            raise ExternalServiceFailure(
                f"Semantic analysis failed for {target}: {err}",
                scope=scope,
                status_code=err.status_code,
            ) from err

    def _build_row(self, item: _SpeakerText, analysis: SemanticResult) -> ReportRow:
        scores: dict[str, IndicatorScore] = {
            name: score(words, item.text, item.word_count, self.settings.match_mode)
            for name, words in self.word_lists.items()
        }
        emotions = tuple(
            sorted(analysis.emotions.items(), key=lambda entry: entry[1], reverse=True)
        )
        keywords = tuple(
            keyword
            for keyword in analysis.keywords
            if keyword.relevance > self.settings.keyword_relevance_threshold
        )
        return ReportRow(
            speaker=item.speaker,
            word_count=item.word_count,
            weasel=scores["weasel"],
            hedge=scores["hedge"],
            filler=scores["filler"],
            sentiment=analysis.sentiment,
            emotions=emotions,
            keywords=keywords,
            concepts=analysis.concepts,
        )


class _CallableAnalyzer:
    """Adapts a plain ``analyze(text, options)`` function to the protocol."""

    def __init__(self, analyze_fn: AnalyzeCallable) -> None:
        self._analyze_fn = analyze_fn

    def analyze(self, text: str, options: AnalysisOptions) -> SemanticResult:
        return self._analyze_fn(text, options)


def build_report(
    cues: Iterable[Cue],
    word_lists: WordLists,
    analyze_fn: AnalyzeCallable,
    settings: ReportSettings | None = None,
) -> tuple[tuple[ReportRow, ...], ReportSummary]:
    """Builds ``(rows, summary)`` with a plain analysis function."""
    report = ReportAggregator(
        word_lists, _CallableAnalyzer(analyze_fn), settings
    ).build_report(cues)
    return report.rows, report.summary
