"""Contracts for the external semantic analysis boundary."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol, TypeAlias

from transcript_analyzer.config import ReportConfig
from transcript_analyzer.domain import SemanticResult


class ExternalServiceFailure(RuntimeError):
    """Raised when semantic analysis fails or returns an unusable response."""

    def __init__(
        self,
        message: str,
        *,
        scope: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.scope = scope
        self.status_code = status_code


@dataclass(frozen=True, slots=True)
class AnalysisOptions:
    """Which facets one analysis request computes, and their limits."""

    sentiment: bool = True
    emotion: bool = False
    keywords_limit: int | None = None
    concepts_limit: int | None = None

    def to_features(self) -> dict[str, Any]:
        """Builds the request ``features`` payload."""
        features: dict[str, Any] = {}
        if self.sentiment:
            features["sentiment"] = {"document": True}
        if self.emotion:
            features["emotion"] = {"document": True}
        if self.concepts_limit:
            features["concepts"] = {"limit": self.concepts_limit}
        if self.keywords_limit:
            features["keywords"] = {
                "sentiment": False,
                "emotion": False,
                "limit": self.keywords_limit,
            }
        return features


class SemanticAnalyzer(Protocol):
    """Capability boundary for sentiment, emotion, and keyword extraction."""

    def analyze(self, text: str, options: AnalysisOptions) -> SemanticResult:
        """Analyzes one block of text."""
        ...


AnalyzeCallable: TypeAlias = Callable[[str, AnalysisOptions], SemanticResult]


def speaker_options(config: ReportConfig) -> AnalysisOptions:
    """Options for one per-speaker request."""
    return AnalysisOptions(
        sentiment=True,
        emotion=True,
        keywords_limit=config.speaker_keyword_limit,
        concepts_limit=config.speaker_concept_limit,
    )


def summary_options(config: ReportConfig) -> AnalysisOptions:
    """Options for the whole-transcript request."""
    return AnalysisOptions(
        sentiment=True,
        emotion=False,
        keywords_limit=config.summary_keyword_limit,
        concepts_limit=None,
    )
