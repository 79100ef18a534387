import logging
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from transcript_analyzer.domain import (  # noqa: E402
    Cue,
    Keyword,
    SemanticResult,
    Sentiment,
    WordLists,
)
from transcript_analyzer.semantic.contracts import (  # noqa: E402
    AnalysisOptions,
    ExternalServiceFailure,
)


class FakeAnalyzer:
    """Records analysis calls and returns canned results."""

    def __init__(self, results=None, fail_on=None):
        self.calls: list[tuple[str, AnalysisOptions]] = []
        self.results = results or {}
        self.fail_on = fail_on

    def analyze(self, text: str, options: AnalysisOptions) -> SemanticResult:
        self.calls.append((text, options))
        if self.fail_on is not None and self.fail_on in text:
            raise ExternalServiceFailure("service unavailable", status_code=503)
        for marker, result in self.results.items():
            if marker in text:
                return result
        return SemanticResult(
            sentiment=Sentiment(label="neutral", score=0.0),
            emotions={"joy": 0.2, "sadness": 0.6, "anger": 0.1},
            keywords=(
                Keyword(text="roadmap", relevance=0.9),
                Keyword(text="budget", relevance=0.5),
                Keyword(text="coffee", relevance=0.3),
            ),
        )


def make_cues(*texts: str) -> list[Cue]:
    return [
        Cue(text=text, start_seconds=float(index), end_seconds=float(index) + 1.0)
        for index, text in enumerate(texts)
    ]


@pytest.fixture
def fake_analyzer() -> FakeAnalyzer:
    return FakeAnalyzer()


@pytest.fixture
def word_lists() -> WordLists:
    return WordLists(
        weasel=frozenset({"basically", "maybe", "sort of"}),
        hedge=frozenset({"i think", "perhaps"}),
        filler=frozenset({"um", "like"}),
    )


@pytest.fixture(autouse=True)
def _silence_halo(monkeypatch):
    """Replace Halo spinners with a no-op context manager for tests."""

    class _DummyHalo:
        def __init__(self, *args, **kwargs):
            self.text = kwargs.get("text")

        def __enter__(self):
            return self

        def __exit__(self, exc_type, exc, tb):
            return False

    monkeypatch.setattr("transcript_analyzer.__main__.Halo", _DummyHalo, raising=False)
    monkeypatch.setattr(
        "transcript_analyzer.utils.report_utils.Halo", _DummyHalo, raising=False
    )


@pytest.fixture
def caplog_info(caplog):
    caplog.set_level(logging.INFO)
    return caplog
