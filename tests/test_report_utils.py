import io
import json

from colored import fg

from transcript_analyzer.domain import (
    Concept,
    Cue,
    IndicatorScore,
    Keyword,
    Report,
    ReportRow,
    ReportSummary,
    Sentiment,
    SkippedCue,
    SkipReason,
)
from transcript_analyzer.utils.report_utils import (
    TABLE_HEADERS,
    build_table,
    format_emotions,
    format_indicator,
    format_keywords,
    render_report,
    report_to_dict,
    save_report_to_json,
)


def _report(rows=None) -> Report:
    row = ReportRow(
        speaker="Dana",
        word_count=12,
        weasel=IndicatorScore(ratio=16.67, catalog={"basically": 2}),
        hedge=IndicatorScore(ratio=0.0),
        filler=IndicatorScore(ratio=25.0, catalog={"um": 2, "like": 1}),
        sentiment=Sentiment(label="positive", score=0.82),
        emotions=(("joy", 0.7), ("sadness", 0.1)),
        keywords=(Keyword(text="release plan", relevance=0.93),),
        concepts=(Concept(text="Software release", relevance=0.88),),
    )
    return Report(
        rows=(row,) if rows is None else rows,
        summary=ReportSummary(
            sentiment=Sentiment(label="neutral", score=0.12),
            keywords=(
                Keyword(text="release plan", relevance=0.93),
                Keyword(text="friday", relevance=0.41),
            ),
        ),
        skipped_cues=(
            SkippedCue(
                index=0, cue=Cue(text="[music]"), reason=SkipReason.NO_DELIMITER
            ),
        ),
        excluded_speakers=("Alice",),
    )


def test_format_indicator_lists_ratio_then_words() -> None:
    text = format_indicator(
        IndicatorScore(ratio=25.0, catalog={"um": 2, "like": 1}), colorize=False
    )

    assert text.splitlines() == ["25%", "um (2)", "like (1)"]


def test_format_indicator_colors_ratio_by_category() -> None:
    assert fg("yellow") in format_indicator(IndicatorScore(ratio=25.0))
    assert fg("red") in format_indicator(IndicatorScore(ratio=16.67))


def test_format_emotions_and_keywords() -> None:
    assert format_emotions((("joy", 0.7), ("fear", 0.05)), colorize=False) == (
        "joy: 70%\nfear: 5%"
    )
    assert format_keywords(
        (Keyword(text="budget", relevance=0.555),), colorize=False, bullet=" * "
    ) == " * budget: 55.5%"


def test_build_table_aligns_multiline_cells() -> None:
    table = build_table(_report(), colorize=False)
    lines = table.splitlines()

    assert all(header in lines[1] for header in TABLE_HEADERS)
    assert len({len(line) for line in lines}) == 1
    assert any("Dana" in line and "16.67%" in line for line in lines)
    assert any("basically (2)" in line for line in lines)
    assert any("positive: 82%" in line for line in lines)


def test_render_report_prints_table_and_summary() -> None:
    stream = io.StringIO()

    render_report(_report(), colorize=False, stream=stream)

    output = stream.getvalue()
    assert "! [NOTE] Speakers are listed in order of appearance" in output
    assert "Overall sentiment: neutral 12%" in output
    assert "Top keywords: " in output
    assert " * release plan: 93%" in output
    assert " * friday: 41%" in output


def test_render_report_without_rows() -> None:
    stream = io.StringIO()

    render_report(_report(rows=()), colorize=False, stream=stream)

    assert "No speaker reached the minimum word count." in stream.getvalue()


def test_render_report_colors_summary() -> None:
    stream = io.StringIO()

    render_report(_report(), colorize=True, stream=stream)

    assert fg("green") in stream.getvalue()


def test_report_to_dict_includes_categories() -> None:
    data = report_to_dict(_report())

    row = data["rows"][0]
    assert row["speaker"] == "Dana"
    assert row["indicators"]["weasel"]["ratio"] == {"percent": 16.67, "category": "red"}
    assert row["indicators"]["filler"]["catalog"] == {"um": 2, "like": 1}
    assert row["sentiment"]["score"] == {
        "value": 0.82,
        "percent": 82.0,
        "category": "green",
    }
    assert [emotion["name"] for emotion in row["emotions"]] == ["joy", "sadness"]
    assert row["concepts"][0]["dbpedia_resource"] is None
    assert data["summary"]["keywords"][1]["relevance"]["category"] == "yellow"
    assert data["excluded_speakers"] == ["Alice"]
    assert data["skipped_cues"] == [
        {"index": 0, "reason": "no_delimiter", "text": "[music]"}
    ]


def test_save_report_to_json_creates_parent_folders(tmp_path) -> None:
    destination = tmp_path / "reports" / "meeting.json"

    saved = save_report_to_json(_report(), str(destination))

    assert saved == str(destination)
    assert json.loads(destination.read_text(encoding="utf-8")) == report_to_dict(
        _report()
    )
