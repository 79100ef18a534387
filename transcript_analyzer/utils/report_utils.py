"""
Report Utility Functions for the Transcript Analyzer tool.

This module renders a report as a terminal table and exports it as JSON.

Functions:
    - format_indicator: Formats an indicator ratio with its top words.
    - format_emotions: Formats ranked emotions, one per line.
    - format_keywords: Formats keywords with their relevance, one per line.
    - render_report: Prints the speaker table and the transcript summary.
    - report_to_dict: Converts a report into JSON-serializable data.
    - save_report_to_json: Saves a report to a JSON file.
"""

import json
import logging
from pathlib import Path
from typing import Any, List, Optional, TextIO

from colored import attr, fg
from halo import Halo

from transcript_analyzer.domain import IndicatorScore, Keyword, Report, ReportRow
from transcript_analyzer.utils.logger import get_logger
from transcript_analyzer.utils.magnitude import (
    category_for_percentage,
    format_magnitude,
    format_percentage,
    magnitude_category,
    to_percentage,
)

logger: logging.Logger = get_logger(__name__)

TABLE_HEADERS: List[str] = [
    "Speaker",
    "Word count",
    "Weasel",
    "Hedge",
    "Filler",
    "Sentiment",
    "Emotion",
    "Keywords",
]
MAX_CATALOG_WORDS = 3


def format_indicator(indicator: IndicatorScore, colorize: bool = True) -> str:
    """
    Formats an indicator ratio followed by its most frequent words.

    Arguments:
        indicator (IndicatorScore): Score to format.
        colorize (bool): Whether to color the ratio.

    Returns:
        str: ``ratio`` on the first line, then ``word (count)`` lines.
    """
    lines: List[str] = [format_percentage(indicator.ratio, colorize=colorize)]
    for word, count in list(indicator.catalog.items())[:MAX_CATALOG_WORDS]:
        lines.append(f"{word} ({count})")
    return "\n".join(lines)


def format_emotions(emotions, colorize: bool = True) -> str:
    """Formats ``(name, score)`` pairs as ``name: pct`` lines."""
    return "\n".join(
        f"{name}: {format_magnitude(score, colorize=colorize)}"
        for name, score in emotions
    )


def format_keywords(
    keywords, colorize: bool = True, bullet: str = ""
) -> str:
    """Formats keywords as ``text: relevance`` lines."""
    return "\n".join(
        f"{bullet}{keyword.text}: "
        f"{format_magnitude(keyword.relevance, colorize=colorize)}"
        for keyword in keywords
    )


def _row_cells(row: ReportRow, colorize: bool) -> List[str]:
    sentiment = (
        f"{row.sentiment.label}: "
        f"{format_magnitude(row.sentiment.score, colorize=colorize)}"
    )
    return [
        row.speaker,
        str(row.word_count),
        format_indicator(row.weasel, colorize=colorize),
        format_indicator(row.hedge, colorize=colorize),
        format_indicator(row.filler, colorize=colorize),
        sentiment,
        format_emotions(row.emotions, colorize=colorize),
        format_keywords(row.keywords, colorize=colorize),
    ]


def _separator(widths: List[int]) -> str:
    return "+" + "+".join("-" * (width + 2) for width in widths) + "+"


def build_table(report: Report, colorize: bool = True) -> str:
    """
    Lays out the speaker rows as a bordered table with multi-line cells.

    Column widths are measured on the uncolored text so escape codes do not
    affect alignment.
    """
    plain_rows: List[List[str]] = [
        _row_cells(row, colorize=False) for row in report.rows
    ]
    shown_rows: List[List[str]] = (
        [_row_cells(row, colorize=True) for row in report.rows]
        if colorize
        else plain_rows
    )

    widths: List[int] = [len(header) for header in TABLE_HEADERS]
    for cells in plain_rows:
        for index, cell in enumerate(cells):
            widths[index] = max(
                [widths[index]] + [len(line) for line in cell.splitlines()]
            )

    lines: List[str] = [_separator(widths)]
    lines.append(
        "| "
        + " | ".join(
            header.ljust(width) for header, width in zip(TABLE_HEADERS, widths)
        )
        + " |"
    )
    lines.append(_separator(widths))

    for plain_cells, shown_cells in zip(plain_rows, shown_rows):
        plain_lines = [cell.splitlines() or [""] for cell in plain_cells]
        shown_lines = [cell.splitlines() or [""] for cell in shown_cells]
        height: int = max(len(cell) for cell in plain_lines)
        for line_index in range(height):
            parts: List[str] = []
            for plain, shown, width in zip(plain_lines, shown_lines, widths):
                if line_index < len(plain):
                    padding = " " * (width - len(plain[line_index]))
                    parts.append(shown[line_index] + padding)
                else:
                    parts.append(" " * width)
            lines.append("| " + " | ".join(parts) + " |")
        lines.append(_separator(widths))

    return "\n".join(lines)


def render_report(
    report: Report,
    colorize: bool = True,
    stream: Optional[TextIO] = None,
) -> None:
    """
    Prints the speaker table followed by the transcript summary.

    Arguments:
        report (Report): Report to print.
        colorize (bool): Whether to color percentages by magnitude.
        stream (TextIO, optional): Output stream, stdout by default.
    """
    logger.info(msg=f"Printing report with {len(report.rows)} speaker rows.")

    def write(*parts: str) -> None:
        print(*parts, file=stream)

    note = "Speakers are listed in order of appearance"
    if colorize:
        note = f"{fg('yellow')}{note}{attr('reset')}"
    write(f"! [NOTE] {note}")
    write()
    if report.rows:
        write(build_table(report, colorize=colorize))
    else:
        write("No speaker reached the minimum word count.")
    write()

    summary = report.summary
    write(
        "Overall sentiment: "
        f"{summary.sentiment.label} "
        f"{format_magnitude(summary.sentiment.score, colorize=colorize)}"
    )
    write("Top keywords: ")
    write(format_keywords(summary.keywords, colorize=colorize, bullet=" * "))


def _percentage_entry(value_pct: float) -> dict:
    return {
        "percent": value_pct,
        "category": category_for_percentage(value_pct).value,
    }


def _magnitude_entry(value: float) -> dict:
    return {
        "value": value,
        "percent": to_percentage(value),
        "category": magnitude_category(value).value,
    }


def _keyword_entry(keyword: Keyword) -> dict:
    return {"text": keyword.text, "relevance": _magnitude_entry(keyword.relevance)}


def report_to_dict(report: Report) -> dict:
    """Converts a report into JSON-serializable data, categories included."""
    rows: List[dict] = []
    for row in report.rows:
        rows.append(
            {
                "speaker": row.speaker,
                "word_count": row.word_count,
                "indicators": {
                    name: {
                        "ratio": _percentage_entry(indicator.ratio),
                        "catalog": dict(indicator.catalog),
                    }
                    for name, indicator in (
                        ("weasel", row.weasel),
                        ("hedge", row.hedge),
                        ("filler", row.filler),
                    )
                },
                "sentiment": {
                    "label": row.sentiment.label,
                    "score": _magnitude_entry(row.sentiment.score),
                },
                "emotions": [
                    {"name": name, "score": _magnitude_entry(score)}
                    for name, score in row.emotions
                ],
                "keywords": [_keyword_entry(keyword) for keyword in row.keywords],
                "concepts": [
                    {
                        "text": concept.text,
                        "relevance": _magnitude_entry(concept.relevance),
                        "dbpedia_resource": concept.dbpedia_resource,
                    }
                    for concept in row.concepts
                ],
            }
        )

    return {
        "rows": rows,
        "summary": {
            "sentiment": {
                "label": report.summary.sentiment.label,
                "score": _magnitude_entry(report.summary.sentiment.score),
            },
            "keywords": [
                _keyword_entry(keyword) for keyword in report.summary.keywords
            ],
        },
        "excluded_speakers": list(report.excluded_speakers),
        "skipped_cues": [
            {
                "index": skipped.index,
                "reason": skipped.reason.value,
                "text": skipped.cue.text,
            }
            for skipped in report.skipped_cues
        ],
    }


def save_report_to_json(report: Report, file_name: str) -> str:
    """
    Saves the report to a JSON file.

    Arguments:
        report (Report): The report to save.
        file_name (str): Destination path; parent folders are created.

    Returns:
        str: The path to the saved JSON file.
    """
    logger.info(msg="Starting to save report to JSON.")
    path = Path(file_name)
    path.parent.mkdir(parents=True, exist_ok=True)
    data: Any = report_to_dict(report)

    with Halo(
        text=f"Saving report to {path}",
        spinner="dots",
        text_color="green",
    ):
        with path.open(mode="w", encoding="utf-8") as file:
            json.dump(data, file, indent=2, ensure_ascii=False)

    logger.info(msg=f"Report successfully saved to {path}")
    return str(path)
