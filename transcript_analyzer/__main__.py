"""
Transcript Analyzer Tool

This module serves as the entry point for the Transcript Analyzer tool. It
reads a speaker-labeled caption file, scores every speaker for weasel, hedge,
and filler words, adds sentiment, emotion, and keyword analysis from the
Watson Natural Language Understanding service, and prints the report.

Usage:
    transcript-analyzer meeting.vtt --api-key <key>
    python -m transcript_analyzer meeting.vtt --save-report report.json
"""

import argparse
import logging
import sys
import time
from dataclasses import replace

from dotenv import load_dotenv
from halo import Halo

from transcript_analyzer.config import AppConfig, reload_settings
from transcript_analyzer.domain import Report
from transcript_analyzer.lexical import MatchMode, load_word_lists
from transcript_analyzer.report import ReportAggregator, ReportSettings
from transcript_analyzer.semantic import (
    ExternalServiceFailure,
    ResponseCache,
    WatsonAnalyzer,
)
from transcript_analyzer.transcript import InvalidInputFormatError, read_captions
from transcript_analyzer.utils import configure_logging, get_logger
from transcript_analyzer.utils.report_utils import render_report, save_report_to_json

logger: logging.Logger = get_logger("transcript_analyzer")


def _build_parser() -> argparse.ArgumentParser:
    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        prog="transcript-analyzer",
        description="Speaker-level lexical and semantic transcript analysis",
    )
    parser.add_argument(
        "file_path",
        type=str,
        help="Path to the .vtt (or .srt) caption file",
    )
    parser.add_argument(
        "--api-key",
        type=str,
        help="Watson NLU API key (defaults to NLU_API_KEY)",
    )
    parser.add_argument(
        "--save-report",
        type=str,
        help="Also save the report as JSON to this path",
    )
    parser.add_argument(
        "--no-cache",
        action="store_true",
        help="Disable the on-disk response cache",
    )
    parser.add_argument(
        "--workers",
        type=int,
        help="Number of concurrent per-speaker analysis requests",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Print the report without colors",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        help="Logging level (overrides LOG_LEVEL)",
    )
    return parser


def _build_analyzer(
    settings: AppConfig, api_key: str, use_cache: bool
) -> WatsonAnalyzer:
    cache: ResponseCache | None = None
    if use_cache and settings.cache.enabled:
        cache = ResponseCache(settings.cache.folder, settings.cache.ttl_seconds)
    return WatsonAnalyzer(replace(settings.nlu, api_key=api_key), cache=cache)


def run_analysis(args: argparse.Namespace, settings: AppConfig) -> Report:
    """Reads the captions and builds the report for parsed CLI arguments."""
    cues = read_captions(args.file_path)
    word_lists = load_word_lists(settings.lexical.word_list_folder)
    analyzer = _build_analyzer(settings, args.api_key, use_cache=not args.no_cache)

    report_settings = ReportSettings.from_config(
        settings.report, match_mode=MatchMode(settings.lexical.match_mode)
    )
    if args.workers:
        report_settings = replace(report_settings, max_workers=max(1, args.workers))

    aggregator = ReportAggregator(word_lists, analyzer, report_settings)
    with Halo(text="Analyzing transcript...", spinner="dots", text_color="green"):
        return aggregator.build_report(cues)


def main() -> None:
    """
    Main function to handle the command line interface logic.
    """
    load_dotenv()
    args: argparse.Namespace = _build_parser().parse_args()
    configure_logging(args.log_level)
    try:
        settings: AppConfig = reload_settings()
    except ValueError as err:
        logger.error(msg=f"Invalid configuration: {err}")
        sys.exit(1)

    args.api_key = args.api_key or settings.nlu.api_key
    if not args.api_key:
        logger.error(msg="No API key provided. Use --api-key or set NLU_API_KEY.")
        sys.exit(1)

    logger.info(msg="Starting transcript analysis...")
    start_time: float = time.time()
    try:
        report: Report = run_analysis(args, settings)
    except (InvalidInputFormatError, FileNotFoundError) as err:
        logger.error(msg=str(err))
        sys.exit(1)
    except ExternalServiceFailure as err:
        logger.error(msg=f"Analysis aborted: {err}")
        sys.exit(1)

    render_report(report, colorize=not args.no_color)

    if args.save_report:
        saved_path: str = save_report_to_json(report, args.save_report)
        logger.info(msg=f"Report saved to {saved_path}")

    logger.info(
        msg=f"Transcript analysis completed in {time.time() - start_time:.2f} seconds"
    )


if __name__ == "__main__":
    main()
