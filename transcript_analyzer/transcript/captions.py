"""
Caption readers for the Transcript Analyzer tool.

This module turns WebVTT and SubRip files into an ordered list of cues. It only
splits the file into timed text blocks; it does not validate timing and does
not interpret speaker tags.

Classes:
    - CaptionReader: Abstract base class for caption readers.
    - VTTReader: Reader for WebVTT files.
    - SRTReader: Reader for SubRip files.

Functions:
    - parse_captions: Parses caption content in a given format.
    - read_captions: Reads a caption file, inferring its format from the extension.
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from pathlib import Path

from transcript_analyzer.domain import Cue
from transcript_analyzer.utils.logger import get_logger

logger: logging.Logger = get_logger(__name__)

TIMING_SEPARATOR = "-->"
_BLOCK_SPLIT = re.compile(r"\r?\n[ \t]*\r?\n")
_TIMESTAMP = re.compile(r"^(?:(\d+):)?(\d{1,2}):(\d{2})[.,](\d{1,3})$")


class InvalidInputFormatError(ValueError):
    """Raised when a transcript source is missing or cannot be parsed."""


def parse_timestamp(value: str) -> float:
    """Converts ``[hh:]mm:ss.ttt`` (or ``,ttt``) to seconds."""
    match = _TIMESTAMP.match(value.strip())
    if match is None:
        raise InvalidInputFormatError(f"Invalid caption timestamp: {value!r}")
    hours, minutes, seconds, fraction = match.groups()
    return (
        int(hours or 0) * 3600
        + int(minutes) * 60
        + int(seconds)
        + int(fraction.ljust(3, "0")) / 1000
    )


class CaptionReader(ABC):
    """Abstract base class for caption readers."""

    @abstractmethod
    def parse(self, content: str) -> list[Cue]:
        """Parse caption content into cues."""

    def parse_timing(self, line: str) -> tuple[float, float]:
        """Parse a ``start --> end [settings]`` line."""
        start_raw, _, remainder = line.partition(TIMING_SEPARATOR)
        end_fields = remainder.split()
        if not end_fields:
            raise InvalidInputFormatError(f"Invalid cue timing line: {line!r}")
        return parse_timestamp(start_raw), parse_timestamp(end_fields[0])

    def parse_block(self, block: str) -> Cue | None:
        """Parse one blank-line delimited block; returns None for non-cue blocks."""
        lines: list[str] = [line.rstrip() for line in block.splitlines()]
        timing_index = next(
            (i for i, line in enumerate(lines) if TIMING_SEPARATOR in line),
            None,
        )
        if timing_index is None:
            logger.debug("Ignoring caption block without timing: %r", block)
            return None
        start, end = self.parse_timing(lines[timing_index])
        text = "\n".join(lines[timing_index + 1:])
        return Cue(text=text, start_seconds=start, end_seconds=end)


class VTTReader(CaptionReader):
    """Reader for WebVTT captions."""

    SIGNATURE = "WEBVTT"
    IGNORED_BLOCKS = ("NOTE", "STYLE", "REGION")

    def parse(self, content: str) -> list[Cue]:
        """Parse WebVTT content into cues."""
        content = content.lstrip("\ufeff").strip()
        if not content.startswith(self.SIGNATURE):
            raise InvalidInputFormatError("WebVTT content must start with 'WEBVTT'.")

        blocks: list[str] = _BLOCK_SPLIT.split(content)
        cues: list[Cue] = []
        # The first block is the header.
        for block in blocks[1:]:
            if block.lstrip().startswith(self.IGNORED_BLOCKS):
                continue
            cue = self.parse_block(block)
            if cue is not None:
                cues.append(cue)
        logger.debug("Parsed %s WebVTT cues", len(cues))
        return cues


class SRTReader(CaptionReader):
    """Reader for SubRip captions."""

    def parse(self, content: str) -> list[Cue]:
        """Parse SubRip content into cues."""
        content = content.lstrip("\ufeff").strip()
        cues: list[Cue] = []
        for block in _BLOCK_SPLIT.split(content):
            if not block.strip():
                continue
            cue = self.parse_block(block)
            if cue is not None:
                cues.append(cue)
        logger.debug("Parsed %s SubRip cues", len(cues))
        return cues


READERS: dict[str, CaptionReader] = {
    "vtt": VTTReader(),
    "srt": SRTReader(),
}


def parse_captions(content: str, caption_format: str = "vtt") -> list[Cue]:
    """Parse caption content in the given format."""
    reader = READERS.get(caption_format.lower())
    if reader is None:
        raise InvalidInputFormatError(
            f"Unsupported caption format {caption_format!r}; "
            f"expected one of {tuple(READERS)}."
        )
    return reader.parse(content)


def infer_caption_format(file_path: str | Path) -> str | None:
    """Returns the caption format matching the file extension, if known."""
    suffix: str = Path(file_path).suffix.lower().lstrip(".")
    return suffix if suffix in READERS else None


def read_captions(
    file_path: str | Path, caption_format: str | None = None
) -> list[Cue]:
    """
    Reads a caption file into cues.

    Arguments:
        file_path (str | Path): Path to a ``.vtt`` or ``.srt`` file.
        caption_format (str, optional): Overrides the format inferred from
            the extension.

    Returns:
        list[Cue]: Cues in file order.

    Raises:
        InvalidInputFormatError: If the file does not exist, its format is
            unknown, or its content cannot be parsed.
    """
    path = Path(file_path)
    if not path.is_file():
        raise InvalidInputFormatError(f"The specified file {path} does not exist")

    resolved_format = caption_format or infer_caption_format(path)
    if resolved_format is None:
        raise InvalidInputFormatError(
            f"Unable to infer caption format from {path}; expected .vtt or .srt."
        )

    logger.info("Reading %s captions from %s", resolved_format, path)
    try:
        content = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as err:
        raise InvalidInputFormatError(f"{path} is not valid UTF-8 text") from err
    return parse_captions(content, resolved_format)
