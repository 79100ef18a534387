"""Groups caption cues into per-speaker utterances."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from transcript_analyzer.domain import (
    Cue,
    Segmentation,
    SkippedCue,
    SkipReason,
    UtteranceGroups,
)
from transcript_analyzer.utils.logger import get_logger

logger: logging.Logger = get_logger(__name__)

SPEAKER_DELIMITER = ": "


def split_speaker(text: str) -> tuple[str, str] | SkipReason:
    """Splits ``"Speaker: speech"`` at the first delimiter.

    Returns the ``(speaker, speech)`` pair, or the reason the text carries no
    usable speaker tag. The speaker is kept verbatim, without trimming or case
    normalization.
    """
    speaker, delimiter, speech = text.partition(SPEAKER_DELIMITER)
    if not delimiter:
        return SkipReason.NO_DELIMITER
    if not speaker:
        return SkipReason.EMPTY_SPEAKER
    return speaker, speech


def segment(cues: Iterable[Cue]) -> Segmentation:
    """
    Builds speaker utterance groups from cues.

    Cues without a speaker tag (stage directions, continuation lines) are
    dropped rather than reported as errors; each one is listed in
    ``Segmentation.skipped`` with its reason so callers can audit them.

    Arguments:
        cues (Iterable[Cue]): Cues in transcript order.

    Returns:
        Segmentation: Speaker groups keyed in first-appearance order, each
            holding one utterance per cue, plus the skipped cues.
    """
    groups: UtteranceGroups = {}
    skipped: list[SkippedCue] = []

    for index, cue in enumerate(cues):
        split = split_speaker(cue.text)
        if isinstance(split, SkipReason):
            logger.debug("Skipping cue %s (%s): %r", index, split, cue.text)
            skipped.append(SkippedCue(index=index, cue=cue, reason=split))
            continue
        speaker, speech = split
        groups.setdefault(speaker, []).append(speech)

    logger.info(
        "Segmented transcript into %s speakers (%s cues skipped).",
        len(groups),
        len(skipped),
    )
    return Segmentation(groups=groups, skipped=tuple(skipped))


def group_by_speaker(cues: Iterable[Cue]) -> UtteranceGroups:
    """Returns only the speaker groups of ``segment``."""
    return segment(cues).groups
