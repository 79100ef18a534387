from .captions import (
    InvalidInputFormatError,
    parse_captions,
    read_captions,
)
from .segmenter import group_by_speaker, segment

__all__ = [
    "InvalidInputFormatError",
    "group_by_speaker",
    "parse_captions",
    "read_captions",
    "segment",
]
