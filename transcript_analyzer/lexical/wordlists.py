"""Loads the newline-delimited indicator word catalogs."""

from __future__ import annotations

import logging
from pathlib import Path

from transcript_analyzer.domain import WordLists
from transcript_analyzer.utils.logger import get_logger

logger: logging.Logger = get_logger(__name__)

BUNDLED_WORD_LIST_FOLDER: Path = Path(__file__).resolve().parent / "wordlists"
WORD_LIST_NAMES: tuple[str, ...] = ("weasel", "hedge", "filler")


def word_list_path(list_name: str, folder: Path | None = None) -> Path:
    """Returns the catalog path for one list name."""
    return (folder or BUNDLED_WORD_LIST_FOLDER) / f"{list_name}.txt"


def load(list_name: str, folder: Path | None = None) -> frozenset[str]:
    """
    Loads one indicator word list.

    Arguments:
        list_name (str): Catalog name, e.g. ``weasel``.
        folder (Path, optional): Folder holding ``<list_name>.txt``; defaults
            to the catalogs bundled with the package.

    Returns:
        frozenset[str]: Words and phrases with surrounding whitespace removed
            and blank lines dropped.

    Raises:
        FileNotFoundError: If the catalog file does not exist.
    """
    path = word_list_path(list_name, folder)
    if not path.is_file():
        raise FileNotFoundError(f"Word list {list_name!r} not found at {path}")

    with path.open(encoding="utf-8") as handle:
        words = frozenset(line.strip() for line in handle if line.strip())
    logger.debug("Loaded %s words from %s", len(words), path)
    return words


def load_word_lists(folder: Path | None = None) -> WordLists:
    """Loads the weasel, hedge, and filler lists from one folder."""
    return WordLists(
        weasel=load("weasel", folder),
        hedge=load("hedge", folder),
        filler=load("filler", folder),
    )
