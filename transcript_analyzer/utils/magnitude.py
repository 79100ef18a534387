"""Magnitude-to-category rule used for every score surfaced in a report."""

from __future__ import annotations

from enum import StrEnum

from colored import attr, fg


class MagnitudeCategory(StrEnum):
    """Display category derived from a percentage value."""

    GREEN = "green"
    BLUE = "blue"
    YELLOW = "yellow"
    RED = "red"


# Lower bounds, checked from highest to lowest.
CATEGORY_THRESHOLDS: tuple[tuple[float, MagnitudeCategory], ...] = (
    (75.0, MagnitudeCategory.GREEN),
    (50.0, MagnitudeCategory.BLUE),
    (25.0, MagnitudeCategory.YELLOW),
)


def to_percentage(value: float) -> float:
    """Scales a fraction to a percentage rounded to two decimals."""
    return round(100 * float(value), 2)


def category_for_percentage(value_pct: float) -> MagnitudeCategory:
    """Maps a percentage to its magnitude category.

    Arguments:
        value_pct (float): Value already expressed as a percentage.

    Returns:
        MagnitudeCategory: ``green`` from 75, ``blue`` from 50,
            ``yellow`` from 25, otherwise ``red``.
    """
    for lower_bound, category in CATEGORY_THRESHOLDS:
        if value_pct >= lower_bound:
            return category
    return MagnitudeCategory.RED


def magnitude_category(value: float) -> MagnitudeCategory:
    """Maps a fraction (sentiment, emotion, relevance) to its category."""
    return category_for_percentage(to_percentage(value))


def format_percentage(value_pct: float, colorize: bool = True) -> str:
    """Formats a percentage as ``12.5%``, colored by its category."""
    text = f"{value_pct + 0.0:.2f}".rstrip("0").rstrip(".") + "%"
    if not colorize:
        return text
    category = category_for_percentage(value_pct)
    return f"{fg(category.value)}{text}{attr('reset')}"


def format_magnitude(value: float, colorize: bool = True) -> str:
    """Formats a fraction as a colored percentage."""
    return format_percentage(to_percentage(value), colorize=colorize)
