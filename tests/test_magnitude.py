import pytest
from colored import fg

from transcript_analyzer.utils.magnitude import (
    MagnitudeCategory,
    category_for_percentage,
    format_magnitude,
    format_percentage,
    magnitude_category,
    to_percentage,
)


@pytest.mark.parametrize(
    ("value_pct", "expected"),
    [
        (100.0, MagnitudeCategory.GREEN),
        (99.0, MagnitudeCategory.GREEN),
        (75.0, MagnitudeCategory.GREEN),
        (74.99, MagnitudeCategory.BLUE),
        (50.0, MagnitudeCategory.BLUE),
        (49.99, MagnitudeCategory.YELLOW),
        (25.0, MagnitudeCategory.YELLOW),
        (24.99, MagnitudeCategory.RED),
        (0.0, MagnitudeCategory.RED),
        (-80.0, MagnitudeCategory.RED),
    ],
)
def test_category_thresholds(value_pct: float, expected: MagnitudeCategory) -> None:
    assert category_for_percentage(value_pct) == expected


def test_magnitude_category_scales_fractions() -> None:
    assert magnitude_category(0.75) == MagnitudeCategory.GREEN
    assert magnitude_category(0.7499) == MagnitudeCategory.BLUE
    assert magnitude_category(0.3) == MagnitudeCategory.YELLOW
    assert magnitude_category(-0.6) == MagnitudeCategory.RED


def test_to_percentage_rounds_to_two_decimals() -> None:
    assert to_percentage(0.123456) == 12.35
    assert to_percentage(1) == 100.0


def test_format_percentage_trims_trailing_zeros() -> None:
    assert format_percentage(16.67, colorize=False) == "16.67%"
    assert format_percentage(50.0, colorize=False) == "50%"
    assert format_percentage(12.5, colorize=False) == "12.5%"
    assert format_percentage(0, colorize=False) == "0%"


def test_format_percentage_colors_by_category() -> None:
    rendered = format_percentage(80.0)

    assert rendered.startswith(fg("green"))
    assert "80%" in rendered


def test_format_magnitude_uses_percentage_of_fraction() -> None:
    assert format_magnitude(0.6, colorize=False) == "60%"
    assert fg("blue") in format_magnitude(0.6)
