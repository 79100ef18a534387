from .logger import configure_logging, get_logger
from .magnitude import (
    MagnitudeCategory,
    category_for_percentage,
    format_magnitude,
    format_percentage,
    magnitude_category,
)
