import datetime
import logging
import math

logger = logging.getLogger(__name__)


def calculate_reading_time(text: str) -> str:
    words = text.split()
    minutes = math.ceil(len(words) / 200) or 1
    return f"{minutes} min"


def format_date(value: str) -> str:
    """Turn an ISO-8601 date into its display form, e.g. "January 1, 2023"."""
    try:
        date = datetime.date.fromisoformat(value[:10])
    except (TypeError, ValueError):
        logger.warning(f"Cannot format non-ISO date {value!r}")
        return value
    return f"{date:%B} {date.day}, {date.year}"
