"""
Formatting utility functions
"""

from datetime import date, datetime
from typing import Any, Optional


def parse_date(value: Any) -> Optional[datetime]:
    """Convert various inputs → datetime | None."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    try:
        # Accept both ISO strings and plain YYYY-MM-DD
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None


def format_date(date_value: Any, format_str: str = "%Y-%m-%d") -> str:
    """
    Format a date value as a string

    Args:
        date_value: Date value to format (string, datetime, or other)
        format_str: Format string for strftime

    Returns:
        Formatted date string, "N/A" when there is no value
    """
    if not date_value:
        return "N/A"

    if isinstance(date_value, str):
        parsed = parse_date(date_value)
        # Return original if parsing fails
        return parsed.strftime(format_str) if parsed else date_value

    if isinstance(date_value, (datetime, date)):
        return date_value.strftime(format_str)

    return str(date_value)


def truncate_text(text: str, max_length: int = 50, ellipsis: str = "...") -> str:
    """
    Truncate text to a maximum length

    Args:
        text: Text to truncate
        max_length: Maximum length
        ellipsis: Ellipsis string to append

    Returns:
        Truncated text
    """
    if not text:
        return ""

    if len(text) <= max_length:
        return text

    return text[:max_length - len(ellipsis)] + ellipsis

