"""
Request validation helpers.
"""

from datetime import datetime
from typing import Any, Tuple

from . import config


def validate_date_key(date_key: Any) -> bool:
    """Validate date key format (YYYY-MM-DD)."""
    if not isinstance(date_key, str):
        return False
    try:
        parsed = datetime.strptime(date_key, "%Y-%m-%d")
    except ValueError:
        return False
    # Zero-padded only, dates are compared and sorted as strings
    return parsed.strftime("%Y-%m-%d") == date_key


def validate_entry_data(data: Any, partial: bool = False) -> Tuple[bool, str]:
    """Validate an entry payload. With `partial`, every field is optional."""
    if not isinstance(data, dict):
        return False, "Invalid data format"

    if "date" in data or not partial:
        if not validate_date_key(data.get("date")):
            return False, "Invalid date format. Use YYYY-MM-DD"

    content = data.get("content", "")
    if not isinstance(content, str):
        return False, "Content must be a string"
    if len(content) > config.MAX_ENTRY_LENGTH:
        return False, f"Content exceeds maximum length of {config.MAX_ENTRY_LENGTH} characters"
    if not partial and not content.strip():
        return False, "Content is required"

    title = data.get("title", "")
    if title is not None and not isinstance(title, str):
        return False, "Title must be a string"
    if title and len(title) > config.MAX_TITLE_LENGTH:
        return False, f"Title exceeds maximum length of {config.MAX_TITLE_LENGTH} characters"

    mood = data.get("mood")
    if mood is not None and not isinstance(mood, str):
        return False, "Mood must be a string"

    return True, ""
