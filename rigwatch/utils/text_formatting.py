"""
Text formatting utilities for rigwatch.
"""

from ..config.constants import TITLE_MAX_LEN


def truncate_title(text: str, max_len: int = TITLE_MAX_LEN) -> str:
    """
    Truncate title text so the result is at most max_len characters.

    Args:
        text: The text to truncate
        max_len: Maximum length of the returned text, ellipsis included

    Returns:
        The first max_len - 3 characters plus "..." if text was too long,
        otherwise the original text
    """
    if len(text) > max_len:
        return text[: max_len - 3] + "..."
    return text
