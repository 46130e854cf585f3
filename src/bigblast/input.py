"""Keyboard shortcuts for picking choices.

``1``-``9`` pick choices 1-9, ``0`` picks 10 and letters continue from
there (``a`` = 11, ``b`` = 12, ...), enough for 21 choices at 20 players.
"""

from typing import Optional
import string

DIGIT_KEYS = "1234567890"
LETTER_KEYS = string.ascii_lowercase


def choice_index_for_key(char: str) -> Optional[int]:
    """Map a typed character to a zero-based choice index, or None."""
    if len(char) != 1:
        return None
    char = char.lower()
    if char in DIGIT_KEYS:
        return DIGIT_KEYS.index(char)
    if char in LETTER_KEYS:
        return len(DIGIT_KEYS) + LETTER_KEYS.index(char)
    return None


def key_for_choice_index(index: int) -> Optional[str]:
    """Inverse of ``choice_index_for_key``, for on-screen hints."""
    keys = DIGIT_KEYS + LETTER_KEYS
    if 0 <= index < len(keys):
        return keys[index]
    return None
