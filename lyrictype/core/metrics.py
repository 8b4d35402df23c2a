"""Typing speed and accuracy calculations.

Speed uses the standard average-word-length convention: one "word" is five
typed characters, so WPM = (characters / 5) / elapsed minutes.
"""

from __future__ import annotations

import math
from typing import Optional

AVERAGE_WORD_LENGTH = 5


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from -inf (0.5 -> 1, 2.5 -> 3)."""
    return int(math.floor(value + 0.5))


def words_per_minute(typed_characters: int, elapsed_minutes: float) -> int:
    """Words per minute for *typed_characters* over *elapsed_minutes*.

    The caller must make sure *elapsed_minutes* is positive; a zero value
    raises ``ZeroDivisionError``.
    """
    words = typed_characters / AVERAGE_WORD_LENGTH
    return round_half_up(words / elapsed_minutes)


def accuracy(correct_characters: int, total_characters: int) -> int:
    """Percentage of correct characters; 100 when nothing has been typed yet."""
    if total_characters == 0:
        return 100
    return round_half_up((correct_characters / total_characters) * 100)


def elapsed_minutes(start_time: Optional[float], now: float) -> float:
    """Minutes between *start_time* and *now* (0.0 when the clock never started)."""
    if start_time is None:
        return 0.0
    return max(0.0, (now - start_time) / 60.0)
