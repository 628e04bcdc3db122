"""Greedy line wrapping against measured font widths."""

from enum import Enum
from typing import List

from .metrics import Font


# Fragments shorter than this are never produced when breaking a word
MIN_FRAGMENT_LENGTH = 3


class BreakWordMode(Enum):
    """How words wider than the line are handled."""
    NONE = "none"            # Keep over-wide words whole and let them overflow
    ESSENTIAL = "essential"  # Split over-wide words character by character


def wrap_text(
    text: str,
    max_width: float,
    font: Font,
    text_size: float,
    break_words: BreakWordMode = BreakWordMode.ESSENTIAL,
) -> List[str]:
    """
    Split text into lines no wider than max_width.

    Words are separated by single spaces. A line only exceeds max_width when
    it holds a single word that could not be broken.

    Args:
        text: Text to wrap; runs of whitespace collapse to one space
        max_width: Maximum line width in points
        font: Measurement capability for the text
        text_size: Font size in points
        break_words: Word breaking policy for over-wide words

    Returns:
        Wrapped lines, empty for blank input
    """
    lines: List[str] = []
    current_line = ""

    for word in text.split():
        word_width = font.width_of_text_at_size(word, text_size)

        if break_words == BreakWordMode.ESSENTIAL and word_width > max_width:
            fragments = break_word(word, max_width, font, text_size)
            if current_line:
                lines.append(current_line)
            lines.extend(fragments[:-1])
            current_line = fragments[-1]
            continue

        candidate = word if not current_line else f"{current_line} {word}"
        if font.width_of_text_at_size(candidate, text_size) <= max_width:
            current_line = candidate
        else:
            if current_line:
                lines.append(current_line)
            current_line = word

    if current_line:
        lines.append(current_line)

    return lines


def break_word(
    word: str,
    max_width: float,
    font: Font,
    text_size: float,
) -> List[str]:
    """
    Split a single word into fragments that each fit max_width.

    Returns [word] unchanged when a split would leave a fragment shorter
    than MIN_FRAGMENT_LENGTH characters.
    """
    fragments: List[str] = []
    current = ""

    for char in word:
        candidate = current + char
        if current and font.width_of_text_at_size(candidate, text_size) > max_width:
            if len(current) < MIN_FRAGMENT_LENGTH:
                return [word]
            fragments.append(current)
            current = char
        else:
            current = candidate

    if not fragments:
        # Fits as a whole, or the first character alone is too wide
        return [word]

    if len(current) < MIN_FRAGMENT_LENGTH:
        # Borrow from the previous fragment so the tail is long enough
        needed = MIN_FRAGMENT_LENGTH - len(current)
        previous = fragments[-1]
        if len(previous) - needed < MIN_FRAGMENT_LENGTH:
            return [word]
        fragments[-1] = previous[:-needed]
        current = previous[-needed:] + current

    fragments.append(current)
    return fragments
