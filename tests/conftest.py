"""
Pytest configuration for pdf_table
"""

from dataclasses import dataclass
from typing import Any, List, Tuple

import pytest


@dataclass(frozen=True)
class FixedWidthFont:
    """Font stand-in: every character is half the font size wide, lines are one size tall."""
    name: str = "Fixed"
    char_ratio: float = 0.5

    def width_of_text_at_size(self, text: str, size: float) -> float:
        return len(text) * size * self.char_ratio

    def line_height_at_size(self, size: float) -> float:
        return size


class ExplodingFont:
    """Fails on any measurement, to prove code paths skip measuring."""
    name = "Exploding"

    def width_of_text_at_size(self, text, size):
        raise AssertionError("text was measured")

    def line_height_at_size(self, size):
        raise AssertionError("text was measured")


class RecordingSurface:
    """Drawing surface that records every call instead of painting."""

    def __init__(self, width: float = 612, height: float = 792):
        self.width = width
        self.height = height
        self.calls: List[Tuple[str, Tuple[Any, ...], dict]] = []

    def page_width(self) -> float:
        return self.width

    def page_height(self) -> float:
        return self.height

    def _record(self, name, *args, **kwargs):
        self.calls.append((name, args, kwargs))

    def draw_text(self, text, x, y, size, font, color):
        self._record("draw_text", text, x, y, size, font, color)

    def draw_rectangle(self, x, y, width, height, fill_color=None, border_width=0, border_color=None):
        self._record(
            "draw_rectangle", x, y, width, height,
            fill_color=fill_color, border_width=border_width, border_color=border_color,
        )

    def draw_line(self, x1, y1, x2, y2, thickness, color):
        self._record("draw_line", x1, y1, x2, y2, thickness, color)

    def draw_image(self, data, x, y, width, height):
        self._record("draw_image", data, x, y, width, height)

    def add_link_annotation(self, rect, url=None, page=None):
        self._record("add_link_annotation", rect, url=url, page=page)

    def named(self, name: str) -> List[Tuple[Any, ...]]:
        return [args for call, args, _ in self.calls if call == name]

    def named_with_kwargs(self, name: str) -> List[Tuple[Tuple[Any, ...], dict]]:
        return [(args, kwargs) for call, args, kwargs in self.calls if call == name]


FIXED = FixedWidthFont()


@pytest.fixture
def font():
    return FIXED


@pytest.fixture
def surface():
    return RecordingSurface()


@pytest.fixture
def fixed_options():
    """Option overrides that measure every text with FixedWidthFont."""
    return {
        "font": FIXED,
        "text_size": 10,
        "line_height": 1.0,
        "header": {"font": FIXED, "text_size": 10},
        "title": {"font": FIXED},
        "border": {"width": 1},
        "content_margin": {"horizontal": 2, "vertical": 0},
    }
