"""Row and table height resolution from wrapped cell content."""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .content import CellContent, CellElement, ImageElement, LinkElement, StyledText, is_mixed
from .errors import UnsupportedContentType
from .metrics import Font
from .text_wrap import BreakWordMode, wrap_text


logger = logging.getLogger(__name__)


@dataclass
class TableHeights:
    """Heights computed for one layout call."""
    total_height: float
    row_heights: List[float]


def element_height(
    element: CellElement,
    max_width: float,
    font: Font,
    text_size: float,
    line_height: float,
    vertical_margin: float,
    border_width: float,
    break_words: BreakWordMode = BreakWordMode.ESSENTIAL,
) -> float:
    """Height one element occupies inside a cell, margins included."""
    if element is None:
        return text_size * line_height

    if isinstance(element, (str, StyledText, LinkElement)):
        if isinstance(element, str):
            text, used_font, used_size = element, font, text_size
        else:
            text = element.text
            used_font = element.font or font
            used_size = element.text_size or text_size
        lines = wrap_text(text, max_width, used_font, used_size, break_words)
        return (
            border_width
            + vertical_margin * 2
            + len(lines) * used_font.line_height_at_size(used_size) * line_height
        )

    if isinstance(element, ImageElement):
        return element.height + vertical_margin * 2 + border_width

    raise UnsupportedContentType(
        f"Unsupported cell content type: {type(element).__name__}"
    )


def cell_height(
    content: CellContent,
    max_width: float,
    font: Font,
    text_size: float,
    line_height: float,
    vertical_margin: float,
    border_width: float,
    break_words: BreakWordMode = BreakWordMode.ESSENTIAL,
) -> float:
    """Height of a cell; mixed elements stack, so their heights add up."""
    if is_mixed(content):
        return sum(
            cell_height(
                element, max_width, font, text_size, line_height,
                vertical_margin, border_width, break_words,
            )
            for element in content
        )
    return element_height(
        content, max_width, font, text_size, line_height,
        vertical_margin, border_width, break_words,
    )


def calc_row_height(
    row: Sequence[CellContent],
    column_widths: Sequence[float],
    font: Font,
    text_size: float,
    line_height: float,
    horizontal_margin: float,
    vertical_margin: float,
    border_width: float,
    break_words: BreakWordMode = BreakWordMode.ESSENTIAL,
) -> float:
    """Height of a row: the tallest of its cells."""
    heights = []
    for content, column_width in zip(row, column_widths):
        max_width = column_width - border_width - horizontal_margin * 2
        heights.append(cell_height(
            content, max_width, font, text_size, line_height,
            vertical_margin, border_width, break_words,
        ))
    return max(heights)


def calc_table_height(
    table: Sequence[Sequence[CellContent]],
    column_widths: Sequence[float],
    font: Font,
    text_size: float,
    line_height: float,
    has_header: bool,
    header_font: Font,
    header_text_size: float,
    header_line_height: float,
    horizontal_margin: float,
    vertical_margin: float,
    border_width: float,
    title_text: Optional[str] = None,
    title_text_size: Optional[float] = None,
    override_heights: Optional[Sequence[float]] = None,
    break_words: BreakWordMode = BreakWordMode.ESSENTIAL,
) -> TableHeights:
    """
    Compute the total table height and each row's height.

    Override heights, when given, replace the computed row heights and no
    content is measured. The title block adds twice the title size and one
    border width is added for the closing border.
    """
    if override_heights:
        row_heights = [float(h) for h in override_heights]
    else:
        row_heights = []
        for row_index, row in enumerate(table):
            is_header = row_index == 0 and has_header
            row_heights.append(calc_row_height(
                row,
                column_widths,
                header_font if is_header else font,
                header_text_size if is_header else text_size,
                header_line_height if is_header else line_height,
                horizontal_margin,
                vertical_margin,
                border_width,
                break_words,
            ))

    title_height = (title_text_size or text_size) * 2 if title_text else 0.0
    total_height = sum(row_heights) + title_height + border_width

    logger.debug("Row heights: %s (total %.2f)", row_heights, total_height)
    return TableHeights(total_height=total_height, row_heights=row_heights)
