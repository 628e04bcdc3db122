"""Content width measurement and column width distribution."""

import logging
import math
from enum import Enum
from typing import List, Optional, Sequence, Union

import numpy as np

from .content import CellContent, CellElement, ImageElement, LinkElement, StyledText, iter_elements
from .errors import (
    HeaderTooNarrow,
    InvalidDistributionMode,
    TableWidthOverflow,
    UnsupportedContentType,
    WrapHeaderRequiresHeader,
)
from .metrics import Font


logger = logging.getLogger(__name__)

# Headers may shrink to this share of their natural width in auto mode
MIN_HEADER_SCALE = 0.9


class ColumnWidthMode(Enum):
    EQUAL = "equal"
    AUTO = "auto"
    WRAP_HEADER = "wrapHeader"


def content_width(element: CellElement, font: Font, text_size: float) -> float:
    """Natural width of one cell element."""
    if element is None:
        return 0.0
    if isinstance(element, str):
        return font.width_of_text_at_size(element, text_size)
    if isinstance(element, (StyledText, LinkElement)):
        used_font = element.font or font
        used_size = element.text_size or text_size
        return used_font.width_of_text_at_size(element.text, used_size)
    if isinstance(element, ImageElement):
        # Images are only scaled at draw time, never re-measured
        return element.width
    raise UnsupportedContentType(
        f"Unsupported cell content type: {type(element).__name__}"
    )


def cell_width(content: CellContent, font: Font, text_size: float) -> float:
    """Widest element of a cell; mixed elements stack vertically."""
    return max(
        (content_width(e, font, text_size) for e in iter_elements(content)),
        default=0.0,
    )


def calculate_header_widths(
    headers: Sequence[CellContent],
    header_font: Font,
    header_text_size: float,
    horizontal_margin: float,
    border_width: float,
) -> List[float]:
    """Natural width of each header cell including margins and border."""
    return [
        cell_width(header, header_font, header_text_size) + horizontal_margin * 2 + border_width
        for header in headers
    ]


def _parse_mode(mode: Union[str, ColumnWidthMode]) -> ColumnWidthMode:
    if isinstance(mode, ColumnWidthMode):
        return mode
    try:
        return ColumnWidthMode(mode)
    except ValueError:
        raise InvalidDistributionMode(
            'Invalid distribute mode. Choose "auto", "wrapHeader" or "equal".'
        ) from None


def generate_column_widths(
    table: Sequence[Sequence[CellContent]],
    available_width: float,
    font: Font,
    text_size: float,
    mode: Union[str, ColumnWidthMode] = ColumnWidthMode.AUTO,
    has_header: bool = True,
    header_font: Optional[Font] = None,
    header_text_size: Optional[float] = None,
    border_width: float = 0.0,
    horizontal_margin: float = 0.0,
) -> List[float]:
    """
    Distribute the available width across the table's columns.

    Args:
        table: Validated rows, all the same length
        available_width: Width budget in points
        font: Body font
        text_size: Body font size
        mode: "equal", "auto" or "wrapHeader"
        has_header: Whether row 0 is the header row
        header_font: Header font, defaults to the body font
        header_text_size: Header font size, defaults to the body size
        border_width: Border width added to each measured cell
        horizontal_margin: Margin on each side of cell content

    Returns:
        One width per column
    """
    mode = _parse_mode(mode)
    column_count = len(table[0])
    if available_width <= 0:
        raise TableWidthOverflow(
            "No width left on the page for the table.",
            dimensions={"available_width": available_width},
        )

    if mode == ColumnWidthMode.EQUAL:
        return [available_width / column_count] * column_count

    header_widths = np.zeros(column_count)
    if has_header:
        header_widths = np.array(calculate_header_widths(
            table[0],
            header_font or font,
            header_text_size or text_size,
            horizontal_margin,
            # wrapHeader columns are header text plus margins, without the border
            border_width if mode == ColumnWidthMode.AUTO else 0.0,
        ))

    if mode == ColumnWidthMode.WRAP_HEADER:
        if not has_header:
            raise WrapHeaderRequiresHeader(
                "Failed to draw, wrap header not valid when no header set"
            )
        return header_widths.tolist()

    body = table[1:] if has_header else table
    content_widths = np.zeros(column_count)
    for row in body:
        for col_index, cell in enumerate(row):
            width = cell_width(cell, font, text_size) + horizontal_margin * 2 + border_width
            content_widths[col_index] = max(content_widths[col_index], width)

    # Headers are a floor for every column
    column_widths = np.maximum(content_widths, header_widths)
    total_width = column_widths.sum()
    header_total = header_widths.sum()

    if total_width > available_width:
        if header_total >= available_width:
            scale = available_width / header_total
            if scale < MIN_HEADER_SCALE:
                raise HeaderTooNarrow(
                    "Drawing this would require us to squish the headers too much (<90%). "
                    "Please choose equal, give us more page width, or manually set col widths."
                )
            column_widths = np.floor(header_widths * scale)
        else:
            # Shrink only the part of each column above its header width
            scale = (available_width - header_total) / (total_width - header_total)
            column_widths = header_widths + (column_widths - header_widths) * scale

            slack = available_width - column_widths.sum()
            if slack > 0:
                column_widths = column_widths + slack / column_count

    widths = [float(w) for w in column_widths]
    logger.debug("Column widths (%s): %s", mode.value, widths)
    return widths


def table_width(column_widths: Sequence[float]) -> float:
    return math.fsum(column_widths)
