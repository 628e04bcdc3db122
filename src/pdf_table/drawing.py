"""Drawing of single cell elements and cell borders on a surface."""

from dataclasses import dataclass
from typing import Any, Tuple

from reportlab.lib.colors import Color

from .content import CellElement, ImageElement, LinkElement, StyledText
from .errors import UnsupportedContentType
from .images import ImageProvider, fetch_image, load_image_bytes
from .metrics import Font
from .table_heights import element_height
from .text_wrap import BreakWordMode, wrap_text


@dataclass
class CellStyle:
    """Resolved text style for the cell being drawn."""
    font: Font
    text_size: float
    text_color: Color
    alignment: str
    link_color: Color
    line_height: float
    horizontal_margin: float
    vertical_margin: float
    border_width: float
    break_words: BreakWordMode = BreakWordMode.ESSENTIAL


def text_x(
    alignment: str,
    cell_x: float,
    cell_width: float,
    content_width: float,
    horizontal_margin: float,
    border_width: float,
) -> float:
    """X position of content inside a cell for the given alignment."""
    if alignment == "center":
        return cell_x + (cell_width / 2 + border_width / 2) - content_width / 2
    if alignment == "right":
        return cell_x + cell_width + border_width / 2 - (content_width + horizontal_margin)
    return cell_x + horizontal_margin + border_width / 2


def draw_border(
    surface: Any,
    start_x: float,
    start_y: float,
    end_x: float,
    end_y: float,
    border_width: float,
    border_color: Color,
) -> None:
    surface.draw_line(start_x, start_y, end_x, end_y, border_width, border_color)


def _draw_text_lines(
    surface: Any,
    element: Any,
    x: float,
    y: float,
    width: float,
    style: CellStyle,
    default_color: Color,
) -> None:
    if isinstance(element, str):
        text, font, size, color, alignment = element, style.font, style.text_size, default_color, style.alignment
    else:
        text = element.text
        font = element.font or style.font
        size = element.text_size or style.text_size
        color = element.text_color or default_color
        alignment = element.alignment or style.alignment

    max_width = width - 2 * style.horizontal_margin
    lines = wrap_text(text, max_width, font, size, style.break_words)
    line_spacing = font.line_height_at_size(size) * style.line_height
    glyph_height = font.line_height_at_size(size)

    # Baseline of the first line sits one font size below the content top
    baseline = y - style.vertical_margin - style.border_width / 2 - size
    for line in lines:
        line_width = font.width_of_text_at_size(line, size)
        line_x = text_x(
            alignment, x, width, line_width, style.horizontal_margin, style.border_width
        )
        surface.draw_text(line, line_x, baseline, size, font, color)

        if isinstance(element, LinkElement):
            rect: Tuple[float, float, float, float] = (
                line_x, baseline, line_x + line_width, baseline + glyph_height
            )
            surface.add_link_annotation(rect, url=element.url, page=element.page)

        baseline -= line_spacing


def _draw_image(
    surface: Any,
    element: ImageElement,
    x: float,
    y: float,
    width: float,
    style: CellStyle,
    image_provider: ImageProvider,
) -> None:
    margin = (
        element.horizontal_margin
        if element.horizontal_margin is not None
        else style.horizontal_margin
    )
    # Shrink to the cell width, never enlarge
    scale = min((width - 2 * margin) / element.width, 1.0)
    if scale <= 0:
        return
    img_width = element.width * scale
    img_height = element.height * scale

    img_x = text_x(
        element.alignment or style.alignment, x, width, img_width, margin, style.border_width
    )
    img_y = y - style.vertical_margin - style.border_width / 2 - img_height

    data = load_image_bytes(element, image_provider)
    surface.draw_image(data, img_x, img_y, img_width, img_height)


def draw_element(
    surface: Any,
    element: CellElement,
    x: float,
    y: float,
    width: float,
    style: CellStyle,
    image_provider: ImageProvider = fetch_image,
) -> float:
    """
    Draw one element with its top-left corner at (x, y).

    Args:
        surface: Drawing surface
        element: Element to draw
        x: Left edge of the cell
        y: Top of the space available to this element
        width: Cell width available for content
        style: Resolved style for the cell
        image_provider: Loader for images given by source reference

    Returns:
        Height taken by the element, the same value used for row heights
    """
    if isinstance(element, LinkElement):
        _draw_text_lines(surface, element, x, y, width, style, style.link_color)
    elif isinstance(element, (str, StyledText)):
        _draw_text_lines(surface, element, x, y, width, style, style.text_color)
    elif isinstance(element, ImageElement):
        _draw_image(surface, element, x, y, width, style, image_provider)
    elif element is not None:
        raise UnsupportedContentType(
            f"Unsupported cell content type: {type(element).__name__}"
        )

    return element_height(
        element,
        width - 2 * style.horizontal_margin,
        style.font,
        style.text_size,
        style.line_height,
        style.vertical_margin,
        style.border_width,
        style.break_words,
    )
