"""Table rendering: title, backgrounds, borders and cell content."""

import asyncio
import logging
from typing import Any, List, Mapping, Optional, Union

from reportlab.lib.colors import Color

from .config import TableOptions, resolve_options
from .content import CellContent, is_mixed
from .drawing import CellStyle, draw_border, draw_element
from .errors import RowDrawFailure
from .images import ImageProvider, fetch_image
from .layout_engine import LayoutEngine, LayoutResult, TableLayout
from .validation import TableInput


logger = logging.getLogger(__name__)

# Structure tag used when a tagging hook is supplied
TABLE_TAG = "Table"


class TableRenderer:
    """Draws a planned table onto a drawing surface.

    Rows are drawn top to bottom and cells left to right. A tagging hook,
    when given, must provide ``begin_marked_content(tag)`` and
    ``end_marked_content()``; errors from it are logged and ignored.
    """

    def __init__(
        self,
        options: TableOptions,
        image_provider: ImageProvider = fetch_image,
        tagging_hook: Optional[Any] = None,
    ):
        self.options = options
        self.image_provider = image_provider
        self.tagging_hook = tagging_hook

    def render(self, surface: Any, layout: TableLayout) -> LayoutResult:
        """
        Draw the table described by layout.

        Raises:
            RowDrawFailure: Drawing failed inside a row. Rows drawn before it
                stay on the surface.
        """
        current_y = layout.start_y

        if self.options.title.text:
            self._draw_title(surface, layout)
            current_y -= self.options.title.text_size * 2

        marked = self._begin_marked_content()
        try:
            for row_index, row in enumerate(layout.rows):
                row_height = layout.row_heights[row_index]
                try:
                    self._draw_row(surface, layout, row_index, row, current_y, row_height)
                except Exception as e:
                    raise RowDrawFailure(row_index, e) from e
                current_y -= row_height
        finally:
            if marked:
                self._end_marked_content()

        return layout.result()

    def _draw_title(self, surface: Any, layout: TableLayout):
        """Draw the title above the table using its alignment."""
        title = self.options.title
        title_width = title.font.width_of_text_at_size(title.text, title.text_size)

        x = layout.start_x
        if title.alignment == "center":
            x += (layout.width - title_width) / 2
        elif title.alignment == "right":
            x += layout.width - title_width

        surface.draw_text(
            title.text,
            x,
            layout.start_y - title.text_size,
            title.text_size,
            title.font,
            title.text_color,
        )

    def _is_header(self, row_index: int) -> bool:
        return row_index == 0 and self.options.has_header

    def _background_color(self, row_index: int) -> Optional[Color]:
        """Header background for the header row, per-row colors for data rows."""
        opts = self.options
        if self._is_header(row_index):
            return opts.header.background_color

        # Colors are indexed by data row, skipping the header
        data_index = row_index - 1 if opts.has_header else row_index
        colors = opts.row.background_colors
        if 0 <= data_index < len(colors) and colors[data_index] is not None:
            return colors[data_index]
        if data_index % 2 == 1:
            return opts.row.alternate_color
        return None

    def _cell_style(self, row_index: int) -> CellStyle:
        opts = self.options
        is_header = self._is_header(row_index)
        return CellStyle(
            font=opts.header.font if is_header else opts.font,
            text_size=opts.header.text_size if is_header else opts.text_size,
            text_color=opts.header.text_color if is_header else opts.text_color,
            alignment=opts.header.content_alignment if is_header else opts.content_alignment,
            link_color=opts.link_color,
            line_height=opts.line_height,
            horizontal_margin=opts.content_margin.horizontal,
            vertical_margin=opts.content_margin.vertical,
            border_width=opts.border.width,
            break_words=opts.break_word_mode,
        )

    def _draw_row(
        self,
        surface: Any,
        layout: TableLayout,
        row_index: int,
        row: List[CellContent],
        cell_y: float,
        row_height: float,
    ):
        border = self.options.border
        background = self._background_color(row_index)
        style = self._cell_style(row_index)
        last_column = len(row) - 1

        cell_x = layout.start_x
        for col_index, content in enumerate(row):
            column_width = layout.column_widths[col_index]

            if background is not None:
                surface.draw_rectangle(
                    cell_x,
                    cell_y - row_height,
                    column_width,
                    row_height,
                    fill_color=background,
                    border_width=border.width,
                    border_color=border.color,
                )

            # Borderless tables come from a zero border width
            if border.width > 0 and background is None:
                self._draw_cell_borders(
                    surface, row_index, col_index == last_column,
                    cell_x, cell_y, column_width, row_height,
                )

            self._draw_content(
                surface, content, cell_x, cell_y, column_width - border.width, style
            )
            cell_x += column_width

    def _draw_cell_borders(
        self,
        surface: Any,
        row_index: int,
        is_last_column: bool,
        x: float,
        y: float,
        width: float,
        height: float,
    ):
        border = self.options.border

        # Top border only where no header row sits above the first row
        if row_index == 0 and not self.options.has_header:
            draw_border(surface, x, y, x + width, y, border.width, border.color)

        draw_border(surface, x, y, x, y - height, border.width, border.color)

        if is_last_column:
            draw_border(surface, x + width, y, x + width, y - height, border.width, border.color)

        draw_border(surface, x, y - height, x + width, y - height, border.width, border.color)

    def _draw_content(
        self,
        surface: Any,
        content: CellContent,
        x: float,
        y: float,
        width: float,
        style: CellStyle,
    ):
        if is_mixed(content):
            element_y = y
            for element in content:
                element_y -= draw_element(
                    surface, element, x, element_y, width, style, self.image_provider
                )
        else:
            draw_element(surface, content, x, y, width, style, self.image_provider)

    def _begin_marked_content(self) -> bool:
        if self.tagging_hook is None:
            return False
        try:
            self.tagging_hook.begin_marked_content(TABLE_TAG)
        except Exception as e:
            logger.warning("Error beginning marked content: %s", e)
            return False
        return True

    def _end_marked_content(self):
        try:
            self.tagging_hook.end_marked_content()
        except Exception as e:
            logger.warning("Error ending marked content: %s", e)


def draw_table(
    surface: Any,
    table: TableInput,
    start_x: float,
    start_y: float,
    options: Optional[Union[Mapping[str, Any], TableOptions]] = None,
    *,
    style: Optional[str] = None,
    image_provider: ImageProvider = fetch_image,
    tagging_hook: Optional[Any] = None,
) -> LayoutResult:
    """
    Lay out and draw a table with its top-left corner at (start_x, start_y).

    Args:
        surface: Drawing surface, e.g. a ReportLabSurface
        table: Rows of cell content or a TableObject
        start_x: Left edge of the table
        start_y: Top edge of the table (PDF coordinates start at the bottom)
        options: Partial option mapping or resolved TableOptions
        style: Optional preset name applied beneath options
        image_provider: Loader for images given by source reference
        tagging_hook: Optional marked content hook

    Returns:
        LayoutResult with the table's end coordinates and size

    Raises:
        DrawTableError: Any pre-flight failure, before anything is drawn, or
            RowDrawFailure while drawing
    """
    opts = resolve_options(options, style=style)
    layout = LayoutEngine(opts).plan(table, surface.page_width(), start_x, start_y)
    renderer = TableRenderer(opts, image_provider=image_provider, tagging_hook=tagging_hook)
    return renderer.render(surface, layout)


async def draw_table_async(
    surface: Any,
    table: TableInput,
    start_x: float,
    start_y: float,
    options: Optional[Union[Mapping[str, Any], TableOptions]] = None,
    **kwargs: Any,
) -> LayoutResult:
    """Run draw_table in a worker thread so the event loop stays free."""
    return await asyncio.to_thread(
        draw_table, surface, table, start_x, start_y, options, **kwargs
    )
