"""Layout engine: pre-flight validation, column widths and row heights."""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List

from .column_widths import generate_column_widths, table_width
from .config import TableOptions
from .content import CellContent
from .errors import ColumnCountMismatch, RowCountMismatch, TableHeightOverflow, TableWidthOverflow
from .table_heights import TableHeights, calc_table_height
from .validation import TableInput, validate_and_convert


logger = logging.getLogger(__name__)

# Tolerance for floating point sums that exactly fill the budget
OVERFLOW_TOLERANCE = 1e-6


@dataclass
class LayoutResult:
    """Where the drawn table ended, for chaining further drawing."""
    end_x: float
    end_y: float
    width: float
    height: float
    column_widths: List[float] = field(default_factory=list)
    row_heights: List[float] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "end_x": self.end_x,
            "end_y": self.end_y,
            "width": self.width,
            "height": self.height,
            "column_widths": list(self.column_widths),
            "row_heights": list(self.row_heights),
        }


@dataclass
class TableLayout:
    """Everything the renderer needs, computed before any drawing."""
    rows: List[List[CellContent]]
    column_widths: List[float]
    heights: TableHeights
    start_x: float
    start_y: float

    @property
    def width(self) -> float:
        return table_width(self.column_widths)

    @property
    def height(self) -> float:
        return self.heights.total_height

    @property
    def row_heights(self) -> List[float]:
        return self.heights.row_heights

    def result(self) -> LayoutResult:
        return LayoutResult(
            end_x=self.start_x + self.width,
            end_y=self.start_y - self.height,
            width=self.width,
            height=self.height,
            column_widths=list(self.column_widths),
            row_heights=list(self.row_heights),
        )


class LayoutEngine:
    """Computes table geometry from resolved options."""

    def __init__(self, options: TableOptions):
        self.options = options

    def available_width(self, page_width: float, start_x: float) -> float:
        return page_width - start_x - self.options.page_margin.right

    def available_height(self, start_y: float) -> float:
        return start_y - self.options.page_margin.bottom

    def compute_column_widths(
        self,
        rows: List[List[CellContent]],
        available_width: float,
    ) -> List[float]:
        """Override widths when given, otherwise the configured distribution."""
        opts = self.options
        if opts.column.override_widths:
            return list(opts.column.override_widths)
        return generate_column_widths(
            rows,
            available_width,
            opts.font,
            opts.text_size,
            mode=opts.column.width_mode,
            has_header=opts.has_header,
            header_font=opts.header.font,
            header_text_size=opts.header.text_size,
            border_width=opts.border.width,
            horizontal_margin=opts.content_margin.horizontal,
        )

    def compute_table_heights(
        self,
        rows: List[List[CellContent]],
        column_widths: List[float],
    ) -> TableHeights:
        opts = self.options
        return calc_table_height(
            rows,
            column_widths,
            opts.font,
            opts.text_size,
            opts.line_height,
            opts.has_header,
            opts.header.font,
            opts.header.text_size,
            opts.line_height,
            opts.content_margin.horizontal,
            opts.content_margin.vertical,
            opts.border.width,
            title_text=opts.title.text,
            title_text_size=opts.title.text_size,
            override_heights=opts.row.override_heights,
            break_words=opts.break_word_mode,
        )

    def plan(
        self,
        table: TableInput,
        page_width: float,
        start_x: float,
        start_y: float,
    ) -> TableLayout:
        """
        Validate the table and compute its layout.

        Every check that can reject the table runs here, so a failure never
        leaves partial output on the drawing surface.

        Raises:
            ContentConversionError: The table shape is inconsistent
            ColumnCountMismatch: Override widths disagree with the column count
            RowCountMismatch: Override heights disagree with the row count
            TableWidthOverflow: The table is wider than the space left on the page
            TableHeightOverflow: The table is taller than the space left on the page
        """
        opts = self.options
        rows = validate_and_convert(table, opts.has_header, opts.fill_undefined_cells)
        column_count = len(rows[0])

        override_widths = opts.column.override_widths
        if override_widths and len(override_widths) != column_count:
            raise ColumnCountMismatch(
                "The number of columns in overrideWidths does not match the number of columns in the table."
            )

        override_heights = opts.row.override_heights
        if override_heights and len(override_heights) != len(rows):
            raise RowCountMismatch(
                "The number of rows in overrideHeights does not match the number of rows in the table."
            )

        available_width = self.available_width(page_width, start_x)
        available_height = self.available_height(start_y)
        if available_width <= 0:
            raise TableWidthOverflow(
                "No width left on the page for the table.",
                dimensions={"available_width": available_width, "end_x": start_x},
            )

        column_widths = self.compute_column_widths(rows, available_width)
        width = table_width(column_widths)
        if width > available_width + OVERFLOW_TOLERANCE:
            raise TableWidthOverflow(
                "Table width exceeds the available space on the page.",
                dimensions={"width": width, "end_x": start_x + width},
            )

        heights = self.compute_table_heights(rows, column_widths)
        if heights.total_height > available_height + OVERFLOW_TOLERANCE:
            raise TableHeightOverflow(
                "Table height exceeds the available space on the page.",
                dimensions={
                    "width": width,
                    "height": heights.total_height,
                    "end_x": start_x + width,
                    "end_y": start_y - heights.total_height,
                },
                row_heights=heights.row_heights,
            )

        logger.debug(
            "Planned table at (%.1f, %.1f): %.1f x %.1f",
            start_x, start_y, width, heights.total_height,
        )
        return TableLayout(
            rows=rows,
            column_widths=column_widths,
            heights=heights,
            start_x=start_x,
            start_y=start_y,
        )
