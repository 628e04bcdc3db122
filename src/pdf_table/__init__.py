"""Table layout and drawing for PDF pages."""

from .config import TableOptions, load_options, resolve_options
from .content import Column, ImageElement, LinkElement, StyledText, TableObject
from .errors import (
    ColumnCountMismatch,
    ContentConversionError,
    DrawTableError,
    ErrorCode,
    HeaderTooNarrow,
    InvalidCellElement,
    InvalidDistributionMode,
    LinkTargetMissing,
    RowCountMismatch,
    RowDrawFailure,
    TableHeightOverflow,
    TableWidthOverflow,
    UnsupportedContentType,
    WrapHeaderRequiresHeader,
)
from .layout_engine import LayoutResult
from .metrics import Font
from .pdf_renderer import TableRenderer, draw_table, draw_table_async
from .surface import ReportLabSurface

__version__ = "0.1.0"
