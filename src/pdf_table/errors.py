"""Typed errors raised while validating, laying out and drawing tables."""

from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorCode(Enum):
    """Machine readable error codes carried by every DrawTableError."""
    COLUMN_COUNT_MISMATCH = "ERR_COLUMN_COUNT_MISMATCH"
    ROW_COUNT_MISMATCH = "ERR_ROW_COUNT_MISMATCH"
    TABLE_WIDTH_OVERFLOW = "ERR_TABLE_WIDTH_OVERFLOW"
    TABLE_HEIGHT_OVERFLOW = "ERR_TABLE_HEIGHT_OVERFLOW"
    INVALID_DISTRIBUTE_MODE = "ERR_INVALID_DISTRIBUTE_MODE"
    WRAP_HEADER_INVALID = "ERR_WRAP_HEADER_INVALID"
    NO_SPACE_FOR_HEADERS = "ERR_NO_SPACE_FOR_HEADERS"
    UNSUPPORTED_CONTENT = "ERR_UNSUPPORTED_CONTENT"
    INVALID_ELEMENT = "ERR_INVALID_ELEMENT"
    LINK_TARGET_MISSING = "ERR_LINK_TARGET_MISSING"
    DRAW_ROW_ERROR = "DRAW_ROW_ERROR"
    CONVERT_VALIDATE = "ERR_CONVERT_VALIDATE"


class DrawTableError(Exception):
    """Base exception for table layout and drawing errors."""

    code: ErrorCode = ErrorCode.CONVERT_VALIDATE

    def __init__(
        self,
        message: str,
        dimensions: Optional[Dict[str, float]] = None,
        row_heights: Optional[List[float]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.dimensions = dimensions
        self.row_heights = row_heights

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """Serialise the error for logs and CLI output."""
        data: Dict[str, Any] = {"code": self.code.value, "message": self.message}
        if self.dimensions is not None:
            data["dimensions"] = dict(self.dimensions)
        if self.row_heights is not None:
            data["row_heights"] = list(self.row_heights)
        return data


class ColumnCountMismatch(DrawTableError):
    code = ErrorCode.COLUMN_COUNT_MISMATCH


class RowCountMismatch(DrawTableError):
    code = ErrorCode.ROW_COUNT_MISMATCH


class TableWidthOverflow(DrawTableError):
    code = ErrorCode.TABLE_WIDTH_OVERFLOW


class TableHeightOverflow(DrawTableError):
    code = ErrorCode.TABLE_HEIGHT_OVERFLOW


class InvalidDistributionMode(DrawTableError):
    code = ErrorCode.INVALID_DISTRIBUTE_MODE


class WrapHeaderRequiresHeader(DrawTableError):
    code = ErrorCode.WRAP_HEADER_INVALID


class HeaderTooNarrow(DrawTableError):
    code = ErrorCode.NO_SPACE_FOR_HEADERS


class UnsupportedContentType(DrawTableError):
    code = ErrorCode.UNSUPPORTED_CONTENT


class InvalidCellElement(DrawTableError):
    """A cell element breaks one of its mutually exclusive field rules."""
    code = ErrorCode.INVALID_ELEMENT


class ContentConversionError(DrawTableError):
    code = ErrorCode.CONVERT_VALIDATE


class LinkTargetMissing(DrawTableError):
    """An internal link points at a page that never received content."""
    code = ErrorCode.LINK_TARGET_MISSING


class RowDrawFailure(DrawTableError):
    """Drawing failed part way through a row."""
    code = ErrorCode.DRAW_ROW_ERROR

    def __init__(self, row_index: int, cause: BaseException):
        super().__init__(f"Failed to draw at ROW-{row_index}: {cause}")
        self.row_index = row_index
        self.cause = cause
