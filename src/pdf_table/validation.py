"""Validation and conversion of caller tables into rows of cell content."""

import logging
from typing import Any, List, Mapping, Sequence, Union

from .content import CellContent, TableObject, coerce_content
from .errors import ContentConversionError


logger = logging.getLogger(__name__)

TableInput = Union[Sequence[Sequence[Any]], TableObject, Mapping[str, Any]]


def is_table_object(data: Any) -> bool:
    if isinstance(data, TableObject):
        return True
    return isinstance(data, Mapping) and "columns" in data and "rows" in data


def table_object_to_rows(
    table_object: TableObject,
    has_header: bool,
    fill_empty: bool,
) -> List[List[Any]]:
    """
    Project keyed rows through the column order.

    The column titles become the header row when has_header is set. Absent
    or None values are filled with "" when fill_empty is set, otherwise the
    conversion fails.
    """
    rows: List[List[Any]] = []
    if has_header:
        rows.append([column.title for column in table_object.columns])

    for index, row in enumerate(table_object.rows):
        cells = []
        for column in table_object.columns:
            value = row.get(column.key)
            if value is None:
                if not fill_empty:
                    raise ContentConversionError(
                        f"Row {index + 1} has no value for column '{column.key}'."
                    )
                value = ""
            cells.append(value)
        rows.append(cells)

    return rows


def validate_and_convert(
    data: TableInput,
    has_header: bool,
    fill_empty: bool = False,
) -> List[List[CellContent]]:
    """
    Validate table shape and normalise every cell.

    Args:
        data: Rows of cell content, a TableObject or its mapping form
        has_header: Whether row 0 is the header row
        fill_empty: Pad short rows with "" instead of rejecting them

    Returns:
        A new list of equal-length rows; the input is not modified

    Raises:
        ContentConversionError: Rows disagree in length or cannot be converted
        UnsupportedContentType: A cell holds something other than a known element
    """
    if is_table_object(data):
        table_object = data if isinstance(data, TableObject) else TableObject.from_dict(data)
        table = table_object_to_rows(table_object, has_header, fill_empty)
    elif isinstance(data, (list, tuple)):
        table = [list(row) if isinstance(row, (list, tuple)) else row for row in data]
    else:
        raise ContentConversionError("Unable to convert TableObject to CellContent.")

    if not table:
        raise ContentConversionError("Table has no rows.")
    for index, row in enumerate(table):
        if not isinstance(row, list):
            raise ContentConversionError(f"Row {index + 1} is not a list of cells.")

    body = table[1:] if has_header else table
    max_row_length = max((len(row) for row in body), default=0)
    header_row_length = len(table[0]) if has_header else max_row_length

    if header_row_length < max_row_length:
        raise ContentConversionError("Header row has fewer cells than other rows.")
    if header_row_length == 0:
        raise ContentConversionError("Table has no columns.")

    converted: List[List[CellContent]] = []
    for index, row in enumerate(table):
        if len(row) < header_row_length:
            if not fill_empty:
                raise ContentConversionError(
                    f"Row {index + 1} has fewer cells than the header row."
                )
            row = row + [""] * (header_row_length - len(row))
        converted.append([coerce_content(cell) for cell in row])

    logger.debug("Validated table: %d rows x %d columns", len(converted), header_row_length)

    return converted
