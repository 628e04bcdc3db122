"""Tests for table validation and cell content conversion."""

import pytest

from pdf_table.content import (
    Column,
    ImageElement,
    LinkElement,
    StyledText,
    TableObject,
    coerce_content,
    element_from_dict,
)
from pdf_table.errors import ContentConversionError, InvalidCellElement, UnsupportedContentType
from pdf_table.metrics import Font
from pdf_table.validation import validate_and_convert


class TestShape:

    def test_short_rows_are_filled(self):
        rows = validate_and_convert([["A", "B", "C"], ["x"]], has_header=True, fill_empty=True)
        assert rows == [["A", "B", "C"], ["x", "", ""]]

    def test_short_rows_are_rejected_without_fill(self):
        with pytest.raises(ContentConversionError, match="Row 2 has fewer cells"):
            validate_and_convert([["A", "B", "C"], ["x"]], has_header=True)

    def test_header_shorter_than_body_is_rejected(self):
        with pytest.raises(ContentConversionError, match="Header row has fewer cells"):
            validate_and_convert([["A"], ["x", "y"]], has_header=True, fill_empty=True)

    def test_without_header_longest_row_sets_width(self):
        rows = validate_and_convert([["a"], ["b", "c"]], has_header=False, fill_empty=True)
        assert rows == [["a", ""], ["b", "c"]]

    def test_empty_table_is_rejected(self):
        with pytest.raises(ContentConversionError):
            validate_and_convert([], has_header=True)

    def test_table_without_columns_is_rejected(self):
        with pytest.raises(ContentConversionError):
            validate_and_convert([[]], has_header=True)

    def test_non_list_input_is_rejected(self):
        with pytest.raises(ContentConversionError, match="Unable to convert"):
            validate_and_convert("not a table", has_header=True)

    def test_row_that_is_not_a_list_is_rejected(self):
        with pytest.raises(ContentConversionError):
            validate_and_convert([["A"], "x"], has_header=True)

    def test_input_is_not_mutated(self):
        table = [["A", "B"], ["x"]]
        validate_and_convert(table, has_header=True, fill_empty=True)
        assert table == [["A", "B"], ["x"]]

    def test_tuples_are_accepted(self):
        rows = validate_and_convert((("A", "B"), ("x", "y")), has_header=True)
        assert rows == [["A", "B"], ["x", "y"]]


class TestTableObject:

    COLUMNS = [Column(title="Name", key="name"), Column(title="Qty", key="qty")]

    def test_titles_become_header_row(self):
        table = TableObject(columns=self.COLUMNS, rows=[{"qty": "2", "name": "pear"}])
        rows = validate_and_convert(table, has_header=True)
        assert rows == [["Name", "Qty"], ["pear", "2"]]

    def test_no_header_row_without_header(self):
        table = TableObject(columns=self.COLUMNS, rows=[{"qty": "2", "name": "pear"}])
        assert validate_and_convert(table, has_header=False) == [["pear", "2"]]

    def test_missing_key_filled_or_rejected(self):
        table = TableObject(columns=self.COLUMNS, rows=[{"name": "pear"}])
        assert validate_and_convert(table, True, fill_empty=True)[1] == ["pear", ""]
        with pytest.raises(ContentConversionError, match="no value for column 'qty'"):
            validate_and_convert(table, True)

    def test_mapping_form_is_accepted(self):
        data = {
            "columns": [{"title": "Name", "key": "name"}],
            "rows": [{"name": "fig"}],
        }
        assert validate_and_convert(data, True) == [["Name"], ["fig"]]


class TestCellContent:

    def test_known_elements_pass_through(self):
        image = ImageElement(width=5, height=5, data=b"x")
        link = LinkElement(text="a", page=1)
        styled = StyledText(text="b")
        rows = validate_and_convert([["h1", "h2", "h3", "h4"], [image, link, styled, None]], True)
        assert rows[1] == [image, link, styled, None]

    def test_tagged_mappings_become_elements(self):
        rows = validate_and_convert([[
            {"type": "text", "text": "bold", "font": "Helvetica-Bold", "text_color": "#FF0000"},
            {"type": "link", "text": "home", "url": "https://example.com"},
            {"type": "image", "src": "logo.png", "width": 20, "height": 10},
        ]], has_header=False)

        text, link, image = rows[0]
        assert text.font == Font("Helvetica-Bold")
        assert text.text_color.rgb() == pytest.approx((1, 0, 0))
        assert link.url == "https://example.com" and not link.is_internal
        assert image.src == "logo.png"

    def test_mixed_cells_are_flat_lists(self):
        content = coerce_content(["a", {"type": "text", "text": "b"}])
        assert content == ["a", StyledText(text="b")]

    def test_nested_mixed_content_is_rejected(self):
        with pytest.raises(UnsupportedContentType):
            validate_and_convert([[["a", ["b"]]]], has_header=False)

    def test_empty_mixed_cell_is_rejected(self):
        with pytest.raises(UnsupportedContentType, match="at least one element"):
            validate_and_convert([["A", "B"], [[], "x"]], has_header=True)

    def test_unknown_values_are_rejected(self):
        with pytest.raises(UnsupportedContentType):
            validate_and_convert([[3.14]], has_header=False)

    def test_unknown_mapping_type_is_rejected(self):
        with pytest.raises(UnsupportedContentType):
            element_from_dict({"type": "video", "src": "clip.mp4"})

    def test_unexpected_mapping_fields_are_invalid(self):
        with pytest.raises(InvalidCellElement):
            element_from_dict({"type": "text", "text": "a", "weight": 700})


class TestElementRules:

    def test_image_needs_exactly_one_source(self):
        with pytest.raises(InvalidCellElement):
            ImageElement(width=5, height=5)
        with pytest.raises(InvalidCellElement):
            ImageElement(width=5, height=5, src="a.png", data=b"x")

    def test_image_size_must_be_positive(self):
        with pytest.raises(InvalidCellElement):
            ImageElement(width=0, height=5, data=b"x")

    def test_link_needs_exactly_one_target(self):
        with pytest.raises(InvalidCellElement):
            LinkElement(text="a")
        with pytest.raises(InvalidCellElement):
            LinkElement(text="a", url="https://example.com", page=1)

    def test_link_pages_start_at_one(self):
        with pytest.raises(InvalidCellElement):
            LinkElement(text="a", page=0)

    def test_alignment_is_checked(self):
        with pytest.raises(InvalidCellElement):
            StyledText(text="a", alignment="justify")
