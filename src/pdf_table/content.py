"""Cell content model: plain text, styled text, images and links."""

from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Sequence, Union

from reportlab.lib.colors import Color

from .config import parse_color
from .errors import InvalidCellElement, UnsupportedContentType
from .metrics import Font, as_font


ALIGNMENTS = ("left", "center", "right")


def _check_alignment(alignment: Optional[str]) -> None:
    if alignment is not None and alignment not in ALIGNMENTS:
        raise InvalidCellElement(
            f"Alignment must be one of {', '.join(ALIGNMENTS)}, got {alignment!r}"
        )


@dataclass(frozen=True)
class StyledText:
    """Text with its own font, size, color or alignment."""
    text: str
    font: Optional[Font] = None
    text_size: Optional[float] = None
    text_color: Optional[Color] = None
    alignment: Optional[str] = None

    def __post_init__(self):
        _check_alignment(self.alignment)


@dataclass(frozen=True)
class ImageElement:
    """An image given either by source reference or by raw bytes."""
    width: float
    height: float
    src: Optional[str] = None
    data: Optional[bytes] = None
    alignment: Optional[str] = None
    horizontal_margin: Optional[float] = None

    def __post_init__(self):
        if (self.src is None) == (self.data is None):
            raise InvalidCellElement(
                "Image element must have exactly one of 'src' or 'data'"
            )
        if self.width <= 0 or self.height <= 0:
            raise InvalidCellElement("Image width and height must be positive")
        _check_alignment(self.alignment)


@dataclass(frozen=True)
class LinkElement:
    """Link text pointing at an external URL or a 1-based page number."""
    text: str
    url: Optional[str] = None
    page: Optional[int] = None
    font: Optional[Font] = None
    text_size: Optional[float] = None
    text_color: Optional[Color] = None
    alignment: Optional[str] = None

    def __post_init__(self):
        if (self.url is None) == (self.page is None):
            raise InvalidCellElement(
                "Link element must have exactly one of 'url' or 'page'"
            )
        if self.page is not None and self.page < 1:
            raise InvalidCellElement("Link page numbers start at 1")
        _check_alignment(self.alignment)

    @property
    def is_internal(self) -> bool:
        return self.page is not None


# None marks a blank cell
CellElement = Union[None, str, StyledText, ImageElement, LinkElement]
CellContent = Union[CellElement, List[CellElement]]

TEXT_ELEMENTS = (str, StyledText, LinkElement)
ELEMENT_TYPES = (str, StyledText, ImageElement, LinkElement)


def is_mixed(content: Any) -> bool:
    """True when the cell holds an ordered list of elements."""
    return isinstance(content, (list, tuple))


def element_text(element: Union[str, StyledText, LinkElement]) -> str:
    if isinstance(element, str):
        return element
    return element.text


def element_from_dict(data: Mapping[str, Any]) -> CellElement:
    """Build a cell element from its tagged mapping form.

    ``{"type": "text", ...}``, ``{"type": "image", ...}`` and
    ``{"type": "link", ...}`` are recognised. Colors are parsed by the
    config layer, so mappings may carry ``"#RRGGBB"`` strings.
    """
    kind = data.get("type")
    fields = {k: v for k, v in data.items() if k != "type"}
    if "font" in fields and fields["font"] is not None:
        fields["font"] = as_font(fields["font"])
    if "text_color" in fields and fields["text_color"] is not None:
        fields["text_color"] = parse_color(fields["text_color"])

    try:
        if kind == "text":
            return StyledText(**fields)
        if kind == "image":
            return ImageElement(**fields)
        if kind == "link":
            return LinkElement(**fields)
    except TypeError as e:
        raise InvalidCellElement(f"Invalid fields for {kind} element: {e}") from e

    raise UnsupportedContentType(f"Unsupported cell content type: {kind!r}")


def coerce_element(value: Any) -> CellElement:
    """Normalise one element, rejecting anything outside the closed set."""
    if value is None or isinstance(value, ELEMENT_TYPES):
        return value
    if isinstance(value, Mapping):
        return element_from_dict(value)
    raise UnsupportedContentType(
        f"Unsupported cell content type: {type(value).__name__}"
    )


def coerce_content(value: Any) -> CellContent:
    """Normalise a cell: a single element or a flat list of elements."""
    if is_mixed(value):
        if not value:
            raise UnsupportedContentType("Mixed cell content needs at least one element")
        elements = []
        for item in value:
            if is_mixed(item):
                raise UnsupportedContentType("Mixed cell content cannot be nested")
            elements.append(coerce_element(item))
        return elements
    return coerce_element(value)


def iter_elements(content: CellContent) -> Sequence[CellElement]:
    """Elements of a cell in draw order."""
    if is_mixed(content):
        return list(content)
    return [content]


@dataclass(frozen=True)
class Column:
    """Named column of a TableObject."""
    title: str
    key: str


@dataclass
class TableObject:
    """Keyed alternative to a list of rows.

    Each row maps column keys to cell content; rows are projected through
    the column order when the table is converted.
    """
    columns: List[Column]
    rows: List[Mapping[str, Any]]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TableObject":
        columns = [
            c if isinstance(c, Column) else Column(title=c["title"], key=c["key"])
            for c in data["columns"]
        ]
        return cls(columns=columns, rows=list(data["rows"]))
