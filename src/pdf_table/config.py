"""Option dataclasses, defaulting and YAML loading for table drawing."""

from dataclasses import dataclass, field, fields, is_dataclass, replace
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union
import yaml

from reportlab.lib.colors import Color, toColor

from .metrics import Font, as_font
from .styles import get_bold_font, get_style_overrides
from .text_wrap import BreakWordMode


ColorLike = Union[Color, str, List[float], None]


def parse_color(value: ColorLike) -> Optional[Color]:
    """Convert "#RRGGBB", a color name or an [r, g, b] list to a Color."""
    if value is None or isinstance(value, Color):
        return value
    if isinstance(value, (list, tuple)):
        if len(value) != 3:
            raise ValueError(f"RGB colors need three components, got {value!r}")
        return Color(*(float(c) for c in value))
    return toColor(value)


@dataclass
class ColumnOptions:
    width_mode: str = "auto"  # "equal", "auto" or "wrapHeader"
    override_widths: List[float] = field(default_factory=list)


@dataclass
class RowOptions:
    # Indexed by data row, so index 0 is the first row after the header
    background_colors: List[Optional[Color]] = field(default_factory=list)
    # Fills odd data rows that have no entry in background_colors
    alternate_color: Optional[Color] = None
    override_heights: List[float] = field(default_factory=list)


@dataclass
class HeaderOptions:
    enabled: bool = True
    font: Font = field(default_factory=lambda: Font("Helvetica-Bold"))
    text_size: float = 15
    text_color: Color = field(default_factory=lambda: Color(0.996, 0.996, 0.996))
    background_color: Optional[Color] = field(default_factory=lambda: Color(0, 0.2, 0.4))
    content_alignment: str = "left"


@dataclass
class TitleOptions:
    text: str = ""
    text_size: float = 12
    font: Font = field(default_factory=lambda: Font("Helvetica-Bold"))
    text_color: Color = field(default_factory=lambda: Color(0, 0, 0))
    alignment: str = "center"


@dataclass
class BorderOptions:
    color: Color = field(default_factory=lambda: Color(0, 0.2, 0.4))
    width: float = 1


@dataclass
class PageMarginOptions:
    bottom: float = 5
    right: float = 50


@dataclass
class ContentMarginOptions:
    horizontal: float = 2
    vertical: float = 0


@dataclass
class TableOptions:
    """Fully resolved drawing options. Every field is always populated."""

    text_size: float = 14
    text_color: Color = field(default_factory=lambda: Color(0, 0, 0))
    content_alignment: str = "left"
    font: Font = field(default_factory=lambda: Font("Helvetica"))
    link_color: Color = field(default_factory=lambda: Color(0, 0, 1))
    line_height: float = 1.36
    column: ColumnOptions = field(default_factory=ColumnOptions)
    row: RowOptions = field(default_factory=RowOptions)
    header: HeaderOptions = field(default_factory=HeaderOptions)
    title: TitleOptions = field(default_factory=TitleOptions)
    border: BorderOptions = field(default_factory=BorderOptions)
    page_margin: PageMarginOptions = field(default_factory=PageMarginOptions)
    content_margin: ContentMarginOptions = field(default_factory=ContentMarginOptions)
    fill_undefined_cells: bool = False
    break_word_mode: BreakWordMode = BreakWordMode.ESSENTIAL

    @property
    def has_header(self) -> bool:
        return self.header.enabled

    @classmethod
    def from_yaml(cls, path: Path, style: Optional[str] = None) -> "TableOptions":
        """Load options from a YAML file."""
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
        return resolve_options(data, style=style)

    def to_yaml(self, path: Path) -> None:
        """Save options to a YAML file."""
        with open(path, "w") as f:
            yaml.dump(_to_plain(self), f, default_flow_style=False, sort_keys=False)


# Nested option groups merged key by key; every other dataclass is a plain value
OPTION_GROUPS = (
    ColumnOptions,
    RowOptions,
    HeaderOptions,
    TitleOptions,
    BorderOptions,
    PageMarginOptions,
    ContentMarginOptions,
)


def _convert_value(key: str, value: Any) -> Any:
    """Turn plain YAML/JSON values into option types."""
    if key == "font":
        return as_font(value)
    if key.endswith("color"):
        return parse_color(value)
    if key == "background_colors":
        return [parse_color(c) for c in value]
    if key in ("override_widths", "override_heights"):
        return [float(v) for v in value]
    if key == "break_word_mode" and not isinstance(value, BreakWordMode):
        return BreakWordMode(value)
    return value


def _merge_group(group: Any, overrides: Mapping[str, Any], path: str = "") -> Any:
    known = {f.name for f in fields(group)}
    values: Dict[str, Any] = {}

    for key, value in overrides.items():
        if key not in known:
            raise ValueError(f"Unknown table option: {path}{key}")
        current = getattr(group, key)
        if isinstance(current, OPTION_GROUPS):
            if not isinstance(value, Mapping):
                raise ValueError(f"Option {path}{key} must be a mapping")
            values[key] = _merge_group(current, value, f"{path}{key}.")
        else:
            values[key] = _convert_value(key, value)

    return replace(group, **values)


def _font_given(overrides: Mapping[str, Any], group: str) -> bool:
    section = overrides.get(group)
    return isinstance(section, Mapping) and "font" in section


def resolve_options(
    overrides: Optional[Union[Mapping[str, Any], TableOptions]] = None,
    style: Optional[str] = None,
) -> TableOptions:
    """
    Build fully populated options from partial overrides.

    Args:
        overrides: Nested mapping of option values, or ready options
        style: Optional preset name from pdf_table.styles applied first

    Returns:
        TableOptions with defaults filled in
    """
    if isinstance(overrides, TableOptions):
        return overrides

    overrides = dict(overrides or {})
    options = TableOptions()
    if style is not None:
        options = _merge_group(options, get_style_overrides(style))
    options = _merge_group(options, overrides)

    # A new body font carries its bold face to header and title unless set
    if "font" in overrides:
        bold = Font(get_bold_font(options.font.name))
        if not _font_given(overrides, "header"):
            options.header = replace(options.header, font=bold)
        if not _font_given(overrides, "title"):
            options.title = replace(options.title, font=bold)

    return options


def load_options(path: Optional[Path] = None, style: Optional[str] = None) -> TableOptions:
    """Load options from path or return the defaults."""
    if path is None:
        return resolve_options(style=style)
    return TableOptions.from_yaml(path, style=style)


def _to_plain(value: Any) -> Any:
    if isinstance(value, Font):
        return value.name
    if isinstance(value, Color):
        return [round(c, 4) for c in value.rgb()]
    if isinstance(value, BreakWordMode):
        return value.value
    if is_dataclass(value):
        return {f.name: _to_plain(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, list):
        return [_to_plain(v) for v in value]
    return value
