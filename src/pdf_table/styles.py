"""Named visual presets layered underneath caller options."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from reportlab.lib.colors import Color, HexColor, black, white
from reportlab.pdfbase import pdfmetrics


class GridStyle(Enum):
    """How cell separators are drawn."""
    FULL_GRID = "full_grid"            # Borders on every cell
    BACKGROUND_ONLY = "background"     # No borders, filled rows carry the structure
    ALTERNATING_ROWS = "alternating"   # Zebra striping


@dataclass
class TableStyle:
    """Visual preset for a table."""
    name: str
    font_family: str  # Base font name (Helvetica, Times-Roman, Courier)
    font_size: float
    header_font_size: float
    grid_style: GridStyle
    grid_line_width: float
    grid_color: Color
    header_bg_color: Optional[Color]
    header_text_color: Color
    alternating_row_color: Optional[Color]  # Used when grid_style is ALTERNATING_ROWS
    cell_padding: float
    title_font_size: float

    def to_overrides(self) -> Dict[str, Any]:
        """Option mapping for resolve_options."""
        bold_font = get_bold_font(self.font_family)
        overrides: Dict[str, Any] = {
            "font": self.font_family,
            "text_size": self.font_size,
            "header": {
                "font": bold_font,
                "text_size": self.header_font_size,
                "text_color": self.header_text_color,
                "background_color": self.header_bg_color,
            },
            "title": {"font": bold_font, "text_size": self.title_font_size},
            "border": {"color": self.grid_color, "width": self.grid_line_width},
            "content_margin": {"horizontal": self.cell_padding},
        }
        if self.grid_style == GridStyle.BACKGROUND_ONLY:
            overrides["border"]["width"] = 0
        elif self.grid_style == GridStyle.ALTERNATING_ROWS:
            # Odd data rows get the stripe color, even rows stay unfilled
            overrides["row"] = {"alternate_color": self.alternating_row_color}
        return overrides


TABLE_STYLES: Dict[str, TableStyle] = {
    "default": TableStyle(
        name="default",
        font_family="Helvetica",
        font_size=14,
        header_font_size=15,
        grid_style=GridStyle.FULL_GRID,
        grid_line_width=1.0,
        grid_color=Color(0, 0.2, 0.4),
        header_bg_color=Color(0, 0.2, 0.4),
        header_text_color=Color(0.996, 0.996, 0.996),
        alternating_row_color=None,
        cell_padding=2.0,
        title_font_size=12,
    ),
    "grid": TableStyle(
        name="grid",
        font_family="Times-Roman",
        font_size=10,
        header_font_size=11,
        grid_style=GridStyle.FULL_GRID,
        grid_line_width=0.75,
        grid_color=black,
        header_bg_color=HexColor("#D0D0D0"),
        header_text_color=black,
        alternating_row_color=None,
        cell_padding=3.0,
        title_font_size=12,
    ),
    "minimal": TableStyle(
        name="minimal",
        font_family="Helvetica",
        font_size=9,
        header_font_size=10,
        grid_style=GridStyle.BACKGROUND_ONLY,
        grid_line_width=0.0,
        grid_color=white,
        header_bg_color=HexColor("#E8E8E8"),
        header_text_color=black,
        alternating_row_color=None,
        cell_padding=4.0,
        title_font_size=11,
    ),
    "zebra": TableStyle(
        name="zebra",
        font_family="Helvetica",
        font_size=10,
        header_font_size=11,
        grid_style=GridStyle.ALTERNATING_ROWS,
        grid_line_width=0.5,
        grid_color=HexColor("#A0AEC0"),
        header_bg_color=HexColor("#2C5282"),  # Dark blue
        header_text_color=white,
        alternating_row_color=HexColor("#EDF2F7"),
        cell_padding=3.0,
        title_font_size=12,
    ),
    "mono": TableStyle(
        name="mono",
        font_family="Courier",
        font_size=8,
        header_font_size=9,
        grid_style=GridStyle.FULL_GRID,
        grid_line_width=0.5,
        grid_color=black,
        header_bg_color=None,
        header_text_color=black,
        alternating_row_color=None,
        cell_padding=2.0,
        title_font_size=10,
    ),
}


def get_table_style(name: str) -> TableStyle:
    """Look up a preset by name."""
    try:
        return TABLE_STYLES[name]
    except KeyError:
        raise ValueError(
            f"Unknown table style {name!r}; choose from {', '.join(TABLE_STYLES)}"
        ) from None


def get_style_overrides(name: str) -> Dict[str, Any]:
    return get_table_style(name).to_overrides()


def get_bold_font(font_family: str) -> str:
    """Get the bold variant of a font family, or the family itself if none is known."""
    if font_family.endswith("-Bold"):
        return font_family
    if font_family == "Times-Roman":
        return "Times-Bold"
    elif font_family in ("Helvetica", "Courier"):
        return f"{font_family}-Bold"
    bold = f"{font_family}-Bold"
    if bold in pdfmetrics.getRegisteredFontNames():
        return bold
    return font_family
