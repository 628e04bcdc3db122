"""Font measurement backed by ReportLab font metrics."""

from dataclasses import dataclass
from pathlib import Path
from typing import Union

from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont


@dataclass(frozen=True)
class Font:
    """Handle for a font registered with ReportLab.

    Standard Type 1 faces (Helvetica, Times-Roman, Courier and their bold
    variants) are always available. TrueType faces must be registered first
    with :meth:`register_ttf`.
    """
    name: str = "Helvetica"

    def width_of_text_at_size(self, text: str, size: float) -> float:
        """Width of ``text`` in points at ``size``."""
        return pdfmetrics.stringWidth(text, self.name, size)

    def line_height_at_size(self, size: float) -> float:
        """Distance from descender to ascender at ``size``."""
        ascent, descent = pdfmetrics.getAscentDescent(self.name, size)
        return ascent - descent

    @classmethod
    def register_ttf(cls, name: str, path: Union[str, Path]) -> "Font":
        """Register a TrueType file under ``name`` and return its handle."""
        pdfmetrics.registerFont(TTFont(name, str(path)))
        return cls(name)


def as_font(value: Union[str, Font]) -> Font:
    """Accept either a font name or an existing handle."""
    if isinstance(value, str):
        return Font(value)
    return value
