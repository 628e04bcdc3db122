"""Drawing surface backed by a ReportLab canvas."""

import io
from pathlib import Path
from typing import Optional, Set, Tuple, Union

from reportlab.lib.colors import Color
from reportlab.lib.pagesizes import LETTER, landscape
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from .errors import LinkTargetMissing
from .metrics import Font


PORTRAIT_SIZE = LETTER  # 612 x 792 points
LANDSCAPE_SIZE = landscape(LETTER)  # 792 x 612 points

Rect = Tuple[float, float, float, float]  # x0, y0, x1, y1


def page_destination(page: int) -> str:
    """Bookmark name used for internal links to a 1-based page."""
    return f"page-{page}"


class ReportLabSurface:
    """Paints primitives on a ReportLab canvas.

    A page is bookmarked when its first primitive is drawn, so links can
    target it by page number. Pages are numbered from 1. Pages left empty are
    dropped by ReportLab and never become link targets.
    """

    def __init__(
        self,
        target: Union[str, Path, canvas.Canvas],
        pagesize: Tuple[float, float] = PORTRAIT_SIZE,
    ):
        if isinstance(target, canvas.Canvas):
            self.canvas = target
        else:
            self.canvas = canvas.Canvas(str(target), pagesize=pagesize)
        self.pagesize = pagesize
        self.page_number = 1
        self.bookmarked_pages: Set[int] = set()
        self.link_targets: Set[int] = set()

    def _mark_page(self) -> None:
        if self.page_number not in self.bookmarked_pages:
            self.canvas.bookmarkPage(page_destination(self.page_number))
            self.bookmarked_pages.add(self.page_number)

    def page_width(self) -> float:
        return self.pagesize[0]

    def page_height(self) -> float:
        return self.pagesize[1]

    def draw_text(
        self,
        text: str,
        x: float,
        y: float,
        size: float,
        font: Font,
        color: Color,
    ) -> None:
        self._mark_page()
        c = self.canvas
        c.saveState()
        c.setFont(font.name, size)
        c.setFillColor(color)
        c.drawString(x, y, text)
        c.restoreState()

    def draw_rectangle(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        fill_color: Optional[Color] = None,
        border_width: float = 0,
        border_color: Optional[Color] = None,
    ) -> None:
        self._mark_page()
        c = self.canvas
        stroke = border_width > 0 and border_color is not None
        c.saveState()
        if fill_color is not None:
            c.setFillColor(fill_color)
        if stroke:
            c.setStrokeColor(border_color)
            c.setLineWidth(border_width)
        c.rect(x, y, width, height, fill=fill_color is not None, stroke=stroke)
        c.restoreState()

    def draw_line(
        self,
        x1: float,
        y1: float,
        x2: float,
        y2: float,
        thickness: float,
        color: Color,
    ) -> None:
        self._mark_page()
        c = self.canvas
        c.saveState()
        c.setStrokeColor(color)
        c.setLineWidth(thickness)
        c.line(x1, y1, x2, y2)
        c.restoreState()

    def draw_image(self, data: bytes, x: float, y: float, width: float, height: float) -> None:
        self._mark_page()
        image = ImageReader(io.BytesIO(data))
        self.canvas.drawImage(image, x, y, width=width, height=height, mask="auto")

    def add_link_annotation(
        self,
        rect: Rect,
        url: Optional[str] = None,
        page: Optional[int] = None,
    ) -> None:
        """Register a clickable area targeting a URL or a page number."""
        if (url is None) == (page is None):
            raise ValueError("Link annotation needs exactly one of url or page")
        if url is not None:
            self.canvas.linkURL(url, rect, relative=0, thickness=0)
        else:
            self.link_targets.add(page)
            self.canvas.linkAbsolute("", page_destination(page), Rect=rect, thickness=0)

    def show_page(self) -> int:
        """Finish the current page and start the next one."""
        self.canvas.showPage()
        self.page_number += 1
        return self.page_number

    def save(self) -> None:
        """Write the document.

        Raises:
            LinkTargetMissing: An internal link targets a page with no content
        """
        missing = sorted(self.link_targets - self.bookmarked_pages)
        if missing:
            raise LinkTargetMissing(
                f"Internal links point at pages without content: {missing}"
            )
        self.canvas.save()
