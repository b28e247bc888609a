"""Drawing primitives in millimetres with a top-left origin.

Chart drawers and section builders only talk to a ``DrawingSurface``; the
ReportLab implementation flips the y axis and converts units at this seam.
"""

from __future__ import annotations

from io import BytesIO
from typing import Callable, List, Optional, Protocol

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader, simpleSplit

from .layout import NumberedCanvas

PageStamp = Callable[["DrawingSurface", int, int], None]


class DrawingSurface(Protocol):
    page_width: float
    page_height: float

    def set_font(self, name: str, size: float) -> None: ...

    def set_fill_color(self, color: colors.Color) -> None: ...

    def set_stroke_color(self, color: colors.Color) -> None: ...

    def set_text_color(self, color: colors.Color) -> None: ...

    def set_line_width(self, width: float) -> None: ...

    def rect(self, x: float, y: float, w: float, h: float, fill: bool = False, stroke: bool = True) -> None: ...

    def line(self, x1: float, y1: float, x2: float, y2: float) -> None: ...

    def circle(self, cx: float, cy: float, r: float, fill: bool = False, stroke: bool = True) -> None: ...

    def triangle(
        self,
        x1: float,
        y1: float,
        x2: float,
        y2: float,
        x3: float,
        y3: float,
        fill: bool = True,
        stroke: bool = False,
    ) -> None: ...

    def text(self, value: str, x: float, y: float, align: str = "left") -> None: ...

    def split_text(self, value: str, width: float) -> List[str]: ...

    def image(self, data: bytes, x: float, y: float, w: float, h: float) -> None: ...

    def add_page(self) -> None: ...

    @property
    def page_number(self) -> int: ...

    @property
    def page_count(self) -> int: ...

    def stamp_pages(self, stamp: PageStamp) -> None: ...

    def save(self) -> bytes: ...


class CanvasSurface:
    """``DrawingSurface`` backed by an in-memory ReportLab canvas."""

    def __init__(self, pagesize=A4, title: Optional[str] = None, author: Optional[str] = None):
        self._buffer = BytesIO()
        self._canvas = NumberedCanvas(self._buffer, pagesize=pagesize, on_page_end=self._on_page_end)
        if title:
            self._canvas.setTitle(title)
        if author:
            self._canvas.setAuthor(author)

        self.page_width = pagesize[0] / mm
        self.page_height = pagesize[1] / mm

        self._font = ("Helvetica", 10.0)
        self._fill: colors.Color = colors.black
        self._stroke: colors.Color = colors.black
        self._text: colors.Color = colors.black
        self._line_width = 0.2
        self._stamp: Optional[PageStamp] = None
        self._page_count = 0

    # --- state ---

    def set_font(self, name: str, size: float) -> None:
        self._font = (name, size)

    def set_fill_color(self, color: colors.Color) -> None:
        self._fill = color

    def set_stroke_color(self, color: colors.Color) -> None:
        self._stroke = color

    def set_text_color(self, color: colors.Color) -> None:
        self._text = color

    def set_line_width(self, width: float) -> None:
        self._line_width = width

    # ReportLab resets graphics state on every page, so state is applied per call
    def _apply_shape_state(self) -> None:
        c = self._canvas
        c.setFillColor(self._fill)
        c.setStrokeColor(self._stroke)
        c.setLineWidth(self._line_width * mm)

    def _y(self, y: float) -> float:
        return (self.page_height - y) * mm

    # --- primitives ---

    def rect(self, x: float, y: float, w: float, h: float, fill: bool = False, stroke: bool = True) -> None:
        self._apply_shape_state()
        self._canvas.rect(x * mm, self._y(y + h), w * mm, h * mm, stroke=int(stroke), fill=int(fill))

    def line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        self._apply_shape_state()
        self._canvas.line(x1 * mm, self._y(y1), x2 * mm, self._y(y2))

    def circle(self, cx: float, cy: float, r: float, fill: bool = False, stroke: bool = True) -> None:
        self._apply_shape_state()
        self._canvas.circle(cx * mm, self._y(cy), r * mm, stroke=int(stroke), fill=int(fill))

    def triangle(
        self,
        x1: float,
        y1: float,
        x2: float,
        y2: float,
        x3: float,
        y3: float,
        fill: bool = True,
        stroke: bool = False,
    ) -> None:
        self._apply_shape_state()
        path = self._canvas.beginPath()
        path.moveTo(x1 * mm, self._y(y1))
        path.lineTo(x2 * mm, self._y(y2))
        path.lineTo(x3 * mm, self._y(y3))
        path.close()
        self._canvas.drawPath(path, stroke=int(stroke), fill=int(fill))

    def text(self, value: str, x: float, y: float, align: str = "left") -> None:
        c = self._canvas
        c.setFont(*self._font)
        c.setFillColor(self._text)
        if align == "center":
            c.drawCentredString(x * mm, self._y(y), value)
        elif align == "right":
            c.drawRightString(x * mm, self._y(y), value)
        else:
            c.drawString(x * mm, self._y(y), value)

    def split_text(self, value: str, width: float) -> List[str]:
        name, size = self._font
        return simpleSplit(value, name, size, width * mm) or [""]

    def image(self, data: bytes, x: float, y: float, w: float, h: float) -> None:
        reader = ImageReader(BytesIO(data))
        self._canvas.drawImage(
            reader,
            x * mm,
            self._y(y + h),
            w * mm,
            h * mm,
            mask="auto",
            preserveAspectRatio=True,
        )

    # --- pages ---

    def add_page(self) -> None:
        self._canvas.showPage()

    @property
    def page_number(self) -> int:
        return self._canvas.getPageNumber()

    @property
    def page_count(self) -> int:
        return self._page_count

    def stamp_pages(self, stamp: PageStamp) -> None:
        """Register a per-page pass run at save time, once the page count is final."""
        self._stamp = stamp

    def _on_page_end(self, page_number: int, page_count: int) -> None:
        self._page_count = page_count
        if self._stamp is not None:
            self._stamp(self, page_number, page_count)

    def save(self) -> bytes:
        self._canvas.save()
        return self._buffer.getvalue()
