from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional

from reportlab.pdfgen.canvas import Canvas

from .config import ReportConfig
from .styles import PALETTE, FontSet

if TYPE_CHECKING:
    from .surface import DrawingSurface

logger = logging.getLogger(__name__)


class NumberedCanvas(Canvas):
    """Canvas that defers page emission so every page can be stamped with 'Page X of Y'."""

    def __init__(self, *args: Any, on_page_end: Optional[Callable[[int, int], None]] = None, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self._saved_page_states: List[Dict[str, Any]] = []
        self._on_page_end = on_page_end

    def showPage(self) -> None:  # noqa: N802
        self._saved_page_states.append(dict(self.__dict__))
        self._startPage()

    def save(self) -> None:  # noqa: D401
        if self._code or not self._saved_page_states:
            self.showPage()
        num_pages = len(self._saved_page_states)
        for state in self._saved_page_states:
            self.__dict__.update(state)
            self.draw_page_footer(num_pages)
            Canvas.showPage(self)
        Canvas.save(self)

    def draw_page_footer(self, page_count: int) -> None:
        if self._on_page_end is not None:
            self._on_page_end(self.getPageNumber(), page_count)


@dataclass(frozen=True)
class ChartRegion:
    x: float
    y: float
    width: float
    height: float
    title: str

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Chart region must have positive size, got {self.width}x{self.height}")

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height


class PageCursor:
    """Vertical write position on the current page, in mm from the top edge."""

    def __init__(self, surface: "DrawingSurface", top_margin: float, bottom_margin: float, y: Optional[float] = None):
        self.surface = surface
        self.top_margin = top_margin
        self.bottom_margin = bottom_margin
        self.y = top_margin if y is None else y
        self.breaks = 0

    @property
    def limit(self) -> float:
        return self.surface.page_height - self.bottom_margin

    @property
    def printable_height(self) -> float:
        return self.limit - self.top_margin

    def ensure_space(self, required_height: float) -> bool:
        """Start a new page when the next block would cross the bottom margin."""
        if self.y + required_height > self.limit:
            self.surface.add_page()
            self.y = self.top_margin
            self.breaks += 1
            logger.debug("Page break before %.1fmm block (page %d)", required_height, self.surface.page_number)
            return True
        return False

    def advance(self, height: float) -> float:
        self.y += height
        return self.y


@dataclass(frozen=True)
class LayoutContext:
    surface: "DrawingSurface"
    config: ReportConfig
    fonts: FontSet
    cursor: PageCursor

    @property
    def margin(self) -> float:
        return self.config.margin

    @property
    def content_width(self) -> float:
        return self.surface.page_width - 2 * self.config.margin


def make_footer_stamp(config: ReportConfig, fonts: FontSet) -> Callable[["DrawingSurface", int, int], None]:
    def _stamp(surface: "DrawingSurface", page_number: int, page_count: int) -> None:
        footer_y = surface.page_height - config.footer_offset
        left = config.margin
        right = surface.page_width - config.margin

        surface.set_stroke_color(PALETTE.divider)
        surface.set_line_width(0.2)
        surface.line(left, footer_y - 5, right, footer_y - 5)

        surface.set_font(fonts.regular, 8)
        surface.set_text_color(PALETTE.muted)
        surface.text(config.footer_text, left, footer_y)
        surface.text(f"Page {page_number} of {page_count}", right, footer_y, align="right")

    return _stamp
