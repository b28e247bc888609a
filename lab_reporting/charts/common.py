from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Tuple

from ..layout import ChartRegion
from ..styles import PALETTE, FontSet
from ..surface import DrawingSurface

NO_DATA_TEXT = "No data available"
GRID_INTERVALS = 4
TITLE_SIZE = 12
LABEL_SIZE = 8


@dataclass(frozen=True)
class PlotArea:
    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height


def inset(region: ChartRegion, left: float, top: float, right: float, bottom: float) -> PlotArea:
    width = max(region.width - left - right, 1.0)
    height = max(region.height - top - bottom, 1.0)
    return PlotArea(region.x + left, region.y + top, width, height)


def field(record: Any, key: str, default: Any = 0) -> Any:
    if isinstance(record, dict):
        value = record.get(key, default)
    else:
        value = getattr(record, key, default)
    return default if value is None else value


def grid_levels(plot: PlotArea) -> List[Tuple[int, float]]:
    """(index, y) for each gridline, top (index 0) to bottom."""
    return [(i, plot.top + i * plot.height / GRID_INTERVALS) for i in range(GRID_INTERVALS + 1)]


def draw_title(surface: DrawingSurface, fonts: FontSet, title: str, x: float, y: float) -> None:
    surface.set_font(fonts.bold, TITLE_SIZE)
    surface.set_text_color(PALETTE.text_primary)
    surface.text(title, x, y)


def draw_frame(surface: DrawingSurface, fonts: FontSet, region: ChartRegion) -> None:
    draw_title(surface, fonts, region.title, region.x, region.y - 5)
    surface.set_stroke_color(PALETTE.border)
    surface.set_line_width(0.2)
    surface.rect(region.x, region.y, region.width, region.height, fill=False, stroke=True)


def draw_placeholder(surface: DrawingSurface, fonts: FontSet, x: float, y: float) -> None:
    surface.set_font(fonts.regular, 10)
    surface.set_text_color(PALETTE.muted)
    surface.text(NO_DATA_TEXT, x, y, align="center")


def draw_grid(surface: DrawingSurface, plot: PlotArea) -> None:
    surface.set_stroke_color(PALETTE.grid)
    surface.set_line_width(0.2)
    for _, y in grid_levels(plot):
        surface.line(plot.left, y, plot.right, y)

    surface.set_stroke_color(PALETTE.axis)
    surface.set_line_width(0.3)
    surface.line(plot.left, plot.top, plot.left, plot.bottom)
    surface.line(plot.left, plot.bottom, plot.right, plot.bottom)


def draw_y_labels(surface: DrawingSurface, fonts: FontSet, plot: PlotArea, labels: List[str]) -> None:
    surface.set_font(fonts.regular, LABEL_SIZE)
    surface.set_text_color(PALETTE.text_secondary)
    for (_, y), label in zip(grid_levels(plot), labels):
        surface.text(label, plot.left - 2, y + 1, align="right")
