"""Line chart for a single labelled series."""

from __future__ import annotations

import logging
from typing import Any, List, Sequence, Tuple

from ..formatting import round_half_up
from ..layout import ChartRegion
from ..styles import DEFAULT_FONTS, PALETTE, FontSet
from ..surface import DrawingSurface
from .common import (
    GRID_INTERVALS,
    LABEL_SIZE,
    PlotArea,
    draw_frame,
    draw_grid,
    draw_placeholder,
    draw_y_labels,
    field,
    inset,
)

logger = logging.getLogger(__name__)

PAD_LEFT = 12.0
PAD_RIGHT = 6.0
PAD_TOP = 6.0
PAD_BOTTOM = 10.0
LINE_WIDTH = 0.7
MARKER_RADIUS = 1.5


def plot_area(region: ChartRegion) -> PlotArea:
    return inset(region, PAD_LEFT, PAD_TOP, PAD_RIGHT, PAD_BOTTOM)


def value_range(values: Sequence[float]) -> Tuple[float, float]:
    """(minimum, span). A flat series gets a span of 1 centred on its value."""
    lo, hi = min(values), max(values)
    if hi == lo:
        return lo - 0.5, 1.0
    return lo, hi - lo


def point_positions(values: Sequence[float], plot: PlotArea) -> List[Tuple[float, float]]:
    lo, span = value_range(values)
    step = plot.width / (len(values) - 1) if len(values) > 1 else 0.0
    return [
        (plot.left + i * step, plot.bottom - (v - lo) / span * plot.height)
        for i, v in enumerate(values)
    ]


def y_labels(values: Sequence[float]) -> List[str]:
    lo, span = value_range(values)
    return [
        str(round_half_up(lo + span * (GRID_INTERVALS - i) / GRID_INTERVALS))
        for i in range(GRID_INTERVALS + 1)
    ]


def draw_line_chart(
    surface: DrawingSurface,
    points: Sequence[Any],
    region: ChartRegion,
    label_key: str = "week",
    value_key: str = "productivity",
    fonts: FontSet = DEFAULT_FONTS,
) -> None:
    draw_frame(surface, fonts, region)

    if not points:
        logger.debug("Line chart %r has no points", region.title)
        draw_placeholder(surface, fonts, region.x + region.width / 2, region.y + region.height / 2)
        return

    values = [float(field(p, value_key)) for p in points]
    plot = plot_area(region)
    draw_grid(surface, plot)
    draw_y_labels(surface, fonts, plot, y_labels(values))

    positions = point_positions(values, plot)

    surface.set_stroke_color(PALETTE.line_series)
    surface.set_line_width(LINE_WIDTH)
    for (x1, y1), (x2, y2) in zip(positions, positions[1:]):
        surface.line(x1, y1, x2, y2)

    surface.set_fill_color(PALETTE.line_series)
    for x, y in positions:
        surface.circle(x, y, MARKER_RADIUS, fill=True, stroke=False)

    surface.set_font(fonts.regular, LABEL_SIZE)
    surface.set_text_color(PALETTE.text_secondary)
    for (x, _), point in zip(positions, points):
        surface.text(str(field(point, label_key, "")), x, plot.bottom + 5, align="center")
