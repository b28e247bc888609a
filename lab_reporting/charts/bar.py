"""Grouped bar chart: one group per record, one bar per series role."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Sequence

from ..formatting import round_half_up
from ..layout import ChartRegion
from ..styles import BAR_SERIES, DEFAULT_FONTS, PALETTE, BarSeries, FontSet
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
PAD_TOP = 6.0
PAD_BOTTOM = 10.0
LEGEND_WIDTH = 26.0
PAD_RIGHT = LEGEND_WIDTH + 4.0

GROUP_FILL = 0.75
BAR_GAP = 0.8
LEGEND_ROW = 7.0
SWATCH_W = 6.0
SWATCH_H = 4.0


@dataclass(frozen=True)
class Bar:
    series: BarSeries
    index: int
    x: float
    y: float
    width: float
    height: float


def plot_area(region: ChartRegion) -> PlotArea:
    return inset(region, PAD_LEFT, PAD_TOP, PAD_RIGHT, PAD_BOTTOM)


def max_value(records: Sequence[Any]) -> float:
    values = [float(field(r, s.key)) for r in records for s in BAR_SERIES]
    return max(values) if values else 0.0


def slot_width(plot: PlotArea, count: int) -> float:
    return plot.width / count


def layout_bars(records: Sequence[Any], plot: PlotArea, peak: float) -> List[Bar]:
    """Bars for every non-zero value; ``peak`` must be positive."""
    slot = slot_width(plot, len(records))
    group = slot * GROUP_FILL
    gap = min(BAR_GAP, group * 0.05)
    bar_w = (group - gap * (len(BAR_SERIES) - 1)) / len(BAR_SERIES)

    bars: List[Bar] = []
    for index, record in enumerate(records):
        group_left = plot.left + index * slot + (slot - group) / 2
        for k, series in enumerate(BAR_SERIES):
            value = float(field(record, series.key))
            if value <= 0:
                continue
            height = value / peak * plot.height
            bars.append(
                Bar(
                    series=series,
                    index=index,
                    x=group_left + k * (bar_w + gap),
                    y=plot.bottom - height,
                    width=bar_w,
                    height=height,
                )
            )
    return bars


def y_labels(peak: float) -> List[str]:
    return [str(round_half_up(peak * (GRID_INTERVALS - i) / GRID_INTERVALS)) for i in range(GRID_INTERVALS + 1)]


def draw_legend(surface: DrawingSurface, fonts: FontSet, region: ChartRegion) -> None:
    lx = region.right - LEGEND_WIDTH
    surface.set_font(fonts.regular, LABEL_SIZE)
    surface.set_text_color(PALETTE.text_secondary)
    for k, series in enumerate(BAR_SERIES):
        row_y = region.y + 8 + k * LEGEND_ROW
        surface.set_fill_color(series.color)
        surface.rect(lx, row_y - 3, SWATCH_W, SWATCH_H, fill=True, stroke=False)
        surface.text(series.label, lx + SWATCH_W + 2, row_y)


def draw_bar_chart(
    surface: DrawingSurface,
    records: Sequence[Any],
    region: ChartRegion,
    label_key: str = "month",
    fonts: FontSet = DEFAULT_FONTS,
) -> None:
    draw_frame(surface, fonts, region)

    peak = max_value(records or [])
    if not records or peak <= 0:
        logger.debug("Bar chart %r has no plottable values", region.title)
        draw_placeholder(surface, fonts, region.x + region.width / 2, region.y + region.height / 2)
        return

    plot = plot_area(region)
    draw_grid(surface, plot)
    draw_y_labels(surface, fonts, plot, y_labels(peak))

    for bar in layout_bars(records, plot, peak):
        surface.set_fill_color(bar.series.color)
        surface.rect(bar.x, bar.y, bar.width, bar.height, fill=True, stroke=False)

    slot = slot_width(plot, len(records))
    surface.set_font(fonts.regular, LABEL_SIZE)
    surface.set_text_color(PALETTE.text_secondary)
    for index, record in enumerate(records):
        label = str(field(record, label_key, ""))
        surface.text(label, plot.left + index * slot + slot / 2, plot.bottom + 5, align="center")

    draw_legend(surface, fonts, region)
