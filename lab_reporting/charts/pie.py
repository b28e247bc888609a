"""Pie chart drawn as triangle fans, so no arc primitive is needed.

Angles are measured clockwise from the top of the circle. Each slice is
sampled with ``max(3, floor(angle * 10))`` triangles.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, List, Sequence, Tuple

from ..formatting import fmt_number, percent_shares
from ..styles import DEFAULT_FONTS, PALETTE, FontSet, pie_color
from ..surface import DrawingSurface
from .common import LABEL_SIZE, draw_placeholder, draw_title, field

logger = logging.getLogger(__name__)

START_ANGLE = 0.0
MIN_STEPS = 3
STEPS_PER_RADIAN = 10

TITLE_SPACE = 10.0
TITLE_INSET = 10.0
LEGEND_GAP = 7.0
LEGEND_ROW = 6.0
LEGEND_BASELINE = 5.0
SWATCH_W = 6.0
SWATCH_H = 4.0

Triangle = Tuple[float, float, float, float, float, float]


@dataclass(frozen=True)
class Slice:
    index: int
    name: str
    value: float
    start: float
    sweep: float
    percent: float


def arc_steps(sweep: float) -> int:
    return max(MIN_STEPS, int(math.floor(sweep * STEPS_PER_RADIAN)))


def point_on_circle(cx: float, cy: float, radius: float, angle: float) -> Tuple[float, float]:
    # y grows downwards on the page
    return cx + radius * math.sin(angle), cy - radius * math.cos(angle)


def build_slices(items: Sequence[Any]) -> List[Slice]:
    values = [float(field(it, "value")) for it in items]
    total = sum(values)
    if total <= 0:
        return []

    shares = percent_shares(values)
    slices: List[Slice] = []
    current = START_ANGLE
    for index, (item, value) in enumerate(zip(items, values)):
        sweep = value / total * 2 * math.pi
        slices.append(Slice(index, str(field(item, "name", "")), value, current, sweep, shares[index]))
        current += sweep
    return slices


def fan_triangles(cx: float, cy: float, radius: float, start: float, sweep: float) -> List[Triangle]:
    steps = arc_steps(sweep)
    step = sweep / steps
    triangles: List[Triangle] = []
    for i in range(steps):
        x1, y1 = point_on_circle(cx, cy, radius, start + i * step)
        x2, y2 = point_on_circle(cx, cy, radius, start + (i + 1) * step)
        triangles.append((cx, cy, x1, y1, x2, y2))
    return triangles


def pie_block_height(radius: float) -> float:
    """Title and circle, down to where the first legend row starts."""
    return TITLE_SPACE + 2 * radius + LEGEND_GAP


def pie_chart_height(count: int, radius: float) -> float:
    """Full footprint from the cursor: title, circle and one legend row per item."""
    return pie_block_height(radius) + max(count, 1) * LEGEND_ROW


def legend_label(sl: Slice) -> str:
    return f"{sl.name}: {fmt_number(sl.value)} ({sl.percent:.1f}%)"


def draw_legend_row(surface: DrawingSurface, sl: Slice, x: float, top: float, fonts: FontSet = DEFAULT_FONTS) -> None:
    """One swatch and label occupying ``LEGEND_ROW`` mm below ``top``."""
    baseline = top + LEGEND_BASELINE
    surface.set_font(fonts.regular, LABEL_SIZE)
    surface.set_text_color(PALETTE.text_secondary)
    surface.set_fill_color(pie_color(sl.index))
    surface.rect(x, baseline - 3, SWATCH_W, SWATCH_H, fill=True, stroke=False)
    surface.text(legend_label(sl), x + SWATCH_W + 4, baseline)


def draw_pie_chart(
    surface: DrawingSurface,
    items: Sequence[Any],
    cx: float,
    cy: float,
    radius: float,
    title: str,
    fonts: FontSet = DEFAULT_FONTS,
    legend: bool = True,
) -> List[Slice]:
    """Draw title and fan, plus the legend rows unless the caller pages them itself.

    Returns the plotted slices, empty when the placeholder was drawn instead.
    """
    left = cx - radius - TITLE_INSET
    draw_title(surface, fonts, title, left, cy - radius - 6)

    slices = build_slices(items or [])
    if not slices:
        logger.debug("Pie chart %r has no plottable values", title)
        draw_placeholder(surface, fonts, cx, cy)
        return []

    surface.set_stroke_color(PALETTE.slice_edge)
    surface.set_line_width(0.1)
    for sl in slices:
        if sl.sweep <= 0:
            continue
        surface.set_fill_color(pie_color(sl.index))
        for tri in fan_triangles(cx, cy, radius, sl.start, sl.sweep):
            surface.triangle(*tri, fill=True, stroke=True)

    if legend:
        legend_top = cy + radius + LEGEND_GAP
        for sl in slices:
            draw_legend_row(surface, sl, left, legend_top + sl.index * LEGEND_ROW, fonts)
    return slices
