from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

from reportlab.lib import colors
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont

from .config import ReportConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Palette:
    text_primary: colors.Color
    text_secondary: colors.Color
    muted: colors.Color
    divider: colors.Color
    border: colors.Color
    grid: colors.Color
    axis: colors.Color
    slice_edge: colors.Color
    line_series: colors.Color


PALETTE = Palette(
    text_primary=colors.HexColor("#111111"),
    text_secondary=colors.HexColor("#444444"),
    muted=colors.HexColor("#666666"),
    divider=colors.HexColor("#DDDDDD"),
    border=colors.HexColor("#C8C8C8"),
    grid=colors.HexColor("#F0F0F0"),
    axis=colors.HexColor("#9CA3AF"),
    slice_edge=colors.white,
    line_series=colors.HexColor("#8B5CF6"),
)


@dataclass(frozen=True)
class BarSeries:
    key: str
    label: str
    color: colors.Color


# Fixed by role, in drawing order within a group
BAR_SERIES: Tuple[BarSeries, ...] = (
    BarSeries("experiments", "Experiments", colors.HexColor("#3B82F6")),
    BarSeries("reports", "Reports", colors.HexColor("#10B981")),
    BarSeries("tasks", "Tasks", colors.HexColor("#F59E0B")),
)

# Indexed by slice order, cycling
PIE_PALETTE: Tuple[colors.Color, ...] = (
    colors.HexColor("#22C55E"),
    colors.HexColor("#3B82F6"),
    colors.HexColor("#F59E0B"),
    colors.HexColor("#EF4444"),
)


def pie_color(index: int) -> colors.Color:
    return PIE_PALETTE[index % len(PIE_PALETTE)]


@dataclass(frozen=True)
class FontSet:
    regular: str
    bold: str


FONT_REG = "Helvetica"
FONT_BOLD = "Helvetica-Bold"
FONT_CUSTOM_REG = "LabSans"
FONT_CUSTOM_BOLD = "LabSans-Bold"

DEFAULT_FONTS = FontSet(regular=FONT_REG, bold=FONT_BOLD)


def register_fonts(config: ReportConfig) -> FontSet:
    """Register configured TTF fonts, falling back to the PDF base-14 Helvetica."""

    if config.font_regular_path is None and config.font_bold_path is None:
        return DEFAULT_FONTS

    paths = {
        FONT_CUSTOM_REG: config.font_regular_path,
        FONT_CUSTOM_BOLD: config.font_bold_path or config.font_regular_path,
    }
    missing = [str(p) for p in paths.values() if p is None or not Path(p).exists()]
    if missing:
        raise FileNotFoundError("Configured font files not found:\n- " + "\n- ".join(missing))

    for font_name, path in paths.items():
        if font_name not in pdfmetrics.getRegisteredFontNames():
            pdfmetrics.registerFont(TTFont(font_name, str(path)))
            logger.debug("Registered font %s from %s", font_name, path)

    return FontSet(regular=FONT_CUSTOM_REG, bold=FONT_CUSTOM_BOLD)
