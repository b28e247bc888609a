from __future__ import annotations

from .layout import LayoutContext
from .styles import PALETTE

SECTION_SIZE = 16
SECTION_ADVANCE = 15.0
BODY_SIZE = 12


def section_header(ctx: LayoutContext, title: str) -> None:
    """Section title, kept on the same page as the first line that follows it."""

    ctx.cursor.ensure_space(SECTION_ADVANCE + ctx.config.line_height)
    surface = ctx.surface
    surface.set_font(ctx.fonts.bold, SECTION_SIZE)
    surface.set_text_color(PALETTE.text_primary)
    surface.text(title, ctx.margin, ctx.cursor.y)
    ctx.cursor.advance(SECTION_ADVANCE)


def body_line(ctx: LayoutContext, text: str, size: float = BODY_SIZE) -> None:
    ctx.cursor.ensure_space(ctx.config.line_height)
    surface = ctx.surface
    surface.set_font(ctx.fonts.regular, size)
    surface.set_text_color(PALETTE.text_primary)
    surface.text(text, ctx.margin, ctx.cursor.y)
    ctx.cursor.advance(ctx.config.line_height)
