from __future__ import annotations

from datetime import datetime

from ..formatting import fmt_generated
from ..layout import LayoutContext
from ..styles import PALETTE

TITLE_SIZE = 18
TITLE_LEADING = 8
META_SIZE = 10
META_LEADING = 6


def build_header_section(ctx: LayoutContext, title: str, identity: str, generated_at: datetime) -> None:
    surface = ctx.surface
    cursor = ctx.cursor

    surface.set_font(ctx.fonts.bold, TITLE_SIZE)
    surface.set_text_color(PALETTE.text_primary)
    lines = surface.split_text(title, ctx.content_width)
    for i, line in enumerate(lines):
        if i:
            cursor.advance(TITLE_LEADING)
        cursor.ensure_space(TITLE_LEADING)
        surface.text(line, ctx.margin, cursor.y)
    cursor.advance(12)

    surface.set_font(ctx.fonts.regular, META_SIZE)
    surface.set_text_color(PALETTE.text_secondary)
    meta = (
        f"Generated on: {fmt_generated(generated_at, ctx.config.timezone)}",
        f"Generated by: {identity}",
    )
    for i, text in enumerate(meta):
        if i:
            cursor.advance(META_LEADING)
        cursor.ensure_space(META_LEADING)
        surface.text(text, ctx.margin, cursor.y)
    cursor.advance(20)
