from __future__ import annotations

from typing import List

from ..components import section_header
from ..formatting import completion_rate, fmt_number
from ..layout import LayoutContext
from ..schema import AnalyticsPayload
from ..styles import PALETTE

INSIGHT_SIZE = 11
WRAP_INSET = 10.0


def compute_insights(data: AnalyticsPayload) -> List[str]:
    return [
        f"Experiment completion rate: {completion_rate(data.completedExperiments, data.totalExperiments)}%",
        f"Task completion rate: {completion_rate(data.completedTasks, data.totalTasks)}%",
        f"Active team members: {data.activeTeamMembers} working on {data.totalProjects} projects",
        f"Average experiment completion time: {fmt_number(data.avgCompletionTime)} days",
    ]


def build_insights_section(ctx: LayoutContext, data: AnalyticsPayload) -> None:
    cfg = ctx.config
    surface = ctx.surface
    section_header(ctx, "Key Insights")

    for insight in compute_insights(data):
        surface.set_font(ctx.fonts.regular, INSIGHT_SIZE)
        surface.set_text_color(PALETTE.text_primary)
        lines = surface.split_text(f"• {insight}", ctx.content_width - WRAP_INSET)
        for line in lines:
            ctx.cursor.ensure_space(cfg.insight_line_height)
            surface.text(line, ctx.margin, ctx.cursor.y)
            ctx.cursor.advance(cfg.insight_line_height)
        ctx.cursor.advance(cfg.insight_gap)
