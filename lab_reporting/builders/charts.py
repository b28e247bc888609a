from __future__ import annotations

import logging

from ..charts import draw_bar_chart, draw_line_chart, draw_pie_chart
from ..charts import pie as pie_geometry
from ..components import section_header
from ..layout import ChartRegion, LayoutContext
from ..schema import AnalyticsPayload

logger = logging.getLogger(__name__)


def _boxed_chart_footprint(ctx: LayoutContext, height: float) -> float:
    return ctx.config.chart_title_space + height + ctx.config.chart_gap


def _region(ctx: LayoutContext, height: float, title: str) -> ChartRegion:
    return ChartRegion(
        x=ctx.margin,
        y=ctx.cursor.y + ctx.config.chart_title_space,
        width=ctx.content_width,
        height=height,
        title=title,
    )


def _show(ctx: LayoutContext, series: list, name: str) -> bool:
    if series or not ctx.config.skip_empty_charts:
        return True
    logger.debug("Skipping %s chart: no data", name)
    return False


def build_charts_section(ctx: LayoutContext, data: AnalyticsPayload) -> None:
    cfg = ctx.config
    section_header(ctx, "Charts & Visualizations")

    if _show(ctx, data.monthlyData, "monthly activity"):
        footprint = _boxed_chart_footprint(ctx, cfg.bar_chart_height)
        ctx.cursor.ensure_space(footprint)
        region = _region(ctx, cfg.bar_chart_height, "Monthly Activity")
        draw_bar_chart(ctx.surface, data.monthlyData, region, fonts=ctx.fonts)
        ctx.cursor.advance(footprint)

    if _show(ctx, data.experimentStatusData, "status distribution"):
        block = pie_geometry.pie_block_height(cfg.pie_radius)
        # keep the first legend row with the circle
        ctx.cursor.ensure_space(block + pie_geometry.LEGEND_ROW)
        cx = ctx.margin + cfg.pie_radius + pie_geometry.TITLE_INSET
        cy = ctx.cursor.y + pie_geometry.TITLE_SPACE + cfg.pie_radius
        slices = draw_pie_chart(
            ctx.surface,
            data.experimentStatusData,
            cx,
            cy,
            cfg.pie_radius,
            "Experiment Status Distribution",
            fonts=ctx.fonts,
            legend=False,
        )
        ctx.cursor.advance(block)
        for sl in slices:
            ctx.cursor.ensure_space(pie_geometry.LEGEND_ROW)
            pie_geometry.draw_legend_row(ctx.surface, sl, ctx.margin, ctx.cursor.y, ctx.fonts)
            ctx.cursor.advance(pie_geometry.LEGEND_ROW)
        ctx.cursor.advance(cfg.chart_gap)

    if _show(ctx, data.productivityData, "productivity"):
        footprint = _boxed_chart_footprint(ctx, cfg.line_chart_height)
        ctx.cursor.ensure_space(footprint)
        region = _region(ctx, cfg.line_chart_height, "Weekly Productivity Trend")
        draw_line_chart(ctx.surface, data.productivityData, region, fonts=ctx.fonts)
        ctx.cursor.advance(footprint)
