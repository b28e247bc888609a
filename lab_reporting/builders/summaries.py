from __future__ import annotations

from typing import List

from ..components import body_line, section_header
from ..formatting import fmt_number, share_of
from ..layout import LayoutContext
from ..schema import AnalyticsPayload


def status_lines(data: AnalyticsPayload) -> List[str]:
    # Shares are of all experiments, not of the listed statuses
    return [
        f"{s.name}: {fmt_number(s.value)} ({share_of(s.value, data.totalExperiments)}%)"
        for s in data.experimentStatusData
    ]


def monthly_lines(data: AnalyticsPayload) -> List[str]:
    return [
        f"{m.month}: {fmt_number(m.experiments)} experiments, "
        f"{fmt_number(m.reports)} reports, {fmt_number(m.tasks)} tasks"
        for m in data.monthlyData
    ]


def _list_section(ctx: LayoutContext, title: str, lines: List[str], empty_text: str) -> None:
    section_header(ctx, title)
    for line in lines or [empty_text]:
        body_line(ctx, line)
    ctx.cursor.advance(ctx.config.section_gap)


def build_status_summary_section(ctx: LayoutContext, data: AnalyticsPayload) -> None:
    _list_section(ctx, "Experiment Status Distribution", status_lines(data), "No experiment data available")


def build_monthly_summary_section(ctx: LayoutContext, data: AnalyticsPayload) -> None:
    _list_section(ctx, "Monthly Activity Summary", monthly_lines(data), "No monthly activity data available")
