from __future__ import annotations

from typing import List, Tuple

from ..components import body_line, section_header
from ..formatting import fmt_number
from ..layout import LayoutContext
from ..schema import AnalyticsPayload


def metric_rows(data: AnalyticsPayload) -> List[Tuple[str, str]]:
    return [
        ("Total Experiments", fmt_number(data.totalExperiments)),
        ("Completed Experiments", fmt_number(data.completedExperiments)),
        ("Tasks Completed", fmt_number(data.completedTasks)),
        ("Total Tasks", fmt_number(data.totalTasks)),
        ("Active Projects", fmt_number(data.totalProjects)),
        ("Average Completion Time", f"{fmt_number(data.avgCompletionTime)} days"),
    ]


def build_metrics_section(ctx: LayoutContext, data: AnalyticsPayload) -> None:
    section_header(ctx, "Key Performance Metrics")
    for label, value in metric_rows(data):
        body_line(ctx, f"{label}: {value}")
    ctx.cursor.advance(ctx.config.section_gap)
