from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field


DEFAULT_REPORT_TITLE = "KAPELCZAK LABORATORY - ANALYTICS REPORT"


class ReportConfig(BaseModel):
    """Configuration for analytics PDF report generation."""

    output_dir: Path = Path("./out")
    file_name_template: str = "Analytics_Report_{date}.pdf"

    default_title: str = DEFAULT_REPORT_TITLE
    lab_name: str = "Kapelczak Laboratory"
    footer_text: str = "Kapelczak Laboratory | Confidential analytics report"

    # "Generated on" is shown in this zone; the file name date is always UTC
    timezone: str = "UTC"

    # Page geometry (mm, A4 portrait)
    margin: float = 20.0
    page_top_margin: float = 30.0
    page_bottom_margin: float = 30.0
    footer_offset: float = 12.0

    # Block footprints (mm). Each space-check uses the block's full height.
    section_gap: float = 15.0
    line_height: float = 8.0
    insight_line_height: float = 6.0
    insight_gap: float = 4.0
    chart_title_space: float = 10.0
    chart_gap: float = 10.0
    bar_chart_height: float = 60.0
    line_chart_height: float = 60.0
    pie_radius: float = 30.0

    skip_empty_charts: bool = False

    # Branding
    logo_path: Optional[Path] = None
    logo_width: float = 40.0
    logo_height: float = 15.0

    # Optional TTF fonts; built-in Helvetica is used when unset
    font_regular_path: Optional[Path] = None
    font_bold_path: Optional[Path] = None

    override_file_name: Optional[str] = Field(default=None, description="Optional explicit output file name")
