"""Laboratory analytics PDF report generation (ReportLab canvas)."""

from .config import ReportConfig
from .renderer import ReportArtifact, generate_report_pdf, render_report

__all__ = ["ReportArtifact", "ReportConfig", "generate_report_pdf", "render_report"]
