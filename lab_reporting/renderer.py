from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union

import pytz
import yaml
from pydantic import ValidationError

from .branding import BrandingProvider, branding_from_config
from .builders.charts import build_charts_section
from .builders.header import build_header_section
from .builders.insights import build_insights_section
from .builders.metrics import build_metrics_section
from .builders.summaries import build_monthly_summary_section, build_status_summary_section
from .config import ReportConfig
from .layout import LayoutContext, PageCursor, make_footer_stamp
from .schema import AnalyticsPayload, AuthenticationError, ReportDataError
from .styles import register_fonts
from .surface import CanvasSurface, DrawingSurface

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReportArtifact:
    file_name: str
    content: bytes
    page_count: int


def _sanitize_filename(name: str) -> str:
    invalid = '<>:/\\|?*"'
    return "".join("-" if ch in invalid else ch for ch in name)


def report_file_name(config: ReportConfig, now: datetime) -> str:
    if config.override_file_name:
        file_name = config.override_file_name
    else:
        utc_date = now.astimezone(pytz.UTC).date() if now.tzinfo else now.date()
        file_name = config.file_name_template.format(date=utc_date.isoformat())
    return _sanitize_filename(file_name)


def parse_payload(json_data: Union[dict, AnalyticsPayload]) -> AnalyticsPayload:
    if isinstance(json_data, AnalyticsPayload):
        return json_data
    try:
        return AnalyticsPayload.model_validate(json_data)
    except ValidationError as exc:
        raise ReportDataError(f"Invalid analytics payload: {exc}") from exc


async def render_report(
    payload: Union[dict, AnalyticsPayload],
    identity: Optional[str],
    title: Optional[str] = None,
    config: Optional[ReportConfig] = None,
    branding: Optional[BrandingProvider] = None,
    now: Optional[datetime] = None,
    surface_factory: Optional[Callable[..., DrawingSurface]] = None,
) -> ReportArtifact:
    """Render the analytics report into memory. Nothing is written to disk."""

    if not identity or not str(identity).strip():
        raise AuthenticationError("User not authenticated")

    config = config or ReportConfig()
    data = parse_payload(payload)
    title = title or config.default_title
    now = now or datetime.now(pytz.UTC)

    fonts = register_fonts(config)
    branding = branding or branding_from_config(config, fonts)
    factory = surface_factory or CanvasSurface
    surface = factory(title=title, author=identity)

    # The only suspension point; everything after it is synchronous layout
    logo_height = await branding.draw(surface, config.margin)

    cursor = PageCursor(
        surface,
        top_margin=config.page_top_margin,
        bottom_margin=config.page_bottom_margin,
        y=config.margin + logo_height,
    )
    ctx = LayoutContext(surface=surface, config=config, fonts=fonts, cursor=cursor)

    # Section order STRICT
    build_header_section(ctx, title, identity, now)
    build_metrics_section(ctx, data)
    build_charts_section(ctx, data)
    build_status_summary_section(ctx, data)
    build_monthly_summary_section(ctx, data)
    build_insights_section(ctx, data)

    surface.stamp_pages(make_footer_stamp(config, fonts))
    content = surface.save()

    artifact = ReportArtifact(
        file_name=report_file_name(config, now),
        content=content,
        page_count=surface.page_count,
    )
    logger.info("Rendered %s (%d pages, %d breaks)", artifact.file_name, artifact.page_count, cursor.breaks)
    return artifact


def render_report_blocking(
    payload: Union[dict, AnalyticsPayload],
    identity: Optional[str],
    **kwargs: Any,
) -> ReportArtifact:
    """Run ``render_report`` to completion on a private event loop.

    Must not be called from a thread that already runs a loop; async callers
    hand it to a worker thread instead.
    """
    return asyncio.run(render_report(payload, identity, **kwargs))


def save_artifact(artifact: ReportArtifact, output_dir: Path) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    out_path = output_dir / artifact.file_name
    out_path.write_bytes(artifact.content)
    return out_path


def generate_report_pdf(
    json_data: Dict[str, Any],
    identity: Optional[str],
    config: Optional[ReportConfig] = None,
    title: Optional[str] = None,
) -> Path:
    """Public API: convert an analytics JSON dict into a PDF under ``config.output_dir``."""

    config = config or ReportConfig()
    artifact = render_report_blocking(json_data, identity, title=title, config=config)
    return save_artifact(artifact, config.output_dir)


def load_config_from_yaml(path: Path) -> ReportConfig:
    raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    return ReportConfig.model_validate(raw)
