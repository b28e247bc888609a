from __future__ import annotations
import logging
from functools import lru_cache
from pathlib import Path
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Header, HTTPException
from fastapi.responses import Response
from starlette.concurrency import run_in_threadpool

from lab_reporting.config import ReportConfig
from lab_reporting.renderer import load_config_from_yaml, render_report_blocking
from schemas import AnalyticsReportRequest
from settings import REPORT_CONFIG_PATH

logger = logging.getLogger(__name__)


@lru_cache()
def get_report_config() -> ReportConfig:
    if REPORT_CONFIG_PATH:
        return load_config_from_yaml(Path(REPORT_CONFIG_PATH))
    return ReportConfig()


def current_user_identity(
    authorization: Annotated[Optional[str], Header(alias="Authorization")] = None,
    x_user_email: Annotated[Optional[str], Header(alias="X-User-Email")] = None,
) -> Optional[str]:
    if not authorization or not str(authorization).strip():
        raise HTTPException(status_code=401, detail="Missing Authorization header")
    # Blank identities are rejected by the renderer as AuthenticationError
    return x_user_email


router = APIRouter(prefix="/api")


@router.post(
    "/reports/analytics",
    response_class=Response,
    responses={200: {"content": {"application/pdf": {}}}},
    summary="Render the analytics PDF report",
)
async def export_analytics_report(
    body: AnalyticsReportRequest,
    identity: Annotated[Optional[str], Depends(current_user_identity)],
    config: Annotated[ReportConfig, Depends(get_report_config)],
):
    # ReportLab layout runs in a worker thread
    artifact = await run_in_threadpool(
        render_report_blocking, body.data, identity, title=body.reportTitle, config=config
    )
    logger.info("Exported %s for %s", artifact.file_name, identity)
    return Response(
        content=artifact.content,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f'attachment; filename="{artifact.file_name}"',
            "X-Page-Count": str(artifact.page_count),
        },
    )
