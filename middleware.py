from __future__ import annotations
import logging
import time
import uuid
from contextvars import ContextVar
from typing import Callable
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

logger = logging.getLogger("lab_reports.requests")

request_id_var: ContextVar[str] = ContextVar("request_id", default="-")


class RequestIdLogFilter(logging.Filter):
    """Stamp ``record.request_id`` so renderer logs can be tied to the export call."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get()
        return True


class RequestIDMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, header_name: str = "X-Request-ID"):
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(self, request: Request, call_next: Callable):
        req_id = request.headers.get(self.header_name) or str(uuid.uuid4())
        request.state.request_id = req_id
        token = request_id_var.set(req_id)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)
        response.headers[self.header_name] = req_id
        return response


def report_fields(response: Response) -> str:
    """Page count and size of an exported PDF, empty for any other response."""
    pages = response.headers.get("X-Page-Count")
    if pages is None:
        return ""
    return f" pages={pages} bytes={response.headers.get('content-length', '-')}"


class LoggingMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, mode: str = "basic"):
        super().__init__(app)
        self.mode = mode

    async def dispatch(self, request: Request, call_next: Callable):
        if self.mode == "off":
            return await call_next(request)
        start = time.perf_counter()
        response = None
        try:
            response = await call_next(request)
            return response
        finally:
            dur_ms = (time.perf_counter() - start) * 1000.0
            req_id = getattr(request.state, "request_id", "-")
            status = response.status_code if response is not None else 500
            extra = report_fields(response) if response is not None else ""
            if self.mode == "basic":
                logger.info("%s %s => %s [%.1fms]%s rid=%s", request.method, request.url.path, status, dur_ms, extra, req_id)
            elif self.mode == "full":
                logger.info(
                    "%s %s user=%s ua=%s => %s [%.1fms]%s rid=%s",
                    request.method,
                    request.url.path,
                    request.headers.get("X-User-Email", "-"),
                    request.headers.get("user-agent", "-"),
                    status,
                    dur_ms,
                    extra,
                    req_id,
                )
