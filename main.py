from __future__ import annotations
import datetime as dt
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.trustedhost import TrustedHostMiddleware
from starlette.responses import JSONResponse
from contextlib import asynccontextmanager

from api_router import router
from lab_reporting.schema import AuthenticationError, BrandingAssetError, ReportDataError
from schemas import ErrorResponse, ErrorEnvelope, ErrorDetail
from settings import APP_NAME, APP_VERSION, CORS_ALLOW_ORIGINS, TRUSTED_HOSTS, GZIP_MIN_SIZE, REQUEST_LOGGING, LOG_LEVEL
from middleware import RequestIDMiddleware, LoggingMiddleware, RequestIdLogFilter

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s [%(request_id)s]: %(message)s")
for _handler in logging.getLogger().handlers:
    _handler.addFilter(RequestIdLogFilter())
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("[startup] %s v%s starting up", APP_NAME, APP_VERSION)
    yield
    logger.info("[shutdown] Bye.")


app = FastAPI(
    title=APP_NAME,
    version=APP_VERSION,
    description="Analytics report export for the laboratory management app.",
    lifespan=lifespan,
)

# --- Middleware ---
app.add_middleware(RequestIDMiddleware)
app.add_middleware(LoggingMiddleware, mode=REQUEST_LOGGING)
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOW_ORIGINS or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(GZipMiddleware, minimum_size=GZIP_MIN_SIZE)
app.add_middleware(TrustedHostMiddleware, allowed_hosts=TRUSTED_HOSTS or ["*"])


# --- Exception handlers -> uniform envelope ---


def _envelope(status_code: int, code: str, message: str, details=None) -> JSONResponse:
    err = ErrorEnvelope(code=code, message=message, details=details)
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=err).model_dump())


@app.exception_handler(StarletteHTTPException)
async def on_http_exception(request: Request, exc: StarletteHTTPException):
    status_code = int(getattr(exc, "status_code", 500))
    detail = getattr(exc, "detail", None)
    message = detail if isinstance(detail, str) and detail else str(exc)

    if status_code == status.HTTP_400_BAD_REQUEST:
        code = "BAD_REQUEST"
    elif status_code == status.HTTP_401_UNAUTHORIZED:
        code = "UNAUTHORIZED"
    elif status_code == status.HTTP_403_FORBIDDEN:
        code = "FORBIDDEN"
    elif status_code == status.HTTP_404_NOT_FOUND:
        code = "NOT_FOUND"
    elif status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        code = "METHOD_NOT_ALLOWED"
    else:
        code = f"HTTP_{status_code}"

    return _envelope(status_code, code, message)


@app.exception_handler(RequestValidationError)
async def on_validation_error(request: Request, exc: RequestValidationError):
    return _envelope(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "UNPROCESSABLE_ENTITY",
        "Validation error",
        details=[ErrorDetail(issue=str(exc))],
    )


@app.exception_handler(ReportDataError)
async def on_report_data_error(request: Request, exc: ReportDataError):
    return _envelope(status.HTTP_422_UNPROCESSABLE_ENTITY, "UNPROCESSABLE_ENTITY", str(exc))


@app.exception_handler(AuthenticationError)
async def on_authentication_error(request: Request, exc: AuthenticationError):
    return _envelope(status.HTTP_401_UNAUTHORIZED, "UNAUTHORIZED", str(exc))


@app.exception_handler(BrandingAssetError)
async def on_branding_error(request: Request, exc: BrandingAssetError):
    logger.error("Branding asset unavailable: %s", exc)
    return _envelope(status.HTTP_502_BAD_GATEWAY, "BRANDING_UNAVAILABLE", str(exc))


@app.exception_handler(Exception)
async def on_any_error(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s", request.url.path)
    return _envelope(status.HTTP_500_INTERNAL_SERVER_ERROR, "SERVER_ERROR", str(exc))


@app.get("/")
async def landing():
    return {"Welcome to Lab Analytics Reports": True, "ts": dt.datetime.now(dt.timezone.utc).isoformat()}

# --- Liveness/Readiness ---
@app.get("/healthz")
async def healthz():
    return {"Lab Analytics Reports is OK": True, "ts": dt.datetime.now(dt.timezone.utc).isoformat()}


@app.get("/readyz")
async def readyz():
    return {"ready": True}


# --- Routes ---
app.include_router(router)


# Optional: dev run
if __name__ == "__main__":
    try:
        import uvicorn  # type: ignore
    except ImportError:
        raise SystemExit("Uvicorn is required. Install dependencies first.")
    uvicorn.run("main:app", host="127.0.0.1", port=8787, reload=True)
