import logging
from contextlib import asynccontextmanager
from time import perf_counter
from uuid import uuid4

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.responses import JSONResponse, Response

from feedboard.api.routes import router as api_router
from feedboard.core.config import get_settings
from feedboard.core.logging_setup import setup_logging
from feedboard.core.observability import REQUEST_COUNT, REQUEST_LATENCY
from feedboard.core.responses import FEEDS_UNAVAILABLE, FEEDS_UNAVAILABLE_MESSAGE, error_response
from feedboard.services.registry import FeedRegistryError
from feedboard.services.snapshot import SnapshotCache

logger = logging.getLogger(__name__)
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    app.state.snapshots = SnapshotCache(ttl_seconds=get_settings().revalidate_seconds)
    yield


app = FastAPI(title=settings.app_name, lifespan=lifespan)
app.include_router(api_router)
if settings.observability_enabled:
    FastAPIInstrumentor.instrument_app(app)


def _trace_id(request: Request) -> str:
    return getattr(request.state, "trace_id", "missing-trace-id")


@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    trace_id = request.headers.get("X-Trace-Id", str(uuid4()))
    request.state.trace_id = trace_id

    start = perf_counter()
    response = await call_next(request)
    elapsed = perf_counter() - start

    path = request.url.path
    REQUEST_COUNT.labels(request.method, path, str(response.status_code)).inc()
    REQUEST_LATENCY.labels(request.method, path).observe(elapsed)
    response.headers["X-Trace-Id"] = trace_id
    return response


@app.exception_handler(FeedRegistryError)
async def registry_exception_handler(request: Request, exc: FeedRegistryError):
    logger.error("Feed registry unavailable: %s", exc)
    payload, status = error_response(
        code=FEEDS_UNAVAILABLE,
        message=FEEDS_UNAVAILABLE_MESSAGE,
        trace_id=_trace_id(request),
        status=503,
        details={"reason": str(exc)},
    )
    return JSONResponse(payload, status_code=status)


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    payload, status = error_response(
        code="HTTP_ERROR",
        message=str(exc.detail),
        trace_id=_trace_id(request),
        status=exc.status_code,
    )
    return JSONResponse(payload, status_code=status)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    payload, status = error_response(
        code="VALIDATION_ERROR",
        message="Request validation failed",
        trace_id=_trace_id(request),
        status=422,
        details={"errors": exc.errors()},
    )
    return JSONResponse(payload, status_code=status)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s", request.url.path)
    payload, status = error_response(
        code="INTERNAL_ERROR",
        message=str(exc),
        trace_id=_trace_id(request),
        status=500,
    )
    return JSONResponse(payload, status_code=status)


@app.get("/healthz")
def healthz() -> dict:
    return {"status": "ok"}


@app.get("/metrics")
def metrics() -> Response:
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
