# Mediator FastAPI Application
# HTTP host that builds the mediator once and feeds it typed requests

import logging
import time
import uuid
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from mediator import __version__
from mediator.api.config import (
    configure_logging,
    get_allowed_origins,
    get_host,
    get_log_level,
    get_port,
    is_debug,
)
from mediator.api.dependencies import get_mediator
from mediator.api.models import ErrorResponse, HandlerListResponse, HealthResponse
from mediator.api.users import router as users_router
from mediator.core import HandlerInvocationError, HandlerNotFoundError, Mediator

logger = logging.getLogger(__name__)

_started_at = time.time()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    global _started_at
    configure_logging()
    _started_at = time.time()
    mediator = get_mediator()
    logger.info(f"Mediator API starting up ({len(mediator.registry)} handlers)")
    yield
    logger.info("Mediator API shutting down")


app = FastAPI(
    title="Mediator API",
    description="""
    ## In-process mediator

    Routes typed requests to exactly one handler and typed notifications
    to every registered handler. This API is a thin host that turns HTTP
    calls into mediator requests.
    """,
    version=__version__,
    lifespan=lifespan,
    debug=is_debug(),
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[
        {"name": "Users", "description": "User lookups dispatched through the mediator"},
        {"name": "System", "description": "Health and handler diagnostics"},
    ],
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_allowed_origins(),
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def add_request_metadata(request: Request, call_next):
    """Attach a request id and the processing time to every response."""
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    start = time.perf_counter()

    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - start) * 1000

    response.headers["X-Request-ID"] = request_id
    response.headers["X-Process-Time-Ms"] = f"{elapsed_ms:.2f}"
    return response


app.include_router(users_router, prefix="/api")


# ==================== Health & Diagnostics ====================


@app.get("/health", response_model=HealthResponse, tags=["System"])
async def health_check(mediator: Mediator = Depends(get_mediator)):
    """
    Health check endpoint.

    Returns the API status and the number of handler bindings.
    """
    return HealthResponse(
        status="healthy",
        version=__version__,
        uptime_seconds=time.time() - _started_at,
        handler_count=len(mediator.registry),
    )


@app.get("/api/handlers", response_model=HandlerListResponse, tags=["System"])
async def list_handlers(mediator: Mediator = Depends(get_mediator)):
    """List request and notification types with the handlers bound to them."""
    bindings = mediator.registry.describe()
    return HandlerListResponse(
        requests=bindings["requests"],
        notifications=bindings["notifications"],
        total=len(mediator.registry),
    )


# ==================== Error Handlers ====================


def _timestamp() -> str:
    return time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())


def _error(status_code: int, error: str, code: str, detail=None, headers=None) -> JSONResponse:
    body = ErrorResponse(error=error, detail=detail, code=code, timestamp=_timestamp())
    return JSONResponse(status_code=status_code, headers=headers, content=body.model_dump())


@app.exception_handler(HTTPException)
async def http_exception_handler(request, exc):
    """Custom HTTP exception handler"""
    return _error(exc.status_code, str(exc.detail), f"HTTP_{exc.status_code}", headers=exc.headers)


@app.exception_handler(HandlerNotFoundError)
async def handler_not_found_handler(request, exc):
    """A request type reached the mediator with nothing bound to it."""
    logger.error(f"{request.url.path}: {exc}")
    return _error(500, "Handler not registered", "HANDLER_NOT_FOUND", detail=str(exc))


@app.exception_handler(HandlerInvocationError)
async def handler_invocation_handler(request, exc):
    """One or more notification handlers failed."""
    logger.error(f"{request.url.path}: {exc}")
    return _error(
        500,
        "Handler failed",
        "HANDLER_FAILED",
        detail=str(exc) if app.debug else None,
    )


@app.exception_handler(Exception)
async def general_exception_handler(request, exc):
    """General exception handler"""
    logger.exception(f"Unhandled error on {request.url.path}")
    return _error(
        500,
        "Internal Server Error",
        "INTERNAL_ERROR",
        detail=str(exc) if app.debug else "An unexpected error occurred",
    )


# Main entry point
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "mediator.api.main:app",
        host=get_host(),
        port=get_port(),
        log_level=get_log_level().lower(),
    )
