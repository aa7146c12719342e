"""FastAPI application entry point."""
import logging
import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from api.routers import bookmarks, health
from core.auth import ApiTokenMiddleware
from core.config import Settings, get_settings
from db.session import build_engine, build_session_factory
from services.exceptions import ApiError, BookmarkValidationError


logger = logging.getLogger(__name__)

INVALID_BODY_MESSAGE = "request body is not valid JSON"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifespan - startup and shutdown."""
    settings: Settings = app.state.settings

    # Startup: create the engine and session factory
    engine = build_engine(settings)
    app.state.session_factory = build_session_factory(engine)

    yield

    # Shutdown: release pooled connections
    await engine.dispose()


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        """Process request and add security headers to response."""
        response = await call_next(request)
        # HSTS: enforce HTTPS for 1 year, including subdomains
        response.headers["Strict-Transport-Security"] = (
            "max-age=31536000; includeSubDomains"
        )
        # Prevent MIME type sniffing
        response.headers["X-Content-Type-Options"] = "nosniff"
        # Prevent clickjacking - API shouldn't be framed
        response.headers["X-Frame-Options"] = "DENY"
        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log one line per request with its status and duration."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        """Time the request and log the outcome."""
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "%s %s %s %.1fms",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response


async def validation_error_handler(
    _request: Request, exc: BookmarkValidationError,
) -> PlainTextResponse:
    """Create-rule failures are reported as a bare text message."""
    return PlainTextResponse(exc.message, status_code=exc.status_code)


async def api_error_handler(_request: Request, exc: ApiError) -> JSONResponse:
    """Bad request and not-found errors use the structured error body."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": {"message": exc.message}},
    )


async def request_validation_error_handler(
    _request: Request, exc: RequestValidationError,
) -> JSONResponse:
    """Unparseable request bodies are a bad request, not a 422."""
    logger.info("Rejected malformed request: %s", exc.errors())
    return JSONResponse(
        status_code=400,
        content={"error": {"message": INVALID_BODY_MESSAGE}},
    )


async def server_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Unexpected failures. Details are only exposed outside production."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    settings: Settings = request.app.state.settings
    if settings.is_production:
        content = {"error": {"message": "server error"}}
    else:
        content = {"message": str(exc), "error": repr(exc)}
    return JSONResponse(status_code=500, content=content)


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the application around an explicit settings object.

    The settings are kept on `app.state` for handlers and the lifespan; nothing
    else reads configuration from the environment.
    """
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title="Bookmarks API",
        description="Store, rate and describe links behind a static API token.",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_exception_handler(BookmarkValidationError, validation_error_handler)
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(Exception, server_error_handler)

    # Auth gate is innermost so rejected requests still get logged and decorated
    app.add_middleware(ApiTokenMiddleware, api_token=settings.api_token)

    app.add_middleware(RequestLoggingMiddleware)

    # Security headers middleware (runs after CORS, adds headers to responses)
    app.add_middleware(SecurityHeadersMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(bookmarks.router)

    return app
