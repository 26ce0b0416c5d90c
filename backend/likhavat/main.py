"""
Kacchi Likhavat Backend — FastAPI Application Factory
======================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   uvicorn (`uvicorn likhavat.main:app`) and the test suite.
When:  Once at server startup; the returned app handles all subsequent requests.

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                       FastAPI App                        │
    │                                                          │
    │  Middleware Chain:                                       │
    │  ┌────────────┐ ┌─────────┐ ┌─────────┐ ┌────────────┐   │
    │  │ Rate Limit │→│ Req ID  │→│ Logging │→│ GZip, CORS │   │
    │  └────────────┘ └─────────┘ └─────────┘ └────────────┘   │
    │                                                          │
    │  Routes (all /api/* except auth need a bearer token):    │
    │  auth · rooms · notes · stories+chapters · expenses ·    │
    │  memories · users · dashboard · search · / · /health     │
    │                                                          │
    │  Exception Handlers:                                     │
    │  ┌────────────────────────────────────────────────────┐  │
    │  │ Validation→400 │ Auth→401 │ Perm→403 │ NotFound→404 │  │
    │  │ Database / unexpected → 500                         │  │
    │  └────────────────────────────────────────────────────┘  │
    └──────────────────────────────────────────────────────────┘

Error body (every non-2xx response):
    {"success": false, "message": "...", "error": "<code>",
     "details": {...}, "requestId": "a1b2c3d4"}
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import DataError, IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from likhavat import __version__
from likhavat.config import settings
from likhavat.database import dispose_engine
from likhavat.exceptions import (
    AuthenticationError,
    DatabaseError,
    LikhavatError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from likhavat.middleware.logging import RequestLoggingMiddleware
from likhavat.middleware.rate_limit import RateLimitMiddleware
from likhavat.middleware.request_id import RequestIDMiddleware, request_id_var
from likhavat.routes import (
    auth,
    dashboard,
    expenses,
    health,
    memories,
    notes,
    rooms,
    search,
    stories,
    users,
)
from likhavat.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the whole process.

    Format: 2024-01-15T12:00:00 [INFO] likhavat.services.note_service: Created note ...
    Output: stdout (Docker and systemd capture it)
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party loggers are chatty at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup:  configure logging, refuse to run in production with the
              development JWT secret.
    Shutdown: dispose the database engine (closes pooled connections).
    """
    setup_logging()
    logger.info("=" * 60)
    logger.info("Kacchi Likhavat Backend %s starting up (%s)...", __version__, settings.environment)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        logger.critical("Configuration error: %s", str(e))
        raise

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("API docs: http://%s:%d/docs", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("Kacchi Likhavat Backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def error_response(
    status_code: int,
    error: str,
    message: str,
    details: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    body = ErrorResponse(
        message=message,
        error=error,
        details=details or None,
        request_id=request_id_var.get("") or None,
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(by_alias=True, exclude_none=True),
        headers=headers,
    )


def _describe_validation_error(exc: RequestValidationError) -> str:
    """First failing field as "field: reason", e.g. "roomId: Field required"."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    reason = str(first.get("msg", "Invalid value")).removeprefix("Value error, ")
    if location:
        return f"{'.'.join(location)}: {reason}"
    return reason


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to status codes and the error envelope.

    Handler hierarchy:
        ValidationError, RequestValidationError  → 400
        IntegrityError, DataError                → 400
        AuthenticationError                      → 401
        PermissionDeniedError                    → 403
        NotFoundError, unknown route             → 404
        DatabaseError, LikhavatError (base)      → 500
        Exception (fallback)                     → 500

    Internal details (SQL, stack traces) are logged, never returned, except
    that outside production an unexpected 500 includes the exception text.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return error_response(400, "validation_error", exc.message, exc.context)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        message = _describe_validation_error(exc)
        logger.warning("[%s] Request validation failed: %s", request_id_var.get(""), message)
        fields = [
            {
                "field": ".".join(str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")),
                "message": str(err.get("msg", "")),
            }
            for err in exc.errors()
        ]
        return error_response(400, "validation_error", message, {"fields": fields})

    @app.exception_handler(IntegrityError)
    async def handle_integrity_error(request: Request, exc: IntegrityError):
        logger.warning("[%s] Integrity error: %s", request_id_var.get(""), exc.orig)
        return error_response(400, "validation_error", "The data conflicts with an existing record")

    @app.exception_handler(DataError)
    async def handle_data_error(request: Request, exc: DataError):
        logger.warning("[%s] Data error: %s", request_id_var.get(""), exc.orig)
        return error_response(400, "validation_error", "Invalid value for one or more fields")

    @app.exception_handler(AuthenticationError)
    async def handle_authentication_error(request: Request, exc: AuthenticationError):
        return error_response(
            401,
            "authentication_error",
            exc.message,
            headers={"WWW-Authenticate": "Bearer"},
        )

    @app.exception_handler(PermissionDeniedError)
    async def handle_permission_denied(request: Request, exc: PermissionDeniedError):
        return error_response(403, "permission_denied", exc.message)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return error_response(404, "not_found", exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return error_response(404, "not_found", f"Route {request.url.path} not found")
        if exc.status_code == 405:
            return error_response(405, "method_not_allowed", f"Method {request.method} not allowed")
        return error_response(
            exc.status_code,
            "http_error",
            str(exc.detail),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error("[%s] Database error: %s | Context: %s", request_id_var.get(""), exc.message, exc.context)
        return error_response(500, "server_error", "An internal error occurred. Please try again later.")

    @app.exception_handler(LikhavatError)
    async def handle_application_error(request: Request, exc: LikhavatError):
        logger.error("[%s] Application error: %s | Context: %s", request_id_var.get(""), exc.message, exc.context)
        return error_response(500, "server_error", exc.message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error("[%s] Unexpected error: %s", request_id_var.get(""), str(exc), exc_info=True)
        details = None if settings.is_production else {"error": str(exc)}
        return error_response(
            500,
            "internal_server_error",
            "An unexpected error occurred. Please try again or contact support.",
            details,
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    app = FastAPI(
        title="Kacchi Likhavat API",
        description=(
            "Personal writing workspace: rooms, notes, stories with chapters, "
            "expenses and memories, with a dashboard and global search."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RateLimit → RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Retry-After"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(RateLimitMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(rooms.router)
    app.include_router(notes.router)
    app.include_router(stories.router)
    app.include_router(expenses.router)
    app.include_router(memories.router)
    app.include_router(users.router)
    app.include_router(dashboard.router)
    app.include_router(search.router)

    return app


app = create_app()
