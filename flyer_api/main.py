"""
Entry point for the flyer backend HTTP API.

This module creates the FastAPI application, wires up middleware and error
handlers, and mounts all routers under a common prefix.

Intended usage:
    uvicorn flyer_api.main:app --host 0.0.0.0 --port 3001
"""

from __future__ import annotations

import os
import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timezone

import structlog
from fastapi import Depends, FastAPI, Request, Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy import text
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

from flyer_api import __version__
from flyer_api.config import AppEnv, get_settings
from flyer_api.db.session import get_session, init_db
from flyer_api.exceptions import DomainError, StorageUnavailableError
from flyer_api.logging_config import configure_logging
from flyer_api.routers import auth, flyers, products

logger = structlog.get_logger("flyer_api")


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logger.info("app_startup", env=settings.APP_ENV.value, api_prefix=settings.api_prefix)

    if settings.AUTO_CREATE_TABLES:
        init_db()

    yield

    logger.info("app_shutdown")


# ---------------------------------------------------------------------------
# Error handlers
# ---------------------------------------------------------------------------


def _error(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message, **extra})


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("request_failed", error=exc.message, status_code=exc.status_code)
    return _error(exc.status_code, exc.message)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return _error(
        422,
        "Validation failed",
        errors=jsonable_encoder(exc.errors()),
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = str(exc.detail)
    # Routing misses carry the stock "Not Found" detail.
    if exc.status_code == status.HTTP_404_NOT_FOUND and message == "Not Found":
        message = "Route not found"
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": message},
        headers=getattr(exc, "headers", None),
    )


async def storage_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("storage_unavailable", error=str(exc))
    unavailable = StorageUnavailableError()
    return _error(unavailable.status_code, unavailable.message)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error", path=request.url.path)
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Server error")


# ---------------------------------------------------------------------------
# Application factory
# ---------------------------------------------------------------------------


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application instance.
    """
    configure_logging()
    settings = get_settings()
    docs_enabled = settings.DEBUG or settings.APP_ENV != AppEnv.PRODUCTION

    app = FastAPI(
        title=settings.APP_NAME,
        version=__version__,
        description="Products, flyers and user accounts for small businesses.",
        lifespan=lifespan,
        openapi_url="/openapi.json" if docs_enabled else None,
        docs_url="/docs" if docs_enabled else None,
        redoc_url=None,
    )

    cors_origins = settings.cors_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=cors_origins != ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    @app.middleware("http")
    async def bind_request_context(request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response

    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(OperationalError, storage_error_handler)
    app.add_exception_handler(InterfaceError, storage_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    @app.get("/health", tags=["system"])
    def health(response: Response, session: Session = Depends(get_session)) -> dict:
        database = "connected"
        try:
            session.execute(text("SELECT 1"))
        except (OperationalError, InterfaceError) as exc:
            logger.warning("health_check_failed", component="database", error=str(exc))
            database = "disconnected"
            response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

        return {
            "status": "ok" if database == "connected" else "degraded",
            "version": __version__,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "database": database,
        }

    api_root = settings.api_prefix
    app.include_router(auth.router, prefix=api_root)
    app.include_router(products.router, prefix=api_root)
    app.include_router(flyers.router, prefix=api_root)

    # Product and logo images are uploaded elsewhere; this only serves them.
    if os.path.isdir(settings.UPLOADS_DIR):
        app.mount("/uploads", StaticFiles(directory=settings.UPLOADS_DIR), name="uploads")

    return app


# Default application instance
app = create_app()


# ---------------------------------------------------------------------------
# Local development entry point
# ---------------------------------------------------------------------------


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "flyer_api.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
