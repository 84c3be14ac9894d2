"""
FastAPI application for the webooks service.

``create_app`` wires every service onto ``app.state`` so tests can build
isolated apps with their own storage, settings and version store. The
module-level ``app`` is what ``uvicorn webooks.api.app:app`` serves.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from webooks.api import extension, spaces, system, version
from webooks.auth.guard import SpaceAccessGuard
from webooks.auth.jwt import TokenService
from webooks.auth.passwords import PasswordVerifier
from webooks.auth.resolver import AuthResolver
from webooks.auth.routes import router as auth_router
from webooks.config import Settings, configure_logging, get_settings
from webooks.core.errors import AuthenticationError, InternalError, WebooksError
from webooks.integrations.sentry import capture_exception, init_sentry
from webooks.storage import StorageProvider, create_memory_storage
from webooks.versioning import VersionKeyStore

logger = logging.getLogger(__name__)


# =============================================================================
# Error Handlers
# =============================================================================


async def handle_webooks_error(request: Request, exc: WebooksError) -> JSONResponse:
    """Render a taxonomy error; only the public message reaches the client."""
    if isinstance(exc, InternalError):
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        capture_exception(exc, path=request.url.path)
    elif isinstance(exc, AuthenticationError):
        logger.info(f"{request.method} {request.url.path} unauthenticated ({exc.reason})")
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_response())


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    capture_exception(exc, path=request.url.path)
    return JSONResponse(status_code=500, content=InternalError().to_response())


# =============================================================================
# App Factory
# =============================================================================


def create_app(
    settings: Settings | None = None,
    storage: StorageProvider | None = None,
    versions: VersionKeyStore | None = None,
) -> FastAPI:
    """Build the application and its services."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(settings)
        if init_sentry(settings):
            logger.info("Sentry error tracking enabled")
        logger.info(f"Webooks API starting in {settings.environment} mode")

        yield

        app.state.passwords.shutdown()
        logger.info("Webooks API shutting down")

    app = FastAPI(
        title="Webooks API",
        description="Bookmark manager access control and cache versioning",
        version="0.1.0",
        lifespan=lifespan,
    )

    passwords = PasswordVerifier.from_settings(settings)
    tokens = TokenService.from_settings(settings)
    app.state.settings = settings
    app.state.storage = storage or create_memory_storage()
    app.state.versions = versions or VersionKeyStore()
    app.state.passwords = passwords
    app.state.tokens = tokens
    app.state.guard = SpaceAccessGuard(passwords)
    app.state.resolver = AuthResolver(
        accounts=app.state.storage.accounts,
        tokens=tokens,
        public_owner_id=settings.public_owner_id,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(WebooksError, handle_webooks_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    app.include_router(auth_router)
    app.include_router(spaces.router)
    app.include_router(version.router)
    app.include_router(system.router)
    app.include_router(extension.router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "service": "webooks-api"}

    return app


app = create_app()
