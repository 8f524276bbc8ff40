"""
FastAPI Application Entry Point

This module creates and configures the FastAPI application.

Key Concepts:
=============

1. Application Factory Pattern
   - create_app() returns a configured app
   - Tests build their own instance with their own Settings

2. Lifespan Events
   - startup: load the books dataset and build the core objects
     (CatalogStore, IdentityRegistry, QueryEngine, ReviewManager) on app.state
   - an invalid dataset aborts startup: the service is useless without it

3. Exception Handlers
   - The core raises typed CatalogError subclasses
   - This module is the only place that turns them into HTTP status codes
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from book_catalog import __version__
from book_catalog.config import Settings, get_settings
from book_catalog.dependencies import Registry, Store
from book_catalog.exceptions import (
    CatalogError,
    DuplicateUserError,
    InvalidCredentialsError,
    InvalidDatasetError,
    InvalidTokenError,
    MissingTokenError,
    NotFoundError,
)
from book_catalog.loader import load_catalog
from book_catalog.routers import auth_router, books_router, reviews_router
from book_catalog.services.identity import IdentityRegistry
from book_catalog.services.query import QueryEngine
from book_catalog.services.rate_limiter import configure_limiter, rate_limit_exceeded_handler
from book_catalog.services.reviews import ReviewManager

# =============================================================================
# Logging Configuration
# =============================================================================
settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# =============================================================================
# Error Mapping
# =============================================================================
# Looked up along the exception's MRO, so ExpiredTokenError falls back to
# InvalidTokenError.
ERROR_STATUS_CODES: dict[type[CatalogError], int] = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    DuplicateUserError: status.HTTP_400_BAD_REQUEST,
    InvalidCredentialsError: status.HTTP_401_UNAUTHORIZED,
    MissingTokenError: status.HTTP_401_UNAUTHORIZED,
    InvalidTokenError: status.HTTP_403_FORBIDDEN,
    InvalidDatasetError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_code_for(exc: CatalogError) -> int:
    for cls in type(exc).__mro__:
        if cls in ERROR_STATUS_CODES:
            return ERROR_STATUS_CODES[cls]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


# =============================================================================
# Application Factory
# =============================================================================
def create_app(app_settings: Settings | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        app_settings: Settings to use; defaults to the cached get_settings()

    Returns:
        Configured FastAPI application instance
    """
    config = app_settings or settings

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """
        Build the core objects before accepting requests.

        Everything is process-scoped and memory-resident, so there is
        nothing to clean up on shutdown.
        """
        # ----- STARTUP -----
        logger.info(f"Starting {config.app_name}...")
        logger.info(f"Debug mode: {config.debug}")

        try:
            store = load_catalog(config.books_path)
        except InvalidDatasetError as e:
            logger.critical(f"Cannot start without a catalog: {e.detail}")
            raise

        app.state.catalog_store = store
        app.state.identity_registry = IdentityRegistry(
            secret_key=config.secret_key,
            algorithm=config.jwt_algorithm,
            token_ttl=timedelta(minutes=config.access_token_expire_minutes),
        )
        app.state.query_engine = QueryEngine(store)
        app.state.review_manager = ReviewManager(store)

        logger.info(f"Books loaded: {len(store)}")

        yield  # Application runs here

        # ----- SHUTDOWN -----
        logger.info(f"Shutting down {config.app_name}...")

    app = FastAPI(
        title=config.app_name,
        description="""
## Book Catalog API

Book metadata loaded from a static dataset, with per-user reviews.

### Features
- **Books**: list all, look up by ISBN, author or title
- **Reviews**: one review per user per book (add, modify, delete)

### Authentication
Register and log in under `/auth` to get a bearer token, then send
`Authorization: Bearer <token>` to change reviews.
        """,
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # -------------------------------------------------------------------------
    # Rate Limiting
    # -------------------------------------------------------------------------
    # Limits are set per route with @limiter.limit(tier(...)); the limiter
    # is process-wide, so the most recently created app configures it.
    app.state.limiter = configure_limiter(config)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    # -------------------------------------------------------------------------
    # CORS Middleware
    # -------------------------------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.allowed_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -------------------------------------------------------------------------
    # Exception Handlers
    # -------------------------------------------------------------------------
    @app.exception_handler(CatalogError)
    async def catalog_exception_handler(
        request: Request,
        exc: CatalogError,
    ) -> JSONResponse:
        """
        Convert core errors to HTTP responses.

        401 responses carry WWW-Authenticate so clients know to send a
        bearer token.
        """
        status_code = status_code_for(exc)
        headers = None
        if status_code == status.HTTP_401_UNAUTHORIZED:
            headers = {"WWW-Authenticate": "Bearer"}
        if isinstance(exc, InvalidTokenError):
            logger.warning(f"Token rejected on {request.url.path}: {exc.detail}")

        return JSONResponse(
            status_code=status_code,
            content={"detail": exc.detail},
            headers=headers,
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """
        Catch-all exception handler.

        In production, hide internal errors from users.
        In debug mode, show more details.
        """
        logger.error(f"Unhandled error: {exc}", exc_info=True)

        if config.debug:
            return JSONResponse(
                status_code=500,
                content={"detail": str(exc)},
            )

        return JSONResponse(
            status_code=500,
            content={"detail": "An internal error occurred."},
        )

    # -------------------------------------------------------------------------
    # Register Routers
    # -------------------------------------------------------------------------
    api_prefix = f"/api/{config.api_version}"

    app.include_router(books_router, prefix=api_prefix)
    app.include_router(reviews_router, prefix=api_prefix)
    app.include_router(auth_router, prefix=api_prefix)

    # -------------------------------------------------------------------------
    # Health Check Endpoint
    # -------------------------------------------------------------------------
    @app.get(
        "/health",
        tags=["Health"],
        summary="Health check",
        description="Check if the API is running and the catalog is loaded.",
    )
    async def health_check(request: Request, store: Store, registry: Registry) -> dict:
        return {
            "status": "healthy",
            "app": config.app_name,
            "version": __version__,
            "catalog": {"books": len(store)},
            "users": {"registered": len(registry)},
            "rate_limiting": {
                "enabled": request.app.state.limiter.enabled,
                "default_limit": config.rate_limit_default,
            },
        }

    @app.get(
        "/",
        tags=["Root"],
        summary="API root",
        description="Welcome message and API information.",
    )
    async def root() -> dict:
        """Root endpoint with API information."""
        return {
            "message": f"Welcome to {config.app_name}",
            "version": __version__,
            "api": api_prefix,
            "docs": "/docs",
            "health": "/health",
        }

    return app


# =============================================================================
# Application Instance
# =============================================================================
# This is what uvicorn imports: uvicorn book_catalog.main:app

app = create_app()


# =============================================================================
# Development Server
# =============================================================================
# python -m book_catalog.main

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "book_catalog.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
