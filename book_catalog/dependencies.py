"""
FastAPI Dependencies Module

Dependencies are reusable components injected into route handlers.

The core objects (CatalogStore, IdentityRegistry, QueryEngine,
ReviewManager) are created once by the application lifespan and kept on
app.state; the providers below hand them to routes. Tests can swap any
of them with app.dependency_overrides.

Usage in a route:
    @router.get("/books")
    def list_books(queries: Queries) -> list[BookResponse]:
        ...
"""

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from book_catalog.services.identity import IdentityRegistry
from book_catalog.services.query import QueryEngine
from book_catalog.services.reviews import ReviewManager
from book_catalog.store import CatalogStore


# =============================================================================
# Core Objects
# =============================================================================
def get_catalog_store(request: Request) -> CatalogStore:
    return request.app.state.catalog_store


def get_identity_registry(request: Request) -> IdentityRegistry:
    return request.app.state.identity_registry


def get_query_engine(request: Request) -> QueryEngine:
    return request.app.state.query_engine


def get_review_manager(request: Request) -> ReviewManager:
    return request.app.state.review_manager


Store = Annotated[CatalogStore, Depends(get_catalog_store)]
Registry = Annotated[IdentityRegistry, Depends(get_identity_registry)]
Queries = Annotated[QueryEngine, Depends(get_query_engine)]
ReviewService = Annotated[ReviewManager, Depends(get_review_manager)]


# =============================================================================
# Bearer Token Authentication
# =============================================================================
# HTTPBearer extracts the token from "Authorization: Bearer <token>".
# auto_error=False lets a missing header reach IdentityRegistry.verify,
# which raises MissingTokenError; main.py turns that into a 401.
bearer_scheme = HTTPBearer(auto_error=False)


def get_current_username(
    registry: Registry,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str:
    """
    Resolve the username bound to the request's bearer token.

    Raises:
        MissingTokenError: No Authorization header (or not a Bearer one)
        InvalidTokenError: Token signature or claims are invalid
        ExpiredTokenError: Token is past its expiry
    """
    token = credentials.credentials if credentials else None
    return registry.verify(token)


CurrentUsername = Annotated[str, Depends(get_current_username)]
