"""
Pydantic Schemas Package

Request/response models for the HTTP layer. The core (store and services)
works with the plain dataclasses in book_catalog.models; these schemas
only shape what goes over the wire.

Schema Naming Convention:
- XxxCreate: Request body that creates or replaces something
- XxxResponse: Fields returned in API responses
"""

from book_catalog.schemas.book import BookResponse
from book_catalog.schemas.review import (
    BookReviewsResponse,
    ReviewCreate,
    ReviewMutationResponse,
)
from book_catalog.schemas.user import (
    CurrentUserResponse,
    RegisterResponse,
    TokenResponse,
    UserCredentials,
)

__all__ = [
    # Book schemas
    "BookResponse",
    # Review schemas
    "ReviewCreate",
    "ReviewMutationResponse",
    "BookReviewsResponse",
    # User / auth schemas
    "UserCredentials",
    "RegisterResponse",
    "TokenResponse",
    "CurrentUserResponse",
]
