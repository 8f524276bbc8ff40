"""
API Routers Package

This package contains FastAPI routers that handle API endpoints.

Router Structure:
- books.py: /api/v1/books/* catalog reads
- reviews.py: /api/v1/books/review/* review reads and mutations
- auth.py: /api/v1/auth/* endpoints (registration, login)

Each router is imported and registered in main.py.
"""

from book_catalog.routers.auth import router as auth_router
from book_catalog.routers.books import router as books_router
from book_catalog.routers.reviews import router as reviews_router

__all__ = [
    "auth_router",
    "books_router",
    "reviews_router",
]
