"""
Domain Models Package

Plain in-memory records owned by the catalog core. Nothing here is
persisted: books come from the dataset loaded at startup and users live
for the lifetime of the process.

Model Relationships:
- Book.reviews maps username -> review text. The username is a weak
  reference to a User (no referential integrity is enforced, users are
  never deleted).
"""

from book_catalog.models.book import Book
from book_catalog.models.token import AccessToken
from book_catalog.models.user import User

__all__ = [
    "AccessToken",
    "Book",
    "User",
]
