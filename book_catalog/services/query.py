"""
Query Service

Read-only lookups over the catalog.

Matching rules differ per field on purpose:
- isbn: exact, case-sensitive
- author: whole string, case-insensitive
- title: substring, case-insensitive
"""

from typing import Any

from book_catalog.exceptions import NotFoundError
from book_catalog.models import Book
from book_catalog.store import CatalogStore

NO_REVIEWS_YET = "No reviews yet"


def _normalize(s: str) -> str:
    return s.lower()


class QueryEngine:
    def __init__(self, store: CatalogStore) -> None:
        self._store = store

    def all(self) -> list[Book]:
        return list(self._store.all())

    def by_isbn(self, isbn: str) -> list[Book]:
        """Zero or one book, as a list for uniformity with the other lookups."""
        book = self._store.find_by_isbn(isbn)
        return [book] if book is not None else []

    def by_author(self, author: str) -> list[Book]:
        wanted = _normalize(author)
        return [b for b in self._store.all() if _normalize(b.author) == wanted]

    def by_title(self, fragment: str) -> list[Book]:
        wanted = _normalize(fragment)
        return [b for b in self._store.all() if wanted in _normalize(b.title)]

    def reviews_snapshot(self, book: Book) -> dict[str, str]:
        return self._store.reviews_of(book)

    def reviews_for(self, isbn: str) -> dict[str, Any]:
        """
        Reviews of one book.

        Returns:
            {"title": ..., "reviews": {...}} when the book has reviews,
            otherwise {"reviews": NO_REVIEWS_YET}

        Raises:
            NotFoundError: If the book does not exist
        """
        book = self._store.find_by_isbn(isbn)
        if book is None:
            raise NotFoundError("Book not found")

        reviews = self._store.reviews_of(book)
        if not reviews:
            return {"reviews": NO_REVIEWS_YET}
        return {"title": book.title, "reviews": reviews}
