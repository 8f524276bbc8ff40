"""
Catalog Store

Owns the book records for the lifetime of the process.

The set of books is fixed by load(); after that only the per-book
review maps change, through set_review() and delete_review(). Both run
under a single store-wide lock so concurrent requests on the same book
cannot lose each other's updates, and both return a copy of the book
taken under that lock. Reads go through the same lock only where they
copy a review map.

Accepted dataset shapes (see loader.py for the file handling):
- a list of {isbn, title, author, reviews?} objects
- a mapping of isbn -> {title, author, reviews?}; the key is stamped
  onto the record as its isbn
"""

import logging
import threading
from collections.abc import Mapping, Sequence
from dataclasses import replace
from typing import Any

from book_catalog.exceptions import InvalidDatasetError, NotFoundError
from book_catalog.models import Book

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("isbn", "title", "author")


class CatalogStore:
    """In-memory book catalog with lock-guarded review mutation."""

    def __init__(self) -> None:
        self._books: list[Book] = []
        self._by_isbn: dict[str, Book] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._books)

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------
    def load(self, records: Sequence[Mapping[str, Any]] | Mapping[str, Any]) -> None:
        """
        Initialize the store from parsed dataset records.

        Args:
            records: Ordered list of book records, or a mapping keyed by isbn

        Raises:
            InvalidDatasetError: If the shape is unsupported, a record lacks
                isbn/title/author, reviews is not an object, or an isbn repeats
        """
        if isinstance(records, Mapping):
            records = [
                _stamp_isbn(isbn, record) for isbn, record in records.items()
            ]
        elif isinstance(records, (str, bytes)) or not isinstance(records, Sequence):
            raise InvalidDatasetError(
                "Dataset must be a list of book records or a mapping keyed by isbn"
            )

        books: list[Book] = []
        by_isbn: dict[str, Book] = {}
        for position, record in enumerate(records):
            book = _build_book(position, record)
            if book.isbn in by_isbn:
                raise InvalidDatasetError(f"Duplicate isbn in dataset: {book.isbn}")
            books.append(book)
            by_isbn[book.isbn] = book

        with self._lock:
            self._books = books
            self._by_isbn = by_isbn

        logger.info(f"Catalog loaded: {len(books)} books")

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------
    def find_by_isbn(self, isbn: str) -> Book | None:
        return self._by_isbn.get(isbn)

    def all(self) -> tuple[Book, ...]:
        """Every book, in dataset order."""
        return tuple(self._books)

    def reviews_of(self, book: Book) -> dict[str, str]:
        """Snapshot of a book's reviews, safe to hand outside the store."""
        with self._lock:
            return dict(book.reviews)

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------
    def set_review(self, isbn: str, username: str, text: str) -> Book:
        """
        Create or replace the review left by username on a book.

        Calling it twice with the same arguments leaves the same state.

        Returns:
            A detached copy of the book, its reviews taken under the lock
            right after this change

        Raises:
            NotFoundError: If no book has this isbn
        """
        book = self._get_or_raise(isbn)
        with self._lock:
            book.reviews[username] = text
            return replace(book, reviews=dict(book.reviews))

    def delete_review(self, isbn: str, username: str) -> Book:
        """
        Remove the review left by username on a book.

        Returns:
            A detached copy of the book, its reviews taken under the lock
            right after this change

        Raises:
            NotFoundError: If the book is unknown or the user has no review on it
        """
        book = self._by_isbn.get(isbn)
        with self._lock:
            if book is None or username not in book.reviews:
                raise NotFoundError("Review not found")
            del book.reviews[username]
            return replace(book, reviews=dict(book.reviews))

    def _get_or_raise(self, isbn: str) -> Book:
        book = self._by_isbn.get(isbn)
        if book is None:
            raise NotFoundError("Book not found")
        return book


# =============================================================================
# Record Normalization
# =============================================================================
def _stamp_isbn(isbn: Any, record: Any) -> dict[str, Any]:
    if not isinstance(record, Mapping):
        raise InvalidDatasetError(f"Record for isbn {isbn} is not an object")
    return {**record, "isbn": isbn}


def _build_book(position: int, record: Any) -> Book:
    if not isinstance(record, Mapping):
        raise InvalidDatasetError(f"Record #{position} is not an object")

    missing = [name for name in REQUIRED_FIELDS if record.get(name) in (None, "")]
    if missing:
        raise InvalidDatasetError(
            f"Record #{position} is missing required field(s): {', '.join(missing)}"
        )

    reviews = record.get("reviews") or {}
    if not isinstance(reviews, Mapping):
        raise InvalidDatasetError(f"Record #{position} has non-object reviews")

    return Book(
        isbn=str(record["isbn"]),
        title=str(record["title"]),
        author=str(record["author"]),
        reviews={str(user): str(text) for user, text in reviews.items()},
    )
