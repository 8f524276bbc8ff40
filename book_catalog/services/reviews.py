"""
Review Service

ReviewManager is the only writer of book reviews. It expects an identity
the caller has already verified (IdentityRegistry.verify) and leaves the
storage rules to CatalogStore.

Business Rules:
- One review per user per book: a second submission replaces the first
- Deleting requires an existing review by that user
"""

import logging

from book_catalog.store import CatalogStore

logger = logging.getLogger(__name__)


class ReviewManager:
    def __init__(self, store: CatalogStore) -> None:
        self._store = store

    def add_or_modify_review(self, isbn: str, username: str, text: str) -> dict[str, str]:
        """
        Upsert username's review on a book.

        Args:
            isbn: Book to review
            username: Verified identity of the reviewer
            text: Review content

        Returns:
            The book's full reviews mapping after the change

        Raises:
            NotFoundError: If the book does not exist
        """
        book = self._store.set_review(isbn, username, text)
        logger.info(f"Review saved: isbn={isbn} user={username}")
        return book.reviews

    def delete_review(self, isbn: str, username: str) -> dict[str, str]:
        """
        Remove username's review from a book.

        Returns:
            The book's remaining reviews

        Raises:
            NotFoundError: If the book or the user's review does not exist
        """
        book = self._store.delete_review(isbn, username)
        logger.info(f"Review deleted: isbn={isbn} user={username}")
        return book.reviews
