"""
Book Model

Represents one catalog entry. isbn, title and author are fixed once the
dataset is loaded; reviews is the only mutable field and is changed only
through CatalogStore while holding its lock.
"""

from dataclasses import dataclass, field


@dataclass
class Book:
    """
    A single book and its reviews.

    Attributes:
        isbn: Unique identifier, exact-match key for lookups
        title: Book title
        author: Full author string
        reviews: username -> review text, at most one entry per user
    """

    isbn: str
    title: str
    author: str
    reviews: dict[str, str] = field(default_factory=dict)

    def __repr__(self) -> str:
        return f"<Book(isbn='{self.isbn}', title='{self.title}')>"
