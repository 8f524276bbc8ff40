"""
Books Router

Read-only catalog endpoints.

Endpoints:
- GET /books                  - Every book in dataset order
- GET /books/isbn/{isbn}      - Exact ISBN match (404 when absent)
- GET /books/author/{author}  - Full author name, case-insensitive
- GET /books/title/{title}    - Title substring, case-insensitive

All of these are plain reads and never require authentication.
"""

from fastapi import APIRouter, Request

from book_catalog.dependencies import Queries
from book_catalog.exceptions import NotFoundError
from book_catalog.models import Book
from book_catalog.schemas import BookResponse
from book_catalog.services.query import QueryEngine
from book_catalog.services.rate_limiter import limiter, tier

router = APIRouter(
    prefix="/books",
    tags=["Books"],
    responses={
        404: {"description": "Book not found"},
    },
)


def to_response(book: Book, queries: QueryEngine) -> BookResponse:
    """Serialize a book with a consistent copy of its reviews."""
    return BookResponse(
        isbn=book.isbn,
        title=book.title,
        author=book.author,
        reviews=queries.reviews_snapshot(book),
    )


@router.get(
    "",
    response_model=list[BookResponse],
    summary="List all books",
    description="Return every book of the catalog, in dataset order.",
)
@limiter.limit(tier("default"))
def list_books(request: Request, queries: Queries) -> list[BookResponse]:
    return [to_response(b, queries) for b in queries.all()]


@router.get(
    "/isbn/{isbn}",
    response_model=list[BookResponse],
    summary="Get book by ISBN",
    description="Exact ISBN match. Returns a one-element list, or 404.",
)
@limiter.limit(tier("default"))
def get_books_by_isbn(request: Request, isbn: str, queries: Queries) -> list[BookResponse]:
    """
    Look a book up by its ISBN.

    Raises:
        NotFoundError: 404 if no book has this ISBN
    """
    books = queries.by_isbn(isbn)
    if not books:
        raise NotFoundError("Book not found")
    return [to_response(b, queries) for b in books]


@router.get(
    "/author/{author}",
    response_model=list[BookResponse],
    summary="Get books by author",
    description="Case-insensitive match on the full author name. May be empty.",
)
@limiter.limit(tier("default"))
def get_books_by_author(request: Request, author: str, queries: Queries) -> list[BookResponse]:
    return [to_response(b, queries) for b in queries.by_author(author)]


@router.get(
    "/title/{title}",
    response_model=list[BookResponse],
    summary="Search books by title",
    description="Case-insensitive substring match on the title. May be empty.",
)
@limiter.limit(tier("default"))
def get_books_by_title(request: Request, title: str, queries: Queries) -> list[BookResponse]:
    return [to_response(b, queries) for b in queries.by_title(title)]
