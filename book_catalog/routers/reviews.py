"""
Reviews Router

Endpoints for reading and changing the reviews of a book.

Endpoints:
- GET    /books/review/{isbn} - Reviews of a book
- POST   /books/review/{isbn} - Add or modify your review (authenticated)
- DELETE /books/review/{isbn} - Delete your review (authenticated)

Business Rules:
- One review per user per book: posting again replaces your review
- You can only change your own review; the username comes from the token
"""

from fastapi import APIRouter, Request

from book_catalog.dependencies import CurrentUsername, Queries, ReviewService
from book_catalog.schemas import (
    BookReviewsResponse,
    ReviewCreate,
    ReviewMutationResponse,
)
from book_catalog.services.rate_limiter import limiter, tier

router = APIRouter(
    prefix="/books/review",
    tags=["Reviews"],
    responses={
        404: {"description": "Book or review not found"},
    },
)


@router.get(
    "/{isbn}",
    response_model=BookReviewsResponse,
    response_model_exclude_none=True,
    summary="Get reviews of a book",
    description=(
        "Return the book title with its reviews keyed by username, or "
        '{"reviews": "No reviews yet"} when nobody has reviewed it.'
    ),
)
@limiter.limit(tier("default"))
def get_book_reviews(request: Request, isbn: str, queries: Queries) -> BookReviewsResponse:
    return BookReviewsResponse(**queries.reviews_for(isbn))


@router.post(
    "/{isbn}",
    response_model=ReviewMutationResponse,
    summary="Add or modify a review",
    description="Create your review of a book, or replace it if you already wrote one.",
    responses={
        401: {"description": "Missing bearer token"},
        403: {"description": "Invalid or expired token"},
    },
)
@limiter.limit(tier("write"))
def add_or_modify_review(
    request: Request,
    isbn: str,
    review_data: ReviewCreate,
    reviews: ReviewService,
    username: CurrentUsername,
) -> ReviewMutationResponse:
    """
    Upsert the current user's review.

    Raises:
        NotFoundError: 404 if the book does not exist
    """
    current = reviews.add_or_modify_review(isbn, username, review_data.review)
    return ReviewMutationResponse(message="Review added/modified", reviews=current)


@router.delete(
    "/{isbn}",
    response_model=ReviewMutationResponse,
    summary="Delete a review",
    description="Delete your own review of a book.",
    responses={
        401: {"description": "Missing bearer token"},
        403: {"description": "Invalid or expired token"},
    },
)
@limiter.limit(tier("write"))
def delete_review(
    request: Request,
    isbn: str,
    reviews: ReviewService,
    username: CurrentUsername,
) -> ReviewMutationResponse:
    """
    Delete the current user's review.

    Raises:
        NotFoundError: 404 if the book or the user's review does not exist
    """
    current = reviews.delete_review(isbn, username)
    return ReviewMutationResponse(message="Review deleted", reviews=current)
