"""
Review Pydantic Schemas

Schemas:
- ReviewCreate: Body of an add/modify request
- ReviewMutationResponse: Result of add/modify/delete
- BookReviewsResponse: Reviews of one book, or the "No reviews yet" marker

Business Rules:
- One review per user per book; submitting again replaces it
- A review is plain text, nothing else
"""

from pydantic import BaseModel, ConfigDict, Field


class ReviewCreate(BaseModel):
    """
    Schema for adding or modifying a review.

    Example request body:
    {
        "review": "One of the best books I've ever read..."
    }
    """

    review: str = Field(
        ...,
        min_length=1,
        max_length=5000,
        description="Review text",
        examples=["Fantastic book for Java best practices."],
    )


class ReviewMutationResponse(BaseModel):
    """Outcome of a review change with the book's reviews afterwards."""

    message: str = Field(..., description="Human readable outcome")
    reviews: dict[str, str] = Field(
        ...,
        description="All reviews of the book after the change, keyed by username",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "message": "Review added/modified",
                "reviews": {"alice": "Great read"},
            }
        },
    )


class BookReviewsResponse(BaseModel):
    """
    Reviews of one book.

    When the book has no reviews, title is omitted and reviews holds the
    string "No reviews yet" instead of an empty mapping.
    """

    title: str | None = Field(default=None, description="Book title")
    reviews: dict[str, str] | str = Field(
        ...,
        description="Reviews keyed by username, or 'No reviews yet'",
    )
