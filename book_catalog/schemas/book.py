"""
Book Pydantic Schemas

Response shapes for catalog reads. Built straight from the in-memory
Book dataclass via from_attributes.
"""

from pydantic import BaseModel, ConfigDict, Field


class BookResponse(BaseModel):
    """
    Schema for book responses.

    reviews maps username -> review text.
    """

    isbn: str = Field(..., description="ISBN, unique identifier")
    title: str = Field(..., description="Book title")
    author: str = Field(..., description="Author name")
    reviews: dict[str, str] = Field(
        default_factory=dict,
        description="Reviews keyed by username",
    )

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "isbn": "9780134685991",
                "title": "Effective Java",
                "author": "Joshua Bloch",
                "reviews": {"alice": "Essential reading."},
            }
        },
    )
