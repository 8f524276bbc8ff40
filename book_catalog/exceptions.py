"""
Catalog Exceptions

Typed failures raised by the core (store, identity registry, review
manager, query engine). The core never formats HTTP responses itself:
main.py maps each class to a status code.

Hierarchy:
- CatalogError
  - InvalidDatasetError      (startup only, fatal)
  - NotFoundError            (unknown ISBN, or no review to delete)
  - DuplicateUserError       (registration conflict)
  - InvalidCredentialsError  (login mismatch)
  - MissingTokenError        (no bearer token supplied)
  - InvalidTokenError        (bad signature, malformed claims)
    - ExpiredTokenError      (past expiry)
"""


class CatalogError(Exception):
    """Base class for every error raised by the catalog core."""

    default_detail = "Catalog error"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class InvalidDatasetError(CatalogError):
    default_detail = "Invalid books dataset"


class NotFoundError(CatalogError):
    default_detail = "Book not found"


class DuplicateUserError(CatalogError):
    default_detail = "User already exists"


class InvalidCredentialsError(CatalogError):
    default_detail = "Invalid credentials"


class MissingTokenError(CatalogError):
    default_detail = "Not authenticated"


class InvalidTokenError(CatalogError):
    default_detail = "Invalid token"


class ExpiredTokenError(InvalidTokenError):
    default_detail = "Token has expired"
