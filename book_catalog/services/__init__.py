"""
Services Package

Business logic kept apart from HTTP handling (routers), so each piece can
be tested in isolation.

Current services:
- identity.py: IdentityRegistry (registration, login, token verification)
- query.py: QueryEngine (ISBN/author/title lookups, reviews of a book)
- reviews.py: ReviewManager (one review per user per book)
- rate_limiter.py: Rate limiting with slowapi
- security.py: Password hashing and JWT utilities
"""
