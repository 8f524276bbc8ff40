"""
Test Suite for the Book Catalog API

Test Organization:
- conftest.py: Shared fixtures (core objects, per-test app and client)
- test_store.py, test_loader.py: Catalog loading and storage
- test_identity.py: Registration, login and tokens
- test_query.py, test_review_manager.py: Lookups and review changes
- test_books.py, test_reviews.py, test_auth.py: HTTP endpoints
- test_app.py: Startup, health and error mapping
- test_rate_limit.py: Per-app rate limiting tiers and 429 responses
- test_client.py: Async HTTP client

Running Tests:
    # Run all tests
    pytest

    # Run specific file
    pytest tests/test_reviews.py

    # Run with verbose output
    pytest -v
"""
