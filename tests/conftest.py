"""
pytest Fixtures for Book Catalog Tests

This file contains shared fixtures used across all test files.

Two kinds of fixtures live here:
- Core fixtures (catalog_store, identity_registry, query_engine,
  review_manager) build the in-memory objects directly, no HTTP involved.
- API fixtures (books_file, settings, app, client) build a fresh
  application per test from a temporary dataset file, so reviews and
  users never leak between tests.
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# IMPORTANT: Set environment variables BEFORE importing the package.
# The rate limiter and module-level settings are created at import time.
import os

TEST_SECRET_KEY = "test-secret-key-for-unit-tests-at-least-32-characters-long"

os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SECRET_KEY"] = TEST_SECRET_KEY

import copy
import json
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from book_catalog.config import Settings
from book_catalog.main import create_app
from book_catalog.services.identity import IdentityRegistry
from book_catalog.services.query import QueryEngine
from book_catalog.services.reviews import ReviewManager
from book_catalog.store import CatalogStore

API = "/api/v1"

SAMPLE_BOOKS = [
    {"isbn": "1111", "title": "A", "author": "X"},
    {"isbn": "2222", "title": "B", "author": "Y"},
    {
        "isbn": "9780134685991",
        "title": "Effective Java",
        "author": "Joshua Bloch",
    },
    {
        "isbn": "9781098139872",
        "title": "Learning JavaScript Design Patterns",
        "author": "Addy Osmani",
    },
    {
        "isbn": "9780201633610",
        "title": "Design Patterns",
        "author": "Erich Gamma",
        "reviews": {"maria": "A classic."},
    },
]


# =============================================================================
# CORE FIXTURES
# =============================================================================
@pytest.fixture
def sample_books() -> list[dict]:
    """A private copy of the sample dataset, safe to mutate."""
    return copy.deepcopy(SAMPLE_BOOKS)


@pytest.fixture
def catalog_store(sample_books: list[dict]) -> CatalogStore:
    store = CatalogStore()
    store.load(sample_books)
    return store


@pytest.fixture
def identity_registry() -> IdentityRegistry:
    return IdentityRegistry(secret_key=TEST_SECRET_KEY)


@pytest.fixture
def query_engine(catalog_store: CatalogStore) -> QueryEngine:
    return QueryEngine(catalog_store)


@pytest.fixture
def review_manager(catalog_store: CatalogStore) -> ReviewManager:
    return ReviewManager(catalog_store)


# =============================================================================
# API FIXTURES
# =============================================================================
@pytest.fixture
def books_file(tmp_path: Path, sample_books: list[dict]) -> Path:
    """Write the sample dataset to a temporary JSON file."""
    path = tmp_path / "books.json"
    path.write_text(json.dumps(sample_books), encoding="utf-8")
    return path


@pytest.fixture
def settings(books_file: Path) -> Settings:
    return Settings(
        books_file=str(books_file),
        secret_key=TEST_SECRET_KEY,
        rate_limit_enabled=False,
    )


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    return create_app(settings)


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """
    Create a test client.

    Entering the TestClient context runs the lifespan, which loads the
    dataset and puts the core objects on app.state.
    """
    with TestClient(app) as test_client:
        yield test_client


# =============================================================================
# AUTH HELPERS
# =============================================================================
@pytest.fixture
def register_user(client: TestClient) -> Callable[[str, str], None]:
    def _register(username: str, password: str) -> None:
        response = client.post(
            f"{API}/auth/register",
            json={"username": username, "password": password},
        )
        assert response.status_code == 201

    return _register


@pytest.fixture
def auth_headers(
    client: TestClient,
    register_user: Callable[[str, str], None],
) -> Callable[..., dict]:
    """
    Register (once) and log in a user, returning its Authorization header.

    Usage:
        headers = auth_headers("alice")
    """
    registered: set[str] = set()

    def _headers(username: str = "alice", password: str = "pw1") -> dict:
        if username not in registered:
            register_user(username, password)
            registered.add(username)
        response = client.post(
            f"{API}/auth/login",
            json={"username": username, "password": password},
        )
        assert response.status_code == 200
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    return _headers
