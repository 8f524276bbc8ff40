"""
Tests for Rate Limiting

The limiter is process-wide and configured by create_app(), so each test
builds an app with its own Settings and the fixture teardown switches
limiting back off for the rest of the suite.
"""

from collections.abc import Callable, Generator

import pytest
from fastapi import status
from fastapi.testclient import TestClient
from starlette.requests import Request

from book_catalog.config import Settings
from book_catalog.main import create_app
from book_catalog.services.rate_limiter import configure_limiter, get_client_ip, limiter
from tests.conftest import API, TEST_SECRET_KEY


@pytest.fixture
def limited_client(
    settings: Settings,
    books_file,
) -> Generator[Callable[..., TestClient], None, None]:
    """
    Build a client for an app with rate limiting enabled.

    Usage:
        client = limited_client(rate_limit_auth="3/minute")
    """
    clients: list[TestClient] = []

    def _build(**overrides) -> TestClient:
        app_settings = Settings(
            books_file=str(books_file),
            secret_key=TEST_SECRET_KEY,
            rate_limit_enabled=True,
            **overrides,
        )
        client = TestClient(create_app(app_settings))
        client.__enter__()
        clients.append(client)
        return client

    yield _build

    for client in clients:
        client.__exit__(None, None, None)
    configure_limiter(settings)


def login(client: TestClient, **headers) -> int:
    response = client.post(
        f"{API}/auth/login",
        json={"username": "ghost", "password": "pw1"},
        headers=headers,
    )
    return response.status_code


class TestAuthLimit:
    """Registration and login use the auth tier"""

    def test_login_throttled_after_auth_limit(self, limited_client):
        client = limited_client(rate_limit_auth="3/minute")

        codes = [login(client) for _ in range(3)]
        response = client.post(
            f"{API}/auth/login",
            json={"username": "ghost", "password": "pw1"},
        )

        assert codes == [status.HTTP_401_UNAUTHORIZED] * 3
        assert response.status_code == status.HTTP_429_TOO_MANY_REQUESTS
        assert response.headers["Retry-After"] == "60"
        assert response.json()["detail"] == "Too many requests. Please slow down."
        assert "3 per 1 minute" in response.json()["limit"]

    def test_clients_have_separate_budgets(self, limited_client):
        client = limited_client(rate_limit_auth="2/minute")

        for _ in range(2):
            login(client, **{"X-Forwarded-For": "10.0.0.1"})

        assert login(client, **{"X-Forwarded-For": "10.0.0.1"}) == 429
        assert login(client, **{"X-Forwarded-For": "10.0.0.2"}) == 401


class TestReadLimit:
    """Catalog reads use the default tier"""

    def test_reads_under_default_limit_pass(self, limited_client):
        client = limited_client(rate_limit_default="100/minute")

        codes = {client.get(f"{API}/books").status_code for _ in range(20)}

        assert codes == {status.HTTP_200_OK}

    def test_reads_throttled_at_configured_default(self, limited_client):
        client = limited_client(rate_limit_default="2/minute")

        codes = [client.get(f"{API}/books").status_code for _ in range(3)]

        assert codes == [200, 200, 429]


class TestConfiguration:
    """Each app applies its own Settings to the limiter"""

    def test_health_reports_limiter_state(self, limited_client):
        client = limited_client()
        assert client.get("/health").json()["rate_limiting"]["enabled"] is True

    def test_later_app_can_disable_limiting(self, limited_client, settings: Settings):
        limited_client(rate_limit_auth="1/minute")

        with TestClient(create_app(settings)) as client:
            codes = {login(client) for _ in range(5)}
            health = client.get("/health").json()

        assert codes == {status.HTTP_401_UNAUTHORIZED}
        assert health["rate_limiting"]["enabled"] is False
        assert limiter.enabled is False

    def test_new_app_starts_with_fresh_budget(self, limited_client):
        first = limited_client(rate_limit_auth="1/minute")
        login(first)
        assert login(first) == 429

        second = limited_client(rate_limit_auth="1/minute")
        assert login(second) == 401


class TestClientIp:
    """Tests for get_client_ip"""

    def test_forwarded_for_first_entry(self):
        request = Request({
            "type": "http",
            "headers": [(b"x-forwarded-for", b"1.2.3.4, 5.6.7.8")],
            "client": ("9.9.9.9", 1234),
        })
        assert get_client_ip(request) == "1.2.3.4"

    def test_real_ip(self):
        request = Request({
            "type": "http",
            "headers": [(b"x-real-ip", b"4.3.2.1")],
            "client": ("9.9.9.9", 1234),
        })
        assert get_client_ip(request) == "4.3.2.1"

    def test_direct_connection(self):
        request = Request({"type": "http", "headers": [], "client": ("9.9.9.9", 1234)})
        assert get_client_ip(request) == "9.9.9.9"
