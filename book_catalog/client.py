"""
Catalog HTTP Client

Small async client for the Book Catalog API, built on httpx. Used by
scripts/demo_client.py and handy from a REPL:

    async with CatalogClient("http://localhost:8000") as client:
        books = await client.search_by_title("design patterns")
        await client.login("alice", "pw1")
        await client.add_or_modify_review(books[0]["isbn"], "Loved it")

Failed requests raise httpx.HTTPStatusError.
"""

from typing import Any
from urllib.parse import quote

import httpx


class CatalogClient:
    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        api_version: str = "v1",
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 10.0,
    ) -> None:
        self._http = httpx.AsyncClient(
            base_url=base_url,
            transport=transport,
            timeout=timeout,
        )
        self._prefix = f"/api/{api_version}"
        self.token: str | None = None

    async def __aenter__(self) -> "CatalogClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    # -------------------------------------------------------------------------
    # Catalog reads
    # -------------------------------------------------------------------------
    async def get_all_books(self) -> list[dict[str, Any]]:
        return await self._get("/books")

    async def search_by_isbn(self, isbn: str) -> list[dict[str, Any]]:
        return await self._get(f"/books/isbn/{quote(isbn, safe='')}")

    async def search_by_author(self, author: str) -> list[dict[str, Any]]:
        return await self._get(f"/books/author/{quote(author, safe='')}")

    async def search_by_title(self, title: str) -> list[dict[str, Any]]:
        return await self._get(f"/books/title/{quote(title, safe='')}")

    async def get_reviews(self, isbn: str) -> dict[str, Any]:
        return await self._get(f"/books/review/{quote(isbn, safe='')}")

    # -------------------------------------------------------------------------
    # Authentication
    # -------------------------------------------------------------------------
    async def register(self, username: str, password: str) -> dict[str, Any]:
        return await self._send(
            "POST", "/auth/register", json={"username": username, "password": password}
        )

    async def login(self, username: str, password: str) -> str:
        """Log in and keep the token for the review calls that follow."""
        data = await self._send(
            "POST", "/auth/login", json={"username": username, "password": password}
        )
        self.token = data["access_token"]
        return self.token

    # -------------------------------------------------------------------------
    # Reviews (require login)
    # -------------------------------------------------------------------------
    async def add_or_modify_review(self, isbn: str, review: str) -> dict[str, str]:
        data = await self._send(
            "POST",
            f"/books/review/{quote(isbn, safe='')}",
            json={"review": review},
            headers=self._auth_headers(),
        )
        return data["reviews"]

    async def delete_review(self, isbn: str) -> dict[str, str]:
        data = await self._send(
            "DELETE",
            f"/books/review/{quote(isbn, safe='')}",
            headers=self._auth_headers(),
        )
        return data["reviews"]

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------
    def _auth_headers(self) -> dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    async def _get(self, path: str) -> Any:
        return await self._send("GET", path)

    async def _send(self, method: str, path: str, **kwargs: Any) -> Any:
        response = await self._http.request(method, f"{self._prefix}{path}", **kwargs)
        response.raise_for_status()
        return response.json()
