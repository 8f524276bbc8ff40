#!/usr/bin/env python3
"""
Demo Client Script

Walks through the public API of a running Book Catalog server:
list all books, search by ISBN / author / title, then register, log in,
add a review and delete it again.

USAGE:
    # Start the API first
    uvicorn book_catalog.main:app

    # Then, from the project root
    python scripts/demo_client.py
    BASE_URL=http://localhost:9000 python scripts/demo_client.py
    python scripts/demo_client.py --isbn 9780134685991 --author "Addy Osmani"
"""

import argparse
import asyncio
import json
import os
import sys
from pathlib import Path

import httpx

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from book_catalog.client import CatalogClient


def show(title: str, data: object) -> None:
    print(f"\n== {title} ==")
    print(json.dumps(data, indent=2, ensure_ascii=False))


async def run_demo(client: CatalogClient, args: argparse.Namespace) -> None:
    show("All books", await client.get_all_books())

    try:
        show(f"Search by ISBN {args.isbn}", await client.search_by_isbn(args.isbn))
    except httpx.HTTPStatusError as e:
        print(f"Error searching by ISBN: {e.response.status_code} {e.response.text}")

    show(f"Search by author {args.author!r}", await client.search_by_author(args.author))
    show(f"Search by title {args.title!r}", await client.search_by_title(args.title))

    print("\n== Register, login, add/delete review ==")
    try:
        await client.register(args.username, args.password)
        print(f"Registered user: {args.username}")
    except httpx.HTTPStatusError as e:
        print(f"Register skipped (maybe already exists): {e.response.json()}")

    await client.login(args.username, args.password)
    print("Logged in, token received")

    show("After add/modify", await client.add_or_modify_review(args.isbn, args.review))
    show("After delete", await client.delete_review(args.isbn))


async def main_async(args: argparse.Namespace) -> int:
    async with CatalogClient(args.base_url) as client:
        try:
            await run_demo(client, args)
        except httpx.HTTPError as e:
            print(f"Demo failed: {e}")
            return 1
    return 0


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Exercise a running Book Catalog API")
    parser.add_argument(
        "--base-url",
        default=os.environ.get("BASE_URL", "http://localhost:8000"),
        help="Server URL (default: $BASE_URL or http://localhost:8000)",
    )
    parser.add_argument("--isbn", default="9780134685991")
    parser.add_argument("--author", default="Addy Osmani")
    parser.add_argument("--title", default="Design Patterns")
    parser.add_argument("--username", default="demoUser")
    parser.add_argument("--password", default="demoPass123!")
    parser.add_argument("--review", default="Fantastic book for Java best practices.")
    args = parser.parse_args()

    sys.exit(asyncio.run(main_async(args)))


if __name__ == "__main__":
    main()
