"""
Tests for CatalogStore

- Loading the accepted dataset shapes and rejecting malformed ones
- Exact ISBN lookup and ordered listing
- Review upsert/delete semantics
- Concurrent review writes
"""

import threading

import pytest

from book_catalog.exceptions import InvalidDatasetError, NotFoundError
from book_catalog.store import CatalogStore


class TestLoad:
    """Tests for CatalogStore.load"""

    def test_load_list_keeps_order(self, catalog_store: CatalogStore):
        assert [b.isbn for b in catalog_store.all()] == [
            "1111",
            "2222",
            "9780134685991",
            "9781098139872",
            "9780201633610",
        ]
        assert len(catalog_store) == 5

    def test_load_mapping_stamps_isbn_from_key(self):
        store = CatalogStore()
        store.load({
            "1111": {"title": "A", "author": "X"},
            "2222": {"title": "B", "author": "Y", "isbn": "ignored"},
        })

        assert [b.isbn for b in store.all()] == ["1111", "2222"]
        assert store.find_by_isbn("2222").title == "B"
        assert store.find_by_isbn("ignored") is None

    def test_load_keeps_existing_reviews(self, catalog_store: CatalogStore):
        book = catalog_store.find_by_isbn("9780201633610")
        assert book.reviews == {"maria": "A classic."}

    def test_load_does_not_share_input_dicts(self):
        records = [{"isbn": "1", "title": "T", "author": "A", "reviews": {"u": "r"}}]
        store = CatalogStore()
        store.load(records)

        store.set_review("1", "v", "other")

        assert records[0]["reviews"] == {"u": "r"}

    @pytest.mark.parametrize(
        "records",
        [
            "not a dataset",
            42,
            None,
            [{"title": "A", "author": "X"}],
            [{"isbn": "1", "author": "X"}],
            [{"isbn": "1", "title": "A"}],
            [{"isbn": "1", "title": "", "author": "X"}],
            ["not a record"],
            {"1111": "not a record"},
            [{"isbn": "1", "title": "A", "author": "X", "reviews": ["bad"]}],
        ],
    )
    def test_load_rejects_invalid_input(self, records):
        with pytest.raises(InvalidDatasetError):
            CatalogStore().load(records)

    def test_load_rejects_duplicate_isbn(self):
        records = [
            {"isbn": "1", "title": "A", "author": "X"},
            {"isbn": "1", "title": "B", "author": "Y"},
        ]
        with pytest.raises(InvalidDatasetError, match="Duplicate isbn"):
            CatalogStore().load(records)

    def test_missing_fields_are_named(self):
        with pytest.raises(InvalidDatasetError) as exc_info:
            CatalogStore().load([{"isbn": "1"}])

        assert "title" in exc_info.value.detail
        assert "author" in exc_info.value.detail

    def test_failed_load_leaves_store_untouched(self, catalog_store: CatalogStore):
        with pytest.raises(InvalidDatasetError):
            catalog_store.load([{"isbn": "x"}])

        assert len(catalog_store) == 5


class TestReads:
    """Tests for find_by_isbn and all"""

    def test_find_by_isbn_exact_match(self, catalog_store: CatalogStore):
        book = catalog_store.find_by_isbn("1111")
        assert book is not None
        assert book.title == "A"

    def test_find_by_isbn_absent(self, catalog_store: CatalogStore):
        assert catalog_store.find_by_isbn("9999") is None
        assert catalog_store.find_by_isbn("111") is None

    def test_all_is_a_read_only_view(self, catalog_store: CatalogStore):
        books = catalog_store.all()
        assert isinstance(books, tuple)
        assert len(catalog_store.all()) == len(books)


class TestSetReview:
    """Tests for CatalogStore.set_review"""

    def test_set_review_adds_entry(self, catalog_store: CatalogStore):
        book = catalog_store.set_review("1111", "alice", "great")
        assert book.reviews == {"alice": "great"}

    def test_set_review_overwrites_instead_of_duplicating(self, catalog_store: CatalogStore):
        catalog_store.set_review("1111", "alice", "great")
        book = catalog_store.set_review("1111", "alice", "actually meh")

        assert len(book.reviews) == 1
        assert book.reviews["alice"] == "actually meh"

    def test_set_review_is_idempotent(self, catalog_store: CatalogStore):
        first = dict(catalog_store.set_review("1111", "alice", "great").reviews)
        second = dict(catalog_store.set_review("1111", "alice", "great").reviews)
        assert first == second

    def test_set_review_keeps_other_users(self, catalog_store: CatalogStore):
        book = catalog_store.set_review("9780201633610", "alice", "agreed")
        assert book.reviews == {"maria": "A classic.", "alice": "agreed"}

    def test_set_review_returns_detached_copy(self, catalog_store: CatalogStore):
        book = catalog_store.set_review("1111", "alice", "great")
        catalog_store.set_review("1111", "bob", "later")

        assert book.reviews == {"alice": "great"}
        assert catalog_store.find_by_isbn("1111").reviews == {"alice": "great", "bob": "later"}

    def test_set_review_unknown_book(self, catalog_store: CatalogStore):
        with pytest.raises(NotFoundError):
            catalog_store.set_review("9999", "alice", "great")


class TestDeleteReview:
    """Tests for CatalogStore.delete_review"""

    def test_delete_after_set(self, catalog_store: CatalogStore):
        catalog_store.set_review("1111", "alice", "great")
        book = catalog_store.delete_review("1111", "alice")
        assert "alice" not in book.reviews

    def test_delete_twice_fails(self, catalog_store: CatalogStore):
        catalog_store.set_review("1111", "alice", "great")
        catalog_store.delete_review("1111", "alice")

        with pytest.raises(NotFoundError):
            catalog_store.delete_review("1111", "alice")

    def test_delete_without_review(self, catalog_store: CatalogStore):
        with pytest.raises(NotFoundError):
            catalog_store.delete_review("9780201633610", "alice")

    def test_delete_unknown_book(self, catalog_store: CatalogStore):
        with pytest.raises(NotFoundError):
            catalog_store.delete_review("9999", "alice")

    def test_reviews_of_returns_copy(self, catalog_store: CatalogStore):
        book = catalog_store.find_by_isbn("9780201633610")
        snapshot = catalog_store.reviews_of(book)
        snapshot["mallory"] = "injected"

        assert "mallory" not in book.reviews


class TestConcurrentWrites:
    """Concurrent reviewers on the same book must not lose updates."""

    def test_parallel_reviews_all_land(self, catalog_store: CatalogStore):
        users = [f"user{i}" for i in range(50)]
        barrier = threading.Barrier(len(users))

        def write(username: str) -> None:
            barrier.wait()
            for n in range(20):
                catalog_store.set_review("1111", username, f"take {n}")

        threads = [threading.Thread(target=write, args=(u,)) for u in users]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        reviews = catalog_store.find_by_isbn("1111").reviews
        assert len(reviews) == len(users)
        assert set(reviews.values()) == {"take 19"}
