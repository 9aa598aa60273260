"""
Catalog and loader tests.

Run:
    pytest tests/test_catalog/test_catalog.py -v
"""

import json
from unittest.mock import MagicMock

from bookscout.catalog import BUNDLED_CATALOG, Catalog, MergeOutcome, load_catalog, save_catalog
from bookscout.recommender import Book


class TestLoadCatalog:
    """Bundled and custom catalog files."""

    def test_bundled_catalog(self):
        books = load_catalog()
        assert BUNDLED_CATALOG.exists()
        assert len(books) == 24
        assert len({b.id for b in books}) == 24
        assert books[0].id == "1"

    def test_missing_file_gives_empty(self, tmp_path):
        assert load_catalog(tmp_path / "nope.json") == []

    def test_corrupt_file_gives_empty(self, tmp_path):
        path = tmp_path / "books.json"
        path.write_text("{not json")
        assert load_catalog(path) == []

    def test_non_array_gives_empty(self, tmp_path):
        path = tmp_path / "books.json"
        path.write_text(json.dumps({"id": "1"}))
        assert load_catalog(path) == []

    def test_invalid_and_duplicate_entries_skipped(self, tmp_path):
        path = tmp_path / "books.json"
        path.write_text(json.dumps([{"id": "a", "title": "A"}, {"title": "no id"}, {"id": "a", "title": "dup"}]))
        books = load_catalog(path)
        assert [(b.id, b.title) for b in books] == [("a", "A")]

    def test_save_then_load(self, tmp_path, make_book):
        path = tmp_path / "out.json"
        save_catalog([make_book("1", image="https://c.jpg"), make_book("2")], path)
        books = load_catalog(path)
        assert [b.id for b in books] == ["1", "2"]
        assert books[0].image == "https://c.jpg"


class TestCatalog:
    """Merge-by-id and reset."""

    def test_initial_duplicates_dropped(self, make_book):
        catalog = Catalog([make_book("1"), make_book("1", title="Other"), make_book("2")])
        assert len(catalog) == 2
        assert catalog.get("1").title == "Book 1"

    def test_merge_adds_only_new_ids(self, make_book):
        catalog = Catalog([make_book("1"), make_book("2")])
        added = catalog.merge([make_book("2", title="Replacement"), make_book("gb_3"), make_book("gb_3")])
        assert [b.id for b in added] == ["gb_3"]
        assert [b.id for b in catalog] == ["1", "2", "gb_3"]
        assert catalog.get("2").title == "Book 2"
        assert "gb_3" in catalog

    def test_reset_drops_merged(self, make_book):
        catalog = Catalog([make_book("1")])
        catalog.merge([make_book("gb_2")])
        catalog.reset()
        assert [b.id for b in catalog.books] == ["1"]
        assert "gb_2" not in catalog

    def test_get_missing(self, make_book):
        assert Catalog([make_book("1")]).get("zzz") is None

    def test_search_and_merge(self, make_book):
        client = MagicMock()
        client.search.return_value = [make_book("1"), make_book("gb_9")]
        catalog = Catalog([make_book("1")])
        outcome = catalog.search_and_merge(client, "query", max_results=7)
        client.search.assert_called_once_with("query", max_results=7)
        assert outcome == MergeOutcome(fetched=2, added=1)
        assert not outcome.no_results
        assert not outcome.all_known

    def test_outcome_flags(self):
        assert MergeOutcome(fetched=0, added=0).no_results
        assert MergeOutcome(fetched=3, added=0).all_known
        assert not MergeOutcome(fetched=0, added=0).all_known

    def test_books_is_a_copy(self):
        catalog = Catalog([Book(id="1")])
        catalog.books.append(Book(id="2"))
        assert len(catalog) == 1
