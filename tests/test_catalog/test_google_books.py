"""
Google Books client tests. HTTP is mocked at the session level.

Run:
    pytest tests/test_catalog/test_google_books.py -v
"""

from unittest.mock import MagicMock

import pytest
import requests

from bookscout.catalog import GoogleBooksClient, map_volume
from bookscout.recommender.models.book import DEFAULT_DESCRIPTION, PLACEHOLDER_IMAGE

VOLUME = {
    "id": "abc123",
    "volumeInfo": {
        "title": "The Hobbit",
        "authors": ["J.R.R. Tolkien", "Christopher Tolkien"],
        "categories": ["Fiction", "Fantasy"],
        "averageRating": 4.5,
        "description": "There and back again.",
        "imageLinks": {"thumbnail": "http://books.google.com/hobbit.jpg"},
    },
}


def _response(payload=None, status=200):
    response = MagicMock()
    response.json.return_value = payload
    if status >= 400:
        error = requests.exceptions.HTTPError(response=MagicMock(status_code=status))
        response.raise_for_status.side_effect = error
    return response


@pytest.fixture
def client():
    c = GoogleBooksClient(api_key=None, timeout=1.0)
    c._session = MagicMock()
    return c


class TestMapVolume:
    """Volume -> Book field mapping and defaults."""

    def test_full_volume(self):
        book = map_volume(VOLUME)
        assert book.id == "gb_abc123"
        assert book.title == "The Hobbit"
        assert book.author == "J.R.R. Tolkien"
        assert book.genre == "Fiction"
        assert book.rating == 4.5
        assert book.description == "There and back again."
        assert book.image == "http://books.google.com/hobbit.jpg"

    def test_empty_volume_info_uses_defaults(self):
        book = map_volume({"id": "x"})
        assert book.id == "gb_x"
        assert book.title == "Unknown Title"
        assert book.author == "Unknown Author"
        assert book.genre == "General"
        assert book.rating == 4.0
        assert book.description == DEFAULT_DESCRIPTION
        assert book.image == PLACEHOLDER_IMAGE

    def test_subtitle_used_when_no_description(self):
        book = map_volume({"id": "x", "volumeInfo": {"subtitle": "A tale"}})
        assert book.description == "A tale"

    def test_small_thumbnail_fallback(self):
        book = map_volume({"id": "x", "volumeInfo": {"imageLinks": {"smallThumbnail": "http://s.jpg"}}})
        assert book.image == "http://s.jpg"

    def test_non_numeric_rating_falls_back(self):
        book = map_volume({"id": "x", "volumeInfo": {"averageRating": "n/a"}})
        assert book.rating == 4.0

    def test_missing_id_skipped(self):
        assert map_volume({"volumeInfo": {"title": "No id"}}) is None


class TestSearch:
    """Free-text search with error recovery."""

    def test_returns_mapped_books(self, client):
        client._session.get.return_value = _response({"items": [VOLUME, {"id": "def"}]})
        books = client.search("hobbit")
        assert [b.id for b in books] == ["gb_abc123", "gb_def"]
        _, kwargs = client._session.get.call_args
        assert kwargs["params"] == {"q": "hobbit", "maxResults": 15}
        assert kwargs["timeout"] == 1.0

    def test_api_key_sent_when_set(self, client):
        client.api_key = "secret"
        client._session.get.return_value = _response({"items": []})
        client.search("hobbit", max_results=5)
        _, kwargs = client._session.get.call_args
        assert kwargs["params"] == {"q": "hobbit", "maxResults": 5, "key": "secret"}

    @pytest.mark.parametrize("query", ["", "   "])
    def test_blank_query_makes_no_request(self, client, query):
        assert client.search(query) == []
        client._session.get.assert_not_called()

    def test_http_error_returns_empty(self, client):
        client._session.get.return_value = _response(status=500)
        assert client.search("hobbit") == []

    def test_network_error_returns_empty(self, client):
        client._session.get.side_effect = requests.exceptions.ConnectionError("down")
        assert client.search("hobbit") == []

    def test_timeout_returns_empty(self, client):
        client._session.get.side_effect = requests.exceptions.Timeout()
        assert client.search("hobbit") == []

    def test_malformed_json_returns_empty(self, client):
        response = _response()
        response.json.side_effect = ValueError("not json")
        client._session.get.return_value = response
        assert client.search("hobbit") == []

    def test_no_items_key(self, client):
        client._session.get.return_value = _response({"totalItems": 0})
        assert client.search("nothing") == []

    def test_items_without_id_dropped(self, client):
        client._session.get.return_value = _response({"items": [{"volumeInfo": {}}, VOLUME, "junk"]})
        assert [b.id for b in client.search("hobbit")] == ["gb_abc123"]


class TestFindCover:
    """Cover lookup by title and author."""

    def test_thumbnail_upgraded_to_https(self, client):
        client._session.get.return_value = _response({"items": [VOLUME]})
        assert client.find_cover("The Hobbit", "Tolkien") == "https://books.google.com/hobbit.jpg"
        _, kwargs = client._session.get.call_args
        assert kwargs["params"]["q"] == "intitle:The Hobbit+inauthor:Tolkien"

    def test_skips_items_without_images(self, client):
        no_cover = {"id": "a", "volumeInfo": {}}
        small = {"id": "b", "volumeInfo": {"imageLinks": {"smallThumbnail": "https://s.jpg"}}}
        client._session.get.return_value = _response({"items": [no_cover, small]})
        assert client.find_cover("Title") == "https://s.jpg"

    def test_no_match(self, client):
        client._session.get.return_value = _response({"items": []})
        assert client.find_cover("Title", "Author") is None

    def test_empty_title_and_author(self, client):
        assert client.find_cover("", "") is None
        client._session.get.assert_not_called()

    def test_failure_returns_none(self, client):
        client._session.get.side_effect = requests.exceptions.ConnectionError()
        assert client.find_cover("Title") is None
