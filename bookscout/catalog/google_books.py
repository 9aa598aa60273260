"""Google Books API client for catalog search and cover lookup.

Google Books (googleapis.com/books/v1) provides:
- Free-text volume search
- Author, category, rating and description metadata
- Thumbnail cover links

An API key is optional; it only raises the anonymous quota.

Every public method recovers from network, HTTP and payload errors by
returning an empty result, so callers never see an exception.
"""

import logging
from typing import Any, Dict, List, Optional

import requests
from pydantic import ValidationError

from ..recommender.models.book import (
    DEFAULT_DESCRIPTION,
    DEFAULT_GENRE,
    DEFAULT_RATING,
    PLACEHOLDER_IMAGE,
    UNKNOWN_AUTHOR,
    UNKNOWN_TITLE,
    Book,
)

logger = logging.getLogger(__name__)

# Prefix for ids of externally sourced books, keeps them apart from bundled ids
ID_PREFIX = "gb_"

DEFAULT_MAX_RESULTS = 15
COVER_MAX_RESULTS = 5


class BookSearchError(Exception):
    """Raised by the transport layer when a Google Books request fails."""

    pass


def map_volume(item: Dict[str, Any]) -> Optional[Book]:
    """Map one Google Books volume to a Book, filling defaults for missing fields."""
    volume_id = item.get("id")
    if not volume_id:
        return None
    info = item.get("volumeInfo") or {}
    authors = info.get("authors") or []
    categories = info.get("categories") or []
    links = info.get("imageLinks") or {}
    try:
        rating = float(info["averageRating"])
    except (KeyError, TypeError, ValueError):
        rating = DEFAULT_RATING
    return Book(
        id=f"{ID_PREFIX}{volume_id}",
        title=info.get("title") or UNKNOWN_TITLE,
        author=authors[0] if authors else UNKNOWN_AUTHOR,
        genre=categories[0] if categories else DEFAULT_GENRE,
        rating=rating,
        description=info.get("description") or info.get("subtitle") or DEFAULT_DESCRIPTION,
        image=links.get("thumbnail") or links.get("smallThumbnail") or PLACEHOLDER_IMAGE,
    )


def _https(url: str) -> str:
    return "https://" + url[len("http://"):] if url.startswith("http://") else url


class GoogleBooksClient:
    """Client for the Google Books volumes API."""

    BASE_URL = "https://www.googleapis.com/books/v1/volumes"

    def __init__(self, api_key: Optional[str] = None, timeout: float = 10.0):
        """Initialize client.

        Args:
            api_key: Optional Google API key
            timeout: Request timeout in seconds
        """
        self.api_key = api_key or None
        self.timeout = timeout
        self._session = requests.Session()
        self._session.headers.update({"Accept": "application/json"})

    def _get(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """Make GET request, raising BookSearchError on any failure."""
        if self.api_key:
            params = {**params, "key": self.api_key}
        try:
            response = self._session.get(self.BASE_URL, params=params, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.Timeout:
            raise BookSearchError("Request timed out")
        except requests.exceptions.HTTPError as e:
            raise BookSearchError(f"HTTP error: {e.response.status_code}")
        except requests.exceptions.RequestException as e:
            raise BookSearchError(f"Request failed: {e}")
        except ValueError as e:
            raise BookSearchError(f"Malformed response: {e}")
        if not isinstance(data, dict):
            raise BookSearchError("Malformed response: expected a JSON object")
        return data

    def _items(self, params: Dict[str, Any]) -> List[Dict[str, Any]]:
        data = self._get(params)
        items = data.get("items")
        if not isinstance(items, list):
            return []
        return [item for item in items if isinstance(item, dict)]

    def search(self, query: str, max_results: int = DEFAULT_MAX_RESULTS) -> List[Book]:
        """Search volumes by free text.

        Args:
            query: Search query (title, author, or anything Google accepts)
            max_results: Maximum results to request

        Returns:
            List of Book objects, empty on blank query or any failure
        """
        if not query or not query.strip():
            return []
        try:
            items = self._items({"q": query.strip(), "maxResults": max_results})
        except BookSearchError as e:
            logger.warning("[search] Google Books search %r failed: %s", query, e)
            return []
        books = []
        for item in items:
            try:
                book = map_volume(item)
            except ValidationError as e:
                logger.warning("[search] skipping malformed volume %r: %s", item.get("id"), e.errors()[0].get("msg"))
                continue
            if book is not None:
                books.append(book)
        logger.info("[search] %r -> %d results", query, len(books))
        return books

    def find_cover(self, title: str, author: str = "") -> Optional[str]:
        """Return an https thumbnail URL for the first matching volume with a cover."""
        parts = []
        if title:
            parts.append(f"intitle:{title}")
        if author:
            parts.append(f"inauthor:{author}")
        if not parts:
            return None
        try:
            items = self._items({"q": "+".join(parts), "maxResults": COVER_MAX_RESULTS})
        except BookSearchError as e:
            logger.warning("[covers] lookup for %r / %r failed: %s", title, author, e)
            return None
        for item in items:
            links = (item.get("volumeInfo") or {}).get("imageLinks") or {}
            thumb = links.get("thumbnail") or links.get("smallThumbnail") or links.get("medium") or links.get("small")
            if thumb:
                return _https(thumb)
        return None
