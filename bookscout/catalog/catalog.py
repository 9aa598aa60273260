"""
Catalog — the working book list: bundled books plus merged search results.

Entries are keyed by id; a merge never replaces an existing entry.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Sequence

from ..recommender.models.book import Book
from .google_books import DEFAULT_MAX_RESULTS, GoogleBooksClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MergeOutcome:
    """Result of a search-and-merge: how many results came back, how many were new."""

    fetched: int
    added: int

    @property
    def no_results(self) -> bool:
        return self.fetched == 0

    @property
    def all_known(self) -> bool:
        return self.fetched > 0 and self.added == 0


class Catalog:
    """Ordered, id-unique book collection with a restorable initial state."""

    def __init__(self, initial: Sequence[Book] = ()):
        self._initial: List[Book] = []
        seen = set()
        for book in initial:
            if book.id not in seen:
                seen.add(book.id)
                self._initial.append(book)
        self._books: List[Book] = list(self._initial)
        self._ids = set(seen)

    def __len__(self) -> int:
        return len(self._books)

    def __iter__(self) -> Iterator[Book]:
        return iter(self._books)

    def __contains__(self, book_id: object) -> bool:
        return book_id in self._ids

    @property
    def books(self) -> List[Book]:
        return list(self._books)

    def get(self, book_id: str) -> Optional[Book]:
        for book in self._books:
            if book.id == book_id:
                return book
        return None

    def merge(self, results: Iterable[Book]) -> List[Book]:
        """Append results whose id is not yet present. Returns the books added."""
        added: List[Book] = []
        for book in results:
            if book.id in self._ids:
                continue
            self._ids.add(book.id)
            self._books.append(book)
            added.append(book)
        return added

    def reset(self) -> None:
        """Drop merged entries, back to the initial list."""
        self._books = list(self._initial)
        self._ids = {b.id for b in self._initial}

    def search_and_merge(
        self,
        client: GoogleBooksClient,
        query: str,
        max_results: int = DEFAULT_MAX_RESULTS,
    ) -> MergeOutcome:
        """Search the external API and merge new results. Never raises."""
        results = client.search(query, max_results=max_results)
        added = self.merge(results)
        logger.info("[catalog] search %r: fetched %d, added %d", query, len(results), len(added))
        return MergeOutcome(fetched=len(results), added=len(added))
