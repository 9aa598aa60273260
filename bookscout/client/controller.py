"""
Swipe controller — the view layer's state owner.

Holds the catalog, the session state and the derived queue. Every change to
liked, disliked or the catalog saves the session and rebuilds the queue.
Decisions are applied locally first and then posted to the backend on a
best-effort basis; a failed post never rolls back local state.
"""

import logging
import random
from typing import Any, Callable, Dict, List, Optional, Protocol

from ..catalog import DEFAULT_MAX_RESULTS, Catalog, GoogleBooksClient, MergeOutcome
from ..recommender import Action, Book, ChoiceEvent, RecommenderConfig, build_queue, make_rng, now_ms
from .state import SessionState, StateStore

logger = logging.getLogger(__name__)


class ChoiceSink(Protocol):
    """Where decisions are logged besides local state (e.g. BackendClient)."""

    def post_choice(self, event: ChoiceEvent) -> bool: ...

    def summary(self) -> Optional[Dict[str, Any]]: ...


class SwipeController:
    """Queue, cursor and decisions for one swiping session."""

    def __init__(
        self,
        catalog: Catalog,
        state_store: StateStore,
        backend: Optional[ChoiceSink] = None,
        search_client: Optional[GoogleBooksClient] = None,
        config: Optional[RecommenderConfig] = None,
        rng: Optional[random.Random] = None,
        clock: Callable[[], int] = now_ms,
    ):
        self.catalog = catalog
        self._store = state_store
        self._backend = backend
        self._search_client = search_client
        self._config = config or RecommenderConfig()
        self._rng = rng or make_rng(self._config)
        self._clock = clock

        self.state: SessionState = state_store.load() or SessionState()
        self._queue: List[Book] = []
        self._index = 0
        self._recompute()

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    @property
    def queue(self) -> List[Book]:
        return list(self._queue)

    @property
    def current(self) -> Optional[Book]:
        """Book on the top card, None when the queue is exhausted."""
        if 0 <= self._index < len(self._queue):
            return self._queue[self._index]
        return None

    @property
    def exhausted(self) -> bool:
        return self.current is None

    @property
    def remaining(self) -> int:
        return max(0, len(self._queue) - self._index)

    @property
    def liked(self) -> List[ChoiceEvent]:
        return list(self.state.liked)

    @property
    def disliked(self) -> List[ChoiceEvent]:
        return list(self.state.disliked)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def like(self) -> Optional[ChoiceEvent]:
        return self.decide(Action.LIKE)

    def dislike(self) -> Optional[ChoiceEvent]:
        return self.decide(Action.DISLIKE)

    def decide(self, action: Action) -> Optional[ChoiceEvent]:
        """Record a decision on the current book. None when there is no current book."""
        book = self.current
        if book is None:
            logger.info("[controller] %s ignored: no more books", Action(action).value)
            return None
        event = ChoiceEvent.create(book, Action(action), self._clock())
        self.state = self.state.with_event(event)
        self._recompute()
        if self._backend is not None:
            self._backend.post_choice(event)
        return event

    def skip(self) -> bool:
        """Move to the next card without deciding. False at the end of the queue."""
        if self._index + 1 < len(self._queue):
            self._index += 1
            return True
        return False

    def reset(self) -> None:
        """Forget every decision and merged search result."""
        self._store.clear()
        self.state = SessionState()
        self.catalog.reset()
        self._recompute()

    def search(
        self,
        query: str,
        api_key: Optional[str] = None,
        max_results: int = DEFAULT_MAX_RESULTS,
    ) -> MergeOutcome:
        """Search Google Books and merge new results into the catalog."""
        if not query or not query.strip():
            return MergeOutcome(fetched=0, added=0)
        client = self._search_client
        if client is None or (api_key and api_key != client.api_key):
            timeout = client.timeout if client is not None else 10.0
            client = GoogleBooksClient(api_key=api_key, timeout=timeout)
            self._search_client = client
        outcome = self.catalog.search_and_merge(client, query, max_results=max_results)
        if outcome.added:
            self._recompute()
        return outcome

    def backend_summary(self) -> Optional[Dict[str, Any]]:
        if self._backend is None:
            return None
        return self._backend.summary()

    # ------------------------------------------------------------------

    def _recompute(self) -> None:
        self._store.save(self.state)
        self._queue = build_queue(
            self.catalog.books,
            self.state.liked,
            self.state.disliked,
            now=self._clock(),
            config=self._config,
            rng=self._rng,
        )
        self._index = 0
