"""Application state: config, choice store, catalog, and book search client."""

import logging
from typing import List, Optional

from ..catalog import GoogleBooksClient, load_catalog
from ..recommender.models.book import Book
from .config import ServerConfig, get_config
from .services import ChoiceStore, InMemoryChoiceStore, JsonFileChoiceStore

logger = logging.getLogger(__name__)


class AppState:
    """Global application state."""

    def __init__(self, config: ServerConfig):
        self.config = config

        # Choice store: JSON file by default, in-memory when CHOICE_STORE=memory
        self.choice_store: ChoiceStore = self._create_choice_store(config)
        logger.info("[startup] Choice store: %s", type(self.choice_store).__name__)

        # Bundled catalog (read-only on the server)
        self.catalog: List[Book] = load_catalog(config.catalog_path)

        # Google Books proxy
        self.book_search = GoogleBooksClient(
            api_key=config.google_books_api_key,
            timeout=config.http_timeout_seconds,
        )

    def _create_choice_store(self, config: ServerConfig) -> ChoiceStore:
        if config.choice_store == "memory":
            return InMemoryChoiceStore()
        return JsonFileChoiceStore(config.choices_file)

    @property
    def choices_file(self) -> Optional[str]:
        store = self.choice_store
        return str(store.path) if isinstance(store, JsonFileChoiceStore) else None


_state: Optional[AppState] = None


def get_state() -> AppState:
    global _state
    if _state is None:
        config = get_config()
        _state = AppState(config)
    return _state


def reset_state() -> None:
    """Drop the global state so the next get_state() rebuilds it from config."""
    global _state
    _state = None
