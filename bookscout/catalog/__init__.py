"""Catalog source: bundled books, Google Books search, and merge by id."""

from .catalog import Catalog, MergeOutcome
from .google_books import (
    DEFAULT_MAX_RESULTS,
    ID_PREFIX,
    BookSearchError,
    GoogleBooksClient,
    map_volume,
)
from .loader import BUNDLED_CATALOG, load_catalog, save_catalog

__all__ = [
    "BUNDLED_CATALOG",
    "BookSearchError",
    "Catalog",
    "DEFAULT_MAX_RESULTS",
    "GoogleBooksClient",
    "ID_PREFIX",
    "MergeOutcome",
    "load_catalog",
    "map_volume",
    "save_catalog",
]
