"""
Catalog Loader

Loads the bundled book list (bookscout/data/books.json by default).

Usage:
    books = load_catalog()
    books = load_catalog(Path("my_books.json"))
"""

import json
import logging
from pathlib import Path
from typing import List, Optional, Union

from pydantic import ValidationError

from ..recommender.models.book import Book

logger = logging.getLogger(__name__)

BUNDLED_CATALOG = Path(__file__).resolve().parent.parent / "data" / "books.json"


def load_catalog(path: Optional[Union[Path, str]] = None) -> List[Book]:
    """
    Load books from a JSON array file.

    A missing or unreadable file yields an empty catalog. Entries that fail
    validation and duplicate ids are skipped with a warning.
    """
    path = Path(path) if path else BUNDLED_CATALOG
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("[catalog] failed to load %s: %s", path, e)
        return []
    if not isinstance(data, list):
        logger.warning("[catalog] %s does not hold a JSON array", path)
        return []

    books: List[Book] = []
    seen = set()
    for i, item in enumerate(data):
        try:
            book = Book.model_validate(item)
        except ValidationError as e:
            logger.warning("[catalog] skipping entry %d in %s: %s", i, path, e.errors()[0].get("msg"))
            continue
        if book.id in seen:
            logger.warning("[catalog] skipping duplicate id %r in %s", book.id, path)
            continue
        seen.add(book.id)
        books.append(book)
    logger.info("[catalog] loaded %d books from %s", len(books), path)
    return books


def save_catalog(books: List[Book], path: Union[Path, str]) -> None:
    """Write books back as a pretty-printed JSON array."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump([b.model_dump() for b in books], f, indent=2, ensure_ascii=False)
