"""Pytest configuration and shared fixtures.

Provides book/event factories, an isolated backend app (choices file under
tmp_path), and a virtual-time scheduler for gesture tests.
"""

from typing import Callable, Generator

import pytest
from fastapi.testclient import TestClient

from bookscout.client.gesture import ManualScheduler
from bookscout.recommender import Action, Book, ChoiceEvent
from bookscout.recommender.models.config import MS_PER_DAY
from bookscout.server import create_app, reload_config, reset_state

# Fixed "now" for scoring tests: 2026-01-01T00:00:00Z in epoch millis
NOW_MS = 1_767_225_600_000


# ============================================================================
# Data Fixtures
# ============================================================================


@pytest.fixture
def make_book() -> Callable[..., Book]:
    """Factory for books with sensible defaults."""

    def _make(book_id: str, author: str = "Author", genre: str = "Genre", **kwargs) -> Book:
        return Book(id=book_id, title=kwargs.pop("title", f"Book {book_id}"), author=author, genre=genre, **kwargs)

    return _make


@pytest.fixture
def make_event() -> Callable[..., ChoiceEvent]:
    """Factory for choice events `age_days` before NOW_MS."""

    def _make(book: Book, action: Action = Action.LIKE, age_days: float = 0.0) -> ChoiceEvent:
        return ChoiceEvent(book=book, action=action, timestamp=int(NOW_MS - age_days * MS_PER_DAY))

    return _make


@pytest.fixture
def sample_books(make_book) -> list:
    """Six books over three authors and three genres."""
    return [
        make_book("1", author="Tolkien", genre="Fantasy"),
        make_book("2", author="Tolkien", genre="Fantasy"),
        make_book("3", author="Le Guin", genre="Fantasy"),
        make_book("4", author="Le Guin", genre="Science Fiction"),
        make_book("5", author="Asimov", genre="Science Fiction"),
        make_book("6", author="Christie", genre="Mystery"),
    ]


# ============================================================================
# Server Fixtures
# ============================================================================


@pytest.fixture
def choices_file(tmp_path, monkeypatch):
    """Point the backend at a fresh choices file."""
    path = tmp_path / "data" / "choices.json"
    monkeypatch.setenv("CHOICE_STORE", "json")
    monkeypatch.setenv("CHOICES_FILE", str(path))
    monkeypatch.delenv("CATALOG_PATH", raising=False)
    monkeypatch.delenv("GOOGLE_BOOKS_API_KEY", raising=False)
    return path


@pytest.fixture
def api_client(choices_file) -> Generator[TestClient, None, None]:
    """TestClient over a freshly configured app."""
    reload_config()
    reset_state()
    with TestClient(create_app()) as client:
        yield client
    reset_state()


# ============================================================================
# Client Fixtures
# ============================================================================


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()
