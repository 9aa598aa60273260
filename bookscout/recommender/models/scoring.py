"""Scoring model — a book with its affinity score components."""

from pydantic import BaseModel

from .book import Book


class ScoredBook(BaseModel):
    """A candidate book with its scoring components."""

    book: Book
    author_score: float = 0.0
    genre_score: float = 0.0
    jitter: float = 0.0

    @property
    def affinity(self) -> float:
        """Score before jitter."""
        return self.author_score + self.genre_score

    @property
    def final_score(self) -> float:
        return self.affinity + self.jitter
