"""
Liked-history ranking: recency-weighted author/genre affinity.

Each liked event contributes w = exp(-ln(2) / half_life * age). A candidate
earns author_weight * w for every liked event by the same author and
genre_weight * w for every liked event in the same genre. A small uniform
jitter breaks ties and keeps the queue from feeling static.
"""

import logging
import math
import random
from typing import List, Optional, Sequence

import numpy as np

from .models.book import Book
from .models.choice import Action, ChoiceEvent, now_ms
from .models.config import DEFAULT_CONFIG, RecommenderConfig
from .models.scoring import ScoredBook

logger = logging.getLogger(__name__)

LN2 = math.log(2)


def recency_weight(
    timestamp: Optional[int],
    now: int,
    half_life_ms: float = DEFAULT_CONFIG.half_life_ms,
) -> float:
    """Exponential decay weight of an event; 1.0 at age 0, 0.5 at one half-life."""
    if timestamp is None:
        return 1.0
    age = max(0, now - timestamp)
    return math.exp(-LN2 / half_life_ms * age)


def recency_weights(
    timestamps: Sequence[int],
    now: int,
    half_life_ms: float = DEFAULT_CONFIG.half_life_ms,
) -> np.ndarray:
    """Vectorized recency_weight over many events."""
    ages = np.clip(now - np.asarray(timestamps, dtype=np.float64), 0.0, None)
    return np.exp(-LN2 / half_life_ms * ages)


def make_rng(config: RecommenderConfig = DEFAULT_CONFIG) -> random.Random:
    """Jitter RNG: seeded when config.seed is set, otherwise fresh."""
    return random.Random(config.seed) if config.seed is not None else random.Random()


class _LikedProfile:
    """Liked events flattened into parallel arrays for scoring many candidates."""

    def __init__(self, liked: Sequence[ChoiceEvent], now: int, config: RecommenderConfig):
        likes = [e for e in liked if e.action == Action.LIKE]
        self.size = len(likes)
        self.weights = recency_weights([e.timestamp for e in likes], now, config.half_life_ms)
        self.authors = np.array([e.book.author for e in likes], dtype=object)
        self.genres = np.array([e.book.genre for e in likes], dtype=object)

    def author_weight_sum(self, author: str) -> float:
        if not self.size:
            return 0.0
        return float(self.weights[self.authors == author].sum())

    def genre_weight_sum(self, genre: str) -> float:
        if not self.size:
            return 0.0
        return float(self.weights[self.genres == genre].sum())


def _score(
    book: Book,
    profile: _LikedProfile,
    config: RecommenderConfig,
    rng: random.Random,
) -> ScoredBook:
    return ScoredBook(
        book=book,
        author_score=config.author_weight * profile.author_weight_sum(book.author),
        genre_score=config.genre_weight * profile.genre_weight_sum(book.genre),
        jitter=rng.random() * config.jitter if config.jitter else 0.0,
    )


def score_book(
    book: Book,
    liked: Sequence[ChoiceEvent],
    now: Optional[int] = None,
    config: RecommenderConfig = DEFAULT_CONFIG,
    rng: Optional[random.Random] = None,
) -> ScoredBook:
    """Score a single candidate against the liked history."""
    now = now if now is not None else now_ms()
    profile = _LikedProfile(liked, now, config)
    return _score(book, profile, config, rng or make_rng(config))


def rank_books(
    candidates: Sequence[Book],
    liked: Sequence[ChoiceEvent],
    now: Optional[int] = None,
    config: RecommenderConfig = DEFAULT_CONFIG,
    rng: Optional[random.Random] = None,
) -> List[ScoredBook]:
    """Score every candidate and sort by final_score, highest first."""
    now = now if now is not None else now_ms()
    rng = rng or make_rng(config)
    profile = _LikedProfile(liked, now, config)
    scored = [_score(book, profile, config, rng) for book in candidates]
    scored.sort(key=lambda s: s.final_score, reverse=True)
    if scored:
        logger.debug(
            "[ranking] %d candidates from %d likes, top=%s (%.3f)",
            len(scored), profile.size, scored[0].book.id, scored[0].final_score,
        )
    return scored
