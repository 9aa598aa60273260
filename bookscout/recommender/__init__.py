"""
BookScout recommender.

- models/: Book, ChoiceEvent, Action, RecommenderConfig, ScoredBook
- ranking: recency weight and author/genre affinity scoring
- queue: undecided books in recommendation order
"""

from .models import (
    DEFAULT_CONFIG,
    Action,
    Book,
    ChoiceEvent,
    RecommenderConfig,
    ScoredBook,
    now_ms,
)
from .queue import build_queue, decided_ids
from .ranking import make_rng, rank_books, recency_weight, recency_weights, score_book

__all__ = [
    "Action",
    "Book",
    "ChoiceEvent",
    "DEFAULT_CONFIG",
    "RecommenderConfig",
    "ScoredBook",
    "build_queue",
    "decided_ids",
    "make_rng",
    "now_ms",
    "rank_books",
    "recency_weight",
    "recency_weights",
    "score_book",
]
