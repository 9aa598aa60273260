"""Data models for the recommender."""

from .book import (
    DEFAULT_DESCRIPTION,
    DEFAULT_GENRE,
    DEFAULT_RATING,
    PLACEHOLDER_IMAGE,
    UNKNOWN_AUTHOR,
    UNKNOWN_TITLE,
    Book,
)
from .choice import Action, ChoiceEvent, now_ms
from .config import DEFAULT_CONFIG, MS_PER_DAY, RecommenderConfig, resolve_config
from .scoring import ScoredBook

__all__ = [
    "Action",
    "Book",
    "ChoiceEvent",
    "DEFAULT_CONFIG",
    "DEFAULT_DESCRIPTION",
    "DEFAULT_GENRE",
    "DEFAULT_RATING",
    "MS_PER_DAY",
    "PLACEHOLDER_IMAGE",
    "RecommenderConfig",
    "ScoredBook",
    "UNKNOWN_AUTHOR",
    "UNKNOWN_TITLE",
    "now_ms",
    "resolve_config",
]
