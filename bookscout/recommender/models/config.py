"""
Recommender configuration — recency decay, match weights, and jitter.

score(candidate) = sum over liked events of
    author_weight * w  (same author)  +  genre_weight * w  (same genre)
with w = exp(-ln(2) / half_life * age), plus uniform jitter in [0, jitter).
"""

from typing import Optional

from pydantic import BaseModel, model_validator

MS_PER_DAY = 24 * 3600 * 1000


class RecommenderConfig(BaseModel):
    """Configuration for the liked-history recommender."""

    # Half-life of a liked event's influence. 7 days: a week-old like counts half.
    half_life_days: float = 7.0

    # Added per liked event (times recency weight) when the candidate shares its author.
    author_weight: float = 3.0
    # Added per liked event (times recency weight) when the candidate shares its genre.
    genre_weight: float = 2.0

    # Upper bound of the uniform random jitter added to every score. 0 disables it.
    jitter: float = 0.05
    # Seed for the jitter RNG. None = fresh randomness on every recompute.
    seed: Optional[int] = None

    @model_validator(mode="after")
    def check_ranges(self):
        if self.half_life_days <= 0:
            raise ValueError(f"half_life_days must be positive, got {self.half_life_days}")
        if self.author_weight < 0 or self.genre_weight < 0:
            raise ValueError("author_weight and genre_weight must be non-negative")
        if self.jitter < 0:
            raise ValueError(f"jitter must be non-negative, got {self.jitter}")
        return self

    @property
    def half_life_ms(self) -> float:
        return self.half_life_days * MS_PER_DAY


DEFAULT_CONFIG = RecommenderConfig()


def resolve_config(config: Optional["RecommenderConfig"]) -> "RecommenderConfig":
    """Return config or DEFAULT_CONFIG when none is provided."""
    return config if config is not None else DEFAULT_CONFIG
