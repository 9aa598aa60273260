"""
Book model — one catalog entry shown on a swipe card.

Built from the bundled catalog, from Google Books results, or from stored
session entries via Book.model_validate(d).
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict

UNKNOWN_TITLE = "Unknown Title"
UNKNOWN_AUTHOR = "Unknown Author"
DEFAULT_GENRE = "General"
DEFAULT_RATING = 4.0
DEFAULT_DESCRIPTION = "No description available."
PLACEHOLDER_IMAGE = "https://via.placeholder.com/128x192?text=No+Cover"


class Book(BaseModel):
    """
    Immutable book payload.

    id is unique across the catalog. Externally sourced ids carry a source
    prefix (e.g. "gb_") so they never collide with bundled ids.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    title: str = UNKNOWN_TITLE
    author: str = UNKNOWN_AUTHOR
    genre: str = DEFAULT_GENRE
    rating: float = DEFAULT_RATING
    description: str = ""
    image: Optional[str] = None
