"""
ChoiceEvent model — a timestamped like/dislike decision on a book.

Appended to the session's liked/disliked lists and posted to the backend log.
Never mutated after creation.
"""

import time
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .book import Book


class Action(str, Enum):
    """Swipe decision. Right swipe = like, left swipe = dislike."""

    LIKE = "like"
    DISLIKE = "dislike"


def now_ms() -> int:
    """Current time in epoch milliseconds."""
    return int(time.time() * 1000)


class ChoiceEvent(BaseModel):
    """
    A single decision.

    book: full snapshot of the book at decision time.
    timestamp: epoch millis; drives the recency weight in scoring.
    """

    model_config = ConfigDict(frozen=True, use_enum_values=False)

    book: Book
    action: Action
    timestamp: int = Field(default_factory=now_ms)

    @classmethod
    def create(cls, book: Book, action: Action, timestamp: Optional[int] = None) -> "ChoiceEvent":
        return cls(book=book, action=Action(action), timestamp=timestamp if timestamp is not None else now_ms())
