"""
Queue building — the ordered list of undecided books shown to the user.

queue = catalog minus every book id already liked or disliked, ranked by
affinity when there is at least one like, catalog order otherwise.
"""

import random
from typing import Iterable, List, Optional, Sequence, Set

from .models.book import Book
from .models.choice import ChoiceEvent
from .models.config import RecommenderConfig, resolve_config
from .ranking import rank_books


def decided_ids(*event_lists: Iterable[ChoiceEvent]) -> Set[str]:
    """Book ids that already have a like or dislike."""
    return {e.book.id for events in event_lists for e in events}


def build_queue(
    books: Sequence[Book],
    liked: Sequence[ChoiceEvent],
    disliked: Sequence[ChoiceEvent],
    now: Optional[int] = None,
    config: Optional[RecommenderConfig] = None,
    rng: Optional[random.Random] = None,
) -> List[Book]:
    """
    Build the recommendation queue.

    Returns an empty list when every book has been decided on; callers show
    an "exhausted" state in that case.
    """
    config = resolve_config(config)
    excluded = decided_ids(liked, disliked)
    remaining = [b for b in books if b.id not in excluded]
    if not liked:
        return remaining
    return [scored.book for scored in rank_books(remaining, liked, now, config, rng)]
