"""
Session state: the user's liked and disliked decisions, plus where they persist.

State is loaded once at start, saved after every change and cleared on reset.
StateStore implementations: JSON file (keyed like browser local storage) and
memory. Unreadable stored state is treated as absent (fresh start).
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, Set, Union

from pydantic import BaseModel, Field, ValidationError

from ..recommender.models.book import Book
from ..recommender.models.choice import Action, ChoiceEvent, now_ms

logger = logging.getLogger(__name__)

# Bump the suffix when the stored shape changes; old blobs are then ignored
STORAGE_KEY = "bookscout_simplified_state_v1"


class SessionState(BaseModel):
    """Ordered like/dislike history for one user."""

    liked: List[ChoiceEvent] = Field(default_factory=list)
    disliked: List[ChoiceEvent] = Field(default_factory=list)

    def decided_ids(self) -> Set[str]:
        return {e.book.id for e in self.liked} | {e.book.id for e in self.disliked}

    def with_event(self, event: ChoiceEvent) -> "SessionState":
        """New state with the event appended to the matching list."""
        if event.action == Action.LIKE:
            return SessionState(liked=[*self.liked, event], disliked=list(self.disliked))
        return SessionState(liked=list(self.liked), disliked=[*self.disliked, event])

    def to_stored(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")

    @classmethod
    def from_stored(cls, data: Any, loaded_at: Optional[int] = None) -> "SessionState":
        """
        Parse a stored {liked, disliked} blob leniently.

        Entries may be {book, action, timestamp} or a bare book (older blobs).
        Missing timestamps become loaded_at. Unparseable entries are dropped.
        """
        if not isinstance(data, dict):
            raise ValueError("stored state is not an object")
        loaded_at = loaded_at if loaded_at is not None else now_ms()
        return cls(
            liked=_parse_entries(data.get("liked"), Action.LIKE, loaded_at),
            disliked=_parse_entries(data.get("disliked"), Action.DISLIKE, loaded_at),
        )


def _parse_entries(entries: Any, action: Action, loaded_at: int) -> List[ChoiceEvent]:
    if not isinstance(entries, list):
        return []
    out: List[ChoiceEvent] = []
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        book = entry.get("book") if isinstance(entry.get("book"), dict) else entry
        timestamp = entry.get("timestamp")
        try:
            out.append(
                ChoiceEvent(
                    book=Book.model_validate(book),
                    action=action,
                    timestamp=int(timestamp) if timestamp is not None else loaded_at,
                )
            )
        except (ValidationError, TypeError, ValueError) as e:
            logger.warning("[state] dropping unreadable %s entry: %s", action.value, e)
    return out


class StateStore(Protocol):
    """Protocol for session persistence. Implement for file or memory."""

    def load(self) -> Optional[SessionState]:
        """Return stored state, or None when absent or unreadable."""
        ...

    def save(self, state: SessionState) -> None:
        """Persist state, replacing what was stored."""
        ...

    def clear(self) -> None:
        """Remove stored state."""
        ...


class MemoryStateStore:
    """State store kept in process memory. Used for tests and --no-persist runs."""

    def __init__(self, initial: Optional[SessionState] = None):
        self._blob: Optional[Dict[str, Any]] = initial.to_stored() if initial else None

    def load(self) -> Optional[SessionState]:
        if self._blob is None:
            return None
        return SessionState.from_stored(self._blob)

    def save(self, state: SessionState) -> None:
        self._blob = state.to_stored()

    def clear(self) -> None:
        self._blob = None


class JsonStateStore:
    """
    State store backed by a JSON object file mapping storage key -> state blob.

    Several keys can share one file, the same way browser local storage holds
    one entry per key.
    """

    def __init__(self, path: Union[Path, str], key: str = STORAGE_KEY):
        self._path = Path(path)
        self._key = key

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> Dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            with open(self._path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("[state] failed to read %s: %s", self._path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("[state] %s does not hold a JSON object, ignoring it", self._path)
            return {}
        return data

    def _write_all(self, data: Dict[str, Any]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(self._path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
        except OSError as e:
            logger.warning("[state] failed to save %s: %s", self._path, e)

    def load(self) -> Optional[SessionState]:
        blob = self._read_all().get(self._key)
        if blob is None:
            return None
        try:
            return SessionState.from_stored(blob)
        except ValueError as e:
            logger.warning("[state] ignoring stored state under %r: %s", self._key, e)
            return None

    def save(self, state: SessionState) -> None:
        data = self._read_all()
        data[self._key] = state.to_stored()
        self._write_all(data)

    def clear(self) -> None:
        data = self._read_all()
        if self._key in data:
            del data[self._key]
            self._write_all(data)
