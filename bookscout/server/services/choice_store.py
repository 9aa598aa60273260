"""
Choice Store abstraction.

Append-only log of swipe decisions ({book, action, timestamp}) with aggregate
counts. Implementations: JSON file (default, survives restarts) and in-memory
(local testing). Swap via CHOICE_STORE.

No locking: concurrent writers interleave read-modify-write and the last
write wins.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, Union

from ...recommender.models.choice import now_ms

logger = logging.getLogger(__name__)

# Number of events returned in summary()["last"]
SUMMARY_RECENT_LIMIT = 10


class ChoiceStore(Protocol):
    """Protocol for choice log read/write. Implement for JSON file or memory."""

    def record(
        self,
        book: Dict[str, Any],
        action: str,
        timestamp: Optional[int] = None,
    ) -> Dict[str, Any]:
        """
        Append one choice event. timestamp defaults to now (epoch millis).
        Returns the stored event.
        """
        ...

    def list_all(self) -> List[Dict[str, Any]]:
        """Return every recorded event, oldest first."""
        ...

    def summary(self) -> Dict[str, Any]:
        """Return {total, liked, disliked, last} where last is newest first."""
        ...


def make_event(book: Dict[str, Any], action: str, timestamp: Optional[int] = None) -> Dict[str, Any]:
    return {"book": book, "action": action, "timestamp": timestamp if timestamp is not None else now_ms()}


def summarize(choices: List[Dict[str, Any]], limit: int = SUMMARY_RECENT_LIMIT) -> Dict[str, Any]:
    """Aggregate counts plus the `limit` most recent events, most recent first."""
    return {
        "total": len(choices),
        "liked": sum(1 for c in choices if c.get("action") == "like"),
        "disliked": sum(1 for c in choices if c.get("action") == "dislike"),
        "last": list(reversed(choices[-limit:])) if limit > 0 else [],
    }


class InMemoryChoiceStore:
    """
    Choice store kept in process memory (no persistence).
    Used for local testing and throwaway servers.
    """

    def __init__(self, choices: Optional[List[Dict[str, Any]]] = None):
        self._choices: List[Dict[str, Any]] = list(choices or [])

    def record(
        self,
        book: Dict[str, Any],
        action: str,
        timestamp: Optional[int] = None,
    ) -> Dict[str, Any]:
        event = make_event(book, action, timestamp)
        self._choices.append(event)
        return event

    def list_all(self) -> List[Dict[str, Any]]:
        return list(self._choices)

    def summary(self) -> Dict[str, Any]:
        return summarize(self._choices)


class JsonFileChoiceStore:
    """
    Choice store backed by a single JSON array file (e.g. data/choices.json).

    The file is re-read on every operation so external edits are picked up.
    Read errors degrade to an empty log; write errors are logged and dropped.
    """

    def __init__(self, path: Union[Path, str]):
        self._path = Path(path)
        self._ensure_file()

    @property
    def path(self) -> Path:
        return self._path

    def _ensure_file(self) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            if not self._path.exists():
                self._path.write_text("[]", encoding="utf-8")
                logger.info("[choices] created %s", self._path)
        except OSError as e:
            logger.error("[choices] cannot initialize %s: %s", self._path, e)

    def _read(self) -> List[Dict[str, Any]]:
        try:
            raw = self._path.read_text(encoding="utf-8")
            data = json.loads(raw or "[]")
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("[choices] read error %s: %s", self._path, e)
            return []
        if not isinstance(data, list):
            logger.warning("[choices] %s does not hold a JSON array, ignoring contents", self._path)
            return []
        events = [c for c in data if isinstance(c, dict)]
        if len(events) != len(data):
            logger.warning("[choices] %s: skipped %d non-object entries", self._path, len(data) - len(events))
        return events

    def _write(self, choices: List[Dict[str, Any]]) -> None:
        try:
            self._path.write_text(json.dumps(choices, indent=2), encoding="utf-8")
        except (OSError, TypeError) as e:
            logger.error("[choices] write error %s: %s", self._path, e)

    def record(
        self,
        book: Dict[str, Any],
        action: str,
        timestamp: Optional[int] = None,
    ) -> Dict[str, Any]:
        event = make_event(book, action, timestamp)
        choices = self._read()
        choices.append(event)
        self._write(choices)
        return event

    def list_all(self) -> List[Dict[str, Any]]:
        return self._read()

    def summary(self) -> Dict[str, Any]:
        return summarize(self._read())
