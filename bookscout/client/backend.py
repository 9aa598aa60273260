"""HTTP client for the BookScout backend choice log.

Every call is best-effort: failures are logged and reported as False/None,
never raised, so a missing backend never blocks swiping.
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from ..recommender.models.choice import ChoiceEvent

logger = logging.getLogger(__name__)


class BackendClient:
    """Client for the /api/choice, /api/choices and /api/summary endpoints."""

    def __init__(self, base_url: str, timeout: float = 10.0):
        """Initialize client.

        Args:
            base_url: Backend root, e.g. http://localhost:4000
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = requests.Session()

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def post_choice(self, event: ChoiceEvent) -> bool:
        """Log one decision. Returns True when the backend acknowledged it."""
        body = {
            "book": event.book.model_dump(mode="json"),
            "action": event.action.value,
            "timestamp": event.timestamp,
        }
        try:
            response = self._session.post(self._url("/api/choice"), json=body, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            logger.warning("[backend] failed to post %s on %r: %s", event.action.value, event.book.id, e)
            return False
        return True

    def _get_json(self, path: str) -> Optional[Any]:
        try:
            response = self._session.get(self._url(path), timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.exceptions.RequestException as e:
            logger.warning("[backend] GET %s failed: %s", path, e)
        except ValueError as e:
            logger.warning("[backend] GET %s returned malformed JSON: %s", path, e)
        return None

    def summary(self) -> Optional[Dict[str, Any]]:
        """Backend {total, liked, disliked, last}, or None if unavailable."""
        data = self._get_json("/api/summary")
        return data if isinstance(data, dict) else None

    def list_choices(self) -> Optional[List[Dict[str, Any]]]:
        """Every logged choice, or None if unavailable."""
        data = self._get_json("/api/choices")
        return data if isinstance(data, list) else None
