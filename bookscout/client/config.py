"""
Client Configuration

Environment-driven settings for the terminal client. The repository-root
.env is loaded by python-dotenv; command-line flags override these values.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from ..catalog.loader import BUNDLED_CATALOG
from ..utils import float_env, path_env

BASE_DIR = Path(__file__).resolve().parent.parent.parent

load_dotenv(BASE_DIR / ".env")

DEFAULT_BACKEND_URL = "http://localhost:4000"
DEFAULT_STATE_FILE = Path.home() / ".bookscout" / "state.json"


@dataclass
class ClientConfig:
    """Client configuration."""

    backend_url: Optional[str] = DEFAULT_BACKEND_URL
    state_file: Path = DEFAULT_STATE_FILE
    catalog_path: Path = BUNDLED_CATALOG
    google_books_api_key: Optional[str] = None
    # Jitter seed for the recommender; None keeps rankings varied between runs
    seed: Optional[int] = None
    http_timeout_seconds: float = 10.0
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Load configuration from environment variables."""
        seed = os.getenv("BOOKSCOUT_SEED")
        return cls(
            backend_url=os.getenv("BOOKSCOUT_BACKEND_URL", DEFAULT_BACKEND_URL) or None,
            state_file=path_env("BOOKSCOUT_STATE_FILE", BASE_DIR, DEFAULT_STATE_FILE),
            catalog_path=path_env("CATALOG_PATH", BASE_DIR, BUNDLED_CATALOG),
            google_books_api_key=os.getenv("GOOGLE_BOOKS_API_KEY") or None,
            seed=int(seed) if seed and seed.strip().lstrip("-").isdigit() else None,
            http_timeout_seconds=float_env("HTTP_TIMEOUT_SECONDS", 10.0),
            log_level=os.getenv("LOG_LEVEL", "WARNING"),
        )
