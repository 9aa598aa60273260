"""
Server Configuration

Loads configuration from environment variables and provides defaults.
Supports loading from .env file using python-dotenv.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from ..catalog.loader import BUNDLED_CATALOG
from ..utils import float_env, path_env

BASE_DIR = Path(__file__).resolve().parent.parent.parent

# Single .env at the repository root for backend and client
load_dotenv(BASE_DIR / ".env")

CHOICE_STORE_KINDS = ("json", "memory")


@dataclass
class ServerConfig:
    """Server configuration."""

    # Server settings
    host: str = "0.0.0.0"
    port: int = 4000
    log_level: str = "INFO"

    # Choice log: "json" (file-backed) or "memory" (lost on restart)
    choice_store: str = "json"
    choices_file: Path = BASE_DIR / "data" / "choices.json"

    # Catalog served by /api/books
    catalog_path: Path = BUNDLED_CATALOG

    # Google Books proxy for /api/books/search
    google_books_api_key: Optional[str] = None
    http_timeout_seconds: float = 10.0

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """Load configuration from environment variables."""
        choice_store = os.getenv("CHOICE_STORE", "").strip().lower() or "json"
        if choice_store not in CHOICE_STORE_KINDS:
            choice_store = "json"
        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "4000")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            choice_store=choice_store,
            choices_file=path_env("CHOICES_FILE", BASE_DIR, BASE_DIR / "data" / "choices.json"),
            catalog_path=path_env("CATALOG_PATH", BASE_DIR, BUNDLED_CATALOG),
            google_books_api_key=os.getenv("GOOGLE_BOOKS_API_KEY") or None,
            http_timeout_seconds=float_env("HTTP_TIMEOUT_SECONDS", 10.0),
        )

    def validate(self) -> tuple[bool, list[str]]:
        """
        Validate the configuration.

        Returns:
            (is_valid, list_of_errors)
        """
        errors = []
        if not self.catalog_path.exists():
            errors.append(f"Catalog file not found: {self.catalog_path}")
        if self.http_timeout_seconds <= 0:
            errors.append(f"HTTP timeout must be positive: {self.http_timeout_seconds}")
        return len(errors) == 0, errors

    def ensure_directories(self):
        """Create the choices file's directory if it doesn't exist."""
        if self.choice_store == "json":
            self.choices_file.parent.mkdir(parents=True, exist_ok=True)


# Global config instance
_config: Optional[ServerConfig] = None


def get_config() -> ServerConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = ServerConfig.from_env()
        _config.ensure_directories()
    return _config


def reload_config() -> ServerConfig:
    """Reload configuration from environment."""
    global _config
    _config = None
    return get_config()
