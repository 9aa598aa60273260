"""Shared helpers: logging setup and config parsing."""

import logging
import os
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_configured = False


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once per process."""
    global _configured
    if _configured:
        logging.getLogger().setLevel(level.upper())
        return
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    _configured = True


def path_env(key: str, base_dir: Path, default: Optional[Path] = None) -> Optional[Path]:
    """Read a path from the environment, resolving relative paths against base_dir."""
    v = os.getenv(key)
    if not v:
        return default
    p = Path(v).expanduser()
    return p if p.is_absolute() else (base_dir / p).resolve()


def float_env(key: str, default: float) -> float:
    v = os.getenv(key)
    if not v:
        return default
    try:
        return float(v)
    except ValueError:
        logging.getLogger(__name__).warning("[config] ignoring non-numeric %s=%r", key, v)
        return default
