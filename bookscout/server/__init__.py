"""
BookScout backend server

Usage: uvicorn bookscout.server:app --reload --port 4000
"""

from .app import app, create_app
from .config import ServerConfig, get_config, reload_config
from .services import ChoiceStore, InMemoryChoiceStore, JsonFileChoiceStore
from .state import AppState, get_state, reset_state

__all__ = [
    "app",
    "create_app",
    "AppState",
    "ServerConfig",
    "get_config",
    "reload_config",
    "get_state",
    "reset_state",
    "ChoiceStore",
    "InMemoryChoiceStore",
    "JsonFileChoiceStore",
]
