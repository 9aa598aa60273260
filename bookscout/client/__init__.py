"""
BookScout client layer.

- state: SessionState and its stores (JSON file, memory)
- gesture: swipe state machine and virtual-time scheduler
- controller: queue, decisions, search-and-merge, reset
- backend: best-effort choice log client
- cli: Rich terminal front end
"""

from .backend import BackendClient
from .config import ClientConfig
from .controller import ChoiceSink, SwipeController
from .gesture import (
    CardOffset,
    GestureRecognizer,
    GestureSettings,
    GestureState,
    ManualScheduler,
    PointerEvent,
    SwipeDirection,
)
from .state import STORAGE_KEY, JsonStateStore, MemoryStateStore, SessionState, StateStore

__all__ = [
    "BackendClient",
    "CardOffset",
    "ChoiceSink",
    "ClientConfig",
    "GestureRecognizer",
    "GestureSettings",
    "GestureState",
    "JsonStateStore",
    "ManualScheduler",
    "MemoryStateStore",
    "PointerEvent",
    "STORAGE_KEY",
    "SessionState",
    "StateStore",
    "SwipeController",
    "SwipeDirection",
]
