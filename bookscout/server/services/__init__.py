"""Backing logic: choice stores."""

from .choice_store import (
    SUMMARY_RECENT_LIMIT,
    ChoiceStore,
    InMemoryChoiceStore,
    JsonFileChoiceStore,
    summarize,
)

__all__ = [
    "SUMMARY_RECENT_LIMIT",
    "ChoiceStore",
    "InMemoryChoiceStore",
    "JsonFileChoiceStore",
    "summarize",
]
