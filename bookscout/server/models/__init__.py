"""Pydantic request/response models for the API."""

from .books import BookListResponse, BookSearchResponse
from .choices import (
    ChoiceEventOut,
    ChoiceRequest,
    ChoiceResponse,
    ErrorResponse,
    SavedChoice,
    SummaryResponse,
)
from .common import BookOut

__all__ = [
    "BookListResponse",
    "BookOut",
    "BookSearchResponse",
    "ChoiceEventOut",
    "ChoiceRequest",
    "ChoiceResponse",
    "ErrorResponse",
    "SavedChoice",
    "SummaryResponse",
]
