"""Choice-log Pydantic models."""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ChoiceRequest(BaseModel):
    """
    Body of POST /api/choice.

    Fields are untyped here: the route checks them itself so that any bad
    body is answered with 400 {error} rather than a 422.
    """

    book: Any = None
    action: Any = None
    timestamp: Any = None


class SavedChoice(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    book_id: Optional[str] = Field(default=None, alias="bookId")
    action: str


class ChoiceResponse(BaseModel):
    ok: bool = True
    saved: SavedChoice


class ChoiceEventOut(BaseModel):
    """A logged event echoed back as stored; hand-edited entries may lack fields."""

    model_config = ConfigDict(extra="allow")

    book: Any = None
    action: Any = None
    timestamp: Any = None


class SummaryResponse(BaseModel):
    total: int
    liked: int
    disliked: int
    last: List[ChoiceEventOut] = []


class ErrorResponse(BaseModel):
    error: str
