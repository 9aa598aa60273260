"""Choice log endpoints: record a swipe, list all, summary."""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Body
from fastapi.responses import JSONResponse

from ...recommender.models.choice import Action
from ..models import ChoiceRequest, ChoiceResponse, ErrorResponse, SavedChoice, SummaryResponse
from ..state import get_state

logger = logging.getLogger(__name__)

router = APIRouter()

_ACTIONS = {a.value for a in Action}


def _error(message: str) -> JSONResponse:
    return JSONResponse(status_code=400, content=ErrorResponse(error=message).model_dump())


@router.post(
    "/choice",
    response_model=ChoiceResponse,
    responses={400: {"model": ErrorResponse}},
)
def record_choice(payload: Any = Body(None)):
    """Append one swipe decision to the choice log."""
    if not isinstance(payload, dict):
        return _error("book and action required")
    request = ChoiceRequest.model_validate(payload)
    if not request.book or not request.action:
        return _error("book and action required")
    if not isinstance(request.book, dict):
        return _error("book must be an object")
    if not isinstance(request.action, str) or request.action not in _ACTIONS:
        return _error("action must be 'like' or 'dislike'")
    if request.timestamp is not None and (
        isinstance(request.timestamp, bool) or not isinstance(request.timestamp, int)
    ):
        return _error("timestamp must be epoch milliseconds")
    state = get_state()
    event = state.choice_store.record(request.book, request.action, request.timestamp)
    book_id = request.book.get("id")
    logger.info("[choices] recorded %s on %r", request.action, book_id)
    return ChoiceResponse(
        ok=True,
        saved=SavedChoice(book_id=str(book_id) if book_id is not None else None, action=event["action"]),
    )


@router.get("/choices")
def list_choices() -> List[Dict[str, Any]]:
    """Every recorded choice, oldest first."""
    return get_state().choice_store.list_all()


@router.get("/summary", response_model=SummaryResponse)
def get_summary():
    """Counts plus the 10 most recent choices, newest first."""
    return get_state().choice_store.summary()
