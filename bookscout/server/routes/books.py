"""Catalog and Google Books search endpoints."""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from ...catalog import DEFAULT_MAX_RESULTS
from ..models import BookListResponse, BookOut, BookSearchResponse
from ..state import get_state

router = APIRouter()

MAX_SEARCH_RESULTS = 40


@router.get("", response_model=BookListResponse)
def list_books(limit: Optional[int] = Query(None, ge=1), offset: int = Query(0, ge=0)):
    """List books from the bundled catalog."""
    books = get_state().catalog
    paginated = books[offset : offset + limit] if limit else books[offset:]
    return BookListResponse(
        books=[BookOut(**b.model_dump()) for b in paginated],
        total=len(books),
        offset=offset,
        limit=limit,
    )


@router.get("/search", response_model=BookSearchResponse)
def search_books(
    q: str = Query(..., description="Free-text Google Books query"),
    max_results: int = Query(DEFAULT_MAX_RESULTS, ge=1, le=MAX_SEARCH_RESULTS),
):
    """Proxy a Google Books search. Upstream failures yield an empty list."""
    results = get_state().book_search.search(q, max_results=max_results)
    return BookSearchResponse(query=q, books=[BookOut(**b.model_dump()) for b in results])


@router.get("/{book_id}", response_model=BookOut)
def get_book(book_id: str):
    """Get one bundled book."""
    for book in get_state().catalog:
        if book.id == book_id:
            return BookOut(**book.model_dump())
    raise HTTPException(status_code=404, detail="Book not found")
