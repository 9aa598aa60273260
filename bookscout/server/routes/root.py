"""Root and health endpoints."""

from fastapi import APIRouter

from ... import __version__
from ..state import get_state

router = APIRouter()


@router.get("/")
def root():
    state = get_state()
    return {
        "name": "BookScout API",
        "version": __version__,
        "choice_store": type(state.choice_store).__name__,
        "endpoints": {
            "choices": ["/api/choice", "/api/choices", "/api/summary"],
            "books": ["/api/books", "/api/books/search", "/api/books/{id}"],
        },
    }


@router.get("/api/health")
def health():
    state = get_state()
    return {
        "status": "healthy",
        "choices_file": state.choices_file,
        "catalog_size": len(state.catalog),
    }
