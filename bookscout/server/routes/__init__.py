"""Register all route modules on the FastAPI app."""

from fastapi import FastAPI

from .books import router as books_router
from .choices import router as choices_router
from .root import router as root_router


def register_routes(app: FastAPI) -> None:
    """Attach all API routers to the app."""
    app.include_router(root_router)
    app.include_router(choices_router, prefix="/api", tags=["choices"])
    app.include_router(books_router, prefix="/api/books", tags=["books"])
