"""
BookScout backend — FastAPI app factory.

Use: uvicorn bookscout.server.app:app
Or:  from bookscout.server import app
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..utils import configure_logging
from .config import get_config
from .routes import register_routes
from .state import get_state

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    config = get_config()
    ok, errors = config.validate()
    for err in errors:
        logger.warning("[startup] %s", err)
    state = get_state()
    logger.info("[startup] BookScout API starting (valid config: %s)", ok)
    logger.info("[startup] Choices: %s", state.choices_file or "in memory")
    logger.info("[startup] Catalog: %s (%d books)", config.catalog_path, len(state.catalog))
    yield


async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Unparseable choice bodies get the choice log's 400 {error} shape; other routes keep 422."""
    if request.url.path == "/api/choice":
        return JSONResponse(status_code=400, content={"error": "book and action required"})
    return await request_validation_exception_handler(request, exc)


def create_app() -> FastAPI:
    """Build FastAPI app with CORS, routes, and startup logging."""
    configure_logging(get_config().log_level)
    app = FastAPI(
        title="BookScout API",
        description="Swipe choice log and book catalog for BookScout",
        version=__version__,
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    register_routes(app)
    return app


app = create_app()
