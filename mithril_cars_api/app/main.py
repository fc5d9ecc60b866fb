"""
Main entrypoint for the Mithril Cars API.

This module assembles the FastAPI application: logging, CORS, error
handlers and routes.  The database pool is opened and the schema
bootstrapped in the application lifespan, so nothing touches the
database at import time.  The ``app`` instance created at import time
can be served directly::

    uvicorn mithril_cars_api.app.main:app --reload
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.error_handlers import register_error_handlers
from .api.router import router
from .core import db
from .core.config import settings
from .core.logging_config import setup_logging


@asynccontextmanager
async def lifespan(_: FastAPI):
    # Create the database file and tables if needed, then open the pool
    # used by every request for the lifetime of the process.
    db.init_db()
    db.init_pool()
    try:
        yield
    finally:
        db.close_pool()


def create_app() -> FastAPI:
    """Create and configure a FastAPI application."""
    # Initialise logging before anything else so that startup can log.
    setup_logging(settings.log_level, settings.log_file or None, settings.log_format or None)

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)
    app.include_router(router)
    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
