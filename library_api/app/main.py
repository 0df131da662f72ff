"""
Main entrypoint for the Library Book API.

This module assembles the FastAPI application: it sets up logging,
composes the repository and service, registers the error translators
and includes the versioned router.  ``create_app`` builds the app,
which is then instantiated at module import time as ``app`` so it can
be served directly, e.g.::

    uvicorn library_api.app.main:app --reload
"""

import logging
from typing import Optional

from fastapi import FastAPI

from .api.v1.router import router as v1_router
from .core.config import Settings, settings
from .core.db import get_database_path, init_db
from .core.error_handlers import register_exception_handlers
from .core.logging_config import setup_logging
from .repositories.book_repository import BookRepository
from .services.book_service import BookService


logger = logging.getLogger(__name__)


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    app_settings : Optional[Settings]
        Settings to use instead of the module level ``settings``.

    Returns
    -------
    FastAPI
        A configured application.  The database schema is brought up
        to date when the application starts.
    """
    app_settings = app_settings or settings
    # Initialise logging before anything else so that the setup below
    # can log.
    setup_logging(app_settings.log_level, app_settings.log_file)

    database_path = get_database_path(app_settings.database_url)
    repository = BookRepository(database_path)

    app = FastAPI(
        title=app_settings.project_name,
        version=app_settings.api_version,
        debug=app_settings.debug,
    )
    app.state.settings = app_settings
    app.state.book_service = BookService(repository)

    register_exception_handlers(app)
    app.include_router(v1_router, prefix=app_settings.api_prefix)

    @app.get("/health", tags=["health"])
    def health() -> dict:
        return {"status": "ok"}

    @app.on_event("startup")
    async def startup_event() -> None:
        # Creates the database file if it does not exist and applies
        # pending migrations.
        version = init_db(database_path)
        logger.info("Database %s ready at schema version %s", database_path, version)

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
