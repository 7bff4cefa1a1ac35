"""
Main entrypoint for the Exercise Tracker API.

This module assembles the FastAPI application: logging, CORS, the
``StoreError`` handler, the ``/api`` routes, the landing page and the
static assets.  ``create_app`` builds and configures the app, which is
then instantiated at module import time as ``app``::

    uvicorn exercise_tracker_api.app.main:app --reload

The store is created here and kept on ``app.state``.  It is connected
in the lifespan startup phase and closed on shutdown.  A failed
connection is logged but does not stop the server from starting;
requests then fail one by one with a store error.
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional

from fastapi import FastAPI
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from .api.router import router as api_router
from .core.config import Settings, settings
from .core.db import Store
from .core.errors import StoreError, store_error_handler
from .core.logging_config import setup_logging

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent
VIEWS_DIR = BASE_DIR / "views"
PUBLIC_DIR = BASE_DIR / "public"


def create_app(app_settings: Optional[Settings] = None, store: Optional[Store] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    app_settings : Optional[Settings]
        Settings to use instead of the module level ``settings``.
    store : Optional[Store]
        Store to use instead of one built from ``app_settings.database_url``.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    app_settings = app_settings or settings
    setup_logging(app_settings.log_level, app_settings.log_file or None)
    store = store or Store(app_settings.database_url)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        try:
            await run_in_threadpool(store.connect)
        except StoreError as exc:
            logger.error("unable to connect to the store: %s", exc.message)
        yield
        logger.info("shutting down: closing store connection")
        store.close()

    app = FastAPI(
        title=app_settings.project_name,
        version=app_settings.api_version,
        debug=app_settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(StoreError, store_error_handler)

    app.include_router(api_router, prefix="/api")

    @app.get("/", include_in_schema=False)
    async def index() -> FileResponse:
        return FileResponse(VIEWS_DIR / "index.html")

    # Mounted last so that it only sees paths no route matched.
    app.mount("/", StaticFiles(directory=PUBLIC_DIR), name="public")

    return app


app = create_app()
