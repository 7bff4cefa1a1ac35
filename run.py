"""Entry point for the Exercise Tracker API server.

Starts the FastAPI application under Uvicorn.  Host and port are read
from ``HOST`` and ``PORT`` (see ``core.config``), and the store
connection string from ``DATABASE_URL``; all of them may be placed in a
``.env`` file next to this script.

On SIGINT or SIGTERM Uvicorn stops accepting new connections, lets
in‑flight requests finish, runs the application's shutdown phase (which
closes the store) and exits.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from exercise_tracker_api.app.core.config import settings
from exercise_tracker_api.app.main import app

logger = logging.getLogger(__name__)


async def main() -> None:
    """Serve the API until a termination signal is received."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    logger.info("Your app is listening on port %s", settings.port)
    await server.serve()
    logger.info("HTTP server closed")


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
