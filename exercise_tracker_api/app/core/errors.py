"""
Error type shared by the store and the service layer.

Every failure the API can report (validation, uniqueness conflicts,
connectivity, unresolved user references) is a ``StoreError``.  The
application maps it to ``500 {"error": message}`` in
``store_error_handler``; the message is passed to the client as is.
"""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Raised when a store read or write cannot be completed."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    logger.warning("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=500, content={"error": exc.message})
