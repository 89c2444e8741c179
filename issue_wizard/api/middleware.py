"""
Request middleware and global exception handlers.

Every request gets an X-Request-ID (client-supplied or generated) that is
attached to log records emitted while the request is handled.
"""

import logging
import time
from uuid import uuid4

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from issue_wizard.core.logging import LogContext


logger = logging.getLogger(__name__)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Assign a request id, log the request and its duration."""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid4())
        request.state.request_id = request_id

        start_time = time.perf_counter()
        with LogContext(request_id=request_id):
            logger.info(f"Request: {request.method} {request.url.path}")
            response = await call_next(request)
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.info(
                f"Response: {response.status_code} ({duration_ms:.2f}ms) "
                f"for {request.method} {request.url.path}"
            )

        response.headers["X-Request-ID"] = request_id
        return response


def add_exception_handlers(app: FastAPI) -> None:
    """Add global exception handlers to the app."""

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "detail": {
                    "error_code": "UNKNOWN_ERROR",
                    "message": "An unexpected error occurred",
                    "details": {"request_id": getattr(request.state, "request_id", None)},
                }
            },
        )
