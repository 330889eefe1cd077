"""Request logging middleware for the FastAPI application."""

import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from src.utils.logger import get_logger, sanitize_for_logging

logger = get_logger("src.api.access")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs every request with method, path, status, duration, and client IP."""

    async def dispatch(self, request: Request, call_next):
        start = time.monotonic()
        logger.debug(
            f"{request.method} {request.url.path} headers={sanitize_for_logging(dict(request.headers))}"
        )
        response = await call_next(request)
        duration_ms = (time.monotonic() - start) * 1000

        ip = request.client.host if request.client else "unknown"
        logger.info(
            f"{request.method} {request.url.path} {response.status_code} {duration_ms:.0f}ms {ip}"
        )
        return response
