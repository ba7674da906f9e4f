import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log verb, path, status, response size and elapsed time of each request."""

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        size = response.headers.get("content-length", "-")
        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code} "
            f"size={size} elapsed={elapsed_ms:.1f}ms"
        )
        return response
